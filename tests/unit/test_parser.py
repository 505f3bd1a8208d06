"""Unit tests — namespaced_keys.parsing.parser

Verified:
* Precondition errors: empty, too long (bytes), trailing separator
* Lenient sanitisation keeps valid characters and replaces the rest
* Strict mode rejects with the right position and reason
* Uppercase folds in both modes
* "/" and "." disambiguation: bare key vs namespace position
* Leading separator falls back to the default namespace
* Non-ASCII input is always replaced or rejected
* Fast path agrees with the character scan
* Idempotence of canonical output
"""

from __future__ import annotations

import pytest

from namespaced_keys.core.exceptions import (
    EmptyInputError,
    InvalidCharError,
    TooLongError,
    TrailingSeparatorError,
)
from namespaced_keys.core.types import (
    DEFAULT_NAMESPACE,
    MAX_LENGTH,
    InvalidCharReason,
    ParsedKey,
)
from namespaced_keys.parsing import parser
from namespaced_keys.parsing.parser import parse_nsk

pytestmark = pytest.mark.unit


# ───────────────────────────── Preconditions ─────────────────────────────────


class TestPreconditions:
    @pytest.mark.parametrize("strict", [True, False])
    def test_empty_input_raises(self, strict):
        with pytest.raises(EmptyInputError):
            parse_nsk("", strict=strict)

    def test_empty_bare_key_raises(self):
        with pytest.raises(EmptyInputError):
            parse_nsk("", strict=True, allow_no_separator=True)

    def test_empty_namespace_only_returns_default(self):
        assert parse_nsk("", strict=True, namespace_only=True) == ParsedKey("minecraft", "")

    def test_empty_namespace_only_uses_custom_default(self):
        result = parse_nsk("", strict=True, namespace_only=True, default_namespace="myplugin")
        assert result == ParsedKey("myplugin", "")

    @pytest.mark.parametrize("strict", [True, False])
    def test_too_long_raises(self, strict):
        with pytest.raises(TooLongError) as exc_info:
            parse_nsk("a" * (MAX_LENGTH + 1), strict=strict)
        assert exc_info.value.length == 201
        assert exc_info.value.max_length == 200

    def test_exactly_max_length_accepted(self):
        raw = "ns:" + "a" * (MAX_LENGTH - 3)
        assert parse_nsk(raw, strict=True) == ParsedKey("ns", "a" * 197)

    def test_bare_namespace_at_max_length_accepted(self):
        raw = "a" * MAX_LENGTH
        assert parse_nsk(raw, strict=True, namespace_only=True) == ParsedKey(raw, "")

    @pytest.mark.parametrize("strict", [True, False])
    def test_default_namespace_counts_towards_length(self, strict):
        # "minecraft:" adds 10 bytes to a bare key.
        with pytest.raises(TooLongError) as exc_info:
            parse_nsk("a" * 191, strict=strict)
        assert exc_info.value.length == 201

    def test_leading_separator_counts_default_namespace(self):
        with pytest.raises(TooLongError):
            parse_nsk(":" + "a" * 195, strict=True)

    def test_length_counts_utf8_bytes(self):
        # 101 two-byte characters: 101 code points, 202 bytes.
        with pytest.raises(TooLongError) as exc_info:
            parse_nsk("é" * 101, strict=False)
        assert exc_info.value.length == 202

    def test_custom_max_length(self):
        with pytest.raises(TooLongError):
            parse_nsk("abcdef", strict=True, max_length=5)

    @pytest.mark.parametrize("strict", [True, False])
    @pytest.mark.parametrize("raw", ["aa:", ":", "a:b:", "a/b:"])
    def test_trailing_separator_raises(self, raw, strict):
        with pytest.raises(TrailingSeparatorError):
            parse_nsk(raw, strict=strict)

    def test_trailing_separator_in_namespace_only_mode(self):
        with pytest.raises(TrailingSeparatorError):
            parse_nsk("abc:", strict=False, namespace_only=True)


# ────────────────────────────── Lenient mode ─────────────────────────────────


class TestLenient:
    @pytest.mark.parametrize(
        ("raw", "allow_no_separator", "namespace_only", "expected"),
        [
            ("minecraft:air", False, False, ("minecraft", "air")),
            ("minecraft:blocks/air", False, False, ("minecraft", "blocks/air")),
            ("minecraft:blocks/air.2", False, False, ("minecraft", "blocks/air.2")),
            ("minecraft:AIR", False, False, ("minecraft", "air")),
            ("abc:;;;123", False, False, ("abc", "___123")),
            ("a;bc:a", False, False, ("a_bc", "a")),
            ("a;bc:a/a", False, False, ("a_bc", "a/a")),
            ("a/bc:a", False, False, ("a_bc", "a")),
            ("a;:v/a", False, False, ("a_", "v/a")),
            ("aa:aa", True, True, ("aa_aa", "")),
            ("aa:aa", False, True, ("aa_aa", "")),
            ("aa:aa", True, False, ("minecraft", "aa_aa")),
            ("aa/aa", True, False, ("minecraft", "aa/aa")),
            ("aa/aa", False, False, ("minecraft", "aa/aa")),
            ("aa.aa", False, False, ("minecraft", "aa.aa")),
            ("a/a:b", False, False, ("a_a", "b")),
            ("a.a:b", False, False, ("a_a", "b")),
        ],
    )
    def test_sanitises(self, raw, allow_no_separator, namespace_only, expected):
        result = parse_nsk(
            raw,
            strict=False,
            allow_no_separator=allow_no_separator,
            namespace_only=namespace_only,
        )
        assert result == ParsedKey(*expected)

    def test_never_raises_invalid_char(self):
        assert parse_nsk("!!:@@", strict=False) == ParsedKey("__", "__")

    def test_second_separator_replaced(self):
        assert parse_nsk("a:b:c", strict=False) == ParsedKey("a", "b_c")

    def test_slash_in_namespace_only_replaced(self):
        assert parse_nsk("a/b.c", strict=False, namespace_only=True) == ParsedKey("a_b_c", "")

    def test_invalid_char_before_bare_key_slash(self):
        # No ":" ahead, so the "/" stays even after a replacement.
        assert parse_nsk("a;b/c", strict=False) == ParsedKey("minecraft", "a_b/c")

    def test_non_ascii_replaced_one_underscore_per_character(self):
        assert parse_nsk("café:crème", strict=False) == ParsedKey("caf_", "cr_me")

    def test_whitespace_replaced(self):
        assert parse_nsk("My Item", strict=False) == ParsedKey("minecraft", "my_item")

    def test_uppercase_folded_in_namespace(self):
        assert parse_nsk("MyPlugin:Wand", strict=False) == ParsedKey("myplugin", "wand")


# ────────────────────────────── Strict mode ──────────────────────────────────


class TestStrict:
    def test_canonical_input(self):
        assert parse_nsk("minecraft:air", strict=True) == ParsedKey("minecraft", "air")

    def test_uppercase_folds_without_error(self):
        assert parse_nsk("minecraft:AIR", strict=True) == ParsedKey("minecraft", "air")

    def test_bare_key_gets_default_namespace(self):
        assert parse_nsk("stone", strict=True) == ParsedKey(DEFAULT_NAMESPACE, "stone")

    def test_custom_default_namespace(self):
        result = parse_nsk("wand", strict=True, default_namespace="myplugin")
        assert result == ParsedKey("myplugin", "wand")

    def test_slash_in_namespace_only(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("a/b", strict=True, namespace_only=True)
        err = exc_info.value
        assert err.char == "/"
        assert err.position == 1
        assert err.reason is InvalidCharReason.SLASH_OR_DOT_IN_NAMESPACE

    def test_slash_before_separator(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("a/a:a", strict=True)
        assert exc_info.value.reason is InvalidCharReason.SLASH_OR_DOT_IN_NAMESPACE

    def test_dot_before_separator(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("a.a:a", strict=True)
        assert exc_info.value.char == "."

    def test_doubled_separator(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("a:b:c", strict=True)
        assert exc_info.value.position == 3
        assert exc_info.value.reason is InvalidCharReason.DOUBLED_SEPARATOR

    def test_separator_in_namespace(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("aa:aa", strict=True, namespace_only=True)
        assert exc_info.value.reason is InvalidCharReason.SEPARATOR_IN_NAMESPACE

    def test_separator_in_bare_key(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("aa:aa", strict=True, allow_no_separator=True)
        assert exc_info.value.reason is InvalidCharReason.SEPARATOR_IN_KEY

    def test_unrecognized_character(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("a b", strict=True)
        assert exc_info.value.char == " "
        assert exc_info.value.reason is InvalidCharReason.UNRECOGNIZED

    def test_non_ascii_rejected(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("café", strict=True)
        assert exc_info.value.char == "é"
        assert exc_info.value.position == 3

    def test_first_invalid_character_reported(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("ab!c?d", strict=True)
        assert exc_info.value.char == "!"


# ──────────────────── "/" and "." disambiguation ─────────────────────────────


class TestDisambiguation:
    def test_slash_without_later_separator_is_bare_key(self):
        assert parse_nsk("blocks/air", strict=True) == ParsedKey("minecraft", "blocks/air")

    def test_dot_without_later_separator_is_bare_key(self):
        assert parse_nsk("air.2", strict=True) == ParsedKey("minecraft", "air.2")

    def test_later_separator_puts_slash_in_namespace(self):
        with pytest.raises(InvalidCharError) as exc_info:
            parse_nsk("blocks/air:x", strict=True)
        assert exc_info.value.position == 6

    def test_slash_after_split_is_key(self):
        assert parse_nsk("ns:a/b.c", strict=True) == ParsedKey("ns", "a/b.c")

    def test_bare_key_mode_allows_slash_and_dot(self):
        result = parse_nsk("a.b/c", strict=True, allow_no_separator=True)
        assert result == ParsedKey("minecraft", "a.b/c")

    def test_decision_holds_for_whole_input(self):
        # Mixed: uppercase folds, "/" decided as bare key, "." accepted.
        assert parse_nsk("A/B.C", strict=True) == ParsedKey("minecraft", "a/b.c")


# ─────────────────────────── Leading separator ───────────────────────────────


class TestLeadingSeparator:
    @pytest.mark.parametrize("strict", [True, False])
    def test_empty_namespace_uses_default(self, strict):
        assert parse_nsk(":air", strict=strict) == ParsedKey("minecraft", "air")

    def test_empty_namespace_custom_default(self):
        result = parse_nsk(":wand", strict=True, default_namespace="myplugin")
        assert result == ParsedKey("myplugin", "wand")


# ─────────────────────────────── Fast path ───────────────────────────────────


class TestFastPath:
    @pytest.mark.parametrize(
        ("raw", "no_separator", "namespace_only"),
        [
            ("minecraft:air", False, False),
            ("blocks/air.2", False, False),
            ("plain", False, False),
            ("plain", True, False),
            ("a.b/c", True, False),
            ("my-ns_1", True, True),
            ("ns:a/b", False, False),
        ],
    )
    def test_agrees_with_scan(self, raw, no_separator, namespace_only):
        fast = parser._match_canonical(raw, no_separator, namespace_only, "minecraft")
        text, split = parser._scan(
            raw, strict=True, no_separator=no_separator, namespace_only=namespace_only
        )
        if split is not None:
            slow = ParsedKey(text[:split], text[split + 1 :])
        elif namespace_only:
            slow = ParsedKey(text, "")
        else:
            slow = ParsedKey("minecraft", text)
        assert fast == slow

    def test_non_canonical_input_skips_fast_path(self):
        assert parser._match_canonical("Minecraft:air", False, False, "minecraft") is None
        assert parser._match_canonical("a:b", True, False, "minecraft") is None
        assert parser._match_canonical("a/b", True, True, "minecraft") is None


# ─────────────────────────────── Idempotence ─────────────────────────────────


class TestIdempotence:
    @pytest.mark.parametrize(
        "raw",
        [
            "minecraft:air",
            "Minecraft:AIR",
            "abc:;;;123",
            "a;:v/a",
            "a/b:c",
            "blocks/air",
            ":air",
            "café:crème",
            "x:y:z",
        ],
    )
    def test_reparse_canonical_text(self, raw):
        first = parse_nsk(raw, strict=False)
        assert parse_nsk(str(first), strict=True) == first

    def test_reparse_longest_bare_key(self):
        first = parse_nsk("a" * 190, strict=True)
        assert len(str(first)) == MAX_LENGTH
        assert parse_nsk(str(first), strict=True) == first

    def test_bare_key_one_past_boundary_never_yields_canonical_text(self):
        with pytest.raises(TooLongError):
            parse_nsk("a" * 191, strict=False)

    def test_reparse_long_key_with_custom_default(self):
        first = parse_nsk("k" * 195, strict=True, default_namespace="ab")
        assert parse_nsk(str(first), strict=True) == first

    @pytest.mark.parametrize("raw", ["MyPlugin", "a/b", "a:b", ""])
    def test_reparse_canonical_namespace(self, raw):
        first = parse_nsk(raw, strict=False, namespace_only=True)
        assert parse_nsk(str(first), strict=True, namespace_only=True) == first
