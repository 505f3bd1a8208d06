"""Parser turning arbitrary strings into canonical ``(namespace, key)`` pairs.

The parser is a pure function with no shared state.  It applies one rule set
in one of two modes:

Strict
    Reject the input with :class:`~namespaced_keys.core.exceptions.InvalidCharError`
    at the first character that is not allowed in its position.

Lenient
    Keep every valid character, fold uppercase letters, and replace every
    invalid character with ``_``.  Lenient parsing never raises
    ``InvalidCharError``; the precondition errors (empty, too long, trailing
    separator) are raised in both modes.

Position rules
--------------
``[a-z0-9_-]`` are valid everywhere and ``[A-Z]`` fold to lowercase.  The
first ``:`` splits namespace from key when a split is permitted; later ones
are invalid.  ``/`` and ``.`` are key-only characters.  When one of them
appears before the split, the rest of the input is searched for a ``:``:
without one the whole input is a bare key and the character is kept, with
one the character sits in the namespace and is invalid::

    parse_nsk("blocks/air", strict=True)      # ("minecraft", "blocks/air")
    parse_nsk("a/b:c", strict=False)          # ("a_b", "c")
    parse_nsk("a/b:c", strict=True)           # raises InvalidCharError
"""

from __future__ import annotations

import logging
import re
import string

from namespaced_keys.core.exceptions import (
    EmptyInputError,
    InvalidCharError,
    TooLongError,
    TrailingSeparatorError,
)
from namespaced_keys.core.types import (
    DEFAULT_NAMESPACE,
    KEY_ONLY_CHARS,
    MAX_LENGTH,
    NAMESPACE_CHARS,
    SEPARATOR,
    InvalidCharReason,
    ParsedKey,
)

logger = logging.getLogger(__name__)

# Valid characters map to themselves, uppercase letters to lowercase.
_TRANSLATE: dict[str, str] = {char: char for char in NAMESPACE_CHARS}
_TRANSLATE.update({char: char.lower() for char in string.ascii_uppercase})

_REPLACEMENT = "_"

# Already-canonical input skips the per-character scan.
_CANONICAL_NAMESPACE_RE = re.compile(r"[a-z0-9_\-]+")
_CANONICAL_KEY_RE = re.compile(r"[a-z0-9_\-/.]+")
_CANONICAL_NSK_RE = re.compile(r"([a-z0-9_\-]+):([a-z0-9_\-/.]+)")


def parse_nsk(
    raw: str,
    *,
    strict: bool,
    allow_no_separator: bool = False,
    namespace_only: bool = False,
    default_namespace: str = DEFAULT_NAMESPACE,
    max_length: int = MAX_LENGTH,
) -> ParsedKey:
    """Parse *raw* into a canonical namespace/key pair.

    Args:
        raw: Input string.
        strict: Reject invalid characters instead of replacing them.
        allow_no_separator: Parse *raw* as a bare key; ``:`` never splits.
        namespace_only: Parse *raw* as a bare namespace.  Implies that ``:``
            never splits, and ``/`` / ``.`` are never valid.
        default_namespace: Namespace returned when no split occurs (and for
            empty input when *namespace_only* is set).
        max_length: Maximum length of *raw* in UTF-8 bytes, and of the
            canonical text once the default namespace is filled in.

    Returns:
        The normalized :class:`~namespaced_keys.core.types.ParsedKey`.  The
        key is empty when *namespace_only* is set.

    Raises:
        EmptyInputError: *raw* is empty and *namespace_only* is not set.
        TooLongError: *raw* or its canonical text is longer than
            *max_length* bytes.
        TrailingSeparatorError: *raw* ends with ``:``.
        InvalidCharError: Strict mode only, at the first invalid character.
    """
    if not raw:
        if namespace_only:
            return ParsedKey(default_namespace, "")
        raise EmptyInputError

    length = _byte_length(raw)
    if length > max_length:
        raise TooLongError(length, max_length)
    if raw.endswith(SEPARATOR):
        raise TrailingSeparatorError

    # A bare namespace can never be split.
    no_separator = allow_no_separator or namespace_only

    parsed = _match_canonical(raw, no_separator, namespace_only, default_namespace)
    if parsed is None:
        text, split = _scan(
            raw, strict=strict, no_separator=no_separator, namespace_only=namespace_only
        )
        parsed = _assemble(text, split, namespace_only, default_namespace)

    # Canonical text includes any prepended default namespace.
    canonical_length = len(str(parsed))
    if canonical_length > max_length:
        raise TooLongError(canonical_length, max_length)
    return parsed


###################
# Private helpers #
###################


def _byte_length(raw: str) -> int:
    if raw.isascii():
        return len(raw)
    return len(raw.encode("utf-8", "surrogatepass"))


def _assemble(
    text: str, split: int | None, namespace_only: bool, default_namespace: str
) -> ParsedKey:
    if split is not None:
        namespace, key = text[:split], text[split + 1 :]
        if not key:
            # Unreachable: trailing separators are rejected before the scan.
            raise TrailingSeparatorError
        return ParsedKey(namespace or default_namespace, key)

    if namespace_only:
        return ParsedKey(text, "")
    return ParsedKey(default_namespace, text)


def _match_canonical(
    raw: str,
    no_separator: bool,
    namespace_only: bool,
    default_namespace: str,
) -> ParsedKey | None:
    """Return the result for input that is already canonical, else ``None``.

    Must agree with :func:`_scan` on every input it accepts.
    """
    if namespace_only:
        if _CANONICAL_NAMESPACE_RE.fullmatch(raw):
            return ParsedKey(raw, "")
        return None

    # No ":" at all: a bare key, whether or not a split was permitted.
    if _CANONICAL_KEY_RE.fullmatch(raw):
        return ParsedKey(default_namespace, raw)

    if not no_separator:
        match = _CANONICAL_NSK_RE.fullmatch(raw)
        if match is not None:
            return ParsedKey(match[1], match[2])
    return None


def _scan(
    raw: str,
    *,
    strict: bool,
    no_separator: bool,
    namespace_only: bool,
) -> tuple[str, int | None]:
    """Normalize *raw* character by character.

    Returns:
        The normalized text (same length as *raw*) and the index of the
        namespace/key split, or ``None`` when no split occurred.
    """
    out: list[str] = []
    split: int | None = None
    replaced = 0

    for position, char in enumerate(raw):
        normalized = _TRANSLATE.get(char)

        if normalized is None:
            if char == SEPARATOR:
                if split is None and not no_separator:
                    split = position
                    normalized = char
            elif char in KEY_ONLY_CHARS:
                if split is None and not no_separator:
                    # No ":" ahead means the whole input is a bare key.
                    no_separator = SEPARATOR not in raw[position:]
                if split is not None or (no_separator and not namespace_only):
                    normalized = char

        if normalized is None:
            if strict:
                raise InvalidCharError(
                    char, position, _invalid_reason(char, split, namespace_only)
                )
            normalized = _REPLACEMENT
            replaced += 1

        out.append(normalized)

    if replaced:
        logger.debug(
            "Sanitised namespaced key: replaced %d of %d character(s)",
            replaced,
            len(raw),
        )
    return "".join(out), split


def _invalid_reason(
    char: str, split: int | None, namespace_only: bool
) -> InvalidCharReason:
    if char == SEPARATOR:
        if split is not None:
            return InvalidCharReason.DOUBLED_SEPARATOR
        if namespace_only:
            return InvalidCharReason.SEPARATOR_IN_NAMESPACE
        return InvalidCharReason.SEPARATOR_IN_KEY
    if char in KEY_ONLY_CHARS:
        return InvalidCharReason.SLASH_OR_DOT_IN_NAMESPACE
    return InvalidCharReason.UNRECOGNIZED


__all__ = ["parse_nsk"]
