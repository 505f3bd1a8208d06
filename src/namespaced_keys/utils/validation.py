"""Canonical-form validators for namespaces and keys.

These helpers answer "is this string *already* canonical?" without
normalising anything.  Use the parser (:func:`~namespaced_keys.parsing.parser.parse_nsk`)
when input should be case-folded or sanitised; use these validators for
cheap guards on values that must already be canonical, such as
configuration fields.

Security model
--------------
- Input length is capped *before* the regex runs.
- All patterns are compiled once at module load time.
"""

from __future__ import annotations

import re

from namespaced_keys.core.types import MAX_LENGTH, SEPARATOR

################################
# Compiled regular expressions #
################################

_NAMESPACE_RE = re.compile(r"[a-z0-9_\-]+")
_KEY_RE = re.compile(r"[a-z0-9_\-/.]+")


########################
# Canonical validators #
########################


def is_valid_namespace(value: str) -> bool:
    """Return ``True`` if *value* is a canonical namespace.

    A canonical namespace:
        - Is a non-empty ``str`` of at most 200 characters.
        - Contains only lowercase ASCII letters, digits, ``_`` and ``-``.

    Args:
        value: The string to check.

    Returns:
        ``True`` when canonical; ``False`` otherwise.

    Examples::

        is_valid_namespace("minecraft")   # True
        is_valid_namespace("Minecraft")   # False  (uppercase)
        is_valid_namespace("a/b")         # False  ("/" is key-only)
    """
    if not value or not isinstance(value, str):
        return False
    if len(value) > MAX_LENGTH:
        return False
    return _NAMESPACE_RE.fullmatch(value) is not None


def is_valid_key(value: str) -> bool:
    """Return ``True`` if *value* is a canonical key.

    Same rules as :func:`is_valid_namespace`, plus ``/`` and ``.``.

    Args:
        value: The string to check.

    Returns:
        ``True`` when canonical; ``False`` otherwise.
    """
    if not value or not isinstance(value, str):
        return False
    if len(value) > MAX_LENGTH:
        return False
    return _KEY_RE.fullmatch(value) is not None


def split_namespaced_key(value: str) -> tuple[str, str] | None:
    """Split ``"namespace:key"`` into its halves when both are valid.

    The value is lowercased and whitespace around each half is stripped;
    nothing else is corrected.  Exactly one ``:`` is required; bare keys are
    rejected here (the parser is the place for default-namespace handling).

    Args:
        value: The string to split.

    Returns:
        ``(namespace, key)``, or ``None`` when *value* is not a valid
        namespaced key.

    Examples::

        split_namespaced_key("minecraft:air")      # ("minecraft", "air")
        split_namespaced_key(" Minecraft : AIR ")  # ("minecraft", "air")
        split_namespaced_key("air")                # None
    """
    if not value or not isinstance(value, str):
        return None
    if len(value) > MAX_LENGTH:
        return None
    parts = value.lower().split(SEPARATOR)
    if len(parts) != 2:
        return None
    namespace, key = (part.strip() for part in parts)
    if not is_valid_namespace(namespace) or not is_valid_key(key):
        return None
    return namespace, key


__all__ = [
    "is_valid_key",
    "is_valid_namespace",
    "split_namespaced_key",
]
