"""Domain constants, enumerations, and value types for namespaced-keys.

This module is the single source of truth for the library's vocabulary.
All other modules import *from* this module, never the reverse, to keep
the dependency graph acyclic.

Design notes
------------
* Enumerations use :class:`~enum.StrEnum` so values serialise to plain
  strings in logs, pydantic error types, and ``details`` dictionaries without
  extra conversion.
* :class:`ParsedKey` is a ``NamedTuple``: the parser returns plain strings,
  and interning into identity objects is the registry's job.
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

#############
# Constants #
#############

#: Character separating the namespace from the key (``"minecraft:air"``).
SEPARATOR = ":"

#: Namespace substituted whenever a bare key is parsed.
DEFAULT_NAMESPACE = "minecraft"

#: Maximum length (in bytes) of raw input accepted by the parser.
MAX_LENGTH = 200

#: Characters valid in both namespaces and keys.
NAMESPACE_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789-_"

#: Characters valid only in key position.
KEY_ONLY_CHARS = "/."


################
# Enumerations #
################


class ErrorKind(StrEnum):
    """Machine-readable kind carried by every library error.

    The values double as pydantic error ``type`` strings when a handle fails
    validation inside a model.
    """

    EMPTY_INPUT = "empty_input"
    TOO_LONG = "too_long"
    TRAILING_SEPARATOR = "trailing_separator"
    INVALID_CHAR = "invalid_char"
    NIL_REFERENCE = "nil_reference"


class InvalidCharReason(StrEnum):
    """Why a character was rejected in strict mode.

    Reasons
    -------
    DOUBLED_SEPARATOR
        A second ``:`` after the namespace/key split was already fixed.
    SEPARATOR_IN_NAMESPACE
        A ``:`` while parsing a bare namespace.
    SEPARATOR_IN_KEY
        A ``:`` while parsing a bare key.
    SLASH_OR_DOT_IN_NAMESPACE
        ``/`` or ``.`` before a later ``:`` (namespace position).
    UNRECOGNIZED
        Any other character, including all non-ASCII code points.
    """

    DOUBLED_SEPARATOR = "doubled_separator"
    SEPARATOR_IN_NAMESPACE = "separator_in_namespace"
    SEPARATOR_IN_KEY = "separator_in_key"
    SLASH_OR_DOT_IN_NAMESPACE = "slash_or_dot_in_namespace"
    UNRECOGNIZED = "unrecognized"


###############
# Value types #
###############


class ParsedKey(NamedTuple):
    """Normalized parser output.

    Attributes:
        namespace: Canonical namespace string.
        key: Canonical key string; empty when only a namespace was parsed.
    """

    namespace: str
    key: str

    def __str__(self) -> str:
        """Return the canonical text (``"ns:key"``, or ``"ns"`` without a key)."""
        if not self.key:
            return self.namespace
        return f"{self.namespace}{SEPARATOR}{self.key}"


__all__ = [
    "DEFAULT_NAMESPACE",
    "KEY_ONLY_CHARS",
    "MAX_LENGTH",
    "NAMESPACE_CHARS",
    "SEPARATOR",
    "ErrorKind",
    "InvalidCharReason",
    "ParsedKey",
]
