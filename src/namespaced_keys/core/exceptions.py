"""Custom exceptions for namespaced-keys.

All recoverable errors derive from ``NamespacedKeyError`` so callers can catch
the entire family with a single ``except NamespacedKeyError`` clause while
still being able to handle individual sub-types.

Exception hierarchy::

    NamespacedKeyError
    ├── KeyParseError
    │   ├── EmptyInputError
    │   ├── TooLongError
    │   ├── TrailingSeparatorError
    │   └── InvalidCharError
    └── NilReferenceError

    InvalidLiteralError (RuntimeError, fail-fast family)

Design decisions:
    - Every exception carries a ``kind`` (:class:`ErrorKind`) and a structured
      ``details`` dict that is safe to log.  Raw input is never copied into
      ``details``; only lengths, positions, and reasons are.
    - ``InvalidLiteralError`` deliberately sits outside the
      ``NamespacedKeyError`` family so a broad ``except NamespacedKeyError``
      cannot swallow a broken hard-coded literal.
"""

from __future__ import annotations

from typing import Any, ClassVar

from namespaced_keys.core.types import ErrorKind, InvalidCharReason

_REASON_TEXT: dict[InvalidCharReason, str] = {
    InvalidCharReason.DOUBLED_SEPARATOR: 'found multiple ":" characters',
    InvalidCharReason.SEPARATOR_IN_NAMESPACE: '":" is not allowed in a namespace',
    InvalidCharReason.SEPARATOR_IN_KEY: '":" is not allowed in a bare key',
    InvalidCharReason.SLASH_OR_DOT_IN_NAMESPACE: "only allowed in a key, not a namespace",
    InvalidCharReason.UNRECOGNIZED: "invalid character",
}


class NamespacedKeyError(Exception):
    """Base exception for all recoverable namespaced-keys errors.

    Attributes:
        message: Human-readable description of the error.
        details: Supplementary key-value context.  Safe to log.
        kind: Machine-readable :class:`ErrorKind` of the error.
    """

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details: dict[str, Any] = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return ``human-readable`` string."""
        if self.details:
            return f"{self.message} | details={self.details}"
        return self.message

    def __repr__(self) -> str:
        """Return ``repr`` string for debugging purpose."""
        return f"{type(self).__name__}(message={self.message!r})"


class KeyParseError(NamespacedKeyError):
    """Base class for every error the parser can raise."""


class EmptyInputError(KeyParseError):
    """Raised when the input is empty where a key is required."""

    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("namespaced key is empty", details)


class TooLongError(KeyParseError):
    """Raised when the raw input exceeds the maximum length.

    Attributes:
        length: Length of the rejected input in bytes.
        max_length: The configured limit.
    """

    kind = ErrorKind.TOO_LONG

    def __init__(
        self,
        length: int,
        max_length: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"namespaced key is too long: {length} bytes exceeds limit {max_length}",
            details,
        )
        self.length = length
        self.max_length = max_length


class TrailingSeparatorError(KeyParseError):
    """Raised when the input ends with ``:`` (a split would leave an empty key)."""

    kind = ErrorKind.TRAILING_SEPARATOR

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("namespaced key ends with a trailing ':' character", details)


class InvalidCharError(KeyParseError):
    """Raised in strict mode at the first character that is not allowed.

    Attributes:
        char: The offending character.
        position: Zero-based index of *char* in the input.
        reason: Why *char* is invalid in that position.
    """

    kind = ErrorKind.INVALID_CHAR

    def __init__(
        self,
        char: str,
        position: int,
        reason: InvalidCharReason,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"namespaced key contains illegal character {char!r} at position "
            f"{position}: {_REASON_TEXT[reason]}",
            {"position": position, "reason": reason.value, **(details or {})},
        )
        self.char = char
        self.position = position
        self.reason = reason


class NilReferenceError(NamespacedKeyError):
    """Raised when a structural accessor is used on a nil (zero-value) handle.

    Attributes:
        handle_type: Name of the handle class (``"Namespace"`` or
            ``"NamespacedKey"``).
    """

    kind = ErrorKind.NIL_REFERENCE

    def __init__(
        self,
        handle_type: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"nil {handle_type} handle has no registry entry", details)
        self.handle_type = handle_type


class InvalidLiteralError(RuntimeError):
    """Raised by the ``must_*`` family when a literal fails to parse.

    This signals a programming error (a hard-coded identifier that is not
    valid), never bad runtime input.  The original ``NamespacedKeyError`` is
    chained as ``__cause__``.

    Attributes:
        literal: The literal that failed.
        kind: :class:`ErrorKind` of the underlying error.
    """

    def __init__(self, literal: str, cause: NamespacedKeyError) -> None:
        super().__init__(f"invalid namespaced key literal {literal!r}: {cause.message}")
        self.literal = literal
        self.kind = cause.kind


__all__ = [
    "EmptyInputError",
    "InvalidCharError",
    "InvalidLiteralError",
    "KeyParseError",
    "NamespacedKeyError",
    "NilReferenceError",
    "TooLongError",
    "TrailingSeparatorError",
]
