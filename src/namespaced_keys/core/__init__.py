"""Core abstractions — types, config, context, and exceptions."""

from namespaced_keys.core.config import KeyRegistryConfig
from namespaced_keys.core.context import RegistryContext, get_default_registry
from namespaced_keys.core.exceptions import (
    EmptyInputError,
    InvalidCharError,
    InvalidLiteralError,
    KeyParseError,
    NamespacedKeyError,
    NilReferenceError,
    TooLongError,
    TrailingSeparatorError,
)
from namespaced_keys.core.types import (
    DEFAULT_NAMESPACE,
    MAX_LENGTH,
    SEPARATOR,
    ErrorKind,
    InvalidCharReason,
    ParsedKey,
)

__all__ = [
    # Config
    "KeyRegistryConfig",
    # Context
    "RegistryContext",
    "get_default_registry",
    # Exceptions
    "NamespacedKeyError",
    "KeyParseError",
    "EmptyInputError",
    "TooLongError",
    "TrailingSeparatorError",
    "InvalidCharError",
    "NilReferenceError",
    "InvalidLiteralError",
    # Types
    "DEFAULT_NAMESPACE",
    "MAX_LENGTH",
    "SEPARATOR",
    "ErrorKind",
    "InvalidCharReason",
    "ParsedKey",
]
