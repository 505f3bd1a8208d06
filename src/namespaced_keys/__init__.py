"""namespaced-keys — canonical, interned ``namespace:key`` identifiers.

This package parses arbitrary strings into canonical namespaced keys
(``"minecraft:air"``) under a strict (reject) or lenient (sanitise) policy,
and interns them in a thread-safe registry so that every distinct identifier
is one shared object compared by identity.

Quick start
-----------
.. code-block:: python

    from namespaced_keys import KeyRegistry

    registry = KeyRegistry()

    air = registry.key("minecraft:AIR")        # lenient: case folded
    assert registry.parse_key("air") is air    # strict, default namespace
    assert str(air) == "minecraft:air"

    plugin = registry.namespace("my-plugin")
    wand = plugin.key("items/wand")
    assert wand.namespace is plugin

Module-level helpers in :mod:`namespaced_keys.api` use the registry of the
current :class:`RegistryContext` (a lazily created process default unless one
is installed).

Public surface
--------------
The symbols exported below form the **stable public API**.  Anything not
listed here is an implementation detail and may change between minor versions.
"""

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
from namespaced_keys.handles import Namespace, NamespacedKey
from namespaced_keys.parsing.parser import parse_nsk
from namespaced_keys.registry.intern_map import InternMap, ReadWriteLock
from namespaced_keys.registry.key_registry import KeyRegistry
from namespaced_keys.utils.validation import (
    is_valid_key,
    is_valid_namespace,
    split_namespaced_key,
)
from namespaced_keys import api

try:
    from importlib.metadata import version as _pkg_version
    __version__: str = _pkg_version("namespaced-keys")
except Exception:  # pragma: no cover
    __version__ = "0.0.0.dev0"

__all__ = [  # NOQA
    # Version
    "__version__",
    # Configuration
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
    # Handles
    "Namespace",
    "NamespacedKey",
    # Parser
    "parse_nsk",
    # Registry
    "InternMap",
    "KeyRegistry",
    "ReadWriteLock",
    # Validation
    "is_valid_key",
    "is_valid_namespace",
    "split_namespaced_key",
    # Module-level helpers
    "api",
]
