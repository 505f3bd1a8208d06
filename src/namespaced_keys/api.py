"""Module-level helpers bound to the current registry.

Each function resolves the registry through
:meth:`~namespaced_keys.core.context.RegistryContext.get` and delegates to the
method of the same name on
:class:`~namespaced_keys.registry.key_registry.KeyRegistry`::

    from namespaced_keys import api

    stone = api.key("minecraft:stone")
    assert api.parse_key("stone") is stone
    assert api.default_namespace().key("stone") is stone

The ``must_*`` helpers are for identifiers written as literals in source
code.  They raise :class:`~namespaced_keys.core.exceptions.InvalidLiteralError`
rather than a ``NamespacedKeyError``, so a broken literal cannot be swallowed by
ordinary error handling.  Never pass runtime input to them.
"""

from __future__ import annotations

from namespaced_keys.core.context import RegistryContext
from namespaced_keys.handles import Namespace, NamespacedKey


def namespace(raw: str) -> Namespace:
    """Lenient namespace lookup; see :meth:`KeyRegistry.namespace`."""
    return RegistryContext.get().namespace(raw)


def parse_namespace(raw: str) -> Namespace:
    """Strict namespace lookup; see :meth:`KeyRegistry.parse_namespace`."""
    return RegistryContext.get().parse_namespace(raw)


def must_namespace(literal: str) -> Namespace:
    """Fail-fast namespace literal; see :meth:`KeyRegistry.must_namespace`."""
    return RegistryContext.get().must_namespace(literal)


def key(raw: str) -> NamespacedKey:
    """Lenient key lookup; see :meth:`KeyRegistry.key`."""
    return RegistryContext.get().key(raw)


def parse_key(raw: str) -> NamespacedKey:
    """Strict key lookup; see :meth:`KeyRegistry.parse_key`."""
    return RegistryContext.get().parse_key(raw)


def must_key(literal: str) -> NamespacedKey:
    """Fail-fast key literal; see :meth:`KeyRegistry.must_key`."""
    return RegistryContext.get().must_key(literal)


def get_namespace(name: str) -> Namespace | None:
    """Non-creating namespace lookup; see :meth:`KeyRegistry.get_namespace`."""
    return RegistryContext.get().get_namespace(name)


def get_key(text: str) -> NamespacedKey | None:
    """Non-creating key lookup; see :meth:`KeyRegistry.get_key`."""
    return RegistryContext.get().get_key(text)


def default_namespace() -> Namespace:
    """Handle of the current registry's default namespace (``minecraft``)."""
    return RegistryContext.get().default


__all__ = [
    "default_namespace",
    "get_key",
    "get_namespace",
    "key",
    "must_key",
    "must_namespace",
    "namespace",
    "parse_key",
    "parse_namespace",
]
