"""Canonicalization registry — thread-safe interning of namespaces and keys."""

from namespaced_keys.registry.intern_map import InternMap, ReadWriteLock
from namespaced_keys.registry.key_registry import KeyEntry, KeyRegistry, NamespaceEntry

__all__ = [
    "InternMap",
    "KeyEntry",
    "KeyRegistry",
    "NamespaceEntry",
    "ReadWriteLock",
]
