"""Two-level canonicalization registry.

``KeyRegistry`` guarantees that within one registry every canonical namespace
string maps to exactly one :class:`NamespaceEntry`, and every key string
within a namespace maps to exactly one :class:`KeyEntry`.  Handles returned to
callers (:class:`~namespaced_keys.handles.Namespace`,
:class:`~namespaced_keys.handles.NamespacedKey`) are created once per entry
and cached on it, so equal identifiers are the *same* object.

Layout
------
::

    KeyRegistry
      └── InternMap[str, NamespaceEntry]          (one lock for the namespace table)
            └── NamespaceEntry.keys
                  └── InternMap[str, KeyEntry]    (one lock per namespace)

No lock spans namespaces: creating ``foo:a`` never blocks a reader of
``bar:b``.

Lifecycle
---------
A registry is an ordinary value: construct it once and share it with every
call site (or install it with
:class:`~namespaced_keys.core.context.RegistryContext`).  Entries live as long
as the registry.  Nothing is ever evicted, so feeding an unbounded set of
distinct untrusted strings into a registry grows memory without bound.
Validate or rate-limit untrusted input before interning it.  Set
``growth_warning_threshold`` in :class:`~namespaced_keys.core.config.KeyRegistryConfig`
to get a log warning when a registry grows past an expected size.
"""

from __future__ import annotations

import logging
import threading

from namespaced_keys.core.config import KeyRegistryConfig
from namespaced_keys.core.exceptions import InvalidLiteralError, NamespacedKeyError
from namespaced_keys.core.types import SEPARATOR, ParsedKey
from namespaced_keys.handles import Namespace, NamespacedKey
from namespaced_keys.parsing.parser import parse_nsk
from namespaced_keys.registry.intern_map import InternMap

logger = logging.getLogger(__name__)


class NamespaceEntry:
    """Registry-owned state behind one namespace.

    Attributes:
        name: Canonical namespace string.
        registry: The owning registry.
        keys: This namespace's key table.
        handle: The one :class:`~namespaced_keys.handles.Namespace` for it.
    """

    __slots__ = ("handle", "keys", "name", "registry")

    def __init__(self, name: str, registry: KeyRegistry) -> None:
        self.name = name
        self.registry = registry
        self.keys: InternMap[str, KeyEntry] = InternMap(
            self._new_key, name=f"keys[{name}]"
        )
        self.handle = Namespace(self)

    def _new_key(self, key: str) -> KeyEntry:
        entry = KeyEntry(self, key)
        self.registry._record_created()
        return entry


class KeyEntry:
    """Registry-owned state behind one namespaced key.

    Attributes:
        namespace: The owning namespace entry.
        key: Canonical key string.
        full: Precomputed canonical text ``"namespace:key"``.
        handle: The one :class:`~namespaced_keys.handles.NamespacedKey` for it.
    """

    __slots__ = ("full", "handle", "key", "namespace")

    def __init__(self, namespace: NamespaceEntry, key: str) -> None:
        self.namespace = namespace
        self.key = key
        self.full = f"{namespace.name}{SEPARATOR}{key}"
        self.handle = NamespacedKey(self)


class KeyRegistry:
    """Thread-safe interning registry for namespaces and namespaced keys.

    Args:
        config: Registry settings.  Defaults to ``KeyRegistryConfig()``,
            which reads ``NSKEY_*`` environment variables.

    Example::

        registry = KeyRegistry()

        air = registry.key("minecraft:air")
        assert registry.key("AIR") is air            # default namespace, case folded
        assert registry.parse_key("minecraft:air") is air

        plugin = registry.namespace("myplugin")
        assert plugin.key("wand") is registry.key("myplugin:wand")

    Method families:
        - ``namespace`` / ``key``: lenient; invalid characters become ``_``.
        - ``parse_namespace`` / ``parse_key``: strict; raise
          :class:`~namespaced_keys.core.exceptions.KeyParseError`.
        - ``must_namespace`` / ``must_key``: fail-fast, for literals only.
        - ``get_namespace`` / ``get_key``: lookups that never create.
    """

    def __init__(self, config: KeyRegistryConfig | None = None) -> None:
        self._config = config if config is not None else KeyRegistryConfig()
        self._namespaces: InternMap[str, NamespaceEntry] = InternMap(
            self._new_namespace, name="namespaces"
        )
        # Total entries across both levels, for the growth warning.
        self._count_lock = threading.Lock()
        self._entry_count = 0
        self._growth_warned = False

        logger.debug(
            "KeyRegistry initialised default_namespace=%s max_length=%d",
            self._config.default_namespace,
            self._config.max_length,
        )

    @property
    def config(self) -> KeyRegistryConfig:
        """The settings this registry was built with."""
        return self._config

    @property
    def default(self) -> Namespace:
        """Handle of the configured default namespace."""
        return self._namespaces.get_or_create(self._config.default_namespace).handle

    ###########
    # Parsing #
    ###########

    def parse(
        self,
        raw: str,
        *,
        strict: bool,
        allow_no_separator: bool = False,
        namespace_only: bool = False,
        default_namespace: str | None = None,
    ) -> ParsedKey:
        """Run the parser with this registry's default namespace and length cap.

        *default_namespace* overrides the configured default, for keys parsed
        inside a known namespace.  Nothing is interned; see
        :func:`~namespaced_keys.parsing.parser.parse_nsk`.
        """
        return parse_nsk(
            raw,
            strict=strict,
            allow_no_separator=allow_no_separator,
            namespace_only=namespace_only,
            default_namespace=(
                default_namespace
                if default_namespace is not None
                else self._config.default_namespace
            ),
            max_length=self._config.max_length,
        )

    ##############
    # Namespaces #
    ##############

    def namespace(self, raw: str) -> Namespace:
        """Return the namespace for *raw*, replacing invalid characters.

        Empty input yields the default namespace.

        Raises:
            TooLongError: *raw* exceeds ``max_length``.
            TrailingSeparatorError: *raw* ends with ``:``.
        """
        parsed = self.parse(raw, strict=False, namespace_only=True)
        return self._namespaces.get_or_create(parsed.namespace).handle

    def parse_namespace(self, raw: str) -> Namespace:
        """Return the namespace for *raw*, rejecting invalid characters.

        Raises:
            KeyParseError: Any parser error, including ``InvalidCharError``.
        """
        parsed = self.parse(raw, strict=True, namespace_only=True)
        return self._namespaces.get_or_create(parsed.namespace).handle

    def must_namespace(self, literal: str) -> Namespace:
        """Strictly parse a namespace literal known to be valid.

        Raises:
            InvalidLiteralError: *literal* is not valid.  Never use this on
                runtime input.
        """
        try:
            return self.parse_namespace(literal)
        except NamespacedKeyError as err:
            raise InvalidLiteralError(literal, err) from err

    def get_namespace(self, name: str) -> Namespace | None:
        """Return the namespace for canonical *name* if it was already interned."""
        entry = self._namespaces.get(name)
        return entry.handle if entry is not None else None

    def namespaces(self) -> list[Namespace]:
        """Return a snapshot of every interned namespace, in creation order."""
        return [entry.handle for entry in self._namespaces.values()]

    ########
    # Keys #
    ########

    def key(self, raw: str) -> NamespacedKey:
        """Return the key for ``"namespace:key"`` or bare *raw*, sanitising it.

        Raises:
            EmptyInputError: *raw* is empty.
            TooLongError: *raw* or its canonical text exceeds ``max_length``.
            TrailingSeparatorError: *raw* ends with ``:``.
        """
        return self._intern(self.parse(raw, strict=False))

    def parse_key(self, raw: str) -> NamespacedKey:
        """Return the key for ``"namespace:key"`` or bare *raw*, strictly.

        Raises:
            KeyParseError: Any parser error, including ``InvalidCharError``.
        """
        return self._intern(self.parse(raw, strict=True))

    def must_key(self, literal: str) -> NamespacedKey:
        """Strictly parse a key literal known to be valid.

        Raises:
            InvalidLiteralError: *literal* is not valid.  Never use this on
                runtime input.
        """
        try:
            return self.parse_key(literal)
        except NamespacedKeyError as err:
            raise InvalidLiteralError(literal, err) from err

    def get_key(self, text: str) -> NamespacedKey | None:
        """Return the key for canonical ``"namespace:key"`` *text* if interned.

        No parsing or normalisation happens; *text* must be canonical.
        """
        name, sep, key = text.partition(SEPARATOR)
        if not sep:
            return None
        namespace = self._namespaces.get(name)
        if namespace is None:
            return None
        entry = namespace.keys.get(key)
        return entry.handle if entry is not None else None

    ###########################
    # Metrics / introspection #
    ###########################

    def stats(self) -> dict[str, int]:
        """Return a snapshot of registry size for monitoring.

        Returns:
            Dictionary with:
                - ``namespaces``: number of interned namespaces.
                - ``keys``: number of interned keys across all namespaces.
        """
        entries = self._namespaces.values()
        return {
            "namespaces": len(entries),
            "keys": sum(len(entry.keys) for entry in entries),
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(default_namespace="
            f"{self._config.default_namespace!r})"
        )

    ###################
    # Private helpers #
    ###################

    def _intern(self, parsed: ParsedKey) -> NamespacedKey:
        namespace = self._namespaces.get_or_create(parsed.namespace)
        return namespace.keys.get_or_create(parsed.key).handle

    def _new_namespace(self, name: str) -> NamespaceEntry:
        entry = NamespaceEntry(name, self)
        self._record_created()
        logger.debug("Registered namespace %s", name)
        return entry

    def _record_created(self) -> None:
        threshold = self._config.growth_warning_threshold
        with self._count_lock:
            self._entry_count += 1
            if threshold is None or self._growth_warned or self._entry_count < threshold:
                return
            self._growth_warned = True
            count = self._entry_count
        logger.warning(
            "KeyRegistry holds %d interned entries (threshold %d); registries "
            "never evict, check for untrusted input being interned",
            count,
            threshold,
        )


__all__ = ["KeyEntry", "KeyRegistry", "NamespaceEntry"]
