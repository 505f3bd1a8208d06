"""Registry selection using :mod:`contextvars`.

Most code should hold a :class:`~namespaced_keys.registry.key_registry.KeyRegistry`
explicitly and call its methods.  Two places cannot take a registry argument:
the module-level helpers in :mod:`namespaced_keys.api` and pydantic
validation of handle fields.  They use the registry of the current context.

Resolution order
----------------
1. The registry installed with :meth:`RegistryContext.set` or
   :class:`RegistryContext.scope` in the current thread / asyncio task.
2. The process default registry, created lazily on first use from
   ``KeyRegistryConfig()`` (so ``NSKEY_*`` environment variables apply).

Every thread and every asyncio task gets its own copy of the context
variable, so scopes never leak between concurrent callers.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
import logging
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from namespaced_keys.registry.key_registry import KeyRegistry

logger = logging.getLogger(__name__)

_registry_ctx: ContextVar[KeyRegistry | None] = ContextVar("key_registry", default=None)

_default_registry: KeyRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> KeyRegistry:
    """Return the process default registry, creating it at most once.

    Returns:
        The shared default :class:`~namespaced_keys.registry.key_registry.KeyRegistry`.
    """
    global _default_registry  # noqa: PLW0603
    registry = _default_registry
    if registry is not None:
        return registry
    with _default_lock:
        if _default_registry is None:
            from namespaced_keys.registry.key_registry import KeyRegistry  # noqa: PLC0415

            _default_registry = KeyRegistry()
            logger.debug("Created default KeyRegistry")
        return _default_registry


class RegistryContext:
    """Namespace for the context-local registry.

    All methods are static; this class is never instantiated.

    Usage::

        token = RegistryContext.set(registry)
        try:
            handle_request()
        finally:
            RegistryContext.reset(token)

    or, preferably::

        with RegistryContext.scope(registry):
            handle_request()
    """

    @staticmethod
    def set(registry: KeyRegistry) -> Token[KeyRegistry | None]:
        """Install *registry* for the current context.

        Returns:
            A :class:`~contextvars.Token` for :meth:`reset`.
        """
        return _registry_ctx.set(registry)

    @staticmethod
    def reset(token: Token[KeyRegistry | None]) -> None:
        """Restore the registry captured in *token*."""
        _registry_ctx.reset(token)

    @staticmethod
    def get() -> KeyRegistry:
        """Return the current registry, falling back to the process default."""
        registry = _registry_ctx.get()
        if registry is None:
            return get_default_registry()
        return registry

    @staticmethod
    def get_optional() -> KeyRegistry | None:
        """Return the explicitly installed registry, or ``None``."""
        return _registry_ctx.get()

    @staticmethod
    def clear() -> None:
        """Remove any installed registry from the current context."""
        _registry_ctx.set(None)

    class scope:
        """Context manager installing a registry for the duration of a block.

        Supports both ``with`` and ``async with``; the previous registry is
        restored on exit even if an exception is raised::

            with RegistryContext.scope(KeyRegistry()) as registry:
                assert api.key("stone") is registry.key("minecraft:stone")
        """

        def __init__(self, registry: KeyRegistry) -> None:
            self._registry = registry
            self._token: Token[KeyRegistry | None] | None = None

        # Async protocol ------------------------------------------------

        async def __aenter__(self) -> KeyRegistry:
            return self.__enter__()

        async def __aexit__(
            self,
            exc_type: type[BaseException] | None,
            exc_val: BaseException | None,
            exc_tb: Any,
        ) -> None:
            self.__exit__(exc_type, exc_val, exc_tb)

        # Sync protocol -------------------------------------------------

        def __enter__(self) -> KeyRegistry:
            self._token = _registry_ctx.set(self._registry)
            return self._registry

        def __exit__(
            self,
            exc_type: type[BaseException] | None,
            exc_val: BaseException | None,
            exc_tb: Any,
        ) -> None:
            if self._token is not None:
                _registry_ctx.reset(self._token)
                self._token = None


__all__ = ["RegistryContext", "get_default_registry"]
