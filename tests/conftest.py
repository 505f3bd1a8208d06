"""Shared pytest fixtures for the namespaced-keys test suite.

Hierarchy
---------
registry_config         KeyRegistryConfig with library defaults (env ignored)
registry                fresh KeyRegistry per test
scoped_registry         registry installed in RegistryContext for the test
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from namespaced_keys.core.config import KeyRegistryConfig
from namespaced_keys.core.context import RegistryContext
from namespaced_keys.registry.key_registry import KeyRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator

_ENV_VARS = (
    "NSKEY_DEFAULT_NAMESPACE",
    "NSKEY_MAX_LENGTH",
    "NSKEY_GROWTH_WARNING_THRESHOLD",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep NSKEY_* variables and installed registries from leaking into tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    RegistryContext.clear()
    yield
    RegistryContext.clear()


############
# Registry #
############


@pytest.fixture
def registry_config() -> KeyRegistryConfig:
    return KeyRegistryConfig(_env_file=None)


@pytest.fixture
def registry(registry_config: KeyRegistryConfig) -> KeyRegistry:
    return KeyRegistry(registry_config)


@pytest.fixture
def scoped_registry(registry: KeyRegistry) -> Iterator[KeyRegistry]:
    with RegistryContext.scope(registry):
        yield registry
