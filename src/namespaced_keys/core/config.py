"""Configuration management for namespaced-keys.

``KeyRegistryConfig`` is a ``pydantic_settings.BaseSettings`` model that reads
its values from environment variables (prefix ``NSKEY_``), an optional
``.env`` file, or explicit keyword arguments.

Instances are frozen: a :class:`~namespaced_keys.registry.key_registry.KeyRegistry`
captures its config at construction time, and the canonical form of every
interned entry depends on it.

Environment variables
---------------------
Every field can be overridden with ``NSKEY_<FIELD_NAME_UPPER>``::

    NSKEY_DEFAULT_NAMESPACE=myplugin
    NSKEY_MAX_LENGTH=200
    NSKEY_GROWTH_WARNING_THRESHOLD=100000
"""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from namespaced_keys.core.types import DEFAULT_NAMESPACE, MAX_LENGTH
from namespaced_keys.utils.validation import is_valid_namespace


class KeyRegistryConfig(BaseSettings):
    """Settings for a :class:`~namespaced_keys.registry.key_registry.KeyRegistry`.

    Example — programmatic::

        config = KeyRegistryConfig(default_namespace="myplugin")
        registry = KeyRegistry(config)

    Example — environment variables::

        # .env
        NSKEY_DEFAULT_NAMESPACE=myplugin

        config = KeyRegistryConfig()  # reads from environment / .env
    """

    model_config = SettingsConfigDict(
        env_prefix="NSKEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    default_namespace: str = Field(
        default=DEFAULT_NAMESPACE,
        description="Namespace substituted whenever a bare key is parsed.",
    )

    max_length: int = Field(
        default=MAX_LENGTH,
        ge=1,
        le=MAX_LENGTH,
        description=(
            "Maximum length in bytes of raw parser input and of canonical text.  "
            "May only tighten the 200-byte format limit."
        ),
    )

    growth_warning_threshold: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Log a warning once the registry holds this many interned entries "
            "(namespaces plus keys).  None disables the warning."
        ),
    )

    @field_validator("default_namespace")
    @classmethod
    def _validate_default_namespace(cls, v: str) -> str:
        """Require the default namespace to be canonical already.

        Raises:
            ValueError: When *v* contains characters outside ``[a-z0-9_-]``.
        """
        if not is_valid_namespace(v):
            msg = (
                "default_namespace must be a canonical namespace: lowercase "
                "letters, digits, underscores and hyphens only."
            )
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _validate_cross_field_consistency(self) -> KeyRegistryConfig:
        """Raise ``ValueError`` if the default namespace cannot fit the length cap."""
        if len(self.default_namespace) > self.max_length:
            msg = "default_namespace must not be longer than max_length."
            raise ValueError(msg)
        return self


__all__ = ["KeyRegistryConfig"]
