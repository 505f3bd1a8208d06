"""Utility functions — canonical-form validation."""

from namespaced_keys.utils.validation import (
    is_valid_key,
    is_valid_namespace,
    split_namespaced_key,
)

__all__ = [
    "is_valid_key",
    "is_valid_namespace",
    "split_namespaced_key",
]
