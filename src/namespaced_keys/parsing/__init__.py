"""Namespaced-key parsing — strict and lenient normalisation."""

from namespaced_keys.parsing.parser import parse_nsk

__all__ = ["parse_nsk"]
