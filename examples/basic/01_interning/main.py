"""
Basic Example 1 — Interning
===========================
Parse identifiers into canonical, interned handles.

What you'll learn
-----------------
- Build a KeyRegistry
- Lenient vs strict parsing
- Handles compare by identity
- Fail-fast literals with must_key

Run
---
    pip install "namespaced-keys"
    python main.py
"""
import logging

from namespaced_keys import (
    InvalidCharError,
    KeyRegistry,
    KeyRegistryConfig,
)

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

# ── 1. Registry ───────────────────────────────────────────────────────────────
#
# Settings come from keyword arguments or NSKEY_* environment variables.
#
registry = KeyRegistry(KeyRegistryConfig(growth_warning_threshold=10))

# ── 2. Lenient parsing ────────────────────────────────────────────────────────
#
# Case is folded and invalid characters become "_".
#
air = registry.key("minecraft:AIR")
print(air)                                  # minecraft:air
print(registry.key("my plugin:Wand"))       # my_plugin:wand

# ── 3. Strict parsing ─────────────────────────────────────────────────────────
#
# The same identifier always yields the same object.
#
assert registry.parse_key("air") is air
try:
    registry.parse_key("a/b:c")
except InvalidCharError as exc:
    print(f"rejected: {exc}")

# ── 4. Namespaces ─────────────────────────────────────────────────────────────
plugin = registry.must_namespace("myplugin")
wand = plugin.must_key("items/wand")
assert wand.namespace is plugin
assert registry.get_key("myplugin:items/wand") is wand

print(registry.stats())                     # {'namespaces': 3, 'keys': 3}
