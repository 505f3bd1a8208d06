"""
Basic Example 2 — Pydantic Models
=================================
Use handles as pydantic model fields.

What you'll learn
-----------------
- Validate NamespacedKey / Namespace fields from JSON
- Install a registry for a block with RegistryContext.scope
- Map parser errors to pydantic ValidationError types

Run
---
    pip install "namespaced-keys"
    python main.py
"""
from pydantic import BaseModel, ValidationError

from namespaced_keys import KeyRegistry, Namespace, NamespacedKey, RegistryContext


class Recipe(BaseModel):
    result: NamespacedKey
    ingredients: list[NamespacedKey]
    group: Namespace | None = None


registry = KeyRegistry()

with RegistryContext.scope(registry):
    recipe = Recipe.model_validate_json(
        '{"result": "minecraft:torch", "ingredients": ["coal", "stick"], "group": "lighting"}'
    )
    assert recipe.ingredients[0] is registry.key("minecraft:coal")
    print(recipe.model_dump_json())

    try:
        Recipe(result="Not Valid:", ingredients=[])
    except ValidationError as exc:
        for error in exc.errors():
            print(error["type"], "-", error["msg"])   # trailing_separator - ...
