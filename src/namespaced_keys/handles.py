"""Identity handles returned by the registry.

:class:`Namespace` and :class:`NamespacedKey` are tiny immutable wrappers
around a registry entry.  Two handles are equal exactly when they wrap the
same entry, so comparison and hashing are O(1) and never look at strings.
The registry caches one handle per entry, which makes ``is`` hold too for
handles obtained from the same registry.

Nil handles
-----------
``Namespace()`` and ``NamespacedKey()`` build the zero value: it renders as
``""``, compares equal only to other nil handles of its type, and raises
:class:`~namespaced_keys.core.exceptions.NilReferenceError` from every
structural accessor.

Text and pydantic
-----------------
``to_text()`` emits the canonical string (``""`` for nil) and
``from_text()`` runs the strict parser, surfacing its error unchanged.  Both
handles can be used directly as pydantic model fields::

    class Recipe(BaseModel):
        result: NamespacedKey

    Recipe(result="minecraft:stone").result   # NamespacedKey('minecraft:stone')
    Recipe.model_validate({"result": "a/b:c"})  # ValidationError, type=invalid_char
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

from namespaced_keys.core.context import RegistryContext
from namespaced_keys.core.exceptions import (
    InvalidLiteralError,
    KeyParseError,
    NamespacedKeyError,
    NilReferenceError,
)
from namespaced_keys.core.types import MAX_LENGTH

if TYPE_CHECKING:
    from pydantic.json_schema import JsonSchemaValue

    from namespaced_keys.registry.key_registry import (
        KeyEntry,
        KeyRegistry,
        NamespaceEntry,
    )


def _decode(text: str | bytes) -> str:
    # Latin-1 maps every byte to one code point, so non-ASCII bytes reach the
    # parser as invalid characters instead of failing to decode.
    if isinstance(text, bytes):
        return text.decode("latin-1")
    return text


class _Handle:
    """Shared identity, immutability, and pydantic plumbing."""

    __slots__ = ("_entry",)

    _JSON_PATTERN: str

    def __init__(self, entry: Any = None) -> None:
        object.__setattr__(self, "_entry", entry)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        msg = f"{type(self).__name__} handles are immutable"
        raise AttributeError(msg)

    @property
    def is_nil(self) -> bool:
        """``True`` for the zero-value handle that wraps no entry."""
        return self._entry is None

    def to_text(self) -> str:
        """Return the canonical text, or ``""`` for a nil handle."""
        return str(self)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._entry is other._entry  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return id(self._entry)

    def __repr__(self) -> str:
        if self._entry is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({str(self)!r})"

    ############
    # Pydantic #
    ############

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return handler(
            core_schema.str_schema(pattern=cls._JSON_PATTERN, max_length=MAX_LENGTH)
        )

    @classmethod
    def _validate(cls, value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if not isinstance(value, (str, bytes)):
            raise PydanticCustomError(
                f"{cls.__name__.lower()}_type",
                "Input should be a string or {handle}",
                {"handle": cls.__name__},
            )
        try:
            return cls.from_text(value)  # type: ignore[attr-defined]
        except KeyParseError as err:
            raise PydanticCustomError(
                err.kind.value, "{reason}", {"reason": err.message}
            ) from err


class Namespace(_Handle):
    """Handle for one interned namespace.

    Obtain instances from a registry (``registry.namespace("myplugin")``) or
    the module-level helpers in :mod:`namespaced_keys.api`; ``Namespace()``
    is the nil handle.
    """

    __slots__ = ()

    _JSON_PATTERN = r"^[a-z0-9_\-]+$"
    _entry: NamespaceEntry | None

    def __init__(self, entry: NamespaceEntry | None = None) -> None:
        super().__init__(entry)

    @property
    def name(self) -> str:
        """Canonical namespace string; ``""`` for a nil handle."""
        return self._entry.name if self._entry is not None else ""

    def __str__(self) -> str:
        return self.name

    def key(self, raw: str) -> NamespacedKey:
        """Return the key *raw* inside this namespace, sanitising it.

        *raw* is parsed as a bare key: ``:`` is never a separator here and
        becomes ``_`` like any other invalid character.

        Raises:
            NilReferenceError: Called on a nil handle.
            EmptyInputError: *raw* is empty.
            TooLongError: *raw*, or ``"namespace:key"``, exceeds the registry's
                ``max_length``.
            TrailingSeparatorError: *raw* ends with ``:``.
        """
        entry = self._require_entry()
        parsed = entry.registry.parse(
            raw, strict=False, allow_no_separator=True, default_namespace=entry.name
        )
        return entry.keys.get_or_create(parsed.key).handle

    def parse_key(self, raw: str) -> NamespacedKey:
        """Return the key *raw* inside this namespace, rejecting invalid input.

        Raises:
            NilReferenceError: Called on a nil handle.
            KeyParseError: Any parser error, including ``InvalidCharError``.
        """
        entry = self._require_entry()
        parsed = entry.registry.parse(
            raw, strict=True, allow_no_separator=True, default_namespace=entry.name
        )
        return entry.keys.get_or_create(parsed.key).handle

    def must_key(self, literal: str) -> NamespacedKey:
        """Strictly parse a key literal known to be valid.

        Raises:
            InvalidLiteralError: *literal* is not valid, or the handle is nil.
        """
        try:
            return self.parse_key(literal)
        except NamespacedKeyError as err:
            raise InvalidLiteralError(literal, err) from err

    def get_key(self, key: str) -> NamespacedKey | None:
        """Return the already-interned canonical *key*, or ``None``.

        Raises:
            NilReferenceError: Called on a nil handle.
        """
        entry = self._require_entry().keys.get(key)
        return entry.handle if entry is not None else None

    @classmethod
    def from_text(
        cls, text: str | bytes, registry: KeyRegistry | None = None
    ) -> Namespace:
        """Decode *text* with the strict namespace parser.

        Args:
            text: Canonical namespace as ``str`` or ASCII ``bytes``.
            registry: Registry to intern into.  Defaults to the registry of
                the current :class:`~namespaced_keys.core.context.RegistryContext`.

        Raises:
            KeyParseError: Any parser error.
        """
        registry = registry if registry is not None else RegistryContext.get()
        return registry.parse_namespace(_decode(text))

    def _require_entry(self) -> NamespaceEntry:
        if self._entry is None:
            raise NilReferenceError("Namespace")
        return self._entry


class NamespacedKey(_Handle):
    """Handle for one interned ``namespace:key`` pair.

    ``NamespacedKey()`` is the nil handle.
    """

    __slots__ = ()

    _JSON_PATTERN = r"^(?:[a-z0-9_\-]+:)?[a-z0-9_\-/.]+$"
    _entry: KeyEntry | None

    def __init__(self, entry: KeyEntry | None = None) -> None:
        super().__init__(entry)

    def __str__(self) -> str:
        return self._entry.full if self._entry is not None else ""

    @property
    def namespace(self) -> Namespace:
        """The namespace this key belongs to.

        Raises:
            NilReferenceError: Called on a nil handle.
        """
        return self._require_entry().namespace.handle

    @property
    def key(self) -> str:
        """The part after the ``:``.

        Raises:
            NilReferenceError: Called on a nil handle.
        """
        return self._require_entry().key

    @classmethod
    def from_text(
        cls, text: str | bytes, registry: KeyRegistry | None = None
    ) -> NamespacedKey:
        """Decode *text* with the strict key parser.

        Bare keys get the registry's default namespace.

        Raises:
            KeyParseError: Any parser error.
        """
        registry = registry if registry is not None else RegistryContext.get()
        return registry.parse_key(_decode(text))

    def _require_entry(self) -> KeyEntry:
        if self._entry is None:
            raise NilReferenceError("NamespacedKey")
        return self._entry


__all__ = ["Namespace", "NamespacedKey"]
