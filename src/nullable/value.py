"""Nullable — a value of some element type, or an explicit null.

A container is built once as valued (:meth:`Nullable.of`) or null
(:meth:`Nullable.null`). Only the two decode paths, :meth:`Nullable.decode`
for JSON text and :meth:`Nullable.scan` for raw storage values, overwrite
it in place.

State is held in a :class:`~nullable.storage.null.StorageNull` cell; the
container adds the JSON codec, display rendering and storage production
on top of it.

INVARIANT: When ``valid`` is False, ``value`` is the zero value of the
element type and carries no data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar, get_args

from nullable import codec
from nullable.config.settings import get_settings
from nullable.errors import type_name
from nullable.storage.null import StorageNull
from nullable.zero import zero_value

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler
    from pydantic_core import core_schema

T = TypeVar("T")


class Nullable(Generic[T]):
    """A present value of type ``T`` or null.

    The element type is taken from, in order: the explicit *value_type*,
    a subscripted construction such as ``Nullable[int]()``, or the type
    of a present value. Without any of those the container accepts any
    JSON value and any raw storage value.

    Usage::

        age = Nullable.of(42)
        name = Nullable.null(str)
        nickname = Nullable[str]()
        nickname.decode(b'"Bob"')
    """

    def __init__(self, value: Any = None, valid: bool = False, value_type: Any = None) -> None:
        self._cell: StorageNull[T] = StorageNull(value_type, value, valid)

    # --- construction ---

    @classmethod
    def of(cls, value: T, value_type: Any = None) -> Nullable[T]:
        """Valued container holding *value*."""
        if value_type is None:
            value_type = type(value)
        return cls(value, True, value_type)

    @classmethod
    def null(cls, value_type: Any = None) -> Nullable[T]:
        """Null container for *value_type*."""
        return cls(zero_value(value_type), False, value_type)

    # --- state ---

    @property
    def value_type(self) -> Any:
        """Element type, or None if it cannot be determined."""
        return self._resolve_type()

    def _resolve_type(self) -> Any:
        cell = self._cell
        if cell.value_type is None:
            # Set by typing after __init__ for Nullable[X]() construction.
            args = get_args(self.__dict__.get("__orig_class__"))
            if args and not isinstance(args[0], TypeVar):
                cell.value_type = args[0]
            elif cell.valid:
                cell.value_type = type(cell.value)
        return cell.value_type

    @property
    def valid(self) -> bool:
        return self._cell.valid

    @property
    def value(self) -> T:
        """Element value; the zero value when null."""
        if not self._cell.valid:
            return zero_value(self.value_type)
        return self._cell.value

    # --- accessors ---

    def get(self) -> T | None:
        """Return the internal value itself, or None when null.

        The returned object is the container's own storage: mutating a
        mutable value through it changes the container.
        """
        if not self._cell.valid:
            return None
        return self._cell.value

    def value_or(self, default: T) -> T:
        """Return the value if present, otherwise *default* unchanged."""
        if not self._cell.valid:
            return default
        return self._cell.value

    def __str__(self) -> str:
        if not self._cell.valid:
            return "null"
        return str(self._cell.value)

    def __repr__(self) -> str:
        if not self._cell.valid:
            value_type = self.value_type
            type_arg = "" if value_type is None else type_name(value_type)
            return f"{type(self).__name__}.null({type_arg})"
        return f"{type(self).__name__}.of({self._cell.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nullable):
            return NotImplemented
        if self.valid != other.valid:
            return False
        return not self.valid or self._cell.value == other._cell.value

    __hash__ = None  # type: ignore[assignment]

    # --- JSON text codec ---

    def encode(self) -> bytes:
        """Encode as JSON: ``null`` when null, else the element's JSON."""
        if not self._cell.valid:
            return codec.NULL_LITERAL
        return codec.encode_value(self.value_type, self._cell.value)

    def decode(self, data: bytes | bytearray | memoryview | str) -> None:
        """Overwrite the container from JSON *data*.

        The exact literal ``null`` makes the container null. Anything else
        flags the container valid before the element is decoded; after a
        :class:`~nullable.errors.DecodeError` the container is left valid
        with its previous value and should be discarded.

        Raises:
            DecodeError: If *data* is not JSON for the element type.
        """
        raw = codec.as_bytes(data)
        value_type = self.value_type
        if codec.is_null_literal(raw):
            self._cell.reset()
            return

        self._cell.valid = True
        strict = get_settings().strict_decode
        self._cell.value = codec.decode_value(value_type, raw, strict=strict)

    # --- storage binding ---

    def scan(self, raw: Any) -> None:
        """Overwrite the container from a raw storage value.

        ``None`` (storage null) makes the container null. Other values are
        converted to the element type by
        :func:`~nullable.storage.convert.convert_assign`.

        Raises:
            ScanError: If *raw* cannot be converted to the element type.
        """
        self._resolve_type()
        self._cell.scan(raw, parse_text=get_settings().scan_parse_text)

    def to_storage(self) -> T:
        """Value to hand to the storage layer.

        A null container produces the zero value of its element type, not
        SQL NULL, so the storage layer cannot tell null from zero through
        this call. Check :attr:`valid` first where that matters, or use
        ``StorageNull.driver_value``. A present value is returned as is.
        """
        if not self._cell.valid:
            return zero_value(self.value_type)
        return self._cell.value

    # --- pydantic integration ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        value_type = args[0] if args else None
        return codec.nullable_core_schema(cls, value_type, handler)
