"""SQLAlchemy column type carrying :class:`~nullable.value.Nullable` values.

Bound parameters go through ``Nullable.to_storage``; a null container
binds the element type's zero value. Bind Python ``None`` to write SQL
NULL. Result rows are scanned back into ``Nullable`` containers.

Usage::

    people = Table(
        "people",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("nickname", NullableType(str)),
        Column("age", NullableType(int)),
    )
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, get_origin

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    Text,
    Time,
)
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator, TypeEngine

from nullable.value import Nullable

# Checked in order; bool before int since bool subclasses int.
_STORAGE_TYPES: tuple[tuple[type, type[TypeEngine[Any]]], ...] = (
    (bool, Boolean),
    (int, Integer),
    (float, Float),
    (Decimal, Numeric),
    (str, Text),
    (bytes, LargeBinary),
    (datetime, DateTime),
    (date, Date),
    (time, Time),
)


def storage_type_for(value_type: Any) -> type[TypeEngine[Any]]:
    """Column type used for *value_type* when none is given; Text otherwise."""
    origin = get_origin(value_type) or value_type
    if isinstance(origin, type):
        for python_type, column_type in _STORAGE_TYPES:
            if issubclass(origin, python_type):
                return column_type
    return Text


class NullableType(TypeDecorator[Nullable[Any]]):
    """Column type mapping ``Nullable[value_type]`` to a storage column.

    Args:
        value_type: Element type of the containers read from this column.
        storage_type: Underlying column type; inferred from *value_type*
            when omitted.
    """

    impl = Text
    cache_ok = True

    def __init__(self, value_type: Any = None, storage_type: Any = None) -> None:
        super().__init__()
        self.value_type = value_type
        self.storage_type = storage_type

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        storage_type = self.storage_type or storage_type_for(self.value_type)
        if isinstance(storage_type, type):
            storage_type = storage_type()
        return dialect.type_descriptor(storage_type)

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if isinstance(value, Nullable):
            return value.to_storage()
        return value

    def process_result_value(self, value: Any, dialect: Dialect) -> Nullable[Any]:
        container: Nullable[Any] = Nullable(value_type=self.value_type)
        container.scan(value)
        return container

    @property
    def python_type(self) -> type:
        return Nullable
