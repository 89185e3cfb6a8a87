"""Conversion of raw driver values into a requested element type.

Storage drivers hand back a narrow set of Python types (``int``,
``float``, ``str``, ``bytes``, ``Decimal`` and the ``datetime`` family).
:func:`convert_assign` maps those onto the element type of a nullable
column: a direct instance match first, then the well-known numeric,
text and temporal conversions.

``None`` is never passed here; storage-null is handled by the caller.
"""

from __future__ import annotations

import re
import types
from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, get_origin

from pydantic import BaseModel, ValidationError

from nullable.errors import ScanError

_INT_TEXT = re.compile(r"^[+-]?[0-9]+$")

_TRUE_TEXT = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TEXT = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _as_text(raw: Any) -> str | None:
    """Decode text-like raw values, or None if *raw* is not text-like."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, _BYTES_LIKE):
        return bytes(raw).decode("utf-8")
    return None


def _to_str(raw: Any, parse_text: bool) -> str:
    if isinstance(raw, _BYTES_LIKE):
        return bytes(raw).decode("utf-8")
    if isinstance(raw, (datetime, date, time)):
        return raw.isoformat()
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (int, float, Decimal)):
        return str(raw)
    raise ScanError(type(raw), str)


def _to_bytes(raw: Any, parse_text: bool) -> bytes:
    if isinstance(raw, _BYTES_LIKE):
        return bytes(raw)
    if isinstance(raw, str):
        return raw.encode("utf-8")
    if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
        return str(raw).encode("ascii")
    raise ScanError(type(raw), bytes)


def _to_bool(raw: Any, parse_text: bool) -> bool:
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    text = _as_text(raw) if parse_text else None
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise ScanError(type(raw), bool, f"invalid boolean {raw!r}")


def _is_integral(raw: float | Decimal) -> bool:
    if isinstance(raw, Decimal):
        return raw.is_finite() and raw == raw.to_integral_value()
    return raw.is_integer()


def _to_int(raw: Any, parse_text: bool) -> int:
    if isinstance(raw, (float, Decimal)):
        if _is_integral(raw):
            return int(raw)
        raise ScanError(type(raw), int, f"{raw!r} is not integral")
    text = _as_text(raw) if parse_text else None
    if text is not None and _INT_TEXT.match(text):
        return int(text)
    raise ScanError(type(raw), int, f"invalid integer {raw!r}")


def _to_float(raw: Any, parse_text: bool) -> float:
    if isinstance(raw, (int, Decimal)) and not isinstance(raw, bool):
        return float(raw)
    text = _as_text(raw) if parse_text else None
    if text is not None:
        try:
            return float(text)
        except ValueError:
            pass
    raise ScanError(type(raw), float, f"invalid number {raw!r}")


def _to_decimal(raw: Any, parse_text: bool) -> Decimal:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return Decimal(str(raw))
    text = _as_text(raw) if parse_text else None
    if text is not None:
        try:
            return Decimal(text)
        except InvalidOperation:
            pass
    raise ScanError(type(raw), Decimal, f"invalid decimal {raw!r}")


def _temporal(target: type, parse: Callable[[str], Any]) -> Callable[[Any, bool], Any]:
    def convert(raw: Any, parse_text: bool) -> Any:
        text = _as_text(raw) if parse_text else None
        if text is not None:
            try:
                return parse(text)
            except ValueError as exc:
                raise ScanError(type(raw), target, str(exc)) from exc
        raise ScanError(type(raw), target)

    return convert


def _to_date(raw: Any, parse_text: bool) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    return _temporal(date, date.fromisoformat)(raw, parse_text)


_CONVERTERS: dict[type, Callable[[Any, bool], Any]] = {
    str: _to_str,
    bytes: _to_bytes,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    Decimal: _to_decimal,
    datetime: _temporal(datetime, datetime.fromisoformat),
    date: _to_date,
    time: _temporal(time, time.fromisoformat),
}


def _exact_match(raw: Any, target: type) -> bool:
    # bool subclasses int, so both need the exact type here.
    if target is int or target is bool:
        return type(raw) is target
    if target is date:
        return isinstance(raw, date) and not isinstance(raw, datetime)
    return isinstance(raw, target)


def convert_assign(value_type: Any, raw: Any, *, parse_text: bool = True) -> Any:
    """Convert a non-null driver value *raw* into *value_type*.

    Args:
        value_type: Target element type. ``None``, ``Any`` and ``object``
            accept the raw value unchanged.
        raw: The value produced by the storage driver.
        parse_text: Parse ``str``/``bytes`` into numeric, boolean and
            temporal types. When False, text only converts to text.

    Returns:
        The converted value.

    Raises:
        ScanError: If *raw* cannot be represented as *value_type*.
    """
    if value_type is None or value_type is Any or value_type is object:
        return raw

    target = get_origin(value_type) or value_type
    if target is types.UnionType or not isinstance(target, type):
        raise ScanError(type(raw), value_type, "unsupported target type")

    if _exact_match(raw, target):
        return raw

    converter = _CONVERTERS.get(target)
    if converter is not None:
        try:
            return converter(raw, parse_text)
        except UnicodeDecodeError as exc:
            raise ScanError(type(raw), value_type, "invalid utf-8") from exc

    if issubclass(target, Enum):
        try:
            return target(raw)
        except ValueError as exc:
            raise ScanError(type(raw), value_type, str(exc)) from exc

    if issubclass(target, BaseModel):
        try:
            if isinstance(raw, Mapping):
                return target.model_validate(raw)
            if isinstance(raw, str):
                return target.model_validate_json(raw)
            if isinstance(raw, _BYTES_LIKE):
                return target.model_validate_json(bytes(raw))
        except ValidationError as exc:
            raise ScanError(type(raw), value_type, "invalid record") from exc

    raise ScanError(type(raw), value_type)
