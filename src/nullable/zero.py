"""Zero values: the deterministic placeholder held by an invalid container.

Every type gets one. Types without a natural zero fall back to their
no-argument construction, then to ``None``.
"""

from __future__ import annotations

import logging
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Union, get_origin

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_SCALAR_ZEROS: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    Decimal: Decimal(0),
    datetime: datetime.min,
    date: date.min,
    time: time.min,
    timedelta: timedelta(0),
}

_CONTAINERS = (list, dict, set, frozenset, tuple, bytearray)


def zero_value(value_type: Any) -> Any:
    """Return the zero value for *value_type*.

    Examples:
        >>> zero_value(int)
        0
        >>> zero_value(list[str])
        []
        >>> zero_value(int | None) is None
        True
    """
    if value_type is None or value_type is Any or value_type is object:
        return None

    origin = get_origin(value_type) or value_type
    if origin is Union or origin is types.UnionType:
        return None
    if not isinstance(origin, type):
        return None

    if origin in _SCALAR_ZEROS:
        return _SCALAR_ZEROS[origin]
    if origin in _CONTAINERS:
        return origin()
    if issubclass(origin, BaseModel):
        return origin.model_construct()
    try:
        return origin()
    except (TypeError, ValueError):
        logger.debug("No zero value for %s, using None", origin.__qualname__)
        return None
