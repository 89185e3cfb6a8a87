"""Error types raised at the two serialization boundaries.

Only conversion failures are errors. Construction and accessors never
raise; encode only fails when the element type itself refuses to serialize.
"""

from __future__ import annotations

from typing import Any


def type_name(value_type: Any) -> str:
    """Readable name for a runtime type, generic alias, or ``None``."""
    if value_type is None:
        return "Any"
    if isinstance(value_type, type):
        return value_type.__qualname__
    return repr(value_type)


class NullableError(Exception):
    """Base class for all nullable conversion errors."""


class DecodeError(NullableError, ValueError):
    """JSON text could not be decoded into the element type.

    Attributes:
        value_type: The element type decoding was attempted into.
        errors: pydantic's structured error list (empty if unavailable).
    """

    def __init__(
        self,
        message: str,
        *,
        value_type: Any = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.value_type = value_type
        self.errors = errors or []


class ScanError(NullableError, TypeError):
    """A raw storage value could not be converted into the element type."""

    def __init__(self, source_type: type, target_type: Any, reason: str | None = None) -> None:
        msg = f"cannot scan {type_name(source_type)} into {type_name(target_type)}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.source_type = source_type
        self.target_type = target_type
