"""nullable — a value-or-null container for JSON and SQL boundaries."""

from nullable.errors import DecodeError, NullableError, ScanError
from nullable.storage.types import NullableType
from nullable.value import Nullable
from nullable.zero import zero_value

__all__ = [
    "DecodeError",
    "Nullable",
    "NullableError",
    "NullableType",
    "ScanError",
    "zero_value",
]
