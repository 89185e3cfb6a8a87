"""StorageNull — a null-aware scan target for one column value.

The cell pairs a value with a validity flag and knows its element type,
so a raw driver value can be scanned into it. :class:`~nullable.value.Nullable`
holds one of these as its state.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from nullable.errors import ScanError
from nullable.storage.convert import convert_assign
from nullable.zero import zero_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageNull(Generic[T]):
    """Value plus validity flag, scannable from raw driver values.

    Attributes:
        value_type: Element type, or None for "any".
        value: Current value; the zero value of *value_type* when invalid.
        valid: Whether *value* represents a present value.
    """

    def __init__(self, value_type: Any = None, value: Any = None, valid: bool = False) -> None:
        if not valid and value is None:
            value = zero_value(value_type)
        self.value_type = value_type
        self.value = value
        self.valid = valid

    def reset(self) -> None:
        """Mark the cell null and restore the zero value."""
        self.value = zero_value(self.value_type)
        self.valid = False

    def scan(self, raw: Any, *, parse_text: bool = True) -> None:
        """Scan a raw driver value into the cell.

        ``None`` resets the cell to null. Any other value flags the cell
        valid before conversion; a failed conversion leaves the flag set
        and the previous value in place.

        Raises:
            ScanError: If *raw* cannot be converted to the element type.
        """
        if raw is None:
            self.reset()
            return

        self.valid = True
        try:
            self.value = convert_assign(self.value_type, raw, parse_text=parse_text)
        except ScanError:
            logger.debug("Scan failed for %r", raw, exc_info=True)
            raise

    def driver_value(self) -> T | None:
        """Value to bind as a statement parameter; None (SQL NULL) when invalid."""
        if not self.valid:
            return None
        return self.value

    def __repr__(self) -> str:
        return f"StorageNull(value={self.value!r}, valid={self.valid})"
