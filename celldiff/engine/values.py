"""
Tagged cell values and their normalization to text.

Cells are compared as text. Every raw value a workbook parser hands over is
first tagged with its kind, then converted by one total function so that
the conversion is the same whichever parser produced the value.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


class ValueKind(str, Enum):
    """Kinds of value a cell can hold."""
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATE = "date"


@dataclass(frozen=True)
class CellValue:
    """A cell value tagged with its kind."""
    kind: ValueKind
    raw: Any

    @classmethod
    def from_raw(cls, value: Any) -> Optional['CellValue']:
        """
        Tag a raw parser value.

        Returns:
            CellValue, or None when the cell has no stored value. An empty
            string is a stored value and is kept.
        """
        if value is None:
            return None

        # bool before number: bool is an int subclass
        if isinstance(value, bool):
            return cls(ValueKind.BOOLEAN, value)
        if isinstance(value, (int, float, Decimal)):
            return cls(ValueKind.NUMBER, value)
        if isinstance(value, (datetime, date, time, timedelta)):
            return cls(ValueKind.DATE, value)
        if isinstance(value, str):
            return cls(ValueKind.TEXT, value)

        logger.debug(f"Treating {type(value).__name__} cell value as text")
        return cls(ValueKind.TEXT, str(value))

    def to_text(self) -> str:
        """Normalized text used for comparison and display."""
        if self.kind is ValueKind.BOOLEAN:
            return "TRUE" if self.raw else "FALSE"
        if self.kind is ValueKind.NUMBER:
            return normalize_number(self.raw)
        if self.kind is ValueKind.DATE:
            return normalize_date(self.raw)
        return normalize_string(self.raw)


def normalize_number(value: Any) -> str:
    """
    Normalize a numeric value.

    Integers (and integral floats) print without a decimal point; other
    floats use the shortest text that round-trips.
    """
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return str(int(value))
        return str(value.normalize())

    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return repr(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)

    return str(value)


def normalize_date(value: Any) -> str:
    """ISO 8601 text for date and time values."""
    if isinstance(value, timedelta):
        return str(value)
    return value.isoformat()


def normalize_string(value: str) -> str:
    """Fold CRLF and CR line endings to LF, otherwise keep the text as-is."""
    return value.replace("\r\n", "\n").replace("\r", "\n")


def normalize_cell_value(value: Any) -> Optional[str]:
    """Normalize a raw value to text, or None when the cell holds nothing."""
    tagged = CellValue.from_raw(value)
    if tagged is None:
        return None
    return tagged.to_text()
