"""
Excel serial dates.

Excel stores dates as days since 1899-12-30 (serial 25569 is 1970-01-01).
Cells formatted as dates usually arrive from openpyxl as datetime already;
plain number cells arrive as the raw serial.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

EXCEL_EPOCH = datetime(1899, 12, 30)


def serial_to_date(serial: float) -> date:
    """Whole days only; a time-of-day fraction is dropped."""
    try:
        return (EXCEL_EPOCH + timedelta(days=float(serial))).date()
    except OverflowError:
        # outside datetime's range (a phone number typed into a date cell)
        raise ValueError(f"Not a date: {serial!r}") from None


def excel_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a date: {value!r}")
    if isinstance(value, (int, float)):
        return serial_to_date(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return serial_to_date(float(text))
        except ValueError:
            return date.fromisoformat(text[:10])
    raise ValueError(f"Not a date: {value!r}")
