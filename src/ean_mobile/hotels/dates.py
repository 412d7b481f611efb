"""Date helpers for the fixed textual formats used by the booking API."""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

API_DATE_FORMAT = "%m/%d/%Y"
API_TIME_FORMAT = "%H:%M:%S"


class DateFormatError(ValueError):
    """Raised when a load-bearing date field cannot be parsed."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid {field} {value!r}; expected MM/DD/YYYY")
        self.field = field
        self.value = value


def parse_api_date(value: Optional[str], *, field: str = "date") -> date:
    if not value or not isinstance(value, str):
        raise DateFormatError(field, value)
    try:
        return datetime.strptime(value.strip(), API_DATE_FORMAT).date()
    except ValueError as exc:
        raise DateFormatError(field, value) from exc


def parse_api_time(value: Optional[str], default: time = time(0, 0)) -> time:
    if not value:
        return default
    try:
        return datetime.strptime(value.strip(), API_TIME_FORMAT).time()
    except ValueError:
        return default
