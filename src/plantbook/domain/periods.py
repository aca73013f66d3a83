"""Calendar periods used to bucket and key monthly figures."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

_NUMERIC_PERIOD = re.compile(r"^(\d{4})-(\d{1,2})$")
_SHORT_KEY = re.compile(r"^([A-Za-z]{3})-(\d{2})$")
_NAMED_PERIOD = re.compile(r"^([A-Za-z]+)\s+(\d{4})$")


def month_number(name: str) -> int:
    """Return the 1-based month number for a full or abbreviated month name.

    Raises:
        ValueError: If the name is not a month
    """
    cleaned = name.strip().lower()
    for index, full_name in enumerate(MONTH_NAMES, start=1):
        if cleaned in (full_name.lower(), full_name[:3].lower()):
            return index
    raise ValueError(f"Unknown month name: '{name}'")


@dataclass(frozen=True, order=True)
class Period:
    """A (year, month) pair identifying one monthly bucket or snapshot."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "Period":
        return cls(value.year, value.month)

    @classmethod
    def from_month_name(cls, year: int, month_name: str) -> "Period":
        return cls(int(year), month_number(month_name))

    @classmethod
    def parse(cls, text: str) -> "Period":
        """Parse a period string.

        Accepts "2025-02", "February 2025", "Feb 2025" and "Feb-25".

        Raises:
            ValueError: If the string is not a recognised period
        """
        value = text.strip()

        match = _NUMERIC_PERIOD.match(value)
        if match:
            return cls(int(match.group(1)), int(match.group(2)))

        match = _SHORT_KEY.match(value)
        if match:
            return cls(2000 + int(match.group(2)), month_number(match.group(1)))

        match = _NAMED_PERIOD.match(value)
        if match:
            return cls(int(match.group(2)), month_number(match.group(1)))

        raise ValueError(
            f"Could not parse period '{text}'. Use YYYY-MM, 'February 2025' or 'Feb-25'"
        )

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def key(self) -> str:
        """Display key such as "Feb-25". Not chronologically sortable."""
        return f"{MONTH_ABBREVIATIONS[self.month - 1]}-{self.year % 100:02d}"

    @property
    def label(self) -> str:
        return f"{self.month_name} {self.year}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class PeriodFilter:
    """Optional month and/or year restriction applied per record."""

    month: Optional[int] = None
    year: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.month is None and self.year is None

    def matches(self, value: Optional[date]) -> bool:
        if self.is_empty:
            return True
        if value is None:
            return False
        if self.month is not None and value.month != self.month:
            return False
        if self.year is not None and value.year != self.year:
            return False
        return True

    def date_range(self) -> tuple[Optional[date], Optional[date]]:
        """Return the widest (start, end) date range the filter can match.

        Used to narrow store queries; month-only filters span every year, so
        they return an open range and rely on ``matches`` per record.
        """
        if self.year is None:
            return None, None
        if self.month is None:
            return date(self.year, 1, 1), date(self.year, 12, 31)
        period = Period(self.year, self.month)
        return period.first_day, period.last_day


def parse_salary_month(value: Optional[str]) -> Optional[date]:
    """Anchor a "YYYY-MM" salary period to the first day of that month.

    Returns None when the value is missing or malformed.
    """
    if not value:
        return None
    match = _NUMERIC_PERIOD.match(value.strip())
    if not match:
        return None
    month = int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return date(int(match.group(1)), month, 1)
