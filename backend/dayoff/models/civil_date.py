"""
Civil Date Value Type

A calendar date with no time-of-day and no timezone attached.
Arithmetic goes through calendar ordinals, never through instants,
so a date reads the same wherever and whenever the code runs.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


# Exactly YYYY-MM-DD, ASCII digits only; used with fullmatch
ISO_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

class DateRangeError(ValueError):
    """Date arithmetic left the representable range (years 1-9999)."""
    pass


WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True, order=True)
class CivilDate:
    """
    Calendar date ordered lexicographically on (year, month, day).

    Instances are always valid calendar dates; construction with an
    impossible day (e.g. Feb 30) raises ValueError. Use parse() for
    untrusted text.
    """
    year: int
    month: int
    day: int

    def __post_init__(self):
        # Raises ValueError for out-of-range components
        date(self.year, self.month, self.day)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_date(cls, value: date) -> "CivilDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "CivilDate":
        """Current local calendar date at call time."""
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, text: Any) -> Optional["CivilDate"]:
        """
        Parse "YYYY-MM-DD" into a CivilDate.

        Returns None for anything else: wrong shape, zero components,
        or a date that does not exist on the calendar. Never raises.
        """
        if not isinstance(text, str):
            return None

        match = ISO_DATE_PATTERN.fullmatch(text)
        if not match:
            return None

        year, month, day = (int(part) for part in match.groups())
        if not year or not month or not day:
            return None

        try:
            return cls(year, month, day)
        except ValueError:
            return None

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def format(self) -> str:
        """Zero-padded YYYY-MM-DD."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def format_compact(self) -> str:
        """YYYYMMDD, as used by calendar VALUE=DATE fields."""
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    def format_long(self) -> str:
        """Human-readable form, e.g. "Fri, Mar 1, 2024"."""
        weekday = WEEKDAY_ABBR[self.to_date().weekday()]
        return f"{weekday}, {MONTH_ABBR[self.month - 1]} {self.day}, {self.year}"

    def __str__(self) -> str:
        return self.format()

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add_days(self, days: int) -> "CivilDate":
        """
        New date `days` calendar days away; negative moves backwards.

        Raises DateRangeError when the result falls outside years 1-9999.
        """
        try:
            return CivilDate.from_date(date.fromordinal(self.to_date().toordinal() + days))
        except (ValueError, OverflowError) as e:
            raise DateRangeError(f"{self} {days:+d} days is outside years 1-9999") from e

    def compare(self, other: "CivilDate") -> int:
        """-1, 0 or 1 by (year, month, day)."""
        if self < other:
            return -1
        if self > other:
            return 1
        return 0


def days_between(start: CivilDate, end: CivilDate) -> int:
    """Whole calendar days from start to end (end - start)."""
    return end.to_date().toordinal() - start.to_date().toordinal()
