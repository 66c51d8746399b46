"""
Day-Off Planner - Domain Models

Settings, saved requests, calendar events and the typed outcomes
returned by the stores and the calculator. Expected failures are
modelled as values here, not raised.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .civil_date import CivilDate


# =============================================================================
# ENUMS
# =============================================================================

class Verdict(str, Enum):
    """Advance-notice verdict for a candidate day-off date."""
    OK = "OK"
    PAST = "PAST"
    TOO_SOON = "TOO_SOON"
    OUT_OF_RANGE = "OUT_OF_RANGE"  # derived dates fall outside years 1-9999


class AddStatus(str, Enum):
    """Outcome of adding a saved item."""
    ADDED = "ADDED"
    DUPLICATE = "DUPLICATE"
    WRITE_FAILED = "WRITE_FAILED"


class ExportKind(str, Enum):
    """Which derived date (or reminder pair) an export covers."""
    DAY_OFF = "day_off"
    SUBMIT_BY = "submit_by"
    EARLY_REMINDER = "early_reminder"
    REMINDERS = "reminders"


# =============================================================================
# SETTINGS
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """Policy parameters. Persisted with camelCase keys."""
    advance_days: int = 30
    early_extra_days: int = 2
    submit_by_time: str = "09:00"
    early_time: str = "09:00"

    @property
    def early_offset_days(self) -> int:
        return self.advance_days + self.early_extra_days

    def to_dict(self) -> Dict[str, Any]:
        return {
            "advanceDays": self.advance_days,
            "earlyExtraDays": self.early_extra_days,
            "submitByTime": self.submit_by_time,
            "earlyTime": self.early_time,
        }


DEFAULT_SETTINGS = Settings()


# =============================================================================
# SAVED ITEMS
# =============================================================================

@dataclass(frozen=True)
class SavedItem:
    """A persisted day-off request."""
    id: str
    day_off: CivilDate
    label: str = ""
    submitted: bool = False

    @property
    def display_title(self) -> str:
        return self.label.strip() or "Day off"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "dayOff": self.day_off.format(),
            "label": self.label,
            "submitted": self.submitted,
        }


@dataclass(frozen=True)
class Draft:
    """Transient copy of a saved item used to populate an edit form."""
    day_off: CivilDate
    label: str


@dataclass
class AddResult:
    """Tagged result of SavedItemStore.add."""
    status: AddStatus
    item: Optional[SavedItem] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == AddStatus.ADDED


@dataclass
class WriteResult:
    """Whether a write reached the persistence boundary."""
    ok: bool
    changed: bool = False
    error: Optional[str] = None


# =============================================================================
# SCHEDULE
# =============================================================================

@dataclass(frozen=True)
class ScheduleResult:
    """
    Derived dates and verdict for one day-off date.

    With an OUT_OF_RANGE verdict the derived dates do not exist and
    submit_by, early_reminder and days_until_submit_by are None.
    """
    day_off: CivilDate
    submit_by: Optional[CivilDate]
    early_reminder: Optional[CivilDate]
    verdict: Verdict
    early_reminder_elapsed: bool
    days_until_submit_by: Optional[int]
    reference_today: CivilDate

    @property
    def ok(self) -> bool:
        return self.verdict == Verdict.OK


# =============================================================================
# CALENDAR EXPORT
# =============================================================================

@dataclass(frozen=True)
class CalendarEvent:
    """
    Export-only event. Without `time` the event is all-day; with a
    "HH:MM" time it is a one-hour event at that local time.
    """
    title: str
    description: str
    date: CivilDate
    time: Optional[str] = None

    @property
    def all_day(self) -> bool:
        return self.time is None


@dataclass(frozen=True)
class ExportPayload:
    """Calendar text plus the filename it should be delivered under."""
    filename: str
    content: str
    mime_type: str = "text/calendar"
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)
