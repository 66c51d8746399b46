"""Day-Off Planner - Data Models"""
from .civil_date import CivilDate, DateRangeError, days_between
from .schedule import (
    # Enums
    Verdict, AddStatus, ExportKind,
    # Settings
    Settings, DEFAULT_SETTINGS,
    # Saved items
    SavedItem, Draft, AddResult, WriteResult,
    # Schedule
    ScheduleResult,
    # Export
    CalendarEvent, ExportPayload,
)

__all__ = [
    "CivilDate", "DateRangeError", "days_between",
    "Verdict", "AddStatus", "ExportKind",
    "Settings", "DEFAULT_SETTINGS",
    "SavedItem", "Draft", "AddResult", "WriteResult",
    "ScheduleResult",
    "CalendarEvent", "ExportPayload",
]
