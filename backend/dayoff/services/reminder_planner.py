"""
Reminder Planner

Turns a day-off date into the two "submission reminder" calendar
events: the early paperwork nudge and the stamped-form deadline.
Each description repeats the policy values so the exported file is
readable without the settings that produced it.
"""
from typing import Optional, Tuple

from ..models.civil_date import CivilDate
from ..models.schedule import CalendarEvent, ExportKind, ExportPayload, Settings
from .calendar_export import CalendarExporter
from .schedule_calculator import early_reminder, submit_by


EARLY_TITLE = "Submit day-off paperwork"
DEADLINE_TITLE = "Deadline: stamped day-off form due"


def _titled(base: str, label: Optional[str]) -> str:
    label = (label or "").strip()
    return f"{base} ({label})" if label else base


def _policy_lines(day_off: CivilDate, settings: Settings) -> str:
    deadline = submit_by(day_off, settings)
    early = early_reminder(day_off, settings)
    return "\n".join([
        f"Day off: {day_off.format_long()} ({day_off})",
        f"Submit by: {deadline.format_long()} ({deadline}) - {settings.advance_days} days notice",
        f"Early reminder: {early.format_long()} ({early}) - "
        f"{settings.advance_days} + {settings.early_extra_days} days before the day off",
    ])


def plan_reminders(
    day_off: CivilDate,
    settings: Settings,
    label: Optional[str] = "",
) -> Tuple[CalendarEvent, CalendarEvent]:
    """
    (early reminder, deadline), always in that order.

    The early event is returned even when its date has already passed;
    callers that care check ScheduleResult.early_reminder_elapsed.
    """
    policy = _policy_lines(day_off, settings)

    early_event = CalendarEvent(
        title=_titled(EARLY_TITLE, label),
        description=(
            f"Get the day-off request form filled in and signed.\n"
            f"The hard deadline is {settings.early_extra_days} day(s) later.\n{policy}"
        ),
        date=early_reminder(day_off, settings),
        time=settings.early_time,
    )
    deadline_event = CalendarEvent(
        title=_titled(DEADLINE_TITLE, label),
        description=(
            f"Last day to hand in the stamped day-off form.\n{policy}"
        ),
        date=submit_by(day_off, settings),
        time=settings.submit_by_time,
    )
    return early_event, deadline_event


def build_reminder_export(
    day_off: CivilDate,
    settings: Settings,
    label: Optional[str] = "",
    exporter: Optional[CalendarExporter] = None,
) -> ExportPayload:
    """Two-event calendar file named after the day-off date."""
    exporter = exporter or CalendarExporter()
    events = list(plan_reminders(day_off, settings, label))
    return exporter.export(ExportKind.REMINDERS.value, label, events, file_date=day_off)
