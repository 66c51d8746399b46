"""
Command Dispatcher

A closed set of user commands handled in one place. Each command is
a small dataclass; dispatch() routes it to a handler and always
returns a CommandResult, never raises for expected outcomes.

Commands:
- AddItem / RemoveItem / ToggleSubmitted / ClearAll: saved-item lifecycle
- UseItem: copy a saved item into a working draft
- ExportEvent: one derived date as a calendar file
- ExportReminders: the two-event submission reminder file

Saves and exports are blocked unless the day off passes validation.
An export whose events would leave years 1-9999 reports OUT_OF_RANGE.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..models.civil_date import CivilDate, DateRangeError
from ..models.schedule import (
    AddStatus, CalendarEvent, Draft, ExportKind, ExportPayload,
    SavedItem, ScheduleResult, Verdict,
)
from .calendar_export import CalendarExporter
from .delivery import DeliverySink
from .reminder_planner import build_reminder_export
from .saved_items import SavedItemStore
from .schedule_calculator import MIN_NOTICE_DAYS, ScheduleCalculator
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)


# =============================================================================
# COMMANDS
# =============================================================================

@dataclass(frozen=True)
class AddItem:
    day_off: CivilDate
    label: str = ""


@dataclass(frozen=True)
class RemoveItem:
    item_id: str


@dataclass(frozen=True)
class ToggleSubmitted:
    item_id: str


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class UseItem:
    item_id: str


@dataclass(frozen=True)
class ExportEvent:
    kind: ExportKind
    day_off: CivilDate
    label: str = ""


@dataclass(frozen=True)
class ExportReminders:
    day_off: CivilDate
    label: str = ""


Command = Union[AddItem, RemoveItem, ToggleSubmitted, ClearAll, UseItem, ExportEvent, ExportReminders]


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class CommandResult:
    """Outcome of a dispatched command plus a user-facing status line."""
    ok: bool
    message: str
    verdict: Optional[Verdict] = None
    duplicate: bool = False
    item: Optional[SavedItem] = None
    draft: Optional[Draft] = None
    payload: Optional[ExportPayload] = None
    schedule: Optional[ScheduleResult] = None


VERDICT_MESSAGES = {
    Verdict.PAST: "That date is in the past.",
    Verdict.TOO_SOON: f"Pick a day off at least {MIN_NOTICE_DAYS} days from today.",
    Verdict.OUT_OF_RANGE: "That date is outside the supported calendar range.",
}


# =============================================================================
# DISPATCHER
# =============================================================================

class CommandDispatcher:
    """Routes commands to the stores, calculator and exporter."""

    def __init__(
        self,
        settings_store: SettingsStore,
        item_store: SavedItemStore,
        sink: DeliverySink,
        exporter: Optional[CalendarExporter] = None,
        today: Callable[[], CivilDate] = CivilDate.today,
    ):
        self.settings_store = settings_store
        self.item_store = item_store
        self.sink = sink
        self.exporter = exporter or CalendarExporter()
        self.today = today

        self._handlers = {
            AddItem: self._add_item,
            RemoveItem: self._remove_item,
            ToggleSubmitted: self._toggle_submitted,
            ClearAll: self._clear_all,
            UseItem: self._use_item,
            ExportEvent: self._export_event,
            ExportReminders: self._export_reminders,
        }

    def dispatch(self, command: Command) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")
        return handler(command)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _schedule(self, day_off: CivilDate) -> ScheduleResult:
        calculator = ScheduleCalculator(self.settings_store.load())
        return calculator.compute(day_off, self.today())

    def _rejected(self, schedule: ScheduleResult) -> CommandResult:
        logger.info(f"Day off {schedule.day_off} rejected: {schedule.verdict.value}")
        return CommandResult(
            ok=False,
            message=VERDICT_MESSAGES[schedule.verdict],
            verdict=schedule.verdict,
            schedule=schedule,
        )

    def _out_of_range(self, schedule: ScheduleResult, error: DateRangeError) -> CommandResult:
        logger.warning(f"Export for {schedule.day_off} out of range: {error}")
        return CommandResult(
            ok=False,
            message=VERDICT_MESSAGES[Verdict.OUT_OF_RANGE],
            verdict=Verdict.OUT_OF_RANGE,
            schedule=schedule,
        )

    def _deliver(self, payload: ExportPayload, schedule: ScheduleResult) -> CommandResult:
        try:
            self.sink.deliver_payload(payload)
        except Exception as e:
            logger.error(f"Delivering {payload.filename} failed: {e}")
            return CommandResult(
                ok=False,
                message="Export failed.",
                verdict=schedule.verdict,
                schedule=schedule,
                payload=payload,
            )
        return CommandResult(
            ok=True,
            message=f"Exported {payload.filename}.",
            verdict=schedule.verdict,
            schedule=schedule,
            payload=payload,
        )

    # -------------------------------------------------------------------------
    # Saved item commands
    # -------------------------------------------------------------------------

    def _add_item(self, command: AddItem) -> CommandResult:
        schedule = self._schedule(command.day_off)
        if not schedule.ok:
            return self._rejected(schedule)

        result = self.item_store.add(command.day_off, command.label)
        if result.status == AddStatus.DUPLICATE:
            return CommandResult(
                ok=False,
                message="That saved item already exists.",
                verdict=schedule.verdict,
                duplicate=True,
                schedule=schedule,
            )
        if result.status == AddStatus.WRITE_FAILED:
            return CommandResult(ok=False, message="Could not save.", verdict=schedule.verdict, schedule=schedule)

        return CommandResult(ok=True, message="Saved.", verdict=schedule.verdict, item=result.item, schedule=schedule)

    def _remove_item(self, command: RemoveItem) -> CommandResult:
        result = self.item_store.remove(command.item_id)
        if not result.ok:
            return CommandResult(ok=False, message="Could not delete.")
        return CommandResult(ok=True, message="Deleted.")

    def _toggle_submitted(self, command: ToggleSubmitted) -> CommandResult:
        result = self.item_store.toggle_submitted(command.item_id)
        if not result.ok:
            return CommandResult(ok=False, message="Could not update.")
        return CommandResult(ok=True, message="Updated.", item=self.item_store.get(command.item_id))

    def _clear_all(self, command: ClearAll) -> CommandResult:
        result = self.item_store.clear()
        if not result.ok:
            return CommandResult(ok=False, message="Could not clear saved dates.")
        return CommandResult(ok=True, message="Cleared all saved dates.")

    def _use_item(self, command: UseItem) -> CommandResult:
        item = self.item_store.get(command.item_id)
        if item is None:
            return CommandResult(ok=False, message="Saved item not found.")

        return CommandResult(
            ok=True,
            message="Loaded saved date.",
            item=item,
            draft=Draft(day_off=item.day_off, label=item.label),
            schedule=self._schedule(item.day_off),
        )

    # -------------------------------------------------------------------------
    # Export commands
    # -------------------------------------------------------------------------

    def _export_event(self, command: ExportEvent) -> CommandResult:
        if command.kind == ExportKind.REMINDERS:
            return self._export_reminders(ExportReminders(command.day_off, command.label))

        settings = self.settings_store.load()
        schedule = ScheduleCalculator(settings).compute(command.day_off, self.today())
        if not schedule.ok:
            return self._rejected(schedule)

        title = (command.label or "").strip() or "Day off"
        if command.kind == ExportKind.DAY_OFF:
            event = CalendarEvent(
                title=title,
                description=f"Day off: {schedule.day_off.format_long()} ({schedule.day_off})",
                date=schedule.day_off,
            )
        elif command.kind == ExportKind.SUBMIT_BY:
            event = CalendarEvent(
                title=f"Submit day-off request: {title}",
                description=(
                    f"Submit by {schedule.submit_by} for the day off on {schedule.day_off} "
                    f"({settings.advance_days} days notice)."
                ),
                date=schedule.submit_by,
                time=settings.submit_by_time,
            )
        else:
            event = CalendarEvent(
                title=f"Early reminder: {title}",
                description=(
                    f"Start the day-off paperwork for {schedule.day_off}.\n"
                    f"The submit-by deadline is {schedule.submit_by}."
                ),
                date=schedule.early_reminder,
                time=settings.early_time,
            )

        try:
            payload = self.exporter.export(command.kind.value, command.label, [event])
        except DateRangeError as e:
            return self._out_of_range(schedule, e)
        return self._deliver(payload, schedule)

    def _export_reminders(self, command: ExportReminders) -> CommandResult:
        settings = self.settings_store.load()
        schedule = ScheduleCalculator(settings).compute(command.day_off, self.today())
        if not schedule.ok:
            return self._rejected(schedule)

        try:
            payload = build_reminder_export(command.day_off, settings, command.label, self.exporter)
        except DateRangeError as e:
            return self._out_of_range(schedule, e)
        return self._deliver(payload, schedule)
