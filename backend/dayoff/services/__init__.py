"""
Day-Off Planner Services

Scheduling & export engine:
- SettingsStore / SavedItemStore: validated state over a key-value boundary
- ScheduleCalculator: submit-by, early reminder, notice verdict
- CalendarExporter / plan_reminders: iCalendar output
- CommandDispatcher: the closed command set used by the API and scripts
"""

from .persistence import KeyValueStore, InMemoryKeyValueStore, SqlKeyValueStore, PersistenceError
from .settings_store import SettingsStore, SETTINGS_KEY
from .saved_items import SavedItemStore, SAVED_ITEMS_KEY
from .schedule_calculator import (
    ScheduleCalculator,
    MIN_NOTICE_DAYS,
    submit_by,
    early_reminder,
    earliest_day_off,
    validate_day_off,
)
from .calendar_export import CalendarExporter, escape_text, suggest_filename
from .reminder_planner import plan_reminders, build_reminder_export
from .delivery import DeliverySink, DirectorySink, ResponseSink
from .dispatcher import (
    CommandDispatcher,
    CommandResult,
    AddItem,
    RemoveItem,
    ToggleSubmitted,
    ClearAll,
    UseItem,
    ExportEvent,
    ExportReminders,
)

__all__ = [
    # Persistence
    'KeyValueStore',
    'InMemoryKeyValueStore',
    'SqlKeyValueStore',
    'PersistenceError',
    # Stores
    'SettingsStore',
    'SETTINGS_KEY',
    'SavedItemStore',
    'SAVED_ITEMS_KEY',
    # Calculator
    'ScheduleCalculator',
    'MIN_NOTICE_DAYS',
    'submit_by',
    'early_reminder',
    'earliest_day_off',
    'validate_day_off',
    # Export
    'CalendarExporter',
    'escape_text',
    'suggest_filename',
    'plan_reminders',
    'build_reminder_export',
    'DeliverySink',
    'DirectorySink',
    'ResponseSink',
    # Commands
    'CommandDispatcher',
    'CommandResult',
    'AddItem',
    'RemoveItem',
    'ToggleSubmitted',
    'ClearAll',
    'UseItem',
    'ExportEvent',
    'ExportReminders',
]
