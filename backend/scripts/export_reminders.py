#!/usr/bin/env python3
"""
Reminder Export Script
Writes the two-event submission reminder calendar for a day off.

Usage:
    python -m scripts.export_reminders <YYYY-MM-DD> [label]

The file is written to DAYOFF_EXPORT_DIR (default: current directory).
Settings come from the planner database (DATABASE_URL).

Example:
    python -m scripts.export_reminders 2024-03-01 "Dentist"
"""
import sys
import os

# Add the parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session
from dayoff.database import SessionLocal, init_db
from dayoff.models.civil_date import CivilDate
from dayoff.services import (
    CommandDispatcher,
    DirectorySink,
    ExportReminders,
    SavedItemStore,
    SettingsStore,
    SqlKeyValueStore,
)

EXPORT_DIR = os.getenv("DAYOFF_EXPORT_DIR", ".")


def export_reminders(day_off: CivilDate, label: str, directory: str = EXPORT_DIR) -> bool:
    """Build and write the reminder file; returns False when blocked."""
    init_db()

    db: Session = SessionLocal()
    try:
        kv = SqlKeyValueStore(db)
        dispatcher = CommandDispatcher(
            settings_store=SettingsStore(kv),
            item_store=SavedItemStore(kv),
            sink=DirectorySink(directory),
        )
        result = dispatcher.dispatch(ExportReminders(day_off=day_off, label=label))

        if not result.ok:
            print(f"Error: {result.message}")
            return False

        schedule = result.schedule
        print(result.message)
        print(f"  Day off:        {schedule.day_off.format_long()} ({schedule.day_off})")
        print(f"  Submit by:      {schedule.submit_by.format_long()} ({schedule.submit_by})")
        print(f"  Early reminder: {schedule.early_reminder.format_long()} ({schedule.early_reminder})")
        if schedule.early_reminder_elapsed:
            print("  Note: the early reminder date has already passed.")
        return True
    finally:
        db.close()


def main():
    if len(sys.argv) not in (2, 3):
        print(__doc__)
        sys.exit(1)

    day_off = CivilDate.parse(sys.argv[1])
    if day_off is None:
        print("Error: Day off must be a date in YYYY-MM-DD form.")
        sys.exit(1)

    label = sys.argv[2] if len(sys.argv) == 3 else ""

    success = export_reminders(day_off, label)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
