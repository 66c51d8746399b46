"""
Day-Off Planner - FastAPI Dependencies
Store wiring, reference date and request date parsing
"""
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from .database import get_db
from .models.civil_date import CivilDate
from .services import (
    CommandDispatcher,
    KeyValueStore,
    ResponseSink,
    SavedItemStore,
    SettingsStore,
    SqlKeyValueStore,
)


def get_kv_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)


def get_settings_store(kv: KeyValueStore = Depends(get_kv_store)) -> SettingsStore:
    return SettingsStore(kv)


def get_item_store(kv: KeyValueStore = Depends(get_kv_store)) -> SavedItemStore:
    return SavedItemStore(kv)


def get_today() -> CivilDate:
    """Reference date for validation; overridden in tests."""
    return CivilDate.today()


def get_sink() -> ResponseSink:
    return ResponseSink()


def get_dispatcher(
    settings_store: SettingsStore = Depends(get_settings_store),
    item_store: SavedItemStore = Depends(get_item_store),
    sink: ResponseSink = Depends(get_sink),
    today: CivilDate = Depends(get_today),
) -> CommandDispatcher:
    return CommandDispatcher(
        settings_store=settings_store,
        item_store=item_store,
        sink=sink,
        today=lambda: today,
    )


def parse_date_param(value: str, name: str = "date") -> CivilDate:
    """Parse a YYYY-MM-DD request value or answer 422."""
    parsed = CivilDate.parse(value)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {name} '{value}', expected YYYY-MM-DD",
        )
    return parsed
