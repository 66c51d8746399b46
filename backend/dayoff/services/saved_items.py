"""
Saved Item Store

CRUD over the persisted day-off requests. The whole collection lives
under one key; every mutation is a single load -> mutate -> save
against the boundary before returning, so there is no cached copy
that could drift from what was actually written.
"""
import json
import logging
from typing import Any, Callable, List, Optional
from uuid import uuid4

from ..models.civil_date import CivilDate
from ..models.schedule import AddResult, AddStatus, SavedItem, WriteResult
from .persistence import KeyValueStore

logger = logging.getLogger(__name__)


SAVED_ITEMS_KEY = "dayoff_saved_v1"


def item_from_raw(raw: Any) -> Optional[SavedItem]:
    """Decode one stored record; None if the id or date is unusable."""
    if not isinstance(raw, dict):
        return None

    item_id = raw.get("id")
    day_off = CivilDate.parse(raw.get("dayOff"))
    if not isinstance(item_id, str) or not item_id or day_off is None:
        return None

    label = raw.get("label")
    submitted = raw.get("submitted")
    return SavedItem(
        id=item_id,
        day_off=day_off,
        label=label if isinstance(label, str) else "",
        submitted=submitted if isinstance(submitted, bool) else False,
    )


class SavedItemStore:
    """
    Owner of the saved-item collection.

    Uniqueness is on (day_off, label). Items are only ever changed by
    toggling `submitted` or by deletion.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        key: str = SAVED_ITEMS_KEY,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self.kv = kv_store
        self.key = key
        self.id_factory = id_factory

    # -------------------------------------------------------------------------
    # Boundary I/O
    # -------------------------------------------------------------------------

    def _load(self) -> List[SavedItem]:
        """Stored items in insertion order; boundary failures read as empty."""
        try:
            raw_text = self.kv.get(self.key)
        except Exception as e:
            logger.error(f"Saved items read failed, treating as empty: {e}")
            return []

        if not raw_text:
            return []

        try:
            raw = json.loads(raw_text)
        except ValueError:
            logger.warning("Stored saved items are not valid JSON, treating as empty")
            return []

        if not isinstance(raw, list):
            return []

        items = []
        for entry in raw:
            item = item_from_raw(entry)
            if item is None:
                logger.warning(f"Skipping malformed saved item: {entry!r}")
                continue
            items.append(item)
        return items

    def _save(self, items: List[SavedItem]) -> Optional[str]:
        """Write the full collection; returns an error message on failure."""
        try:
            self.kv.set(self.key, json.dumps([item.to_dict() for item in items]))
        except Exception as e:
            logger.error(f"Saved items write failed: {e}")
            return str(e)
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, day_off: CivilDate, label: str = "") -> AddResult:
        label = label or ""
        items = self._load()

        if any(x.day_off == day_off and x.label == label for x in items):
            logger.info(f"Duplicate saved item rejected: {day_off} / {label!r}")
            return AddResult(status=AddStatus.DUPLICATE)

        item = SavedItem(id=self.id_factory(), day_off=day_off, label=label)
        error = self._save(items + [item])
        if error:
            return AddResult(status=AddStatus.WRITE_FAILED, error=error)

        logger.info(f"Saved item {item.id} for {day_off}")
        return AddResult(status=AddStatus.ADDED, item=item)

    def remove(self, item_id: str) -> WriteResult:
        items = self._load()
        remaining = [x for x in items if x.id != item_id]
        if len(remaining) == len(items):
            return WriteResult(ok=True, changed=False)

        error = self._save(remaining)
        if error:
            return WriteResult(ok=False, error=error)

        logger.info(f"Deleted saved item {item_id}")
        return WriteResult(ok=True, changed=True)

    def toggle_submitted(self, item_id: str) -> WriteResult:
        items = self._load()
        if not any(x.id == item_id for x in items):
            return WriteResult(ok=True, changed=False)

        updated = [
            SavedItem(id=x.id, day_off=x.day_off, label=x.label, submitted=not x.submitted)
            if x.id == item_id else x
            for x in items
        ]
        error = self._save(updated)
        if error:
            return WriteResult(ok=False, error=error)
        return WriteResult(ok=True, changed=True)

    def get(self, item_id: str) -> Optional[SavedItem]:
        return next((x for x in self._load() if x.id == item_id), None)

    def list(self) -> List[SavedItem]:
        """Ascending by day off; equal dates keep insertion order."""
        return sorted(self._load(), key=lambda x: x.day_off)

    def clear(self) -> WriteResult:
        try:
            self.kv.remove(self.key)
        except Exception as e:
            logger.error(f"Clearing saved items failed: {e}")
            return WriteResult(ok=False, error=str(e))

        logger.info("Cleared all saved items")
        return WriteResult(ok=True, changed=True)
