"""
Persistence Boundary

Key-value storage for JSON-encoded payloads. The stores above this
layer only ever call get/set/remove, so any backend that honours
those three calls can be injected.

Implementations:
- InMemoryKeyValueStore: dict-backed, for tests and scripts
- SqlKeyValueStore: SQLAlchemy session over the kv_store table
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.db_models import KeyValueDB

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the underlying storage rejects a read or write."""


class KeyValueStore(ABC):
    """get(key) -> text | None, set(key, text), remove(key)."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """
    Key-value store on the kv_store table.

    Every write commits before returning so a following read in any
    session observes it. Failed writes are rolled back and re-raised
    as PersistenceError.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    def get(self, key: str) -> Optional[str]:
        try:
            row = self.db.query(KeyValueDB).filter(KeyValueDB.key == key).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Read failed for key '{key}': {e}") from e
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        try:
            row = self.db.query(KeyValueDB).filter(KeyValueDB.key == key).first()
            if row:
                row.value = value
            else:
                self.db.add(KeyValueDB(key=key, value=value))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Write failed for key '{key}': {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.db.query(KeyValueDB).filter(KeyValueDB.key == key).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Remove failed for key '{key}': {e}") from e
        logger.debug(f"Removed key {key}")
