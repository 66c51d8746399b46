"""
Persistence Boundary Tests

Verifies:
1. InMemoryKeyValueStore get/set/remove
2. SqlKeyValueStore round trip on SQLite, visible across sessions
3. SQLAlchemy errors are rolled back and raised as PersistenceError
4. Stores on top of SqlKeyValueStore degrade instead of raising
"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dayoff.database import Base
from dayoff.models import db_models  # noqa: F401
from dayoff.models.civil_date import CivilDate
from dayoff.models.schedule import DEFAULT_SETTINGS
from dayoff.services import (
    InMemoryKeyValueStore,
    PersistenceError,
    SavedItemStore,
    SettingsStore,
    SqlKeyValueStore,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def failing_session():
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    return db


# =============================================================================
# IN-MEMORY
# =============================================================================

class TestInMemoryKeyValueStore:
    def test_get_set_remove(self):
        kv = InMemoryKeyValueStore()
        assert kv.get("k") is None
        kv.set("k", "v")
        assert kv.get("k") == "v"
        kv.remove("k")
        assert kv.get("k") is None

    def test_remove_missing_key(self):
        InMemoryKeyValueStore().remove("missing")

    def test_initial_data_is_copied(self):
        initial = {"k": "v"}
        kv = InMemoryKeyValueStore(initial)
        kv.set("k", "changed")
        assert initial["k"] == "v"


# =============================================================================
# SQL
# =============================================================================

class TestSqlKeyValueStore:
    def test_round_trip(self, session_factory):
        db = session_factory()
        kv = SqlKeyValueStore(db)
        kv.set("k", '{"a": 1}')
        assert kv.get("k") == '{"a": 1}'
        kv.set("k", "[]")
        assert kv.get("k") == "[]"
        kv.remove("k")
        assert kv.get("k") is None
        db.close()

    def test_write_visible_to_new_session(self, session_factory):
        writer = session_factory()
        SqlKeyValueStore(writer).set("k", "v")
        writer.close()

        reader = session_factory()
        assert SqlKeyValueStore(reader).get("k") == "v"
        reader.close()

    def test_read_error_raises_persistence_error(self, failing_session):
        with pytest.raises(PersistenceError):
            SqlKeyValueStore(failing_session).get("k")

    def test_write_error_rolls_back(self, failing_session):
        with pytest.raises(PersistenceError):
            SqlKeyValueStore(failing_session).set("k", "v")
        failing_session.rollback.assert_called_once()

    def test_remove_error_rolls_back(self, failing_session):
        with pytest.raises(PersistenceError):
            SqlKeyValueStore(failing_session).remove("k")
        failing_session.rollback.assert_called_once()


class TestStoresOverSql:
    def test_saved_items_round_trip(self, session_factory):
        db = session_factory()
        store = SavedItemStore(SqlKeyValueStore(db))
        store.add(CivilDate(2024, 3, 1), "Dentist")
        db.close()

        db = session_factory()
        [item] = SavedItemStore(SqlKeyValueStore(db)).list()
        assert item.label == "Dentist"
        db.close()

    def test_failing_boundary_degrades(self, failing_session):
        kv = SqlKeyValueStore(failing_session)
        assert SettingsStore(kv).load() == DEFAULT_SETTINGS
        assert SavedItemStore(kv).list() == []
        assert SavedItemStore(kv).clear().ok is False
