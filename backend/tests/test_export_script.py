"""
Tests for the reminder export script.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dayoff.database import Base
from dayoff.models import db_models  # noqa: F401
from dayoff.models.civil_date import CivilDate
from scripts import export_reminders as script


@pytest.fixture
def sqlite_session(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(script, "SessionLocal", sessionmaker(bind=engine))
    monkeypatch.setattr(script, "init_db", lambda: Base.metadata.create_all(bind=engine))
    yield
    engine.dispose()


def test_writes_reminder_file(sqlite_session, tmp_path, capsys):
    far_future = CivilDate.today().add_days(60)

    assert script.export_reminders(far_future, "Trip", str(tmp_path)) is True

    path = tmp_path / f"reminders-Trip-{far_future}.ics"
    assert path.exists()
    assert path.read_bytes().count(b"BEGIN:VEVENT") == 2
    assert "Submit by:" in capsys.readouterr().out


def test_too_soon_is_refused(sqlite_session, tmp_path, capsys):
    tomorrow = CivilDate.today().add_days(1)

    assert script.export_reminders(tomorrow, "", str(tmp_path)) is False
    assert list(tmp_path.iterdir()) == []
    assert "Error:" in capsys.readouterr().out


def test_main_rejects_bad_date(monkeypatch):
    monkeypatch.setattr("sys.argv", ["export_reminders", "03/01/2024"])
    with pytest.raises(SystemExit) as exc:
        script.main()
    assert exc.value.code == 1
