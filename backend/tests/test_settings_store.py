"""
Settings Store Tests

Verifies:
1. Defaults when nothing is stored
2. Field-by-field fallback on corrupted values
3. Day counts floored to ints between 0 and MAX_DAY_COUNT
4. save() overwrites the whole record, reset() restores defaults
5. Boundary failures degrade to defaults / failed write
"""

import json
import pytest
from unittest.mock import MagicMock

from dayoff.models.schedule import DEFAULT_SETTINGS, Settings
from dayoff.services.persistence import InMemoryKeyValueStore
from dayoff.services.settings_store import (
    MAX_DAY_COUNT,
    SETTINGS_KEY,
    SettingsStore,
    coerce_clock_time,
    coerce_day_count,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv):
    return SettingsStore(kv)


def _store_raw(kv, payload):
    kv.set(SETTINGS_KEY, json.dumps(payload))


# =============================================================================
# LOAD
# =============================================================================

class TestLoad:
    """Tests for SettingsStore.load."""

    def test_empty_store_gives_defaults(self, store):
        settings = store.load()
        assert settings == DEFAULT_SETTINGS
        assert settings.advance_days == 30
        assert settings.early_extra_days == 2
        assert settings.submit_by_time == "09:00"
        assert settings.early_time == "09:00"
        assert settings.early_offset_days == 32

    def test_valid_record_loads(self, kv, store):
        _store_raw(kv, {"advanceDays": 21, "earlyExtraDays": 5, "submitByTime": "08:30", "earlyTime": "17:45"})
        assert store.load() == Settings(21, 5, "08:30", "17:45")

    def test_partial_corruption_keeps_good_fields(self, kv, store):
        _store_raw(kv, {"advanceDays": "lots", "earlyExtraDays": 4, "submitByTime": "25:00", "earlyTime": "07:15"})
        settings = store.load()
        assert settings.advance_days == 30
        assert settings.early_extra_days == 4
        assert settings.submit_by_time == "09:00"
        assert settings.early_time == "07:15"

    def test_missing_fields_default(self, kv, store):
        _store_raw(kv, {"advanceDays": 10})
        assert store.load() == Settings(advance_days=10)

    def test_floats_are_floored(self, kv, store):
        _store_raw(kv, {"advanceDays": 29.9, "earlyExtraDays": 0.5})
        settings = store.load()
        assert settings.advance_days == 29
        assert settings.early_extra_days == 0

    def test_oversized_day_count_falls_back(self, kv, store):
        _store_raw(kv, {"advanceDays": 1000000, "earlyExtraDays": 3})
        settings = store.load()
        assert settings.advance_days == 30
        assert settings.early_extra_days == 3

    def test_time_with_trailing_newline_falls_back(self, kv, store):
        _store_raw(kv, {"submitByTime": "09:00\n", "earlyTime": "10:30"})
        settings = store.load()
        assert settings.submit_by_time == "09:00"
        assert settings.early_time == "10:30"

    def test_invalid_json_gives_defaults(self, kv, store):
        kv.set(SETTINGS_KEY, "{not json")
        assert store.load() == DEFAULT_SETTINGS

    def test_non_object_payload_gives_defaults(self, kv, store):
        _store_raw(kv, [1, 2, 3])
        assert store.load() == DEFAULT_SETTINGS

    def test_read_failure_gives_defaults(self):
        kv = MagicMock()
        kv.get.side_effect = RuntimeError("disk gone")
        assert SettingsStore(kv).load() == DEFAULT_SETTINGS

    def test_early_offset_is_derived(self, kv, store):
        _store_raw(kv, {"advanceDays": 30, "earlyExtraDays": 2, "earlyOffsetDays": 99})
        assert store.load().early_offset_days == 32


class TestFieldValidators:
    """Tests for per-field coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (0, 0),
        (30, 30),
        (30.7, 30),
        ("14", 14),
        ("14.9", 14),
        (-1, None),
        (True, None),
        (None, None),
        ("abc", None),
        (float("inf"), None),
        (float("nan"), None),
        ([30], None),
        (MAX_DAY_COUNT, MAX_DAY_COUNT),
        (MAX_DAY_COUNT + 1, None),
        (1000000, None),
        ("1e9", None),
    ])
    def test_coerce_day_count(self, raw, expected):
        assert coerce_day_count(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("09:00", "09:00"),
        ("23:59", "23:59"),
        ("00:00", "00:00"),
        ("24:00", None),
        ("9:00", None),
        ("09:60", None),
        ("0900", None),
        (900, None),
        ("09:00\n", None),
        ("\u0660\u0669:00", None),
        (" 09:00", None),
    ])
    def test_coerce_clock_time(self, raw, expected):
        assert coerce_clock_time(raw) == expected


# =============================================================================
# SAVE / RESET
# =============================================================================

class TestSaveAndReset:
    """Tests for SettingsStore.save and reset."""

    def test_save_persists_all_four_fields(self, kv, store):
        result = store.save(Settings(45, 3, "10:00", "11:00"))
        assert result.ok is True
        assert json.loads(kv.get(SETTINGS_KEY)) == {
            "advanceDays": 45,
            "earlyExtraDays": 3,
            "submitByTime": "10:00",
            "earlyTime": "11:00",
        }

    def test_save_overwrites_prior_value(self, kv, store):
        _store_raw(kv, {"advanceDays": 10, "extra": "kept?"})
        store.save(Settings(advance_days=20))
        raw = json.loads(kv.get(SETTINGS_KEY))
        assert raw["advanceDays"] == 20
        assert "extra" not in raw

    def test_reset_restores_defaults(self, store):
        store.save(Settings(1, 1, "01:00", "02:00"))
        result, settings = store.reset()
        assert result.ok is True
        assert settings == DEFAULT_SETTINGS
        assert store.load() == DEFAULT_SETTINGS

    def test_reset_reports_write_failure(self):
        kv = MagicMock()
        kv.get.return_value = json.dumps({"advanceDays": 7})
        kv.set.side_effect = RuntimeError("read-only")
        result, settings = SettingsStore(kv).reset()
        assert result.ok is False
        assert "read-only" in result.error
        assert settings.advance_days == 7

    def test_write_failure_is_reported(self):
        kv = MagicMock()
        kv.set.side_effect = RuntimeError("read-only")
        result = SettingsStore(kv).save(Settings())
        assert result.ok is False
        assert "read-only" in result.error
