"""
Settings Store

Loads and saves the advance-notice policy. Loading never fails:
each field is validated on its own, so one corrupted value falls back
to its default without discarding the others.
"""
import json
import logging
import math
import re
from typing import Any, Dict, Optional, Tuple

from ..models.schedule import DEFAULT_SETTINGS, Settings, WriteResult
from .persistence import KeyValueStore

logger = logging.getLogger(__name__)


SETTINGS_KEY = "dayoff_settings_v1"

# 24h "HH:MM", ASCII digits; validated with fullmatch
CLOCK_TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

# Upper bound for advanceDays and earlyExtraDays (ten years)
MAX_DAY_COUNT = 3650


# =============================================================================
# FIELD VALIDATORS
# =============================================================================

def coerce_day_count(raw: Any) -> Optional[int]:
    """
    Floor a stored day count to an int in [0, MAX_DAY_COUNT].

    Accepts ints, finite floats and numeric strings. Returns None for
    booleans, out-of-range values and anything non-numeric.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            return None
    if not isinstance(raw, (int, float)):
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    if raw < 0 or raw > MAX_DAY_COUNT:
        return None
    return int(math.floor(raw))


def coerce_clock_time(raw: Any) -> Optional[str]:
    """Return the value if it is a 24h "HH:MM" string, else None."""
    if isinstance(raw, str) and CLOCK_TIME_PATTERN.fullmatch(raw):
        return raw
    return None


# (stored key, Settings attribute, validator)
SETTINGS_FIELDS = (
    ("advanceDays", "advance_days", coerce_day_count),
    ("earlyExtraDays", "early_extra_days", coerce_day_count),
    ("submitByTime", "submit_by_time", coerce_clock_time),
    ("earlyTime", "early_time", coerce_clock_time),
)


def settings_from_raw(raw: Any) -> Settings:
    """Build Settings from a decoded JSON payload, defaulting per field."""
    if not isinstance(raw, dict):
        return DEFAULT_SETTINGS

    values: Dict[str, Any] = {}
    for stored_key, attr, validator in SETTINGS_FIELDS:
        validated = validator(raw.get(stored_key))
        if validated is None:
            if stored_key in raw:
                logger.warning(f"Invalid setting {stored_key}={raw.get(stored_key)!r}, using default")
            validated = getattr(DEFAULT_SETTINGS, attr)
        values[attr] = validated
    return Settings(**values)


# =============================================================================
# SETTINGS STORE
# =============================================================================

class SettingsStore:
    """Validated access to the persisted Settings record."""

    def __init__(self, kv_store: KeyValueStore, key: str = SETTINGS_KEY):
        self.kv = kv_store
        self.key = key

    def load(self) -> Settings:
        try:
            raw_text = self.kv.get(self.key)
        except Exception as e:
            logger.error(f"Settings read failed, using defaults: {e}")
            return DEFAULT_SETTINGS

        if not raw_text:
            return DEFAULT_SETTINGS

        try:
            raw = json.loads(raw_text)
        except ValueError:
            logger.warning("Stored settings are not valid JSON, using defaults")
            return DEFAULT_SETTINGS

        return settings_from_raw(raw)

    def save(self, settings: Settings) -> WriteResult:
        """Overwrite the stored record with all four fields."""
        try:
            self.kv.set(self.key, json.dumps(settings.to_dict()))
        except Exception as e:
            logger.error(f"Settings write failed: {e}")
            return WriteResult(ok=False, error=str(e))

        logger.info(f"Settings saved: {settings.to_dict()}")
        return WriteResult(ok=True, changed=True)

    def reset(self) -> Tuple[WriteResult, Settings]:
        """Store the defaults; returns the write outcome and the settings now in effect."""
        result = self.save(DEFAULT_SETTINGS)
        return result, self.load()

