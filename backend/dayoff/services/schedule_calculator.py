"""
Schedule Calculator

Derives the submit-by deadline and the early reminder for a day-off
date, and checks the date against the minimum-notice policy.

Key behaviors:
- submit_by = day_off - advance_days
- early_reminder = day_off - (advance_days + early_extra_days)
- PAST / TOO_SOON dates are reported, never moved to a nearby valid date
- Derived dates outside years 1-9999 give OUT_OF_RANGE instead of raising
- All arithmetic is on civil dates; nothing here reads the clock
"""
import logging
from typing import Optional

from ..models.civil_date import CivilDate, DateRangeError, days_between
from ..models.schedule import DEFAULT_SETTINGS, ScheduleResult, Settings, Verdict

logger = logging.getLogger(__name__)


# =============================================================================
# POLICY CONFIGURATION
# =============================================================================

MIN_NOTICE_DAYS = 14  # Earliest acceptable day off is today + 14


# =============================================================================
# DATE DERIVATION
# =============================================================================

def submit_by(day_off: CivilDate, settings: Settings) -> CivilDate:
    return day_off.add_days(-settings.advance_days)


def early_reminder(day_off: CivilDate, settings: Settings) -> CivilDate:
    return day_off.add_days(-settings.early_offset_days)


def earliest_day_off(start: CivilDate, settings: Settings) -> CivilDate:
    """Day-off date reached by filing on `start`; DateRangeError past year 9999."""
    return start.add_days(settings.advance_days)


def validate_day_off(
    day_off: CivilDate,
    reference_today: CivilDate,
    min_notice_days: int = MIN_NOTICE_DAYS,
) -> Verdict:
    """
    Check a candidate day off against the minimum-notice window.

    PAST:     day_off < today
    TOO_SOON: today <= day_off < today + min_notice_days
    OK:       otherwise (today + min_notice_days itself is OK)
    """
    if day_off < reference_today:
        return Verdict.PAST
    try:
        earliest_valid = reference_today.add_days(min_notice_days)
    except DateRangeError:
        # No representable date is far enough ahead
        return Verdict.TOO_SOON
    if day_off < earliest_valid:
        return Verdict.TOO_SOON
    return Verdict.OK


# =============================================================================
# CALCULATOR
# =============================================================================

class ScheduleCalculator:
    """Bundles the derivations for one Settings snapshot."""

    def __init__(self, settings: Optional[Settings] = None, min_notice_days: int = MIN_NOTICE_DAYS):
        self.settings = settings or DEFAULT_SETTINGS
        self.min_notice_days = min_notice_days

    def compute(self, day_off: CivilDate, reference_today: CivilDate) -> ScheduleResult:
        """
        Derive both dates and the verdict for `day_off`.

        early_reminder_elapsed lets a consumer tell that only the
        submit-by reminder is still actionable. A derived date before
        year 1 yields an OUT_OF_RANGE result with no derived dates.
        """
        try:
            deadline = submit_by(day_off, self.settings)
            early = early_reminder(day_off, self.settings)
        except DateRangeError as e:
            logger.warning(f"Schedule for {day_off} out of range: {e}")
            return ScheduleResult(
                day_off=day_off,
                submit_by=None,
                early_reminder=None,
                verdict=Verdict.OUT_OF_RANGE,
                early_reminder_elapsed=False,
                days_until_submit_by=None,
                reference_today=reference_today,
            )

        return ScheduleResult(
            day_off=day_off,
            submit_by=deadline,
            early_reminder=early,
            verdict=validate_day_off(day_off, reference_today, self.min_notice_days),
            early_reminder_elapsed=early < reference_today,
            days_until_submit_by=days_between(reference_today, deadline),
            reference_today=reference_today,
        )

    def earliest_day_off(self, start: CivilDate) -> CivilDate:
        return earliest_day_off(start, self.settings)

    def minimum_day_off(self, reference_today: CivilDate) -> Optional[CivilDate]:
        """First date that passes validation, None past year 9999."""
        try:
            return reference_today.add_days(self.min_notice_days)
        except DateRangeError:
            return None
