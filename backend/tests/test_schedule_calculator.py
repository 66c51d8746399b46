"""
Schedule Calculator Tests

Verifies:
1. submit_by / early_reminder derivation from settings
2. PAST / TOO_SOON / OK verdicts around the 14-day boundary
3. early_reminder <= submit_by <= day_off for any offsets
4. early_reminder_elapsed flag
5. Forward calculation from a start date
6. OUT_OF_RANGE instead of a crash at the calendar edges
"""

import pytest

from dayoff.models.civil_date import CivilDate, DateRangeError
from dayoff.models.schedule import Settings, Verdict
from dayoff.services.schedule_calculator import (
    MIN_NOTICE_DAYS,
    ScheduleCalculator,
    earliest_day_off,
    early_reminder,
    submit_by,
    validate_day_off,
)


TODAY = CivilDate(2024, 1, 1)


class TestDerivedDates:
    """Tests for submit-by and early reminder."""

    def test_default_offsets_across_leap_february(self):
        settings = Settings(advance_days=30, early_extra_days=2)
        day_off = CivilDate(2024, 3, 1)
        assert submit_by(day_off, settings) == CivilDate(2024, 1, 31)
        assert early_reminder(day_off, settings) == CivilDate(2024, 1, 29)

    def test_zero_offsets_collapse_to_day_off(self):
        settings = Settings(advance_days=0, early_extra_days=0)
        day_off = CivilDate(2024, 5, 10)
        assert submit_by(day_off, settings) == day_off
        assert early_reminder(day_off, settings) == day_off

    @pytest.mark.parametrize("advance,extra", [(0, 0), (0, 5), (30, 0), (30, 2), (90, 14)])
    def test_ordering_invariant(self, advance, extra):
        settings = Settings(advance_days=advance, early_extra_days=extra)
        day_off = CivilDate(2024, 12, 25)
        assert early_reminder(day_off, settings) <= submit_by(day_off, settings) <= day_off

    def test_earliest_day_off_from_start(self):
        assert earliest_day_off(CivilDate(2024, 1, 31), Settings()) == CivilDate(2024, 3, 1)


class TestValidation:
    """Tests for the minimum-notice verdict."""

    def test_min_notice_constant(self):
        assert MIN_NOTICE_DAYS == 14

    def test_yesterday_is_past(self):
        assert validate_day_off(CivilDate(2023, 12, 31), TODAY) == Verdict.PAST

    def test_today_is_too_soon(self):
        assert validate_day_off(TODAY, TODAY) == Verdict.TOO_SOON

    def test_inside_window_is_too_soon(self):
        assert validate_day_off(CivilDate(2024, 1, 10), TODAY) == Verdict.TOO_SOON
        assert validate_day_off(CivilDate(2024, 1, 14), TODAY) == Verdict.TOO_SOON

    def test_boundary_is_ok(self):
        assert validate_day_off(CivilDate(2024, 1, 15), TODAY) == Verdict.OK

    def test_far_future_is_ok(self):
        assert validate_day_off(CivilDate(2025, 6, 1), TODAY) == Verdict.OK


class TestScheduleCalculator:
    """Tests for ScheduleCalculator.compute."""

    def test_compute_ok_result(self):
        result = ScheduleCalculator(Settings()).compute(CivilDate(2024, 3, 1), TODAY)
        assert result.verdict == Verdict.OK
        assert result.ok is True
        assert result.submit_by == CivilDate(2024, 1, 31)
        assert result.early_reminder == CivilDate(2024, 1, 29)
        assert result.early_reminder_elapsed is False
        assert result.days_until_submit_by == 30

    def test_early_reminder_elapsed(self):
        # Day off 20 days out: early reminder (32 days before) is already behind us
        result = ScheduleCalculator(Settings()).compute(CivilDate(2024, 1, 21), TODAY)
        assert result.verdict == Verdict.OK
        assert result.early_reminder == CivilDate(2023, 12, 20)
        assert result.early_reminder_elapsed is True
        assert result.days_until_submit_by == -10

    def test_rejected_verdicts_keep_the_date(self):
        result = ScheduleCalculator().compute(CivilDate(2024, 1, 10), TODAY)
        assert result.verdict == Verdict.TOO_SOON
        assert result.day_off == CivilDate(2024, 1, 10)

    def test_minimum_day_off(self):
        assert ScheduleCalculator().minimum_day_off(TODAY) == CivilDate(2024, 1, 15)

    def test_calculator_earliest_day_off_uses_settings(self):
        calculator = ScheduleCalculator(Settings(advance_days=10))
        assert calculator.earliest_day_off(TODAY) == CivilDate(2024, 1, 11)


class TestCalendarEdges:
    """Tests for derived dates that would leave years 1-9999."""

    def test_deadline_before_year_one_is_out_of_range(self):
        result = ScheduleCalculator().compute(CivilDate(1, 1, 20), CivilDate(1, 1, 1))
        assert result.verdict == Verdict.OUT_OF_RANGE
        assert result.ok is False
        assert result.submit_by is None
        assert result.early_reminder is None
        assert result.days_until_submit_by is None
        assert result.day_off == CivilDate(1, 1, 20)

    def test_huge_advance_days_is_out_of_range(self):
        result = ScheduleCalculator(Settings(advance_days=1000000)).compute(CivilDate(2024, 3, 1), TODAY)
        assert result.verdict == Verdict.OUT_OF_RANGE

    def test_first_reachable_deadline_is_ok(self):
        # 32 days after 0001-01-01 is the first day off whose early reminder exists
        result = ScheduleCalculator().compute(CivilDate(1, 2, 2), CivilDate(1, 1, 1))
        assert result.verdict == Verdict.OK
        assert result.early_reminder == CivilDate(1, 1, 1)

    def test_last_day_of_calendar_validates(self):
        assert validate_day_off(CivilDate(9999, 12, 31), CivilDate(9999, 12, 31)) == Verdict.TOO_SOON
        assert validate_day_off(CivilDate(9999, 12, 31), CivilDate(9999, 12, 1)) == Verdict.OK

    def test_minimum_day_off_past_year_9999_is_none(self):
        assert ScheduleCalculator().minimum_day_off(CivilDate(9999, 12, 25)) is None

    def test_earliest_day_off_past_year_9999_raises(self):
        with pytest.raises(DateRangeError):
            earliest_day_off(CivilDate(9999, 12, 31), Settings())
