"""
Schedule API Routes

Read-only date derivations: submit-by, early reminder, notice verdict,
and the forward "file today, day off on" calculation.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from ..dependencies import get_settings_store, get_today, parse_date_param
from ..models.civil_date import CivilDate, DateRangeError
from ..models.schedule import Verdict
from ..services import MIN_NOTICE_DAYS, ScheduleCalculator, SettingsStore


router = APIRouter(prefix="/schedule", tags=["schedule"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ScheduleResponse(BaseModel):
    """Derived dates for one day off."""
    day_off: str
    day_off_long: str
    submit_by: str
    early_reminder: str
    verdict: str
    early_reminder_elapsed: bool
    days_until_submit_by: int
    reference_today: str
    minimum_day_off: Optional[str] = None
    min_notice_days: int


class StartDateResponse(BaseModel):
    """Earliest day off when the request is filed on `start`."""
    start: str
    day_off: str
    day_off_long: str
    advance_days: int


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("", response_model=ScheduleResponse)
async def get_schedule(
    day_off: str = Query(..., description="Day-off date, YYYY-MM-DD"),
    today: Optional[str] = Query(None, description="Reference date, defaults to the current date"),
    settings_store: SettingsStore = Depends(get_settings_store),
    current_day: CivilDate = Depends(get_today),
):
    """Derive the submit-by and early reminder dates and check notice."""
    target = parse_date_param(day_off, "day_off")
    reference = parse_date_param(today, "today") if today else current_day

    calculator = ScheduleCalculator(settings_store.load())
    result = calculator.compute(target, reference)
    if result.verdict == Verdict.OUT_OF_RANGE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Derived dates fall outside years 1-9999", "verdict": result.verdict.value},
        )

    minimum = calculator.minimum_day_off(reference)
    return ScheduleResponse(
        day_off=result.day_off.format(),
        day_off_long=result.day_off.format_long(),
        submit_by=result.submit_by.format(),
        early_reminder=result.early_reminder.format(),
        verdict=result.verdict.value,
        early_reminder_elapsed=result.early_reminder_elapsed,
        days_until_submit_by=result.days_until_submit_by,
        reference_today=reference.format(),
        minimum_day_off=minimum.format() if minimum else None,
        min_notice_days=MIN_NOTICE_DAYS,
    )


@router.get("/from-start", response_model=StartDateResponse)
async def get_day_off_from_start(
    start: Optional[str] = Query(None, description="Filing date, defaults to the current date"),
    settings_store: SettingsStore = Depends(get_settings_store),
    current_day: CivilDate = Depends(get_today),
):
    """Day off reached by filing on `start` with the configured notice."""
    base = parse_date_param(start, "start") if start else current_day
    settings = settings_store.load()
    try:
        day_off = ScheduleCalculator(settings).earliest_day_off(base)
    except DateRangeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return StartDateResponse(
        start=base.format(),
        day_off=day_off.format(),
        day_off_long=day_off.format_long(),
        advance_days=settings.advance_days,
    )
