"""
Saved Item API Routes

Lifecycle of saved day-off requests. Mutations go through the
command dispatcher so the API and scripts share the same rules:
a day off must pass the notice check before it can be saved, and a
(day_off, label) pair can only be saved once.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..dependencies import get_dispatcher, get_item_store, get_settings_store, get_today, parse_date_param
from ..models.civil_date import CivilDate
from ..models.schedule import SavedItem, Verdict
from ..services import (
    AddItem,
    ClearAll,
    CommandDispatcher,
    RemoveItem,
    SavedItemStore,
    ScheduleCalculator,
    SettingsStore,
    ToggleSubmitted,
    UseItem,
)


router = APIRouter(prefix="/items", tags=["items"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class CreateItemRequest(BaseModel):
    """Request to save a day off."""
    day_off: str = Field(..., description="Day-off date, YYYY-MM-DD")
    label: str = Field(default="", description="Optional name for the request")


class SavedItemResponse(BaseModel):
    """Saved item with its derived dates."""
    id: str
    day_off: str
    label: str
    title: str
    submitted: bool
    submit_by: Optional[str] = None
    early_reminder: Optional[str] = None
    early_reminder_elapsed: bool


class DraftResponse(BaseModel):
    """Values for an edit form."""
    day_off: str
    label: str
    message: str


class CommandResponse(BaseModel):
    ok: bool
    message: str


def _item_response(item: SavedItem, calculator: ScheduleCalculator, today: CivilDate) -> SavedItemResponse:
    schedule = calculator.compute(item.day_off, today)
    return SavedItemResponse(
        id=item.id,
        day_off=item.day_off.format(),
        label=item.label,
        title=item.display_title,
        submitted=item.submitted,
        submit_by=schedule.submit_by.format() if schedule.submit_by else None,
        early_reminder=schedule.early_reminder.format() if schedule.early_reminder else None,
        early_reminder_elapsed=schedule.early_reminder_elapsed,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("", response_model=List[SavedItemResponse])
async def list_items(
    item_store: SavedItemStore = Depends(get_item_store),
    settings_store: SettingsStore = Depends(get_settings_store),
    today: CivilDate = Depends(get_today),
):
    """Saved items, earliest day off first."""
    calculator = ScheduleCalculator(settings_store.load())
    return [_item_response(item, calculator, today) for item in item_store.list()]


@router.post("", response_model=SavedItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: CreateItemRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    settings_store: SettingsStore = Depends(get_settings_store),
    today: CivilDate = Depends(get_today),
):
    """
    Save a day off.

    409 when the date fails the notice check or the item already exists,
    422 when its derived dates fall outside the calendar.
    """
    day_off = parse_date_param(request.day_off, "day_off")
    result = dispatcher.dispatch(AddItem(day_off=day_off, label=request.label))

    if not result.ok:
        if result.verdict == Verdict.OUT_OF_RANGE:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"message": result.message, "verdict": result.verdict.value},
            )
        if result.duplicate or result.verdict != Verdict.OK:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"message": result.message, "verdict": result.verdict.value if result.verdict else None},
            )
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)

    return _item_response(result.item, ScheduleCalculator(settings_store.load()), today)


@router.delete("", response_model=CommandResponse)
async def clear_items(dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    result = dispatcher.dispatch(ClearAll())
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)
    return CommandResponse(ok=True, message=result.message)


@router.delete("/{item_id}", response_model=CommandResponse)
async def delete_item(item_id: str, dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    """Delete one item. Unknown ids succeed without changing anything."""
    result = dispatcher.dispatch(RemoveItem(item_id=item_id))
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)
    return CommandResponse(ok=True, message=result.message)


@router.post("/{item_id}/toggle-submitted", response_model=CommandResponse)
async def toggle_submitted(item_id: str, dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    result = dispatcher.dispatch(ToggleSubmitted(item_id=item_id))
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)
    return CommandResponse(ok=True, message=result.message)


@router.get("/{item_id}/draft", response_model=DraftResponse)
async def get_draft(item_id: str, dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    result = dispatcher.dispatch(UseItem(item_id=item_id))
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    return DraftResponse(day_off=result.draft.day_off.format(), label=result.draft.label, message=result.message)
