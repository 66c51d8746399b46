"""
Settings API Routes

Read, replace and reset the advance-notice policy.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ..dependencies import get_settings_store
from ..models.schedule import Settings
from ..services import SettingsStore
from ..services.settings_store import CLOCK_TIME_PATTERN, MAX_DAY_COUNT


router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsModel(BaseModel):
    """Full settings record; PUT replaces all four fields."""
    advance_days: int = Field(30, ge=0, le=MAX_DAY_COUNT, description="Days of notice before the day off")
    early_extra_days: int = Field(2, ge=0, le=MAX_DAY_COUNT, description="Extra days before the deadline for the early reminder")
    submit_by_time: str = Field("09:00", pattern=CLOCK_TIME_PATTERN.pattern, description="HH:MM, 24h")
    early_time: str = Field("09:00", pattern=CLOCK_TIME_PATTERN.pattern, description="HH:MM, 24h")
    early_offset_days: int = Field(32, description="advance_days + early_extra_days (read-only)")

    @classmethod
    def from_settings(cls, settings: Settings) -> "SettingsModel":
        return cls(
            advance_days=settings.advance_days,
            early_extra_days=settings.early_extra_days,
            submit_by_time=settings.submit_by_time,
            early_time=settings.early_time,
            early_offset_days=settings.early_offset_days,
        )

    def to_settings(self) -> Settings:
        return Settings(
            advance_days=self.advance_days,
            early_extra_days=self.early_extra_days,
            submit_by_time=self.submit_by_time,
            early_time=self.early_time,
        )


@router.get("", response_model=SettingsModel)
async def get_settings(settings_store: SettingsStore = Depends(get_settings_store)):
    return SettingsModel.from_settings(settings_store.load())


@router.put("", response_model=SettingsModel)
async def replace_settings(
    request: SettingsModel,
    settings_store: SettingsStore = Depends(get_settings_store),
):
    """Overwrite the stored settings. early_offset_days is ignored on input."""
    result = settings_store.save(request.to_settings())
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Settings could not be saved")
    return SettingsModel.from_settings(settings_store.load())


@router.post("/reset", response_model=SettingsModel)
async def reset_settings(settings_store: SettingsStore = Depends(get_settings_store)):
    result, settings = settings_store.reset()
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Settings could not be reset")
    return SettingsModel.from_settings(settings)
