"""Day-Off Planner - API Routers"""
from .schedule import router as schedule_router
from .settings import router as settings_router
from .items import router as items_router
from .exports import router as exports_router

__all__ = [
    "schedule_router",
    "settings_router",
    "items_router",
    "exports_router",
]
