"""
Day-Off Planner - FastAPI Application

Main entry point for the advance-notice planner.

Flow:
- Settings → ScheduleCalculator → submit-by / early reminder / verdict
- Verdict OK → SavedItemStore (save) or CalendarExporter (export)
- Exports are delivered as text/calendar attachments
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import schedule_router, settings_router, items_router, exports_router
from .database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Day-Off Planner",
    description="""
    Day-Off Planner - Advance-Notice Deadline Tracker

    Works out when a day-off request has to be handed in, keeps a list
    of planned days off, and exports the deadlines as calendar files.

    ## Rules
    - Submit-by date = day off - advance days (default 30)
    - Early reminder = submit-by - extra early days (default 2)
    - A day off must be at least 14 days away to be saved or exported
    - Calendar exports are floating local time, no timezone conversion
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(schedule_router)
app.include_router(settings_router)
app.include_router(items_router)
app.include_router(exports_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Day-Off Planner",
        "version": "1.0.0",
        "description": "Advance-notice deadline tracker",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m dayoff.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
