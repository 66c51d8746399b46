"""
Calendar Export API Routes

Serves .ics downloads. The HTTP response is the delivery sink: the
dispatcher hands the finished file to a ResponseSink and the handler
turns that into an attachment.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from ..dependencies import get_dispatcher, get_sink, parse_date_param
from ..models.schedule import ExportKind, Verdict
from ..services import CommandDispatcher, CommandResult, ExportEvent, ExportReminders, ResponseSink


router = APIRouter(prefix="/exports", tags=["exports"])


def _attachment(result: CommandResult, sink: ResponseSink) -> Response:
    if not result.ok:
        if result.verdict is not None and result.verdict != Verdict.OK:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"message": result.message, "verdict": result.verdict.value},
            )
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)

    payload = sink.payload
    return Response(
        content=payload.content,
        media_type=payload.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


@router.get("/reminders")
async def export_reminders(
    day_off: str = Query(..., description="Day-off date, YYYY-MM-DD"),
    label: str = Query("", description="Optional request name"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    sink: ResponseSink = Depends(get_sink),
):
    """Early reminder and submit-by deadline as one calendar file."""
    target = parse_date_param(day_off, "day_off")
    result = dispatcher.dispatch(ExportReminders(day_off=target, label=label))
    return _attachment(result, sink)


@router.get("/{kind}")
async def export_event(
    kind: ExportKind,
    day_off: str = Query(..., description="Day-off date, YYYY-MM-DD"),
    label: str = Query("", description="Optional request name"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    sink: ResponseSink = Depends(get_sink),
):
    """One derived date (day_off, submit_by or early_reminder) as a calendar file."""
    target = parse_date_param(day_off, "day_off")
    result = dispatcher.dispatch(ExportEvent(kind=kind, day_off=target, label=label))
    return _attachment(result, sink)
