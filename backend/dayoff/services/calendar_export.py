"""
Calendar Exporter

Builds iCalendar (RFC 5545) documents for one or more events and a
filesystem-safe filename to deliver them under.

Format rules:
- CRLF line endings, trailing CRLF after END:VCALENDAR
- All-day:  DTSTART;VALUE=DATE:YYYYMMDD, DTEND = start + 1 day
- Timed:    DTSTART:YYYYMMDDThhmmss floating local time, DTEND = start + 1 hour
- DTSTAMP is the generation instant in UTC
- TEXT values escape backslash, newline, comma, semicolon (in that order)
- Content lines longer than 75 octets are folded with CRLF + space
- An event whose end would pass year 9999 raises DateRangeError
"""
import logging
import re
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Iterable, List, Optional
from uuid import uuid4

from ..models.civil_date import CivilDate, DateRangeError
from ..models.schedule import CalendarEvent, ExportPayload

logger = logging.getLogger(__name__)


# =============================================================================
# FORMAT CONSTANTS
# =============================================================================

CRLF = "\r\n"
PRODID = "-//Day-Off Planner//Advance Notice Calendar//EN"
UID_DOMAIN = "dayoff-planner"
CALENDAR_MIME_TYPE = "text/calendar"
CALENDAR_EXTENSION = ".ics"

TIMED_EVENT_DURATION = timedelta(hours=1)
FILENAME_LABEL_MAX = 24
FOLD_LIMIT_OCTETS = 75
UNSAFE_FILENAME_CHARS = re.compile(r"[^\w-]", re.ASCII)


# =============================================================================
# TEXT HELPERS
# =============================================================================

def escape_text(value: str) -> str:
    """Escape a TEXT property value. Backslash must go first."""
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    return (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace(",", "\\,")
        .replace(";", "\\;")
    )


def fold_line(line: str, limit: int = FOLD_LIMIT_OCTETS) -> str:
    """
    Fold a content line so no physical line exceeds `limit` octets.

    Continuation lines start with a single space, which counts toward
    the limit. Splits only between characters, never inside a UTF-8
    sequence.
    """
    if len(line.encode("utf-8")) <= limit:
        return line

    chunks = []
    current: List[str] = []
    size, budget = 0, limit
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > budget:
            chunks.append("".join(current))
            current, size, budget = [], 0, limit - 1
        current.append(char)
        size += width
    chunks.append("".join(current))
    return (CRLF + " ").join(chunks)


def parse_clock_time(value: str) -> time:
    """Parse "HH:MM" into a time; raises ValueError on anything else."""
    hours, sep, minutes = value.partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        raise ValueError(f"Invalid clock time: {value!r}")
    return time(int(hours), int(minutes))


def format_local_datetime(value: datetime) -> str:
    """Floating local form YYYYMMDDThhmmss (no Z, no offset)."""
    return value.strftime("%Y%m%dT%H%M%S")


def suggest_filename(kind: str, label: Optional[str], date: CivilDate) -> str:
    """
    <kind>[-<label>]-<YYYY-MM-DD>.ics

    The label is cut to 24 characters and anything outside ASCII word
    characters and hyphen becomes an underscore.
    """
    parts = [UNSAFE_FILENAME_CHARS.sub("_", kind.strip().lower()) or "event"]

    fragment = (label or "").strip()[:FILENAME_LABEL_MAX]
    if fragment:
        parts.append(UNSAFE_FILENAME_CHARS.sub("_", fragment))

    parts.append(date.format())
    return "-".join(parts) + CALENDAR_EXTENSION


# =============================================================================
# EXPORTER
# =============================================================================

class CalendarExporter:
    """
    Pure event -> text conversion.

    `clock` supplies the DTSTAMP instant and `uid_factory` the per-event
    UID; both are injectable so output can be pinned in tests.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        uid_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self.clock = clock
        self.uid_factory = uid_factory

    def build_event(self, event: CalendarEvent) -> str:
        return self.build_events([event])

    def build_events(self, events: Iterable[CalendarEvent]) -> str:
        events = list(events)
        if not events:
            raise ValueError("At least one event is required")

        stamp = self.clock().astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{PRODID}",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
        ]
        for event in events:
            lines.extend(self._event_lines(event, stamp))
        lines.append("END:VCALENDAR")

        logger.debug(f"Built calendar with {len(events)} event(s)")
        return CRLF.join(fold_line(line) for line in lines) + CRLF

    def export(
        self,
        kind: str,
        label: Optional[str],
        events: List[CalendarEvent],
        file_date: Optional[CivilDate] = None,
    ) -> ExportPayload:
        """Build the document; the filename uses file_date or the first event's date."""
        content = self.build_events(events)
        return ExportPayload(
            filename=suggest_filename(kind, label, file_date or events[0].date),
            content=content,
            mime_type=CALENDAR_MIME_TYPE,
            metadata={"kind": kind, "event_count": len(events)},
        )

    def _event_lines(self, event: CalendarEvent, stamp: str) -> List[str]:
        lines = [
            "BEGIN:VEVENT",
            f"UID:{self.uid_factory()}@{UID_DOMAIN}",
            f"DTSTAMP:{stamp}",
            f"SUMMARY:{escape_text(event.title)}",
            f"DESCRIPTION:{escape_text(event.description)}",
        ]

        if event.all_day:
            lines.append(f"DTSTART;VALUE=DATE:{event.date.format_compact()}")
            lines.append(f"DTEND;VALUE=DATE:{event.date.add_days(1).format_compact()}")
        else:
            start = datetime.combine(event.date.to_date(), parse_clock_time(event.time))
            try:
                end = start + TIMED_EVENT_DURATION
            except OverflowError as e:
                raise DateRangeError(f"Event at {event.date} {event.time} ends after year 9999") from e
            lines.append(f"DTSTART:{format_local_datetime(start)}")
            lines.append(f"DTEND:{format_local_datetime(end)}")

        lines.append("END:VEVENT")
        return lines
