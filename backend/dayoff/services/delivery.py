"""
Delivery Sinks

Where a finished calendar file goes. The planner only builds text;
a sink decides whether that means a file on disk, an HTTP download
or something else.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from ..models.schedule import ExportPayload

logger = logging.getLogger(__name__)


class DeliverySink(ABC):
    """Accepts (filename, content, mime_type)."""

    @abstractmethod
    def deliver(self, filename: str, content: str, mime_type: str) -> None:
        ...

    def deliver_payload(self, payload: ExportPayload) -> None:
        if not payload.filename:
            raise ValueError("Export filename must not be empty")
        self.deliver(payload.filename, payload.content, payload.mime_type)


class DirectorySink(DeliverySink):
    """Writes each delivery as a file under `directory`."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.written: List[Path] = []

    def deliver(self, filename: str, content: str, mime_type: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / Path(filename).name
        # newline="" keeps the CRLF separators byte-exact
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.written.append(path)
        logger.info(f"Wrote {mime_type} export to {path}")


class ResponseSink(DeliverySink):
    """Holds the last delivery so an HTTP handler can return it."""

    def __init__(self):
        self.payload: Optional[ExportPayload] = None

    def deliver(self, filename: str, content: str, mime_type: str) -> None:
        self.payload = ExportPayload(filename=filename, content=content, mime_type=mime_type)
