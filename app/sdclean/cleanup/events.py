"""Structured cleanup events and sinks.

Every outcome and read error of a job is emitted as a CleanupEvent.
Formatting events for humans is left to the caller.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from sdclean.cleanup.models import Outcome, OutcomeKind

logger = logging.getLogger(__name__)


class EventAction(str, Enum):
    """Action recorded by an event."""

    PREVIEWED = "previewed"
    DELETED = "deleted"
    FAILED = "failed"
    SKIPPED = "skipped"
    READ_ERROR = "read_error"


_OUTCOME_ACTIONS: dict[OutcomeKind, EventAction] = {
    OutcomeKind.PREVIEWED: EventAction.PREVIEWED,
    OutcomeKind.DELETED: EventAction.DELETED,
    OutcomeKind.FAILED: EventAction.FAILED,
    OutcomeKind.SKIPPED: EventAction.SKIPPED,
}


@dataclass(frozen=True, slots=True)
class CleanupEvent:
    """Single structured log record.

    Attributes:
        path: Path the event is about.
        action: What happened.
        bytes: Bytes previewed or freed.
        error: Error message, if any.
        job: Name of the job that produced the event.
        timestamp: ISO 8601 UTC timestamp.
    """

    path: str
    action: EventAction
    bytes: int = 0
    error: str | None = None
    job: str | None = None
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_outcome(cls, outcome: Outcome, job: str | None = None) -> "CleanupEvent":
        """Build an event from an executor outcome."""
        return cls(
            path=outcome.path,
            action=_OUTCOME_ACTIONS[outcome.kind],
            bytes=outcome.bytes,
            error=outcome.error,
            job=job,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {
            "timestamp": self.timestamp,
            "path": self.path,
            "action": self.action.value,
            "bytes": self.bytes,
        }
        if self.error is not None:
            result["error"] = self.error
        if self.job is not None:
            result["job"] = self.job
        return result

    def to_json_line(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


class EventSink(Protocol):
    """Receiver of cleanup events."""

    def emit(self, event: CleanupEvent) -> None: ...


class ListEventSink:
    """Collects events in memory."""

    def __init__(self) -> None:
        self.events: list[CleanupEvent] = []

    def emit(self, event: CleanupEvent) -> None:
        self.events.append(event)


class JsonlEventSink:
    """Appends events to a JSON Lines file.

    The file and its parent directory are created on first write.

    Args:
        path: Path to the events file.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, event: CleanupEvent) -> None:
        """Append one event.

        Raises:
            OSError: If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open(mode="a", encoding="utf-8") as f:
            f.write(event.to_json_line() + "\n")
            f.flush()


class NullEventSink:
    """Discards events."""

    def emit(self, event: CleanupEvent) -> None:
        logger.debug("Event discarded: %s %s", event.action.value, event.path)
