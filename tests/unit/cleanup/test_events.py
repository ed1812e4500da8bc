"""Tests for cleanup events and sinks."""

import json
from pathlib import Path

from sdclean.cleanup.events import CleanupEvent, EventAction, JsonlEventSink, ListEventSink
from sdclean.cleanup.models import DecisionReason, Outcome, OutcomeKind


class TestCleanupEvent:
    """Tests for CleanupEvent serialization."""

    def test_from_outcome(self) -> None:
        outcome = Outcome(
            path="/sdcard/a.tmp",
            kind=OutcomeKind.DELETED,
            bytes=10,
            reason=DecisionReason.MATCHES_JUNK_PATTERN,
        )

        event = CleanupEvent.from_outcome(outcome, job="external-caches")

        assert event.action == EventAction.DELETED
        assert event.bytes == 10
        assert event.job == "external-caches"

    def test_to_dict_omits_missing_error(self) -> None:
        data = CleanupEvent(path="/sdcard/a.tmp", action=EventAction.PREVIEWED, bytes=3).to_dict()

        assert data["action"] == "previewed"
        assert data["bytes"] == 3
        assert "error" not in data
        assert data["timestamp"].endswith("+00:00")

    def test_to_dict_includes_error(self) -> None:
        event = CleanupEvent(path="/sdcard/x", action=EventAction.READ_ERROR, error="denied")
        assert event.to_dict()["error"] == "denied"


class TestSinks:
    """Tests for event sinks."""

    def test_list_sink_collects(self) -> None:
        sink = ListEventSink()
        sink.emit(CleanupEvent(path="/a", action=EventAction.SKIPPED))
        assert len(sink.events) == 1

    def test_jsonl_sink_appends(self, tmp_path: Path) -> None:
        path = tmp_path / "state" / "events.jsonl"
        sink = JsonlEventSink(path)

        sink.emit(CleanupEvent(path="/a", action=EventAction.DELETED, bytes=1))
        sink.emit(CleanupEvent(path="/b", action=EventAction.FAILED, error="busy"))

        lines = path.read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["path"] == "/a"
        assert json.loads(lines[1])["error"] == "busy"
