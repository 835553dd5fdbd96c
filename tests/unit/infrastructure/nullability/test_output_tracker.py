"""Unit tests for CallLog and OutputTracker."""

from __future__ import annotations

import threading

from src.infrastructure.nullability.output_tracker import CallLog, OutputTracker


class TestCallLog:
    """Tests for CallLog."""

    def test_records_in_order_with_index(self) -> None:
        log = CallLog()

        first = log.record("get", {"path": "/a"})
        second = log.record("put", {"path": "/b"})

        assert (first.index, second.index) == (0, 1)
        assert [call.operation for call in log.snapshot()] == ["get", "put"]

    def test_arguments_are_snapshotted(self) -> None:
        """Mutating the caller's object later does not change the record."""
        log = CallLog()
        body = {"value": 1}

        log.record("put", {"json": body})
        body["value"] = 99

        assert log.snapshot()[0].arguments == {"json": {"value": 1}}

    def test_uncopyable_arguments_are_kept_by_reference(self) -> None:
        """A lock cannot be deep-copied; the call is still recorded."""
        log = CallLog()
        lock = threading.Lock()
        body = {"value": 1}

        call = log.record("put", {"lock": lock, "json": body})
        body["value"] = 99

        assert call.arguments["lock"] is lock
        assert call.arguments["json"] == {"value": 1}

    def test_concurrent_records_are_all_kept(self) -> None:
        log = CallLog()

        def record_many() -> None:
            for _ in range(200):
                log.record("get", {})

        threads = [threading.Thread(target=record_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        calls = log.snapshot()
        assert len(calls) == 800
        assert [call.index for call in calls] == list(range(800))


class TestOutputTracker:
    """Tests for the read-only tracker view."""

    def _tracker(self) -> tuple[CallLog, OutputTracker]:
        log = CallLog()
        return log, OutputTracker(log)

    def test_empty(self) -> None:
        _, tracker = self._tracker()

        assert tracker.all() == []
        assert tracker.count() == 0
        assert tracker.last() is None
        assert len(tracker) == 0

    def test_filters_by_operation(self) -> None:
        log, tracker = self._tracker()
        log.record("get", {"path": "/a"})
        log.record("put", {"path": "/a", "json": {"value": 2}})
        log.record("get", {"path": "/b"})

        assert tracker.count() == 3
        assert tracker.count("get") == 2
        assert [call.get("path") for call in tracker.calls_to("get")] == ["/a", "/b"]
        assert tracker.arguments("put") == [{"path": "/a", "json": {"value": 2}}]
        assert tracker.last("get").get("path") == "/b"
        assert tracker.last().operation == "get"

    def test_views_see_later_calls(self) -> None:
        """A tracker is a live view, not a copy taken at track() time."""
        log, tracker = self._tracker()

        log.record("get", {})

        assert [call.operation for call in tracker] == ["get"]

    def test_all_returns_a_copy(self) -> None:
        log, tracker = self._tracker()
        log.record("get", {})

        tracker.all().clear()

        assert tracker.count() == 1
