"""Output tracking: recording what a wrapper sent to the outside world.

Each wrapper owns one CallLog. Public operations append to it on entry,
before the underlying client is awaited, so the log order is the order in
which calls started even when callers overlap. ``wrapper.track()`` hands
out OutputTracker views over the log; views only read.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from typing import Any

from src.domain.value_objects.tracked_call import TrackedCall
from src.infrastructure.nullability.snapshot import snapshot_values


class CallLog:
    """Append-only, ordered log of TrackedCall entries for one wrapper."""

    def __init__(self) -> None:
        self._calls: list[TrackedCall] = []
        # Live wrappers may be driven from worker threads
        self._lock = threading.Lock()

    def record(self, operation: str, arguments: Mapping[str, Any]) -> TrackedCall:
        """Append a call, snapshotting its arguments.

        Args:
            operation: Public operation name.
            arguments: Arguments by parameter name; deep-copied where
                they can be.

        Returns:
            The appended TrackedCall.
        """
        copied = snapshot_values(arguments)
        with self._lock:
            call = TrackedCall(operation=operation, arguments=copied, index=len(self._calls))
            self._calls.append(call)
        return call

    def snapshot(self) -> tuple[TrackedCall, ...]:
        with self._lock:
            return tuple(self._calls)

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls)


class OutputTracker:
    """Read-only view over one wrapper's call log.

    Example:
        http = HttpClient.create_null()
        tracker = http.track()
        await http.put("/counters/a", json={"value": 10})
        tracker.count("put")              # 1
        tracker.last("put").get("json")   # {"value": 10}
    """

    def __init__(self, log: CallLog) -> None:
        self._log = log

    def all(self) -> list[TrackedCall]:
        """Every recorded call, in invocation order."""
        return list(self._log.snapshot())

    def calls_to(self, operation: str) -> list[TrackedCall]:
        """Recorded calls to one operation, in invocation order."""
        return [call for call in self._log.snapshot() if call.operation == operation]

    def count(self, operation: str | None = None) -> int:
        """Number of recorded calls, optionally to one operation only."""
        if operation is None:
            return len(self._log)
        return len(self.calls_to(operation))

    def last(self, operation: str | None = None) -> TrackedCall | None:
        """Most recent call (to ``operation`` if given), or None."""
        calls = self.all() if operation is None else self.calls_to(operation)
        return calls[-1] if calls else None

    def arguments(self, operation: str) -> list[dict[str, Any]]:
        """Argument snapshots of every call to ``operation``."""
        return [dict(call.arguments) for call in self.calls_to(operation)]

    def __len__(self) -> int:
        return len(self._log)

    def __iter__(self) -> Iterator[TrackedCall]:
        return iter(self._log.snapshot())
