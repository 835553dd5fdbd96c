"""Clock wrapper.

Clock is the only code that reads the system clock or sleeps. Live
instances hold SystemTime; null instances hold StubbedTime, which is frozen
at ``config.now`` (2026-01-01T00:00:00Z by default) and only moves when told
to.

Null behaviour:
- ``now()`` and ``monotonic()`` serve configured ``responses`` when present,
  otherwise the frozen readings
- ``await sleep(seconds)`` advances the readings and returns without
  suspending
- ``advance(seconds)`` (behaviour simulation, null only) moves time forward

Configured readings are served as they are; ``sleep`` and ``advance`` move
the simulated time but never consume them:

    Clock.create_null({"responses": {"now": {"kind": "sequence", "values": [
        "2026-01-01T09:00:00+00:00",
        "2026-01-01T09:00:05+00:00",
    ]}}})

Exhaustion policy: REPEAT_LAST. Once a sequence of readings is used up the
clock keeps showing the last one, as a stopped clock would.

State events:
- ``clock.advanced`` ``{"seconds", "now"}`` after ``sleep`` and ``advance``
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from src.config.infrastructure_config import ClockConfig
from src.config.loader import coerce_config
from src.domain.errors.construction import InvalidResponseError
from src.domain.value_objects.configurable_response import ExhaustionPolicy
from src.infrastructure.nullability.responses import ConfigurableResponses
from src.infrastructure.nullability.wrapper import InfrastructureWrapper


READINGS: tuple[str, ...] = ("now", "monotonic")


def _to_instant(value: Any) -> datetime:
    """Aware datetime from a datetime or ISO 8601 string; naive means UTC."""
    instant = datetime.fromisoformat(value) if isinstance(value, str) else value
    if not isinstance(instant, datetime):
        raise TypeError(f"expected a datetime, got {type(value).__name__}")
    return instant if instant.tzinfo is not None else instant.replace(tzinfo=timezone.utc)


def _validate_response(operation: str, value: Any) -> None:
    if operation == "now":
        try:
            _to_instant(value)
        except (TypeError, ValueError):
            raise InvalidResponseError(
                operation, f"expected a datetime or ISO 8601 string, got {value!r}"
            ) from None
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidResponseError(operation, f"expected seconds as a number, got {value!r}")


class TimeSource(Protocol):
    """Capability interface shared by SystemTime and StubbedTime."""

    def now(self) -> datetime: ...

    def monotonic(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...

    def current(self) -> datetime: ...


class SystemTime:
    """The real clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def current(self) -> datetime:
        return self.now()


class StubbedTime:
    """Embedded frozen clock.

    Time never changes unless ``sleep`` or ``advance`` moves it. The
    monotonic reading moves by the same amount. Configured readings, when
    present, are what ``now`` and ``monotonic`` return instead.
    """

    EXHAUSTION = ExhaustionPolicy.REPEAT_LAST

    def __init__(
        self,
        now: datetime,
        monotonic_start: float = 0.0,
        responses: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the stub.

        Args:
            now: Instant the simulated time starts at.
            monotonic_start: Starting monotonic reading.
            responses: Canned ``now`` / ``monotonic`` readings.
        """
        self._now = now
        self._monotonic = monotonic_start
        self._responses = ConfigurableResponses(
            responses,
            exhaustion=self.EXHAUSTION,
            operations=READINGS,
            validate=_validate_response,
            owner=type(self).__name__,
        )

    def now(self) -> datetime:
        if self._responses.is_configured("now"):
            return _to_instant(self._responses.next("now"))
        return self._now

    def monotonic(self) -> float:
        if self._responses.is_configured("monotonic"):
            return float(self._responses.next("monotonic"))
        return self._monotonic

    def current(self) -> datetime:
        """The simulated instant; never consumes a configured reading."""
        return self._now

    async def sleep(self, seconds: float) -> None:
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)
        self._monotonic += seconds


class Clock(InfrastructureWrapper):
    """Wrapper for wall-clock time, monotonic time and sleeping.

    Usage:
        clock = Clock.create()
        started = clock.now()

        clock = Clock.create_null({"now": "2026-03-01T09:00:00+00:00"})
        clock.advance(60)
    """

    def __init__(
        self,
        source: TimeSource,
        config: ClockConfig | None = None,
        *,
        null: bool = False,
    ) -> None:
        """Initialize with a real or stubbed time source.

        Args:
            source: SystemTime or StubbedTime.
            config: Resolved config (defaults when omitted).
            null: True when ``source`` is the embedded stub.
        """
        super().__init__(null=null)
        self._source = source
        self._config = config or ClockConfig()

    @classmethod
    def create(cls, config: ClockConfig | Mapping[str, Any] | None = None) -> Clock:
        """Build a clock reading real time."""
        resolved = cls._live_config(ClockConfig, config)
        return cls(SystemTime(), resolved)

    @classmethod
    def create_null(cls, config: ClockConfig | Mapping[str, Any] | None = None) -> Clock:
        """Build a clock frozen at ``config.now``, serving ``config.responses``."""
        resolved = coerce_config(ClockConfig, config)
        source = StubbedTime(resolved.now, resolved.monotonic_start, resolved.responses)
        return cls(source, resolved, null=True)

    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""
        self._record("now")
        return self._source.now()

    def monotonic(self) -> float:
        """Monotonic seconds, for measuring durations."""
        self._record("monotonic")
        return self._source.monotonic()

    async def sleep(self, seconds: float) -> None:
        """Wait ``seconds``; a null clock advances instead of waiting.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot sleep for negative time, got {seconds}")
        self._record("sleep", seconds=seconds)
        await self._source.sleep(seconds)
        self._advanced(seconds)

    def advance(self, seconds: float) -> None:
        """Move a null clock forward (behaviour simulation).

        Raises:
            SimulationUnavailableError: On a live clock.
            ValueError: If ``seconds`` is negative.
        """
        self._require_null("advance")
        if seconds < 0:
            raise ValueError(f"Cannot advance time backwards, got {seconds}")
        self._source.advance(seconds)  # type: ignore[attr-defined]
        self._advanced(seconds)

    def _advanced(self, seconds: float) -> None:
        self._emit("clock.advanced", seconds=seconds, now=self._source.current().isoformat())
