"""Base class for infrastructure wrappers.

An infrastructure wrapper is the only code that performs one kind of
real-world effect. Its constructor receives a single client object, either
the real third-party client or the embedded stub that lives in the same
module, and every public operation follows the same steps:

1. ``self._record(operation, **arguments)`` on entry
2. delegate to the client
3. ``self._emit(event, **state)`` if wrapper-observable state changed

Tests then assert on ``wrapper.track()`` and ``wrapper.on(...)`` rather than
on mocks.
"""

from __future__ import annotations

from typing import Any, TypeVar

from structlog import get_logger

from src.config.loader import coerce_config, null_only_overrides
from src.domain.errors.responses import SimulationUnavailableError
from src.domain.value_objects.state_event import StateEvent
from src.domain.value_objects.tracked_call import TrackedCall
from src.infrastructure.nullability.component import Mode, NullableComponent
from src.infrastructure.nullability.event_emitter import (
    EventHandler,
    StateEventEmitter,
    Subscription,
)
from src.infrastructure.nullability.output_tracker import CallLog, OutputTracker
from src.infrastructure.observability.logging_mixin import LoggingMixin

logger = get_logger()

ConfigT = TypeVar("ConfigT")


class InfrastructureWrapper(LoggingMixin, NullableComponent):
    """Shared plumbing for wrappers: call log, state events, logging."""

    def __init__(
        self,
        *,
        null: bool | None = None,
        dependencies: dict[str, Any] | None = None,
    ) -> None:
        """Wire the wrapper.

        Args:
            null: True for an embedded stub client, False for a real one;
                None derives the mode from ``dependencies`` (wrappers built
                on other wrappers).
            dependencies: Lower-level wrappers this wrapper sits on.
        """
        mode = None if null is None else (Mode.NULL if null else Mode.LIVE)
        self._wire(mode, dependencies)
        self._calls = CallLog()
        self._events = StateEventEmitter(source=type(self).__name__)
        self._init_logger(layer="infrastructure", mode=self.mode.value)

    def track(self) -> OutputTracker:
        """Return a read-only view of every call made through this instance."""
        return OutputTracker(self._calls)

    def on(self, name: str, handler: EventHandler) -> Subscription:
        """Subscribe to this wrapper's state events."""
        return self._events.on(name, handler)

    def _record(self, operation: str, /, **arguments: Any) -> TrackedCall:
        return self._calls.record(operation, arguments)

    def _emit(self, event: str, /, **payload: Any) -> StateEvent:
        return self._events.emit(event, payload)

    def _require_null(self, operation: str) -> None:
        """Guard behaviour-simulation methods.

        Raises:
            SimulationUnavailableError: If this instance is live.
        """
        if not self.is_null:
            raise SimulationUnavailableError(type(self).__name__, operation)

    @classmethod
    def _live_config(cls, config_cls: type[ConfigT], config: Any) -> ConfigT:
        """Coerce a config for ``create``, ignoring null-only fields.

        Canned responses passed to a live factory are almost always a shared
        test config reused by mistake; they are logged and left unused.
        """
        resolved = coerce_config(config_cls, config)
        ignored = null_only_overrides(resolved)
        if ignored:
            logger.warning(
                "null_only_config_ignored", component=cls.__name__, fields=ignored
            )
        return resolved
