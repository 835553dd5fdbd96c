"""State event emission for state-based tests.

A component owning a StateEventEmitter emits an event right after each
observable state change, inside the call that made the change. Handlers
run synchronously, in registration order, before that call returns, so a
test can observe a transition without polling and without checking which
dependency methods were called.

There is no replay. A handler registered after an event was emitted never
sees it.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from src.domain.value_objects.state_event import StateEvent
from src.infrastructure.nullability.snapshot import snapshot_values

# Subscribe with this name to receive every event
ANY_EVENT = "*"

EventHandler = Callable[[StateEvent], Any]


class _Listener:
    __slots__ = ("name", "handler", "active")

    def __init__(self, name: str, handler: EventHandler) -> None:
        self.name = name
        self.handler = handler
        self.active = True


class Subscription:
    """Handle returned by ``on()``; call it (or ``unsubscribe()``) to stop."""

    def __init__(self, emitter: StateEventEmitter, listener: _Listener) -> None:
        self._emitter = emitter
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._listener.active

    def unsubscribe(self) -> None:
        """Stop delivering events to the handler. Safe to call twice."""
        self._emitter._remove(self._listener)

    def __call__(self) -> None:
        self.unsubscribe()


class StateEventEmitter:
    """Observer list owned by one component.

    Handler exceptions are not caught; they propagate out of ``emit`` and
    therefore out of the operation that changed state.
    """

    def __init__(self, source: str = "") -> None:
        """Initialize an emitter.

        Args:
            source: Name stamped on every emitted StateEvent.
        """
        self._source = source
        self._listeners: list[_Listener] = []

    def on(self, name: str, handler: EventHandler) -> Subscription:
        """Register ``handler`` for events called ``name`` (or ANY_EVENT).

        Args:
            name: Event name to listen for.
            handler: Called with each StateEvent.

        Returns:
            A Subscription that removes the handler.
        """
        if not name:
            raise ValueError("event name must not be empty")
        listener = _Listener(name, handler)
        self._listeners.append(listener)
        return Subscription(self, listener)

    def emit(self, name: str, payload: Mapping[str, Any] | None = None) -> StateEvent:
        """Deliver an event to every handler currently registered for it.

        Args:
            name: Event name; ANY_EVENT is reserved for subscribing.
            payload: New state; deep-copied into the event where it can be.

        Returns:
            The emitted event.
        """
        if not name or name == ANY_EVENT:
            raise ValueError(f"cannot emit event named {name!r}")
        event = StateEvent(name=name, payload=snapshot_values(payload or {}), source=self._source)
        # Handlers added while emitting wait for the next event
        for listener in tuple(self._listeners):
            if listener.active and listener.name in (name, ANY_EVENT):
                listener.handler(event)
        return event

    def listener_count(self, name: str | None = None) -> int:
        """Number of registered handlers, optionally for one event name."""
        if name is None:
            return len(self._listeners)
        return sum(1 for listener in self._listeners if listener.name == name)

    def _remove(self, listener: _Listener) -> None:
        if listener.active:
            listener.active = False
            self._listeners.remove(listener)
