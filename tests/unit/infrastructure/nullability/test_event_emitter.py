"""Unit tests for StateEventEmitter."""

from __future__ import annotations

import threading

import pytest

from src.domain.value_objects.state_event import StateEvent
from src.infrastructure.nullability.event_emitter import ANY_EVENT, StateEventEmitter


class TestStateEventEmitter:
    """Tests for subscription and delivery."""

    def test_delivers_to_matching_handlers_in_registration_order(self) -> None:
        emitter = StateEventEmitter(source="Thing")
        received: list[str] = []
        emitter.on("a", lambda event: received.append("first"))
        emitter.on("b", lambda event: received.append("other"))
        emitter.on("a", lambda event: received.append("second"))

        emitter.emit("a")

        assert received == ["first", "second"]

    def test_event_carries_payload_and_source(self) -> None:
        emitter = StateEventEmitter(source="Thing")
        received: list[StateEvent] = []
        emitter.on("changed", received.append)

        returned = emitter.emit("changed", {"value": 3})

        assert received == [StateEvent("changed", {"value": 3}, "Thing")]
        assert returned == received[0]

    def test_payload_is_copied(self) -> None:
        emitter = StateEventEmitter()
        received: list[StateEvent] = []
        emitter.on("changed", received.append)
        payload = {"items": [1]}

        emitter.emit("changed", payload)
        payload["items"].append(2)

        assert received[0].payload == {"items": [1]}

    def test_uncopyable_payload_is_delivered(self) -> None:
        emitter = StateEventEmitter()
        received: list[StateEvent] = []
        emitter.on("opened", received.append)
        lock = threading.Lock()

        emitter.emit("opened", {"lock": lock, "count": 1})

        assert received[0].payload["lock"] is lock
        assert received[0].payload["count"] == 1

    def test_any_event_receives_everything(self) -> None:
        emitter = StateEventEmitter()
        names: list[str] = []
        emitter.on(ANY_EVENT, lambda event: names.append(event.name))

        emitter.emit("a")
        emitter.emit("b")

        assert names == ["a", "b"]

    def test_no_replay(self) -> None:
        """Handlers only see events emitted after they registered."""
        emitter = StateEventEmitter()
        emitter.emit("a")
        received: list[StateEvent] = []

        emitter.on("a", received.append)

        assert received == []

    def test_unsubscribe(self) -> None:
        emitter = StateEventEmitter()
        received: list[StateEvent] = []
        subscription = emitter.on("a", received.append)

        subscription.unsubscribe()
        subscription()
        emitter.emit("a")

        assert received == []
        assert not subscription.active
        assert emitter.listener_count() == 0

    def test_handler_added_during_emit_waits_for_next_event(self) -> None:
        emitter = StateEventEmitter()
        late: list[StateEvent] = []
        emitter.on("a", lambda event: emitter.on("a", late.append))

        emitter.emit("a")
        assert late == []

        emitter.emit("a")
        assert len(late) == 1

    def test_handler_exceptions_propagate(self) -> None:
        emitter = StateEventEmitter()

        def fail(event: StateEvent) -> None:
            raise RuntimeError("handler failed")

        emitter.on("a", fail)

        with pytest.raises(RuntimeError, match="handler failed"):
            emitter.emit("a")

    def test_listener_count(self) -> None:
        emitter = StateEventEmitter()
        emitter.on("a", print)
        emitter.on("a", print)
        emitter.on("b", print)

        assert emitter.listener_count() == 3
        assert emitter.listener_count("a") == 2

    @pytest.mark.parametrize("name", ["", ANY_EVENT])
    def test_reserved_names_cannot_be_emitted(self, name: str) -> None:
        with pytest.raises(ValueError):
            StateEventEmitter().emit(name)

    def test_empty_name_cannot_be_subscribed(self) -> None:
        with pytest.raises(ValueError):
            StateEventEmitter().on("", print)
