"""Counter value object for the reference application.

A counter is a named integer. All of its behaviour is in-memory
transformation; reading a counter from the outside world and writing it back
is the job of the infrastructure layer, which accepts and returns Counter
instances.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from src.domain.errors.counter import InvalidCounterPayloadError

DEFAULT_COUNTER_NAME = "default"


@dataclass(frozen=True)
class Counter:
    """A named integer counter.

    Transformations return a new Counter and leave the original untouched.

    Attributes:
        name: Counter name, unique per counter API.
        value: Current value.
    """

    name: str
    value: int = 0

    @classmethod
    def create(cls, name: str = DEFAULT_COUNTER_NAME, value: int = 0) -> Counter:
        """Create a counter; every argument is optional."""
        return cls(name=name, value=value)

    def double(self) -> Counter:
        """Return a counter holding twice this value."""
        return self.scale(2)

    def scale(self, factor: int) -> Counter:
        """Return a counter holding this value multiplied by ``factor``."""
        return replace(self, value=self.value * factor)

    def increment(self, by: int = 1) -> Counter:
        """Return a counter holding this value plus ``by``."""
        return replace(self, value=self.value + by)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the counter API body shape."""
        return {"value": self.value}

    @classmethod
    def from_payload(cls, name: str, payload: Any) -> Counter:
        """Build a counter from a counter API body.

        Args:
            name: Counter name the payload belongs to.
            payload: Decoded body, expected to be ``{"value": <int>}``.

        Returns:
            The parsed counter.

        Raises:
            InvalidCounterPayloadError: If the payload has no integer value.
        """
        if not isinstance(payload, Mapping):
            raise InvalidCounterPayloadError(name, payload)
        value = payload.get("value")
        # bool is an int subclass but never a valid counter value
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidCounterPayloadError(name, payload)
        return cls(name=name, value=value)
