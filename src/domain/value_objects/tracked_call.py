"""TrackedCall value object: one outbound call recorded by a wrapper."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TrackedCall:
    """A single outbound call made through an infrastructure wrapper.

    Attributes:
        operation: Public operation name (e.g. "get", "store").
        arguments: Snapshot of the call's arguments by parameter name. Taken
            when the call started, so later mutation of the caller's objects
            does not show up here.
        index: Position in the wrapper's call log, starting at 0.
    """

    operation: str
    arguments: Mapping[str, Any] = field(default_factory=dict, hash=False)
    index: int = 0

    def get(self, name: str, default: Any = None) -> Any:
        """Return one recorded argument, or ``default`` if it was not passed."""
        return self.arguments.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "arguments": dict(self.arguments),
            "index": self.index,
        }
