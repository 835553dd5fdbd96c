"""StateEvent value object: an observable state transition."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StateEvent:
    """Emitted when a component's observable state changes.

    Attributes:
        name: Dotted event name (e.g. "file.written").
        payload: Snapshot of the new state, copied at emission time.
        source: Class name of the emitting component.
    """

    name: str
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)
    source: str = ""
