"""Counter update DTO returned by the counter services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CounterUpdateDTO:
    """One completed read-transform-write of a counter.

    Attributes:
        name: Counter name.
        before: Value that was loaded.
        after: Value that was stored.
        at: When the update completed, from the service's Clock.
    """

    name: str
    before: int
    after: int
    at: datetime

    def to_report_line(self) -> str:
        """Render as one line of the counter report (no trailing newline)."""
        return f"{self.at.isoformat()} {self.name} {self.before} -> {self.after}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "before": self.before,
            "after": self.after,
            "at": self.at.isoformat(),
        }
