"""Snapshots of call arguments and event payloads.

Recorded arguments and emitted payloads are copied so later mutation by
the caller cannot rewrite history. Values that refuse to be deep-copied
(open clients, locks, file handles) are kept by reference instead of
failing the operation that is being recorded.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def snapshot_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy each value of ``values``, keeping uncopyable ones as they are."""
    copied: dict[str, Any] = {}
    for key, value in values.items():
        try:
            copied[key] = copy.deepcopy(value)
        except (TypeError, copy.Error):
            copied[key] = value
    return copied
