"""Run identifiers for correlating the log lines of one application run.

An application operation that fans out over several wrappers (one
``CounterApp.double_all`` call, for instance) sets a run id once; every log
entry written while it is active carries that id, across awaits, because
the id lives in a contextvar.

Usage:
    with bound_run_id() as run_id:
        ...  # every structlog entry now has run_id

    # In structlog configuration
    processors = [..., run_id_processor, ...]
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no run in progress"
_run_id: ContextVar[str] = ContextVar("run_id", default="")


def new_run_id() -> str:
    """Generate a new run id (UUID4 string)."""
    return str(uuid4())


def get_run_id() -> str:
    """Get the current run id, or an empty string outside a run."""
    return _run_id.get()


def set_run_id(run_id: str) -> None:
    """Set the run id for the current context.

    Args:
        run_id: The run id to set.
    """
    _run_id.set(run_id)


@contextmanager
def bound_run_id(run_id: str | None = None) -> Iterator[str]:
    """Bind a run id for the duration of a ``with`` block.

    Args:
        run_id: Id to bind; a new one is generated when omitted.

    Yields:
        The bound run id.
    """
    token = _run_id.set(run_id or new_run_id())
    try:
        yield _run_id.get()
    finally:
        _run_id.reset(token)


def run_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``run_id`` to entries written inside a run.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with run_id added when a run is active.
    """
    run_id = get_run_id()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict
