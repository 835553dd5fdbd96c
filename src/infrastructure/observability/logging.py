"""structlog setup for nullables.

Call ``configure_structlog`` once at process start to pick a renderer:
deployed environments get one JSON object per line, anything else gets
coloured console output. Null graphs built in tests never call it and log
through structlog's defaults, which is what ``capture_logs`` relies on.

Every entry carries the bindings LoggingMixin adds (``component``,
``layer``, ``mode``, ``operation``) plus the ``run_id`` of the enclosing
run, if any:

    {"event": "counter_stored", "level": "info", "component": "CounterApiClient",
     "layer": "infrastructure", "mode": "live", "operation": "store",
     "run_id": "...", "timestamp": "2026-01-01T00:00:00.000000Z", "value": 10}

The level is taken from the ``level`` argument, else LOG_LEVEL, else INFO.
Unknown level names fall back to INFO.
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.run_context import run_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Environments rendered as JSON lines; every other name renders to the console
JSON_ENVIRONMENTS: frozenset[str] = frozenset({"production", "staging"})


def _get_log_level(level: str | None = None) -> int:
    name = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment in JSON_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def build_processors(environment: str) -> list[Processor]:
    """Processor chain for ``environment``; the renderer is always last."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, run_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _renderer(environment),
    ]


def configure_structlog(environment: str = "production", *, level: str | None = None) -> None:
    """Install the process-wide structlog configuration.

    Args:
        environment: One of JSON_ENVIRONMENTS for JSON lines, anything else
            for console output.
        level: Minimum level name; overrides LOG_LEVEL when given.
    """
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_component(
    component_name: str, layer: str = "infrastructure"
) -> structlog.BoundLogger:
    """Logger bound like LoggingMixin's, for code that is not a component."""
    return structlog.get_logger().bind(component=component_name, layer=layer)
