"""Observability infrastructure: structured logging and run correlation.

Usage:
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

from src.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_component,
)
from src.infrastructure.observability.logging_mixin import LoggingMixin
from src.infrastructure.observability.run_context import (
    bound_run_id,
    get_run_id,
    new_run_id,
    run_id_processor,
    set_run_id,
)

__all__: list[str] = [
    "LoggingMixin",
    "bound_run_id",
    "configure_structlog",
    "get_logger_for_component",
    "get_run_id",
    "new_run_id",
    "run_id_processor",
    "set_run_id",
]
