"""Logging mixin shared by wrappers and application services.

Usage:
    class MyWrapper(LoggingMixin):
        def __init__(self, client) -> None:
            self._client = client
            self._init_logger(layer="infrastructure", mode="null")

        async def fetch(self) -> None:
            log = self._log_operation("fetch", path="/x")
            log.info("fetch_started")
"""

import structlog

from src.infrastructure.observability.run_context import get_run_id


class LoggingMixin:
    """Mixin providing structured logging for nullable components.

    The logger is bound with:
    - component: The class name
    - layer: "infrastructure" or "application"
    - mode: "live" or "null"

    Each operation additionally gets its name and the current run id.

    Attributes:
        _log: The structlog BoundLogger for this instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, layer: str = "infrastructure", mode: str = "live") -> None:
        """Initialize the logger with component binding.

        Should be called in __init__ once the component's mode is known.

        Args:
            layer: Layer the component belongs to.
            mode: "live" or "null".
        """
        self._log = structlog.get_logger().bind(
            component=self.__class__.__name__,
            layer=layer,
            mode=mode,
        )

    def _log_operation(
        self,
        operation: str,
        /,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind.

        Returns:
            BoundLogger with operation and run context.
        """
        run_id = get_run_id()
        if run_id:
            context["run_id"] = run_id
        return self._log.bind(operation=operation, **context)
