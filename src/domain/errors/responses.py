"""Errors produced by null-mode stubs and behaviour simulation.

A null stub only fails when a test asked it to: either an error response
was configured for the operation, or a sequence ran out under the
``raise`` exhaustion policy.
"""

from __future__ import annotations

from src.domain.exceptions import NullablesError


class StubResponseError(NullablesError):
    """Base exception for failures served by an embedded stub."""

    pass


class StubbedOperationError(StubResponseError):
    """Raised for an error response configured by message only.

    Used when a response mapping says ``{"kind": "error", "error": "..."}``
    rather than supplying an exception instance.
    """

    def __init__(self, operation: str = "", message: str = "Stubbed failure") -> None:
        """Initialize with the failing operation.

        Args:
            operation: Operation the error was configured for.
            message: The configured message.
        """
        super().__init__(f"{operation}: {message}" if operation else message)
        self.operation = operation


class ResponsesExhaustedError(StubResponseError):
    """Raised when a sequence response runs out under the ``raise`` policy."""

    def __init__(self, operation: str = "", configured: int = 0) -> None:
        """Initialize with the exhausted operation.

        Args:
            operation: Operation whose sequence ran out.
            configured: How many responses the sequence held.
        """
        message = (
            f"No responses left for '{operation}': "
            f"all {configured} configured response(s) were consumed"
        )
        super().__init__(message)
        self.operation = operation
        self.configured = configured


class SimulationUnavailableError(NullablesError):
    """Raised when a behaviour-simulation method is called on a live instance.

    Simulation (advancing a clock, for example) only makes sense for an
    embedded stub; the real world cannot be told to move.
    """

    def __init__(self, component: str = "", operation: str = "") -> None:
        """Initialize with the component and simulation method.

        Args:
            component: Name of the live component.
            operation: The simulation method that was called.
        """
        super().__init__(f"{component}.{operation}() is only available on null instances")
        self.component = component
        self.operation = operation
