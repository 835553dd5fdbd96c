"""Counter domain errors for the reference application."""

from __future__ import annotations

from src.domain.exceptions import NullablesError


class CounterError(NullablesError):
    """Base exception for counter failures."""

    pass


class InvalidCounterPayloadError(CounterError):
    """Raised when a counter payload does not carry an integer value."""

    def __init__(self, name: str = "", payload: object = None) -> None:
        """Initialize with the counter name and the rejected payload.

        Args:
            name: Counter name.
            payload: The payload as received.
        """
        super().__init__(f"Counter '{name}' payload has no integer 'value': {payload!r}")
        self.name = name
        self.payload = payload


class CounterApiError(CounterError):
    """Raised when the counter API answers with a non-success status.

    This is the counter client's documented translation of HTTP failures;
    transport errors (timeouts, refused connections) are not translated.
    """

    def __init__(self, name: str = "", status: int = 0, operation: str = "") -> None:
        """Initialize with the request details.

        Args:
            name: Counter name.
            status: HTTP status code returned.
            operation: Client operation that failed.
        """
        super().__init__(f"Counter API {operation} for '{name}' failed with status {status}")
        self.name = name
        self.status = status
        self.operation = operation
