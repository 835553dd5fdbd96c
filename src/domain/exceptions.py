"""Base exception classes for the nullables domain layer."""


class NullablesError(Exception):
    """Base exception for all framework and reference-application errors.

    Every exception raised deliberately by this package inherits from this
    class, so callers can separate framework failures from errors that an
    outside system (httpx, the filesystem) raised and a wrapper re-surfaced
    unchanged.

    Subclass families:
    - ConstructionError: a factory could not produce an instance
    - StubResponseError: a null-mode stub served a configured failure
    - SimulationUnavailableError: behaviour simulation on a live instance
    - CounterError: reference counter domain failures
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
