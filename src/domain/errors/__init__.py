"""Domain errors for the nullables framework.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from NullablesError.
"""

from src.domain.errors.construction import (
    ConstructionError,
    InvalidConfigError,
    InvalidResponseError,
    MissingConfigError,
    MixedModeGraphError,
)
from src.domain.errors.counter import (
    CounterApiError,
    CounterError,
    InvalidCounterPayloadError,
)
from src.domain.errors.responses import (
    ResponsesExhaustedError,
    SimulationUnavailableError,
    StubbedOperationError,
    StubResponseError,
)

__all__: list[str] = [
    "ConstructionError",
    "CounterApiError",
    "CounterError",
    "InvalidConfigError",
    "InvalidCounterPayloadError",
    "InvalidResponseError",
    "MissingConfigError",
    "MixedModeGraphError",
    "ResponsesExhaustedError",
    "SimulationUnavailableError",
    "StubResponseError",
    "StubbedOperationError",
]
