"""
Value objects for the nullables framework.

Value objects are immutable types defined by their attributes rather
than identity. Two value objects with the same attributes are equal.
"""

from src.domain.value_objects.configurable_response import (
    ConfigurableResponse,
    ErrorResponse,
    ExhaustionPolicy,
    ResponseKind,
    SequenceResponse,
    ValueResponse,
    map_response,
    parse_response,
)
from src.domain.value_objects.state_event import StateEvent
from src.domain.value_objects.tracked_call import TrackedCall

__all__: list[str] = [
    "ConfigurableResponse",
    "ErrorResponse",
    "ExhaustionPolicy",
    "ResponseKind",
    "SequenceResponse",
    "StateEvent",
    "TrackedCall",
    "ValueResponse",
    "map_response",
    "parse_response",
]
