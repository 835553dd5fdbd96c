"""Configurable responses served by embedded stubs.

A configurable response is what a null-mode stub hands back instead of
performing real I/O. It is a tagged variant with three shapes:

- ValueResponse: the same value on every call
- SequenceResponse: values served strictly first-in first-out, one per call
- ErrorResponse: the same failure raised on every call

Responses may also be written as plain mappings, which is convenient when a
whole config is expressed as nested dictionaries:

    {"kind": "value", "value": {"status": 200}}
    {"kind": "sequence", "values": [{"status": 500}, {"status": 200}]}
    {"kind": "error", "error": "connection refused"}

Any other object is treated as the value of a ValueResponse. A mapping that
happens to contain a ``kind`` key is read as a response entry, so wrap such
values in ValueResponse explicitly.

What happens after a sequence runs out is never implicit. The stub that
consumes the responses declares an ExhaustionPolicy, and a single sequence
may override it with ``on_exhausted``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from src.domain.errors.construction import InvalidResponseError
from src.domain.errors.responses import StubbedOperationError


class ResponseKind(str, Enum):
    """Tag of a configurable response."""

    VALUE = "value"
    SEQUENCE = "sequence"
    ERROR = "error"


class ExhaustionPolicy(str, Enum):
    """What a stub does once a sequence response is used up.

    Values:
        REPEAT_LAST: Keep serving the final element of the sequence.
        RAISE: Raise ResponsesExhaustedError on every further call.
    """

    REPEAT_LAST = "repeat_last"
    RAISE = "raise"


@dataclass(frozen=True)
class ValueResponse:
    """Serve ``value`` on every call."""

    kind: ClassVar[ResponseKind] = ResponseKind.VALUE

    value: Any = None


@dataclass(frozen=True)
class ErrorResponse:
    """Raise ``error`` on every call.

    Attributes:
        error: An exception instance, an exception class (instantiated with
            a message on each call), or a message string (raised as
            StubbedOperationError).
    """

    kind: ClassVar[ResponseKind] = ResponseKind.ERROR

    error: BaseException | type[BaseException] | str = "Stubbed failure"

    def __post_init__(self) -> None:
        """Reject error entries that cannot be raised."""
        error = self.error
        if isinstance(error, (BaseException, str)):
            return
        if isinstance(error, type) and issubclass(error, BaseException):
            return
        raise InvalidResponseError(reason=f"cannot raise {error!r}")

    def to_exception(self, operation: str) -> BaseException:
        """Build the exception to raise for one call.

        Args:
            operation: Operation being served, used in generated messages.

        Returns:
            The exception instance to raise.
        """
        if isinstance(self.error, BaseException):
            return self.error
        if isinstance(self.error, str):
            return StubbedOperationError(operation, self.error)
        return self.error(f"Stubbed failure for {operation}")


@dataclass(frozen=True)
class SequenceResponse:
    """Serve ``values`` in order, one element per call.

    Elements are plain values, ValueResponse or ErrorResponse entries, so a
    sequence can fail on one call and succeed on the next.

    Attributes:
        values: The ordered elements.
        on_exhausted: Overrides the consuming stub's ExhaustionPolicy.
    """

    kind: ClassVar[ResponseKind] = ResponseKind.SEQUENCE

    values: tuple[Any, ...] = field(default_factory=tuple)
    on_exhausted: ExhaustionPolicy | None = None

    def __post_init__(self) -> None:
        """Normalize elements and reject empty or nested sequences."""
        elements = tuple(_parse_element(value) for value in self.values)
        if not elements:
            raise InvalidResponseError(reason="a sequence needs at least one value")
        object.__setattr__(self, "values", elements)
        if self.on_exhausted is not None:
            object.__setattr__(self, "on_exhausted", ExhaustionPolicy(self.on_exhausted))


ConfigurableResponse = Union[ValueResponse, SequenceResponse, ErrorResponse]

_RESPONSE_TYPES = (ValueResponse, SequenceResponse, ErrorResponse)


def _parse_element(value: Any) -> ValueResponse | ErrorResponse:
    parsed = parse_response("", value)
    if isinstance(parsed, SequenceResponse):
        raise InvalidResponseError(reason="sequences cannot be nested")
    return parsed


def parse_response(operation: str, entry: Any) -> ConfigurableResponse:
    """Turn a response entry into a ConfigurableResponse.

    Args:
        operation: Operation the response is configured for (for errors).
        entry: A ConfigurableResponse, a ``{"kind": ...}`` mapping, or a
            plain value.

    Returns:
        The parsed response.

    Raises:
        InvalidResponseError: If a ``kind`` mapping is malformed.
    """
    if isinstance(entry, _RESPONSE_TYPES):
        return entry
    if not (isinstance(entry, Mapping) and "kind" in entry):
        return ValueResponse(entry)

    try:
        kind = ResponseKind(entry["kind"])
    except ValueError:
        raise InvalidResponseError(operation, f"unknown kind {entry['kind']!r}") from None

    try:
        if kind is ResponseKind.VALUE:
            return ValueResponse(entry["value"])
        if kind is ResponseKind.ERROR:
            return ErrorResponse(entry["error"])
        values = entry["values"]
        if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
            raise InvalidResponseError(operation, "'values' must be a list")
        return SequenceResponse(tuple(values), entry.get("on_exhausted"))
    except KeyError as exc:
        raise InvalidResponseError(operation, f"missing {exc.args[0]!r}") from None
    except InvalidResponseError as exc:
        if exc.operation:
            raise
        raise InvalidResponseError(operation, exc.reason) from None
    except ValueError:
        raise InvalidResponseError(
            operation, f"unknown exhaustion policy {entry.get('on_exhausted')!r}"
        ) from None


def map_response(
    response: ConfigurableResponse, transform: Callable[[Any], Any]
) -> ConfigurableResponse:
    """Apply ``transform`` to every value a response would serve.

    Errors pass through untouched. Higher-level wrappers use this to turn
    their own canned responses into the low-level responses of the wrapper
    they sit on.

    Args:
        response: The response to translate.
        transform: Function applied to each served value.

    Returns:
        A response of the same kind carrying transformed values.
    """
    if isinstance(response, ValueResponse):
        return ValueResponse(transform(response.value))
    if isinstance(response, ErrorResponse):
        return response
    return SequenceResponse(
        tuple(map_response(element, transform) for element in response.values),
        response.on_exhausted,
    )
