"""Per-operation response state for embedded stubs.

Every embedded stub owns one ConfigurableResponses. It is built from the
``responses`` mapping of the null config and answers ``next(operation)``
calls in the order the stub receives them:

- ValueResponse: the value, every time
- ErrorResponse: the error is raised, every time
- SequenceResponse: the next element, first-in first-out; after the last
  one, the exhaustion policy applies
- nothing configured: the stub author's default for that operation

The exhaustion policy is a required constructor argument, so each stub
states it rather than inheriting a silent default. Values are deep-copied
on the way out so a caller mutating a result cannot change what later calls
see.
"""

from __future__ import annotations

import copy
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from structlog import get_logger

from src.domain.errors.construction import InvalidResponseError
from src.domain.errors.responses import ResponsesExhaustedError
from src.domain.value_objects.configurable_response import (
    ConfigurableResponse,
    ErrorResponse,
    ExhaustionPolicy,
    SequenceResponse,
    ValueResponse,
    parse_response,
)

logger = get_logger()

ResponseValidator = Callable[[str, Any], None]


class _ResponseState:
    """Consumption state of one operation's configured response."""

    def __init__(self, response: ConfigurableResponse, policy: ExhaustionPolicy) -> None:
        self.response = response
        self.policy = policy
        self.served = 0
        self._queue: deque[ValueResponse | ErrorResponse] = deque()
        if isinstance(response, SequenceResponse):
            self._queue.extend(response.values)
            self.policy = response.on_exhausted or policy

    @property
    def remaining(self) -> int | None:
        if not isinstance(self.response, SequenceResponse):
            return None
        return len(self._queue)

    def take(self, operation: str) -> ValueResponse | ErrorResponse:
        self.served += 1
        response = self.response
        if not isinstance(response, SequenceResponse):
            return response
        if self._queue:
            return self._queue.popleft()
        if self.policy is ExhaustionPolicy.REPEAT_LAST:
            return response.values[-1]
        raise ResponsesExhaustedError(operation, len(response.values))


class ConfigurableResponses:
    """Canned responses for the operations of one embedded stub.

    Example:
        responses = ConfigurableResponses(
            {"get": {"kind": "sequence", "values": [{"status": 500}, {"status": 200}]}},
            exhaustion=ExhaustionPolicy.RAISE,
            defaults={"get": {"status": 200}},
            operations=("get", "put"),
        )
        responses.next("get")  # {"status": 500}
        responses.next("get")  # {"status": 200}
        responses.next("get")  # raises ResponsesExhaustedError
    """

    def __init__(
        self,
        responses: Mapping[str, Any] | None = None,
        *,
        exhaustion: ExhaustionPolicy,
        defaults: Mapping[str, Any] | None = None,
        operations: Iterable[str] | None = None,
        validate: ResponseValidator | None = None,
        owner: str = "stub",
    ) -> None:
        """Parse and validate the configured responses.

        Args:
            responses: Response entries keyed by operation name.
            exhaustion: What an exhausted sequence does, unless the sequence
                overrides it.
            defaults: Values served for operations with nothing configured
                (None when an operation has no entry).
            operations: Allowed operation names; None allows any.
            validate: Called as ``validate(operation, value)`` for every
                value a response could serve; raise InvalidResponseError to
                reject it.
            owner: Stub name used in log entries.

        Raises:
            InvalidResponseError: For unknown operations or rejected values.
        """
        self._exhaustion = ExhaustionPolicy(exhaustion)
        self._defaults = dict(defaults or {})
        self._owner = owner
        allowed = frozenset(operations) if operations is not None else None
        self._states: dict[str, _ResponseState] = {}

        for operation, entry in (responses or {}).items():
            if allowed is not None and operation not in allowed:
                raise InvalidResponseError(
                    operation, f"{owner} has no such operation (expected one of {sorted(allowed)})"
                )
            response = parse_response(operation, entry)
            if validate is not None:
                for value in _served_values(response):
                    validate(operation, value)
            self._states[operation] = _ResponseState(response, self._exhaustion)

    @property
    def exhaustion(self) -> ExhaustionPolicy:
        return self._exhaustion

    def is_configured(self, operation: str) -> bool:
        """Return True if a response was configured for ``operation``."""
        return operation in self._states

    def remaining(self, operation: str) -> int | None:
        """Unserved sequence elements for ``operation``; None if not a sequence."""
        state = self._states.get(operation)
        return state.remaining if state is not None else None

    def served(self, operation: str) -> int:
        """How many configured responses ``operation`` has served."""
        state = self._states.get(operation)
        return state.served if state is not None else 0

    def next(self, operation: str) -> Any:
        """Serve the next response for ``operation``.

        Args:
            operation: Operation being invoked.

        Returns:
            A deep copy of the value to hand back.

        Raises:
            ResponsesExhaustedError: If a sequence ran out under RAISE.
            BaseException: Whatever a configured ErrorResponse holds.
        """
        state = self._states.get(operation)
        if state is None:
            return copy.deepcopy(self._defaults.get(operation))

        element = state.take(operation)
        logger.debug(
            "stub_response_served",
            stub=self._owner,
            operation=operation,
            kind=element.kind.value,
            remaining=state.remaining,
        )
        if isinstance(element, ErrorResponse):
            raise element.to_exception(operation)
        return copy.deepcopy(element.value)


def _served_values(response: ConfigurableResponse) -> list[Any]:
    if isinstance(response, ValueResponse):
        return [response.value]
    if isinstance(response, SequenceResponse):
        return [element.value for element in response.values if isinstance(element, ValueResponse)]
    return []
