"""Counter API client: a high-level wrapper built on HttpClient.

The counter API stores named integers:

    GET  {base_path}/{name}   -> 200 {"value": <int>}
    PUT  {base_path}/{name}   <- {"value": <int>}, 2xx on success

CounterApiClient speaks Counter value objects and does not expose HTTP to
its callers. It owns its HttpClient, built in the same mode as itself.

Null responses can be configured at this level, in counter terms:

    CounterApiClient.create_null({"responses": {"load": 5}})
    CounterApiClient.create_null({"responses": {
        "load": {"kind": "sequence", "values": [1, 2, 3]},
        "store": {"kind": "error", "error": CounterApiError("a", 503, "store")},
    }})

``create_null`` translates them into HTTP responses for the HttpClient it
builds: a ``load`` value ``5`` becomes ``{"status": 200, "body": {"value":
5}}`` on ``get``; a ``store`` value becomes a ``204``. Errors pass through
as configured. HTTP-level responses in ``config.http.responses`` still work
for anything not configured at this level (a 500 on ``get``, say). With
nothing configured every counter loads as 0.

Exhaustion policy: RAISE, declared here for the counter operations. A ``load``
or ``store`` sequence that runs out raises ResponsesExhaustedError naming
the counter operation. A single sequence may still override the policy
with ``on_exhausted``.

Documented error translation: a non-2xx status becomes CounterApiError.
Transport errors from httpx propagate unchanged.

State events:
- ``counter.stored`` ``{"name", "value"}`` after a successful store
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any
from urllib.parse import quote

from src.config.infrastructure_config import CounterApiConfig
from src.config.loader import coerce_config
from src.domain.errors.construction import InvalidResponseError
from src.domain.errors.counter import CounterApiError
from src.domain.errors.responses import ResponsesExhaustedError
from src.domain.models.counter import Counter
from src.domain.value_objects.configurable_response import (
    ConfigurableResponse,
    ErrorResponse,
    ExhaustionPolicy,
    SequenceResponse,
    ValueResponse,
    map_response,
    parse_response,
)
from src.infrastructure.adapters.http_client import HttpClient
from src.infrastructure.nullability.component import Mode
from src.infrastructure.nullability.graph import Dependency, build_dependencies
from src.infrastructure.nullability.wrapper import InfrastructureWrapper

COUNTER_OPERATIONS: tuple[str, ...] = ("load", "store")

COUNTER_EXHAUSTION = ExhaustionPolicy.RAISE

# Served by a null client when neither level configures "get"
DEFAULT_NULL_LOAD_RESPONSE = ValueResponse({"status": 200, "body": {"value": 0}})


def _load_to_http(value: Any) -> dict[str, Any]:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidResponseError("load", f"expected an int counter value, got {value!r}")
    return {"status": 200, "body": Counter(name="", value=value).to_payload()}


def _store_to_http(value: Any) -> dict[str, Any]:
    return {"status": 204}


def _to_http_response(
    operation: str, entry: Any, transform: Callable[[Any], Any]
) -> ConfigurableResponse:
    """Translate one counter-level response for the HTTP stub underneath.

    A sequence gets an explicit policy at the HTTP level. Under RAISE it is
    followed by an error element, repeated forever, that names the counter
    operation rather than the HTTP method.
    """
    response = map_response(parse_response(operation, entry), transform)
    if not isinstance(response, SequenceResponse):
        return response
    if (response.on_exhausted or COUNTER_EXHAUSTION) is ExhaustionPolicy.REPEAT_LAST:
        return SequenceResponse(response.values, ExhaustionPolicy.REPEAT_LAST)
    exhausted = ErrorResponse(ResponsesExhaustedError(operation, len(response.values)))
    return SequenceResponse((*response.values, exhausted), ExhaustionPolicy.REPEAT_LAST)


def _translate_responses(config: CounterApiConfig) -> CounterApiConfig:
    """Return ``config`` with counter-level responses moved onto its HTTP slice."""
    unknown = sorted(set(config.responses) - set(COUNTER_OPERATIONS))
    if unknown:
        raise InvalidResponseError(
            unknown[0], f"CounterApiClient has no such operation (expected one of {list(COUNTER_OPERATIONS)})"
        )

    http_responses = dict(config.http.responses)
    if "load" in config.responses:
        http_responses["get"] = _to_http_response("load", config.responses["load"], _load_to_http)
    else:
        http_responses.setdefault("get", DEFAULT_NULL_LOAD_RESPONSE)
    if "store" in config.responses:
        http_responses["put"] = _to_http_response(
            "store", config.responses["store"], _store_to_http
        )
    return replace(config, http=replace(config.http, responses=http_responses))


class CounterApiClient(InfrastructureWrapper):
    """Loads and stores counters through the counter API.

    Usage:
        api = CounterApiClient.create({"http": {"endpoint": "https://counters.example.com"}})
        counter = await api.load("visits")
        await api.store(counter.increment())
    """

    EXHAUSTION = COUNTER_EXHAUSTION
    DEPENDENCIES = (Dependency("http", HttpClient, config_field="http"),)

    def __init__(self, http: HttpClient, config: CounterApiConfig | None = None) -> None:
        """Initialize on top of an HttpClient; the mode follows ``http``.

        Args:
            http: Live or null HttpClient.
            config: Resolved config (defaults when omitted).
        """
        super().__init__(dependencies={"http": http})
        self._http = http
        self._config = config or CounterApiConfig()

    @classmethod
    def create(
        cls, config: CounterApiConfig | Mapping[str, Any] | None = None
    ) -> CounterApiClient:
        """Build a live client on a live HttpClient."""
        resolved = cls._live_config(CounterApiConfig, config)
        dependencies = build_dependencies(cls.DEPENDENCIES, resolved, Mode.LIVE)
        return cls(config=resolved, **dependencies)

    @classmethod
    def create_null(
        cls, config: CounterApiConfig | Mapping[str, Any] | None = None
    ) -> CounterApiClient:
        """Build a null client whose HttpClient serves translated responses."""
        resolved = _translate_responses(coerce_config(CounterApiConfig, config))
        dependencies = build_dependencies(cls.DEPENDENCIES, resolved, Mode.NULL)
        return cls(config=resolved, **dependencies)

    async def load(self, name: str) -> Counter:
        """Fetch a counter.

        Raises:
            CounterApiError: If the API answers with a non-2xx status.
            InvalidCounterPayloadError: If the body has no integer value.
        """
        self._record("load", name=name)
        response = await self._http.get(self._path(name))
        if not response.ok:
            raise CounterApiError(name, response.status, "load")
        counter = Counter.from_payload(name, response.json())
        self._log_operation("load", counter=name).debug("counter_loaded", value=counter.value)
        return counter

    async def store(self, counter: Counter) -> None:
        """Save a counter.

        Raises:
            CounterApiError: If the API answers with a non-2xx status.
        """
        self._record("store", name=counter.name, value=counter.value)
        response = await self._http.put(self._path(counter.name), json=counter.to_payload())
        if not response.ok:
            raise CounterApiError(counter.name, response.status, "store")
        self._log_operation("store", counter=counter.name).info(
            "counter_stored", value=counter.value
        )
        self._emit("counter.stored", name=counter.name, value=counter.value)

    async def aclose(self) -> None:
        """Close the underlying HttpClient."""
        await self._http.aclose()

    def _path(self, name: str) -> str:
        return f"{self._config.base_path}/{quote(name, safe='')}"
