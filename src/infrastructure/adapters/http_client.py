"""Outbound HTTP wrapper over httpx.

HttpClient is the only code that talks HTTP. Live instances hold an
``httpx.AsyncClient``; null instances hold StubbedAsyncClient, defined
below, which implements the part of ``httpx.AsyncClient`` that HttpClient
uses (``request`` and ``aclose``) and answers from configured responses.

Null responses are keyed by lower-case HTTP method. A response value is a
status code, an HttpResponse, or a mapping:

    HttpClient.create_null({
        "responses": {
            "get": {"kind": "sequence", "values": [
                {"status": 500},
                {"status": 200, "body": {"value": 5}},
            ]},
        },
    })

``body`` may be a dict or list (sent as JSON), a string, or bytes. Methods
with nothing configured answer ``200`` with an empty body.

Exhaustion policy: RAISE. A test that makes more requests than it
configured responses for gets ResponsesExhaustedError rather than a
silently repeated answer.

State events:
- ``http.in_flight`` ``{"count": n}`` when a request starts and when it ends
- ``http.closed`` ``{}`` once the client is closed

Transport failures (timeouts, refused connections) are httpx exceptions
and propagate unchanged. Configure an ErrorResponse holding, for example,
``httpx.ReadTimeout("timed out")`` to get the same shape from a null client.
"""

from __future__ import annotations

import json as jsonlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from src.config.infrastructure_config import HttpClientConfig
from src.config.loader import coerce_config
from src.domain.errors.construction import InvalidResponseError
from src.domain.value_objects.configurable_response import ExhaustionPolicy
from src.infrastructure.nullability.responses import ConfigurableResponses
from src.infrastructure.nullability.wrapper import InfrastructureWrapper

HTTP_METHODS: tuple[str, ...] = ("get", "post", "put", "delete")


@dataclass(frozen=True)
class HttpResponse:
    """Response returned by HttpClient in both modes.

    Attributes:
        status: HTTP status code.
        headers: Response headers (lower-case names).
        text: Decoded body.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON; an empty body decodes to None."""
        return jsonlib.loads(self.text) if self.text else None


class AsyncHttpTransport(Protocol):
    """The subset of ``httpx.AsyncClient`` HttpClient depends on."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response: ...

    async def aclose(self) -> None: ...


def _validate_response(operation: str, value: Any) -> None:
    """Reject response values StubbedAsyncClient cannot turn into a response."""
    if isinstance(value, HttpResponse):
        return
    if isinstance(value, int) and not isinstance(value, bool):
        return
    if isinstance(value, Mapping):
        unknown = set(value) - {"status", "body", "headers"}
        if unknown:
            raise InvalidResponseError(operation, f"unknown response keys {sorted(unknown)}")
        status = value.get("status", 200)
        if not isinstance(status, int) or isinstance(status, bool):
            raise InvalidResponseError(operation, f"status must be an int, got {status!r}")
        return
    raise InvalidResponseError(
        operation, f"expected a status, mapping or HttpResponse, got {type(value).__name__}"
    )


def _build_response(value: Any, request: httpx.Request) -> httpx.Response:
    if isinstance(value, HttpResponse):
        return httpx.Response(
            value.status, headers=dict(value.headers), text=value.text, request=request
        )
    if isinstance(value, int):
        return httpx.Response(value, request=request)

    status = value.get("status", 200)
    headers = dict(value.get("headers") or {})
    body = value.get("body")
    if body is None:
        return httpx.Response(status, headers=headers, request=request)
    if isinstance(body, bytes):
        return httpx.Response(status, headers=headers, content=body, request=request)
    if isinstance(body, str):
        return httpx.Response(status, headers=headers, text=body, request=request)
    return httpx.Response(status, headers=headers, json=body, request=request)


class StubbedAsyncClient:
    """Embedded stand-in for ``httpx.AsyncClient``.

    Builds real ``httpx.Response`` objects in memory; nothing is sent and
    nothing awaits, so calls complete in the same event-loop step.
    """

    EXHAUSTION = ExhaustionPolicy.RAISE

    def __init__(self, base_url: str, responses: Mapping[str, Any] | None = None) -> None:
        """Initialize the stub.

        Args:
            base_url: Base URL used to build request objects.
            responses: Canned responses keyed by lower-case method.
        """
        self._base_url = base_url.rstrip("/")
        self._responses = ConfigurableResponses(
            responses,
            exhaustion=self.EXHAUSTION,
            defaults={method: 200 for method in HTTP_METHODS},
            operations=HTTP_METHODS,
            validate=_validate_response,
            owner=type(self).__name__,
        )
        self.is_closed = False

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        value = self._responses.next(method.lower())
        request = httpx.Request(
            method,
            f"{self._base_url}/{url.lstrip('/')}",
            params=params,
            json=json,
            headers=headers,
        )
        return _build_response(value, request)

    async def aclose(self) -> None:
        self.is_closed = True


class HttpClient(InfrastructureWrapper):
    """Wrapper for outbound HTTP requests.

    Usage:
        http = HttpClient.create({"endpoint": "https://api.example.com"})
        response = await http.get("/counters/a")

        http = HttpClient.create_null({"responses": {"get": 404}})
        tracker = http.track()
    """

    def __init__(
        self,
        client: AsyncHttpTransport,
        config: HttpClientConfig | None = None,
        *,
        null: bool = False,
    ) -> None:
        """Initialize with a real or stubbed client.

        Args:
            client: ``httpx.AsyncClient`` or StubbedAsyncClient.
            config: Resolved config (defaults when omitted).
            null: True when ``client`` is the embedded stub.
        """
        super().__init__(null=null)
        self._client = client
        self._config = config or HttpClientConfig()
        self._in_flight = 0
        self._closed = False

    @classmethod
    def create(cls, config: HttpClientConfig | Mapping[str, Any] | None = None) -> HttpClient:
        """Build a live client backed by ``httpx.AsyncClient``."""
        resolved = cls._live_config(HttpClientConfig, config)
        headers = dict(resolved.headers)
        if resolved.token:
            headers["Authorization"] = f"Bearer {resolved.token}"
        client = httpx.AsyncClient(
            base_url=resolved.endpoint,
            headers=headers,
            timeout=resolved.timeout_seconds,
        )
        return cls(client, resolved)

    @classmethod
    def create_null(
        cls, config: HttpClientConfig | Mapping[str, Any] | None = None
    ) -> HttpClient:
        """Build a null client answering from ``config.responses``."""
        resolved = coerce_config(HttpClientConfig, config)
        return cls(StubbedAsyncClient(resolved.endpoint, resolved.responses), resolved, null=True)

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def in_flight(self) -> int:
        """Requests started but not yet finished."""
        return self._in_flight

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        return await self._request("get", path, params=params, headers=headers)

    async def post(
        self, path: str, *, json: Any = None, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        return await self._request("post", path, json=json, headers=headers)

    async def put(
        self, path: str, *, json: Any = None, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        return await self._request("put", path, json=json, headers=headers)

    async def delete(
        self, path: str, *, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        return await self._request("delete", path, headers=headers)

    async def aclose(self) -> None:
        """Close the underlying client. Closing twice is a no-op."""
        self._record("aclose")
        if self._closed:
            return
        await self._client.aclose()
        self._closed = True
        self._emit("http.closed")

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **options: Any) -> HttpResponse:
        """Send one request.

        Args:
            method: Lower-case HTTP method; also the tracked operation name.
            path: Path relative to the endpoint.
            **options: ``params``, ``json`` and ``headers``; None values are
                neither sent nor tracked.

        Returns:
            The response, whatever its status.
        """
        sent = {name: value for name, value in options.items() if value is not None}
        self._record(method, path=path, **sent)
        log = self._log_operation(method, path=path)

        self._in_flight += 1
        try:
            self._emit("http.in_flight", count=self._in_flight)
            response = await self._client.request(method.upper(), path, **sent)
        except Exception as exc:
            log.warning("http_request_failed", error=str(exc), error_type=type(exc).__name__)
            raise
        finally:
            self._in_flight -= 1
            self._emit("http.in_flight", count=self._in_flight)

        log.info("http_request_completed", status=response.status_code)
        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            text=response.text,
        )
