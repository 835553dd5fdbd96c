"""Live HttpClient and CounterApiClient against a loopback counter API.

Each test runs the same steps against a live wrapper and a null one
configured to answer as the server does, and compares what callers see.
"""

from __future__ import annotations

import httpx
import pytest

from src.domain.errors import CounterApiError
from src.domain.models.counter import Counter
from src.infrastructure.adapters.counter_api import CounterApiClient
from src.infrastructure.adapters.http_client import HttpClient
from tests.helpers.counter_server import SLOW_PATH, CounterServer

pytestmark = pytest.mark.integration


class TestHttpClientLiveMatchesNull:
    """HttpClient.create() against a real server vs. create_null()."""

    async def test_get_json(self, counter_server: CounterServer) -> None:
        counter_server.counters["visits"] = 5
        null = HttpClient.create_null(
            {"responses": {"get": {"status": 200, "body": {"value": 5}}}}
        )

        async with HttpClient.create({"endpoint": counter_server.url}) as live:
            live_response = await live.get("/counters/visits")
        null_response = await null.get("/counters/visits")

        assert live_response.status == null_response.status == 200
        assert live_response.json() == null_response.json() == {"value": 5}
        assert live.track().calls_to("get") == null.track().calls_to("get")

    async def test_not_found_is_a_response_not_an_error(
        self, counter_server: CounterServer
    ) -> None:
        null = HttpClient.create_null({"responses": {"get": 404}})

        async with HttpClient.create({"endpoint": counter_server.url}) as live:
            live_response = await live.get("/counters/missing")
        null_response = await null.get("/counters/missing")

        assert live_response.status == null_response.status == 404
        assert not live_response.ok and not null_response.ok

    async def test_timeout_shape(self, counter_server: CounterServer) -> None:
        null = HttpClient.create_null(
            {"responses": {"get": {"kind": "error", "error": httpx.ReadTimeout("timed out")}}}
        )

        async with HttpClient.create(
            {"endpoint": counter_server.url, "timeout_seconds": 0.2}
        ) as live:
            with pytest.raises(httpx.ReadTimeout):
                await live.get(SLOW_PATH)
            assert live.in_flight == 0
        with pytest.raises(httpx.ReadTimeout):
            await null.get(SLOW_PATH)

        assert live.track().count("get") == null.track().count("get") == 1

    async def test_bearer_token_is_sent(self, counter_server: CounterServer) -> None:
        async with HttpClient.create(
            {"endpoint": counter_server.url, "token": "secret"}
        ) as live:
            await live.get("/counters/missing")

        assert counter_server.requests == [("GET", "/counters/missing", None)]
        assert counter_server.authorizations == ["Bearer secret"]


class TestCounterApiLiveMatchesNull:
    """CounterApiClient.create() against a real server vs. create_null()."""

    async def test_load_and_store(self, counter_server: CounterServer) -> None:
        counter_server.counters["visits"] = 5
        null = CounterApiClient.create_null({"responses": {"load": 5}})
        live = CounterApiClient.create({"http": {"endpoint": counter_server.url}})

        try:
            for api in (live, null):
                loaded = await api.load("visits")
                await api.store(loaded.double())
        finally:
            await live.aclose()

        assert counter_server.counters["visits"] == 10
        assert live.track().all() == null.track().all()
        assert live.track().last("store").arguments == {"name": "visits", "value": 10}

    async def test_missing_counter(self, counter_server: CounterServer) -> None:
        null = CounterApiClient.create_null({"http": {"responses": {"get": 404}}})
        live = CounterApiClient.create({"http": {"endpoint": counter_server.url}})

        try:
            for api in (live, null):
                with pytest.raises(CounterApiError) as exc_info:
                    await api.load("missing")
                assert exc_info.value.status == 404
        finally:
            await live.aclose()

    async def test_stored_event_in_both_modes(self, counter_server: CounterServer) -> None:
        live = CounterApiClient.create({"http": {"endpoint": counter_server.url}})
        null = CounterApiClient.create_null()
        events: dict[str, list[dict[str, object]]] = {"live": [], "null": []}
        live.on("counter.stored", lambda event: events["live"].append(dict(event.payload)))
        null.on("counter.stored", lambda event: events["null"].append(dict(event.payload)))

        try:
            await live.store(Counter("a", 3))
            await null.store(Counter("a", 3))
        finally:
            await live.aclose()

        assert events["live"] == events["null"] == [{"name": "a", "value": 3}]
