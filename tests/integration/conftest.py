"""Fixtures for the integration suite.

These tests build wrappers with create() against sandboxed real systems: a
counter API served from a loopback HTTP server, and a temporary directory.
They exist only to show that live wrappers and their embedded stubs behave
the same way.
"""

from collections.abc import Iterator

import pytest

from tests.helpers.counter_server import CounterServer, serve_counters


@pytest.fixture
def counter_server() -> Iterator[CounterServer]:
    """Serve a counter API on an ephemeral loopback port."""
    with serve_counters() as server:
        yield server
