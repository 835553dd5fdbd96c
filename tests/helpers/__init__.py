"""Test helpers shared across unit and integration tests.

This module provides:
- IoGuard: makes every live client raise, to prove a null graph does no I/O

Usage:
    def test_null_graph(io_guard):
        app = CounterApp.create_null()
        ...
        assert io_guard.attempts == []
"""

from tests.helpers.io_guard import IoGuard, RealIoAttemptedError, install_io_guard

__all__ = ["IoGuard", "RealIoAttemptedError", "install_io_guard"]
