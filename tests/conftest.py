"""
Pytest configuration and shared fixtures for the nullables tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Build components with create_null(); do not mock wrappers
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/ (marked ``integration``)
"""

from collections.abc import Iterator

import pytest
import structlog

from tests.helpers.io_guard import IoGuard, install_io_guard


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def io_guard(monkeypatch: pytest.MonkeyPatch) -> IoGuard:
    """Fail the test if any live client is touched."""
    return install_io_guard(monkeypatch)


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__
