"""
Domain layer - Pure logic and value objects.

This layer contains:
- Value objects for the nullable framework (configurable responses,
  tracked calls, state events)
- Reference domain models (Counter)
- Domain exceptions

CRITICAL: This layer must NOT import from config, infrastructure, or
application, and must not perform I/O. Only stdlib and typing imports are
allowed; effectful stdlib modules (socket, time, pathlib, ...) are rejected
by scripts/check_imports.py.
"""

from src.domain.errors import (
    ConstructionError,
    InvalidConfigError,
    MissingConfigError,
    MixedModeGraphError,
)
from src.domain.exceptions import NullablesError
from src.domain.models import Counter

__all__: list[str] = [
    "ConstructionError",
    "Counter",
    "InvalidConfigError",
    "MissingConfigError",
    "MixedModeGraphError",
    "NullablesError",
]
