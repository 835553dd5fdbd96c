"""
Infrastructure layer - wrappers around external effects.

This layer contains:
- nullability: the create/create_null framework (responses, output
  tracking, state events, graph wiring)
- adapters: HTTP, file system, clock and counter API wrappers
- observability: structured logging

IMPORT RULES:
- CAN import from: domain, config
- MUST NOT import from: application
"""

from src.infrastructure.adapters import (
    Clock,
    CounterApiClient,
    FileSystem,
    HttpClient,
    HttpResponse,
)

__all__: list[str] = [
    "Clock",
    "CounterApiClient",
    "FileSystem",
    "HttpClient",
    "HttpResponse",
]
