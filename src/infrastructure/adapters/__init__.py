"""Infrastructure wrappers: the only code that touches the outside world.

Each wrapper exposes ``create`` (live) and ``create_null`` (embedded stub)
and wraps exactly one capability.
"""

from src.infrastructure.adapters.clock import Clock
from src.infrastructure.adapters.counter_api import CounterApiClient
from src.infrastructure.adapters.file_system import FileSystem
from src.infrastructure.adapters.http_client import HttpClient, HttpResponse

__all__: list[str] = [
    "Clock",
    "CounterApiClient",
    "FileSystem",
    "HttpClient",
    "HttpResponse",
]
