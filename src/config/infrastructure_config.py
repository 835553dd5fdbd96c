"""Configuration for the infrastructure wrappers.

Each wrapper has one frozen config dataclass. Every field has a default, so
``Wrapper.create()`` and ``Wrapper.create_null()`` work with no arguments.
Fields listed in ``NULL_ONLY_FIELDS`` are read only by ``create_null``; a
live ``create`` logs and ignores them.

Environment Variables:
- COUNTER_API_URL: Counter API endpoint (default: http://localhost:8080)
- COUNTER_API_TOKEN: Bearer token sent to the counter API (default: unset)
- HTTP_TIMEOUT_SECONDS: Request timeout (default: 10.0, min: 0.1, max: 300)
- DATA_ROOT: Directory the file system wrapper is rooted at (default: .)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar

from src.config.loader import _get_float_env, _get_str_env
from src.domain.errors.construction import InvalidConfigError

# =============================================================================
# HTTP
# =============================================================================

DEFAULT_HTTP_ENDPOINT = "http://localhost:8080"

# Default request timeout
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

# Timeout floor and ceiling
MIN_HTTP_TIMEOUT_SECONDS = 0.1
MAX_HTTP_TIMEOUT_SECONDS = 300.0

# =============================================================================
# File system
# =============================================================================

DEFAULT_DATA_ROOT = "."

# =============================================================================
# Clock
# =============================================================================

# Instant a null clock is frozen at unless configured otherwise
DEFAULT_NULL_NOW = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

# =============================================================================
# Counter API
# =============================================================================

DEFAULT_COUNTER_BASE_PATH = "/counters"


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HttpClient.

    Attributes:
        endpoint: Base URL every request path is resolved against.
        token: Optional bearer token (the credentials for the endpoint).
        timeout_seconds: Per-request timeout for the live client.
        headers: Extra headers sent with every request.
        responses: Null only. Canned responses keyed by HTTP method name
            ("get", "post", "put", "delete").
    """

    NULL_ONLY_FIELDS: ClassVar[tuple[str, ...]] = ("responses",)

    endpoint: str = DEFAULT_HTTP_ENDPOINT
    token: str | None = None
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    headers: Mapping[str, str] = field(default_factory=dict)
    responses: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.endpoint.startswith(("http://", "https://")):
            raise InvalidConfigError(
                f"endpoint must be an http(s) URL, got {self.endpoint!r}",
                field_name="endpoint",
            )
        if not MIN_HTTP_TIMEOUT_SECONDS <= self.timeout_seconds <= MAX_HTTP_TIMEOUT_SECONDS:
            raise InvalidConfigError(
                f"timeout_seconds must be between {MIN_HTTP_TIMEOUT_SECONDS} "
                f"and {MAX_HTTP_TIMEOUT_SECONDS}, got {self.timeout_seconds}",
                field_name="timeout_seconds",
            )
        if not isinstance(self.responses, Mapping):
            raise InvalidConfigError("responses must be a mapping", field_name="responses")

    @classmethod
    def from_environment(cls) -> HttpClientConfig:
        """Create config from environment variables with defaults.

        Environment Variables:
            COUNTER_API_URL: Endpoint (default: http://localhost:8080)
            COUNTER_API_TOKEN: Bearer token (default: unset)
            HTTP_TIMEOUT_SECONDS: Timeout in seconds (default: 10.0)

        Returns:
            HttpClientConfig with values from environment or defaults.
        """
        timeout = _get_float_env("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)
        # Clamp to valid range
        timeout = max(MIN_HTTP_TIMEOUT_SECONDS, min(timeout, MAX_HTTP_TIMEOUT_SECONDS))

        return cls(
            endpoint=_get_str_env("COUNTER_API_URL", DEFAULT_HTTP_ENDPOINT) or DEFAULT_HTTP_ENDPOINT,
            token=_get_str_env("COUNTER_API_TOKEN", None),
            timeout_seconds=timeout,
        )


@dataclass(frozen=True)
class FileSystemConfig:
    """Configuration for FileSystem.

    Attributes:
        root: Directory relative paths are resolved against.
        files: Null only. Initial in-memory files, path to text.
        responses: Null only. Canned responses keyed by operation name
            ("read_text", "exists").
    """

    NULL_ONLY_FIELDS: ClassVar[tuple[str, ...]] = ("files", "responses")

    root: str = DEFAULT_DATA_ROOT
    files: Mapping[str, str] = field(default_factory=dict)
    responses: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.root:
            raise InvalidConfigError("root must not be empty", field_name="root")
        for path, text in self.files.items():
            if not isinstance(text, str):
                raise InvalidConfigError(
                    f"files[{path!r}] must be text, got {type(text).__name__}",
                    field_name="files",
                )

    @classmethod
    def from_environment(cls) -> FileSystemConfig:
        """Create config from DATA_ROOT (default: current directory)."""
        return cls(root=_get_str_env("DATA_ROOT", DEFAULT_DATA_ROOT) or DEFAULT_DATA_ROOT)


@dataclass(frozen=True)
class ClockConfig:
    """Configuration for Clock.

    The live clock has nothing to configure; every field shapes the null
    clock only.

    Attributes:
        now: Null only. Instant the null clock starts at; ISO 8601 strings
            are accepted and naive values are taken as UTC.
        monotonic_start: Null only. Starting monotonic reading.
        responses: Null only. Canned readings keyed by "now" (datetimes or
            ISO 8601 strings) and "monotonic" (seconds).
    """

    NULL_ONLY_FIELDS: ClassVar[tuple[str, ...]] = ("now", "monotonic_start", "responses")

    now: datetime = DEFAULT_NULL_NOW
    monotonic_start: float = 0.0
    responses: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize ``now`` to an aware datetime and check ``responses``."""
        now: Any = self.now
        if isinstance(now, str):
            try:
                now = datetime.fromisoformat(now)
            except ValueError:
                raise InvalidConfigError(
                    f"now must be an ISO 8601 timestamp, got {self.now!r}", field_name="now"
                ) from None
        if not isinstance(now, datetime):
            raise InvalidConfigError(
                f"now must be a datetime, got {type(now).__name__}", field_name="now"
            )
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        object.__setattr__(self, "now", now)
        if not isinstance(self.responses, Mapping):
            raise InvalidConfigError("responses must be a mapping", field_name="responses")


@dataclass(frozen=True)
class CounterApiConfig:
    """Configuration for CounterApiClient.

    Attributes:
        http: Config slice for the HttpClient the counter client sits on.
        base_path: Path prefix of the counter resources.
        responses: Null only. Canned responses keyed by "load"
            (integers) and "store" (values ignored, errors raised).
    """

    NULL_ONLY_FIELDS: ClassVar[tuple[str, ...]] = ("responses",)

    http: HttpClientConfig = field(default_factory=HttpClientConfig)
    base_path: str = DEFAULT_COUNTER_BASE_PATH
    responses: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.base_path.startswith("/"):
            raise InvalidConfigError(
                f"base_path must start with '/', got {self.base_path!r}",
                field_name="base_path",
            )

    @classmethod
    def from_environment(cls) -> CounterApiConfig:
        """Create config whose HTTP slice comes from the environment."""
        return cls(http=HttpClientConfig.from_environment())
