"""Configuration for the reference counter application.

Environment Variables:
- REPORT_PATH: Report file, relative to DATA_ROOT (default: counter-report.log)
- plus everything read by src.config.infrastructure_config
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.config.infrastructure_config import (
    ClockConfig,
    CounterApiConfig,
    FileSystemConfig,
)
from src.config.loader import _get_str_env
from src.domain.errors.construction import InvalidConfigError

DEFAULT_REPORT_PATH = "counter-report.log"


@dataclass(frozen=True)
class CounterServiceConfig:
    """Configuration for CounterService.

    Attributes:
        api: Config slice for the CounterApiClient.
        clock: Config slice for the service's Clock.
    """

    api: CounterApiConfig = field(default_factory=CounterApiConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration for CounterApp.

    Attributes:
        counters: Config slice for the nested CounterService.
        files: Config slice for the report FileSystem.
        clock: Config slice for the app's own Clock.
        report_path: Report file the app appends one line per update to.
    """

    counters: CounterServiceConfig = field(default_factory=CounterServiceConfig)
    files: FileSystemConfig = field(default_factory=FileSystemConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    report_path: str = DEFAULT_REPORT_PATH

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.report_path:
            raise InvalidConfigError("report_path must not be empty", field_name="report_path")

    @classmethod
    def from_environment(cls) -> AppConfig:
        """Create config from environment variables with defaults.

        Returns:
            AppConfig with every slice read from the environment.
        """
        return cls(
            counters=CounterServiceConfig(api=CounterApiConfig.from_environment()),
            files=FileSystemConfig.from_environment(),
            report_path=_get_str_env("REPORT_PATH", DEFAULT_REPORT_PATH) or DEFAULT_REPORT_PATH,
        )


# Default production config
DEFAULT_APP_CONFIG = AppConfig()
