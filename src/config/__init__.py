"""Configuration module for the nullables framework.

This module provides the config dataclasses every factory accepts, and the
coercion helper that lets callers pass plain mappings instead.

Available Configurations:
- HttpClientConfig, FileSystemConfig, ClockConfig, CounterApiConfig
- CounterServiceConfig, AppConfig
"""

from src.config.app_config import (
    DEFAULT_APP_CONFIG,
    DEFAULT_REPORT_PATH,
    AppConfig,
    CounterServiceConfig,
)
from src.config.infrastructure_config import (
    DEFAULT_NULL_NOW,
    ClockConfig,
    CounterApiConfig,
    FileSystemConfig,
    HttpClientConfig,
)
from src.config.loader import coerce_config, null_only_overrides

__all__ = [
    "AppConfig",
    "ClockConfig",
    "CounterApiConfig",
    "CounterServiceConfig",
    "DEFAULT_APP_CONFIG",
    "DEFAULT_NULL_NOW",
    "DEFAULT_REPORT_PATH",
    "FileSystemConfig",
    "HttpClientConfig",
    "coerce_config",
    "null_only_overrides",
]
