"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .specs import (
    AUTOGENERATED_RESOURCES_PATH,
    ROOT_SCHEMA_PATHS,
    SUMMARY_LOG_FILENAME,
    SpecsConfig,
    get_specs_config,
)

__all__ = [
    "AUTOGENERATED_RESOURCES_PATH",
    "ROOT_SCHEMA_PATHS",
    "SUMMARY_LOG_FILENAME",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpecsConfig",
    "configure_logging",
    "get_specs_config",
]
