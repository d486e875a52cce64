"""Errors raised while reading schemagen settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A ``SCHEMAGEN_*`` setting holds a value schemagen cannot use."""


class MissingConfigurationError(ConfigurationError):
    """A setting the requested operation depends on is unset or blank."""
