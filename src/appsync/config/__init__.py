"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .onelogin import OneLoginConfig, get_onelogin_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "OneLoginConfig",
    "RateLimit",
    "ResilienceConfig",
    "configure_logging",
    "get_onelogin_config",
    "require_env_vars",
]
