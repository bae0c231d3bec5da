"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_float_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .fedora import FedoraConfig, get_fedora_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "FedoraConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_fedora_config",
    "optional_float_env_var",
    "require_env_vars",
]
