"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int, optional_env
from .errors import ConfigurationError
from .feeds import FeedConfig, get_feed_config
from .http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    feed_resilience_config,
    registry_resilience_config,
)
from .logging import configure_logging
from .registry import BaseRegistryConfig, get_base_registry_config, parse_base_location
from .storage import StorageConfig, get_storage_config

__all__ = [
    "BaseRegistryConfig",
    "CacheConfig",
    "ConfigurationError",
    "FeedConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_int",
    "feed_resilience_config",
    "get_base_registry_config",
    "get_feed_config",
    "get_storage_config",
    "optional_env",
    "parse_base_location",
    "registry_resilience_config",
]
