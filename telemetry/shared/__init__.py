"""Shared utilities for telemetry services."""

from .models import Reading
from .database import DBConfig, ReadingsStorage
from .cache import CacheConfig, LatestReadingCache, connect_cache
from .config import load_yaml_config, get_config_path
from .errors import ConfigError, StoreInitError, TelemetryError
from .logging import setup_logging

__all__ = [
    "Reading",
    "DBConfig",
    "ReadingsStorage",
    "CacheConfig",
    "LatestReadingCache",
    "connect_cache",
    "load_yaml_config",
    "get_config_path",
    "ConfigError",
    "StoreInitError",
    "TelemetryError",
    "setup_logging",
]
