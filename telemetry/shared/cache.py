"""Redis cache holding the latest telemetry reading."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import redis

from .models import Reading

logger = logging.getLogger(__name__)

DEFAULT_REDIS_ADDR = "redis:6379"
LATEST_READING_KEY = "latest_telemetry_data"
LATEST_READING_TTL = 600  # seconds
DEFAULT_TIMEOUT = 5.0


def parse_address(address: str) -> Tuple[str, int]:
    """Split a ``host:port`` address, defaulting the port to 6379."""
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, 6379
    try:
        return host or "localhost", int(port)
    except ValueError:
        return address, 6379


@dataclass
class CacheConfig:
    """Redis cache configuration."""
    address: str = DEFAULT_REDIS_ADDR
    key: str = LATEST_READING_KEY
    ttl: int = LATEST_READING_TTL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: dict) -> "CacheConfig":
        """Create config from dictionary."""
        return cls(
            address=data.get("address", DEFAULT_REDIS_ADDR),
            key=data.get("key", LATEST_READING_KEY),
            ttl=int(data.get("ttl", LATEST_READING_TTL)),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        )


class LatestReadingCache:
    """Overwrites a single cache key with the most recent reading."""

    def __init__(self, client: redis.Redis, config: CacheConfig):
        self.client = client
        self.config = config

    def publish(self, reading: Reading) -> bool:
        """Store the reading under the latest-reading key with its TTL.

        Returns:
            True if successful, False otherwise.
        """
        try:
            self.client.set(self.config.key, reading.cache_value(), ex=self.config.ttl)
        except redis.RedisError as e:
            logger.error(f"Error caching reading in Redis: {e}")
            return False
        logger.info(f"Cached latest reading under {self.config.key}")
        return True

    def close(self):
        """Close the Redis connection pool."""
        try:
            self.client.close()
        except redis.RedisError as e:
            logger.debug(f"Error closing Redis client: {e}")


def connect_cache(config: CacheConfig) -> Optional[LatestReadingCache]:
    """Connect to Redis and verify it with a PING.

    Caching is optional: on failure a warning is logged and None is
    returned. Callers must not retry.
    """
    host, port = parse_address(config.address)
    client = redis.Redis(
        host=host,
        port=port,
        socket_timeout=config.timeout,
        socket_connect_timeout=config.timeout,
    )
    try:
        client.ping()
    except redis.RedisError as e:
        logger.warning(
            f"Could not connect to Redis at {config.address}. Caching disabled. Error: {e}"
        )
        client.close()
        return None

    logger.info(f"Connected to Redis at {config.address}")
    return LatestReadingCache(client, config)
