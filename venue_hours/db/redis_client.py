"""Thin Redis client wrapper used by the DAO layer."""
import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


class RedisClient:
    """Redis client exposing the handful of commands the store needs."""

    def __init__(self, client: redis.Redis):
        """Wrap an existing Redis client and check connectivity.

        Args:
            client: redis.Redis instance (created with decode_responses=True)
        """
        self.client = client

        try:
            self.ping()
            logger.info("Connected to Redis")
        except redis.ConnectionError as e:
            logger.error(f"Could not connect to Redis: {e}")
            raise

    @classmethod
    def from_settings(
        cls, host: str = "redis", port: int = 6379, password: str = "", db: int = 0
    ) -> "RedisClient":
        """Create a client from connection parameters."""
        return cls(
            redis.Redis(
                host=host,
                port=port,
                password=password if password else None,
                db=db,
                decode_responses=True,
            )
        )

    def set(self, key: str, value: str) -> None:
        """Set a key-value pair in Redis.

        Args:
            key: Redis key
            value: String value to store
        """
        self.client.set(key, value)

    def get(self, key: str) -> Optional[str]:
        """Get value for a given key from Redis.

        Args:
            key: Redis key

        Returns:
            String value or None if key doesn't exist
        """
        return self.client.get(key)

    def mset(self, mapping: dict[str, str]) -> None:
        """Set several keys in one atomic command.

        Args:
            mapping: Key to string value
        """
        self.client.mset(mapping)

    def keys(self, pattern: str) -> list[str]:
        """Return all keys matching the given pattern.

        Args:
            pattern: Redis key pattern (e.g., "prefix:*")

        Returns:
            List of matching keys
        """
        return self.client.keys(pattern)

    def ping(self) -> bool:
        """Check connectivity to Redis.

        Returns:
            True if connected

        Raises:
            redis.ConnectionError if connection fails
        """
        return self.client.ping()
