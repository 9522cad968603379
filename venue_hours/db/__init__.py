"""Database clients package."""
from venue_hours.db.redis_client import RedisClient

__all__ = ["RedisClient"]
