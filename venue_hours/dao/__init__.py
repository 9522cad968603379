"""Data access package."""
from venue_hours.dao.redis_schedule_dao import RedisScheduleDAO

__all__ = ["RedisScheduleDAO"]
