"""Redis-based Data Access Object for venue schedules."""
import logging
from typing import Optional

import redis
from pydantic import ValidationError as ModelValidationError

from venue_hours.db.redis_client import RedisClient
from venue_hours.errors import StoreError
from venue_hours.models import Schedule, VenueRecord

logger = logging.getLogger(__name__)

# One JSON document per venue: {"id", "name", "hours": {...}}
VENUE_SCHEDULE_KEY_FORMAT = "venue_schedule_v1:{}"
VENUE_SCHEDULE_KEY_PREFIX = "venue_schedule_v1:"


class RedisScheduleDAO:
    """Data Access Object for venue schedules stored in Redis.

    Every venue lives in a single key, so replacing a schedule is one SET and
    readers never observe a partially written schedule.
    """

    def __init__(self, client: RedisClient):
        """Initialize RedisScheduleDAO.

        Args:
            client: RedisClient instance
        """
        self.client = client

    def list_venue_ids(self) -> list[int]:
        """Return all stored venue IDs in ascending order.

        Raises:
            StoreError: if Redis is unavailable
        """
        try:
            keys = self.client.keys(VENUE_SCHEDULE_KEY_FORMAT.format("*"))
        except redis.RedisError as e:
            logger.error(f"[RedisScheduleDAO] Failed to list venue keys: {e}")
            raise StoreError("Failed to list venues") from e

        venue_ids = []
        for key in keys:
            raw_id = key.replace(VENUE_SCHEDULE_KEY_PREFIX, "", 1)
            try:
                venue_ids.append(int(raw_id))
            except ValueError:
                logger.warning(f"[RedisScheduleDAO] Ignoring unexpected key {key}")
        return sorted(venue_ids)

    def count_venues(self) -> int:
        """Number of stored venues."""
        return len(self.list_venue_ids())

    def get_venue(self, venue_id: int) -> Optional[VenueRecord]:
        """Retrieve a venue and its schedule by ID.

        Args:
            venue_id: Venue identifier

        Returns:
            VenueRecord or None if not found

        Raises:
            StoreError: if Redis is unavailable or the document is corrupt
        """
        key = VENUE_SCHEDULE_KEY_FORMAT.format(venue_id)
        try:
            json_str = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"[RedisScheduleDAO] Failed to get venue {venue_id}: {e}")
            raise StoreError(f"Failed to read venue {venue_id}") from e

        if json_str is None:
            return None

        try:
            return VenueRecord.model_validate_json(json_str)
        except ModelValidationError as e:
            logger.error(f"[RedisScheduleDAO] Corrupt document for venue {venue_id}: {e}")
            raise StoreError(f"Corrupt data for venue {venue_id}") from e

    def list_all_venues(self) -> list[VenueRecord]:
        """Return every venue with its schedule, ordered by ID.

        Venues deleted between listing keys and reading them are skipped.
        """
        venues = []
        for venue_id in self.list_venue_ids():
            record = self.get_venue(venue_id)
            if record is not None:
                venues.append(record)
        return venues

    def replace_schedule(self, record: VenueRecord, schedule: Schedule) -> VenueRecord:
        """Overwrite all schedule fields of a venue in a single write.

        Args:
            record: Current stored record (identity is kept as is)
            schedule: Replacement schedule

        Returns:
            The record as written

        Raises:
            StoreError: if the write fails; the stored document is unchanged
        """
        updated = VenueRecord(id=record.id, name=record.name, hours=schedule)
        key = VENUE_SCHEDULE_KEY_FORMAT.format(record.id)
        try:
            self.client.set(key, updated.model_dump_json(by_alias=True))
        except redis.RedisError as e:
            logger.error(f"[RedisScheduleDAO] Failed to write schedule for venue {record.id}: {e}")
            raise StoreError(f"Failed to write venue {record.id}") from e

        logger.debug(f"[RedisScheduleDAO] Replaced schedule for venue {record.id}")
        return updated

    def seed_if_empty(self, records: list[VenueRecord]) -> bool:
        """Write the initial venue list when no venue exists yet.

        This is a one-time bootstrap keyed on the venue count, not an upsert:
        once any venue is stored the seed list is never applied again.

        Returns:
            True if the seed list was written
        """
        existing = self.count_venues()
        if existing > 0:
            logger.info(f"[RedisScheduleDAO] {existing} venues present, skipping seed")
            return False

        mapping = {
            VENUE_SCHEDULE_KEY_FORMAT.format(r.id): r.model_dump_json(by_alias=True)
            for r in records
        }
        try:
            self.client.mset(mapping)
        except redis.RedisError as e:
            logger.error(f"[RedisScheduleDAO] Failed to seed venues: {e}")
            raise StoreError("Failed to seed venues") from e

        logger.info(f"[RedisScheduleDAO] Seeded {len(records)} venues")
        return True
