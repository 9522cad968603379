"""Read-all and update-one operations over the schedule store."""
import logging
import threading
from collections import defaultdict
from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError as ModelValidationError

from venue_hours.dao import RedisScheduleDAO
from venue_hours.errors import NotFoundError, StoreError, ValidationError
from venue_hours.metrics import SCHEDULE_UPDATES_TOTAL
from venue_hours.models import HoursUpdate, VenueRecord, VenueView
from venue_hours.services.time_window import describe_schedule, is_open, local_now

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service for listing venues and replacing their schedules.

    Authorization is not checked here; callers must have passed the AuthGate
    before calling update().
    """

    def __init__(
        self,
        schedule_dao: RedisScheduleDAO,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize schedule service.

        Args:
            schedule_dao: Redis DAO for schedule persistence
            clock: Returns the current local time (defaults to the host clock)
        """
        self.schedule_dao = schedule_dao
        self.clock = clock or local_now
        self._locks: defaultdict[int, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def list_all(self, now: Optional[datetime] = None) -> list[VenueView]:
        """Return every venue with freshly derived info and open status.

        Raises:
            StoreError: if the store cannot be read
        """
        now = now or self.clock()
        records = self.schedule_dao.list_all_venues()
        logger.debug(f"[ScheduleService] Listing {len(records)} venues")
        return [self.to_view(record, now) for record in records]

    def get(self, venue_id: int, now: Optional[datetime] = None) -> VenueView:
        """Return a single venue view.

        Raises:
            NotFoundError: unknown venue id
            StoreError: if the store cannot be read
        """
        record = self.schedule_dao.get_venue(venue_id)
        if record is None:
            raise NotFoundError(venue_id)
        return self.to_view(record, now or self.clock())

    def update(
        self, venue_id: int, hours: Any, now: Optional[datetime] = None
    ) -> VenueView:
        """Replace all five schedule fields of a venue.

        Args:
            venue_id: Venue identifier
            hours: Mapping with start, end, days, closedToday, closedReason
            now: Time used to derive the returned isOpen

        Returns:
            The updated venue view

        Raises:
            NotFoundError: unknown venue id
            ValidationError: malformed hours payload
            StoreError: persistence failure (stored schedule unchanged)
        """
        with self._lock_for(venue_id):
            try:
                record = self.schedule_dao.get_venue(venue_id)
                if record is None:
                    SCHEDULE_UPDATES_TOTAL.labels(status="not_found").inc()
                    self._discard_lock(venue_id)
                    raise NotFoundError(venue_id)

                update = self.validate_hours(hours)
                updated = self.schedule_dao.replace_schedule(record, update.to_schedule())
            except ValidationError:
                SCHEDULE_UPDATES_TOTAL.labels(status="validation_error").inc()
                raise
            except StoreError:
                SCHEDULE_UPDATES_TOTAL.labels(status="store_error").inc()
                raise

        SCHEDULE_UPDATES_TOTAL.labels(status="success").inc()
        logger.info(
            f"[ScheduleService] Updated venue {venue_id}: "
            f"{describe_schedule(updated.hours)}, closed_today={updated.hours.closed_today}"
        )
        return self.to_view(updated, now or self.clock())

    @staticmethod
    def validate_hours(hours: Any) -> HoursUpdate:
        """Validate a raw hours payload.

        Raises:
            ValidationError: if the payload is missing or malformed
        """
        if not isinstance(hours, dict):
            raise ValidationError("hours must be an object")
        try:
            return HoursUpdate.model_validate(hours)
        except ModelValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"Invalid hours: {problems}") from e

    @staticmethod
    def to_view(record: VenueRecord, now: datetime) -> VenueView:
        """Join a stored record with its derived fields."""
        return VenueView(
            id=record.id,
            name=record.name,
            info=describe_schedule(record.hours),
            is_open=is_open(record.hours, now),
            hours=record.hours,
        )

    def _lock_for(self, venue_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks[venue_id]

    def _discard_lock(self, venue_id: int) -> None:
        """Forget the lock of an id that has no venue."""
        with self._locks_guard:
            self._locks.pop(venue_id, None)
