"""Partition venues into open-now and closed-today sets."""
import logging
import threading
from datetime import datetime
from typing import Optional

from venue_hours.metrics import VENUES_CLOSED_TODAY, VENUES_OPEN_NOW
from venue_hours.models import StatusProjection, VenueView
from venue_hours.services.schedule_service import ScheduleService
from venue_hours.services.time_window import is_open

logger = logging.getLogger(__name__)


class StatusProjector:
    """Computes and caches the open/closed partition.

    Open status depends on the wall clock, so the cached projection goes
    stale without any data change; refresh() is expected to run on a fixed
    cadence (see the status refresh job in main.py).
    """

    def __init__(self, schedule_service: ScheduleService):
        self.schedule_service = schedule_service
        self.latest: Optional[StatusProjection] = None
        self._lock = threading.Lock()

    @staticmethod
    def project(venues: list[VenueView], now: datetime) -> StatusProjection:
        """Split venues by override and by window.

        Override-closed venues go only to ``closed``. The rest go to ``open``
        when their window contains ``now`` and to neither list otherwise.
        """
        open_venues = []
        closed_venues = []
        for venue in venues:
            if venue.hours.closed_today:
                closed_venues.append(venue)
            elif is_open(venue.hours, now):
                open_venues.append(venue)
        return StatusProjection(computed_at=now, open=open_venues, closed=closed_venues)

    def refresh(self, now: Optional[datetime] = None) -> StatusProjection:
        """Recompute the projection from the store and cache it."""
        now = now or self.schedule_service.clock()
        venues = self.schedule_service.list_all(now)
        projection = self.project(venues, now)

        with self._lock:
            self.latest = projection

        VENUES_OPEN_NOW.set(len(projection.open))
        VENUES_CLOSED_TODAY.set(len(projection.closed))
        logger.info(
            f"[StatusProjector] {len(projection.open)} open, "
            f"{len(projection.closed)} closed today, {len(venues)} total"
        )
        return projection

    def current(self) -> StatusProjection:
        """Latest projection, computed on demand if none exists yet."""
        with self._lock:
            latest = self.latest
        if latest is None:
            return self.refresh()
        return latest
