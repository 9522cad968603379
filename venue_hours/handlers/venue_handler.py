"""Venue handler for HTTP requests."""
import logging
from typing import Any

from venue_hours.errors import StoreError, ValidationError
from venue_hours.models import StatusProjection, VenueView
from venue_hours.services import AuthGate, ScheduleService, StatusProjector

logger = logging.getLogger(__name__)


class VenueHandler:
    """Handler for venue and login HTTP requests."""

    def __init__(
        self,
        schedule_service: ScheduleService,
        status_projector: StatusProjector,
        auth_gate: AuthGate,
    ):
        """Initialize venue handler.

        Args:
            schedule_service: Schedule read/update operations
            status_projector: Cached open/closed partition
            auth_gate: Credential and token checks
        """
        self.schedule_service = schedule_service
        self.status_projector = status_projector
        self.auth_gate = auth_gate

    def login(self, username: str, password: str) -> dict[str, str]:
        """Exchange credentials for a token."""
        return {"token": self.auth_gate.login(username, password)}

    def list_venues(self) -> list[VenueView]:
        venues = self.schedule_service.list_all()
        logger.info(f"[VenueHandler] Returning {len(venues)} venues")
        return venues

    def get_venue(self, venue_id: int) -> VenueView:
        return self.schedule_service.get(venue_id)

    def update_venue(self, venue_id: int, body: Any) -> VenueView:
        """Apply a PUT body of the form {"hours": {...}}.

        The caller must already have authorized the request.
        """
        if not isinstance(body, dict) or "hours" not in body:
            raise ValidationError("Request body must contain an 'hours' object")

        venue = self.schedule_service.update(venue_id, body["hours"])
        # Keep the cached projection in step with the write
        try:
            self.status_projector.refresh()
        except StoreError as e:
            logger.warning(f"[VenueHandler] Status refresh after update failed: {e}")
        return venue

    def get_status(self, refresh: bool = False) -> StatusProjection:
        if refresh:
            return self.status_projector.refresh()
        return self.status_projector.current()

    def ping(self) -> dict[str, str]:
        """Health check endpoint.

        Returns:
            {"status": "pong"}
        """
        logger.debug("[VenueHandler] Ping")
        return {"status": "pong"}
