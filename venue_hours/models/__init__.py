"""Data models package for venue-hours-server."""
from venue_hours.models.venue import (
    Schedule,
    Venue,
    VenueRecord,
    HoursUpdate,
    VenueView,
    StatusProjection,
    LoginRequest,
    TokenResponse,
    parse_hour,
)

__all__ = [
    # Venue models
    "Schedule",
    "Venue",
    "VenueRecord",
    "VenueView",
    "StatusProjection",
    # Request/response models
    "HoursUpdate",
    "LoginRequest",
    "TokenResponse",
    "parse_hour",
]
