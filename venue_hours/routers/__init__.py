"""Routers package."""
from venue_hours.routers.venue_router import router as venue_router, set_venue_handler
from venue_hours.routers.auth_router import router as auth_router

__all__ = ["venue_router", "auth_router", "set_venue_handler"]
