"""Handlers package."""
from venue_hours.handlers.venue_handler import VenueHandler

__all__ = ["VenueHandler"]
