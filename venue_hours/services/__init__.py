"""Services package."""
from venue_hours.services.schedule_service import ScheduleService
from venue_hours.services.auth_gate import AuthGate, IdentityStore
from venue_hours.services.status_projector import StatusProjector

__all__ = ["ScheduleService", "AuthGate", "IdentityStore", "StatusProjector"]
