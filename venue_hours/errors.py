"""Error taxonomy shared by the services and the HTTP boundary."""
from enum import Enum


class ScheduleError(Exception):
    """Base class for errors raised by the schedule core."""


class ValidationError(ScheduleError):
    """Malformed update payload. Nothing is written."""


class NotFoundError(ScheduleError):
    """Unknown venue id."""

    def __init__(self, venue_id: int):
        super().__init__(f"Venue {venue_id} not found")
        self.venue_id = venue_id


class StoreError(ScheduleError):
    """Persistence I/O failure. Stored state is left as it was."""


class AuthFailure(str, Enum):
    NO_TOKEN = "no_token"
    INVALID_TOKEN = "invalid_token"
    INVALID_CREDENTIALS = "invalid_credentials"


_AUTH_MESSAGES = {
    AuthFailure.NO_TOKEN: "No token provided",
    AuthFailure.INVALID_TOKEN: "Invalid token",
    AuthFailure.INVALID_CREDENTIALS: "Invalid credentials",
}


class AuthError(ScheduleError):
    """Authentication failure.

    The message depends only on ``kind`` so callers can never tell a wrong
    username from a wrong password.
    """

    def __init__(self, kind: AuthFailure):
        super().__init__(_AUTH_MESSAGES[kind])
        self.kind = kind

    @property
    def message(self) -> str:
        return _AUTH_MESSAGES[self.kind]
