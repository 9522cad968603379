"""Venue and schedule data models using Pydantic."""
import math
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_hour(value: Any) -> float:
    """Parse an hour of day into a float.

    Accepts ints, floats, numeric strings ("22.5") and "HH:MM" strings
    ("22:30" -> 22.5). Booleans, NaN and infinities are rejected.

    Raises:
        ValueError: if the value is not numeric
    """
    if isinstance(value, bool):
        raise ValueError("hour must be a number, not a boolean")
    if isinstance(value, str):
        match = _HHMM.match(value)
        if match:
            hours, minutes = int(match.group(1)), int(match.group(2))
            if minutes >= 60:
                raise ValueError(f"invalid minutes in {value!r}")
            return hours + minutes / 60
        try:
            value = float(value)
        except ValueError:
            raise ValueError(f"hour must be numeric, got {value!r}") from None
    if not isinstance(value, (int, float)):
        raise ValueError(f"hour must be numeric, got {type(value).__name__}")
    try:
        value = float(value)
    except OverflowError:
        raise ValueError("hour out of range") from None
    if not math.isfinite(value):
        raise ValueError("hour must be finite")
    return value


class Schedule(BaseModel):
    """Weekly opening window plus today's override.

    Hours are fractional local hours of day (22.5 = 22:30). Days use
    0=Sunday ... 6=Saturday.
    """

    start_hour: float = Field(alias="start")
    end_hour: float = Field(alias="end")
    days_of_week: list[int] = Field(alias="days")
    closed_today: bool = Field(default=False, alias="closedToday")
    closed_reason: str = Field(default="", alias="closedReason")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def wraps_midnight(self) -> bool:
        """True when the close hour is not after the open hour."""
        return self.start_hour >= self.end_hour


class Venue(BaseModel):
    """Venue identity. Never changes after seeding."""

    id: int
    name: str


class VenueRecord(Venue):
    """Persisted document: a venue together with its schedule."""

    hours: Schedule

    def __str__(self) -> str:
        return f"VenueRecord(id={self.id}, name={self.name})"


class HoursUpdate(BaseModel):
    """Validated replacement schedule submitted by an authenticated caller.

    Only ``closedToday`` (truthiness) and ``start``/``end`` (numeric parse)
    are coerced. ``days`` is kept exactly as given, duplicates and order
    included.
    """

    start: float
    end: float
    days: list[StrictInt] = Field(min_length=1)
    closed_today: bool = Field(default=False, alias="closedToday")
    closed_reason: str = Field(default="", alias="closedReason")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_hour_value(cls, v: Any) -> float:
        """Accept numbers, numeric strings and "HH:MM" strings."""
        return parse_hour(v)

    @field_validator("start", "end")
    @classmethod
    def check_hour_range(cls, v: float) -> float:
        if not 0 <= v < 24:
            raise ValueError("hour must be in [0, 24)")
        return v

    @field_validator("days")
    @classmethod
    def check_day_range(cls, v: list[int]) -> list[int]:
        bad = [d for d in v if not 0 <= d <= 6]
        if bad:
            raise ValueError(f"days must be between 0 (Sunday) and 6 (Saturday), got {bad}")
        return v

    @field_validator("closed_today", mode="before")
    @classmethod
    def coerce_closed_today(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("closed_reason", mode="before")
    @classmethod
    def default_closed_reason(cls, v: Any) -> Any:
        """Null means no reason. Other non-strings fail the str check."""
        if v is None:
            return ""
        return v

    def to_schedule(self) -> Schedule:
        return Schedule(
            start_hour=self.start,
            end_hour=self.end,
            days_of_week=list(self.days),
            closed_today=self.closed_today,
            closed_reason=self.closed_reason,
        )


class VenueView(BaseModel):
    """API representation of a venue with derived fields."""

    id: int
    name: str
    info: str
    is_open: bool = Field(alias="isOpen")
    hours: Schedule

    model_config = ConfigDict(populate_by_name=True)


class StatusProjection(BaseModel):
    """Venues partitioned into open now and closed by override.

    A venue outside its window without an override is in neither list.
    """

    computed_at: datetime = Field(alias="computedAt")
    open: list[VenueView] = Field(default_factory=list)
    closed: list[VenueView] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def open_ids(self) -> list[int]:
        return [v.id for v in self.open]

    @property
    def closed_ids(self) -> list[int]:
        return [v.id for v in self.closed]


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    token: str

