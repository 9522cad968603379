"""Initial venue list written on first startup."""
from venue_hours.models import Schedule, VenueRecord

SUN_THU = [0, 1, 2, 3, 4]
SUN_FRI = [0, 1, 2, 3, 4, 5]

# (name, start, end, days)
SEED_VENUES = [
    ("Benjamin Franklin", 22, 1, SUN_THU),
    ("Berkeley", 22, 1, SUN_FRI),
    ("Branford", 22, 1, SUN_THU),
    ("Davenport", 22, 1, SUN_THU),
    ("Ezra Stiles", 22, 1, SUN_THU),
    ("Grace Hopper", 22, 1, SUN_THU),
    ("Jonathan Edwards", 22, 1, SUN_THU),
    ("Morse", 22, 1, SUN_THU),
    ("Pauli Murray", 22, 1, SUN_THU),
    ("Pierson", 22, 1, SUN_THU),
    ("Saybrook", 22, 1, SUN_THU),
    ("Silliman", 22, 1, SUN_THU),
    ("Timothy Dwight", 22, 1, SUN_THU),
    ("Trumbull", 22, 1, SUN_THU),
]


def seed_records() -> list[VenueRecord]:
    """Seed venues with ids starting at 1, in list order."""
    return [
        VenueRecord(
            id=index,
            name=name,
            hours=Schedule(start_hour=start, end_hour=end, days_of_week=list(days)),
        )
        for index, (name, start, end, days) in enumerate(SEED_VENUES, start=1)
    ]
