"""Unit tests for data models."""
import json

import pytest
from pydantic import ValidationError

from factories import make_record, make_schedule
from venue_hours.models import HoursUpdate, VenueRecord, VenueView, parse_hour


class TestParseHour:
    """Hour parsing for write payloads."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (22, 22.0),
            (22.5, 22.5),
            ("22.5", 22.5),
            ("22:30", 22.5),
            ("07:15", 7.25),
            ("0", 0.0),
        ],
    )
    def test_accepts_numbers_and_strings(self, value, expected):
        assert parse_hour(value) == expected

    @pytest.mark.parametrize(
        "value",
        [True, None, "late", "22:75", float("nan"), float("inf"), [22]],
    )
    def test_rejects_non_numeric(self, value):
        with pytest.raises(ValueError):
            parse_hour(value)


class TestHoursUpdate:
    """Validation of the PUT hours payload."""

    def test_full_payload(self):
        update = HoursUpdate.model_validate({
            "start": 22,
            "end": 1,
            "days": [0, 1, 2],
            "closedToday": True,
            "closedReason": "Exam week",
        })

        schedule = update.to_schedule()
        assert schedule.start_hour == 22.0
        assert schedule.end_hour == 1.0
        assert schedule.days_of_week == [0, 1, 2]
        assert schedule.closed_today is True
        assert schedule.closed_reason == "Exam week"

    def test_closed_reason_defaults_to_empty(self):
        update = HoursUpdate.model_validate({"start": 22, "end": 1, "days": [0]})
        assert update.closed_today is False
        assert update.closed_reason == ""

        update = HoursUpdate.model_validate(
            {"start": 22, "end": 1, "days": [0], "closedReason": None}
        )
        assert update.closed_reason == ""

    @pytest.mark.parametrize("reason", [5, 1.5, {"why": "exam"}, ["exam"], True])
    def test_rejects_non_string_closed_reason(self, reason):
        with pytest.raises(ValidationError):
            HoursUpdate.model_validate(
                {"start": 22, "end": 1, "days": [0], "closedReason": reason}
            )

    @pytest.mark.parametrize("raw, expected", [(1, True), (0, False), ("yes", True), ("", False), (None, False)])
    def test_closed_today_uses_truthiness(self, raw, expected):
        update = HoursUpdate.model_validate(
            {"start": 22, "end": 1, "days": [0], "closedToday": raw}
        )
        assert update.closed_today is expected

    def test_days_kept_verbatim(self):
        update = HoursUpdate.model_validate({"start": 9, "end": 17, "days": [3, 1, 3]})
        assert update.days == [3, 1, 3]

    @pytest.mark.parametrize(
        "days",
        [
            [],            # empty
            [7],           # out of range
            [-1, 2],       # negative
            ["1"],         # not an integer
            [1.5],         # not an integer
            "0,1,2",       # not a list
        ],
    )
    def test_rejects_bad_days(self, days):
        with pytest.raises(ValidationError):
            HoursUpdate.model_validate({"start": 9, "end": 17, "days": days})

    @pytest.mark.parametrize("start", [24, -0.5, 30, "noon", True, 10**400, "nan", "inf"])
    def test_rejects_bad_hours(self, start):
        with pytest.raises(ValidationError):
            HoursUpdate.model_validate({"start": start, "end": 17, "days": [1]})

    def test_requires_start_end_days(self):
        with pytest.raises(ValidationError):
            HoursUpdate.model_validate({"days": [1]})


class TestSerialization:
    """JSON field names on the wire and in the store."""

    def test_record_uses_camel_case_aliases(self):
        record = make_record(venue_id=3, name="Morse", closed_today=True, closed_reason="Party")

        data = json.loads(record.model_dump_json(by_alias=True))

        assert data == {
            "id": 3,
            "name": "Morse",
            "hours": {
                "start": 22.0,
                "end": 1.0,
                "days": [0, 1, 2, 3, 4],
                "closedToday": True,
                "closedReason": "Party",
            },
        }
        assert VenueRecord.model_validate_json(json.dumps(data)) == record

    def test_view_serializes_is_open(self):
        view = VenueView(
            id=1, name="Berkeley", info="Open 22:00 - 01:00 | Sun", is_open=True,
            hours=make_schedule(days=[0]),
        )
        data = view.model_dump(by_alias=True)
        assert data["isOpen"] is True
        assert data["hours"]["closedToday"] is False

    def test_wraps_midnight(self):
        assert make_schedule(start=22, end=1).wraps_midnight is True
        assert make_schedule(start=8, end=8).wraps_midnight is True
        assert make_schedule(start=9, end=17).wraps_midnight is False
