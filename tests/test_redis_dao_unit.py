"""Unit tests for Redis DAO (mocked, no real Redis needed)."""
import json
from unittest.mock import Mock

import pytest
import redis

from factories import make_record, make_schedule
from venue_hours.dao import RedisScheduleDAO
from venue_hours.errors import StoreError


class TestRedisScheduleDAOUnit:
    """Unit tests for RedisScheduleDAO with mocked Redis client."""

    @pytest.fixture
    def mock_redis_client(self):
        """Create a mock Redis client."""
        return Mock()

    @pytest.fixture
    def schedule_dao(self, mock_redis_client):
        """Create RedisScheduleDAO with mocked client."""
        return RedisScheduleDAO(mock_redis_client)

    def test_list_venue_ids_strips_prefix_and_sorts(self, schedule_dao, mock_redis_client):
        mock_redis_client.keys.return_value = [
            "venue_schedule_v1:10",
            "venue_schedule_v1:2",
            "venue_schedule_v1:1",
        ]

        assert schedule_dao.list_venue_ids() == [1, 2, 10]
        mock_redis_client.keys.assert_called_once_with("venue_schedule_v1:*")

    def test_list_venue_ids_ignores_foreign_keys(self, schedule_dao, mock_redis_client):
        mock_redis_client.keys.return_value = ["venue_schedule_v1:abc", "venue_schedule_v1:4"]

        assert schedule_dao.list_venue_ids() == [4]

    def test_get_venue_uses_correct_key(self, schedule_dao, mock_redis_client):
        record = make_record(venue_id=7, name="Pierson")
        mock_redis_client.get.return_value = record.model_dump_json(by_alias=True)

        result = schedule_dao.get_venue(7)

        assert result == record
        mock_redis_client.get.assert_called_once_with("venue_schedule_v1:7")

    def test_get_venue_returns_none_when_not_found(self, schedule_dao, mock_redis_client):
        mock_redis_client.get.return_value = None

        assert schedule_dao.get_venue(99) is None

    def test_get_venue_raises_store_error_on_redis_failure(self, schedule_dao, mock_redis_client):
        mock_redis_client.get.side_effect = redis.ConnectionError("down")

        with pytest.raises(StoreError):
            schedule_dao.get_venue(1)

    def test_get_venue_raises_store_error_on_corrupt_document(self, schedule_dao, mock_redis_client):
        mock_redis_client.get.return_value = '{"id": 1}'

        with pytest.raises(StoreError):
            schedule_dao.get_venue(1)

    def test_replace_schedule_writes_whole_document_once(self, schedule_dao, mock_redis_client):
        record = make_record(venue_id=2, name="Berkeley")
        new_schedule = make_schedule(start=21.5, end=23, days=[6, 5], closed_today=True,
                                     closed_reason="Renovation")

        updated = schedule_dao.replace_schedule(record, new_schedule)

        mock_redis_client.set.assert_called_once()
        key, payload = mock_redis_client.set.call_args[0]
        assert key == "venue_schedule_v1:2"
        assert json.loads(payload) == {
            "id": 2,
            "name": "Berkeley",
            "hours": {
                "start": 21.5,
                "end": 23.0,
                "days": [6, 5],
                "closedToday": True,
                "closedReason": "Renovation",
            },
        }
        assert updated.hours == new_schedule
        assert updated.name == "Berkeley"

    def test_replace_schedule_raises_store_error(self, schedule_dao, mock_redis_client):
        mock_redis_client.set.side_effect = redis.ConnectionError("down")

        with pytest.raises(StoreError):
            schedule_dao.replace_schedule(make_record(), make_schedule())

    def test_seed_if_empty_writes_all_records_atomically(self, schedule_dao, mock_redis_client):
        mock_redis_client.keys.return_value = []
        records = [make_record(venue_id=1, name="A"), make_record(venue_id=2, name="B")]

        assert schedule_dao.seed_if_empty(records) is True

        mock_redis_client.mset.assert_called_once()
        mapping = mock_redis_client.mset.call_args[0][0]
        assert set(mapping) == {"venue_schedule_v1:1", "venue_schedule_v1:2"}

    def test_seed_if_empty_skips_when_any_venue_exists(self, schedule_dao, mock_redis_client):
        mock_redis_client.keys.return_value = ["venue_schedule_v1:5"]

        assert schedule_dao.seed_if_empty([make_record(venue_id=1)]) is False
        mock_redis_client.mset.assert_not_called()

    def test_list_all_venues_skips_vanished_keys(self, schedule_dao, mock_redis_client):
        mock_redis_client.keys.return_value = ["venue_schedule_v1:1", "venue_schedule_v1:2"]
        first = make_record(venue_id=1, name="A")

        def get_side_effect(key):
            if key == "venue_schedule_v1:1":
                return first.model_dump_json(by_alias=True)
            return None

        mock_redis_client.get.side_effect = get_side_effect

        assert schedule_dao.list_all_venues() == [first]
