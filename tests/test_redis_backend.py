"""Tests for the Redis request backend, run against fakeredis."""

from datetime import datetime, timedelta, timezone

import fakeredis
import pytest
import redis

from partfinder.cache import KEY_PREFIX, RedisRequestBackend
from partfinder.part_requests import RequestStore

CREATED = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def client():
    return fakeredis.FakeRedis()


@pytest.fixture
def store(client):
    return RequestStore(backend=RedisRequestBackend(client), ttl=3600)


class BrokenClient:
    """Client whose every call fails like an unreachable server."""

    def get(self, key):
        raise redis.ConnectionError("down")

    def set(self, key, value, ex=None):
        raise redis.ConnectionError("down")

    def delete(self, *keys):
        raise redis.ConnectionError("down")


def test_request_round_trip_through_redis(store, client, scripted_rng):
    created = store.create(
        vin="WDB2020201F685790",
        part_id="part-klima-001",
        user_email="user@example.com",
        description="Klima soğutmuyor",
        rng=scripted_rng(randints=[15]),
        now=CREATED,
    )

    fetched = store.get(created.requestId, scripted_rng(), now=CREATED + timedelta(minutes=5))

    assert fetched == created
    assert fetched.description == "Klima soğutmuyor"
    assert 0 < client.ttl(KEY_PREFIX + created.requestId) <= 3600


def test_status_progression_is_written_back(store, client, scripted_rng):
    created = store.create(
        vin="WDB2020201F685790",
        part_id="part-fren-001",
        user_email="user@example.com",
        rng=scripted_rng(randints=[3]),
        now=CREATED,
    )

    store.get(created.requestId, scripted_rng(randints=[2]), now=CREATED + timedelta(minutes=40))
    reread = RequestStore(backend=RedisRequestBackend(client), ttl=3600).get(
        created.requestId, scripted_rng(), now=CREATED + timedelta(minutes=41)
    )

    assert reread.status == "in_progress"
    assert reread.contactAttempts == 2


def test_clear_removes_only_keys_written_by_this_backend(client):
    client.set(KEY_PREFIX + "someone-else", b"{}")
    backend = RedisRequestBackend(client)
    backend.save("mine-1", {"a": 1}, ttl=60)
    backend.save("mine-2", {"a": 2}, ttl=60)

    assert backend.clear() == 2
    assert backend.load("mine-1") is None
    assert client.exists(KEY_PREFIX + "someone-else") == 1
    assert backend.clear() == 0


def test_undecodable_record_is_ignored(client):
    client.set(KEY_PREFIX + "garbled", b"not json")

    assert RedisRequestBackend(client).load("garbled") is None


def test_unreachable_redis_degrades_to_missing_records():
    backend = RedisRequestBackend(BrokenClient())

    backend.save("req-1", {"a": 1}, ttl=60)

    assert backend.load("req-1") is None
    assert backend.clear() == 0
