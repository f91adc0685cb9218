"""Unit tests for RedisCheckpointStore using fakeredis."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
import pytest

from stackctl.core.exceptions import CheckpointError
from stackctl.persistence.redis_backend import RedisCheckpointStore


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_client(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def backend(fake_client):
    with patch("redis.Redis", return_value=fake_client):
        return RedisCheckpointStore(host="localhost", port=6379, db=0)


class TestGet:
    def test_returns_none_on_miss(self, backend):
        assert backend.get("SRS_TENCENT_VOD", "service") is None

    def test_reads_hash_field(self, backend, fake_client):
        fake_client.hset("SRS_TENCENT_VOD", "storage", "ap-guangzhou")
        assert backend.get("SRS_TENCENT_VOD", "storage") == "ap-guangzhou"


class TestSet:
    def test_writes_hash_field(self, backend, fake_client):
        backend.set("SRS_TENCENT_VOD", "service", "ok")
        assert fake_client.hget("SRS_TENCENT_VOD", "service") == "ok"

    def test_overwrites_existing_value(self, backend):
        backend.set("SRS_UPGRADING", "desc", "old")
        backend.set("SRS_UPGRADING", "desc", "new")
        assert backend.get("SRS_UPGRADING", "desc") == "new"

    def test_fields_are_independent(self, backend):
        backend.set("SRS_UPGRADING", "upgrading", "1")
        backend.set("SRS_UPGRADING", "desc", "upgrade to target=v1")
        assert backend.get_all("SRS_UPGRADING") == {
            "upgrading": "1",
            "desc": "upgrade to target=v1",
        }


class TestClaim:
    def test_claims_absent_field(self, backend):
        assert backend.claim("SRS_UPGRADING", "upgrading", "1") is True
        assert backend.get("SRS_UPGRADING", "upgrading") == "1"

    def test_claims_field_holding_other_value(self, backend):
        backend.set("SRS_UPGRADING", "upgrading", "0")
        assert backend.claim("SRS_UPGRADING", "upgrading", "1") is True
        assert backend.get("SRS_UPGRADING", "upgrading") == "1"

    def test_refuses_when_value_already_held(self, backend):
        backend.set("SRS_UPGRADING", "upgrading", "1")
        assert backend.claim("SRS_UPGRADING", "upgrading", "1") is False

    def test_second_claim_loses(self, backend):
        assert backend.claim("SRS_UPGRADING", "upgrading", "1") is True
        assert backend.claim("SRS_UPGRADING", "upgrading", "1") is False


class TestGetAll:
    def test_empty_namespace(self, backend):
        assert backend.get_all("missing") == {}


class TestErrorWrapping:
    def test_get_wraps_redis_error(self):
        b = RedisCheckpointStore.__new__(RedisCheckpointStore)
        b._client = None  # will cause AttributeError -> CheckpointError
        with pytest.raises(CheckpointError):
            b.get("w", "f")

    def test_set_wraps_redis_error(self):
        b = RedisCheckpointStore.__new__(RedisCheckpointStore)
        b._client = None
        with pytest.raises(CheckpointError):
            b.set("w", "f", "v")

    def test_claim_wraps_redis_error(self):
        b = RedisCheckpointStore.__new__(RedisCheckpointStore)
        b._client = None
        with pytest.raises(CheckpointError):
            b.claim("w", "f", "v")
