"""Tests for the in-memory checkpoint store and the store factory."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis

from stackctl.core.config import AppSettings, CheckpointConfig
from stackctl.core.protocols import ICheckpointStore
from stackctl.persistence import create_checkpoint_store
from stackctl.persistence.memory_backend import MemoryCheckpointStore
from stackctl.persistence.redis_backend import RedisCheckpointStore


class TestMemoryCheckpointStore:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryCheckpointStore(), ICheckpointStore)

    def test_initial_contents_are_copied(self):
        seed = {"SRS_TENCENT_VOD": {"service": "ok"}}
        store = MemoryCheckpointStore(seed)
        store.set("SRS_TENCENT_VOD", "storage", "ap-guangzhou")
        assert "storage" not in seed["SRS_TENCENT_VOD"]

    def test_records_writes(self):
        store = MemoryCheckpointStore()
        store.set("w", "a", "1")
        store.claim("w", "b", "1")
        store.claim("w", "b", "1")
        assert store.writes == [("w", "a", "1"), ("w", "b", "1")]

    def test_get_all_returns_copy(self):
        store = MemoryCheckpointStore()
        store.set("w", "a", "1")
        snapshot = store.get_all("w")
        snapshot["a"] = "2"
        assert store.get("w", "a") == "1"


class TestCreateCheckpointStore:
    def test_memory_backend(self):
        settings = AppSettings(checkpoint=CheckpointConfig(backend="memory"))
        assert isinstance(create_checkpoint_store(settings), MemoryCheckpointStore)

    def test_redis_backend(self):
        settings = AppSettings(checkpoint=CheckpointConfig(backend="redis"))
        with patch("redis.Redis", return_value=fakeredis.FakeRedis(decode_responses=True)):
            assert isinstance(create_checkpoint_store(settings), RedisCheckpointStore)
