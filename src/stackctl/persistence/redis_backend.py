"""Redis checkpoint store: one hash per workflow namespace."""

from __future__ import annotations

import redis

from stackctl.core.exceptions import CheckpointError


class RedisCheckpointStore:
    """Production ICheckpointStore backed by Redis hashes."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def get(self, workflow: str, field: str) -> str | None:
        try:
            return self._client.hget(workflow, field)
        except Exception as exc:
            raise CheckpointError(f"Redis HGET failed for {workflow}.{field}: {exc}") from exc

    def set(self, workflow: str, field: str, value: str) -> None:
        try:
            self._client.hset(workflow, field, value)
        except Exception as exc:
            raise CheckpointError(f"Redis HSET failed for {workflow}.{field}: {exc}") from exc

    def claim(self, workflow: str, field: str, value: str) -> bool:
        def _swap(pipe: redis.client.Pipeline) -> bool:
            if pipe.hget(workflow, field) == value:
                return False
            pipe.multi()
            pipe.hset(workflow, field, value)
            return True

        try:
            return self._client.transaction(_swap, workflow, value_from_callable=True)
        except Exception as exc:
            raise CheckpointError(f"Redis claim failed for {workflow}.{field}: {exc}") from exc

    def get_all(self, workflow: str) -> dict[str, str]:
        try:
            return self._client.hgetall(workflow)
        except Exception as exc:
            raise CheckpointError(f"Redis HGETALL failed for {workflow}: {exc}") from exc
