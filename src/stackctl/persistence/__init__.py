"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from stackctl.core.config import AppSettings
from stackctl.core.protocols import ICheckpointStore, ICredentialSource
from stackctl.persistence.credentials import SettingsCredentialSource, StoreCredentialSource
from stackctl.persistence.dynamodb_backend import DynamoDBCheckpointStore
from stackctl.persistence.memory_backend import MemoryCheckpointStore
from stackctl.persistence.redis_backend import RedisCheckpointStore


def create_checkpoint_store(settings: AppSettings | None = None) -> ICheckpointStore:
    """Create the checkpoint store selected by ``settings.checkpoint.backend``."""
    if settings is None:
        settings = AppSettings()

    backend = settings.checkpoint.backend
    if backend == "memory":
        return MemoryCheckpointStore()
    if backend == "dynamodb":
        return DynamoDBCheckpointStore(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    return RedisCheckpointStore(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )


def create_credential_source(
    store: ICheckpointStore, settings: AppSettings | None = None,
) -> ICredentialSource:
    """Static credentials win when configured; otherwise read them from the store."""
    if settings is None:
        settings = AppSettings()

    vod = settings.provisioning
    if vod.secret_id and vod.secret_key:
        return SettingsCredentialSource(vod.secret_id, vod.secret_key)
    return StoreCredentialSource(store, namespace=vod.credentials_namespace)


__all__ = [
    "DynamoDBCheckpointStore",
    "MemoryCheckpointStore",
    "RedisCheckpointStore",
    "SettingsCredentialSource",
    "StoreCredentialSource",
    "create_checkpoint_store",
    "create_credential_source",
]
