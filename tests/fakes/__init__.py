"""Shared test doubles: re-export the memory store and mock collaborators."""

from __future__ import annotations

from stackctl.clients.mock_clients import (
    MockCloudCatalogClient,
    MockUpgradeExecutor,
    MockVersionResolver,
)
from stackctl.models.catalog import TemplateDescriptor
from stackctl.persistence.memory_backend import MemoryCheckpointStore


def template(
    name: str,
    *,
    id: int = 0,
    container: str = "mp4",
    video: str = "copy",
    audio: str = "copy",
) -> TemplateDescriptor:
    """Build a TemplateDescriptor with remux defaults."""
    return TemplateDescriptor(
        id=id, name=name, container=container, video_codec=video, audio_codec=audio,
    )


__all__ = [
    "MemoryCheckpointStore",
    "MockCloudCatalogClient",
    "MockUpgradeExecutor",
    "MockVersionResolver",
    "template",
]
