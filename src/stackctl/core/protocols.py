"""Protocol interfaces for all stackctl abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from stackctl.models.catalog import TemplateFilter, TemplatePage
from stackctl.models.upgrade import VersionInfo
from stackctl.models.workflow import CredentialPair


# ---------------------------------------------------------------------------
# Persistence: Checkpoint Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICheckpointStore(Protocol):
    """Durable field-level key-value store keyed by (workflow, field)."""

    def get(self, workflow: str, field: str) -> str | None: ...

    def set(self, workflow: str, field: str, value: str) -> None: ...

    def claim(self, workflow: str, field: str, value: str) -> bool:
        """Atomically write ``value`` unless the field already holds it."""
        ...

    def get_all(self, workflow: str) -> dict[str, str]: ...


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@runtime_checkable
class ICredentialSource(Protocol):
    """Lookup of the cloud account secret pair."""

    def lookup(self) -> CredentialPair | None: ...


# ---------------------------------------------------------------------------
# Cloud VoD catalog
# ---------------------------------------------------------------------------

@runtime_checkable
class ICloudCatalogClient(Protocol):
    """Cloud transcoding backend: service, storage region, template catalog."""

    async def create_service(self) -> None: ...

    async def create_storage_region(self, region: str) -> None: ...

    async def describe_templates(self, template_filter: TemplateFilter) -> TemplatePage: ...


# ---------------------------------------------------------------------------
# Upgrade collaborators
# ---------------------------------------------------------------------------

@runtime_checkable
class IVersionResolver(Protocol):
    """Source of the latest and stable release versions."""

    async def query(self) -> VersionInfo | None: ...


@runtime_checkable
class IUpgradeExecutor(Protocol):
    """Performs the upgrade; may terminate the hosting process."""

    async def execute(self, target: str) -> None: ...
