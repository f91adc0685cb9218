"""Mock collaborators for local development and testing.

Each mock records its calls and can be scripted to fail. No network access.
"""

from __future__ import annotations

import asyncio

from stackctl.core.exceptions import ExternalServiceError
from stackctl.models.catalog import TemplateDescriptor, TemplateFilter, TemplatePage
from stackctl.models.upgrade import VersionInfo


class MockCloudCatalogClient:
    """ICloudCatalogClient returning a canned template page."""

    def __init__(
        self,
        templates: list[TemplateDescriptor] | None = None,
        total_count: int | None = None,
    ) -> None:
        self._templates = list(templates or [])
        self._total_count = total_count
        self._failures: dict[str, ExternalServiceError] = {}
        self.calls: list[tuple[str, tuple]] = []

    def fail(self, operation: str, error: ExternalServiceError) -> None:
        """Make ``operation`` raise ``error`` until :meth:`recover` is called."""
        self._failures[operation] = error

    def recover(self, operation: str | None = None) -> None:
        if operation is None:
            self._failures.clear()
        else:
            self._failures.pop(operation, None)

    def _record(self, operation: str, *args: object) -> None:
        self.calls.append((operation, args))
        if operation in self._failures:
            raise self._failures[operation]

    async def create_service(self) -> None:
        self._record("create_service")

    async def create_storage_region(self, region: str) -> None:
        self._record("create_storage_region", region)

    async def describe_templates(self, template_filter: TemplateFilter) -> TemplatePage:
        self._record("describe_templates", template_filter)
        page = self._templates[template_filter.offset:template_filter.offset + template_filter.limit]
        total = self._total_count if self._total_count is not None else len(self._templates)
        return TemplatePage(total_count=total, templates=page)


class MockVersionResolver:
    """IVersionResolver returning fixed versions."""

    def __init__(self, versions: VersionInfo | None = None, error: Exception | None = None) -> None:
        self.versions = versions
        self.error = error
        self.calls = 0

    async def query(self) -> VersionInfo | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.versions


class MockUpgradeExecutor:
    """IUpgradeExecutor that records targets.

    With ``hang=True`` the call never returns on its own, like an executor
    whose host process is being replaced; :meth:`release` lets it finish.
    """

    def __init__(self, error: Exception | None = None, hang: bool = False) -> None:
        self.error = error
        self.targets: list[str] = []
        self.started = asyncio.Event()
        self._released = asyncio.Event()
        if not hang:
            self._released.set()

    def release(self) -> None:
        self._released.set()

    async def execute(self, target: str) -> None:
        self.targets.append(target)
        self.started.set()
        await self._released.wait()
        if self.error is not None:
            raise self.error
