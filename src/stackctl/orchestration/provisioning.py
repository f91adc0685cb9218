"""VoD backend provisioning: service, storage region, template catalog, remux pick.

Every step checkpoints into the provisioning namespace, so the whole run can
be repeated from any process with access to the store. Later steps read what
earlier steps stored rather than receiving it in memory.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import ValidationError

from stackctl.core.config import ProvisioningConfig
from stackctl.core.exceptions import MalformedStateError
from stackctl.core.logging import get_logger
from stackctl.core.protocols import ICheckpointStore, ICloudCatalogClient, ICredentialSource
from stackctl.core.types import StepAction
from stackctl.models.catalog import RemuxSelection, TemplateCatalog, TemplateFilter
from stackctl.models.workflow import CredentialPair, ProvisioningReport, ProvisioningStatus
from stackctl.workflow.classifier import (
    VOD_CREATE_SERVICE,
    VOD_CREATE_STORAGE_REGION,
    VOD_DESCRIBE_TEMPLATES,
    ErrorClassifier,
    default_classifier,
)
from stackctl.workflow.step import IDEMPOTENT_SENTINEL, WorkflowStep

FIELD_SERVICE = "service"
FIELD_STORAGE = "storage"
FIELD_TRANSCODE = "transcode"
FIELD_REMUX = "remux"

SELECT_REMUX = "local.select_remux"

CatalogFactory = Callable[[CredentialPair], ICloudCatalogClient]

logger = get_logger(__name__)


class ProvisioningOrchestrator:
    """Runs the four provisioning steps strictly in order."""

    def __init__(
        self,
        *,
        store: ICheckpointStore,
        credentials: ICredentialSource,
        catalog_factory: CatalogFactory,
        config: ProvisioningConfig | None = None,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        self._store = store
        self._credentials = credentials
        self._catalog_factory = catalog_factory
        self._config = config or ProvisioningConfig()
        self._classifier = classifier or default_classifier()

    @property
    def namespace(self) -> str:
        return self._config.namespace

    async def run_provisioning(self) -> ProvisioningReport:
        """Bring the VoD backend up, resuming from whatever is already checkpointed.

        Returns a skipped report when no cloud credentials are configured.

        Raises:
            StepFailedError: A collaborator failed fatally; later steps did not run.
            MalformedStateError: The stored template catalog cannot be parsed.
        """
        creds = self._credentials.lookup()
        if creds is None:
            logger.info("provisioning_skipped", reason="no cloud credentials")
            return ProvisioningReport(skipped=True)

        catalog = self._catalog_factory(creds)
        report = ProvisioningReport()
        for step in self._steps(catalog):
            report.steps.append(await step.run(self._store))

        logger.info(
            "provisioning_done",
            workflow=self.namespace,
            external_calls=report.external_calls,
        )
        return report

    def _steps(self, catalog: ICloudCatalogClient) -> list[WorkflowStep]:
        region = self._config.region

        async def create_service() -> str:
            await catalog.create_service()
            return IDEMPOTENT_SENTINEL

        async def create_storage_region() -> str:
            await catalog.create_storage_region(region)
            return region

        async def discover_templates() -> str:
            template_filter = TemplateFilter(limit=self._config.page_size)
            page = await catalog.describe_templates(template_filter)
            if page.total_count >= template_filter.limit:
                logger.warning(
                    "templates_truncated",
                    total_count=page.total_count,
                    limit=template_filter.limit,
                )
            templates = TemplateCatalog.from_page(page)
            logger.info("templates_discovered", nn=templates.nn, received=len(page.templates))
            return templates.model_dump_json()

        async def select_remux_template() -> str:
            selected = self._load_catalog().first_remux()
            if selected is None:
                logger.warning("remux_template_not_found")
            else:
                logger.info("remux_template_selected", definition=selected.id, name=selected.name)
            return RemuxSelection(template=selected).model_dump_json()

        def step(field: str, action: StepAction, collaborator: str) -> WorkflowStep:
            return WorkflowStep(
                self.namespace, field, action,
                collaborator=collaborator, classifier=self._classifier,
            )

        return [
            step(FIELD_SERVICE, create_service, VOD_CREATE_SERVICE),
            step(FIELD_STORAGE, create_storage_region, VOD_CREATE_STORAGE_REGION),
            step(FIELD_TRANSCODE, discover_templates, VOD_DESCRIBE_TEMPLATES),
            step(FIELD_REMUX, select_remux_template, SELECT_REMUX),
        ]

    def _load_catalog(self) -> TemplateCatalog:
        raw = self._store.get(self.namespace, FIELD_TRANSCODE)
        if not raw:
            raise MalformedStateError(self.namespace, FIELD_TRANSCODE, "checkpoint is missing")
        try:
            return TemplateCatalog.model_validate_json(raw)
        except ValidationError as exc:
            raise MalformedStateError(self.namespace, FIELD_TRANSCODE, str(exc)) from exc

    def status(self) -> ProvisioningStatus:
        """Read-only view of what has been provisioned so far."""
        fields = self._store.get_all(self.namespace)
        status = ProvisioningStatus(
            service=fields.get(FIELD_SERVICE, ""),
            storage=fields.get(FIELD_STORAGE, ""),
        )
        if fields.get(FIELD_TRANSCODE):
            status.template_count = self._load_catalog().nn
        if raw := fields.get(FIELD_REMUX):
            try:
                status.remux = RemuxSelection.model_validate_json(raw).template
            except ValidationError as exc:
                raise MalformedStateError(self.namespace, FIELD_REMUX, str(exc)) from exc
        status.complete = all(fields.get(f) for f in (FIELD_SERVICE, FIELD_STORAGE, FIELD_TRANSCODE, FIELD_REMUX))
        return status
