"""Workflow step results, credentials, and provisioning views."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from stackctl.models.catalog import TemplateDescriptor


class StepOutcome(StrEnum):
    ALREADY_DONE = "ALREADY_DONE"
    EXECUTED = "EXECUTED"
    IDEMPOTENT = "IDEMPOTENT"


class StepResult(BaseModel):
    """What a single workflow step did on this invocation."""

    workflow: str
    field: str
    value: str
    outcome: StepOutcome


class CredentialPair(BaseModel):
    """Cloud account secret pair."""

    secret_id: str
    secret_key: str


class ProvisioningReport(BaseModel):
    """Result of one provisioning run."""

    skipped: bool = False
    steps: list[StepResult] = Field(default_factory=list)

    @property
    def external_calls(self) -> int:
        return sum(1 for s in self.steps if s.outcome != StepOutcome.ALREADY_DONE)


class ProvisioningStatus(BaseModel):
    """Read-only view of the provisioning checkpoints."""

    service: str = ""
    storage: str = ""
    template_count: int | None = None
    remux: TemplateDescriptor | None = None
    complete: bool = False
