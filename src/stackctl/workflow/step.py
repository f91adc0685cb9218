"""Checkpointed workflow step.

A step is identified by ``(workflow, field)`` in the checkpoint store. A
non-empty checkpoint means the step is done and the external call is skipped.
Otherwise the call runs once and its value is persisted; an external failure
the classifier deems idempotent persists ``IDEMPOTENT_SENTINEL`` instead.
Fatal failures write nothing, so the next invocation retries the same step.
"""

from __future__ import annotations

from stackctl.core.exceptions import ExternalServiceError, StepFailedError
from stackctl.core.logging import get_logger
from stackctl.core.protocols import ICheckpointStore
from stackctl.core.types import StepAction
from stackctl.models.workflow import StepOutcome, StepResult
from stackctl.workflow.classifier import Disposition, ErrorClassifier

IDEMPOTENT_SENTINEL = "ok"

logger = get_logger(__name__)


class WorkflowStep:
    """One externally side-effecting step guarded by a checkpoint."""

    def __init__(
        self,
        workflow: str,
        field: str,
        action: StepAction,
        *,
        collaborator: str,
        classifier: ErrorClassifier,
    ) -> None:
        self.workflow = workflow
        self.field = field
        self.collaborator = collaborator
        self._action = action
        self._classifier = classifier

    def __repr__(self) -> str:
        return f"WorkflowStep({self.workflow!r}, {self.field!r})"

    async def run(self, store: ICheckpointStore) -> StepResult:
        log = logger.bind(workflow=self.workflow, field=self.field)

        existing = store.get(self.workflow, self.field)
        if existing:
            log.info("step_already_done", value=existing[:80])
            return self._result(existing, StepOutcome.ALREADY_DONE)

        try:
            value = await self._action()
        except ExternalServiceError as exc:
            if self._classifier.classify(self.collaborator, exc) is Disposition.FATAL:
                log.error("step_failed", kind=exc.kind.value, code=exc.code, error=str(exc))
                raise StepFailedError(self.workflow, self.field, str(exc)) from exc
            log.info("step_target_exists", kind=exc.kind.value, code=exc.code)
            store.set(self.workflow, self.field, IDEMPOTENT_SENTINEL)
            return self._result(IDEMPOTENT_SENTINEL, StepOutcome.IDEMPOTENT)

        store.set(self.workflow, self.field, value)
        log.info("step_executed", value=value[:80])
        return self._result(value, StepOutcome.EXECUTED)

    def _result(self, value: str, outcome: StepOutcome) -> StepResult:
        return StepResult(workflow=self.workflow, field=self.field, value=value, outcome=outcome)
