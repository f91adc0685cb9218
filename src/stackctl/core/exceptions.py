"""stackctl exception hierarchy."""

from __future__ import annotations

from enum import StrEnum


class StackError(Exception):
    """Base exception for all stackctl errors."""


class CheckpointError(StackError):
    """Checkpoint store operation failed."""


class FailureKind(StrEnum):
    """Closed set of failure kinds an external collaborator can report."""

    SERVICE_EXISTS = "service_exists"
    STORAGE_REGION_EXISTS = "storage_region_exists"
    UNAVAILABLE = "unavailable"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class ExternalServiceError(StackError):
    """An external collaborator call failed."""

    def __init__(
        self,
        collaborator: str,
        kind: FailureKind,
        message: str,
        code: str = "",
    ) -> None:
        self.collaborator = collaborator
        self.kind = kind
        self.code = code
        super().__init__(f"{collaborator} failed ({kind}{', ' + code if code else ''}): {message}")


class WorkflowError(StackError):
    """Error during workflow execution."""


class StepFailedError(WorkflowError):
    """A workflow step failed and left no checkpoint."""

    def __init__(self, workflow: str, field: str, message: str) -> None:
        self.workflow = workflow
        self.field = field
        super().__init__(f"Step {workflow}.{field} failed: {message}")


class MalformedStateError(WorkflowError):
    """A stored checkpoint exists but cannot be parsed."""

    def __init__(self, workflow: str, field: str, message: str) -> None:
        self.workflow = workflow
        self.field = field
        super().__init__(f"Checkpoint {workflow}.{field} is malformed: {message}")


class UpgradeError(StackError):
    """Error while triggering a version upgrade."""


class UpgradeConflictError(UpgradeError):
    """An upgrade is already in progress."""

    def __init__(self) -> None:
        super().__init__("already upgrading")


class InvalidVersionsError(UpgradeError):
    """The version resolver returned nothing usable."""


class UpgradeExecutionError(UpgradeError):
    """The upgrade executor failed."""

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(f"Upgrade to {target} failed: {message}")


class VersionQueryError(UpgradeError):
    """The version resolver call failed."""


class UpgradeCancelledError(UpgradeError):
    """The request was cancelled during the grace wait; nothing was executed."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Upgrade to {target} cancelled before execution")
