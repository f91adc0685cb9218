"""Classification of external failures into idempotent success or fatal."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum

from stackctl.core.exceptions import ExternalServiceError, FailureKind

VOD_CREATE_SERVICE = "vod.create_service"
VOD_CREATE_STORAGE_REGION = "vod.create_storage_region"
VOD_DESCRIBE_TEMPLATES = "vod.describe_templates"


class Disposition(StrEnum):
    IDEMPOTENT_SUCCESS = "IDEMPOTENT_SUCCESS"
    FATAL = "FATAL"


class ErrorClassifier:
    """Per-collaborator sets of failure kinds meaning "already in the target state".

    Anything not registered for the collaborator is fatal.
    """

    def __init__(self, rules: Mapping[str, Iterable[FailureKind]] | None = None) -> None:
        self._rules: dict[str, frozenset[FailureKind]] = {
            name: frozenset(kinds) for name, kinds in (rules or {}).items()
        }

    def register(self, collaborator: str, *kinds: FailureKind) -> None:
        self._rules[collaborator] = self._rules.get(collaborator, frozenset()) | frozenset(kinds)

    def classify(self, collaborator: str, error: ExternalServiceError) -> Disposition:
        if error.kind in self._rules.get(collaborator, frozenset()):
            return Disposition.IDEMPOTENT_SUCCESS
        return Disposition.FATAL


def default_classifier() -> ErrorClassifier:
    return ErrorClassifier({
        VOD_CREATE_SERVICE: [FailureKind.SERVICE_EXISTS],
        VOD_CREATE_STORAGE_REGION: [FailureKind.STORAGE_REGION_EXISTS],
    })
