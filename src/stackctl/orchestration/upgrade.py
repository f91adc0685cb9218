"""Version upgrade trigger: Idle -> Upgrading -> Idle.

The ``upgrading`` flag in the upgrade namespace is the only guard against
concurrent upgrades. It is taken with an atomic claim, held while the host
executes the upgrade, and released by a reset timer. The host normally
replaces this process before the timer fires; the timer covers hosts that
ignore the upgrade request.

Version strings are compared lexically, so ``"v1.0.9"`` sorts after
``"v1.0.10"``.
"""

from __future__ import annotations

import asyncio

from stackctl.core.config import UpgradeConfig
from stackctl.core.exceptions import (
    ExternalServiceError,
    InvalidVersionsError,
    UpgradeCancelledError,
    UpgradeConflictError,
    UpgradeExecutionError,
    VersionQueryError,
)
from stackctl.core.logging import get_logger
from stackctl.core.protocols import ICheckpointStore, IUpgradeExecutor, IVersionResolver
from stackctl.models.upgrade import FLAG_OFF, FLAG_ON, UpgradeState, UpgradeStatus
from stackctl.workflow.timers import ScheduledTimer, TimerSupervisor

FIELD_UPGRADING = "upgrading"
FIELD_DESC = "desc"

logger = get_logger(__name__)


def pick_target(latest: str, current: str) -> str:
    """Newer of ``latest`` and ``current`` by plain string comparison."""
    if latest < current:
        return current
    return latest


class UpgradeOrchestrator:
    """Guards, delays, and self-resets a version upgrade."""

    def __init__(
        self,
        *,
        store: ICheckpointStore,
        resolver: IVersionResolver,
        executor: IUpgradeExecutor,
        config: UpgradeConfig | None = None,
        timers: TimerSupervisor | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._executor = executor
        self._config = config or UpgradeConfig()
        self.timers = timers or TimerSupervisor()

    @property
    def namespace(self) -> str:
        return self._config.namespace

    def state(self) -> UpgradeState:
        return UpgradeState.from_fields(self._store.get_all(self.namespace))

    def status(self) -> UpgradeStatus:
        state = self.state()
        return UpgradeStatus(
            version=self._config.current_version,
            upgrading=state.upgrading,
            desc=state.desc,
        )

    async def request_upgrade(self, cancel: asyncio.Event | None = None) -> str:
        """Trigger an upgrade and return the target version.

        Args:
            cancel: Request-scoped cancellation signal. Setting it during the
                grace wait abandons the upgrade before execution and clears
                the flag at once. It has no effect once execution starts.

        Raises:
            UpgradeConflictError: Another upgrade holds the flag; nothing changed.
            InvalidVersionsError: The resolver returned no usable latest version.
            VersionQueryError: The resolver call failed.
            UpgradeCancelledError: ``cancel`` was set before execution.
            UpgradeExecutionError: The executor failed; the reset timer still runs.
        """
        if self._store.get(self.namespace, FIELD_UPGRADING) == FLAG_ON:
            logger.warning("upgrade_conflict", workflow=self.namespace)
            raise UpgradeConflictError()

        current = self._config.current_version
        target, desc = await self._resolve_target(current)

        if not self._store.claim(self.namespace, FIELD_UPGRADING, FLAG_ON):
            logger.warning("upgrade_conflict", workflow=self.namespace, stage="claim")
            raise UpgradeConflictError()
        # From here on the flag is ours; every exit path must leave a reset behind.
        try:
            self._store.set(self.namespace, FIELD_DESC, desc)
            logger.info("upgrade_started", target=target, desc=desc)
            await self._grace_wait(cancel)
        finally:
            cancelled = cancel is not None and cancel.is_set()
            self._schedule_reset(0 if cancelled else self._config.reset_seconds)

        if cancelled:
            logger.warning("upgrade_cancelled", target=target)
            raise UpgradeCancelledError(target)

        logger.warning("upgrade_executing", target=target)
        try:
            await self._executor.execute(target)
        except ExternalServiceError as exc:
            logger.error("upgrade_execute_failed", target=target, error=str(exc))
            raise UpgradeExecutionError(target, str(exc)) from exc

        logger.info("upgrade_ok", target=target)
        return target

    async def _resolve_target(self, current: str) -> tuple[str, str]:
        try:
            versions = await self._resolver.query()
        except ExternalServiceError as exc:
            raise VersionQueryError(f"query latest version: {exc}") from exc
        if versions is None or not versions.latest:
            raise InvalidVersionsError(f"invalid versions {versions!r}")

        target = pick_target(versions.latest, current)
        desc = f"upgrade to target={target}, current={current}, latest={versions.latest}"
        return target, desc

    async def _grace_wait(self, cancel: asyncio.Event | None) -> None:
        if cancel is None:
            await asyncio.sleep(self._config.grace_seconds)
            return
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self._config.grace_seconds)
        except TimeoutError:
            pass

    def _schedule_reset(self, delay: float) -> ScheduledTimer:
        return self.timers.schedule(f"{self.namespace}.reset", delay, self._reset_flag)

    async def _reset_flag(self) -> None:
        self._store.set(self.namespace, FIELD_UPGRADING, FLAG_OFF)
        logger.warning("upgrade_flag_reset", workflow=self.namespace)
