"""Owned background timers.

Timers outlive the request that scheduled them but stay registered here, so
callers (and tests) can see what is pending, wait for it, or drop it the way
a process exit would.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum

from stackctl.core.logging import get_logger
from stackctl.core.types import TimerCallback

logger = get_logger(__name__)


class TimerState(StrEnum):
    PENDING = "PENDING"
    FIRED = "FIRED"
    DROPPED = "DROPPED"


class ScheduledTimer:
    """A callback that runs once after ``delay`` seconds."""

    def __init__(
        self,
        name: str,
        delay: float,
        callback: TimerCallback,
    ) -> None:
        self.name = name
        self.delay = delay
        self.state = TimerState.PENDING
        self._callback = callback
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"ScheduledTimer({self.name!r}, delay={self.delay}, state={self.state})"

    def start(self) -> None:
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        self.state = TimerState.FIRED
        try:
            await self._callback()
        except Exception:
            # Nobody awaits a detached timer; the log is the only report.
            logger.exception("timer_callback_failed", timer=self.name)

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def drop(self) -> None:
        if self.state is TimerState.PENDING and self._task is not None:
            self._task.cancel()
            self.state = TimerState.DROPPED

    async def wait(self) -> None:
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if self.state is not TimerState.DROPPED:
                raise


class TimerSupervisor:
    """Registry of scheduled timers."""

    def __init__(self) -> None:
        self._timers: list[ScheduledTimer] = []

    def schedule(
        self,
        name: str,
        delay: float,
        callback: TimerCallback,
    ) -> ScheduledTimer:
        timer = ScheduledTimer(name, delay, callback)
        timer.start()
        # Finished timers are only kept until the next schedule or join.
        self._timers = [t for t in self._timers if not t.done]
        self._timers.append(timer)
        logger.debug("timer_scheduled", timer=name, delay=delay)
        return timer

    @property
    def pending(self) -> list[ScheduledTimer]:
        return [t for t in self._timers if t.state is TimerState.PENDING]

    @property
    def timers(self) -> list[ScheduledTimer]:
        return list(self._timers)

    async def join(self) -> None:
        """Wait for every outstanding timer to fire or be dropped."""
        for timer in list(self._timers):
            await timer.wait()
        self._timers = [t for t in self._timers if t.state is TimerState.PENDING]

    def shutdown(self) -> int:
        """Drop every pending timer without running it, as on process exit."""
        dropped = self.pending
        for timer in dropped:
            timer.drop()
        if dropped:
            logger.warning("timers_dropped", count=len(dropped), timers=[t.name for t in dropped])
        return len(dropped)
