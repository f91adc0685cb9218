"""Type aliases used across stackctl."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

# A workflow step's external action; returns the checkpoint value to store.
StepAction = Callable[[], Awaitable[str]]
TimerCallback = Callable[[], Awaitable[None]]
