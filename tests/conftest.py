from __future__ import annotations

import logging
import os
from collections.abc import Generator

import pytest

from tests.fakes import MemoryCheckpointStore


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Route structlog to stderr at WARNING to keep test output quiet."""
    from stackctl.core.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all STACKCTL_ environment variables for the duration of a test."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("STACKCTL_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def store() -> MemoryCheckpointStore:
    return MemoryCheckpointStore()
