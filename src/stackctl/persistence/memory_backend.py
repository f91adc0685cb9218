"""In-memory checkpoint store for unit tests and local development."""

from __future__ import annotations

import threading


class MemoryCheckpointStore:
    """Dict-backed ICheckpointStore."""

    def __init__(self, initial: dict[str, dict[str, str]] | None = None) -> None:
        self._hashes: dict[str, dict[str, str]] = {
            workflow: dict(fields) for workflow, fields in (initial or {}).items()
        }
        self._lock = threading.Lock()
        self.writes: list[tuple[str, str, str]] = []

    def get(self, workflow: str, field: str) -> str | None:
        return self._hashes.get(workflow, {}).get(field)

    def set(self, workflow: str, field: str, value: str) -> None:
        with self._lock:
            self._hashes.setdefault(workflow, {})[field] = value
            self.writes.append((workflow, field, value))

    def claim(self, workflow: str, field: str, value: str) -> bool:
        with self._lock:
            fields = self._hashes.setdefault(workflow, {})
            if fields.get(field) == value:
                return False
            fields[field] = value
            self.writes.append((workflow, field, value))
            return True

    def get_all(self, workflow: str) -> dict[str, str]:
        return dict(self._hashes.get(workflow, {}))
