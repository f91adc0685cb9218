"""HTTP version resolver for the releases endpoint."""

from __future__ import annotations

from typing import Any

import aiohttp

from stackctl.core.exceptions import ExternalServiceError, FailureKind
from stackctl.core.logging import get_logger
from stackctl.models.upgrade import VersionInfo

COLLABORATOR = "releases.query"

logger = get_logger(__name__)


class HttpVersionResolver:
    """IVersionResolver reading ``{latest, stable}`` JSON.

    The payload may be wrapped in a ``{"data": {...}}`` envelope.
    """

    def __init__(self, url: str, *, current_version: str = "", timeout: float = 30.0) -> None:
        self._url = url
        self._current_version = current_version
        self._timeout = timeout

    async def query(self) -> VersionInfo | None:
        params = {"version": self._current_version} if self._current_version else None
        try:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            async with (
                aiohttp.ClientSession(timeout=timeout) as session,
                session.get(self._url, params=params) as resp,
            ):
                if resp.status != 200:
                    text = await resp.text()
                    kind = FailureKind.UNAVAILABLE if resp.status >= 500 else FailureKind.REJECTED
                    raise ExternalServiceError(COLLABORATOR, kind, f"HTTP {resp.status}: {text}")
                try:
                    body: Any = await resp.json()
                except (ValueError, aiohttp.ContentTypeError) as exc:
                    raise ExternalServiceError(
                        COLLABORATOR, FailureKind.UNKNOWN, f"Malformed JSON response: {exc}",
                    ) from exc
        except TimeoutError:
            raise ExternalServiceError(COLLABORATOR, FailureKind.UNAVAILABLE, "Request timed out") from None
        except aiohttp.ClientError as exc:
            raise ExternalServiceError(COLLABORATOR, FailureKind.UNAVAILABLE, f"Client error: {exc}") from exc

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            logger.warning("releases_unexpected_payload", payload=repr(body)[:200])
            return None
        return VersionInfo(
            current=self._current_version,
            latest=str(body.get("latest") or ""),
            stable=str(body.get("stable") or ""),
        )
