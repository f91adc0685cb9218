"""HTTP upgrade executor calling the host-side upgrade endpoint."""

from __future__ import annotations

import aiohttp

from stackctl.core.exceptions import ExternalServiceError, FailureKind

COLLABORATOR = "host.exec_upgrade"


class HttpUpgradeExecutor:
    """IUpgradeExecutor posting ``{"action": "execUpgrade", "args": [target]}``.

    The host may restart this process while handling the request, in which
    case the call never returns.
    """

    def __init__(self, url: str, *, timeout: float = 30.0) -> None:
        self._url = url
        self._timeout = timeout

    async def execute(self, target: str) -> None:
        payload = {"action": "execUpgrade", "args": [target]}
        try:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            async with (
                aiohttp.ClientSession(timeout=timeout) as session,
                session.post(self._url, json=payload) as resp,
            ):
                if resp.status != 200:
                    text = await resp.text()
                    kind = FailureKind.UNAVAILABLE if resp.status >= 500 else FailureKind.REJECTED
                    raise ExternalServiceError(COLLABORATOR, kind, f"HTTP {resp.status}: {text}")
        except TimeoutError:
            raise ExternalServiceError(COLLABORATOR, FailureKind.UNAVAILABLE, "Request timed out") from None
        except aiohttp.ClientError as exc:
            raise ExternalServiceError(COLLABORATOR, FailureKind.UNAVAILABLE, f"Client error: {exc}") from exc
