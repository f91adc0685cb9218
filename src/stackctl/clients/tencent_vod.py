"""Tencent Cloud VoD catalog client (API version 2018-07-17).

The SDK is synchronous; calls run in a worker thread. SDK error codes are
translated to :class:`FailureKind` so the workflow never sees vendor strings.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from tencentcloud.common import credential
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile
from tencentcloud.vod.v20180717 import vod_client

from stackctl.core.exceptions import ExternalServiceError, FailureKind
from stackctl.models.catalog import TemplateDescriptor, TemplateFilter, TemplatePage
from stackctl.models.workflow import CredentialPair
from stackctl.workflow.classifier import (
    VOD_CREATE_SERVICE,
    VOD_CREATE_STORAGE_REGION,
    VOD_DESCRIBE_TEMPLATES,
)

FAILURE_CODES: dict[str, FailureKind] = {
    "FailedOperation.ServiceExist": FailureKind.SERVICE_EXISTS,
}

_PREFIX_KINDS: list[tuple[str, FailureKind]] = [
    ("ClientNetworkError", FailureKind.UNAVAILABLE),
    ("ServerNetworkError", FailureKind.UNAVAILABLE),
    ("InternalError", FailureKind.UNAVAILABLE),
    ("RequestLimitExceeded", FailureKind.UNAVAILABLE),
    ("AuthFailure", FailureKind.REJECTED),
    ("UnauthorizedOperation", FailureKind.REJECTED),
    ("InvalidParameter", FailureKind.REJECTED),
    ("MissingParameter", FailureKind.REJECTED),
]


def failure_kind(code: str | None, extra: Mapping[str, FailureKind] | None = None) -> FailureKind:
    """Map a Tencent Cloud error code onto the closed failure set."""
    if not code:
        return FailureKind.UNKNOWN
    if extra and code in extra:
        return extra[code]
    if code in FAILURE_CODES:
        return FAILURE_CODES[code]
    for prefix, kind in _PREFIX_KINDS:
        if code.startswith(prefix):
            return kind
    return FailureKind.UNKNOWN


def _template_from_api(item: dict[str, Any]) -> TemplateDescriptor:
    return TemplateDescriptor(
        id=int(item.get("Definition", 0)),
        name=item.get("Name", ""),
        container=item.get("Container", ""),
        video_codec=(item.get("VideoTemplate") or {}).get("Codec", ""),
        audio_codec=(item.get("AudioTemplate") or {}).get("Codec", ""),
        definition_tier=(item.get("TEHDConfig") or {}).get("Type", ""),
        comment=item.get("Comment", ""),
        update_time=item.get("UpdateTime", ""),
    )


class TencentVodCatalogClient:
    """ICloudCatalogClient backed by the official tencentcloud SDK."""

    def __init__(
        self,
        credentials: CredentialPair,
        region: str,
        endpoint: str = "vod.tencentcloudapi.com",
        extra_codes: Mapping[str, FailureKind] | None = None,
    ) -> None:
        self._region = region
        self._extra_codes = dict(extra_codes or {})
        cred = credential.Credential(credentials.secret_id, credentials.secret_key)
        http_profile = HttpProfile()
        http_profile.endpoint = endpoint
        client_profile = ClientProfile()
        client_profile.httpProfile = http_profile
        self._client = vod_client.VodClient(cred, region, client_profile)

    def _call(self, collaborator: str, action: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self._client.call_json(action, params)
        except TencentCloudSDKException as exc:
            code = exc.get_code()
            raise ExternalServiceError(
                collaborator, failure_kind(code, self._extra_codes), exc.get_message() or str(exc), code or "",
            ) from exc
        return resp.get("Response", {})

    async def create_service(self) -> None:
        await asyncio.to_thread(self._call, VOD_CREATE_SERVICE, "CreateService", {})

    async def create_storage_region(self, region: str) -> None:
        await asyncio.to_thread(
            self._call, VOD_CREATE_STORAGE_REGION, "CreateStorageRegion", {"StorageRegion": region},
        )

    async def describe_templates(self, template_filter: TemplateFilter) -> TemplatePage:
        resp = await asyncio.to_thread(
            self._call,
            VOD_DESCRIBE_TEMPLATES,
            "DescribeTranscodeTemplates",
            {
                "Type": template_filter.type,
                "ContainerType": template_filter.container_type,
                "Limit": template_filter.limit,
                "Offset": template_filter.offset,
                "TEHDType": template_filter.tehd_type,
            },
        )
        return TemplatePage(
            total_count=int(resp.get("TotalCount", 0)),
            templates=[_template_from_api(item) for item in resp.get("TranscodeTemplateSet") or []],
        )
