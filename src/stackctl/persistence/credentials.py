"""Credential sources for the cloud VoD account."""

from __future__ import annotations

from stackctl.core.protocols import ICheckpointStore
from stackctl.models.workflow import CredentialPair


class StoreCredentialSource:
    """Reads ``secretId``/``secretKey`` from a store namespace."""

    def __init__(self, store: ICheckpointStore, namespace: str = "SRS_TENCENT_CAM") -> None:
        self._store = store
        self._namespace = namespace

    def lookup(self) -> CredentialPair | None:
        secret_id = self._store.get(self._namespace, "secretId")
        secret_key = self._store.get(self._namespace, "secretKey")
        if not secret_id or not secret_key:
            return None
        return CredentialPair(secret_id=secret_id, secret_key=secret_key)


class SettingsCredentialSource:
    """Static credentials from configuration."""

    def __init__(self, secret_id: str = "", secret_key: str = "") -> None:
        self._secret_id = secret_id
        self._secret_key = secret_key

    def lookup(self) -> CredentialPair | None:
        if not self._secret_id or not self._secret_key:
            return None
        return CredentialPair(secret_id=self._secret_id, secret_key=self._secret_key)
