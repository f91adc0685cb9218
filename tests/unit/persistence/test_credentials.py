"""Tests for credential sources."""

from __future__ import annotations

from stackctl.core.config import AppSettings, ProvisioningConfig
from stackctl.persistence import create_credential_source
from stackctl.persistence.credentials import SettingsCredentialSource, StoreCredentialSource
from tests.fakes import MemoryCheckpointStore


class TestStoreCredentialSource:
    def test_reads_secret_pair(self):
        store = MemoryCheckpointStore({"SRS_TENCENT_CAM": {"secretId": "AKID", "secretKey": "KEY"}})
        creds = StoreCredentialSource(store).lookup()
        assert creds is not None
        assert (creds.secret_id, creds.secret_key) == ("AKID", "KEY")

    def test_missing_key_yields_none(self):
        store = MemoryCheckpointStore({"SRS_TENCENT_CAM": {"secretId": "AKID"}})
        assert StoreCredentialSource(store).lookup() is None

    def test_empty_namespace_yields_none(self):
        assert StoreCredentialSource(MemoryCheckpointStore()).lookup() is None


class TestSettingsCredentialSource:
    def test_both_halves_required(self):
        assert SettingsCredentialSource("AKID", "").lookup() is None
        assert SettingsCredentialSource("AKID", "KEY").lookup() is not None


class TestCreateCredentialSource:
    def test_prefers_configured_secrets(self):
        settings = AppSettings(provisioning=ProvisioningConfig(secret_id="AKID", secret_key="KEY"))
        source = create_credential_source(MemoryCheckpointStore(), settings)
        assert isinstance(source, SettingsCredentialSource)

    def test_falls_back_to_store(self, clean_env):
        settings = AppSettings(provisioning=ProvisioningConfig())
        source = create_credential_source(MemoryCheckpointStore(), settings)
        assert isinstance(source, StoreCredentialSource)
