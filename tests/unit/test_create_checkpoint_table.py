"""Tests for the checkpoint table bootstrap script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from create_checkpoint_table import create_table, seed_credentials  # noqa: E402

from stackctl.persistence.credentials import StoreCredentialSource  # noqa: E402
from stackctl.persistence.dynamodb_backend import DynamoDBCheckpointStore  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTable:
    def test_creates_table(self, ddb):
        assert create_table(ddb, suffix="-test") is True
        client = boto3.client("dynamodb", region_name="us-east-1")
        assert client.list_tables()["TableNames"] == ["stackctl-checkpoints-test"]

    def test_idempotent_skips_existing(self, ddb):
        create_table(ddb, suffix="-test")
        assert create_table(ddb, suffix="-test") is False


class TestSeedCredentials:
    def test_seeded_credentials_are_visible_to_store_source(self, ddb):
        create_table(ddb, suffix="-test")
        seed_credentials(ddb, "AKID", "KEY", suffix="-test")
        store = DynamoDBCheckpointStore(table_suffix="-test", region="us-east-1")
        creds = StoreCredentialSource(store).lookup()
        assert creds is not None
        assert creds.secret_id == "AKID"
