"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class RedisConfig(BaseSettings):
    """Redis checkpoint store configuration."""

    model_config = {"env_prefix": "STACKCTL_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class DynamoDBConfig(BaseSettings):
    """DynamoDB checkpoint store configuration."""

    model_config = {"env_prefix": "STACKCTL_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class CheckpointConfig(BaseSettings):
    """Which backend holds workflow checkpoints."""

    model_config = {"env_prefix": "STACKCTL_CHECKPOINT_"}

    backend: Literal["memory", "redis", "dynamodb"] = "redis"


class ProvisioningConfig(BaseSettings):
    """VoD backend provisioning."""

    model_config = {"env_prefix": "STACKCTL_VOD_"}

    namespace: str = "SRS_TENCENT_VOD"
    credentials_namespace: str = "SRS_TENCENT_CAM"
    region: str = "ap-guangzhou"
    endpoint: str = "vod.tencentcloudapi.com"
    # Optional static credentials; when unset they are read from the store.
    secret_id: str = ""
    secret_key: str = ""
    page_size: int = 100


class UpgradeConfig(BaseSettings):
    """Version upgrade trigger."""

    model_config = {"env_prefix": "STACKCTL_UPGRADE_"}

    namespace: str = "SRS_UPGRADING"
    current_version: str = "v1.0.307"
    grace_seconds: float = 3.0
    reset_seconds: float = 10.0
    releases_url: str = "https://api.ossrs.net/terraform/v1/releases"
    executor_url: str = "http://127.0.0.1:2023/terraform/v1/host/exec"
    http_timeout: float = 30.0


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "STACKCTL_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    redis: RedisConfig = RedisConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    checkpoint: CheckpointConfig = CheckpointConfig()
    provisioning: ProvisioningConfig = ProvisioningConfig()
    upgrade: UpgradeConfig = UpgradeConfig()
