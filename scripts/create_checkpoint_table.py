"""Create the DynamoDB checkpoint table and optionally seed cloud credentials.

Usage:
    python scripts/create_checkpoint_table.py --endpoint-url http://localhost:4566
    python scripts/create_checkpoint_table.py --suffix -dev --secret-id AKID... --secret-key ...
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_BASE = "stackctl-checkpoints"
CREDENTIALS_NAMESPACE = "SRS_TENCENT_CAM"


def create_table(ddb: Any, suffix: str = "") -> bool:
    """Create the checkpoint table. Returns False if it already exists."""
    client = ddb.meta.client
    table_name = f"{TABLE_BASE}{suffix}"
    existing = client.list_tables().get("TableNames", [])
    if table_name in existing:
        print(f"  Table {table_name} already exists, skipping")
        return False

    client.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {table_name}")
    return True


def seed_credentials(ddb: Any, secret_id: str, secret_key: str, suffix: str = "",
                     namespace: str = CREDENTIALS_NAMESPACE) -> None:
    """Store the cloud secret pair where StoreCredentialSource looks for it."""
    tbl = ddb.Table(f"{TABLE_BASE}{suffix}")
    with tbl.batch_writer() as batch:
        batch.put_item(Item={"PK": namespace, "SK": "secretId", "value": secret_id})
        batch.put_item(Item={"PK": namespace, "SK": "secretKey", "value": secret_key})
    print(f"  Seeded credentials into {namespace}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the stackctl checkpoint table")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (LocalStack)")
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument("--suffix", default="", help="Table suffix: -dev, -uat, or empty for prod")
    parser.add_argument("--secret-id", default="")
    parser.add_argument("--secret-key", default="")
    args = parser.parse_args()

    kwargs: dict = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating table...")
    create_table(ddb, suffix=args.suffix)
    if args.secret_id and args.secret_key:
        print("Seeding credentials...")
        seed_credentials(ddb, args.secret_id, args.secret_key, suffix=args.suffix)
    print("Done!")


if __name__ == "__main__":
    main()
