"""DynamoDB checkpoint store: PK=workflow, SK=field."""

from __future__ import annotations

from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from stackctl.core.exceptions import CheckpointError

TABLE_BASE = "stackctl-checkpoints"


class DynamoDBCheckpointStore:
    """Production ICheckpointStore backed by a single DynamoDB table."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(f"{TABLE_BASE}{table_suffix}")

    def get(self, workflow: str, field: str) -> str | None:
        try:
            resp = self._table.get_item(Key={"PK": workflow, "SK": field}, ConsistentRead=True)
        except ClientError as exc:
            raise CheckpointError(f"DynamoDB get failed for {workflow}.{field}: {exc}") from exc
        item = resp.get("Item")
        return str(item["value"]) if item else None

    def set(self, workflow: str, field: str, value: str) -> None:
        try:
            self._table.put_item(Item={"PK": workflow, "SK": field, "value": value})
        except ClientError as exc:
            raise CheckpointError(f"DynamoDB put failed for {workflow}.{field}: {exc}") from exc

    def claim(self, workflow: str, field: str, value: str) -> bool:
        try:
            self._table.put_item(
                Item={"PK": workflow, "SK": field, "value": value},
                ConditionExpression="attribute_not_exists(PK) OR #v <> :v",
                ExpressionAttributeNames={"#v": "value"},
                ExpressionAttributeValues={":v": value},
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                return False
            raise CheckpointError(f"DynamoDB claim failed for {workflow}.{field}: {exc}") from exc
        return True

    def get_all(self, workflow: str) -> dict[str, str]:
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": Key("PK").eq(workflow),
            "ConsistentRead": True,
        }
        try:
            while True:
                resp = self._table.query(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise CheckpointError(f"DynamoDB query failed for {workflow}: {exc}") from exc
        return {str(item["SK"]): str(item["value"]) for item in items}
