import os
import boto3
from datetime import datetime, timezone
from typing import Any, Optional


REGION = os.getenv("AWS_REGION", "eu-north-1")
STATE_TABLE = os.getenv("OASIS_STATE_TABLE", "OasisState")


class DynamoKeyValueStore:
    """
    Client state mirrored to a DynamoDB table with PK: key.
    Values are stored as JSON strings to avoid float/Decimal headaches.
    """

    def __init__(self, table_name: str = STATE_TABLE, region: str = REGION, table: Optional[Any] = None):
        if table is None:
            dynamodb = boto3.resource("dynamodb", region_name=region)
            table = dynamodb.Table(table_name)
        self.table = table

    def get_item(self, key: str) -> Optional[str]:
        resp = self.table.get_item(
            Key={"key": key},
            ProjectionExpression="#v",
            ExpressionAttributeNames={"#v": "value"},  # reserved word, alias it
        )
        item = resp.get("Item") or {}
        value = item.get("value")
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        self.table.put_item(
            Item={
                "key": key,
                "value": value,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
        )

    def remove_item(self, key: str) -> None:
        self.table.delete_item(Key={"key": key})
