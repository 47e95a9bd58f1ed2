"""
Record storage in a managed DynamoDB table keyed by ``pk``/``sk``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from copypaste.core.config import StorageSettings
from copypaste.core.errors import StorageError


class DynamoDBClient:
    """Put and get single records; the table provides per-key atomicity."""

    def __init__(self, settings: StorageSettings) -> None:
        self._settings = settings
        self._resource = boto3.resource("dynamodb", region_name=settings.region_name)
        self._table = self._resource.Table(settings.dynamodb_table_name)

    def put_item(self, item: Dict[str, Any]) -> None:
        """Put an item in the DynamoDB table, replacing any previous version."""
        try:
            self._table.put_item(Item=item)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Writing {item.get('pk')}: {exc}") from exc

    def get_item(self, *, partition_key: str, sort_key: str) -> Optional[Dict[str, Any]]:
        """Retrieve an item using its key."""
        try:
            response = self._table.get_item(Key={"pk": partition_key, "sk": sort_key})
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Reading {partition_key}: {exc}") from exc
        return response.get("Item")


__all__ = ["DynamoDBClient"]
