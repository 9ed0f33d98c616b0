"""DynamoDB storage backend for production deployments."""

from __future__ import annotations

import time
from typing import Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import SessionNotFoundError, StorageBackendError
from ..marshal import JSONMarshaler, Marshaler
from ..session import MAX_AGE


class DynamoDBStorage:
    """Session storage using AWS DynamoDB.

    Table schema:
        Partition key: session_id (S)
        Attributes: data (B, marshaled values), content_type (S),
        updated_at (N), ttl (N)

    Enable TTL on the `ttl` attribute for automatic cleanup. DynamoDB reaps
    expired items lazily, so items past their ttl are reported as missing.
    """

    def __init__(
        self,
        table_name: str = "sessions",
        max_age: int = MAX_AGE,
        marshaler: Marshaler | None = None,
        endpoint_url: str = "",
        region_name: str = "us-west-2",
    ) -> None:
        self._table_name = table_name
        self._max_age = max_age
        self._marshaler = marshaler or JSONMarshaler()
        self._session = aioboto3.Session()
        self._endpoint_url = endpoint_url or None
        self._region_name = region_name

    def _resource(self):
        return self._session.resource(
            "dynamodb",
            endpoint_url=self._endpoint_url,
            region_name=self._region_name,
        )

    async def load(self, session_id: str) -> dict[Any, Any]:
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                response = await table.get_item(Key={"session_id": session_id})
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError(f"dynamodb.get_item: {e}") from e

        item = response.get("Item")
        if item is None:
            raise SessionNotFoundError(session_id)

        ttl = item.get("ttl")
        if ttl is not None and time.time() > float(ttl):
            raise SessionNotFoundError(session_id)

        return self._marshaler.unmarshal(bytes(item["data"]))

    async def save(self, session_id: str, values: dict[Any, Any]) -> None:
        data = self._marshaler.marshal(values)
        now = time.time()
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                await table.put_item(
                    Item={
                        "session_id": session_id,
                        "data": data,
                        "content_type": self._marshaler.content_type,
                        "updated_at": int(now),
                        "ttl": int(now + self._max_age),
                    }
                )
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError(f"dynamodb.put_item: {e}") from e

    async def delete(self, session_id: str) -> None:
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                await table.delete_item(Key={"session_id": session_id})
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError(f"dynamodb.delete_item: {e}") from e
