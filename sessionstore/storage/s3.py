"""S3 object storage backend."""

from __future__ import annotations

from typing import Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import SessionNotFoundError, StorageBackendError
from ..marshal import JSONMarshaler, Marshaler

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Storage:
    """Session storage using one S3 object per session.

    Objects are keyed ``prefix + session_id`` so several applications can
    share a bucket. The body is produced by the marshaler and its content
    type is recorded as the object's ContentType.

    Configure a bucket lifecycle rule on the prefix to expire abandoned
    sessions; nothing here deletes them in the background.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "sessions/",
        marshaler: Marshaler | None = None,
        endpoint_url: str = "",
        region_name: str = "us-west-2",
    ) -> None:
        self._bucket = bucket
        self._prefix = prefix
        self._marshaler = marshaler or JSONMarshaler()
        self._session = aioboto3.Session()
        self._endpoint_url = endpoint_url or None
        self._region_name = region_name

    def _key(self, session_id: str) -> str:
        return self._prefix + session_id

    def _client(self):
        return self._session.client(
            "s3",
            endpoint_url=self._endpoint_url,
            region_name=self._region_name,
        )

    async def save(self, session_id: str, values: dict[Any, Any]) -> None:
        data = self._marshaler.marshal(values)
        try:
            async with self._client() as s3:
                await s3.put_object(
                    Bucket=self._bucket,
                    Key=self._key(session_id),
                    Body=data,
                    ContentLength=len(data),
                    ContentType=self._marshaler.content_type,
                )
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError(f"s3.put_object: {e}") from e

    async def load(self, session_id: str) -> dict[Any, Any]:
        try:
            async with self._client() as s3:
                obj = await s3.get_object(Bucket=self._bucket, Key=self._key(session_id))
                try:
                    body = await obj["Body"].read()
                except Exception as e:
                    # aiohttp payload and timeout errors are not botocore errors.
                    raise StorageBackendError(f"s3.get_object body: {e}") from e
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES:
                raise SessionNotFoundError(session_id) from e
            raise StorageBackendError(f"s3.get_object: {e}") from e
        except BotoCoreError as e:
            raise StorageBackendError(f"s3.get_object: {e}") from e

        return self._marshaler.unmarshal(body)

    async def delete(self, session_id: str) -> None:
        # S3 DeleteObject succeeds for keys that do not exist.
        try:
            async with self._client() as s3:
                await s3.delete_object(Bucket=self._bucket, Key=self._key(session_id))
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError(f"s3.delete_object: {e}") from e
