"""
Storage abstraction for S3-compatible object storage and in-memory testing.

Every operation is a coroutine: callers await the store before moving on.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

JSON_CONTENT_TYPE = "application/json"


class StorageError(Exception):
    """A failure reported by the object store, keeping the store's error code."""

    def __init__(self, code: str, message: str = "", status_code: int = 500):
        super().__init__(message or code)
        self.code = code
        self.message = message or code
        self.status_code = status_code


class StorageClient(Protocol):
    """Defines the operations the user handlers need from object storage."""

    async def head_object(self, key: str) -> None:
        ...

    async def get_bytes(self, key: str) -> bytes:
        ...

    async def put_bytes(
        self, key: str, data: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    stored_objects: dict[str, bytes] = field(default_factory=dict)

    async def head_object(self, key: str) -> None:
        if key not in self.stored_objects:
            raise StorageError("NotFound", "Not Found", status_code=404)

    async def get_bytes(self, key: str) -> bytes:
        stored = self.stored_objects.get(key)
        if stored is None:
            raise StorageError(
                "NoSuchKey", "The specified key does not exist.", status_code=404
            )
        return stored

    async def put_bytes(
        self, key: str, data: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        self.stored_objects[key] = bytes(data)

    def reset(self) -> None:
        self.stored_objects.clear()


def _storage_error(exc: ClientError) -> StorageError:
    error = exc.response.get("Error", {})
    status_code = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 500)
    code = str(error.get("Code") or "Unknown")
    # HEAD responses carry no body, so botocore falls back to the bare status.
    if code == "404":
        code = "NotFound"
    return StorageError(code, error.get("Message") or str(exc), status_code=status_code)


@dataclass
class S3StorageClient:
    """
    S3 storage client scoped to a single bucket.
    """

    bucket: str
    region: str
    endpoint: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    async def head_object(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            raise _storage_error(e) from e

    async def get_bytes(self, key: str) -> bytes:
        try:
            response = await asyncio.to_thread(
                self._client.get_object, Bucket=self.bucket, Key=key
            )
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            raise _storage_error(e) from e

    async def put_bytes(
        self, key: str, data: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except ClientError as e:
            raise _storage_error(e) from e
