"""
Dependency wiring for the FastAPI app and function entrypoints.
"""

from __future__ import annotations

from uuid import uuid4

from backend.config import get_settings
from backend.storage import InMemoryStorageClient, S3StorageClient, StorageClient

_storage_client: StorageClient | None = None


def get_storage_client() -> StorageClient:
    """
    Return a singleton storage client so in-memory users persist across requests.
    """
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.users_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.users_bucket,
            region=settings.s3_region,
            endpoint=settings.s3_endpoint,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
        )
    return _storage_client


def reset_storage_client() -> None:
    global _storage_client
    _storage_client = None


def generate_user_id() -> str:
    return str(uuid4())
