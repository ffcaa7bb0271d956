"""
Create, fetch and update handlers for user documents.

Each user is stored as a single JSON object named ``<uuid>.json``. The store is
the only state: handlers parse the request, make one or two awaited store
calls and turn the outcome (or any failure) into a ``HandlerResult``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from backend.config import get_settings
from backend.dependencies import generate_user_id, get_storage_client
from backend.errors import BadRequestError, NotFoundError, error_result
from backend.schemas import HandlerResult, UserRequest
from backend.storage import StorageClient, StorageError

logger = logging.getLogger(__name__)

# S3 reports a missing key as NotFound on HEAD and NoSuchKey on GET; both mean the same.
NOT_FOUND_CODES = frozenset({"NotFound", "NoSuchKey"})

User = dict[str, Any]


def user_key(uuid: str) -> str:
    return f"{uuid}{get_settings().user_key_suffix}"


def get_uuid(request: UserRequest) -> str:
    uuid = (request.path_parameters or {}).get("uuid")
    if not uuid:
        raise BadRequestError("Missing UUID")
    return uuid


async def validate_user_exists(uuid: str, storage: StorageClient) -> None:
    try:
        await storage.head_object(user_key(uuid))
    except StorageError as e:
        if e.code in NOT_FOUND_CODES:
            raise NotFoundError("user not found") from e
        raise


async def upsert_user(uuid: str, body: Optional[str], storage: StorageClient) -> User:
    """
    Write ``body`` merged with ``uuid`` as the full content of the user's object.

    The given uuid always wins over a ``uuid`` field present in the body.
    """
    parsed = json.loads(body or "{}", parse_constant=_reject_constant)
    if not isinstance(parsed, dict):
        raise TypeError(f"user body must be a JSON object, got {type(parsed).__name__}")
    user = {**parsed, "uuid": uuid}

    await storage.put_bytes(user_key(uuid), _dumps(user).encode("utf-8"))
    return user


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _dumps(user: User) -> str:
    text = json.dumps(user, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    # Lone surrogates cannot be encoded; keep them as \u escapes.
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


async def get_user(
    request: UserRequest, storage: StorageClient | None = None
) -> HandlerResult:
    """GET /user/{uuid}: return the stored document text as-is."""
    try:
        storage = storage or get_storage_client()
        uuid = get_uuid(request)
        await validate_user_exists(uuid, storage)

        data = await storage.get_bytes(user_key(uuid))
        # An empty object is returned as an empty body rather than an error.
        return HandlerResult(status_code=200, body=(data or b"").decode("utf-8"))
    except Exception as e:
        return error_result(e)


async def post_user(
    request: UserRequest,
    storage: StorageClient | None = None,
    id_factory: Callable[[], str] = generate_user_id,
) -> HandlerResult:
    """POST /user: store the body under a freshly generated uuid."""
    try:
        storage = storage or get_storage_client()
        uuid = id_factory()
        user = await upsert_user(uuid, request.body, storage)
        logger.info("Created user %s", uuid)
        return HandlerResult(status_code=201, body=_dumps(user))
    except Exception as e:
        return error_result(e)


async def put_user(
    request: UserRequest, storage: StorageClient | None = None
) -> HandlerResult:
    """PUT /user/{uuid}: replace an existing user's document in full."""
    try:
        storage = storage or get_storage_client()
        uuid = get_uuid(request)
        await validate_user_exists(uuid, storage)

        user = await upsert_user(uuid, request.body, storage)
        logger.info("Updated user %s", uuid)
        return HandlerResult(status_code=200, body=_dumps(user))
    except Exception as e:
        return error_result(e)
