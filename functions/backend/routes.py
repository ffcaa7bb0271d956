"""
HTTP routes for the user API.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from backend import users
from backend.dependencies import get_storage_client
from backend.errors import error_result
from backend.schemas import HandlerResult, UserRequest
from backend.storage import StorageClient

router = APIRouter(tags=["users"])


async def _read_body(request: Request) -> str | None:
    raw = await request.body()
    if not raw:
        return None
    return raw.decode("utf-8")


def _to_response(result: HandlerResult) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type="application/json",
    )


@router.get("/user/{uuid}")
async def get_user(uuid: str, storage: StorageClient = Depends(get_storage_client)):
    result = await users.get_user(
        UserRequest(path_parameters={"uuid": uuid}), storage=storage
    )
    return _to_response(result)


@router.post("/user")
async def post_user(
    request: Request, storage: StorageClient = Depends(get_storage_client)
):
    try:
        body = await _read_body(request)
    except UnicodeDecodeError as e:
        return _to_response(error_result(e))
    result = await users.post_user(UserRequest(body=body), storage=storage)
    return _to_response(result)


@router.put("/user/{uuid}")
async def put_user(
    uuid: str,
    request: Request,
    storage: StorageClient = Depends(get_storage_client),
):
    try:
        body = await _read_body(request)
    except UnicodeDecodeError as e:
        return _to_response(error_result(e))
    result = await users.put_user(
        UserRequest(path_parameters={"uuid": uuid}, body=body),
        storage=storage,
    )
    return _to_response(result)
