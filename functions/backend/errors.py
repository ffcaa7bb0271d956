"""
Error taxonomy for the user handlers and the mapping from failures to responses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

from backend.schemas import HandlerResult

logger = logging.getLogger(__name__)


class HttpError(Exception):
    """An application error that already knows its HTTP status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BadRequestError(HttpError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFoundError(HttpError):
    def __init__(self, message: str):
        super().__init__(message, 404)


@dataclass(frozen=True)
class ClassifiedFailure:
    status_code: int
    message: str


@dataclass(frozen=True)
class OpaqueFailure:
    payload: Any


Failure = Union[ClassifiedFailure, OpaqueFailure]


def classify_error(exc: BaseException) -> Failure:
    if isinstance(exc, HttpError):
        return ClassifiedFailure(status_code=exc.status_code, message=exc.message)
    return OpaqueFailure(payload=exc)


def _raw_body(payload: Any) -> str:
    """
    Serialize an unclassified failure as-is.

    Exceptions are dumped as their type name plus their attribute mapping;
    anything that is not plain data is stringified.
    """
    fallback: dict[str, Any] = {}
    if isinstance(payload, BaseException):
        fallback = {"type": type(payload).__name__}
        attrs = getattr(payload, "__dict__", None) or {}
        payload = {
            **fallback,
            **{k: v for k, v in attrs.items() if not k.startswith("_")},
        }
    try:
        return json.dumps(payload, default=str, separators=(",", ":"))
    except (TypeError, ValueError):
        return json.dumps(fallback, separators=(",", ":"))


def error_result(exc: BaseException) -> HandlerResult:
    """Convert any failure raised by a handler into a response. Never raises."""
    failure = classify_error(exc)
    if isinstance(failure, ClassifiedFailure):
        logger.info("Request failed (%s): %s", failure.status_code, failure.message)
        return HandlerResult(
            status_code=failure.status_code,
            body=json.dumps({"error": failure.message}, separators=(",", ":")),
        )
    logger.exception("Unhandled error while serving user request", exc_info=exc)
    return HandlerResult(status_code=500, body=_raw_body(failure.payload))
