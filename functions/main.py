# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

# Function entrypoints for the user API.
#
# Each entrypoint takes an API Gateway proxy event ({"pathParameters": ...,
# "body": ...}) and returns {"statusCode": ..., "body": ...}:
#
#   get_user  <- GET  /user/{uuid}
#   post_user <- POST /user
#   put_user  <- PUT  /user/{uuid}

# Standard library imports
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

# Third-party library imports
from pydantic import ValidationError

# Local application imports
from backend import users
from backend.config import get_settings
from backend.errors import error_result
from backend.schemas import HandlerResult, UserRequest

logging.basicConfig(level=get_settings().log_level)


def _run(
    handler: Callable[[UserRequest], Awaitable[HandlerResult]],
    event: Optional[dict],
) -> dict:
    try:
        request = UserRequest.model_validate(event or {})
    except ValidationError as e:
        return error_result(e).to_event_result()
    return asyncio.run(handler(request)).to_event_result()


def get_user(event: dict, context: Any = None) -> dict:
    """
    Returns the stored JSON text of the user named by the `uuid` path parameter.

    Args:
        event (dict): The proxy event, containing pathParameters.uuid.
        context: The invocation context (unused).

    Returns:
        A dictionary with statusCode and body.
    """
    return _run(users.get_user, event)


def post_user(event: dict, context: Any = None) -> dict:
    """
    Creates a user from the JSON request body under a newly generated uuid.

    Returns:
        A dictionary with statusCode 201 and the created user as body.
    """
    return _run(users.post_user, event)


def put_user(event: dict, context: Any = None) -> dict:
    """
    Replaces the document of an existing user with the JSON request body.
    """
    return _run(users.put_user, event)
