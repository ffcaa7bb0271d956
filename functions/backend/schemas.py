"""
Pydantic schemas for user handler requests and responses.

Field aliases follow the API Gateway proxy event/result shape so the same
models serve the FastAPI routes and the function entrypoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    path_parameters: Optional[dict[str, Optional[str]]] = Field(
        default=None, alias="pathParameters"
    )
    body: Optional[str] = None


class HandlerResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    body: str = ""

    def to_event_result(self) -> dict:
        return self.model_dump(by_alias=True)
