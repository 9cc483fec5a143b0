import json
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field

from users_api.core.errors import ApiError

JSON_HEADERS = {"Content-Type": "application/json"}


class HandlerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    body: str
    headers: Dict[str, str] = Field(default_factory=lambda: dict(JSON_HEADERS))


def response_ok(data: Any) -> HandlerResponse:
    return HandlerResponse(
        status_code=200,
        body=json.dumps({"status": True, "data": jsonable_encoder(data)}),
    )


def response_error(error: Any, status_code: int = 500) -> HandlerResponse:
    if isinstance(error, ApiError):
        return HandlerResponse(
            status_code=error.status,
            body=json.dumps({"status": False, "error": error.to_dict()}),
        )
    return HandlerResponse(
        status_code=status_code,
        body=json.dumps({"status": False, "error": jsonable_encoder(error)}),
    )
