from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, mode="json")
    if isinstance(data, (list, tuple)):
        return [_dump(item) for item in data]
    return jsonable_encoder(data)


def envelope(status_code: int, data: Any = None, message: str = "Success") -> dict:
    """Build the ``{statusCode, success, data, message}`` body shared by all responses"""
    return {
        "statusCode": status_code,
        "success": status_code < 400,
        "data": _dump(data),
        "message": message,
    }


def api_response(status_code: int, data: Any = None, message: str = "Success") -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(status_code, data, message))
