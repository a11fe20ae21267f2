"""Response envelope shared by every endpoint: ``{statusCode, message, data}``."""

from typing import Any

from fastapi.responses import JSONResponse


def envelope(status_code: int, text: str, data: Any = None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "message": {"text": text},
        "data": data if data is not None else {},
    }


def success_response(data: Any, text: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(status_code, text, data))


def error_response(text: str, status_code: int = 500, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(status_code, text, data))
