"""Translation of service failures and framework errors into HTTP responses."""

from __future__ import annotations

from typing import Any, TypeVar

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notification_hub.domain.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STATUS_BY_ERROR_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def map_error_code_to_http_status(error_code: ErrorCode | None) -> int:
    return _STATUS_BY_ERROR_CODE.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def unwrap(result: ServiceResult[T]) -> T:
    """Return ``result.data`` or raise the matching ``HTTPException``."""

    if not result.success:
        raise HTTPException(
            status_code=map_error_code_to_http_status(result.error_code),
            detail=result.message or "Request failed",
        )
    return result.data  # type: ignore[return-value]


def _describe_validation_error(error: dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
    message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        body: dict[str, Any] = {
            "message": "Route not found",
            "path": request.url.path,
            "method": request.method,
        }
    else:
        body = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [_describe_validation_error(error) for error in exc.errors()]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": errors[0] if errors else "Invalid request", "errors": errors},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error response as ``{"message": ...}``."""

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


__all__ = [
    "map_error_code_to_http_status",
    "register_exception_handlers",
    "unwrap",
]
