"""Error translation and the exception handlers rendering :class:`ErrorResponse`."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Mapping, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devices_api.modules.devices import (
    DeviceError,
    DeviceNotFoundError,
    DeviceValidationError,
    InvalidDeviceOperationError,
)
from devices_api.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTP exception optionally carrying field level validation messages."""

    def __init__(
        self,
        status_code: int,
        message: str,
        validation_errors: Optional[Mapping[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.validation_errors = dict(validation_errors) if validation_errors else None


def to_api_error(exc: DeviceError) -> ApiError:
    if isinstance(exc, DeviceNotFoundError):
        return ApiError(status.HTTP_404_NOT_FOUND, exc.message)
    if isinstance(exc, DeviceValidationError):
        return ApiError(status.HTTP_400_BAD_REQUEST, exc.message, exc.field_errors)
    if isinstance(exc, InvalidDeviceOperationError):
        return ApiError(status.HTTP_400_BAD_REQUEST, exc.message)
    return ApiError(status.HTTP_400_BAD_REQUEST, str(exc))


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(
    request: Request,
    status_code: int,
    message: str,
    validation_errors: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=_reason(status_code),
        message=message,
        path=request.url.path,
        validation_errors=dict(validation_errors) if validation_errors else None,
    )
    return JSONResponse(
        jsonable_encoder(body, by_alias=True, exclude_none=True),
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )


def _field_of(location: tuple[Any, ...]) -> str:
    for part in reversed(location):
        if isinstance(part, str):
            return part
    return "request"


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.debug(
        "%s: %s @ '%s %s'", type(exc).__name__, exc.detail, request.method, request.url.path
    )
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        getattr(exc, "validation_errors", None),
        getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        field_errors.setdefault(_field_of(tuple(error.get("loc", ()))), error.get("msg", "Invalid value"))
    summary = "; ".join(f"{field}: {msg}" for field, msg in field_errors.items())
    logger.debug("Rejected request '%s %s': %s", request.method, request.url.path, summary)
    return error_response(request, status.HTTP_400_BAD_REQUEST, f"Validation failed: {summary}", field_errors)


async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception caught in base exception handler!")
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Unexpected server error. The requested action wasn't completed successfully.",
    )


DEFAULT_EXCEPTION_HANDLERS = {
    StarletteHTTPException: handle_http_exception,
    RequestValidationError: handle_request_validation_error,
    Exception: handle_generic_exception,
}
