# This file defines consistent API error payloads and exception handlers.
# It exists so every versioned endpoint returns the same error shape with request trace fields.
# Services raise APIError (or a helper below); an unreachable workbook becomes a 503.
# Unexpected failures are logged with their request id; clients only see a generic message.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.workbook.base import WorkbookUnavailableError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


def bad_request(message: str) -> APIError:
    return APIError(status_code=400, error_code="INVALID_REQUEST", message=message)


def not_found(error_code: str, message: str) -> APIError:
    return APIError(status_code=404, error_code=error_code, message=message)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": _request_id(request),
            "timestamp": datetime.now(tz=UTC).isoformat(),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return _error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)

    @app.exception_handler(WorkbookUnavailableError)
    async def workbook_unavailable_handler(request: Request, exc: WorkbookUnavailableError) -> JSONResponse:
        logger.warning("Workbook unavailable for request_id=%s: %s", _request_id(request), exc)
        return _error_response(request, 503, "WORKBOOK_UNAVAILABLE", str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            request,
            422,
            "VALIDATION_ERROR",
            "Invalid request parameters.",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error for request_id=%s", _request_id(request), exc_info=exc)
        return _error_response(
            request,
            500,
            "INTERNAL_SERVER_ERROR",
            "The server encountered an unexpected error.",
        )
