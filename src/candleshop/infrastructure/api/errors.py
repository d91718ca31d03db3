"""Terminal error handling for the HTTP API.

Every error ends up here.  Domain exceptions map to their status code;
anything else is a 500, logged with its traceback and reported to the
operators without waiting for (or failing on) the notification.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from candleshop.application.ports import notify_safely
from candleshop.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (ForbiddenError, 403),
    (EntityNotFoundError, 404),
    (ConflictError, 409),
)


def status_for(exc: DomainException) -> int:
    for error_type, status in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status
    return 500


def _body(message: str, errors: dict[str, str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


async def handle_domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status = status_for(exc)
    errors = exc.errors if isinstance(exc, ValidationError) else None
    if status >= 500:
        return await handle_unexpected_error(request, exc)
    logger.info(
        "request_rejected",
        method=request.method,
        path=request.url.path,
        status=status,
        error=str(exc),
    )
    return JSONResponse(status_code=status, content=_body(str(exc), errors))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {
        ".".join(str(part) for part in error["loc"][1:]) or "body": error["msg"]
        for error in exc.errors()
    }
    return JSONResponse(status_code=400, content=_body("Invalid request", errors))


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error", method=request.method, path=request.url.path, exc_info=exc
    )
    container = getattr(request.app.state, "container", None)
    if container is not None:
        notify_safely(
            container.notifier.report_error,
            exc,
            {
                "method": request.method,
                "url": str(request.url),
                "user": request.headers.get("x-user-id"),
                "client": request.client.host if request.client else None,
            },
        )
    settings = request.app.state.settings
    message = "Internal server error" if settings.is_production else str(exc)
    return JSONResponse(status_code=500, content=_body(message))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
