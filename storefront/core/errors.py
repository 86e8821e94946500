# storefront/core/errors.py
"""
Error taxonomy for the storefront API.

Services raise these domain errors; the handlers registered in
`register_exception_handlers` translate them into the JSON envelope

    {"success": false, "message": "...", "error": "...", "errors": [...]}

so routers never build error responses by hand.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for errors that map onto an HTTP status + envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server Error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.errors = errors


class NotFound(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ValidationFailure(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation Error"


class InsufficientStock(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Insufficient stock"


class Conflict(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class Unauthorized(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized"


class Forbidden(StorefrontError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def _format_validation_error(err: dict[str, Any]) -> str:
    # loc looks like ("body", "quantity"); drop the request part
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc)
    return f"{field}: {err.get('msg')}" if field else str(err.get("msg"))


def register_exception_handlers(app: FastAPI, *, expose_errors: bool) -> None:
    """
    Attach envelope-producing handlers to the app.

    Args:
        expose_errors: include the raw exception text of unexpected
            failures in the `error` field (never enabled in production).
    """

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, errors=exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = [_format_validation_error(e) for e in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(error_body("Validation Error", errors=messages)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Route not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                "Server Error",
                error=str(exc) if expose_errors else None,
            ),
        )
