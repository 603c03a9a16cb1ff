"""
wishlink/core/errors.py

Purpose: HTTP error mapping

- Every failure leaves the API as an ErrorResponse body
- WishLinkError subclasses keep their own status and code
- Unhandled errors hide their message in production
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from wishlink.core.exceptions import WishLinkError
from wishlink.core.logging import get_logger
from wishlink.schemas.response import ErrorResponse

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong on our side. Please try again later."


def _error_response(status_code: int, error: str, code: str, details: Optional[Any] = None) -> JSONResponse:
    body = ErrorResponse(error=error, code=code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _hide_internal_errors(request: Request) -> bool:
    context = getattr(request.app.state, "context", None)
    return context is not None and context.settings.is_production


def add_exception_handlers(app: FastAPI):
    """
    Registers the WishLink error handlers on an app.
    """

    @app.exception_handler(WishLinkError)
    async def wishlink_error_handler(request: Request, exc: WishLinkError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
        return _error_response(exc.status_code, exc.message, exc.code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes, wrong methods
        return _error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """
        Form rule violations (phone digits, message length, photo count, ...).
        """
        return _error_response(
            422,
            "Please check the highlighted fields",
            "VALIDATION_ERROR",
            jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)

        message = INTERNAL_ERROR_MESSAGE if _hide_internal_errors(request) else str(exc)
        return _error_response(500, message, "INTERNAL_ERROR")
