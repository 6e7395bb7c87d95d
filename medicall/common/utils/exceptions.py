# medicall/common/utils/exceptions.py
"""
Application exceptions and the handlers that shape every error response
into ``{"error": str, "details": [{"field", "message"}]?}``.

Services raise these directly, the same way they would raise
``HTTPException``.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from medicall.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    """Malformed or missing input (400)."""

    def __init__(self, detail: str = GlobalMessages.VALIDATION_ERROR, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.details = details


class AuthError(HTTPException):
    """No usable credentials (401)."""

    def __init__(self, detail: str = GlobalMessages.UNAUTHENTICATED):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Authenticated, but the role does not allow it (403)."""

    def __init__(self, detail: str = GlobalMessages.FORBIDDEN):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """Uniqueness violation (409)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UpstreamError(HTTPException):
    """An external provider call failed (502)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


def _error_body(message: Any, details: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message if isinstance(message, str) else str(message)}
    if details:
        body["details"] = details
    return body


def format_validation_errors(errors) -> List[Dict[str, str]]:
    """Flatten pydantic error entries into ``{field, message}`` pairs."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        # Drop the request-part prefix ("body", "query", ...)
        if loc and loc[0] in ("body", "query", "path", "form", "header"):
            loc = loc[1:]
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": ".".join(loc) or "body", "message": message})
    return details


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    details = getattr(exc, "details", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, details),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(GlobalMessages.VALIDATION_ERROR, format_validation_errors(exc.errors())),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(GlobalMessages.DUPLICATE_RECORD),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(GlobalMessages.INTERNAL_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-envelope handlers to the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
