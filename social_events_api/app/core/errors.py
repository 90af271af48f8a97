"""
Error taxonomy and FastAPI exception handlers.

Services raise subclasses of ``ServiceError``; endpoints let them
propagate and the handlers registered by ``register_exception_handlers``
turn them into the stable ``{"ok": false, "message": ...}`` envelope.
Store failures additionally carry an ``error`` field with the
underlying driver message.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"ok": False, "message": self.message}
        if self.error:
            payload["error"] = self.error
        return payload


class ValidationError(ServiceError):
    """Malformed or missing input, including bad event dates."""

    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(ServiceError):
    """Duplicate join.  Reported as 400 like other client mistakes."""

    status_code = status.HTTP_400_BAD_REQUEST


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(ServiceError):
    """The database rejected or failed a call."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreUnavailable(StoreError):
    """The store never became ready; raised by the readiness gate."""


def error_response(exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies that are not JSON objects (or have wrongly typed fields) are
    # client errors; report them as 400 with the common envelope.
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request")
    message = f"Invalid request: {location}: {detail}" if location else f"Invalid request: {detail}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "message": message},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "message": "Internal server error", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
