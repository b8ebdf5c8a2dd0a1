"""
Exception handlers shared by the service FastAPI applications.

Every failure is answered with the same JSON body:

    {
        "error": true,
        "timestamp": "2026-02-23T22:48:51.001014+00:00",
        "path": "/product/-1",
        "status_code": 422,
        "message": "Invalid productId: -1"
    }
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from shared.exceptions import ServiceError

logger = logging.getLogger(__name__)

# Validation errors located in these request parts are malformed requests, not bad entities
PARAMETER_LOCATIONS = {"path", "query"}


def error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Optional[List[Dict[str, Any]]] = None,
) -> JSONResponse:
    """Build the structured error body."""
    content: Dict[str, Any] = {
        "error": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "status_code": status_code,
        "message": message,
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain errors to their HTTP status."""
    if not isinstance(exc, ServiceError):
        return await global_exception_handler(request, exc)

    logger.warning(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={"path": request.url.path},
    )
    return error_response(request, exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return error_response(request, http_exc.status_code, str(http_exc.detail))


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed path/query parameters are 400, invalid bodies are 422."""
    if not isinstance(exc, RequestValidationError):
        return error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}", extra={"path": request.url.path})

    if any(error["loc"] and error["loc"][0] in PARAMETER_LOCATIONS for error in exc.errors()):
        return error_response(request, status.HTTP_400_BAD_REQUEST, "Type mismatch.", errors)

    return error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", errors)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with a service application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
