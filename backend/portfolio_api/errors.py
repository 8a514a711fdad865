"""Domain error codes, typed exceptions and the shared HTTP error handler.

Services raise `ApiException` (or its not-found subclass); the handlers
registered by `register_exception_handlers` turn them, and any
framework or unexpected error, into the JSON error envelope.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .responses import error_response

logger = logging.getLogger("portfolio_api.errors")


class ErrorCodes:
    """Opaque error codes shared by all portfolio endpoints."""
    RESOURCE_NOT_FOUND = "ERR_001"
    VALIDATION_FAILED = "ERR_002"
    INTERNAL_ERROR = "ERR_003"


class ApiException(Exception):
    """A business rule or validation failure, reported as HTTP 400."""
    status_code = 400

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}


class ResourceNotFoundException(ApiException):
    """The requested entity does not exist, reported as HTTP 404."""
    status_code = 404


def _field_errors(exc: RequestValidationError) -> Dict[str, Any]:
    fields = {}
    for err in exc.errors():
        # loc looks like ("body", "userId") or ("query", "userId")
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        fields[loc or "request"] = err.get("msg", "invalid value")
    return {"fields": fields}


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    logger.warning(
        "api_error %s",
        json.dumps(
            {
                "request_id": getattr(request.state, "request_id", ""),
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "message": exc.message,
            },
            ensure_ascii=True,
        ),
    )
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _field_errors(exc)
    logger.warning("request_invalid %s", json.dumps({"path": request.url.path, **details}, ensure_ascii=True))
    return error_response(request, 400, ErrorCodes.VALIDATION_FAILED, "Request validation failed", details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path)
    return error_response(request, 500, ErrorCodes.INTERNAL_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers on `app`."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
