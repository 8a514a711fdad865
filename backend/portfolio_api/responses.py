"""Builders for the `{success, data|error, metadata}` response envelope."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .schemas import ErrorBody, ResponseMetadata

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_for(request: Request) -> str:
    """Return the id assigned by the request middleware, or a fresh one."""
    req_id = getattr(request.state, "request_id", None)
    if not req_id:
        req_id = uuid.uuid4().hex
        request.state.request_id = req_id
    return req_id


def _metadata(request: Request) -> dict:
    meta = ResponseMetadata(timestamp=datetime.now(timezone.utc), request_id=request_id_for(request))
    return meta.model_dump(mode="json", by_alias=True)


def success_response(request: Request, data: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Wrap `data` (a schema, list of schemas or plain value) in a success envelope."""
    body = {
        "success": True,
        "data": jsonable_encoder(data, by_alias=True),
        "metadata": _metadata(request),
    }
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def error_response(request: Request, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    err = ErrorBody(code=code, message=message, details=details or {})
    body = {
        "success": False,
        "error": jsonable_encoder(err, by_alias=True),
        "metadata": _metadata(request),
    }
    # 500s are rendered outside the request middleware, so set the header here
    return JSONResponse(status_code=status_code, content=body, headers={REQUEST_ID_HEADER: request_id_for(request)})
