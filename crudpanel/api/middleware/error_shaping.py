from __future__ import annotations

import logging
import traceback
from typing import Callable, Dict, Type

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from crudpanel.core.errors import FieldNotFound, MissingNameAttribute, ReservedAttributeError

log = logging.getLogger("crudpanel.errors")

# Domain errors that are the caller's fault, not the server's
FIELD_ERROR_STATUS: Dict[Type[Exception], int] = {
    FieldNotFound: 404,
    MissingNameAttribute: 422,
    ReservedAttributeError: 422,
}


def _payload(request: Request, detail: str) -> Dict[str, str]:
    payload = {"detail": detail}
    rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
    if rid:
        payload["request_id"] = rid
    return payload


def install_field_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in FIELD_ERROR_STATUS.items():

        async def handler(request: Request, exc: Exception, status_code: int = status_code) -> JSONResponse:
            log.info("field error status=%s path=%s: %s", status_code, request.url.path, exc)
            return JSONResponse(status_code=status_code, content=_payload(request, str(exc)))

        app.add_exception_handler(exc_type, handler)


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Outermost wrapper for anything the field handlers did not translate.

    - Never return stack traces to clients
    - Preserve request_id if present
    - Log traceback server-side
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            log.error(
                "Unhandled error: %s path=%s\n%s",
                str(e),
                request.url.path,
                traceback.format_exc(),
            )
            return JSONResponse(status_code=500, content=_payload(request, "Internal Server Error"))
