from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from crudpanel.api.observability.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    normalize_path,
)

log = logging.getLogger("crudpanel.request")


def _json_log(event: str, **fields):
    # Structured log in a single line.
    msg = {"event": event, **fields}
    log.info("%s", msg)


def _operation_from_path(path: str) -> Optional[str]:
    # /api/v1/crud/<operation>/fields/...
    parts = path.split("/")
    try:
        i = parts.index("crud")
    except ValueError:
        return None
    return parts[i + 1] if len(parts) > i + 1 else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request ID + request metrics.

    Adds:
      request.state.request_id
      response header: X-Request-Id
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = rid

        start = time.time()
        resp = await call_next(request)
        dur_ms = int((time.time() - start) * 1000)

        resp.headers["X-Request-Id"] = rid

        # Prometheus metrics (low-cardinality path, operation kept as its own label)
        p = normalize_path(request.url.path)
        op = _operation_from_path(request.url.path) or ""
        m = request.method.upper()
        s = str(getattr(resp, "status_code", 0))
        HTTP_REQUESTS_TOTAL.labels(method=m, path=p, status=s, operation=op).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=m, path=p, operation=op).observe(dur_ms / 1000.0)

        if request.url.path.startswith("/api/"):
            _json_log(
                "request",
                request_id=rid,
                method=request.method,
                path=request.url.path,
                operation=op or None,
                status_code=resp.status_code,
                duration_ms=dur_ms,
            )
        return resp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Security headers (enabled in prod by default).
    """

    def __init__(self, app, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        resp = await call_next(request)
        if not self.enabled:
            return resp

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp
