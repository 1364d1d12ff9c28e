from __future__ import annotations

import re
from prometheus_client import Counter, Histogram


def normalize_path(path: str) -> str:
    """Reduce high-cardinality paths for metrics labels."""
    p = path or "/"

    # ints
    p = re.sub(r"/\d+(?=/|$)", "/:id", p)

    # Field names and attributes
    p = re.sub(r"^(/api/v1/crud/[^/]+/fields)/[^/]+/attributes/[^/]+$", r"\1/:name/attributes/:attribute", p)
    p = re.sub(r"^(/api/v1/crud/[^/]+/fields)/[^/]+$", r"\1/:name", p)

    return p


HTTP_REQUESTS_TOTAL = Counter(
    "crudpanel_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status", "operation"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "crudpanel_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path", "operation"],
)
