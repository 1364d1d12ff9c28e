"""Liveness probes and the Prometheus scrape endpoint."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/health/live")
async def live():
    return {"status": "ok"}


@router.get("/api/v1/health/live")
def liveness(request: Request) -> Dict[str, Any]:
    panels = request.app.state.panels
    return {
        "status": "alive",
        "operations": {op: len(panel) for op, panel in sorted(panels.items())},
    }


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    # HTTP request counters plus crudpanel_field_mutations_total
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
