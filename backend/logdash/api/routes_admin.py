"""Administrative routes for logdash."""

from __future__ import annotations

from fastapi import APIRouter, Response

from logdash.core.metrics import metrics_response

router = APIRouter()


@router.get("/health", summary="Liveness check")
def health() -> dict[str, bool]:
    return {"ok": True}


@router.get("/metrics", summary="Prometheus metrics", include_in_schema=False)
def metrics() -> Response:
    return metrics_response()
