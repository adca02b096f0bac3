"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

REGISTRY = CollectorRegistry()

DOCUMENTS_INGESTED = Counter(
    "logdash_documents_ingested",
    "Documents accepted on the ingestion endpoint",
    registry=REGISTRY,
)

DOCUMENT_ROWS = Gauge(
    "logdash_document_rows",
    "Number of rows in the current document",
    registry=REGISTRY,
)

RENDER_CYCLES = Counter(
    "logdash_render_cycles",
    "Completed dashboard redraws",
    registry=REGISTRY,
)

FORMAT_FAILURES = Counter(
    "logdash_format_failures",
    "Field values that could not be pretty-printed",
    labelnames=("field",),
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "DOCUMENTS_INGESTED",
    "DOCUMENT_ROWS",
    "RENDER_CYCLES",
    "FORMAT_FAILURES",
    "metrics_response",
]
