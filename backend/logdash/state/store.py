"""Single synchronized owner of the current document and its projection."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from logdash.core.logging import get_logger
from logdash.core.metrics import DOCUMENT_ROWS, DOCUMENTS_INGESTED
from logdash.models.document import LogDocument, Projection, project

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    projection: Projection
    version: int


class StateStore:
    """Hold the latest document and its projection behind one lock.

    Reads and writes take the same lock. A replace swaps the document and
    projection together, so readers only ever see a complete pair.
    """

    def __init__(self, document: LogDocument | None = None) -> None:
        self._lock = threading.Lock()
        self._document = document or LogDocument.empty()
        self._projection = project(self._document)
        self._version = 0

    def replace(self, document: LogDocument) -> None:
        projection = project(document)
        with self._lock:
            self._document = document
            self._projection = projection
            self._version += 1
            version = self._version
        DOCUMENTS_INGESTED.inc()
        DOCUMENT_ROWS.set(len(document.values))
        logger.info(
            "Document replaced",
            extra={
                "ctx_rows": len(document.values),
                "ctx_columns": len(document.columns),
                "ctx_version": version,
            },
        )

    def read_projection(self) -> Projection:
        with self._lock:
            return dict(self._projection)

    def read_document(self) -> LogDocument:
        with self._lock:
            return self._document

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return StateSnapshot(projection=dict(self._projection), version=self._version)

    def replace_and_read(self, document: LogDocument) -> LogDocument:
        """Replace, then echo whatever document is current afterwards.

        The read is a separate critical section; under concurrent writers the
        returned document may belong to another request.
        """
        self.replace(document)
        return self.read_document()

    @property
    def version(self) -> int:
        with self._lock:
            return self._version


__all__ = ["StateSnapshot", "StateStore"]
