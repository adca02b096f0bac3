"""Ingest API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from logdash.api.dependencies import get_state_store
from logdash.models.document import LogDocument
from logdash.state.store import StateStore

router = APIRouter()


@router.post("/data", response_model=LogDocument, summary="Replace the current document")
def ingest_document(
    document: LogDocument,
    store: StateStore = Depends(get_state_store),
) -> LogDocument:
    return store.replace_and_read(document)


@router.get("/data", response_model=LogDocument, summary="Return the current document")
def current_document(store: StateStore = Depends(get_state_store)) -> LogDocument:
    return store.read_document()
