"""Shared state held between the ingestion server and the render thread."""

from .store import StateSnapshot, StateStore

__all__ = ["StateSnapshot", "StateStore"]
