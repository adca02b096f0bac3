"""Shared FastAPI dependencies."""

from __future__ import annotations

from logdash.state.store import StateStore

_STORE: StateStore | None = None


def set_state_store(store: StateStore) -> None:
    """Install the store shared with the render thread."""
    global _STORE
    _STORE = store


def get_state_store() -> StateStore:
    global _STORE
    if _STORE is None:
        _STORE = StateStore()
    return _STORE


__all__ = ["get_state_store", "set_state_store"]
