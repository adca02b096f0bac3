"""Test fixtures for logdash."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.delenv("LOGDASH_CONFIG", raising=False)
    monkeypatch.delenv("LOGDASH_URL", raising=False)

    from logdash.api import dependencies as deps

    deps._STORE = None
    yield
    deps._STORE = None


@pytest.fixture
def default_fields() -> list[str]:
    return ["@timestamp", "agent.id", "host.name", "host.os.name", "user.name", "host.ip"]


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return {
        "values": [["2024-01-01T00:00:00Z", "a1", "h1", "linux", "bob", "10.0.0.1"]],
        "took": 5,
        "columns": [
            {"name": "@timestamp", "type": "date"},
            {"name": "agent.id", "type": "keyword"},
            {"name": "host.name", "type": "keyword"},
            {"name": "host.os.name", "type": "keyword"},
            {"name": "user.name", "type": "keyword"},
            {"name": "host.ip", "type": "ip"},
        ],
    }
