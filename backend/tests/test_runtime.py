"""Tests for process wiring that do not need a real terminal."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from logdash.core.config import Settings
from logdash.core.errors import TerminalError
from logdash.core.logging import JsonFormatter, configure_logging, get_logger
from logdash.runtime import Dashboard


def test_dashboard_requires_terminal() -> None:
    console = Console(file=io.StringIO(), force_terminal=False)
    dashboard = Dashboard(Settings(log_file=None), console=console)
    with pytest.raises(TerminalError):
        dashboard.run()
    assert dashboard._server is None


def test_logging_to_file_writes_json(tmp_path: Path) -> None:
    import logging

    log_file = tmp_path / "logs" / "logdash.log"
    previous = logging.getLogger().handlers[:]
    try:
        configure_logging("INFO", log_file=log_file)
        get_logger("logdash.test").info("hello", extra={"ctx_rows": 3})
        for handler in logging.getLogger().handlers:
            handler.flush()
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers = previous
    assert '"message":"hello"' in line
    assert '"ctx_rows":3' in line
    assert isinstance(JsonFormatter(), logging.Formatter)
