"""Periodic redraw of the dashboard on a dedicated thread."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Protocol

from rich.console import RenderableType
from rich.text import Text

from logdash.core.logging import get_logger
from logdash.core.metrics import RENDER_CYCLES
from logdash.render.formatting import render_buffer
from logdash.state.store import StateStore

logger = get_logger(__name__)


class DisplaySurface(Protocol):
    """Anything that can replace its whole content, e.g. ``rich.live.Live``."""

    def update(self, renderable: RenderableType, *, refresh: bool = False) -> None: ...


class RenderLoop:
    """Wake every ``interval`` seconds and redraw the configured fields.

    The loop stops when ``stop_event`` is set. Any exception raised while
    drawing is kept on ``error`` and sets ``stop_event`` so the rest of the
    process can tear down.
    """

    def __init__(
        self,
        store: StateStore,
        display: DisplaySurface,
        fields: Sequence[str],
        interval: float = 2.5,
        strict: bool = False,
        stop_event: threading.Event | None = None,
    ) -> None:
        self.store = store
        self.display = display
        self.fields = tuple(fields)
        self.interval = interval
        self.strict = strict
        self.stop_event = stop_event or threading.Event()
        self.error: BaseException | None = None
        self._thread: threading.Thread | None = None

    def render_once(self) -> str:
        snapshot = self.store.snapshot()
        buffer = render_buffer(self.fields, snapshot.projection, strict=self.strict)
        self.display.update(Text(buffer), refresh=True)
        RENDER_CYCLES.inc()
        logger.debug("Rendered dashboard", extra={"ctx_version": snapshot.version})
        return buffer

    def run(self) -> None:
        try:
            while not self.stop_event.wait(self.interval):
                self.render_once()
        except Exception as exc:
            self.error = exc
            logger.exception("Render loop failed")
            self.stop_event.set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.run, name="logdash-render", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self.stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


__all__ = ["DisplaySurface", "RenderLoop"]
