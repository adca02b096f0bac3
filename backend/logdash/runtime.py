"""Wire the ingestion server, render thread and control loop together."""

from __future__ import annotations

import threading
import time

import uvicorn
from rich.console import Console
from rich.live import Live
from rich.text import Text

from logdash.app import create_app
from logdash.control.keys import ControlLoop, cbreak_mode
from logdash.core.config import Settings
from logdash.core.errors import LogdashError, ServerError, TerminalError
from logdash.core.logging import get_logger
from logdash.render.loop import RenderLoop
from logdash.state.store import StateStore

logger = get_logger(__name__)

SERVER_START_TIMEOUT = 5.0


class Dashboard:
    """Own the process lifetime: server thread, render thread, main-thread input."""

    def __init__(
        self,
        settings: Settings,
        store: StateStore | None = None,
        console: Console | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or StateStore()
        self.console = console or Console()
        self.stop_event = threading.Event()
        self._server: uvicorn.Server | None = None
        self._server_thread: threading.Thread | None = None

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            create_app(store=self.store),
            host=self.settings.host,
            port=self.settings.port,
            log_config=None,
        )
        return uvicorn.Server(config)

    def start_server(self) -> None:
        server = self._build_server()
        thread = threading.Thread(target=server.run, name="logdash-server", daemon=True)
        thread.start()
        deadline = time.monotonic() + SERVER_START_TIMEOUT
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                server.should_exit = True
                raise ServerError(self.settings.host, self.settings.port)
            time.sleep(0.05)
        self._server = server
        self._server_thread = thread
        logger.info(
            "Ingestion server listening",
            extra={"ctx_host": self.settings.host, "ctx_port": self.settings.port},
        )

    def stop_server(self) -> None:
        if self._server is None:
            return
        self._server.should_exit = True
        if self._server_thread is not None:
            self._server_thread.join(timeout=SERVER_START_TIMEOUT)
        self._server = None
        self._server_thread = None

    def run(self) -> None:
        """Run until the quit key is pressed; raise if the render thread failed."""
        if not self.console.is_terminal:
            raise TerminalError("logdash needs an interactive terminal")

        self.start_server()
        render: RenderLoop | None = None
        try:
            with cbreak_mode(), Live(
                Text(""),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                render = RenderLoop(
                    self.store,
                    live,
                    self.settings.fields,
                    interval=self.settings.refresh_interval,
                    strict=self.settings.strict_formatting,
                    stop_event=self.stop_event,
                )
                render.start()
                try:
                    ControlLoop(quit_key=self.settings.quit_key, stop_event=self.stop_event).run()
                except KeyboardInterrupt:
                    logger.info("Interrupted")
                finally:
                    render.stop()
        finally:
            self.stop_event.set()
            self.stop_server()

        if render is not None and render.error is not None:
            if isinstance(render.error, LogdashError):
                raise render.error
            raise TerminalError("Render loop failed", render.error) from render.error


__all__ = ["Dashboard"]
