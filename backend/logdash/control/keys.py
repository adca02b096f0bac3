"""Keyboard handling: wait for the quit key on the main thread."""

from __future__ import annotations

import os
import select
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TextIO

from logdash.core.errors import TerminalError
from logdash.core.logging import get_logger

logger = get_logger(__name__)

KeyReader = Callable[[float], str | None]


def is_quit_key(key: str, quit_key: str) -> bool:
    return key == quit_key


def stdin_key_reader(stream: TextIO | None = None) -> KeyReader:
    """Build a reader returning the pending keys, or None if nothing arrived in time.

    Reads the file descriptor directly so multi-byte sequences such as arrow
    keys never sit in a Python-side buffer that select cannot see.
    """
    fd = (stream or sys.stdin).fileno()

    def read_key(timeout: float) -> str | None:
        if fd not in select.select([fd], [], [], timeout)[0]:
            return None
        return os.read(fd, 1024).decode("utf-8", errors="replace")

    return read_key


@contextmanager
def cbreak_mode(stream: TextIO | None = None) -> Iterator[None]:
    """Put the terminal into cbreak mode, restoring its settings on exit."""
    source = stream or sys.stdin
    try:
        import termios
        import tty
    except ImportError as exc:
        raise TerminalError("Terminal input control is not available on this platform", exc) from exc

    try:
        fd = source.fileno()
        old_settings = termios.tcgetattr(fd)
    except (OSError, ValueError, termios.error) as exc:
        raise TerminalError("Failed to read terminal settings", exc) from exc

    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class ControlLoop:
    """Block on key presses until the quit key arrives or ``stop_event`` is set.

    Input is polled in ``poll_interval`` slices only so a stop requested by
    another thread is noticed; there is no overall timeout.
    """

    def __init__(
        self,
        quit_key: str = "q",
        stop_event: threading.Event | None = None,
        read_key: KeyReader | None = None,
        poll_interval: float = 0.1,
    ) -> None:
        self.quit_key = quit_key
        self.stop_event = stop_event or threading.Event()
        self.read_key = read_key or stdin_key_reader()
        self.poll_interval = poll_interval

    def run(self) -> None:
        while not self.stop_event.is_set():
            keys = self.read_key(self.poll_interval)
            if keys is None:
                continue
            if keys == "":
                raise TerminalError("Input stream closed")
            if any(is_quit_key(key, self.quit_key) for key in keys):
                logger.info("Quit key pressed")
                self.stop_event.set()
                return


__all__ = ["ControlLoop", "KeyReader", "cbreak_mode", "is_quit_key", "stdin_key_reader"]
