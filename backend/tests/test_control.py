"""Tests for the quit-key control loop."""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable

import pytest

from logdash.control.keys import ControlLoop, cbreak_mode, is_quit_key, stdin_key_reader
from logdash.core.errors import TerminalError


def _reader(keys: Iterable[str | None]):
    pending = iter(keys)

    def read_key(timeout: float) -> str | None:
        return next(pending)

    return read_key


def test_is_quit_key() -> None:
    assert is_quit_key("q", "q")
    assert not is_quit_key("Q", "q")
    assert not is_quit_key("x", "q")


def test_quit_key_ends_loop_and_sets_stop() -> None:
    stop_event = threading.Event()
    loop = ControlLoop(stop_event=stop_event, read_key=_reader([None, "a", "\n", "q", "z"]))
    loop.run()
    assert stop_event.is_set()


def test_other_keys_are_ignored() -> None:
    seen: list[str] = []
    keys = iter(["a", "b", "x"])

    def read_key(timeout: float) -> str | None:
        key = next(keys)
        seen.append(key)
        return key

    ControlLoop(quit_key="x", read_key=read_key).run()
    assert seen == ["a", "b", "x"]


def test_external_stop_ends_loop() -> None:
    stop_event = threading.Event()

    def read_key(timeout: float) -> str | None:
        stop_event.set()
        return None

    ControlLoop(stop_event=stop_event, read_key=read_key).run()
    assert stop_event.is_set()


def test_closed_input_raises_terminal_error() -> None:
    with pytest.raises(TerminalError):
        ControlLoop(read_key=_reader([""])).run()


def test_quit_key_found_inside_input_chunk() -> None:
    stop_event = threading.Event()
    ControlLoop(stop_event=stop_event, read_key=_reader(["\x1b[Aq"])).run()
    assert stop_event.is_set()


def test_stdin_reader_over_pipe() -> None:
    read_fd, write_fd = os.pipe()
    stream = os.fdopen(read_fd, "r")
    try:
        read_key = stdin_key_reader(stream)
        assert read_key(0.01) is None
        os.write(write_fd, b"aq")
        assert read_key(1.0) == "aq"
        os.close(write_fd)
        write_fd = -1
        assert read_key(1.0) == ""
    finally:
        stream.close()
        if write_fd != -1:
            os.close(write_fd)


def test_cbreak_mode_restores_terminal_after_error() -> None:
    termios = pytest.importorskip("termios")
    pty = pytest.importorskip("pty")
    master_fd, slave_fd = pty.openpty()
    stream = os.fdopen(slave_fd, "r")
    try:
        before = termios.tcgetattr(slave_fd)
        with pytest.raises(RuntimeError):
            with cbreak_mode(stream):
                assert not termios.tcgetattr(slave_fd)[3] & termios.ICANON
                raise RuntimeError("draw failed")
        assert termios.tcgetattr(slave_fd) == before
    finally:
        stream.close()
        os.close(master_fd)


def test_cbreak_mode_rejects_non_terminal() -> None:
    pytest.importorskip("termios")
    read_fd, write_fd = os.pipe()
    stream = os.fdopen(read_fd, "r")
    try:
        with pytest.raises(TerminalError):
            with cbreak_mode(stream):
                pass
    finally:
        stream.close()
        os.close(write_fd)
