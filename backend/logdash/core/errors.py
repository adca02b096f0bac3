"""Application-specific exceptions for logdash.

Exception Hierarchy:
    LogdashError (base)
    ├── FormatError
    ├── TerminalError
    └── ServerError
"""

from __future__ import annotations


class LogdashError(Exception):
    """Base exception for all logdash errors."""


class FormatError(LogdashError):
    """Raised when a field value cannot be pretty-printed.

    Attributes:
        key: The field whose value failed to serialize.
        cause: The underlying serializer exception.
    """

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        self.key = key
        self.cause = cause
        message = f"Failed to format value for '{key}'"
        if cause:
            message = f"{message}: {cause}"
        self.message = message
        super().__init__(message)


class TerminalError(LogdashError):
    """Raised when the terminal cannot be initialised, drawn to, or read from."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        self.message = f"{message}: {cause}" if cause else message
        super().__init__(self.message)


class ServerError(LogdashError):
    """Raised when the ingestion server cannot be started.

    Attributes:
        host: Address the server tried to bind.
        port: Port the server tried to bind.
    """

    def __init__(self, host: str, port: int, message: str | None = None) -> None:
        self.host = host
        self.port = port
        self.message = message or f"Ingestion server failed to start on {host}:{port}"
        super().__init__(self.message)


__all__ = ["LogdashError", "FormatError", "TerminalError", "ServerError"]
