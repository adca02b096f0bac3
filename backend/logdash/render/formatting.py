"""Turn a projection into the text shown on the dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import orjson

from logdash.core.errors import FormatError
from logdash.core.logging import get_logger
from logdash.core.metrics import FORMAT_FAILURES

logger = get_logger(__name__)

UNKNOWN_MARKER = "unknown"
UNPRINTABLE_MARKER = "<unprintable>"


def pretty(value: Any) -> str:
    """Pretty-print a JSON value with two-space indentation and sorted object keys."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode("utf-8")


def format_field(key: str, projection: Mapping[str, Any], strict: bool = False) -> str:
    """Render one ``"key": value`` line, or the unknown marker when absent.

    A value that cannot be serialized raises ``FormatError`` in strict mode;
    otherwise it is logged and replaced by a placeholder.
    """
    if key not in projection:
        return f'"{key}": {UNKNOWN_MARKER}\n'
    try:
        text = pretty(projection[key])
    except orjson.JSONEncodeError as exc:
        if strict:
            raise FormatError(key, exc) from exc
        FORMAT_FAILURES.labels(field=key).inc()
        logger.error("Failed to format field", extra={"ctx_field": key, "ctx_error": str(exc)})
        text = UNPRINTABLE_MARKER
    return f'"{key}": {text}\n'


def render_buffer(keys: Iterable[str], projection: Mapping[str, Any], strict: bool = False) -> str:
    return "".join(format_field(key, projection, strict=strict) for key in keys)


__all__ = [
    "UNKNOWN_MARKER",
    "UNPRINTABLE_MARKER",
    "format_field",
    "pretty",
    "render_buffer",
]
