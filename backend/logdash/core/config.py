"""Application configuration handling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "LOGDASH_"
DEFAULT_CONFIG_PATH = Path("~/.config/logdash/config.yaml")

DEFAULT_FIELDS: tuple[str, ...] = (
    "@timestamp",
    "agent.id",
    "host.name",
    "host.os.name",
    "user.name",
    "host.ip",
)

_YAML_KEY_MAP: Mapping[tuple[str, ...], str] = {
    ("server", "host"): "host",
    ("server", "port"): "port",
    ("display", "fields"): "fields",
    ("display", "refresh_interval"): "refresh_interval",
    ("display", "strict_formatting"): "strict_formatting",
    ("controls", "quit_key"): "quit_key",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


class Settings(BaseModel):
    """Runtime configuration loaded from YAML file and environment variables."""

    host: str = "127.0.0.1"
    port: int = Field(default=33433, ge=1, le=65535)
    refresh_interval: float = Field(default=2.5, gt=0)
    fields: list[str] = Field(default_factory=lambda: list(DEFAULT_FIELDS))
    quit_key: str = Field(default="q", min_length=1, max_length=1)
    strict_formatting: bool = False
    log_level: str = "INFO"
    log_file: Path | None = Field(default=Path.home() / ".logdash" / "logdash.log")

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("fields", mode="before")
    @classmethod
    def _split_fields(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_file", mode="before")
    @classmethod
    def _expand_log_file(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        if isinstance(value, Path):
            return value.expanduser()
        if isinstance(value, str):
            return Path(value).expanduser()
        raise TypeError("log_file must be a path or string")

    @classmethod
    def from_yaml(cls, path: Path | None = None, **overrides: Any) -> "Settings":
        """Load YAML config, overlay env vars, then explicit overrides."""
        config_path = cls._resolve_config_path(path)
        data: dict[str, Any] = {}
        if config_path and config_path.exists():
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            data.update(_flatten_yaml(raw))
        data.update(_load_env_overrides())
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)

    @staticmethod
    def _resolve_config_path(path: Path | None) -> Path | None:
        if path is not None:
            return path.expanduser()
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        resolved_default = DEFAULT_CONFIG_PATH.expanduser()
        return resolved_default if resolved_default.exists() else None


def _flatten_yaml(raw: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> dict[str, Any]:
    """Flatten nested YAML configuration to Settings field names."""
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        next_prefix = prefix + (key,)
        if isinstance(value, Mapping):
            flat.update(_flatten_yaml(value, prefix=next_prefix))
        else:
            mapped_key = _YAML_KEY_MAP.get(next_prefix)
            if mapped_key:
                flat[mapped_key] = value
            elif key in Settings.model_fields:
                flat[key] = value
    return flat


def _load_env_overrides() -> dict[str, Any]:
    """Map environment variables with LOGDASH_ prefix into Settings fields."""
    overrides: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            overrides[field_name] = value
    return overrides


__all__ = ["DEFAULT_FIELDS", "Settings"]
