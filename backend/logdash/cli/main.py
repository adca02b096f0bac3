"""CLI entrypoint for logdash."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

import requests
import typer
from pydantic import ValidationError

from logdash.core.config import Settings
from logdash.core.errors import LogdashError
from logdash.core.logging import configure_logging
from logdash.runtime import Dashboard

app = typer.Typer(name="logdash", help="Live terminal dashboard for pushed log documents")

DEFAULT_URL = "http://127.0.0.1:33433"


def _resolve_url(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_url = os.environ.get("LOGDASH_URL")
    if env_url:
        return env_url.rstrip('/')
    return DEFAULT_URL


def _request(method: str, path: str, url: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_url(url)
    resp = requests.request(method, f"{base}{path}", timeout=60, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start the dashboard when no command is given."""
    if ctx.invoked_subcommand is not None:
        return
    run(config=None, host=None, port=None)


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML config file"),
    host: Optional[str] = typer.Option(None, "--host", help="Address for the ingestion endpoint"),
    port: Optional[int] = typer.Option(None, "--port", help="Port for the ingestion endpoint"),
) -> None:
    """Start the dashboard; press the quit key (default 'q') to exit."""
    try:
        settings = Settings.from_yaml(config, host=host, port=port)
    except ValidationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    configure_logging(settings.log_level, log_file=settings.log_file)
    try:
        Dashboard(settings).run()
    except LogdashError as exc:
        typer.echo(f"logdash: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def send(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON document to push"),
    url: Optional[str] = typer.Option(None, "--url", help="Override dashboard URL"),
) -> None:
    """Push a JSON document to a running dashboard."""
    try:
        payload = json.loads(document.read_text(encoding="utf-8"))
    except ValueError as exc:
        typer.echo(f"Invalid JSON in {document}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    resp = _request("POST", "/data", url=url, json=payload)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def show(
    url: Optional[str] = typer.Option(None, "--url", help="Override dashboard URL"),
) -> None:
    """Print the document a running dashboard is currently displaying."""
    resp = _request("GET", "/data", url=url)
    typer.echo(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    app()
