"""CLI startup entrypoint for building sample telemetry records."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import typer
from rich import print

from appinsights.cli import TelemetryCliHandler
from appinsights.config import settings
from appinsights.formatting import format_duration
from appinsights.models import SeverityLevel

app = typer.Typer(help="Application Insights telemetry record builder")


def _build_handler() -> TelemetryCliHandler:
    return TelemetryCliHandler(instrumentation_key=settings.instrumentation_key)


@app.callback()
def main() -> None:
    logging.basicConfig(level=settings.log_level.upper())


@app.command()
def trace(
    message: str,
    severity: Optional[int] = typer.Option(None, help="0=verbose .. 4=critical"),
) -> None:
    """Build a trace (Message) record."""
    level = settings.default_severity if severity is None else severity
    try:
        level = SeverityLevel(level)
    except ValueError:
        raise typer.BadParameter(f"Unknown severity level: {severity}")
    print(_build_handler().trace(message, level))


@app.command()
def event(name: str) -> None:
    """Build an Event record."""
    print(_build_handler().event(name))


@app.command()
def metric(name: str, value: float) -> None:
    """Build a single-value Metric record."""
    print(_build_handler().metric(name, value))


@app.command()
def request(
    name: str,
    duration_seconds: float = typer.Option(..., help="Request duration in seconds"),
    response_code: str = typer.Option("200", help="Response code reported by the server"),
    success: bool = typer.Option(True, help="Whether the request succeeded"),
    started_at: str = typer.Option(None, help="ISO-8601 start time (defaults to now minus duration)"),
) -> None:
    """Build a Request record."""
    if started_at:
        try:
            start = datetime.fromisoformat(started_at)
        except ValueError:
            raise typer.BadParameter(f"Invalid ISO-8601 start time: {started_at}")
    else:
        start = datetime.now(timezone.utc) - timedelta(seconds=duration_seconds)
    print(_build_handler().request(name, start, duration_seconds, response_code, success))


@app.command()
def duration(seconds: float) -> None:
    """Print the wire rendering of a duration given in seconds."""
    print({"seconds": seconds, "duration": format_duration(timedelta(seconds=seconds))})


if __name__ == "__main__":
    app()
