"""CLI-side handler wrappers around the telemetry factory."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timedelta

from appinsights.context import TelemetryContext
from appinsights.telemetry import Telemetry, TelemetryFactory


def describe(item: Telemetry) -> dict:
    """Flatten the capability-set view of ``item`` for display."""
    return {
        "base_type": item.base_type_name,
        "timestamp": item.timestamp.isoformat(),
        "instrumentation_key": item.context.instrumentation_key,
        "tags": dict(item.context.tags),
        "data": asdict(item.base_data),
    }


class TelemetryCliHandler:
    """Builds records with contexts keyed to a single instrumentation key."""

    def __init__(self, instrumentation_key: str = "", factory: TelemetryFactory | None = None) -> None:
        self._instrumentation_key = instrumentation_key
        self._factory = factory or TelemetryFactory(context_factory=self._new_context)

    def _new_context(self) -> TelemetryContext:
        return TelemetryContext(instrumentation_key=self._instrumentation_key)

    def trace(self, message: str, severity_level: int) -> dict:
        return describe(self._factory.trace(message, severity_level))

    def event(self, name: str) -> dict:
        return describe(self._factory.event(name))

    def metric(self, name: str, value: float) -> dict:
        return describe(self._factory.metric(name, value))

    def request(
        self,
        name: str,
        started_at: datetime,
        duration_seconds: float,
        response_code: str,
        success: bool,
    ) -> dict:
        return describe(
            self._factory.request(name, started_at, timedelta(seconds=duration_seconds), response_code, success)
        )
