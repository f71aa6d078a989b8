"""Telemetry data contracts for Application Insights style ingestion."""

from .context import ContextFactory, TelemetryContext, new_item_telemetry_context
from .formatting import format_duration, format_rfc3339_nano
from .models import SCHEMA_VERSION, DataPoint, Domain, EventData, MessageData, MetricData, RequestData, SeverityLevel
from .sources import Clock, ClockError, IdentifierSourceError, IdSource, SystemClock, UuidIdSource
from .telemetry import (
    BaseTelemetry,
    EventTelemetry,
    MetricTelemetry,
    RequestTelemetry,
    Telemetry,
    TelemetryFactory,
    TraceTelemetry,
    new_event_telemetry,
    new_metric_telemetry,
    new_request_telemetry,
    new_trace_telemetry,
    set_default_factory,
)

__all__ = [
    "SCHEMA_VERSION",
    "BaseTelemetry",
    "Clock",
    "ClockError",
    "ContextFactory",
    "DataPoint",
    "Domain",
    "EventData",
    "EventTelemetry",
    "IdSource",
    "IdentifierSourceError",
    "MessageData",
    "MetricData",
    "MetricTelemetry",
    "RequestData",
    "RequestTelemetry",
    "SeverityLevel",
    "SystemClock",
    "Telemetry",
    "TelemetryContext",
    "TelemetryFactory",
    "TraceTelemetry",
    "UuidIdSource",
    "format_duration",
    "format_rfc3339_nano",
    "new_event_telemetry",
    "new_item_telemetry_context",
    "new_metric_telemetry",
    "new_request_telemetry",
    "new_trace_telemetry",
    "set_default_factory",
]
