"""Telemetry records and the constructors that stamp them.

Every record pairs a :class:`BaseTelemetry` (creation instant plus an owned
context) with a versioned payload. Envelope builders only ever use the four
properties of the :class:`Telemetry` protocol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from appinsights.context import ContextFactory, TelemetryContext, new_item_telemetry_context
from appinsights.formatting import format_duration, format_rfc3339_nano
from appinsights.models import DataPoint, Domain, EventData, MessageData, MetricData, RequestData, SeverityLevel
from appinsights.sources import Clock, IdSource, SystemClock, UuidIdSource, checked_new_id, checked_now


class Telemetry(Protocol):
    """Capability set consumed by envelope serializers."""

    @property
    def timestamp(self) -> datetime:
        """Instant the record was created."""

    @property
    def context(self) -> TelemetryContext:
        """Context owned by this record."""

    @property
    def base_type_name(self) -> str:
        """Wire-format family of the payload."""

    @property
    def base_data(self) -> Domain:
        """Versioned payload."""


@dataclass(frozen=True, slots=True)
class BaseTelemetry:
    timestamp: datetime
    context: TelemetryContext


@dataclass(frozen=True, slots=True)
class TraceTelemetry:
    base: BaseTelemetry
    data: MessageData

    @property
    def timestamp(self) -> datetime:
        return self.base.timestamp

    @property
    def context(self) -> TelemetryContext:
        return self.base.context

    @property
    def base_type_name(self) -> str:
        return "Message"

    @property
    def base_data(self) -> MessageData:
        return self.data


@dataclass(frozen=True, slots=True)
class EventTelemetry:
    base: BaseTelemetry
    data: EventData

    @property
    def timestamp(self) -> datetime:
        return self.base.timestamp

    @property
    def context(self) -> TelemetryContext:
        return self.base.context

    @property
    def base_type_name(self) -> str:
        return "Event"

    @property
    def base_data(self) -> EventData:
        return self.data


@dataclass(frozen=True, slots=True)
class MetricTelemetry:
    base: BaseTelemetry
    data: MetricData

    @property
    def timestamp(self) -> datetime:
        return self.base.timestamp

    @property
    def context(self) -> TelemetryContext:
        return self.base.context

    @property
    def base_type_name(self) -> str:
        return "Metric"

    @property
    def base_data(self) -> MetricData:
        return self.data


@dataclass(frozen=True, slots=True)
class RequestTelemetry:
    base: BaseTelemetry
    data: RequestData

    @property
    def timestamp(self) -> datetime:
        return self.base.timestamp

    @property
    def context(self) -> TelemetryContext:
        return self.base.context

    @property
    def base_type_name(self) -> str:
        return "Request"

    @property
    def base_data(self) -> RequestData:
        return self.data


class TelemetryFactory:
    """Builds telemetry records from injected clock, id and context sources."""

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        id_source: IdSource | None = None,
        context_factory: ContextFactory | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._id_source = id_source or UuidIdSource()
        self._context_factory = context_factory or new_item_telemetry_context
        self._logger = logger or logging.getLogger("appinsights.telemetry")

    def trace(self, message: str, severity_level: SeverityLevel = SeverityLevel.INFORMATION) -> TraceTelemetry:
        now = checked_now(self._clock)
        data = MessageData(message=message, severity_level=SeverityLevel(severity_level))
        return self._created(TraceTelemetry(base=self._base(now), data=data))

    def event(self, name: str) -> EventTelemetry:
        now = checked_now(self._clock)
        data = EventData(name=name)
        return self._created(EventTelemetry(base=self._base(now), data=data))

    def metric(self, name: str, value: float) -> MetricTelemetry:
        now = checked_now(self._clock)
        data = MetricData(metrics=(DataPoint(name=name, value=value, count=1),))
        return self._created(MetricTelemetry(base=self._base(now), data=data))

    def request(
        self,
        name: str,
        timestamp: datetime,
        duration: timedelta,
        response_code: str,
        success: bool,
    ) -> RequestTelemetry:
        """Build a request record.

        ``timestamp`` is when the request started and only feeds the payload's
        ``start_time``; the record itself is stamped with the factory clock.
        """
        now = checked_now(self._clock)
        data = RequestData(
            id=checked_new_id(self._id_source),
            name=name,
            start_time=format_rfc3339_nano(timestamp),
            duration=format_duration(duration),
            response_code=response_code,
            success=success,
        )
        return self._created(RequestTelemetry(base=self._base(now), data=data))

    def _base(self, now: datetime) -> BaseTelemetry:
        return BaseTelemetry(timestamp=now, context=self._context_factory())

    def _created(self, item):
        self._logger.debug(
            "telemetry_created",
            extra={"base_type": item.base_type_name, "timestamp": item.timestamp.isoformat()},
        )
        return item


_default_factory = TelemetryFactory()


def set_default_factory(factory: TelemetryFactory) -> None:
    global _default_factory
    _default_factory = factory


def new_trace_telemetry(message: str, severity_level: SeverityLevel = SeverityLevel.INFORMATION) -> TraceTelemetry:
    return _default_factory.trace(message, severity_level)


def new_event_telemetry(name: str) -> EventTelemetry:
    return _default_factory.event(name)


def new_metric_telemetry(name: str, value: float) -> MetricTelemetry:
    return _default_factory.metric(name, value)


def new_request_telemetry(
    name: str,
    timestamp: datetime,
    duration: timedelta,
    response_code: str,
    success: bool,
) -> RequestTelemetry:
    return _default_factory.request(name, timestamp, duration, response_code, success)
