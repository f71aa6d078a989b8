from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

from appinsights.context import TelemetryContext
from appinsights.formatting import format_rfc3339_nano
from appinsights.models import SCHEMA_VERSION, SeverityLevel
from appinsights.sources import ClockError, IdentifierSourceError
from appinsights.telemetry import (
    Telemetry,
    TelemetryFactory,
    new_event_telemetry,
    new_metric_telemetry,
    new_request_telemetry,
    new_trace_telemetry,
)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, instant: datetime = FIXED_NOW) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


class ScriptedIdSource:
    def __init__(self, *ids: str) -> None:
        self._ids = list(ids)

    def new_id(self) -> str:
        return self._ids.pop(0)


class FailingIdSource:
    def new_id(self) -> str:
        raise OSError("entropy unavailable")


def _all_variants(factory: TelemetryFactory) -> list[Telemetry]:
    return [
        factory.trace("hello", SeverityLevel.WARNING),
        factory.event("signup"),
        factory.metric("queue_depth", 3.5),
        factory.request("GET /home", FIXED_NOW, timedelta(seconds=1), "200", True),
    ]


@pytest.mark.parametrize("severity", list(SeverityLevel))
def test_trace_is_message_with_version_two(severity: SeverityLevel) -> None:
    item = new_trace_telemetry("disk almost full", severity)

    assert item.base_type_name == "Message"
    assert item.base_data.ver == SCHEMA_VERSION == 2
    assert item.base_data.message == "disk almost full"
    assert item.base_data.severity_level is severity


def test_event_carries_name() -> None:
    item = new_event_telemetry("checkout_completed")

    assert item.base_type_name == "Event"
    assert item.base_data.name == "checkout_completed"
    assert item.base_data.ver == 2


@pytest.mark.parametrize("name, value", [("cpu", 0.1), ("", -4.0), ("latency_ms", 1e30)])
def test_metric_holds_single_unmodified_point(name: str, value: float) -> None:
    item = new_metric_telemetry(name, value)

    assert item.base_type_name == "Metric"
    assert item.base_data.ver == 2
    assert len(item.base_data.metrics) == 1
    point = item.base_data.metrics[0]
    assert point.name == name
    assert point.value == value
    assert point.count == 1


def test_request_end_to_end() -> None:
    t0 = datetime(2024, 3, 9, 17, 45, 1, 250000, tzinfo=timezone.utc)

    item = new_request_telemetry("GET /home", t0, timedelta(minutes=1, seconds=30), "200", True)

    assert item.base_type_name == "Request"
    assert item.base_data.name == "GET /home"
    assert item.base_data.duration == "00.00:01:30.0000"
    assert item.base_data.response_code == "200"
    assert item.base_data.success is True
    assert item.base_data.start_time == format_rfc3339_nano(t0) == "2024-03-09T17:45:01.25Z"
    assert item.base_data.ver == 2
    assert item.timestamp != t0


def test_request_ids_are_canonical_and_unique() -> None:
    ids = {
        new_request_telemetry("op", FIXED_NOW, timedelta(0), "200", True).base_data.id
        for _ in range(200)
    }

    assert len(ids) == 200
    assert all(UUID_RE.match(identifier) for identifier in ids)


def test_timestamps_fall_within_construction_window() -> None:
    factory = TelemetryFactory()

    before = datetime.now(timezone.utc)
    items = _all_variants(factory)
    after = datetime.now(timezone.utc)

    for item in items:
        assert before <= item.timestamp <= after


def test_contexts_are_never_shared() -> None:
    first = new_event_telemetry("a")
    second = new_event_telemetry("a")

    assert first.context is not second.context
    first.context.tags["ai.user.id"] = "u1"
    assert second.context.tags == {}


def test_factory_uses_injected_collaborators() -> None:
    contexts: list[TelemetryContext] = []

    def context_factory() -> TelemetryContext:
        ctx = TelemetryContext(instrumentation_key="ikey")
        contexts.append(ctx)
        return ctx

    factory = TelemetryFactory(
        clock=FixedClock(),
        id_source=ScriptedIdSource("00000000-0000-4000-8000-000000000001"),
        context_factory=context_factory,
    )

    items = _all_variants(factory)

    assert [item.timestamp for item in items] == [FIXED_NOW] * 4
    assert [item.context for item in items] == contexts
    assert len({id(ctx) for ctx in contexts}) == 4
    assert items[3].base_data.id == "00000000-0000-4000-8000-000000000001"


def test_base_type_names_are_fixed_literals() -> None:
    names = [item.base_type_name for item in _all_variants(TelemetryFactory(clock=FixedClock()))]

    assert names == ["Message", "Event", "Metric", "Request"]


def test_records_are_immutable() -> None:
    item = new_request_telemetry("op", FIXED_NOW, timedelta(0), "200", True)

    with pytest.raises(AttributeError):
        item.base = None  # type: ignore[misc]
    with pytest.raises(AttributeError):
        item.base_data.id = "other"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        item.base.timestamp = FIXED_NOW  # type: ignore[misc]


def test_payload_version_is_not_caller_settable() -> None:
    from appinsights.models import EventData

    with pytest.raises(TypeError):
        EventData(name="x", ver=3)  # type: ignore[call-arg]


def test_blank_identifier_is_rejected() -> None:
    factory = TelemetryFactory(id_source=ScriptedIdSource(""))

    with pytest.raises(IdentifierSourceError):
        factory.request("op", FIXED_NOW, timedelta(0), "200", True)


def test_uppercase_identifier_is_rejected() -> None:
    factory = TelemetryFactory(id_source=ScriptedIdSource("0000000A-0000-4000-8000-000000000001"))

    with pytest.raises(IdentifierSourceError):
        factory.request("op", FIXED_NOW, timedelta(0), "200", True)


def test_id_source_failure_propagates() -> None:
    factory = TelemetryFactory(id_source=FailingIdSource())

    with pytest.raises(OSError, match="entropy"):
        factory.request("op", FIXED_NOW, timedelta(0), "200", True)


def test_naive_clock_is_rejected() -> None:
    factory = TelemetryFactory(clock=FixedClock(datetime(2024, 5, 1, 12, 0, 0)))

    with pytest.raises(ClockError):
        factory.event("signup")


def test_construction_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    factory = TelemetryFactory(clock=FixedClock())

    with caplog.at_level("DEBUG", logger="appinsights.telemetry"):
        factory.metric("cpu", 1.0)

    record = caplog.records[-1]
    assert record.getMessage() == "telemetry_created"
    assert record.base_type == "Metric"
