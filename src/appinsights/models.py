"""Versioned payload contracts carried as the base data of telemetry envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

SCHEMA_VERSION = 2


class SeverityLevel(IntEnum):
    """Severity attached to trace messages."""

    VERBOSE = 0
    INFORMATION = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


class Domain(Protocol):
    """Common view over every payload: a schema version and nothing else."""

    @property
    def ver(self) -> int:
        ...


@dataclass(frozen=True, slots=True)
class MessageData:
    message: str
    severity_level: SeverityLevel = SeverityLevel.INFORMATION
    ver: int = field(default=SCHEMA_VERSION, init=False)


@dataclass(frozen=True, slots=True)
class EventData:
    name: str
    ver: int = field(default=SCHEMA_VERSION, init=False)


@dataclass(frozen=True, slots=True)
class DataPoint:
    """Single measurement inside a metric payload."""

    name: str
    value: float
    count: int = 1


@dataclass(frozen=True, slots=True)
class MetricData:
    metrics: tuple[DataPoint, ...]
    ver: int = field(default=SCHEMA_VERSION, init=False)


@dataclass(frozen=True, slots=True)
class RequestData:
    """Completed request: identity, timing and outcome."""

    id: str
    name: str
    start_time: str
    duration: str
    response_code: str
    success: bool
    ver: int = field(default=SCHEMA_VERSION, init=False)
