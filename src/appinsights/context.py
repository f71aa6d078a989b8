"""Per-item telemetry context attached to every record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True)
class TelemetryContext:
    """Identity and environment tags owned by exactly one telemetry record."""

    instrumentation_key: str = ""
    tags: dict[str, str] = field(default_factory=dict)


class ContextFactory(Protocol):
    """Creates a fresh, independently owned context."""

    def __call__(self) -> TelemetryContext:
        ...


def new_item_telemetry_context() -> TelemetryContext:
    return TelemetryContext()
