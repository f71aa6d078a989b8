"""Clock and identifier sources consumed while building telemetry records.

Both are injectable so tests can pin the current instant and the generated
request ids.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Protocol
from uuid import uuid4

_CANONICAL_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


class ClockError(RuntimeError):
    """Raised when a clock yields an instant without timezone information."""


class IdentifierSourceError(RuntimeError):
    """Raised when an id source yields a blank or non-canonical identifier."""


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware instant."""


class IdSource(Protocol):
    """Source of random, globally unique identifiers."""

    def new_id(self) -> str:
        """Return an identifier in canonical UUID text form."""


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class UuidIdSource:
    def new_id(self) -> str:
        return str(uuid4())


def is_canonical_uuid(value: object) -> bool:
    return isinstance(value, str) and bool(_CANONICAL_UUID_RE.match(value))


def checked_now(clock: Clock) -> datetime:
    """Read ``clock`` and reject naive datetimes."""
    instant = clock.now()
    if not isinstance(instant, datetime) or instant.tzinfo is None or instant.utcoffset() is None:
        raise ClockError(f"Clock returned a non timezone-aware instant: {instant!r}")
    return instant


def checked_new_id(id_source: IdSource) -> str:
    """Read ``id_source`` and reject anything but a canonical lowercase UUID."""
    identifier = id_source.new_id()
    if not is_canonical_uuid(identifier):
        raise IdentifierSourceError(f"Id source returned a non-canonical identifier: {identifier!r}")
    return identifier
