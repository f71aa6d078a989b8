"""Wire-format renderings for durations and timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def _trunc_div(numerator: int, denominator: int) -> int:
    # Integer division rounding toward zero, unlike ``//`` which floors.
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def format_duration(duration: timedelta) -> str:
    """Render ``duration`` as ``DD.HH:MM:SS.ffff``.

    Each field is the whole count of its unit minus the whole count of the
    next larger unit scaled down, e.g. ``minutes = total_minutes - total_hours * 60``.
    The sub-second field counts microseconds and is padded to at least four
    digits.

    >>> format_duration(timedelta(days=1, hours=2, minutes=3, seconds=4, microseconds=5000))
    '01.02:03:04.5000'
    """
    total_micros = (duration.days * 86_400 + duration.seconds) * _MICROS_PER_SECOND + duration.microseconds

    ref_hours = _trunc_div(total_micros, _MICROS_PER_HOUR)
    ref_minutes = _trunc_div(total_micros, _MICROS_PER_MINUTE)
    ref_seconds = _trunc_div(total_micros, _MICROS_PER_SECOND)

    days = _trunc_div(ref_hours, 24)
    hours = ref_hours - days * 24
    minutes = ref_minutes - ref_hours * 60
    seconds = ref_seconds - ref_minutes * 60
    subsecond = total_micros - ref_seconds * _MICROS_PER_SECOND

    return f"{days:02d}.{hours:02d}:{minutes:02d}:{seconds:02d}.{subsecond:04d}"


def format_rfc3339_nano(moment: datetime) -> str:
    """Render ``moment`` in RFC 3339 form with trimmed fractional seconds.

    Naive datetimes are taken to be UTC. A zero offset renders as ``Z``.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    fraction = f"{moment.microsecond:06d}".rstrip("0")
    if fraction:
        text += f".{fraction}"

    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"

    offset_minutes = int(offset.total_seconds() / 60)
    sign = "+" if offset_minutes >= 0 else "-"
    offset_minutes = abs(offset_minutes)
    return f"{text}{sign}{offset_minutes // 60:02d}:{offset_minutes % 60:02d}"
