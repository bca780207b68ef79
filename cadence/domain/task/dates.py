"""Text forms of timestamps and intervals.

Completion dates are written in one canonical format but older logs used
other precisions, so parsing tries the canonical format first and then each
legacy variant. Intervals are written as a number of seconds.
"""

import re
from datetime import datetime, timedelta
from typing import Any

CANONICAL_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"

# Tried in order after the canonical format.
LEGACY_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
)

# strptime's %f stops at microseconds; older logs carry nanoseconds.
_NANOSECOND_RE = re.compile(r"^(?P<head>.+\.\d{6})\d{1,3}$")

# Longest accepted interval. Anything much longer cannot be added to a date.
MAX_INTERVAL = timedelta(days=36500)

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([a-z]+)")

_DURATION_UNITS = {
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in the canonical log format."""
    return value.strftime(CANONICAL_FORMAT)


def parse_timestamp(raw: str) -> datetime:
    """Parse a timestamp written by any known log version.

    Raises:
        ValueError: If no known format matches.
    """
    match = _NANOSECOND_RE.match(raw)
    text = match.group("head") if match else raw

    for fmt in (CANONICAL_FORMAT, *LEGACY_FORMATS):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"unrecognized timestamp: {raw!r}")


def interval_to_json(interval: timedelta | None) -> int | float | None:
    """Render an interval as seconds, an integer when whole."""
    if interval is None:
        return None
    seconds = interval.total_seconds()
    return int(seconds) if seconds.is_integer() else seconds


def interval_from_json(raw: Any) -> timedelta | None:
    """Parse an interval from seconds or the legacy ``{"secs", "nanos"}`` object.

    Raises:
        ValueError: If the value has neither shape, is negative or is
            longer than MAX_INTERVAL.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"invalid interval: {raw!r}")
    try:
        if isinstance(raw, int | float):
            seconds = float(raw)
        elif isinstance(raw, dict) and set(raw) == {"secs", "nanos"}:
            secs, nanos = raw["secs"], raw["nanos"]
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in (secs, nanos)):
                raise ValueError(f"invalid interval: {raw!r}")
            seconds = secs + nanos / 1_000_000_000
        else:
            raise ValueError(f"invalid interval: {raw!r}")
    except OverflowError:
        raise ValueError(f"interval too large: {raw!r}") from None

    if seconds < 0:
        raise ValueError(f"negative interval: {raw!r}")
    return _bounded(seconds, raw)


def parse_duration(text: str) -> timedelta:
    """Parse a human duration such as ``30days``, ``2w`` or ``1d 12h``.

    Raises:
        ValueError: If the text is empty, contains an unknown unit or is
            longer than MAX_INTERVAL.
    """
    cleaned = text.strip().lower()
    if not cleaned:
        raise ValueError("empty duration")

    total = 0.0
    position = 0
    for match in _DURATION_RE.finditer(cleaned):
        if cleaned[position:match.start()].strip():
            raise ValueError(f"invalid duration: {text!r}")
        amount, unit = match.groups()
        if unit not in _DURATION_UNITS:
            raise ValueError(f"unknown duration unit {unit!r} in {text!r}")
        total += float(amount) * _DURATION_UNITS[unit]
        position = match.end()

    if position == 0 or cleaned[position:].strip():
        raise ValueError(f"invalid duration: {text!r}")
    return _bounded(total, text)


def _bounded(seconds: float, raw: Any) -> timedelta:
    try:
        interval = timedelta(seconds=seconds)
    except OverflowError:
        raise ValueError(f"interval too large: {raw!r}") from None
    if interval > MAX_INTERVAL:
        raise ValueError(f"interval too large: {raw!r} (at most {MAX_INTERVAL.days} days)")
    return interval
