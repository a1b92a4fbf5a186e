"""Datetime comparison at Unix-second granularity."""

from __future__ import annotations

from . import engine
from .clock import HostClock, resolve_clock
from .engine import DatetimeValue


def unix_seconds(value: DatetimeValue, *, clock: HostClock | None = None) -> int:
    """Return the Unix time of a datetime, floored to whole seconds."""
    return engine.parse(value, clock=resolve_clock(clock)).epoch_ms // 1000


def compare(a: DatetimeValue, b: DatetimeValue, *, clock: HostClock | None = None) -> int:
    """Compare two datetimes.

    Args:
        a: First datetime (string, epoch milliseconds or object).
        b: Second datetime.
        clock: Host clock used for values without an offset.

    Returns:
        1 if a is after b, -1 if a is before b, 0 if they fall in the same
        second.

    Raises:
        ParseError: If either value cannot be parsed.
    """
    clock = resolve_clock(clock)
    c = unix_seconds(a, clock=clock)
    d = unix_seconds(b, clock=clock)
    if c > d:
        return 1
    if c < d:
        return -1
    return 0


def is_after(a: DatetimeValue, b: DatetimeValue, *, clock: HostClock | None = None) -> bool:
    return compare(a, b, clock=clock) == 1


def is_before(a: DatetimeValue, b: DatetimeValue, *, clock: HostClock | None = None) -> bool:
    return compare(a, b, clock=clock) == -1


def is_same_instant(a: DatetimeValue, b: DatetimeValue, *, clock: HostClock | None = None) -> bool:
    return compare(a, b, clock=clock) == 0


# Short aliases
date_a_vs_b = compare
dateagb = is_after
datealb = is_before
dateaeb = is_same_instant
