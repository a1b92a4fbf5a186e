"""OLE Automation date (OADate) conversion.

An OADate is a float day count from 1899-12-30; the integer part is the
day, the fraction the time of day. 25569.0 is 1970-01-01T00:00:00Z.

Values are treated as a plain linear day count: the OLE convention for
negative values (signed day, unsigned fraction) is not applied.
"""

from __future__ import annotations

import math

from . import engine
from .clock import HostClock, resolve_clock
from .engine import DatetimeValue
from .errors import ParseError
from .formatting import to_local
from .global_config import MS_PER_DAY, OADATE_EPOCH_DAYS


def to_oadate(value: DatetimeValue, *, clock: HostClock | None = None) -> float:
    """Convert a datetime (string, epoch milliseconds or object) to an OADate.

    Args:
        value: Datetime to convert; naive values are read as local time.
        clock: Host clock; defaults to ``default_clock()``.

    Returns:
        OADate for the instant.
    """
    ms = engine.parse(value, clock=resolve_clock(clock)).epoch_ms
    return ms / MS_PER_DAY + OADATE_EPOCH_DAYS


def from_oadate(value: float) -> int:
    """Convert an OADate to UTC epoch milliseconds, rounded up.

    Args:
        value: OADate day count.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        ParseError: If ``value`` is not a finite number.
    """
    if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
        raise ParseError(f"OADate must be a finite number, got: {value!r}")
    return math.ceil((value - OADATE_EPOCH_DAYS) * MS_PER_DAY)


def oadate_to_local_string(
    value: float, pattern: str, *, clock: HostClock | None = None
) -> str:
    """Render an OADate as a local datetime string."""
    return to_local(from_oadate(value), pattern, clock=clock)


# Short aliases
oadate = to_oadate
oadate2time = from_oadate
oadate2date = oadate_to_local_string
