"""Host offset queries and DST normalization.

Offsets are minutes east of UTC. The *current* offset includes any active
daylight-saving adjustment; the *standard* offset is the one in effect on
January 1 of the current year.
"""

from __future__ import annotations

import logging

from . import engine
from .clock import HostClock, format_offset, resolve_clock
from .engine import DatetimeValue
from .formatting import to_local
from .global_config import MS_PER_MINUTE

logger = logging.getLogger(__name__)


def local_offset_string(*, clock: HostClock | None = None) -> str:
    """Return the current local offset as ``±HH:mm``, e.g. ``"+08:00"``."""
    return format_offset(local_offset_minutes(clock=clock))


def local_offset_minutes(*, clock: HostClock | None = None) -> int:
    """Return the current local offset in minutes, DST included."""
    return resolve_clock(clock).current_offset()


def standard_offset_minutes(*, clock: HostClock | None = None) -> int:
    """Return the local offset ignoring DST.

    Stays the same across seasons: a US Eastern host reports -300 in both
    January and July.
    """
    return resolve_clock(clock).standard_offset()


def shift_to_standard_offset(ms: int | float, *, clock: HostClock | None = None) -> int | float:
    """Shift an epoch-millisecond instant by the active DST adjustment.

    Returns ``ms + (standard - current) * 60000``: while the host observes
    DST the instant moves so its local reading matches standard time;
    otherwise ``ms`` is returned unchanged.

    Args:
        ms: UTC epoch milliseconds.
        clock: Host clock; defaults to ``default_clock()``.

    Returns:
        Shifted epoch milliseconds.
    """
    clock = resolve_clock(clock)
    current = clock.current_offset()
    standard = clock.standard_offset()
    if current != standard:
        logger.debug("DST active (current=%s, standard=%s)", current, standard)
    return ms + (standard - current) * MS_PER_MINUTE


def to_standard_offset_local(
    value: DatetimeValue,
    pattern: str,
    given_pattern: str | None = None,
    *,
    clock: HostClock | None = None,
) -> str:
    """Render a datetime as local time with the active DST adjustment removed."""
    clock = resolve_clock(clock)
    ms = engine.parse(value, given_pattern, clock=clock).epoch_ms
    return to_local(shift_to_standard_offset(ms, clock=clock), pattern, clock=clock)


# Short aliases
timezone = local_offset_string
timezone_offset = local_offset_minutes
timezone_offset_std = standard_offset_minutes
time2dst = shift_to_standard_offset
date2dst = to_standard_offset_local
