"""Host clock and local-offset provider.

Every operation that needs "now" or the host's local UTC offset reads it
through a ``HostClock``. The default clock reads the operating system's
local time on every call (nothing is cached), so an offset change across a
DST boundary is picked up by the next call. Tests and callers that need
deterministic behaviour pass a ``FixedClock`` instead.

Offsets are always signed integer minutes east of UTC.
"""

from __future__ import annotations

import logging
import os
import re
import time
from datetime import UTC, datetime, timedelta

from .errors import InvalidOffsetError
from .global_config import LOCAL_OFFSET_ENV, MS_PER_MINUTE

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_OFFSET_RE = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")
# Real-world offsets span -12:00..+14:00
_MAX_OFFSET_MINUTES = 18 * 60


def ms_to_utc_datetime(ms: int | float) -> datetime:
    """Return the stdlib UTC datetime for an epoch-millisecond instant."""
    return _EPOCH + timedelta(milliseconds=ms)


def parse_offset(text: str | int) -> int:
    """Parse an offset into signed minutes east of UTC.

    Accepts ``±HH:mm``, ``±HHmm``, ``Z`` (UTC) or an integer number of
    minutes (as int or numeric string).

    Args:
        text: Offset to parse.

    Returns:
        Offset in minutes.

    Raises:
        InvalidOffsetError: If the offset is malformed or out of range.
    """
    if isinstance(text, bool):
        raise InvalidOffsetError(f"Invalid offset: {text!r}")

    if isinstance(text, int):
        minutes = text
    else:
        raw = text.strip()
        if raw in ("Z", "z"):
            return 0
        match = _OFFSET_RE.match(raw)
        if match:
            minutes = int(match["hours"]) * 60 + int(match["minutes"])
            if match["sign"] == "-":
                minutes = -minutes
        else:
            try:
                minutes = int(raw)
            except ValueError as e:
                raise InvalidOffsetError(
                    f"Invalid offset {text!r} (expected ±HH:mm, ±HHmm, Z or minutes)"
                ) from e

    if abs(minutes) > _MAX_OFFSET_MINUTES:
        raise InvalidOffsetError(f"Offset out of range: {minutes} minutes")
    return minutes


def format_offset(minutes: int) -> str:
    """Format signed minutes as ``±HH:mm`` (``0`` renders as ``+00:00``)."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


class HostClock:
    """Source of the current instant and of the host's local UTC offset.

    Subclasses implement ``now_ms`` and ``offset_at``; the derived queries
    (current offset, standard offset, wall-clock localization) are shared.
    """

    def now_ms(self) -> int:
        """Return the current instant as UTC epoch milliseconds."""
        raise NotImplementedError

    def offset_at(self, ms: int | float) -> int:
        """Return the local offset (minutes) in effect at instant ``ms``."""
        raise NotImplementedError

    def current_offset(self) -> int:
        """Return the local offset in effect now, DST included."""
        return self.offset_at(self.now_ms())

    def standard_offset(self) -> int:
        """Return the local offset on January 1 of the current local year.

        January 1 lies outside DST under northern-hemisphere conventions,
        so its offset serves as the reference "standard" offset.
        """
        now = self.now_ms()
        local_now = ms_to_utc_datetime(now + self.offset_at(now) * MS_PER_MINUTE)
        jan1 = datetime(local_now.year, 1, 1, tzinfo=UTC)
        wall_ms = (jan1 - _EPOCH) // timedelta(milliseconds=1)
        return self.offset_at(self.localize(wall_ms))

    def localize(self, wall_ms: int | float) -> int | float:
        """Convert a local wall-clock reading to a UTC instant.

        ``wall_ms`` is the wall clock encoded as if it were UTC. The offset
        is looked up twice so a reading near a transition uses the offset
        in effect at the resulting instant.

        Args:
            wall_ms: Local wall-clock time as epoch milliseconds.

        Returns:
            UTC epoch milliseconds.
        """
        guess = wall_ms - self.offset_at(wall_ms) * MS_PER_MINUTE
        return wall_ms - self.offset_at(guess) * MS_PER_MINUTE


class SystemClock(HostClock):
    """Live clock backed by the operating system's local time settings."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def offset_at(self, ms: int | float) -> int:
        offset = ms_to_utc_datetime(ms).astimezone().utcoffset()
        if offset is None:
            return 0
        return int(offset.total_seconds()) // 60

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock(HostClock):
    """Deterministic clock with a constant local offset.

    Args:
        offset_minutes: Local offset returned for every instant.
        standard_offset_minutes: Offset reported as the standard (January 1)
            offset. Defaults to ``offset_minutes``; set it differently to
            simulate a host that is currently observing DST.
        now_ms: Fixed "now" instant. Defaults to the real current time.
    """

    def __init__(
        self,
        offset_minutes: int = 0,
        *,
        standard_offset_minutes: int | None = None,
        now_ms: int | None = None,
    ) -> None:
        self.offset_minutes = offset_minutes
        self.standard_offset_minutes = standard_offset_minutes
        self._now_ms = now_ms

    def now_ms(self) -> int:
        if self._now_ms is not None:
            return self._now_ms
        return time.time_ns() // 1_000_000

    def offset_at(self, ms: int | float) -> int:
        return self.offset_minutes

    def standard_offset(self) -> int:
        if self.standard_offset_minutes is None:
            return self.offset_minutes
        return self.standard_offset_minutes

    def __repr__(self) -> str:
        return (
            f"FixedClock({format_offset(self.offset_minutes)}, "
            f"standard={format_offset(self.standard_offset())})"
        )


def default_clock() -> HostClock:
    """Return the clock used when a caller does not inject one.

    Honours ``DTNORM_LOCAL_OFFSET`` (read on every call); otherwise the live
    system clock.

    Raises:
        InvalidOffsetError: If the environment override is malformed.
    """
    override = os.environ.get(LOCAL_OFFSET_ENV)
    if override:
        clock = FixedClock(parse_offset(override))
        logger.debug("Using %s from %s", clock, LOCAL_OFFSET_ENV)
        return clock
    return SystemClock()


def resolve_clock(clock: HostClock | None) -> HostClock:
    """Return ``clock`` or the default clock when it is None."""
    return clock if clock is not None else default_clock()
