"""Offset-preserving datetime formatting.

``format`` renders a value in the offset it was written with instead of
converting it to host-local time:

    format("2017-09-08 11:24:00+08:00", "D/M/YYYY HH:mm:ss Z")
    -> "8/9/2017 11:24:00 +08:00"

Values without an offset are rendered as local time. A zero offset is
ambiguous (an explicit ``+00:00`` versus nothing written), and two ways of
resolving it are offered:

- ``"tagged"`` (default): the parse boundary records whether an offset was
  written, so written ``+00:00``/``Z`` renders in UTC and anything else in
  local time. A naive value that localized at ``+00:00`` also renders in
  UTC; this only differs from local time inside a spring-forward gap,
  e.g. ``"2017-03-26 01:30:00"`` in London stays ``01:30 +00:00``.
- ``"probe"``: the compatibility algorithm, which compares the value
  converted to UTC with the value at its own unconverted offset; equal
  renderings mean the offset already was UTC.

Both produce the same output. The probe cannot tell an explicit ``+00:00``
from a naive local time when the host offset itself is 0, and neither can
it matter there, since UTC and local render identically.
"""

from __future__ import annotations

import logging
from typing import Literal

from . import engine
from .clock import HostClock, resolve_clock
from .engine import DatetimeValue
from .global_config import CANONICAL_PATTERN, UTC_STAMP_PATTERN

logger = logging.getLogger(__name__)

Strategy = Literal["tagged", "probe"]
STRATEGIES: tuple[str, ...] = ("tagged", "probe")


def format(
    value: DatetimeValue,
    pattern: str,
    given_pattern: str | None = None,
    *,
    strategy: Strategy = "tagged",
    clock: HostClock | None = None,
) -> str:
    """Format a datetime, keeping the offset it was given with.

    Args:
        value: String, epoch milliseconds, datetime/date, or None for now.
        pattern: Output pattern, e.g. ``"YYYY-MM-DD HH:mm:ss"``.
        given_pattern: Input pattern for non-standard strings, e.g.
            ``"DD/MM/YYYY HH,mm,ss"``.
        strategy: How to resolve a zero offset, ``"tagged"`` or ``"probe"``.
        clock: Host clock; defaults to ``default_clock()``.

    Returns:
        Formatted string.

    Raises:
        ParseError: If the value cannot be parsed.
        InvalidPatternError: If ``pattern`` has no formatting tokens.
        ValueError: If ``strategy`` is unknown.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"strategy must be one of {STRATEGIES}, got: {strategy!r}")

    clock = resolve_clock(clock)
    given_offset = engine.offset_minutes(engine.parse_zone(value, given_pattern, clock=clock))
    parsed = engine.parse(value, given_pattern, clock=clock)

    if given_offset != 0:
        return engine.render(engine.at_offset(parsed.dt, given_offset), pattern)

    if strategy == "tagged":
        # A wall clock localized at +00:00 stays UTC even when the host offset
        # at that instant differs, i.e. it fell in a spring-forward gap
        as_utc = parsed.explicit_offset or parsed.offset_minutes == 0
    else:
        as_utc = _probe_is_utc(value, given_pattern, clock)

    logger.debug("Zero offset for %r resolved as %s (%s)", value, "UTC" if as_utc else "local", strategy)
    if as_utc:
        return engine.render(engine.in_utc(parsed.dt), pattern)
    return engine.render(engine.in_local(parsed.dt, clock), pattern)


def _probe_is_utc(value: DatetimeValue, given_pattern: str | None, clock: HostClock) -> bool:
    """Return True when the value rendered in UTC equals its own wall clock."""
    u = to_utc(value, CANONICAL_PATTERN, given_pattern, clock=clock)
    t = engine.render(engine.parse_zone(value, given_pattern, clock=clock), CANONICAL_PATTERN)
    logger.debug("Probe for %r: utc=%s own=%s", value, u, t)
    return u == t


def to_local(
    value: DatetimeValue,
    pattern: str,
    given_pattern: str | None = None,
    *,
    clock: HostClock | None = None,
) -> str:
    """Render a datetime in host-local time.

    Values with an explicit offset are converted to the local offset; values
    without one are already local.
    """
    clock = resolve_clock(clock)
    parsed = engine.parse(value, given_pattern, clock=clock)
    return engine.render(engine.in_local(parsed.dt, clock), pattern)


def to_utc(
    value: DatetimeValue,
    pattern: str,
    given_pattern: str | None = None,
    *,
    clock: HostClock | None = None,
) -> str:
    """Render a datetime in UTC. Values without an offset are read as local."""
    clock = resolve_clock(clock)
    parsed = engine.parse(value, given_pattern, clock=clock)
    return engine.render(engine.in_utc(parsed.dt), pattern)


def utc_to_local(
    value: DatetimeValue,
    pattern: str,
    given_pattern: str | None = None,
    *,
    clock: HostClock | None = None,
) -> str:
    """Render a UTC datetime, which may lack an offset marker, in local time.

    The value is first restamped through ``format`` with a literal ``Z``
    suffix, so ``"20:00:00"`` is taken as 20:00 UTC even though it carries
    no offset. At UTC+8 it renders as ``"04:00:00"`` (next day).

    Args:
        value: UTC datetime. A written offset is dropped and the wall
            clock read as UTC.
        pattern: Output pattern.
        given_pattern: Input pattern for non-standard strings.
        clock: Host clock; defaults to ``default_clock()``.

    Returns:
        Local datetime string.
    """
    clock = resolve_clock(clock)
    stamped = format(value, UTC_STAMP_PATTERN, given_pattern, clock=clock)
    return to_local(stamped, pattern, clock=clock)


# Short aliases
date = to_local
utc = to_utc
utc2date = utc_to_local
