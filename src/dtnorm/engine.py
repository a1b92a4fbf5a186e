"""Calendar engine adapter.

Thin layer over pendulum that every higher-level operation goes through:
- Parsing a DatetimeValue (string, epoch milliseconds, datetime/date, None)
  into an aware pendulum DateTime, optionally with a moment-style input
  pattern
- Recording at the parse boundary whether an offset was actually written
  (``ParsedDatetime.explicit_offset``)
- Moving instants between numeric offsets and rendering them per pattern

Naive values are interpreted as host-local wall clock through the injected
``HostClock``; named timezones are never consulted.
"""

from __future__ import annotations

import calendar
import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime

import pendulum

from .clock import HostClock, ms_to_utc_datetime
from .errors import InvalidPatternError, ParseError, from_engine_error
from .global_config import MS_PER_MINUTE

logger = logging.getLogger(__name__)

DatetimeValue = str | int | float | datetime | date | None

# Mirrors pendulum's formatter tokens; bracketed and backslash escapes are
# matched first so literals never count as tokens.
_TOKEN_RE = re.compile(
    r"\[[^\[]*\]|\\.|"
    r"(Mo|MM?M?M?|Do|DDDo|DD?D?D?|ddd?d?|do?|E{1,4}|w[ow]?|W[oW]?|Qo?"
    r"|YYYY|YY|Y|a|A|hh?|HH?|kk?|mm?|ss?|S{1,9}|x|X|zz?|ZZ?"
    r"|LTS|LT|LL?L?L?)"
)
_OFFSET_TOKENS = frozenset({"Z", "ZZ"})
# Second default zone used to tell written offsets from defaulted ones
_PROBE_TZ = pendulum.fixed_timezone(3600)
_ENGINE_ERRORS = (ValueError, TypeError, OverflowError)


@dataclass(frozen=True)
class ParsedDatetime:
    """An instant together with the offset it was read at.

    Attributes:
        dt: Aware DateTime at the written offset, or at the host-local
            offset when nothing was written.
        explicit_offset: True when the input carried its own offset (a
            ``Z``/``±HH:mm`` suffix, an offset token in the input pattern,
            or an aware datetime).
    """

    dt: pendulum.DateTime
    explicit_offset: bool

    @property
    def offset_minutes(self) -> int:
        return offset_minutes(self.dt)

    @property
    def epoch_ms(self) -> int:
        return epoch_ms(self.dt)


def pattern_tokens(pattern: str) -> list[str]:
    """Return the formatting tokens in ``pattern``, escapes excluded."""
    return [m.group(1) for m in _TOKEN_RE.finditer(pattern) if m.group(1)]


def epoch_ms(dt: datetime) -> int:
    """Return UTC epoch milliseconds for an aware datetime (sub-ms floored)."""
    return calendar.timegm(dt.utctimetuple()) * 1000 + dt.microsecond // 1000


def offset_minutes(dt: datetime) -> int:
    offset = dt.utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds()) // 60


def at_offset(dt: datetime, minutes: int) -> pendulum.DateTime:
    """Return the same instant expressed at a fixed offset of ``minutes``."""
    return pendulum.instance(dt).in_timezone(pendulum.fixed_timezone(minutes * 60))


def from_epoch_ms(ms: int | float, minutes: int = 0) -> pendulum.DateTime:
    """Build a DateTime for epoch milliseconds, expressed at ``minutes``."""
    return at_offset(ms_to_utc_datetime(ms), minutes)


def in_local(dt: datetime, clock: HostClock) -> pendulum.DateTime:
    """Express an instant at the host-local offset in effect at that instant."""
    return at_offset(dt, clock.offset_at(epoch_ms(dt)))


def in_utc(dt: datetime) -> pendulum.DateTime:
    return at_offset(dt, 0)


def render(dt: datetime, pattern: str) -> str:
    """Render ``dt`` at its own offset using a moment-style pattern.

    Args:
        dt: Aware datetime to render.
        pattern: Output pattern, e.g. ``"YYYY-MM-DD HH:mm:ss Z"``.

    Returns:
        Rendered string.

    Raises:
        InvalidPatternError: If the pattern is empty or holds only literals.
    """
    if not pattern or not pattern_tokens(pattern):
        raise InvalidPatternError(f"Pattern has no formatting tokens: {pattern!r}")
    return pendulum.instance(dt).format(pattern)


def parse(
    value: DatetimeValue,
    given_pattern: str | None = None,
    *,
    clock: HostClock,
) -> ParsedDatetime:
    """Parse a DatetimeValue into an instant, keeping any written offset.

    Strings with an offset keep it; strings without one are read as local
    wall clock. Numbers are epoch milliseconds, shown at the local offset.
    Aware datetimes keep their offset, naive ones and dates are local wall
    clock. ``None`` is the clock's current instant.

    Args:
        value: Value to parse.
        given_pattern: Moment-style pattern for non-standard string shapes.
        clock: Provider of the host-local offset and of "now".

    Returns:
        ParsedDatetime for the value.

    Raises:
        ParseError: If the value is malformed or of an unsupported type.
    """
    if isinstance(value, str):
        written, explicit = _parse_string(value, given_pattern, clock)
        if explicit:
            return ParsedDatetime(written, True)
        return ParsedDatetime(_localize_wall(written, clock), False)

    if value is None:
        now = clock.now_ms()
        return ParsedDatetime(from_epoch_ms(now, clock.offset_at(now)), False)

    if isinstance(value, bool):
        raise ParseError(f"Unsupported datetime value type: {type(value).__name__}")

    if isinstance(value, int | float):
        if not math.isfinite(value):
            raise ParseError(f"Cannot parse non-finite timestamp: {value!r}")
        try:
            return ParsedDatetime(from_epoch_ms(value, clock.offset_at(value)), False)
        except _ENGINE_ERRORS as e:
            raise from_engine_error(e, value) from e

    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return ParsedDatetime(pendulum.instance(value), True)
        return ParsedDatetime(_localize_wall(value, clock), False)

    if isinstance(value, date):
        return ParsedDatetime(
            _localize_wall(datetime(value.year, value.month, value.day), clock), False
        )

    raise ParseError(f"Unsupported datetime value type: {type(value).__name__}")


def parse_zone(
    value: DatetimeValue,
    given_pattern: str | None = None,
    *,
    clock: HostClock,
) -> pendulum.DateTime:
    """Parse a value keeping its written wall clock and offset unconverted.

    Differs from ``parse`` only for strings without an offset: their wall
    clock is kept as written and stamped ``+00:00`` instead of being read
    as local time.
    """
    if isinstance(value, str):
        written, _ = _parse_string(value, given_pattern, clock)
        return written
    return parse(value, given_pattern, clock=clock).dt


def _parse_string(
    text: str, given_pattern: str | None, clock: HostClock
) -> tuple[pendulum.DateTime, bool]:
    """Parse a string, returning it at its written offset (UTC when none).

    Time-only strings take the clock's local date. ``"now"`` is rejected;
    pass None for the current instant.

    Returns:
        Tuple of the parsed DateTime and whether an offset was written.
    """
    if given_pattern:
        try:
            dt = pendulum.from_format(text, given_pattern, tz=pendulum.UTC)
        except _ENGINE_ERRORS as e:
            raise from_engine_error(e, text, given_pattern) from e
        explicit = any(token in _OFFSET_TOKENS for token in pattern_tokens(given_pattern))
        return dt, explicit

    # pendulum reads "now" from the system, bypassing the clock
    if text.strip().lower() == "now":
        raise ParseError(f"Cannot parse {text!r}: use None for the current time")

    now = clock.now_ms()
    local_now = ms_to_utc_datetime(now + clock.offset_at(now) * MS_PER_MINUTE).replace(tzinfo=None)
    try:
        dt = pendulum.parse(text, strict=False, tz=pendulum.UTC, now=local_now)
        probe = pendulum.parse(text, strict=False, tz=_PROBE_TZ, now=local_now)
    except _ENGINE_ERRORS as e:
        raise from_engine_error(e, text) from e

    if not isinstance(dt, pendulum.DateTime):
        raise ParseError(f"Cannot parse {text!r}: not a date or time ({type(dt).__name__})")

    # A written offset survives a change of default zone; a defaulted one does not
    explicit = offset_minutes(dt) == offset_minutes(probe)
    logger.debug("Parsed %r (explicit_offset=%s)", text, explicit)
    return dt, explicit


def _localize_wall(wall: datetime, clock: HostClock) -> pendulum.DateTime:
    """Read the wall-clock fields of ``wall`` as host-local time."""
    wall_ms = calendar.timegm(wall.timetuple()) * 1000 + wall.microsecond // 1000
    try:
        minutes = (wall_ms - clock.localize(wall_ms)) // MS_PER_MINUTE
        return pendulum.datetime(
            wall.year,
            wall.month,
            wall.day,
            wall.hour,
            wall.minute,
            wall.second,
            wall.microsecond,
            tz=pendulum.fixed_timezone(int(minutes) * 60),
        )
    except _ENGINE_ERRORS as e:
        raise from_engine_error(e, wall) from e
