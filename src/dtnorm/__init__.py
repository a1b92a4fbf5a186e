"""
dtnorm core package.

Datetime normalization and formatting over numeric UTC offsets:
- Offset-preserving formatting with zero-offset disambiguation
  (`dtnorm.formatting`)
- Host offset queries and DST normalization (`dtnorm.offsets`)
- OLE Automation date conversion (`dtnorm.oadates`)
- Second-granularity comparison (`dtnorm.comparison`)
- A developer console for manual inspection, not installed as a script
  (`python -m dtnorm.cli.main`)

Configuration:
- Shared patterns, numeric anchors and environment variable names live in
  `dtnorm.global_config`.
- Host time is read through an injectable clock (`dtnorm.clock`); pass
  `clock=FixedClock(...)` for deterministic results.
"""

from .clock import FixedClock, HostClock, SystemClock, default_clock, format_offset, parse_offset
from .comparison import (
    compare,
    date_a_vs_b,
    dateaeb,
    dateagb,
    datealb,
    is_after,
    is_before,
    is_same_instant,
)
from .errors import DatetimeError, InvalidOffsetError, InvalidPatternError, ParseError
from .formatting import date, format, to_local, to_utc, utc, utc2date, utc_to_local
from .oadates import from_oadate, oadate, oadate2date, oadate2time, oadate_to_local_string, to_oadate
from .offsets import (
    date2dst,
    local_offset_minutes,
    local_offset_string,
    shift_to_standard_offset,
    standard_offset_minutes,
    time2dst,
    timezone,
    timezone_offset,
    timezone_offset_std,
    to_standard_offset_local,
)

__all__ = [
    # Clock
    "FixedClock",
    "HostClock",
    "SystemClock",
    "default_clock",
    "format_offset",
    "parse_offset",
    # Errors
    "DatetimeError",
    "InvalidOffsetError",
    "InvalidPatternError",
    "ParseError",
    # Formatting
    "format",
    "to_local",
    "to_utc",
    "utc_to_local",
    # Offsets
    "local_offset_minutes",
    "local_offset_string",
    "shift_to_standard_offset",
    "standard_offset_minutes",
    "to_standard_offset_local",
    # OADate
    "from_oadate",
    "oadate_to_local_string",
    "to_oadate",
    # Comparison
    "compare",
    "is_after",
    "is_before",
    "is_same_instant",
    # Short aliases
    "date",
    "date2dst",
    "date_a_vs_b",
    "dateaeb",
    "dateagb",
    "datealb",
    "oadate",
    "oadate2date",
    "oadate2time",
    "time2dst",
    "timezone",
    "timezone_offset",
    "timezone_offset_std",
    "utc",
    "utc2date",
]
