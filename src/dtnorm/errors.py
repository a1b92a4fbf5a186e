"""Datetime-specific exception types for the project."""

from __future__ import annotations

from typing import Any


class DatetimeError(Exception):
    """Base exception for datetime normalization errors."""


class ParseError(DatetimeError, ValueError):
    """Raised when a value cannot be parsed into an instant."""


class InvalidPatternError(DatetimeError, ValueError):
    """Raised when an output pattern contains no formatting tokens."""


class InvalidOffsetError(DatetimeError, ValueError):
    """Raised when an offset string cannot be interpreted."""


def from_engine_error(
    error: Exception, value: Any, pattern: str | None = None
) -> ParseError:
    """Map a raw calendar-engine error to a project-level ParseError.

    pendulum raises ``ValueError`` subclasses (and occasionally
    ``TypeError`` or ``OverflowError`` for out-of-range fields); callers
    only ever see ``ParseError`` with the offending value in the message.

    Args:
        error: Exception raised by the calendar engine.
        value: Value that failed to parse.
        pattern: Input pattern in use, if any.

    Returns:
        ParseError instance describing the failure.
    """
    if pattern:
        return ParseError(
            f"Cannot parse {value!r} with pattern {pattern!r}: {error}"
        )
    return ParseError(f"Cannot parse {value!r}: {error}")
