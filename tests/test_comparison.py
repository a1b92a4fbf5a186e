"""Tests for datetime comparison."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dtnorm.clock import FixedClock
from dtnorm.comparison import compare, is_after, is_before, is_same_instant, unix_seconds
from dtnorm.errors import ParseError

PAIRS = [
    ("2017-09-08 11:24:00+08:00", "2017-09-08T03:24:00Z"),
    ("2017-09-08 11:24:01", "2017-09-08 11:24:00"),
    ("2017-09-08 11:24:00", "2017-09-08 11:24:01"),
    (1000, 1999),
    (999, 1000),
    (datetime(2017, 9, 8, 3, 24, tzinfo=UTC), "2017-09-08 11:24:00"),
]


class TestCompare:
    """compare() over Unix seconds."""

    @pytest.mark.unit
    def test_same_instant_different_offsets(self, utc_clock: FixedClock) -> None:
        assert compare("2017-09-08 11:24:00+08:00", "2017-09-08T03:24:00Z", clock=utc_clock) == 0

    @pytest.mark.unit
    def test_ordering(self, utc_clock: FixedClock) -> None:
        assert compare("2017-09-08 11:24:01", "2017-09-08 11:24:00", clock=utc_clock) == 1
        assert compare("2017-09-07", "2017-09-08", clock=utc_clock) == -1

    @pytest.mark.unit
    def test_second_granularity(self, utc_clock: FixedClock) -> None:
        assert compare(1000, 1999, clock=utc_clock) == 0
        assert compare(999, 1000, clock=utc_clock) == -1
        assert compare(-1, 0, clock=utc_clock) == -1

    @pytest.mark.unit
    def test_naive_values_use_host_offset(self, utc8_clock: FixedClock) -> None:
        assert compare("2017-09-08 11:24:00", "2017-09-08T03:24:00Z", clock=utc8_clock) == 0

    @pytest.mark.unit
    def test_unix_seconds_floor(self, utc_clock: FixedClock) -> None:
        assert unix_seconds(-1, clock=utc_clock) == -1
        assert unix_seconds(1999, clock=utc_clock) == 1

    @pytest.mark.unit
    def test_parse_error_propagates(self, utc_clock: FixedClock) -> None:
        with pytest.raises(ParseError):
            compare("2017-09-08", "not-a-datetime-at-all", clock=utc_clock)


class TestBooleanWrappers:
    """is_after / is_before / is_same_instant."""

    @pytest.mark.unit
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_exactly_one_holds(self, utc8_clock: FixedClock, a: object, b: object) -> None:
        results = [
            is_after(a, b, clock=utc8_clock),
            is_before(a, b, clock=utc8_clock),
            is_same_instant(a, b, clock=utc8_clock),
        ]
        assert results.count(True) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize(("a", "b"), PAIRS)
    def test_antisymmetric(self, utc8_clock: FixedClock, a: object, b: object) -> None:
        assert is_after(a, b, clock=utc8_clock) == is_before(b, a, clock=utc8_clock)
