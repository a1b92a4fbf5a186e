from __future__ import annotations

import os
import time
from collections.abc import Callable, Iterator

import pytest

from dtnorm.clock import FixedClock
from dtnorm.global_config import LOCAL_OFFSET_ENV


@pytest.fixture(autouse=True)
def isolated_offset_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Removes any host offset override so tests only see the clocks they inject.
    Automatically applied to all tests.
    """
    monkeypatch.delenv(LOCAL_OFFSET_ENV, raising=False)


@pytest.fixture
def utc_clock() -> FixedClock:
    """A host sitting at +00:00 with no DST (UTC servers, UK winter)."""
    return FixedClock(0)


@pytest.fixture
def utc8_clock() -> FixedClock:
    """A host at +08:00 with no DST."""
    return FixedClock(480)


@pytest.fixture
def dst_clock() -> FixedClock:
    """A US Eastern host during summer: -04:00 now, -05:00 standard."""
    return FixedClock(-240, standard_offset_minutes=-300)


@pytest.fixture
def system_tz() -> Iterator[Callable[[str], None]]:
    """
    Pins the process timezone through TZ for SystemClock tests.

    Uses POSIX TZ strings (e.g. "CST-8", "EST5EDT,M3.2.0,M11.1.0") so no
    tz database is needed. The previous TZ is restored afterwards.
    """
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() not available on this platform")

    previous = os.environ.get("TZ")

    def _set(tz: str) -> None:
        os.environ["TZ"] = tz
        time.tzset()

    try:
        yield _set
    finally:
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()
