"""Clock abstraction.

WallClock: real wall-clock time (CLI, service)
SimClock: fixed, manually set time (tests)

Payout stamps and "today" lookups go through an injected clock instead of
calling datetime.now() directly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from .ids import utc_now


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return utc_now()


class SimClock:
    """Simulated clock for deterministic tests.

    Time advances only when explicitly set.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, t: datetime) -> None:
        """Move time. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"SimClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t
