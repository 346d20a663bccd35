"""FakeTimeAuthority - controllable time authority for deterministic tests.

Throttle windows and event timestamps come from the time authority, so
tests freeze and advance time instead of sleeping.

Usage Patterns:
--------------

1. Frozen Time:
    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc))
    >>> service = VoteThrottleService(ledger)
    >>> await service.check_allowed(voter_id, content_id, fake_time.now())

2. Time Advancement:
    >>> fake_time.advance(delta=timedelta(hours=72))

3. Pytest Fixture:
    def test_window(fake_time_authority):
        fake_time_authority.advance(seconds=3600)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tabcoin.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FAKE_TIME = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    Attributes:
        _current_time: The controlled current time.
        _monotonic_base: Starting value of the monotonic clock.
        _monotonic_advances: Accumulated advances of the monotonic clock.
    """

    def __init__(
        self,
        frozen_at: datetime | None = None,
        *,
        start_monotonic: float = 0.0,
    ) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Time to freeze at (default 2026-01-01T00:00:00 UTC).
                Naive datetimes are treated as UTC.
            start_monotonic: Starting value for the monotonic clock.
        """
        if frozen_at is None:
            frozen_at = DEFAULT_FAKE_TIME
        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)

        self._current_time: datetime = frozen_at
        self._monotonic_base: float = start_monotonic
        self._monotonic_advances: float = 0.0

    def now(self) -> datetime:
        return self._current_time

    def utcnow(self) -> datetime:
        return self._current_time

    def monotonic(self) -> float:
        return self._monotonic_base + self._monotonic_advances

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance wall and monotonic time together.

        Raises:
            ValueError: If neither argument is given or the amount is negative.
        """
        if delta is not None:
            advance_seconds = delta.total_seconds()
        elif seconds is not None:
            advance_seconds = float(seconds)
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if advance_seconds < 0:
            raise ValueError(
                f"Cannot advance time backwards. Got {advance_seconds} seconds. "
                "Use set_time() for explicit time changes."
            )

        self._current_time += timedelta(seconds=advance_seconds)
        self._monotonic_advances += advance_seconds

    def set_time(self, dt: datetime) -> None:
        """Jump wall time to ``dt`` without touching the monotonic clock."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        self._current_time = dt

    @property
    def current_time(self) -> datetime:
        return self._current_time

    def __repr__(self) -> str:
        return (
            f"FakeTimeAuthority("
            f"current_time={self._current_time.isoformat()}, "
            f"monotonic={self.monotonic():.3f})"
        )
