"""Vote Throttle Service - repeat-vote limit per (voter, content).

Counts the voter's vote-sourced events on the content inside a rolling
window ending at ``now`` (strictly after ``now - window``). Once the count
reaches the limit the next vote is denied until the oldest counted vote
leaves the window.

Developer Golden Rules:
1. READ ONLY - this service never writes to the ledger
2. BOTH DIRECTIONS - credit and debit votes count toward the same limit
3. FAIL LOUD - denials report retry_not_before
"""

from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID

from tabcoin.application.ports.balance_ledger import BalanceLedgerProtocol
from tabcoin.application.ports.vote_throttle import ThrottleDecision
from tabcoin.application.services.base import LoggingMixin
from tabcoin.domain.models.balance_event import OriginatorKey

DEFAULT_REPEAT_VOTE_LIMIT = 3
DEFAULT_REPEAT_VOTE_WINDOW_HOURS = 72


class VoteThrottleService(LoggingMixin):
    """Rolling-window repeat-vote throttle backed by the ledger.

    Attributes:
        _ledger: Ledger holding the vote history.
        _limit: Maximum votes per (voter, content) inside the window.
        _window: Rolling window length.
    """

    def __init__(
        self,
        ledger: BalanceLedgerProtocol,
        limit: int = DEFAULT_REPEAT_VOTE_LIMIT,
        window_hours: int = DEFAULT_REPEAT_VOTE_WINDOW_HOURS,
    ) -> None:
        """Initialize the throttle.

        Args:
            ledger: Balance ledger port.
            limit: Maximum votes per window (default: 3).
            window_hours: Window length in hours (default: 72).
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        if window_hours < 1:
            raise ValueError(f"window_hours must be >= 1, got {window_hours}")
        self._ledger = ledger
        self._limit = limit
        self._window = timedelta(hours=window_hours)
        self._init_logger(component="ledger.throttle")

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_hours(self) -> int:
        return int(self._window.total_seconds() // 3600)

    async def check_allowed(
        self,
        voter_id: UUID,
        content_id: UUID,
        now: datetime,
    ) -> ThrottleDecision:
        """Decide whether ``voter_id`` may vote on ``content_id`` at ``now``.

        Args:
            voter_id: Voter being checked.
            content_id: Content being voted on.
            now: Reference time (end of the window).

        Returns:
            ThrottleDecision; when denied, ``retry_not_before`` is the time
            the oldest counted vote leaves the window.

        Raises:
            LedgerStorageError: The vote history could not be read.
        """
        window_start = now - self._window
        recent = await self._ledger.events_since(
            OriginatorKey.for_vote(voter_id, content_id), window_start
        )
        current_count = len(recent)

        if current_count < self._limit:
            return ThrottleDecision(
                allowed=True,
                current_count=current_count,
                limit=self._limit,
            )

        oldest = min(event.created_at for event in recent)
        retry_not_before = oldest + self._window

        self._log_operation(
            "check_allowed",
            voter_id=str(voter_id),
            content_id=str(content_id),
        ).info(
            "repeat_vote_throttled",
            current_count=current_count,
            limit=self._limit,
            retry_not_before=retry_not_before.isoformat(),
        )

        return ThrottleDecision(
            allowed=False,
            current_count=current_count,
            limit=self._limit,
            retry_not_before=retry_not_before,
        )
