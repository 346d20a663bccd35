"""Vote Throttle Port for repeat-vote limiting per (voter, content).

A voter may cast a limited number of votes on one content inside a
rolling window (default: 3 votes per 72 hours). The window is anchored on
the voter's own votes, not on calendar boundaries.

Developer Golden Rules:
1. READ ONLY - Checking never writes to the ledger
2. BOTH DIRECTIONS - Credit and debit votes count toward the same limit
3. FAIL LOUD - Denials carry retry_not_before, never a silent drop
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID


@dataclass(frozen=True)
class ThrottleDecision:
    """Result of a repeat-vote throttle check.

    Attributes:
        allowed: Whether another vote is allowed now.
        current_count: Votes by the voter on the content inside the window.
        limit: Configured maximum votes per window.
        retry_not_before: When the oldest counted vote leaves the window
            (None when allowed and nothing is counted).
    """

    allowed: bool
    current_count: int
    limit: int
    retry_not_before: datetime | None = None

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.current_count)


@runtime_checkable
class VoteThrottleProtocol(Protocol):
    """Protocol for repeat-vote throttling.

    Usage:
        decision = await throttle.check_allowed(voter_id, content_id, now)
        if not decision.allowed:
            raise RepeatVoteThrottledError(...)
    """

    async def check_allowed(
        self,
        voter_id: UUID,
        content_id: UUID,
        now: datetime,
    ) -> ThrottleDecision:
        """Decide whether the voter may vote on the content at ``now``."""
        ...
