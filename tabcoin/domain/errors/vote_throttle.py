"""Repeat-vote throttle errors.

A single voter may only vote a limited number of times on the same content
within a rolling window. Both credit and debit votes count toward the limit.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from tabcoin.domain.exceptions import TabCoinError


class RepeatVoteThrottledError(TabCoinError):
    """Raised when a voter has used up the repeat-vote allowance for a content.

    Denial is terminal for the request; nothing is written to the ledger.

    Attributes:
        voter_id: UUID of the throttled voter.
        content_id: UUID of the content.
        current_count: Votes by this voter on this content inside the window.
        limit: Configured maximum votes per window.
        retry_not_before: UTC datetime when the oldest vote leaves the window.
    """

    kind = "RepeatVoteThrottled"

    def __init__(
        self,
        voter_id: UUID,
        content_id: UUID,
        current_count: int,
        limit: int,
        retry_not_before: datetime,
        window_hours: int = 72,
    ) -> None:
        """Initialize repeat vote throttled error.

        Args:
            voter_id: UUID of the throttled voter.
            content_id: UUID of the content.
            current_count: Votes counted inside the window.
            limit: Configured maximum votes per window.
            retry_not_before: When the next vote becomes available.
            window_hours: Size of the rolling window, used in the action hint.
        """
        self.voter_id = voter_id
        self.content_id = content_id
        self.current_count = current_count
        self.limit = limit
        self.retry_not_before = retry_not_before
        self.action = (
            f"This operation cannot be repeated within {window_hours} hours."
        )
        super().__init__(
            f"You are trying to rate the same content too many times: voter "
            f"{voter_id} has {current_count}/{limit} votes on content "
            f"{content_id}. Next vote allowed at {retry_not_before.isoformat()}."
        )
