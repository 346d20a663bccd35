"""Vote admission errors for the per-voter exclusive section.

Only one balance-mutating vote per voter may run at a time. Requests that
cannot be admitted within the configured bound fail fast instead of
queueing without limit.
"""

from __future__ import annotations

from typing import Literal

from tabcoin.domain.exceptions import TabCoinError

AdmissionRejectReason = Literal["timeout", "queue_full"]


class TooManyConcurrentVotesError(TabCoinError):
    """Raised when a vote cannot enter the voter's exclusive section.

    This is a retryable error: no ledger state was touched.

    Attributes:
        voter_id: Contention key (the voter) that could not be admitted.
        waited_seconds: How long the request waited before giving up.
        reason: ``"timeout"`` when the admission wait elapsed,
            ``"queue_full"`` when too many requests were already waiting.
    """

    kind = "TooManyConcurrentVotes"
    action = "Try this operation again later."

    def __init__(
        self,
        voter_id: object,
        waited_seconds: float,
        reason: AdmissionRejectReason = "timeout",
    ) -> None:
        """Initialize too many concurrent votes error.

        Args:
            voter_id: Contention key that could not be admitted.
            waited_seconds: Time spent waiting for admission.
            reason: Why admission was refused.
        """
        self.voter_id = voter_id
        self.waited_seconds = waited_seconds
        self.reason = reason
        super().__init__(
            f"Too many votes at the same time for voter {voter_id} "
            f"({reason} after {waited_seconds:.3f}s)."
        )
