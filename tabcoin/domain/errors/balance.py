"""Balance errors raised while a vote is being applied.

A vote is paid for with TabCoins. When the voter cannot cover the fixed
vote cost the attempt terminates before anything is written.
"""

from __future__ import annotations

from uuid import UUID

from tabcoin.domain.exceptions import TabCoinError


class InsufficientFundsError(TabCoinError):
    """Raised when the voter's TabCoin balance is below the vote cost.

    The balance is read inside the voter's exclusive section, so the value
    reported here is the one the rejected attempt actually observed.

    Attributes:
        voter_id: UUID of the voter.
        balance: TabCoin balance observed at check time.
        required: TabCoins required to cast the vote.
    """

    kind = "InsufficientFunds"
    action = "Earn more TabCoins before voting again."

    def __init__(self, voter_id: UUID, balance: int, required: int) -> None:
        """Initialize insufficient funds error.

        Args:
            voter_id: UUID of the voter.
            balance: TabCoin balance observed at check time.
            required: TabCoins required to cast the vote.
        """
        self.voter_id = voter_id
        self.balance = balance
        self.required = required
        self.action = (
            f"You need at least {required} TabCoins to perform this action."
        )
        super().__init__(
            f"Could not add TabCoins to this content: voter {voter_id} has "
            f"{balance} TabCoins, {required} required."
        )


class MissingDebitReasonError(TabCoinError):
    """Raised when a debit vote arrives without a justification.

    Attributes:
        voter_id: UUID of the voter.
        content_id: UUID of the content being debited.
    """

    kind = "MissingDebitReason"
    action = "Provide a reason for debit transactions."

    def __init__(self, voter_id: UUID, content_id: UUID) -> None:
        self.voter_id = voter_id
        self.content_id = content_id
        super().__init__(
            f"A reason is required for debit transactions "
            f"(voter {voter_id}, content {content_id})."
        )
