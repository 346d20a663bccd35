"""Vote transaction domain model.

A vote transaction is not persisted as its own entity. It is the logical
grouping of the three linked balance events one accepted vote produces:

1. cost:    user:tabcoin     voter    -cost
2. effect:  content:tabcoin  content  +effect (credit) / -effect (debit)
3. reward:  user:tabcash     voter    +reward

The three events share one transaction_id and one created_at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from uuid6 import uuid7

from tabcoin.domain.models.balance_event import (
    BalanceEvent,
    BalanceType,
    OriginatorType,
    vote_originator_id,
)


class TransactionType(str, Enum):
    """Direction of a vote."""

    CREDIT = "credit"
    DEBIT = "debit"

    @property
    def sign(self) -> int:
        return 1 if self is TransactionType.CREDIT else -1


@dataclass(frozen=True)
class VoteTransaction:
    """One vote by a voter on a content item.

    Attributes:
        voter_id: User casting the vote (pays the cost, earns the reward).
        content_id: Content being voted on.
        transaction_type: Credit or debit.
        content_owner_id: Owner of the content, when known.
        reason: Justification, required for debit votes upstream.
        transaction_id: Links the produced events together.
    """

    voter_id: UUID
    content_id: UUID
    transaction_type: TransactionType
    content_owner_id: UUID | None = None
    reason: str | None = None
    transaction_id: UUID = field(default_factory=uuid7)

    def build_events(
        self,
        created_at: datetime,
        cost: int = 2,
        reward: int = 1,
        content_effect: int = 1,
    ) -> list[BalanceEvent]:
        """Build the linked events realizing this vote, in write order.

        Args:
            created_at: Shared timestamp for all three events.
            cost: TabCoins debited from the voter.
            reward: TabCash credited to the voter.
            content_effect: Magnitude of the change on the content.

        Returns:
            [cost event, content effect event, reward event].
        """
        content_ref = str(self.content_id)
        return [
            BalanceEvent(
                balance_type=BalanceType.USER_TABCOIN,
                recipient_id=self.voter_id,
                amount=-cost,
                originator_type=OriginatorType.CONTENT,
                originator_id=content_ref,
                created_at=created_at,
                transaction_id=self.transaction_id,
            ),
            BalanceEvent(
                balance_type=BalanceType.CONTENT_TABCOIN,
                recipient_id=self.content_id,
                amount=self.transaction_type.sign * content_effect,
                originator_type=OriginatorType.VOTE,
                originator_id=vote_originator_id(self.voter_id, self.content_id),
                created_at=created_at,
                transaction_id=self.transaction_id,
                reason=self.reason
                if self.transaction_type is TransactionType.DEBIT
                else None,
            ),
            BalanceEvent(
                balance_type=BalanceType.USER_TABCASH,
                recipient_id=self.voter_id,
                amount=reward,
                originator_type=OriginatorType.CONTENT,
                originator_id=content_ref,
                created_at=created_at,
                transaction_id=self.transaction_id,
            ),
        ]
