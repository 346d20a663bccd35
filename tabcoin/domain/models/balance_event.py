"""Balance event domain model.

This module defines the only persisted entity of the ledger:
- BalanceType: which logical account an event affects
- OriginatorType: what kind of entity caused an event
- BalanceEvent: immutable, signed ledger entry
- RecipientKey / OriginatorKey: lookup keys for event history queries

Developer Golden Rules:
1. APPEND ONLY - Events are never updated or deleted; corrections are new events
2. SUM IS TRUTH - A balance is exactly the sum of its events' amounts
3. ONE VOTE KEY PER VOTE - Only the content-effect event of a vote carries
   the (voter, content) originator, so counting those events counts votes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from uuid6 import uuid7


class BalanceType(str, Enum):
    """Logical account an event belongs to."""

    USER_TABCOIN = "user:tabcoin"
    USER_TABCASH = "user:tabcash"
    CONTENT_TABCOIN = "content:tabcoin"
    CONTENT_TABCASH = "content:tabcash"


class OriginatorType(str, Enum):
    """Kind of entity that caused a balance event.

    VOTE events are the content-effect events of vote transactions; their
    originator_id encodes the (voter, content) pair. CONTENT is used for
    the cost and reward events of a vote and for content-level grants.
    """

    VOTE = "vote"
    CONTENT = "content"
    USER = "user"
    SYSTEM = "system"


def vote_originator_id(voter_id: UUID, content_id: UUID) -> str:
    """Encode a (voter, content) pair as an originator id."""
    return f"{voter_id}:{content_id}"


@dataclass(frozen=True)
class RecipientKey:
    """History key for one account: (recipient, balance type)."""

    recipient_id: UUID
    balance_type: BalanceType


@dataclass(frozen=True)
class OriginatorKey:
    """History key for everything one originator caused."""

    originator_type: OriginatorType
    originator_id: str

    @classmethod
    def for_vote(cls, voter_id: UUID, content_id: UUID) -> OriginatorKey:
        """Key matching the votes of one voter on one content."""
        return cls(
            originator_type=OriginatorType.VOTE,
            originator_id=vote_originator_id(voter_id, content_id),
        )


@dataclass(frozen=True, eq=True)
class BalanceEvent:
    """Immutable signed entry in the balance ledger.

    Attributes:
        event_id: Unique identifier (UUIDv7, time ordered).
        balance_type: Account the event affects.
        recipient_id: User or content the event applies to.
        amount: Signed, non-zero change to the recipient's balance.
        originator_type: Kind of entity that caused the event.
        originator_id: Identifier of that entity.
        created_at: When the event was recorded (UTC, timezone-aware).
        transaction_id: Shared by the linked events of one vote, if any.
        reason: Debit justification, carried on the content-effect event.
    """

    balance_type: BalanceType
    recipient_id: UUID
    amount: int
    originator_type: OriginatorType
    originator_id: str
    created_at: datetime
    event_id: UUID = field(default_factory=uuid7)
    transaction_id: UUID | None = field(default=None)
    reason: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate event fields after initialization.

        Raises:
            ValueError: If any field validation fails.
        """
        if self.amount == 0:
            raise ValueError("amount must be non-zero")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (UTC)")
        if not self.originator_id:
            raise ValueError("originator_id must not be empty")

    @property
    def is_vote_sourced(self) -> bool:
        """True for the content-effect event of a vote transaction."""
        return self.originator_type == OriginatorType.VOTE

    @property
    def recipient_key(self) -> RecipientKey:
        return RecipientKey(self.recipient_id, self.balance_type)

    @property
    def originator_key(self) -> OriginatorKey:
        return OriginatorKey(self.originator_type, self.originator_id)

    def to_dict(self) -> dict[str, object]:
        """Serialize for persistence and structured logs."""
        return {
            "event_id": str(self.event_id),
            "balance_type": self.balance_type.value,
            "recipient_id": str(self.recipient_id),
            "amount": self.amount,
            "originator_type": self.originator_type.value,
            "originator_id": self.originator_id,
            "created_at": self.created_at.isoformat(),
            "transaction_id": str(self.transaction_id)
            if self.transaction_id
            else None,
            "reason": self.reason,
        }
