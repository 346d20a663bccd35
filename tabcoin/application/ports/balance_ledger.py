"""Balance Ledger Port - append-only store of signed balance events.

The ledger is the only shared mutable resource of the system and the
only source of truth for balances. Adapters:
- BalanceLedgerStub (in-memory, tests and local runs)
- PostgresBalanceLedger (SQLAlchemy async, production)

Developer Golden Rules:
1. ALL OR NOTHING - append_events commits every event of a batch or none
2. NO PARTIAL READS - readers never observe half of a batch
3. ZERO NOT ERROR - an account without history has balance 0
4. FAIL LOUD - storage problems surface as LedgerStorageError
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from tabcoin.domain.models.balance_event import (
    BalanceEvent,
    BalanceType,
    OriginatorKey,
    RecipientKey,
)
from tabcoin.domain.models.balance_projection import VoteTally


@runtime_checkable
class BalanceLedgerProtocol(Protocol):
    """Protocol for the append-only balance ledger.

    Usage:
        await ledger.append_events(transaction.build_events(created_at=now))
        balance = await ledger.sum_balance(voter_id, BalanceType.USER_TABCOIN)
    """

    async def append_events(self, events: Sequence[BalanceEvent]) -> None:
        """Atomically append an ordered batch of events.

        Args:
            events: Events to append, in write order.

        Raises:
            LedgerStorageError: The batch could not be durably committed.
                Nothing from the batch is visible afterwards.
        """
        ...

    async def sum_balance(self, recipient_id: UUID, balance_type: BalanceType) -> int:
        """Return the signed sum of amounts for one account (0 if empty).

        Raises:
            LedgerStorageError: The ledger could not be read.
        """
        ...

    async def events_since(
        self,
        key: RecipientKey | OriginatorKey,
        since: datetime,
    ) -> list[BalanceEvent]:
        """Return events for a key created strictly after ``since``.

        Args:
            key: Account key or originator key.
            since: Exclusive lower bound on created_at.

        Returns:
            Matching events ordered by created_at ascending.

        Raises:
            LedgerStorageError: The ledger could not be read.
        """
        ...

    async def summarize_votes(
        self, recipient_id: UUID, balance_type: BalanceType
    ) -> VoteTally:
        """Return credit count and credit/debit sums of vote-sourced events.

        Raises:
            LedgerStorageError: The ledger could not be read.
        """
        ...

    async def get_transaction(self, transaction_id: UUID) -> list[BalanceEvent]:
        """Return the linked events of one vote transaction, in write order.

        Raises:
            LedgerStorageError: The ledger could not be read.
        """
        ...
