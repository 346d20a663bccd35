"""In-memory stub for BalanceLedgerProtocol.

Simulates the database ledger for unit tests and local runs:
- Atomic batch append (a batch is committed with no await in between)
- Optional I/O latency so concurrent callers actually interleave
- Failure injection for storage error paths
- Seeding helpers for initial balances

Thread-safety note: This stub is safe for concurrent coroutines on one
event loop, NOT for multiple threads.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from tabcoin.domain.errors import LedgerStorageError
from tabcoin.domain.models.balance_event import (
    BalanceEvent,
    BalanceType,
    OriginatorKey,
    OriginatorType,
    RecipientKey,
)
from tabcoin.domain.models.balance_projection import VoteTally


class BalanceLedgerStub:
    """In-memory stub implementation of BalanceLedgerProtocol.

    Attributes:
        _events: Committed events in append order.
        _io_delay: Seconds each operation sleeps before touching the store.
        _fail_next_append: Detail of the next injected append failure.
        _fail_reads: Whether reads raise LedgerStorageError.
    """

    def __init__(self, io_delay_seconds: float = 0.0) -> None:
        """Initialize empty stub.

        Args:
            io_delay_seconds: Simulated latency per operation. A non-zero
                value yields to the event loop, exposing races between
                concurrent votes that are not serialized.
        """
        self._events: list[BalanceEvent] = []
        self._io_delay = io_delay_seconds
        self._fail_next_append: str | None = None
        self._fail_reads = False

    async def _io(self) -> None:
        await asyncio.sleep(self._io_delay)

    def _check_reads(self, operation: str) -> None:
        if self._fail_reads:
            raise LedgerStorageError(operation, "simulated read failure")

    async def append_events(self, events: Sequence[BalanceEvent]) -> None:
        """Append a batch atomically.

        Raises:
            LedgerStorageError: If a failure was injected with
                fail_next_append(). Nothing from the batch is stored.
        """
        batch = list(events)
        await self._io()
        if self._fail_next_append is not None:
            detail, self._fail_next_append = self._fail_next_append, None
            raise LedgerStorageError("append_events", detail)
        self._events.extend(batch)

    async def sum_balance(self, recipient_id: UUID, balance_type: BalanceType) -> int:
        await self._io()
        self._check_reads("sum_balance")
        return sum(
            e.amount
            for e in self._events
            if e.recipient_id == recipient_id and e.balance_type == balance_type
        )

    async def events_since(
        self,
        key: RecipientKey | OriginatorKey,
        since: datetime,
    ) -> list[BalanceEvent]:
        await self._io()
        self._check_reads("events_since")
        if isinstance(key, RecipientKey):
            matching = [e for e in self._events if e.recipient_key == key]
        else:
            matching = [e for e in self._events if e.originator_key == key]
        return sorted(
            (e for e in matching if e.created_at > since),
            key=lambda e: e.created_at,
        )

    async def summarize_votes(
        self, recipient_id: UUID, balance_type: BalanceType
    ) -> VoteTally:
        await self._io()
        self._check_reads("summarize_votes")
        votes = [
            e.amount
            for e in self._events
            if e.recipient_id == recipient_id
            and e.balance_type == balance_type
            and e.is_vote_sourced
        ]
        return VoteTally(
            credit_count=sum(1 for a in votes if a > 0),
            credit_sum=sum(a for a in votes if a > 0),
            debit_sum=sum(a for a in votes if a < 0),
        )

    async def get_transaction(self, transaction_id: UUID) -> list[BalanceEvent]:
        await self._io()
        self._check_reads("get_transaction")
        return [e for e in self._events if e.transaction_id == transaction_id]

    # Test helpers

    def seed(
        self,
        recipient_id: UUID,
        balance_type: BalanceType,
        amount: int,
        created_at: datetime | None = None,
        originator_type: OriginatorType = OriginatorType.SYSTEM,
        originator_id: str = "seed",
    ) -> BalanceEvent:
        """Insert a non-vote event directly (initial balances, rewards)."""
        event = BalanceEvent(
            balance_type=balance_type,
            recipient_id=recipient_id,
            amount=amount,
            originator_type=originator_type,
            originator_id=originator_id,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self._events.append(event)
        return event

    def grant_tabcoins(
        self, user_id: UUID, amount: int, created_at: datetime | None = None
    ) -> BalanceEvent:
        """Seed a user's TabCoin balance."""
        return self.seed(
            user_id,
            BalanceType.USER_TABCOIN,
            amount,
            created_at=created_at,
            originator_type=OriginatorType.USER,
            originator_id=str(user_id),
        )

    def fail_next_append(self, detail: str = "simulated commit failure") -> None:
        """Make the next append_events call raise LedgerStorageError."""
        self._fail_next_append = detail

    def set_fail_reads(self, fail: bool) -> None:
        self._fail_reads = fail

    def all_events(self) -> list[BalanceEvent]:
        return list(self._events)

    def event_count(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._fail_next_append = None
        self._fail_reads = False
