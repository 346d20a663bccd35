"""PostgreSQL implementation of BalanceLedgerProtocol.

Events live in the append-only ``balance_events`` table (see
migrations/001_create_balance_events.sql). Every batch is inserted in a
single transaction; a failed commit leaves no rows behind.

Inside an advisory-locked vote section (see session_binding) every query
runs on the locked session, and appended events commit when the section
releases its lock.

SQL Pattern:
    -- Balance
    SELECT COALESCE(SUM(amount), 0) FROM balance_events
    WHERE recipient_id = $1 AND balance_type = $2

    -- Vote tally
    SELECT COUNT(*) FILTER (WHERE amount > 0), ... FROM balance_events
    WHERE recipient_id = $1 AND balance_type = $2 AND originator_type = 'vote'
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from tabcoin.domain.errors import LedgerStorageError
from tabcoin.domain.models.balance_event import (
    BalanceEvent,
    BalanceType,
    OriginatorKey,
    OriginatorType,
    RecipientKey,
)
from tabcoin.domain.models.balance_projection import VoteTally
from tabcoin.infrastructure.adapters.persistence.session_binding import (
    get_bound_session,
)

logger = get_logger(__name__)

_EVENT_COLUMNS = """
    id, balance_type, recipient_id, amount, originator_type,
    originator_id, transaction_id, reason, created_at
"""


def _row_to_event(row: Any) -> BalanceEvent:
    return BalanceEvent(
        event_id=row["id"],
        balance_type=BalanceType(row["balance_type"]),
        recipient_id=row["recipient_id"],
        amount=row["amount"],
        originator_type=OriginatorType(row["originator_type"]),
        originator_id=row["originator_id"],
        transaction_id=row["transaction_id"],
        reason=row["reason"],
        created_at=row["created_at"],
    )


class PostgresBalanceLedger:
    """Balance ledger backed by PostgreSQL via SQLAlchemy async sessions.

    Attributes:
        _session_factory: SQLAlchemy async session factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append_events(self, events: Sequence[BalanceEvent]) -> None:
        """Insert all events in one transaction.

        Raises:
            LedgerStorageError: The transaction did not commit.
        """
        if not events:
            return
        params = [
            {
                "id": e.event_id,
                "balance_type": e.balance_type.value,
                "recipient_id": e.recipient_id,
                "amount": e.amount,
                "originator_type": e.originator_type.value,
                "originator_id": e.originator_id,
                "transaction_id": e.transaction_id,
                "reason": e.reason,
                "created_at": e.created_at,
            }
            for e in events
        ]
        insert = text(f"""
            INSERT INTO balance_events ({_EVENT_COLUMNS})
            VALUES (
                :id, :balance_type, :recipient_id, :amount,
                :originator_type, :originator_id, :transaction_id,
                :reason, :created_at
            )
        """)
        try:
            bound = get_bound_session()
            if bound is not None:
                # Commits with the enclosing lock transaction.
                await bound.execute(insert, params)
            else:
                async with self._session_factory() as session, session.begin():
                    await session.execute(insert, params)
        except SQLAlchemyError as exc:
            logger.error(
                "balance_events_append_failed",
                event_count=len(params),
                transaction_id=str(events[0].transaction_id),
                error=str(exc),
            )
            raise LedgerStorageError("append_events", str(exc)) from exc

    async def sum_balance(self, recipient_id: UUID, balance_type: BalanceType) -> int:
        result = await self._execute(
            "sum_balance",
            """
                SELECT COALESCE(SUM(amount), 0)
                FROM balance_events
                WHERE recipient_id = :recipient_id
                  AND balance_type = :balance_type
            """,
            {"recipient_id": recipient_id, "balance_type": balance_type.value},
        )
        return int(result[0][0])

    async def events_since(
        self,
        key: RecipientKey | OriginatorKey,
        since: datetime,
    ) -> list[BalanceEvent]:
        if isinstance(key, RecipientKey):
            where = "recipient_id = :a AND balance_type = :b"
            params: dict[str, Any] = {
                "a": key.recipient_id,
                "b": key.balance_type.value,
            }
        else:
            where = "originator_type = :a AND originator_id = :b"
            params = {"a": key.originator_type.value, "b": key.originator_id}
        params["since"] = since

        rows = await self._execute(
            "events_since",
            f"""
                SELECT {_EVENT_COLUMNS}
                FROM balance_events
                WHERE {where} AND created_at > :since
                ORDER BY created_at, sequence
            """,
            params,
            mappings=True,
        )
        return [_row_to_event(row) for row in rows]

    async def summarize_votes(
        self, recipient_id: UUID, balance_type: BalanceType
    ) -> VoteTally:
        rows = await self._execute(
            "summarize_votes",
            """
                SELECT
                    COUNT(*) FILTER (WHERE amount > 0) AS credit_count,
                    COALESCE(SUM(amount) FILTER (WHERE amount > 0), 0) AS credit_sum,
                    COALESCE(SUM(amount) FILTER (WHERE amount < 0), 0) AS debit_sum
                FROM balance_events
                WHERE recipient_id = :recipient_id
                  AND balance_type = :balance_type
                  AND originator_type = 'vote'
            """,
            {"recipient_id": recipient_id, "balance_type": balance_type.value},
            mappings=True,
        )
        row = rows[0]
        return VoteTally(
            credit_count=int(row["credit_count"]),
            credit_sum=int(row["credit_sum"]),
            debit_sum=int(row["debit_sum"]),
        )

    async def get_transaction(self, transaction_id: UUID) -> list[BalanceEvent]:
        rows = await self._execute(
            "get_transaction",
            f"""
                SELECT {_EVENT_COLUMNS}
                FROM balance_events
                WHERE transaction_id = :transaction_id
                ORDER BY sequence
            """,
            {"transaction_id": transaction_id},
            mappings=True,
        )
        return [_row_to_event(row) for row in rows]

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        bound = get_bound_session()
        if bound is not None:
            yield bound
            return
        async with self._session_factory() as session:
            yield session

    async def _execute(
        self,
        operation: str,
        sql: str,
        params: dict[str, Any],
        mappings: bool = False,
    ) -> list[Any]:
        try:
            async with self._session() as session:
                result = await session.execute(text(sql), params)
                if mappings:
                    return list(result.mappings().all())
                return list(result.all())
        except SQLAlchemyError as exc:
            logger.error("balance_events_read_failed", operation=operation, error=str(exc))
            raise LedgerStorageError(operation, str(exc)) from exc
