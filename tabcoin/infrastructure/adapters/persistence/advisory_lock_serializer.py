"""PostgreSQL advisory-lock implementation of VoteSerializerProtocol.

Serializes votes by the same voter across every process sharing the
database. Within one process, requests for a key first queue on a
KeyedVoteSerializer, so a waiting request holds no pooled connection.
The request at the head of the queue opens one transaction and takes a
transaction-scoped advisory lock on the voter's key:

    BEGIN;
    SELECT set_config('lock_timeout', '<remaining admission time>ms', true);
    SELECT pg_advisory_xact_lock(hashtextextended('tabcoin:vote:<voter>', 0));
    -- fn() runs here on this same session (see session_binding)
    COMMIT;  -- appended events become durable and the lock is released

A lock wait that exceeds ``lock_timeout`` fails with SQLSTATE 55P03 and
is reported as TooManyConcurrentVotesError. A failed COMMIT leaves no
events behind and is reported as LedgerStorageError.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tabcoin.application.ports.time_authority import TimeAuthorityProtocol
from tabcoin.application.services.base import LoggingMixin
from tabcoin.application.services.keyed_vote_serializer import KeyedVoteSerializer
from tabcoin.application.services.time_authority_service import TimeAuthorityService
from tabcoin.domain.errors import LedgerStorageError, TooManyConcurrentVotesError
from tabcoin.infrastructure.adapters.persistence.session_binding import bind_session
from tabcoin.infrastructure.monitoring.metrics import get_metrics_collector

T = TypeVar("T")

LOCK_NOT_AVAILABLE_SQLSTATE = "55P03"
LOCK_KEY_PREFIX = "tabcoin:vote:"


def _is_lock_timeout(exc: DBAPIError) -> bool:
    """True when the driver error is PostgreSQL's lock_not_available."""
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(
            candidate, "pgcode", None
        )
        if code == LOCK_NOT_AVAILABLE_SQLSTATE:
            return True
    return False


class AdvisoryLockVoteSerializer(LoggingMixin):
    """Cross-process keyed exclusion using pg_advisory_xact_lock.

    Attributes:
        _session_factory: Session factory; each section uses one connection.
        _admission_timeout: Total seconds a request may wait for its key.
        _local: In-process queue per key, bounded like KeyedVoteSerializer.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        admission_timeout_seconds: float = 5.0,
        max_pending_per_key: int = 50,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._admission_timeout = admission_timeout_seconds
        self._time = time_authority or TimeAuthorityService()
        self._local = KeyedVoteSerializer(
            admission_timeout_seconds=admission_timeout_seconds,
            max_pending_per_key=max_pending_per_key,
            time_authority=self._time,
        )
        self._init_logger(component="ledger.serializer")

    async def run_exclusive(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` while holding the advisory lock for ``key``.

        ``fn`` runs with the locked session bound, so PostgresBalanceLedger
        calls made inside it share the lock's transaction.

        Raises:
            TooManyConcurrentVotesError: Too many local waiters for the key,
                or the key was not obtained within the admission timeout.
            LedgerStorageError: The lock transaction failed; nothing ``fn``
                appended was committed.
        """
        started = self._time.monotonic()
        return await self._local.run_exclusive(
            key, lambda: self._run_locked(key, fn, started)
        )

    async def _run_locked(
        self, key: Hashable, fn: Callable[[], Awaitable[T]], started: float
    ) -> T:
        remaining = self._admission_timeout - (self._time.monotonic() - started)
        timeout_ms = max(1, int(remaining * 1000))
        lock_key = f"{LOCK_KEY_PREFIX}{key}"

        try:
            async with self._session_factory() as session, session.begin():
                try:
                    await session.execute(
                        text("SELECT set_config('lock_timeout', :timeout, true)"),
                        {"timeout": f"{timeout_ms}ms"},
                    )
                    await session.execute(
                        text("SELECT pg_advisory_xact_lock(hashtextextended(:key, 0))"),
                        {"key": lock_key},
                    )
                except DBAPIError as exc:
                    if _is_lock_timeout(exc):
                        self._reject(key, self._time.monotonic() - started)
                    raise

                with bind_session(session):
                    return await fn()
        except SQLAlchemyError as exc:
            self._log_operation("run_exclusive", key=str(key)).error(
                "advisory_lock_failed", error=str(exc)
            )
            raise LedgerStorageError("run_exclusive", str(exc)) from exc

    def _reject(self, key: Hashable, waited: float) -> None:
        self._log_operation("run_exclusive", key=str(key)).warning(
            "vote_admission_rejected",
            reason="timeout",
            waited_seconds=round(waited, 3),
        )
        get_metrics_collector().increment_admission_rejections("timeout")
        raise TooManyConcurrentVotesError(
            voter_id=str(key), waited_seconds=waited, reason="timeout"
        )
