"""Task-local binding of the session that holds a voter's advisory lock.

AdvisoryLockVoteSerializer binds its locked session while the exclusive
section runs. PostgresBalanceLedger reads and appends on the bound session
instead of checking out another connection, so the section uses exactly
one connection and its events commit together with the lock release.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from sqlalchemy.ext.asyncio import AsyncSession

_bound_session: ContextVar[AsyncSession | None] = ContextVar(
    "tabcoin_bound_session", default=None
)


def get_bound_session() -> AsyncSession | None:
    """Session bound to the current task, if any."""
    return _bound_session.get()


@contextmanager
def bind_session(session: AsyncSession) -> Iterator[AsyncSession]:
    """Bind ``session`` to the current task for the duration of the block."""
    token = _bound_session.set(session)
    try:
        yield session
    finally:
        _bound_session.reset(token)
