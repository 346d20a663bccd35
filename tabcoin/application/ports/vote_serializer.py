"""Vote Serializer Port - keyed mutual exclusion for balance mutations.

Guarantees at most one in-flight balance-mutating section per key (the
voter). Implementations:
- KeyedVoteSerializer: in-process asyncio lock table
- AdvisoryLockVoteSerializer: PostgreSQL advisory locks (cross-process)

Developer Golden Rules:
1. ONE AT A TIME - fn never runs concurrently with another fn of the same key
2. BOUNDED WAIT - admission gives up with TooManyConcurrentVotesError
3. NO LEAKS - the key is released whether fn returns or raises
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class VoteSerializerProtocol(Protocol):
    """Protocol for running a coroutine exclusively per key."""

    async def run_exclusive(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` while holding the exclusive section for ``key``.

        Args:
            key: Contention key (the voter id).
            fn: Zero-argument coroutine function to run exclusively.

        Returns:
            Whatever ``fn`` returns.

        Raises:
            TooManyConcurrentVotesError: Admission bound exceeded; fn not run.
        """
        ...
