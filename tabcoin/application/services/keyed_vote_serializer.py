"""Keyed Vote Serializer - in-process exclusive sections per voter.

Each key gets its own asyncio.Lock, so votes by different voters run
concurrently while votes by the same voter run strictly one at a time.
Admission is bounded twice:

- waiting for the key longer than ``admission_timeout_seconds`` fails
  with TooManyConcurrentVotesError(reason="timeout");
- arriving while ``max_pending_per_key`` requests already wait for the
  key fails immediately with TooManyConcurrentVotesError(reason="queue_full").

Lock slots for idle keys are evicted as soon as nothing references them.
This serializer only orders work inside one event loop; deployments with
several processes use AdvisoryLockVoteSerializer instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass, field
from typing import TypeVar

from tabcoin.application.ports.time_authority import TimeAuthorityProtocol
from tabcoin.application.services.base import LoggingMixin
from tabcoin.application.services.time_authority_service import TimeAuthorityService
from tabcoin.domain.errors.vote_concurrency import (
    AdmissionRejectReason,
    TooManyConcurrentVotesError,
)
from tabcoin.infrastructure.monitoring.metrics import get_metrics_collector

T = TypeVar("T")

DEFAULT_ADMISSION_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_PENDING_PER_KEY = 50


@dataclass
class _KeySlot:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    waiting: int = 0
    refs: int = 0


class KeyedVoteSerializer(LoggingMixin):
    """Per-key mutual exclusion with bounded admission.

    Attributes:
        _admission_timeout: Seconds a request may wait for its key.
        _max_pending: Maximum number of requests waiting per key.
        _slots: Live lock slots by key.
    """

    def __init__(
        self,
        admission_timeout_seconds: float = DEFAULT_ADMISSION_TIMEOUT_SECONDS,
        max_pending_per_key: int = DEFAULT_MAX_PENDING_PER_KEY,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        """Initialize the serializer.

        Args:
            admission_timeout_seconds: Maximum wait for the key (default: 5.0).
            max_pending_per_key: Maximum waiters per key (default: 50).
            time_authority: Clock used to measure admission wait.
        """
        if admission_timeout_seconds <= 0:
            raise ValueError(
                f"admission_timeout_seconds must be > 0, got {admission_timeout_seconds}"
            )
        if max_pending_per_key < 1:
            raise ValueError(
                f"max_pending_per_key must be >= 1, got {max_pending_per_key}"
            )
        self._admission_timeout = admission_timeout_seconds
        self._max_pending = max_pending_per_key
        self._time = time_authority or TimeAuthorityService()
        self._slots: dict[Hashable, _KeySlot] = {}
        self._init_logger(component="ledger.serializer")

    def active_keys(self) -> int:
        """Number of keys currently holding or waiting for a slot."""
        return len(self._slots)

    def waiting_count(self, key: Hashable) -> int:
        slot = self._slots.get(key)
        return slot.waiting if slot else 0

    async def run_exclusive(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` while holding the exclusive section for ``key``.

        Raises:
            TooManyConcurrentVotesError: The key's queue is full or the
                admission timeout elapsed. ``fn`` has not run.
        """
        slot = self._slots.get(key)
        if slot is None:
            slot = self._slots[key] = _KeySlot()

        if slot.waiting >= self._max_pending:
            self._reject(key, 0.0, "queue_full")

        slot.refs += 1
        slot.waiting += 1
        started = self._time.monotonic()
        try:
            try:
                await asyncio.wait_for(
                    slot.lock.acquire(), timeout=self._admission_timeout
                )
            except asyncio.TimeoutError:
                self._reject(key, self._time.monotonic() - started, "timeout")
            finally:
                slot.waiting -= 1

            get_metrics_collector().observe_admission_wait(
                self._time.monotonic() - started
            )
            try:
                return await fn()
            finally:
                slot.lock.release()
        finally:
            slot.refs -= 1
            if slot.refs == 0 and self._slots.get(key) is slot:
                del self._slots[key]

    def _reject(
        self, key: Hashable, waited: float, reason: AdmissionRejectReason
    ) -> None:
        self._log_operation("run_exclusive", key=str(key)).warning(
            "vote_admission_rejected",
            reason=reason,
            waited_seconds=round(waited, 3),
            max_pending=self._max_pending,
        )
        get_metrics_collector().increment_admission_rejections(reason)
        raise TooManyConcurrentVotesError(
            voter_id=str(key), waited_seconds=waited, reason=reason
        )
