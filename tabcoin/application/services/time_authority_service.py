"""Time Authority Service - system clock implementation of TimeAuthorityProtocol.

All ledger timestamps are UTC and timezone-aware. Elapsed time (admission
wait) is measured on the monotonic clock, never by subtracting wall-clock
timestamps.
"""

import time
from datetime import datetime, timezone

from tabcoin.application.ports.time_authority import TimeAuthorityProtocol


class TimeAuthorityService(TimeAuthorityProtocol):
    """Wall-clock time authority backed by the system clock.

    Example:
        >>> service = TimeAuthorityService()
        >>> service.now().tzinfo is not None
        True
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
