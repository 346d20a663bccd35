"""Time Authority Protocol - interface for consistent timestamp provisioning.

Services that need timestamps inject a TimeAuthorityProtocol implementation
instead of calling datetime.now() directly. The ledger's ordering key and
the throttle window both depend on it, and tests replace it with
FakeTimeAuthority for deterministic window arithmetic.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.now()  # NOT datetime.now()
                ...
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time (timezone-aware)."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Note:
            Use this for measuring elapsed time, not for timestamps.
            The reference point is arbitrary - only differences are meaningful.
        """
        ...
