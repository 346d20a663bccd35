"""Ledger storage errors.

Raised by ledger adapters when a read or an append cannot be completed.
An append that raises this error has committed nothing.
"""

from tabcoin.domain.exceptions import TabCoinError


class LedgerStorageError(TabCoinError):
    """Raised when the balance ledger cannot durably complete an operation.

    Attributes:
        operation: Ledger operation that failed (e.g. ``"append_events"``).
    """

    kind = "StorageFailure"
    action = "Try this operation again later."

    def __init__(self, operation: str, detail: str = "") -> None:
        """Initialize ledger storage error.

        Args:
            operation: Ledger operation that failed.
            detail: Optional description of the underlying failure.
        """
        self.operation = operation
        message = f"Balance ledger operation '{operation}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
