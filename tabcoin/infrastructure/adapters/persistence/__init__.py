"""PostgreSQL persistence adapters."""

from tabcoin.infrastructure.adapters.persistence.advisory_lock_serializer import (
    AdvisoryLockVoteSerializer,
)
from tabcoin.infrastructure.adapters.persistence.balance_ledger_postgres import (
    PostgresBalanceLedger,
)

__all__: list[str] = [
    "AdvisoryLockVoteSerializer",
    "PostgresBalanceLedger",
]
