"""Domain models for the TabCoin ledger."""

from tabcoin.domain.models.balance_event import (
    BalanceEvent,
    BalanceType,
    OriginatorKey,
    OriginatorType,
    RecipientKey,
    vote_originator_id,
)
from tabcoin.domain.models.balance_projection import (
    ContentTabCoins,
    UserBalance,
    VoteTally,
)
from tabcoin.domain.models.vote_transaction import TransactionType, VoteTransaction

__all__: list[str] = [
    "BalanceEvent",
    "BalanceType",
    "ContentTabCoins",
    "OriginatorKey",
    "OriginatorType",
    "RecipientKey",
    "TransactionType",
    "UserBalance",
    "VoteTally",
    "VoteTransaction",
    "vote_originator_id",
]
