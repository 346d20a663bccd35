"""Application services for the TabCoin ledger."""

from tabcoin.application.services.balance_projector import BalanceProjector
from tabcoin.application.services.base import LoggingMixin
from tabcoin.application.services.keyed_vote_serializer import KeyedVoteSerializer
from tabcoin.application.services.time_authority_service import TimeAuthorityService
from tabcoin.application.services.vote_throttle_service import VoteThrottleService
from tabcoin.application.services.vote_transaction_service import (
    VoteTransactionService,
)

__all__: list[str] = [
    "BalanceProjector",
    "KeyedVoteSerializer",
    "LoggingMixin",
    "TimeAuthorityService",
    "VoteThrottleService",
    "VoteTransactionService",
]
