"""Domain errors for the TabCoin ledger.

Every vote attempt ends in exactly one outcome: a projection, or one of
these errors. All exceptions inherit from TabCoinError.
"""

from tabcoin.domain.errors.balance import (
    InsufficientFundsError,
    MissingDebitReasonError,
)
from tabcoin.domain.errors.content import ContentNotFoundError, VoteNotAuthorizedError
from tabcoin.domain.errors.ledger_storage import LedgerStorageError
from tabcoin.domain.errors.vote_concurrency import TooManyConcurrentVotesError
from tabcoin.domain.errors.vote_throttle import RepeatVoteThrottledError

__all__: list[str] = [
    "ContentNotFoundError",
    "InsufficientFundsError",
    "LedgerStorageError",
    "MissingDebitReasonError",
    "RepeatVoteThrottledError",
    "TooManyConcurrentVotesError",
    "VoteNotAuthorizedError",
]
