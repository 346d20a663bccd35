"""Application DTOs."""

from tabcoin.application.dtos.vote_request import (
    MAX_REASON_LENGTH,
    MIN_REASON_LENGTH,
    TabCoinVoteRequest,
)

__all__ = [
    "MAX_REASON_LENGTH",
    "MIN_REASON_LENGTH",
    "TabCoinVoteRequest",
]
