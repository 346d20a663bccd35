"""Application ports (hexagonal architecture interfaces)."""

from tabcoin.application.ports.authorization import (
    UPDATE_CONTENT_ACTION,
    AuthorizationProtocol,
)
from tabcoin.application.ports.balance_ledger import BalanceLedgerProtocol
from tabcoin.application.ports.content_directory import ContentDirectoryProtocol
from tabcoin.application.ports.time_authority import TimeAuthorityProtocol
from tabcoin.application.ports.vote_serializer import VoteSerializerProtocol
from tabcoin.application.ports.vote_throttle import (
    ThrottleDecision,
    VoteThrottleProtocol,
)

__all__: list[str] = [
    "UPDATE_CONTENT_ACTION",
    "AuthorizationProtocol",
    "BalanceLedgerProtocol",
    "ContentDirectoryProtocol",
    "ThrottleDecision",
    "TimeAuthorityProtocol",
    "VoteSerializerProtocol",
    "VoteThrottleProtocol",
]
