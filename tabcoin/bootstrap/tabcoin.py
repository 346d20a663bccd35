"""Bootstrap wiring for the TabCoin vote dependencies.

Environment Variables:
- TABCOIN_LEDGER_BACKEND: "memory" (default) or "postgres"

With the postgres backend the ledger is PostgresBalanceLedger and votes
are serialized with PostgreSQL advisory locks, so several processes can
share one database. The memory backend uses in-process stubs and is
only meant for tests and local runs.
"""

from __future__ import annotations

import os

from tabcoin.application.ports.authorization import AuthorizationProtocol
from tabcoin.application.ports.balance_ledger import BalanceLedgerProtocol
from tabcoin.application.ports.content_directory import ContentDirectoryProtocol
from tabcoin.application.ports.time_authority import TimeAuthorityProtocol
from tabcoin.application.ports.vote_serializer import VoteSerializerProtocol
from tabcoin.application.services.balance_projector import BalanceProjector
from tabcoin.application.services.keyed_vote_serializer import KeyedVoteSerializer
from tabcoin.application.services.time_authority_service import TimeAuthorityService
from tabcoin.application.services.vote_transaction_service import (
    VoteTransactionService,
)
from tabcoin.bootstrap.database import get_session_factory
from tabcoin.config.vote_economy_config import VoteEconomyConfig
from tabcoin.infrastructure.adapters.persistence import (
    AdvisoryLockVoteSerializer,
    PostgresBalanceLedger,
)
from tabcoin.infrastructure.stubs.balance_ledger_stub import BalanceLedgerStub
from tabcoin.infrastructure.stubs.content_directory_stub import ContentDirectoryStub

LEDGER_BACKEND_ENV = "TABCOIN_LEDGER_BACKEND"
LEDGER_BACKENDS = ("memory", "postgres")

_config: VoteEconomyConfig | None = None
_time_authority: TimeAuthorityProtocol | None = None
_ledger: BalanceLedgerProtocol | None = None
_serializer: VoteSerializerProtocol | None = None
_content_directory: ContentDirectoryProtocol | None = None
_authorizer: AuthorizationProtocol | None = None
_projector: BalanceProjector | None = None
_vote_service: VoteTransactionService | None = None


def get_ledger_backend() -> str:
    """Get the configured ledger backend name.

    Raises:
        ValueError: If TABCOIN_LEDGER_BACKEND holds an unknown value.
    """
    backend = os.environ.get(LEDGER_BACKEND_ENV, "memory").strip().lower()
    if backend not in LEDGER_BACKENDS:
        raise ValueError(
            f"{LEDGER_BACKEND_ENV} must be one of {', '.join(LEDGER_BACKENDS)}, "
            f"got {backend!r}"
        )
    return backend


def get_vote_economy_config() -> VoteEconomyConfig:
    """Get vote economy config (loaded from environment once)."""
    global _config
    if _config is None:
        _config = VoteEconomyConfig.from_environment()
    return _config


def get_time_authority() -> TimeAuthorityProtocol:
    global _time_authority
    if _time_authority is None:
        _time_authority = TimeAuthorityService()
    return _time_authority


def get_balance_ledger() -> BalanceLedgerProtocol:
    """Get balance ledger instance for the configured backend."""
    global _ledger
    if _ledger is None:
        if get_ledger_backend() == "postgres":
            _ledger = PostgresBalanceLedger(get_session_factory())
        else:
            _ledger = BalanceLedgerStub()
    return _ledger


def get_vote_serializer() -> VoteSerializerProtocol:
    """Get the per-voter serializer matching the ledger backend."""
    global _serializer
    if _serializer is None:
        config = get_vote_economy_config()
        if get_ledger_backend() == "postgres":
            _serializer = AdvisoryLockVoteSerializer(
                get_session_factory(),
                admission_timeout_seconds=config.admission_timeout_seconds,
                max_pending_per_key=config.max_pending_per_voter,
                time_authority=get_time_authority(),
            )
        else:
            _serializer = KeyedVoteSerializer(
                admission_timeout_seconds=config.admission_timeout_seconds,
                max_pending_per_key=config.max_pending_per_voter,
                time_authority=get_time_authority(),
            )
    return _serializer


def get_content_directory() -> ContentDirectoryProtocol:
    """Get content directory instance."""
    global _content_directory
    if _content_directory is None:
        _content_directory = ContentDirectoryStub()
    return _content_directory


def get_authorizer() -> AuthorizationProtocol | None:
    """Get the vote authorizer, if one was installed."""
    return _authorizer


def get_balance_projector() -> BalanceProjector:
    global _projector
    if _projector is None:
        _projector = BalanceProjector(get_balance_ledger(), get_content_directory())
    return _projector


def get_vote_transaction_service() -> VoteTransactionService:
    """Get the vote transaction service wired with all dependencies."""
    global _vote_service
    if _vote_service is None:
        _vote_service = VoteTransactionService(
            ledger=get_balance_ledger(),
            serializer=get_vote_serializer(),
            time_authority=get_time_authority(),
            config=get_vote_economy_config(),
            projector=get_balance_projector(),
            content_directory=get_content_directory(),
            authorizer=get_authorizer(),
        )
    return _vote_service


def reset_tabcoin_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config
    global _time_authority
    global _ledger
    global _serializer
    global _content_directory
    global _authorizer
    global _projector
    global _vote_service

    _config = None
    _time_authority = None
    _ledger = None
    _serializer = None
    _content_directory = None
    _authorizer = None
    _projector = None
    _vote_service = None


def set_balance_ledger(ledger: BalanceLedgerProtocol) -> None:
    """Set custom balance ledger for testing."""
    global _ledger
    _ledger = ledger


def set_content_directory(directory: ContentDirectoryProtocol) -> None:
    """Set custom content directory for testing."""
    global _content_directory
    _content_directory = directory


def set_authorizer(authorizer: AuthorizationProtocol | None) -> None:
    """Install an authorizer gating votes on "update:content"."""
    global _authorizer
    _authorizer = authorizer


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority for testing."""
    global _time_authority
    _time_authority = time_authority
