"""Vote transaction service - the TabCoin vote orchestrator.

One call to ``vote_on_content`` takes a vote from request to a committed
set of ledger events and returns the content's updated TabCoins:

    request
      -> authorization (optional collaborator)
      -> debit reason check
      -> content owner lookup (optional collaborator)
      -> repeat-vote throttle pre-check
      -> voter's exclusive section
           -> throttle re-check
           -> funds check (projected voter TabCoins >= vote cost)
           -> atomic append of [cost, content effect, reward]
      -> content projection

Every attempt ends in exactly one outcome. Any failure leaves zero events
from the attempt in the ledger, and the core never retries.

Developer Golden Rules:
1. CHECK INSIDE THE SECTION - funds are read only after admission, so
   concurrent votes by one voter never spend the same TabCoins twice
2. ALL OR NOTHING - the three events of a vote are appended together
3. FAIL LOUD - every rejection is a typed TabCoinError, never a silent drop
"""

from __future__ import annotations

from uuid import UUID

from tabcoin.application.ports.authorization import (
    UPDATE_CONTENT_ACTION,
    AuthorizationProtocol,
)
from tabcoin.application.ports.balance_ledger import BalanceLedgerProtocol
from tabcoin.application.ports.content_directory import ContentDirectoryProtocol
from tabcoin.application.ports.time_authority import TimeAuthorityProtocol
from tabcoin.application.ports.vote_serializer import VoteSerializerProtocol
from tabcoin.application.services.balance_projector import BalanceProjector
from tabcoin.application.services.base import LoggingMixin
from tabcoin.application.services.vote_throttle_service import VoteThrottleService
from tabcoin.config.vote_economy_config import (
    DEFAULT_VOTE_ECONOMY_CONFIG,
    VoteEconomyConfig,
)
from tabcoin.domain.errors import (
    ContentNotFoundError,
    InsufficientFundsError,
    LedgerStorageError,
    MissingDebitReasonError,
    RepeatVoteThrottledError,
    TooManyConcurrentVotesError,
    VoteNotAuthorizedError,
)
from tabcoin.domain.models.balance_projection import ContentTabCoins
from tabcoin.domain.models.vote_transaction import TransactionType, VoteTransaction
from tabcoin.infrastructure.monitoring.metrics import get_metrics_collector


class VoteTransactionService(LoggingMixin):
    """Orchestrates TabCoin votes on content.

    Example:
        >>> service = VoteTransactionService(
        ...     ledger=ledger,
        ...     serializer=KeyedVoteSerializer(),
        ...     time_authority=TimeAuthorityService(),
        ... )
        >>> tabcoins = await service.vote_on_content(
        ...     voter_id=voter_id,
        ...     content_id=content_id,
        ...     transaction_type="credit",
        ... )
        >>> tabcoins.to_dict()
        {'tabcoins': 1, 'tabcoins_credit': 1, 'tabcoins_debit': 0}
    """

    def __init__(
        self,
        ledger: BalanceLedgerProtocol,
        serializer: VoteSerializerProtocol,
        time_authority: TimeAuthorityProtocol,
        config: VoteEconomyConfig = DEFAULT_VOTE_ECONOMY_CONFIG,
        throttle: VoteThrottleService | None = None,
        projector: BalanceProjector | None = None,
        content_directory: ContentDirectoryProtocol | None = None,
        authorizer: AuthorizationProtocol | None = None,
    ) -> None:
        """Initialize the vote transaction service.

        Args:
            ledger: Balance ledger (the only writer is this service).
            serializer: Keyed exclusive sections, keyed by voter.
            time_authority: Clock for event timestamps and throttle windows.
            config: Economy constants and admission bounds.
            throttle: Repeat-vote throttle (built from config if omitted).
            projector: Balance projections (built from ledger and
                content_directory if omitted).
            content_directory: Resolves content owners (optional).
            authorizer: Gates votes on the "update:content" feature (optional).
        """
        self._ledger = ledger
        self._serializer = serializer
        self._time = time_authority
        self._config = config
        self._content_directory = content_directory
        self._authorizer = authorizer
        self._throttle = throttle or VoteThrottleService(
            ledger,
            limit=config.repeat_vote_limit,
            window_hours=config.repeat_vote_window_hours,
        )
        self._projector = projector or BalanceProjector(ledger, content_directory)
        self._init_logger(component="ledger.vote")

    async def vote_on_content(
        self,
        voter_id: UUID,
        content_id: UUID,
        transaction_type: TransactionType | str,
        reason: str | None = None,
    ) -> ContentTabCoins:
        """Apply one vote by ``voter_id`` on ``content_id``.

        Args:
            voter_id: User casting the vote.
            content_id: Content being voted on.
            transaction_type: "credit" or "debit".
            reason: Justification, required for debit votes.

        Returns:
            The content's TabCoins after the vote committed.

        Raises:
            VoteNotAuthorizedError: Authorizer refused "update:content".
            MissingDebitReasonError: Debit vote without a reason.
            ContentNotFoundError: Content directory has no such content.
            RepeatVoteThrottledError: Repeat-vote limit reached.
            TooManyConcurrentVotesError: Voter's section could not be entered.
            InsufficientFundsError: Voter's TabCoins below the vote cost.
            LedgerStorageError: The ledger could not commit or be read.
        """
        tx_type = TransactionType(transaction_type)
        log = self._log_operation(
            "vote_on_content",
            voter_id=str(voter_id),
            content_id=str(content_id),
            transaction_type=tx_type.value,
        )
        log.info("vote_started")

        if self._authorizer is not None:
            allowed = await self._authorizer.can_perform(
                voter_id, UPDATE_CONTENT_ACTION, content_id
            )
            if not allowed:
                log.warning("vote_not_authorized", action=UPDATE_CONTENT_ACTION)
                raise VoteNotAuthorizedError(voter_id, UPDATE_CONTENT_ACTION)

        if tx_type is TransactionType.DEBIT and not (reason and reason.strip()):
            log.warning("missing_debit_reason")
            raise MissingDebitReasonError(voter_id, content_id)

        content_owner_id: UUID | None = None
        if self._content_directory is not None:
            content_owner_id = await self._content_directory.get_owner_id(content_id)
            if content_owner_id is None:
                log.warning("content_not_found")
                raise ContentNotFoundError(content_id)

        transaction = VoteTransaction(
            voter_id=voter_id,
            content_id=content_id,
            transaction_type=tx_type,
            content_owner_id=content_owner_id,
            reason=reason.strip() if reason else None,
        )
        metrics = get_metrics_collector()

        try:
            await self._ensure_not_throttled(transaction)
            await self._serializer.run_exclusive(
                voter_id, lambda: self._apply(transaction)
            )
        except RepeatVoteThrottledError:
            metrics.increment_votes(tx_type.value, "throttled")
            raise
        except TooManyConcurrentVotesError as exc:
            log.warning(
                "vote_admission_rejected",
                reason=exc.reason,
                waited_seconds=round(exc.waited_seconds, 3),
            )
            metrics.increment_votes(tx_type.value, "too_many_concurrent")
            raise
        except InsufficientFundsError:
            metrics.increment_votes(tx_type.value, "insufficient_funds")
            raise
        except LedgerStorageError as exc:
            log.error("vote_storage_failed", ledger_operation=exc.operation)
            metrics.increment_votes(tx_type.value, "storage_failure")
            raise

        metrics.increment_votes(tx_type.value, "committed")
        tabcoins = await self._projector.content_tabcoins(content_id)
        log.info(
            "vote_committed",
            transaction_id=str(transaction.transaction_id),
            content_owner_id=str(content_owner_id) if content_owner_id else None,
            **tabcoins.to_dict(),
        )
        return tabcoins

    async def _ensure_not_throttled(self, transaction: VoteTransaction) -> None:
        decision = await self._throttle.check_allowed(
            transaction.voter_id, transaction.content_id, self._time.now()
        )
        if decision.allowed:
            return
        assert decision.retry_not_before is not None
        raise RepeatVoteThrottledError(
            voter_id=transaction.voter_id,
            content_id=transaction.content_id,
            current_count=decision.current_count,
            limit=decision.limit,
            retry_not_before=decision.retry_not_before,
            window_hours=self._config.repeat_vote_window_hours,
        )

    async def _apply(self, transaction: VoteTransaction) -> None:
        """Funds check and write; runs inside the voter's exclusive section."""
        await self._ensure_not_throttled(transaction)

        balance = await self._projector.user_tabcoins(transaction.voter_id)
        if balance < self._config.vote_cost:
            self._log_operation(
                "vote_on_content",
                voter_id=str(transaction.voter_id),
                content_id=str(transaction.content_id),
            ).info(
                "insufficient_funds",
                balance=balance,
                required=self._config.vote_cost,
            )
            raise InsufficientFundsError(
                voter_id=transaction.voter_id,
                balance=balance,
                required=self._config.vote_cost,
            )

        events = transaction.build_events(
            created_at=self._time.now(),
            cost=self._config.vote_cost,
            reward=self._config.voter_reward,
            content_effect=self._config.content_effect,
        )
        await self._ledger.append_events(events)
