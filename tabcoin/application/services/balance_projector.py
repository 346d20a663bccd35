"""Balance Projector - derives reported balances from the event history.

Projections are pure functions of the ledger: nothing computed here is
ever stored. Two projections need more than a single account sum:

- Content TabCoins: total plus the vote-sourced credit/debit decomposition.
- User TabCoins: the user's own user:tabcoin events plus the vote-sourced
  content:tabcoin events of every content the user owns.

Developer Golden Rules:
1. SUM IS TRUTH - every number here is a sum over ledger events
2. VOTES ONLY FLOW TO OWNERS - only vote-sourced content events count
   toward the owner's TabCoins
"""

from __future__ import annotations

from uuid import UUID

from tabcoin.application.ports.balance_ledger import BalanceLedgerProtocol
from tabcoin.application.ports.content_directory import ContentDirectoryProtocol
from tabcoin.application.services.base import LoggingMixin
from tabcoin.domain.models.balance_event import BalanceType
from tabcoin.domain.models.balance_projection import ContentTabCoins, UserBalance


class BalanceProjector(LoggingMixin):
    """Read-side projections over the balance ledger.

    Attributes:
        _ledger: Ledger to read from.
        _content_directory: Resolves owned content for user projections.
            Without one, a user's TabCoins are only their own events.
    """

    def __init__(
        self,
        ledger: BalanceLedgerProtocol,
        content_directory: ContentDirectoryProtocol | None = None,
    ) -> None:
        self._ledger = ledger
        self._content_directory = content_directory
        self._init_logger(component="ledger.projection")

    async def balance(self, recipient_id: UUID, balance_type: BalanceType) -> int:
        """Raw account balance: the sum of one account's events."""
        return await self._ledger.sum_balance(recipient_id, balance_type)

    async def content_tabcoins(self, content_id: UUID) -> ContentTabCoins:
        """Project a content item's TabCoins.

        Returns:
            ContentTabCoins where ``tabcoins`` is the full account sum
            (including non-vote events) and ``tabcoins_credit`` /
            ``tabcoins_debit`` count only vote-sourced events.
        """
        total = await self._ledger.sum_balance(content_id, BalanceType.CONTENT_TABCOIN)
        tally = await self._ledger.summarize_votes(
            content_id, BalanceType.CONTENT_TABCOIN
        )
        return ContentTabCoins(
            tabcoins=total,
            tabcoins_credit=tally.credit_count,
            tabcoins_debit=tally.debit_sum,
        )

    async def user_tabcoins(self, user_id: UUID) -> int:
        """Project a user's TabCoins, including votes on owned content."""
        own = await self._ledger.sum_balance(user_id, BalanceType.USER_TABCOIN)
        if self._content_directory is None:
            return own

        owned = await self._content_directory.list_owned_content_ids(user_id)
        from_votes = 0
        for content_id in owned:
            tally = await self._ledger.summarize_votes(
                content_id, BalanceType.CONTENT_TABCOIN
            )
            from_votes += tally.net

        self._log_operation(
            "user_tabcoins", user_id=str(user_id), owned_content=len(owned)
        ).debug("user_tabcoins_projected", own=own, from_votes=from_votes)
        return own + from_votes

    async def user_balance(self, user_id: UUID) -> UserBalance:
        """Project both TabCoins and TabCash for a user."""
        tabcoins = await self.user_tabcoins(user_id)
        tabcash = await self._ledger.sum_balance(user_id, BalanceType.USER_TABCASH)
        return UserBalance(tabcoins=tabcoins, tabcash=tabcash)
