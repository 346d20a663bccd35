"""Unit tests for BalanceProjector."""

from uuid import UUID

import pytest
from uuid6 import uuid7

from tabcoin.application.services import BalanceProjector
from tabcoin.domain.models import (
    BalanceType,
    OriginatorType,
    TransactionType,
    VoteTransaction,
)
from tabcoin.infrastructure.stubs import BalanceLedgerStub, ContentDirectoryStub
from tests.helpers import FakeTimeAuthority


async def _vote(
    ledger: BalanceLedgerStub,
    time: FakeTimeAuthority,
    content_id: UUID,
    transaction_type: TransactionType,
) -> None:
    vote = VoteTransaction(uuid7(), content_id, transaction_type, reason="reason text")
    await ledger.append_events(vote.build_events(created_at=time.now()))


@pytest.fixture
def projector(
    ledger: BalanceLedgerStub, content_directory: ContentDirectoryStub
) -> BalanceProjector:
    return BalanceProjector(ledger, content_directory)


class TestBalance:
    @pytest.mark.asyncio
    async def test_empty_account_is_zero(self, projector: BalanceProjector) -> None:
        assert await projector.balance(uuid7(), BalanceType.USER_TABCOIN) == 0

    @pytest.mark.asyncio
    async def test_sum_of_events(
        self, projector: BalanceProjector, ledger: BalanceLedgerStub
    ) -> None:
        user = uuid7()
        for amount in (5, -2, 3):
            ledger.seed(user, BalanceType.USER_TABCASH, amount)
        assert await projector.balance(user, BalanceType.USER_TABCASH) == 6
        assert await projector.balance(user, BalanceType.USER_TABCOIN) == 0


class TestContentTabCoins:
    @pytest.mark.asyncio
    async def test_decomposition_counts_only_votes(
        self,
        projector: BalanceProjector,
        ledger: BalanceLedgerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        content = uuid7()
        ledger.seed(
            content,
            BalanceType.CONTENT_TABCOIN,
            2,
            originator_type=OriginatorType.CONTENT,
            originator_id=str(content),
        )
        for tx in (TransactionType.CREDIT, TransactionType.CREDIT, TransactionType.DEBIT):
            await _vote(ledger, fake_time_authority, content, tx)

        result = await projector.content_tabcoins(content)

        assert result.tabcoins == 3
        assert result.tabcoins_credit == 2
        assert result.tabcoins_debit == -1
        assert result.to_dict() == {
            "tabcoins": 3,
            "tabcoins_credit": 2,
            "tabcoins_debit": -1,
        }

    @pytest.mark.asyncio
    async def test_unknown_content_is_zero(self, projector: BalanceProjector) -> None:
        result = await projector.content_tabcoins(uuid7())
        assert result.to_dict() == {"tabcoins": 0, "tabcoins_credit": 0, "tabcoins_debit": 0}


class TestUserBalance:
    @pytest.mark.asyncio
    async def test_owner_receives_vote_effects_only(
        self,
        projector: BalanceProjector,
        ledger: BalanceLedgerStub,
        content_directory: ContentDirectoryStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        owner = uuid7()
        first, second = uuid7(), uuid7()
        content_directory.add_content(first, owner)
        content_directory.add_content(second, owner)
        ledger.grant_tabcoins(owner, 10)
        ledger.seed(
            first,
            BalanceType.CONTENT_TABCOIN,
            1,
            originator_type=OriginatorType.CONTENT,
            originator_id=str(first),
        )
        await _vote(ledger, fake_time_authority, first, TransactionType.CREDIT)
        await _vote(ledger, fake_time_authority, second, TransactionType.DEBIT)
        await _vote(ledger, fake_time_authority, second, TransactionType.DEBIT)

        balance = await projector.user_balance(owner)

        assert balance.tabcoins == 10 + 1 - 2
        assert balance.tabcash == 0
        assert balance.to_dict() == {"tabcoins": 9, "tabcash": 0}

    @pytest.mark.asyncio
    async def test_without_directory_only_own_events(
        self,
        ledger: BalanceLedgerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        projector = BalanceProjector(ledger)
        user = uuid7()
        ledger.grant_tabcoins(user, 4)

        assert await projector.user_tabcoins(user) == 4
