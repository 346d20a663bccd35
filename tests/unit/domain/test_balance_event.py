"""Unit tests for the BalanceEvent domain model.

Tests:
- Field validation (non-zero amount, aware timestamp, originator)
- Vote-sourced classification
- Lookup keys and serialization
"""

from datetime import datetime, timezone

import pytest
from uuid6 import uuid7

from tabcoin.domain.models import (
    BalanceEvent,
    BalanceType,
    OriginatorKey,
    OriginatorType,
    RecipientKey,
    vote_originator_id,
)

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _event(**overrides: object) -> BalanceEvent:
    fields: dict[str, object] = {
        "balance_type": BalanceType.USER_TABCOIN,
        "recipient_id": uuid7(),
        "amount": -2,
        "originator_type": OriginatorType.CONTENT,
        "originator_id": str(uuid7()),
        "created_at": NOW,
    }
    fields.update(overrides)
    return BalanceEvent(**fields)  # type: ignore[arg-type]


class TestBalanceEventValidation:
    """Tests for BalanceEvent.__post_init__."""

    def test_valid_event_gets_time_ordered_id(self) -> None:
        first = _event()
        second = _event()
        assert first.event_id != second.event_id
        assert first.event_id.version == 7

    def test_zero_amount_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-zero"):
            _event(amount=0)

    def test_naive_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            _event(created_at=datetime(2026, 1, 1, 12, 0, 0))

    def test_empty_originator_rejected(self) -> None:
        with pytest.raises(ValueError, match="originator_id"):
            _event(originator_id="")

    def test_event_is_immutable(self) -> None:
        event = _event()
        with pytest.raises(AttributeError):
            event.amount = 5  # type: ignore[misc]


class TestVoteSourcing:
    """Only the vote originator marks an event as vote-sourced."""

    def test_vote_originator_is_vote_sourced(self) -> None:
        voter, content = uuid7(), uuid7()
        event = _event(
            balance_type=BalanceType.CONTENT_TABCOIN,
            recipient_id=content,
            amount=1,
            originator_type=OriginatorType.VOTE,
            originator_id=vote_originator_id(voter, content),
        )
        assert event.is_vote_sourced

    @pytest.mark.parametrize(
        "originator_type",
        [OriginatorType.CONTENT, OriginatorType.USER, OriginatorType.SYSTEM],
    )
    def test_other_originators_are_not_vote_sourced(
        self, originator_type: OriginatorType
    ) -> None:
        assert not _event(originator_type=originator_type).is_vote_sourced


class TestKeys:
    def test_recipient_key(self) -> None:
        event = _event()
        assert event.recipient_key == RecipientKey(
            event.recipient_id, BalanceType.USER_TABCOIN
        )

    def test_vote_originator_key_encodes_pair(self) -> None:
        voter, content = uuid7(), uuid7()
        key = OriginatorKey.for_vote(voter, content)
        assert key.originator_type == OriginatorType.VOTE
        assert key.originator_id == f"{voter}:{content}"

    def test_originator_key_matches_event(self) -> None:
        voter, content = uuid7(), uuid7()
        event = _event(
            originator_type=OriginatorType.VOTE,
            originator_id=vote_originator_id(voter, content),
        )
        assert event.originator_key == OriginatorKey.for_vote(voter, content)


class TestSerialization:
    def test_to_dict_uses_wire_values(self) -> None:
        event = _event(reason="spam")
        data = event.to_dict()
        assert data["balance_type"] == "user:tabcoin"
        assert data["originator_type"] == "content"
        assert data["amount"] == -2
        assert data["created_at"] == NOW.isoformat()
        assert data["transaction_id"] is None
        assert data["reason"] == "spam"
