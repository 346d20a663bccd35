"""Unit tests for TabCoin domain errors.

Every error carries a stable kind, a human message and an action hint.
"""

from datetime import datetime, timezone

import pytest
from uuid6 import uuid7

from tabcoin.domain.errors import (
    ContentNotFoundError,
    InsufficientFundsError,
    LedgerStorageError,
    MissingDebitReasonError,
    RepeatVoteThrottledError,
    TooManyConcurrentVotesError,
    VoteNotAuthorizedError,
)
from tabcoin.domain.exceptions import TabCoinError


class TestErrorKinds:
    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (InsufficientFundsError(uuid7(), balance=1, required=2), "InsufficientFunds"),
            (
                RepeatVoteThrottledError(
                    uuid7(),
                    uuid7(),
                    current_count=3,
                    limit=3,
                    retry_not_before=datetime(2026, 1, 4, tzinfo=timezone.utc),
                ),
                "RepeatVoteThrottled",
            ),
            (TooManyConcurrentVotesError(uuid7(), 5.0), "TooManyConcurrentVotes"),
            (LedgerStorageError("append_events"), "StorageFailure"),
            (MissingDebitReasonError(uuid7(), uuid7()), "MissingDebitReason"),
            (ContentNotFoundError(uuid7()), "ContentNotFound"),
            (VoteNotAuthorizedError(None, "update:content"), "NotAuthorized"),
        ],
    )
    def test_kind_and_base_class(self, error: TabCoinError, kind: str) -> None:
        assert isinstance(error, TabCoinError)
        assert error.kind == kind
        assert error.message
        assert error.action


class TestErrorDetails:
    def test_insufficient_funds_action_names_requirement(self) -> None:
        error = InsufficientFundsError(uuid7(), balance=0, required=2)
        assert error.balance == 0
        assert error.required == 2
        assert "2 TabCoins" in error.action

    def test_throttle_error_reports_retry_time(self) -> None:
        retry = datetime(2026, 1, 4, 0, 0, 0, tzinfo=timezone.utc)
        error = RepeatVoteThrottledError(
            uuid7(), uuid7(), current_count=3, limit=3, retry_not_before=retry
        )
        assert error.retry_not_before == retry
        assert "72 hours" in error.action
        assert retry.isoformat() in str(error)

    def test_concurrency_error_reason_defaults_to_timeout(self) -> None:
        error = TooManyConcurrentVotesError("voter", waited_seconds=5.0)
        assert error.reason == "timeout"

    def test_storage_error_includes_detail(self) -> None:
        error = LedgerStorageError("append_events", "connection reset")
        assert error.operation == "append_events"
        assert "connection reset" in str(error)

    def test_not_authorized_names_feature(self) -> None:
        error = VoteNotAuthorizedError(None, "update:content")
        assert "update:content" in error.action
