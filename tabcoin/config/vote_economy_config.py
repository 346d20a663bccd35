"""Vote economy configuration.

The economy constants (vote cost, voter reward, repeat-vote limit and
window) and the admission bounds of the per-voter exclusive section, with
environment variable overrides.

Environment Variables (Economy):
- TABCOIN_VOTE_COST: TabCoins debited from the voter per vote (default: 2)
- TABCOIN_VOTER_REWARD: TabCash credited to the voter per vote (default: 1)
- TABCOIN_CONTENT_EFFECT: TabCoins added/removed on the content (default: 1)

Environment Variables (Throttle):
- TABCOIN_REPEAT_VOTE_LIMIT: Votes per voter per content per window (default: 3)
- TABCOIN_REPEAT_VOTE_WINDOW_HOURS: Rolling window in hours (default: 72)

Environment Variables (Admission):
- TABCOIN_ADMISSION_TIMEOUT_SECONDS: Max wait for the voter's section (default: 5.0)
- TABCOIN_MAX_PENDING_PER_VOTER: Max waiters per voter (default: 50)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class VoteEconomyConfig:
    """Configuration for TabCoin votes.

    Attributes:
        vote_cost: TabCoins the voter pays per vote. Default: 2.
        voter_reward: TabCash the voter earns per vote. Default: 1.
        content_effect: Magnitude of the change on the content. Default: 1.
        repeat_vote_limit: Votes allowed per (voter, content) inside the
            window. Default: 3.
        repeat_vote_window_hours: Rolling window length. Default: 72.
        admission_timeout_seconds: Max wait for the voter's exclusive
            section before TooManyConcurrentVotes. Default: 5.0.
        max_pending_per_voter: Max requests waiting for one voter's
            section. Default: 50.
    """

    vote_cost: int = 2
    voter_reward: int = 1
    content_effect: int = 1
    repeat_vote_limit: int = 3
    repeat_vote_window_hours: int = 72
    admission_timeout_seconds: float = 5.0
    max_pending_per_voter: int = 50

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.vote_cost < 1:
            raise ValueError(f"vote_cost must be positive, got {self.vote_cost}")
        if self.voter_reward < 1:
            raise ValueError(
                f"voter_reward must be positive, got {self.voter_reward}"
            )
        if self.content_effect < 1:
            raise ValueError(
                f"content_effect must be positive, got {self.content_effect}"
            )
        if self.repeat_vote_limit < 1:
            raise ValueError(
                f"repeat_vote_limit must be at least 1, got {self.repeat_vote_limit}"
            )
        if self.repeat_vote_window_hours < 1:
            raise ValueError(
                "repeat_vote_window_hours must be at least 1, "
                f"got {self.repeat_vote_window_hours}"
            )
        if self.admission_timeout_seconds <= 0:
            raise ValueError(
                "admission_timeout_seconds must be positive, "
                f"got {self.admission_timeout_seconds}"
            )
        if self.max_pending_per_voter < 1:
            raise ValueError(
                "max_pending_per_voter must be at least 1, "
                f"got {self.max_pending_per_voter}"
            )

    @classmethod
    def from_environment(cls) -> "VoteEconomyConfig":
        """Create config from environment variables with defaults.

        Returns:
            VoteEconomyConfig with values from environment or defaults.
        """
        return cls(
            vote_cost=_get_int_env("TABCOIN_VOTE_COST", 2),
            voter_reward=_get_int_env("TABCOIN_VOTER_REWARD", 1),
            content_effect=_get_int_env("TABCOIN_CONTENT_EFFECT", 1),
            repeat_vote_limit=_get_int_env("TABCOIN_REPEAT_VOTE_LIMIT", 3),
            repeat_vote_window_hours=_get_int_env(
                "TABCOIN_REPEAT_VOTE_WINDOW_HOURS", 72
            ),
            admission_timeout_seconds=_get_float_env(
                "TABCOIN_ADMISSION_TIMEOUT_SECONDS", 5.0
            ),
            max_pending_per_voter=_get_int_env("TABCOIN_MAX_PENDING_PER_VOTER", 50),
        )


# Default production config
DEFAULT_VOTE_ECONOMY_CONFIG = VoteEconomyConfig()

# Testing config with a short admission timeout
TEST_VOTE_ECONOMY_CONFIG = VoteEconomyConfig(
    admission_timeout_seconds=0.5,
    max_pending_per_voter=50,
)
