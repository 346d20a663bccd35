"""Configuration for the TabCoin ledger.

Available Configurations:
- VoteEconomyConfig: vote cost/reward, repeat-vote throttle, admission bounds
"""

from tabcoin.config.vote_economy_config import (
    DEFAULT_VOTE_ECONOMY_CONFIG,
    TEST_VOTE_ECONOMY_CONFIG,
    VoteEconomyConfig,
)

__all__ = [
    "VoteEconomyConfig",
    "DEFAULT_VOTE_ECONOMY_CONFIG",
    "TEST_VOTE_ECONOMY_CONFIG",
]
