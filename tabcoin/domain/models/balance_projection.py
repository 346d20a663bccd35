"""Externally reported balance shapes.

These are read models derived from the event history; they are never
stored.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VoteTally:
    """Vote-sourced decomposition of one account's history.

    Attributes:
        credit_count: Number of positive vote-sourced events.
        credit_sum: Sum of positive vote-sourced amounts.
        debit_sum: Sum of negative vote-sourced amounts (always <= 0).
    """

    credit_count: int = 0
    credit_sum: int = 0
    debit_sum: int = 0

    @property
    def net(self) -> int:
        return self.credit_sum + self.debit_sum


@dataclass(frozen=True)
class ContentTabCoins:
    """TabCoin projection of a content item, as returned after a vote."""

    tabcoins: int
    tabcoins_credit: int
    tabcoins_debit: int

    def to_dict(self) -> dict[str, int]:
        return {
            "tabcoins": self.tabcoins,
            "tabcoins_credit": self.tabcoins_credit,
            "tabcoins_debit": self.tabcoins_debit,
        }


@dataclass(frozen=True)
class UserBalance:
    """TabCoin and TabCash balances of a user."""

    tabcoins: int
    tabcash: int

    def to_dict(self) -> dict[str, int]:
        return {"tabcoins": self.tabcoins, "tabcash": self.tabcash}
