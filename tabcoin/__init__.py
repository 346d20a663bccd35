"""
TabCoin Ledger - reputation economy core

Users spend TabCoins to credit or debit user-generated content. Content
(and through it, its owner) gains or loses TabCoins, and every voter is
rewarded with TabCash for participating.

Balances are never stored as mutable counters: every change is an
immutable balance event and every balance is a sum over its history.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
