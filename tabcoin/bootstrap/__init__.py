"""Dependency wiring for the TabCoin ledger."""
