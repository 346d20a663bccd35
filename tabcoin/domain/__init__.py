"""Domain layer for the TabCoin ledger (models and errors, no I/O)."""
