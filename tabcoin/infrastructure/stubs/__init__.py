"""In-memory stubs for ports, used by tests and local runs."""

from tabcoin.infrastructure.stubs.authorization_stub import AuthorizationStub
from tabcoin.infrastructure.stubs.balance_ledger_stub import BalanceLedgerStub
from tabcoin.infrastructure.stubs.content_directory_stub import ContentDirectoryStub

__all__: list[str] = [
    "AuthorizationStub",
    "BalanceLedgerStub",
    "ContentDirectoryStub",
]
