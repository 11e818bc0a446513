"""Ledger clients."""

from .client import (
    HttpLedgerClient,
    LedgerClient,
    LedgerError,
    LedgerProtocolError,
    LedgerUnavailableError,
)
from .memory import InMemoryLedger

__all__ = [
    "HttpLedgerClient",
    "InMemoryLedger",
    "LedgerClient",
    "LedgerError",
    "LedgerProtocolError",
    "LedgerUnavailableError",
]
