"""Ports - interfaces/protocols for external dependencies."""

from .ledger import InsufficientFunds, Ledger, LedgerError, WriteConflict

__all__ = [
    "Ledger",
    "LedgerError",
    "WriteConflict",
    "InsufficientFunds",
]
