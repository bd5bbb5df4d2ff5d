"""Adapters - I/O implementations of ports."""

from .memory_ledger import InMemoryLedger, Rent
from .file_ledger import FileLedger

__all__ = [
    "InMemoryLedger",
    "Rent",
    "FileLedger",
]
