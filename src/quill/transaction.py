"""Buffered account mutations applied all-or-nothing by a ledger."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .core.errors import AlreadyExists

if TYPE_CHECKING:
    from .ports.ledger import Ledger


@dataclass(frozen=True)
class StoredAccount:
    """Raw account as held by a ledger."""

    data: bytes
    lamports: int
    version: int

    @property
    def space(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Allocate:
    address: str
    payer: str
    data: bytes


@dataclass(frozen=True)
class Write:
    address: str
    data: bytes


@dataclass(frozen=True)
class Close:
    address: str
    recipient: str


class Transaction:
    """
    Records what an operation read and what it intends to change.

    Nothing reaches the ledger until commit(). The ledger rejects the whole
    transaction if any account it read has changed since.
    """

    def __init__(self, ledger: "Ledger"):
        self.ledger = ledger
        self.reads: dict[str, int] = {}
        self.ops: list[Allocate | Write | Close] = []
        self._staged: dict[str, bytes | None] = {}

    def load(self, address: str) -> bytes | None:
        """Current data at address as seen by this transaction."""
        if address in self._staged:
            return self._staged[address]
        # Version first: a change between the two reads shows up as a conflict.
        version = self.ledger.version(address)
        account = self.ledger.get(address)
        self.reads.setdefault(address, version)
        return account.data if account else None

    def allocate(self, address: str, payer: str, data: bytes) -> None:
        if self.load(address) is not None:
            raise AlreadyExists(f"Account {address} already exists")
        self._staged[address] = data
        self.ops.append(Allocate(address, payer, data))

    def write(self, address: str, data: bytes) -> None:
        self._staged[address] = data
        self.ops.append(Write(address, data))

    def close(self, address: str, recipient: str) -> None:
        self._staged[address] = None
        self.ops.append(Close(address, recipient))

    def commit(self) -> None:
        self.ledger.commit(self)
