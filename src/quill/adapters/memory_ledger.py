"""In-memory ledger adapter."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from quill.core.errors import AlreadyExists, NotFound
from quill.ports.ledger import InsufficientFunds, WriteConflict
from quill.transaction import Allocate, Close, StoredAccount, Transaction, Write

logger = logging.getLogger(__name__)

# Bytes of bookkeeping charged on top of every account's data.
ACCOUNT_STORAGE_OVERHEAD = 128


@dataclass
class Rent:
    """Rent-exemption schedule for newly allocated accounts."""

    lamports_per_byte_year: int = 3480
    exemption_threshold: int = 2

    def minimum_balance(self, space: int) -> int:
        return (
            (ACCOUNT_STORAGE_OVERHEAD + space)
            * self.lamports_per_byte_year
            * self.exemption_threshold
        )


class InMemoryLedger:
    """
    Dict-backed ledger.

    Implements Ledger protocol. Commits are serialized by a lock and applied
    against copies of the state, which replace the live state only once every
    operation has succeeded.
    """

    def __init__(self, rent: Rent | None = None):
        self.rent = rent or Rent()
        self._lock = threading.Lock()
        self._accounts: dict[str, StoredAccount] = {}
        self._versions: dict[str, int] = {}
        self._balances: dict[str, int] = {}

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def _persist(self) -> None:
        pass

    def get(self, address: str) -> StoredAccount | None:
        with self._locked():
            return self._accounts.get(address)

    def version(self, address: str) -> int:
        with self._locked():
            return self._versions.get(address, 0)

    def balance(self, identity: str) -> int:
        with self._locked():
            return self._balances.get(identity, 0)

    def airdrop(self, identity: str, lamports: int) -> None:
        if lamports <= 0:
            raise ValueError("Airdrop amount must be positive")
        with self._locked():
            self._balances[identity] = self._balances.get(identity, 0) + lamports
            self._persist()
        logger.debug(f"Airdropped {lamports} lamports to {identity}")

    def commit(self, tx: Transaction) -> None:
        with self._locked():
            self._apply(tx)
            self._persist()

    def _apply(self, tx: Transaction) -> None:
        for address, seen in tx.reads.items():
            current = self._versions.get(address, 0)
            if current != seen:
                logger.warning(f"Write conflict on {address}: read v{seen}, now v{current}")
                raise WriteConflict(f"Account {address} changed during the transaction")

        accounts = dict(self._accounts)
        versions = dict(self._versions)
        balances = dict(self._balances)

        def bump(address: str) -> int:
            versions[address] = versions.get(address, 0) + 1
            return versions[address]

        for op in tx.ops:
            if isinstance(op, Allocate):
                if op.address in accounts:
                    raise AlreadyExists(f"Account {op.address} already exists")
                rent = self.rent.minimum_balance(len(op.data))
                available = balances.get(op.payer, 0)
                if available < rent:
                    raise InsufficientFunds(
                        f"Need {rent} lamports to allocate {len(op.data)} bytes, have {available}"
                    )
                balances[op.payer] = available - rent
                accounts[op.address] = StoredAccount(op.data, rent, bump(op.address))
            elif isinstance(op, Write):
                existing = accounts.get(op.address)
                if existing is None:
                    raise NotFound(f"Account {op.address} not found")
                if len(op.data) != existing.space:
                    raise ValueError(
                        f"Write of {len(op.data)} bytes to a {existing.space}-byte account"
                    )
                accounts[op.address] = StoredAccount(op.data, existing.lamports, bump(op.address))
            elif isinstance(op, Close):
                existing = accounts.pop(op.address, None)
                if existing is None:
                    raise NotFound(f"Account {op.address} not found")
                balances[op.recipient] = balances.get(op.recipient, 0) + existing.lamports
                bump(op.address)

        self._accounts = accounts
        self._versions = versions
        self._balances = balances
        logger.debug(f"Committed {len(tx.ops)} operations")
