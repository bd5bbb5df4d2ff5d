"""Storage substrate interface."""

from typing import Protocol

from quill.transaction import StoredAccount, Transaction


class LedgerError(Exception):
    """Raised when the substrate refuses a transaction."""

    pass


class WriteConflict(LedgerError):
    """An account read by the transaction changed before it committed."""

    pass


class InsufficientFunds(LedgerError):
    """The payer cannot cover the rent for a new account."""

    pass


class Ledger(Protocol):
    """Interface for the account store that holds journal state."""

    def get(self, address: str) -> StoredAccount | None:
        """Fetch the account at an address. Returns None if not allocated."""
        ...

    def version(self, address: str) -> int:
        """Monotonic write counter for an address, 0 if never written."""
        ...

    def balance(self, identity: str) -> int:
        """Lamports held by an identity."""
        ...

    def airdrop(self, identity: str, lamports: int) -> None:
        """Credit lamports to an identity."""
        ...

    def commit(self, tx: Transaction) -> None:
        """Apply every operation in a transaction, or none of them."""
        ...
