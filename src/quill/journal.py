"""Journal operations: create, update and delete entries for an owner.

Each mutating operation loads what it needs into a Transaction, runs every
check, stages its writes, and commits once. A failed check raises before
commit, so nothing partially applies. Conflicting concurrent commits are
rejected by the ledger; retrying is up to the caller.
"""

import logging

from .core import address as addr
from .core.accounts import (
    Addressing,
    JournalEntry,
    JournalIdCounter,
    JournalIndex,
    RemovalPolicy,
    check_message,
    check_title,
)
from .core.errors import IndexFull, InvalidOwner, NotFound, OwnerMismatch
from .core.layout import (
    decode_counter,
    decode_entry,
    decode_index,
    encode_counter,
    encode_entry,
    encode_index,
)
from .ports.ledger import Ledger
from .transaction import Transaction

logger = logging.getLogger(__name__)


class JournalProgram:
    """Per-owner journal entries with a bounded index."""

    def __init__(
        self,
        ledger: Ledger,
        program_id: str = addr.DEFAULT_PROGRAM_ID,
        addressing: Addressing = Addressing.COUNTER,
        removal_policy: RemovalPolicy = RemovalPolicy.SWAP,
    ):
        self.ledger = ledger
        self.program_id = program_id
        self.addressing = Addressing(addressing)
        self.removal_policy = RemovalPolicy(removal_policy)

    # ============== Addresses ==============

    def index_address(self, owner: str) -> str:
        return addr.index_address(self.program_id, owner)

    def counter_address(self, owner: str) -> str:
        return addr.counter_address(self.program_id, owner)

    def entry_address(self, owner: str, key: int | str) -> str:
        """Address of an entry, keyed by id (counter) or title (title)."""
        if self.addressing == Addressing.COUNTER:
            if not isinstance(key, int):
                raise TypeError("Counter-keyed entries are addressed by integer id")
            return addr.entry_address_for_id(self.program_id, owner, key)
        return addr.entry_address_for_title(self.program_id, owner, str(key))

    def next_entry_address(self, owner: str) -> str:
        """Address the next create for this owner will occupy."""
        if self.addressing != Addressing.COUNTER:
            raise ValueError("Title-keyed entries are addressed by title")
        counter = self.fetch_counter(owner)
        return self.entry_address(owner, counter.next_id if counter else 0)

    def resolve(self, owner: str, key: str) -> str:
        """Turn user input (address, id or title) into an entry address."""
        if addr.is_address(key):
            return key
        if self.addressing == Addressing.COUNTER:
            try:
                entry_id = int(key)
            except ValueError:
                raise ValueError(f"Expected an entry id or address, got {key!r}")
            return self.entry_address(owner, entry_id)
        return self.entry_address(owner, key)

    # ============== Operations ==============

    def create_journal_entry(self, owner: str, title: str, message: str) -> str:
        """Create an entry and add it to the owner's index. Returns its address."""
        check_title(title, self.addressing)
        check_message(message)

        tx = Transaction(self.ledger)

        index_addr = self.index_address(owner)
        index_data = tx.load(index_addr)
        if index_data is None:
            logger.debug(f"Initializing journal index for {owner}")
            index = JournalIndex()
        else:
            index = decode_index(index_data)
        index.ensure_owner(owner)

        counter = None
        counter_addr = counter_data = None
        if self.addressing == Addressing.COUNTER:
            counter_addr = self.counter_address(owner)
            counter_data = tx.load(counter_addr)
            if counter_data is None:
                logger.debug(f"Initializing id counter for {owner}")
                counter = JournalIdCounter()
            else:
                counter = decode_counter(counter_data)
            counter.ensure_owner(owner)

        if index.is_full():
            raise IndexFull()

        if counter is not None:
            entry_id = counter.next(owner)
            address = self.entry_address(owner, entry_id)
        else:
            entry_id = None
            address = self.entry_address(owner, title)

        entry = JournalEntry(owner=owner, title=title, message=message, id=entry_id)
        tx.allocate(address, owner, encode_entry(entry, self.addressing))

        index.add(address)
        if index_data is None:
            tx.allocate(index_addr, owner, encode_index(index))
        else:
            tx.write(index_addr, encode_index(index))

        if counter is not None:
            if counter_data is None:
                tx.allocate(counter_addr, owner, encode_counter(counter))
            else:
                tx.write(counter_addr, encode_counter(counter))

        tx.commit()
        logger.info(f"Created journal entry {address} for {owner}")
        return address

    def update_journal_entry(self, owner: str, address: str, message: str) -> None:
        """Replace an entry's message. Owner, title and id stay as they are."""
        check_message(message)

        tx = Transaction(self.ledger)
        entry = self._load_owned_entry(tx, owner, address)
        entry.message = message
        tx.write(address, encode_entry(entry, self.addressing))

        tx.commit()
        logger.info(f"Updated journal entry {address}")

    def delete_journal_entry(self, owner: str, address: str) -> None:
        """
        Close an entry and drop it from the owner's index.

        Closing the last entry closes the index too. The id counter stays, so
        ids are never handed out twice.
        """
        tx = Transaction(self.ledger)
        self._load_owned_entry(tx, owner, address)

        index_addr = self.index_address(owner)
        index_data = tx.load(index_addr)
        if index_data is None:
            raise NotFound("Journal index is not initialized")
        index = decode_index(index_data)
        if index.owner != owner:
            raise InvalidOwner()

        tx.close(address, owner)

        removed = index.remove(address, self.removal_policy)
        if index.is_empty():
            logger.debug(f"Closing empty journal index for {owner}")
            tx.close(index_addr, owner)
        elif removed:
            tx.write(index_addr, encode_index(index))

        tx.commit()
        logger.info(f"Deleted journal entry {address}")

    def _load_owned_entry(self, tx: Transaction, owner: str, address: str) -> JournalEntry:
        data = tx.load(address)
        if data is None:
            raise NotFound(f"Journal entry {address} not found")
        entry = decode_entry(data, self.addressing)
        if not entry.is_owned_by(owner):
            raise OwnerMismatch()
        return entry

    # ============== Reads ==============

    def fetch_entry(self, address: str) -> JournalEntry | None:
        account = self.ledger.get(address)
        if account is None:
            return None
        return decode_entry(account.data, self.addressing)

    def fetch_index(self, owner: str) -> JournalIndex | None:
        """The owner's index, or None if it is not initialized."""
        account = self.ledger.get(self.index_address(owner))
        return decode_index(account.data) if account else None

    def fetch_counter(self, owner: str) -> JournalIdCounter | None:
        account = self.ledger.get(self.counter_address(owner))
        return decode_counter(account.data) if account else None

    def list_entries(self, owner: str) -> list[tuple[str, JournalEntry]]:
        """All live entries for an owner, in index order."""
        index = self.fetch_index(owner)
        if index is None:
            return []
        entries = []
        for address in index.entries:
            entry = self.fetch_entry(address)
            if entry is not None:
                entries.append((address, entry))
        return entries
