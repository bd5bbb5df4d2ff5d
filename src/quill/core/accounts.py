"""Journal record types and their domain rules - no I/O."""

from dataclasses import dataclass, field
from enum import Enum

from .address import DEFAULT_OWNER, U64_MAX
from .errors import FieldTooLong, IdOverflow, IndexFull, InvalidField, InvalidOwner

MAX_INDEX_ENTRIES = 200
MAX_MESSAGE_LEN = 1000


class Addressing(str, Enum):
    """What distinguishes one entry address from another for the same owner."""

    COUNTER = "counter"
    TITLE = "title"


class RemovalPolicy(str, Enum):
    """How the index drops an address."""

    SWAP = "swap"
    RETAIN = "retain"


TITLE_LIMITS = {
    Addressing.COUNTER: 100,
    Addressing.TITLE: 50,
}


def _byte_len(value: str, name: str) -> int:
    try:
        return len(value.encode("utf-8"))
    except UnicodeEncodeError:
        raise InvalidField(f"{name} is not valid UTF-8 text")


def check_title(title: str, addressing: Addressing) -> None:
    limit = TITLE_LIMITS[addressing]
    if _byte_len(title, "Title") > limit:
        raise FieldTooLong(f"Title exceeds {limit} bytes")


def check_message(message: str) -> None:
    if _byte_len(message, "Message") > MAX_MESSAGE_LEN:
        raise FieldTooLong(f"Message exceeds {MAX_MESSAGE_LEN} bytes")


@dataclass
class JournalEntry:
    """
    A single journal entry.

    Owner, title and id are fixed at creation. Only the message changes.
    `id` is None for title-keyed entries.
    """

    owner: str
    title: str
    message: str
    id: int | None = None

    def is_owned_by(self, identity: str) -> bool:
        return self.owner == identity


@dataclass
class JournalIndex:
    """
    Bounded list of an owner's live entry addresses.

    Starts unclaimed (owner == DEFAULT_OWNER); the first creator claims it.
    """

    owner: str = DEFAULT_OWNER
    entries: list[str] = field(default_factory=list)

    def ensure_owner(self, owner: str) -> None:
        """Claim an unclaimed index, or check the existing claim."""
        if self.owner == DEFAULT_OWNER:
            self.owner = owner
        if self.owner != owner:
            raise InvalidOwner()

    def is_full(self) -> bool:
        return len(self.entries) >= MAX_INDEX_ENTRIES

    def is_empty(self) -> bool:
        return not self.entries

    def add(self, address: str) -> None:
        """Append an address. Re-adding a present address is a no-op."""
        if self.is_full():
            raise IndexFull()
        if address in self.entries:
            return
        self.entries.append(address)

    def remove(self, address: str, policy: RemovalPolicy = RemovalPolicy.SWAP) -> bool:
        """
        Drop an address. Returns False if it was not present.

        SWAP moves the last element into the vacated slot, so the order of the
        remaining entries is not preserved. RETAIN keeps relative order.
        """
        if address not in self.entries:
            return False
        if policy == RemovalPolicy.RETAIN:
            self.entries = [a for a in self.entries if a != address]
        else:
            pos = self.entries.index(address)
            last = self.entries.pop()
            if pos < len(self.entries):
                self.entries[pos] = last
        return True


@dataclass
class JournalIdCounter:
    """Per-owner monotonic id source. Never reset, never closed."""

    owner: str = DEFAULT_OWNER
    next_id: int = 0

    def ensure_owner(self, owner: str) -> None:
        if self.owner == DEFAULT_OWNER:
            self.owner = owner
            self.next_id = 0
        if self.owner != owner:
            raise InvalidOwner()

    def next(self, owner: str) -> int:
        """Return the current id and advance by one."""
        self.ensure_owner(owner)
        current = self.next_id
        if current >= U64_MAX:
            raise IdOverflow()
        self.next_id = current + 1
        return current
