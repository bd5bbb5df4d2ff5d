"""Persisted layout of each account type.

Data starts with an 8-byte discriminator derived from the record name,
followed by little-endian fields. Strings and vectors carry a u32 length
prefix. Every account reserves room for its largest possible value, so the
space for each record type is a fixed constant.
"""

import hashlib
import struct

from .accounts import (
    MAX_INDEX_ENTRIES,
    MAX_MESSAGE_LEN,
    TITLE_LIMITS,
    Addressing,
    JournalEntry,
    JournalIdCounter,
    JournalIndex,
)
from .address import ADDRESS_LEN, to_bytes
from .errors import AccountDiscriminatorMismatch

DISCRIMINATOR_LEN = 8
LENGTH_PREFIX_LEN = 4
U64_LEN = 8


def discriminator(name: str) -> bytes:
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_LEN]


ENTRY_DISCRIMINATOR = discriminator("JournalEntryState")
INDEX_DISCRIMINATOR = discriminator("JournalIndex")
COUNTER_DISCRIMINATOR = discriminator("JournalId")

ENTRY_SPACE = {
    Addressing.COUNTER: (
        DISCRIMINATOR_LEN
        + ADDRESS_LEN  # owner
        + U64_LEN  # id
        + (LENGTH_PREFIX_LEN + TITLE_LIMITS[Addressing.COUNTER])
        + (LENGTH_PREFIX_LEN + MAX_MESSAGE_LEN)
    ),
    Addressing.TITLE: (
        DISCRIMINATOR_LEN
        + ADDRESS_LEN
        + (LENGTH_PREFIX_LEN + TITLE_LIMITS[Addressing.TITLE])
        + (LENGTH_PREFIX_LEN + MAX_MESSAGE_LEN)
    ),
}

INDEX_SPACE = (
    DISCRIMINATOR_LEN
    + ADDRESS_LEN
    + LENGTH_PREFIX_LEN
    + MAX_INDEX_ENTRIES * ADDRESS_LEN
)

COUNTER_SPACE = DISCRIMINATOR_LEN + ADDRESS_LEN + U64_LEN


class _Reader:
    """Cursor over account data."""

    def __init__(self, data: bytes, expected: bytes):
        if data[:DISCRIMINATOR_LEN] != expected:
            raise AccountDiscriminatorMismatch()
        self.data = data
        self.pos = DISCRIMINATOR_LEN

    def take(self, n: int) -> bytes:
        chunk = self.data[self.pos:self.pos + n]
        if len(chunk) != n:
            raise AccountDiscriminatorMismatch("Account data is truncated")
        self.pos += n
        return chunk

    def key(self) -> str:
        return self.take(ADDRESS_LEN).hex()

    def u32(self) -> int:
        return struct.unpack("<I", self.take(4))[0]

    def u64(self) -> int:
        return struct.unpack("<Q", self.take(8))[0]

    def string(self) -> str:
        return self.take(self.u32()).decode("utf-8")


def _string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack("<I", len(raw)) + raw


def _pad(data: bytes, space: int) -> bytes:
    if len(data) > space:
        raise ValueError(f"Encoded account is {len(data)} bytes, space is {space}")
    return data + bytes(space - len(data))


def encode_entry(entry: JournalEntry, addressing: Addressing) -> bytes:
    parts = [ENTRY_DISCRIMINATOR, to_bytes(entry.owner)]
    if addressing == Addressing.COUNTER:
        parts.append(struct.pack("<Q", entry.id))
    parts.append(_string(entry.title))
    parts.append(_string(entry.message))
    return _pad(b"".join(parts), ENTRY_SPACE[addressing])


def decode_entry(data: bytes, addressing: Addressing) -> JournalEntry:
    r = _Reader(data, ENTRY_DISCRIMINATOR)
    owner = r.key()
    entry_id = r.u64() if addressing == Addressing.COUNTER else None
    title = r.string()
    message = r.string()
    return JournalEntry(owner=owner, title=title, message=message, id=entry_id)


def encode_index(index: JournalIndex) -> bytes:
    body = b"".join(to_bytes(a) for a in index.entries)
    data = (
        INDEX_DISCRIMINATOR
        + to_bytes(index.owner)
        + struct.pack("<I", len(index.entries))
        + body
    )
    return _pad(data, INDEX_SPACE)


def decode_index(data: bytes) -> JournalIndex:
    r = _Reader(data, INDEX_DISCRIMINATOR)
    owner = r.key()
    count = r.u32()
    return JournalIndex(owner=owner, entries=[r.key() for _ in range(count)])


def encode_counter(counter: JournalIdCounter) -> bytes:
    data = COUNTER_DISCRIMINATOR + to_bytes(counter.owner) + struct.pack("<Q", counter.next_id)
    return _pad(data, COUNTER_SPACE)


def decode_counter(data: bytes) -> JournalIdCounter:
    r = _Reader(data, COUNTER_DISCRIMINATOR)
    return JournalIdCounter(owner=r.key(), next_id=r.u64())
