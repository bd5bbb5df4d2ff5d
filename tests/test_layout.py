"""Tests for the persisted account layout."""

import pytest

from quill.core.accounts import Addressing, JournalEntry, JournalIdCounter, JournalIndex
from quill.core.address import identity_from_name
from quill.core.errors import AccountDiscriminatorMismatch
from quill.core.layout import (
    COUNTER_SPACE,
    ENTRY_SPACE,
    INDEX_SPACE,
    decode_counter,
    decode_entry,
    decode_index,
    encode_counter,
    encode_entry,
    encode_index,
)

ALICE = identity_from_name("alice")


class TestSpace:
    def test_entry_space(self):
        assert ENTRY_SPACE[Addressing.COUNTER] == 1156
        assert ENTRY_SPACE[Addressing.TITLE] == 1098

    def test_index_space(self):
        assert INDEX_SPACE == 8 + 32 + 4 + 200 * 32

    def test_counter_space(self):
        assert COUNTER_SPACE == 48


class TestEncoding:
    def test_entry_padded_to_space(self):
        entry = JournalEntry(owner=ALICE, title="t", message="m", id=3)
        data = encode_entry(entry, Addressing.COUNTER)
        assert len(data) == ENTRY_SPACE[Addressing.COUNTER]
        assert decode_entry(data, Addressing.COUNTER) == entry

    def test_title_keyed_entry_has_no_id(self):
        entry = JournalEntry(owner=ALICE, title="t", message="m")
        data = encode_entry(entry, Addressing.TITLE)
        assert decode_entry(data, Addressing.TITLE).id is None

    def test_full_index_fits(self):
        index = JournalIndex(owner=ALICE, entries=[f"{n:064x}" for n in range(200)])
        data = encode_index(index)
        assert len(data) == INDEX_SPACE
        assert decode_index(data).entries == index.entries

    def test_counter_field_order(self):
        data = encode_counter(JournalIdCounter(owner=ALICE, next_id=1))
        assert data[8:40] == bytes.fromhex(ALICE)
        assert data[40:48] == b"\x01" + bytes(7)

    def test_wrong_record_type_rejected(self):
        data = encode_counter(JournalIdCounter(owner=ALICE, next_id=1))
        with pytest.raises(AccountDiscriminatorMismatch):
            decode_index(data)
