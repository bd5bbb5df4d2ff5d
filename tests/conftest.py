import pytest

from quill.adapters.memory_ledger import InMemoryLedger
from quill.core.address import identity_from_name
from quill.journal import JournalProgram

FUNDS = 10_000_000_000


@pytest.fixture
def alice():
    return identity_from_name("alice")


@pytest.fixture
def bob():
    return identity_from_name("bob")


@pytest.fixture
def ledger(alice, bob):
    ledger = InMemoryLedger()
    ledger.airdrop(alice, FUNDS)
    ledger.airdrop(bob, FUNDS)
    return ledger


@pytest.fixture
def program(ledger):
    return JournalProgram(ledger)
