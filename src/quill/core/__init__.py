"""Functional core - pure journal logic with no I/O."""

from .accounts import (
    MAX_INDEX_ENTRIES,
    Addressing,
    JournalEntry,
    JournalIdCounter,
    JournalIndex,
    RemovalPolicy,
)
from .address import DEFAULT_OWNER, derive_address, identity_from_name
from .errors import (
    AccountDiscriminatorMismatch,
    AlreadyExists,
    FieldTooLong,
    IdOverflow,
    IndexFull,
    InvalidField,
    InvalidOwner,
    JournalError,
    NotFound,
    OwnerMismatch,
)

__all__ = [
    # Accounts
    "MAX_INDEX_ENTRIES",
    "Addressing",
    "JournalEntry",
    "JournalIdCounter",
    "JournalIndex",
    "RemovalPolicy",
    # Addresses
    "DEFAULT_OWNER",
    "derive_address",
    "identity_from_name",
    # Errors
    "AccountDiscriminatorMismatch",
    "AlreadyExists",
    "FieldTooLong",
    "IdOverflow",
    "IndexFull",
    "InvalidField",
    "InvalidOwner",
    "JournalError",
    "NotFound",
    "OwnerMismatch",
]
