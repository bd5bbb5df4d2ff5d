"""Typed failures raised by journal operations."""


class JournalError(Exception):
    """Base class for every journal-level failure."""

    message = "Journal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidOwner(JournalError):
    """A claimed index or id counter belongs to a different owner."""

    message = "Owner mismatch"


class IndexFull(JournalError):
    """The owner's index already holds the maximum number of entries."""

    message = "Journal index is full (max 200 entries)"


class IdOverflow(JournalError):
    """The id counter cannot advance past the largest u64."""

    message = "ID overflow"


class AlreadyExists(JournalError):
    """An account already occupies the derived address."""

    message = "Account already exists"


class OwnerMismatch(JournalError):
    """The caller does not own the targeted entry."""

    message = "Entry is owned by a different identity"


class NotFound(JournalError):
    """No live account at the given address."""

    message = "Account not found"


class FieldTooLong(JournalError):
    """A string field exceeds its reserved length."""

    message = "Field exceeds maximum length"


class AccountDiscriminatorMismatch(JournalError):
    """Stored data does not decode as the expected record type."""

    message = "Account discriminator did not match"


class InvalidField(JournalError):
    """A string field cannot be stored as UTF-8."""

    message = "Field is not valid UTF-8 text"
