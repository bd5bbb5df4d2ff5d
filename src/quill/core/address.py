"""Deterministic address derivation.

Every account lives at an address computed from a list of seeds and the
program id. Nothing ever stores a raw location: given the owner and the
discriminator (an id or a title) the address can always be recomputed.
"""

import hashlib

ADDRESS_LEN = 32
U64_MAX = 2**64 - 1

DEFAULT_OWNER = "00" * ADDRESS_LEN
DEFAULT_PROGRAM_ID = hashlib.sha256(b"quill-journal").hexdigest()

ENTRY_SEED = b"entry"
INDEX_SEED = b"index"
COUNTER_SEED = b"journal_id"

_PDA_MARKER = b"ProgramDerivedAddress"


def u64le(n: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes."""
    if n < 0 or n > U64_MAX:
        raise ValueError(f"{n} does not fit in an unsigned 64-bit integer")
    return n.to_bytes(8, "little")


def to_bytes(key: str) -> bytes:
    """Decode a hex identity or address, checking its width."""
    raw = bytes.fromhex(key)
    if len(raw) != ADDRESS_LEN:
        raise ValueError(f"Expected a {ADDRESS_LEN}-byte key, got {len(raw)} bytes")
    return raw


def is_address(value: str) -> bool:
    """True if value looks like a hex-encoded 32-byte key."""
    if len(value) != ADDRESS_LEN * 2:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return True


def identity_from_name(name: str) -> str:
    """Stable identity for a human-readable owner name."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


def derive_address(program_id: str, *seeds: bytes) -> str:
    """Hash seeds and program id into a 32-byte address (hex)."""
    h = hashlib.sha256()
    for seed in seeds:
        h.update(seed)
    h.update(to_bytes(program_id))
    h.update(_PDA_MARKER)
    return h.hexdigest()


def index_address(program_id: str, owner: str) -> str:
    return derive_address(program_id, INDEX_SEED, to_bytes(owner))


def counter_address(program_id: str, owner: str) -> str:
    return derive_address(program_id, COUNTER_SEED, to_bytes(owner))


def entry_address_for_id(program_id: str, owner: str, entry_id: int) -> str:
    """Counter-keyed entry address."""
    return derive_address(program_id, ENTRY_SEED, to_bytes(owner), u64le(entry_id))


def entry_address_for_title(program_id: str, owner: str, title: str) -> str:
    """Title-keyed entry address. Same owner + title always collide."""
    return derive_address(program_id, ENTRY_SEED, to_bytes(owner), title.encode("utf-8"))
