"""Wiring shared by the CLI: build ledgers and programs from config."""

from pathlib import Path

from .adapters.file_ledger import FileLedger
from .adapters.memory_ledger import Rent
from .config import DATA_DIR, Config
from .journal import JournalProgram
from .ports.ledger import Ledger


def get_ledger(config: Config) -> FileLedger:
    """Resolve the ledger file from config."""
    rent = Rent(
        lamports_per_byte_year=config.lamports_per_byte_year,
        exemption_threshold=config.exemption_threshold,
    )
    if config.ledger_path:
        return FileLedger(Path(config.ledger_path).expanduser(), rent)
    return FileLedger(DATA_DIR / "ledger.json", rent)


def get_program(config: Config, ledger: Ledger | None = None) -> JournalProgram:
    """Build a JournalProgram using the configured addressing and removal policy."""
    return JournalProgram(
        ledger if ledger is not None else get_ledger(config),
        program_id=config.program_id,
        addressing=config.addressing,
        removal_policy=config.removal_policy,
    )
