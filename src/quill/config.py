"""Configuration management for Quill."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.accounts import Addressing, RemovalPolicy
from .core.address import DEFAULT_PROGRAM_ID, is_address

logger = logging.getLogger(__name__)

QUILL_HOME = Path(os.environ.get("QUILL_HOME", Path.home() / "quill"))
CONFIG_FILE = QUILL_HOME / "config" / "quill.conf"
DATA_DIR = QUILL_HOME / "data"


@dataclass
class Config:
    """Quill configuration."""

    program_id: str = DEFAULT_PROGRAM_ID
    addressing: Addressing = Addressing.COUNTER
    removal_policy: RemovalPolicy = RemovalPolicy.SWAP
    ledger_path: str = ""
    default_owner: str = ""
    # Rent schedule
    lamports_per_byte_year: int = 3480
    exemption_threshold: int = 2
    airdrop_lamports: int = 1_000_000_000


def _parse_value(raw: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    value = raw.strip()
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, current: int) -> int:
    try:
        return int(value.replace("_", ""))
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}")
        return current


def load_config(path: Path | None = None) -> Config:
    """Load configuration from quill.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value)

        match key:
            case "program_id":
                if is_address(value):
                    config.program_id = value.lower()
                else:
                    logger.warning(f"PROGRAM_ID must be 64 hex characters, got {value!r}")
            case "addressing":
                try:
                    config.addressing = Addressing(value.lower())
                except ValueError:
                    logger.warning(f"Unknown ADDRESSING {value!r}, using {config.addressing.value}")
            case "removal_policy":
                try:
                    config.removal_policy = RemovalPolicy(value.lower())
                except ValueError:
                    logger.warning(
                        f"Unknown REMOVAL_POLICY {value!r}, using {config.removal_policy.value}"
                    )
            case "ledger_path":
                config.ledger_path = value
            case "default_owner":
                config.default_owner = value
            case "lamports_per_byte_year":
                config.lamports_per_byte_year = _parse_int(key, value, config.lamports_per_byte_year)
            case "exemption_threshold":
                config.exemption_threshold = _parse_int(key, value, config.exemption_threshold)
            case "airdrop_lamports":
                config.airdrop_lamports = _parse_int(key, value, config.airdrop_lamports)

    return config
