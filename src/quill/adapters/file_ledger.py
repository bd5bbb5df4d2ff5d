"""File-based ledger adapter."""

import base64
import fcntl
import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from quill.transaction import StoredAccount

from .memory_ledger import InMemoryLedger, Rent


class FileLedger(InMemoryLedger):
    """
    Ledger persisted as a single JSON file.

    Implements Ledger protocol. Every access takes an exclusive lock on a
    sibling .lock file and reloads the state, so separate processes see each
    other's commits. Saves go through a temp file and os.replace.
    """

    def __init__(self, path: Path | str, rent: Rent | None = None):
        super().__init__(rent)
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, open(self._lock_path, "a") as lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                self._load()
                yield
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)

    def _load(self) -> None:
        if not self.path.exists():
            self._accounts, self._versions, self._balances = {}, {}, {}
            return
        state = json.loads(self.path.read_text())
        self._accounts = {
            address: StoredAccount(
                data=base64.b64decode(raw["data"]),
                lamports=raw["lamports"],
                version=raw["version"],
            )
            for address, raw in state.get("accounts", {}).items()
        }
        self._versions = dict(state.get("versions", {}))
        self._balances = dict(state.get("balances", {}))

    def _persist(self) -> None:
        state = {
            "accounts": {
                address: {
                    "data": base64.b64encode(account.data).decode("ascii"),
                    "lamports": account.lamports,
                    "version": account.version,
                }
                for address, account in self._accounts.items()
            },
            "versions": self._versions,
            "balances": self._balances,
        }
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(state))
        os.replace(tmp, self.path)
