"""Persistence for the wallet id -> seed material mapping."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from free_usdc_transfer.errors import WalletStateError

SeedMapping = dict[str, dict[str, Any]]


class WalletStore:
    """Key-value persistence for wallet credentials.

    Implementations return an empty mapping when nothing has been stored
    and raise :class:`WalletStateError` when stored state cannot be read.
    """

    def load(self) -> SeedMapping:
        raise NotImplementedError

    def save(self, mapping: SeedMapping) -> None:
        raise NotImplementedError


class JsonFileWalletStore(WalletStore):
    """Stores the mapping in a single JSON file readable only by its owner."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> SeedMapping:
        if not self.path.exists():
            return {}

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise WalletStateError(
                f"Cannot read wallet state at {self.path}: {exc}",
                details={"path": str(self.path)},
            ) from exc

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise WalletStateError(
                f"Wallet state at {self.path} is not valid JSON: {exc}",
                details={"path": str(self.path)},
            ) from exc

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise WalletStateError(
                f"Wallet state at {self.path} is not a wallet id -> seed mapping",
                details={"path": str(self.path)},
            )
        return data

    def save(self, mapping: SeedMapping) -> None:
        """Write *mapping* atomically with ``0600`` permissions."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(mapping, fh, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, self.path)


class MemoryWalletStore(WalletStore):
    """In-process store, for tests and dry runs."""

    def __init__(self, mapping: SeedMapping | None = None) -> None:
        self._mapping: SeedMapping = dict(mapping or {})

    def load(self) -> SeedMapping:
        return dict(self._mapping)

    def save(self, mapping: SeedMapping) -> None:
        self._mapping = dict(mapping)
