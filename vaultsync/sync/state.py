# VaultSync Sync State
# Ledger of fingerprints last known to match on both sides

from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml


class LedgerStore:
    """
    YAML persistence for the sync ledger.

    File layout::

        version: "1.0"
        last_sync: 2026-01-01T12:00:00
        entries:
          Notes/a.md: 0000002a0000002a0000002a0000002a
    """

    VERSION = "1.0"

    def __init__(self, path: Path):
        """
        Initialize store.

        Args:
            path: Ledger file path.
        """
        self.path = Path(path)

    def load(self) -> dict[str, str]:
        """Load entries; a missing or unreadable file yields an empty ledger."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError:
            return {}

        if not isinstance(data, dict):
            return {}

        entries = data.get("entries") or {}
        return {str(k): str(v) for k, v in entries.items()}

    def save(self, entries: dict[str, str]) -> None:
        """Write entries to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data: dict[str, Any] = {
            "version": self.VERSION,
            "last_sync": datetime.now().isoformat(),
            "entries": dict(sorted(entries.items())),
        }
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def clear(self) -> None:
        """Delete the ledger file."""
        self.path.unlink(missing_ok=True)


class SyncStateLedger:
    """
    Vault path -> fingerprint last seen identical locally and remotely.

    This is the common ancestor used to tell which side changed. The
    in-memory map is authoritative during a run; an optional store keeps
    it across restarts.
    """

    def __init__(self, store: Optional[LedgerStore] = None):
        """
        Initialize ledger.

        Args:
            store: Optional persistence (in-memory only if not provided).
        """
        self.store = store
        self._entries: dict[str, str] = store.load() if store else {}
        self._dirty = False

    def get(self, path: str) -> Optional[str]:
        """Last agreed fingerprint for a path, or None if never synced."""
        return self._entries.get(path)

    def set(self, path: str, fingerprint: str) -> None:
        """Record the fingerprint both sides agree on."""
        if self._entries.get(path) != fingerprint:
            self._entries[path] = fingerprint
            self._dirty = True

    def clear(self) -> None:
        """Remove all entries, including persisted ones."""
        self._entries.clear()
        self._dirty = False
        if self.store:
            self.store.clear()

    def flush(self) -> bool:
        """
        Persist pending changes.

        Returns:
            True if the store was written.
        """
        if self.store is None or not self._dirty:
            return False
        self.store.save(self._entries)
        self._dirty = False
        return True

    def snapshot(self) -> dict[str, str]:
        """Copy of all entries."""
        return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
