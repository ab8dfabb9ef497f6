# Tests for vaultsync.sync.state
# Sync ledger and its YAML persistence

from pathlib import Path

import yaml

from vaultsync.sync.state import LedgerStore, SyncStateLedger


class TestSyncStateLedger:
    """Tests for the in-memory ledger."""

    def test_empty(self):
        ledger = SyncStateLedger()
        assert ledger.get("Notes/a.md") is None
        assert len(ledger) == 0

    def test_set_and_get(self):
        ledger = SyncStateLedger()
        ledger.set("Notes/a.md", "fp1")
        assert ledger.get("Notes/a.md") == "fp1"
        assert "Notes/a.md" in ledger

    def test_overwrite(self):
        ledger = SyncStateLedger()
        ledger.set("a.md", "fp1")
        ledger.set("a.md", "fp2")
        assert ledger.get("a.md") == "fp2"
        assert len(ledger) == 1

    def test_snapshot_is_a_copy(self):
        ledger = SyncStateLedger()
        ledger.set("a.md", "fp1")
        snap = ledger.snapshot()
        snap["b.md"] = "x"
        assert list(ledger) == ["a.md"]

    def test_flush_without_store(self):
        ledger = SyncStateLedger()
        ledger.set("a.md", "fp1")
        assert ledger.flush() is False


class TestLedgerStore:
    """Tests for ledger persistence."""

    def test_load_missing(self, temp_dir: Path):
        assert LedgerStore(temp_dir / "ledger.yaml").load() == {}

    def test_save_and_load(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "state" / "ledger.yaml")
        store.save({"b.md": "2", "a.md": "1"})

        assert store.load() == {"a.md": "1", "b.md": "2"}

        data = yaml.safe_load(store.path.read_text(encoding="utf-8"))
        assert data["version"] == LedgerStore.VERSION
        assert "last_sync" in data
        assert list(data["entries"]) == ["a.md", "b.md"]

    def test_load_corrupt_file(self, temp_dir: Path):
        path = temp_dir / "ledger.yaml"
        path.write_text("entries: [unclosed", encoding="utf-8")
        assert LedgerStore(path).load() == {}

    def test_load_non_mapping(self, temp_dir: Path):
        path = temp_dir / "ledger.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        assert LedgerStore(path).load() == {}

    def test_clear(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "ledger.yaml")
        store.save({"a.md": "1"})
        store.clear()
        assert not store.path.exists()
        store.clear()


class TestPersistentLedger:
    """Tests for a ledger backed by a store."""

    def test_loads_on_init(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "ledger.yaml")
        store.save({"a.md": "fp1"})

        assert SyncStateLedger(store).get("a.md") == "fp1"

    def test_flush_writes_changes(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "ledger.yaml")
        ledger = SyncStateLedger(store)
        ledger.set("a.md", "fp1")

        assert ledger.flush() is True
        assert SyncStateLedger(store).get("a.md") == "fp1"

    def test_flush_skips_when_clean(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "ledger.yaml")
        ledger = SyncStateLedger(store)
        ledger.set("a.md", "fp1")
        ledger.flush()

        ledger.set("a.md", "fp1")
        assert ledger.flush() is False

    def test_clear_removes_file(self, temp_dir: Path):
        store = LedgerStore(temp_dir / "ledger.yaml")
        ledger = SyncStateLedger(store)
        ledger.set("a.md", "fp1")
        ledger.flush()

        ledger.clear()

        assert len(ledger) == 0
        assert not store.path.exists()
