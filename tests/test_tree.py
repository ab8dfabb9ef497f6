# Tests for vaultsync.sync.tree and vaultsync.sync.item
# Vault file handles and local tree scanning

from pathlib import Path

import pytest

from vaultsync.logger import SyncLogger
from vaultsync.sync.item import ALLOWED_EXTENSIONS, is_syncable, scan_local_tree
from vaultsync.sync.tree import LocalTree, VaultFile, VaultFolder
from vaultsync.utils.hashing import fingerprint


def _write(base: Path, path: str, content: str) -> None:
    target = base / path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


class TestVaultFile:
    """Tests for VaultFile."""

    def test_name_and_extension(self):
        f = VaultFile(path="Notes/Daily/today.md")
        assert f.name == "today.md"
        assert f.extension == "md"

    def test_no_extension(self):
        assert VaultFile(path="Notes/README").extension == ""

    def test_dotfile_has_no_extension(self):
        assert VaultFile(path=".gitignore").extension == ""

    def test_last_extension_only(self):
        assert VaultFile(path="a.tar.gz").extension == "gz"

    def test_modified_is_iso_utc(self):
        assert VaultFile(path="a.md", mtime=0).modified.startswith("1970-01-01T00:00:00")


class TestLocalTree:
    """Tests for LocalTree."""

    def test_get_missing(self, tree: LocalTree):
        assert tree.get("nope.md") is None

    def test_get_file(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/a.md", "hello")
        entry = tree.get("Notes/a.md")
        assert isinstance(entry, VaultFile)
        assert entry.size == 5

    def test_get_folder(self, tree: LocalTree, vault_dir: Path):
        (vault_dir / "Notes").mkdir()
        assert tree.get("Notes/") == VaultFolder(path="Notes")

    def test_root(self, tree: LocalTree):
        assert tree.root() == VaultFolder(path="")
        assert tree.get("") == VaultFolder(path="")

    def test_rejects_escape(self, tree: LocalTree):
        with pytest.raises(ValueError, match="escapes"):
            tree.get("../outside.md")

    def test_children_sorted(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "b.md", "b")
        _write(vault_dir, "a.md", "a")
        (vault_dir / "c").mkdir()

        names = [entry.path for entry in tree.children(tree.root())]
        assert names == ["a.md", "b.md", "c"]

    def test_children_of_subfolder(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/x.md", "x")
        children = tree.children(VaultFolder(path="Notes"))
        assert children[0].path == "Notes/x.md"

    def test_read_and_modify(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "a.md", "old")
        entry = tree.get("a.md")

        updated = tree.modify(entry, "newer")

        assert tree.read(updated) == "newer"
        assert updated.size == 5

    def test_read_keeps_line_endings(self, tree: LocalTree, vault_dir: Path):
        (vault_dir / "crlf.md").write_bytes(b"a\r\nb\rc\n")
        assert tree.read(tree.get("crlf.md")) == "a\r\nb\rc\n"

    def test_create(self, tree: LocalTree, vault_dir: Path):
        created = tree.create("Notes/new.md", "content")
        assert created.path == "Notes/new.md"
        assert (vault_dir / "Notes" / "new.md").read_text(encoding="utf-8") == "content"

    def test_create_existing_fails(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "a.md", "x")
        with pytest.raises(FileExistsError):
            tree.create("a.md", "y")

    def test_create_folder(self, tree: LocalTree, vault_dir: Path):
        assert tree.create_folder("a/b") == VaultFolder(path="a/b")
        assert (vault_dir / "a" / "b").is_dir()

    def test_ensure_parent_folder(self, tree: LocalTree, vault_dir: Path):
        tree.ensure_parent_folder("x/y/z.md")
        assert (vault_dir / "x" / "y").is_dir()
        assert not (vault_dir / "x" / "y" / "z.md").exists()


class TestScanLocalTree:
    """Tests for scan_local_tree."""

    def test_allowed_extensions(self):
        assert ALLOWED_EXTENSIONS == {"md", "writing", "drawing", "canvas", "json", "txt", "yml", "yaml"}

    def test_is_syncable(self):
        assert is_syncable("a.md")
        assert is_syncable("Notes/Daily/b.canvas")
        assert not is_syncable("img.png")
        assert not is_syncable("noext")
        assert not is_syncable(".md")
        assert not is_syncable("dir.md/file")
        assert not is_syncable("LOUD.MD")

    def test_scan_recursive(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/a.md", "a")
        _write(vault_dir, "Notes/Daily/b.md", "b")
        _write(vault_dir, "Notes/Daily/Deep/c.txt", "c")

        entries = scan_local_tree(tree, "Notes")

        assert set(entries) == {"a.md", "Daily/b.md", "Daily/Deep/c.txt"}
        assert entries["Daily/b.md"].file.path == "Notes/Daily/b.md"

    def test_fingerprint_and_content(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/a.md", "hello")

        entry = scan_local_tree(tree, "Notes")["a.md"]

        assert entry.content == "hello"
        assert entry.fingerprint == fingerprint("hello")

    def test_algorithm(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "a.md", "hello")
        entry = scan_local_tree(tree, "", algorithm="sha256")["a.md"]
        assert entry.fingerprint == fingerprint("hello", algorithm="sha256")

    def test_filters_extensions(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/keep.md", "x")
        _write(vault_dir, "Notes/image.png", "x")
        _write(vault_dir, "Notes/script.py", "x")
        _write(vault_dir, "Notes/noext", "x")

        assert list(scan_local_tree(tree, "Notes")) == ["keep.md"]

    def test_extension_check_is_case_sensitive(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "LOUD.MD", "x")
        assert scan_local_tree(tree, "") == {}

    def test_all_allowed_extensions_included(self, tree: LocalTree, vault_dir: Path):
        for ext in ALLOWED_EXTENSIONS:
            _write(vault_dir, f"f.{ext}", ext)
        assert len(scan_local_tree(tree, "")) == len(ALLOWED_EXTENSIONS)

    def test_vault_root(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "top.md", "x")
        _write(vault_dir, "Notes/a.md", "y")
        assert set(scan_local_tree(tree, "/")) == {"top.md", "Notes/a.md"}

    def test_traversal_order(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "b.md", "x")
        _write(vault_dir, "a/z.md", "x")
        _write(vault_dir, "a/b/y.md", "x")
        _write(vault_dir, "c.md", "x")

        assert list(scan_local_tree(tree, "")) == ["a/b/y.md", "a/z.md", "b.md", "c.md"]

    def test_missing_root(self, tree: LocalTree):
        assert scan_local_tree(tree, "Missing") == {}

    def test_root_is_a_file(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes", "not a folder")
        assert scan_local_tree(tree, "Notes") == {}

    def test_deep_tree(self, tree: LocalTree, vault_dir: Path):
        path = "/".join(f"d{i}" for i in range(60)) + "/leaf.md"
        _write(vault_dir, path, "deep")
        assert list(scan_local_tree(tree, "")) == [path]

    def test_snapshot(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/a.md", "hello")
        snap = scan_local_tree(tree, "Notes")["a.md"].snapshot("a.md")
        assert snap.relative_path == "a.md"
        assert snap.content == "hello"
        assert snap.size == 5

    def test_snapshot_with_content(self, tree: LocalTree, vault_dir: Path):
        _write(vault_dir, "Notes/a.md", "hello")
        snap = scan_local_tree(tree, "Notes")["a.md"].snapshot("a.md", "edited")
        assert snap.content == "edited"

    def test_skips_undecodable_files(self, tree: LocalTree, vault_dir: Path, sync_logger: SyncLogger, log_output):
        _write(vault_dir, "Notes/a.md", "fine")
        (vault_dir / "Notes" / "b.md").write_bytes(b"\xff\xfe\x00bad")

        entries = scan_local_tree(tree, "Notes", logger=sync_logger)

        assert list(entries) == ["a.md"]
        assert "Skipping Notes/b.md: not valid UTF-8" in log_output.getvalue()

    def test_undecodable_without_logger(self, tree: LocalTree, vault_dir: Path):
        (vault_dir / "b.md").write_bytes(b"\xff")
        assert scan_local_tree(tree, "") == {}
