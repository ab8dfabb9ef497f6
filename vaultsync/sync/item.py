# VaultSync Sync Item
# File snapshots and local tree scanning

from dataclasses import dataclass
from typing import Optional

from vaultsync.logger import SyncLogger
from vaultsync.sync.tree import LocalTree, VaultFile, VaultFolder
from vaultsync.utils.hashing import ROLLING, fingerprint
from vaultsync.utils.paths import normalize_root, to_relative

ALLOWED_EXTENSIONS = frozenset({"md", "writing", "drawing", "canvas", "json", "txt", "yml", "yaml"})


def is_syncable(path: str) -> bool:
    """Check if a file path has an extension that is synced."""
    name = path.rsplit("/", 1)[-1].lstrip(".")
    return "." in name and name.rsplit(".", 1)[-1] in ALLOWED_EXTENSIONS


@dataclass
class FileSnapshot:
    """Observed state of one file, local or remote, at scan time."""

    relative_path: str
    fingerprint: str
    size: int = 0
    modified: Optional[str] = None
    content: Optional[str] = None


@dataclass
class LocalEntry:
    """A scanned local file."""

    file: VaultFile
    fingerprint: str
    content: str

    def snapshot(self, relative_path: str, content: Optional[str] = None) -> FileSnapshot:
        """Snapshot of this entry, with content re-read by the caller if given."""
        return FileSnapshot(
            relative_path=relative_path,
            fingerprint=self.fingerprint,
            size=self.file.size,
            modified=self.file.modified,
            content=self.content if content is None else content,
        )


def scan_local_tree(
    tree: LocalTree,
    root: str,
    *,
    algorithm: str = ROLLING,
    logger: Optional[SyncLogger] = None,
) -> dict[str, LocalEntry]:
    """
    Scan a vault folder for syncable files.

    Walks subfolders with an explicit stack (pre-order, children sorted by name).
    Only files with an allowed extension are included. Files that are not
    valid UTF-8 are logged and left out.

    Args:
        tree: Vault file tree.
        root: Folder to scan ("" for the vault root).
        algorithm: Fingerprint algorithm.
        logger: Receives a warning for each unreadable file.

    Returns:
        Dict of path relative to root to LocalEntry, in traversal order.
    """
    local_root = normalize_root(root)
    start = tree.get(local_root) if local_root else tree.root()
    entries: dict[str, LocalEntry] = {}

    if not isinstance(start, VaultFolder):
        return entries

    stack: list[VaultFolder | VaultFile] = [start]
    while stack:
        entry = stack.pop()

        if isinstance(entry, VaultFolder):
            # Reversed so the first child is visited first
            stack.extend(reversed(tree.children(entry)))
            continue

        if not is_syncable(entry.path):
            continue

        try:
            content = tree.read(entry)
        except UnicodeDecodeError:
            if logger:
                logger.warning(f"Skipping {entry.path}: not valid UTF-8")
            continue

        entries[to_relative(local_root, entry.path)] = LocalEntry(
            file=entry,
            fingerprint=fingerprint(content, algorithm=algorithm),
            content=content,
        )

    return entries
