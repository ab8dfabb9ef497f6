# VaultSync Local Tree
# File and folder handles over a vault directory on disk

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from vaultsync.utils.paths import atomic_write, normalize_root, parent_folders


@dataclass(frozen=True)
class VaultFolder:
    """A folder inside the vault ("" is the vault root)."""

    path: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class VaultFile:
    """A regular file inside the vault."""

    path: str
    size: int = 0
    mtime: float = 0.0

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def extension(self) -> str:
        """Extension without the dot, "" if none."""
        name = self.name
        if "." not in name.lstrip("."):
            return ""
        return name.rsplit(".", 1)[-1]

    @property
    def modified(self) -> str:
        """Modification time as ISO 8601 UTC string."""
        return datetime.fromtimestamp(self.mtime, tz=timezone.utc).isoformat()


VaultEntry = Union[VaultFile, VaultFolder]


class LocalTree:
    """
    Vault file tree addressed with POSIX paths relative to the vault directory.
    """

    def __init__(self, base: Path):
        """
        Initialize tree.

        Args:
            base: Vault directory on disk.
        """
        self.base = Path(base)

    def _resolve(self, path: str) -> Path:
        rel = normalize_root(path)
        if ".." in rel.split("/"):
            raise ValueError(f"Path escapes the vault: {path}")
        return self.base / rel if rel else self.base

    def _file(self, path: str, target: Path) -> VaultFile:
        stat = target.stat()
        return VaultFile(path=normalize_root(path), size=stat.st_size, mtime=stat.st_mtime)

    def root(self) -> VaultFolder:
        return VaultFolder(path="")

    def get(self, path: str) -> Optional[VaultEntry]:
        """
        Resolve a path to an existing file or folder.

        Returns:
            VaultFile, VaultFolder, or None if nothing exists there.
        """
        target = self._resolve(path)
        if target.is_dir():
            return VaultFolder(path=normalize_root(path))
        if target.is_file():
            return self._file(path, target)
        return None

    def children(self, folder: VaultFolder) -> list[VaultEntry]:
        """Direct children of a folder, sorted by name."""
        target = self._resolve(folder.path)
        entries: list[VaultEntry] = []

        for child in sorted(target.iterdir(), key=lambda p: p.name):
            child_path = f"{folder.path}/{child.name}" if folder.path else child.name
            if child.is_dir():
                entries.append(VaultFolder(path=child_path))
            elif child.is_file():
                entries.append(self._file(child_path, child))

        return entries

    def read(self, file: VaultFile) -> str:
        """Read full file content."""
        with open(self._resolve(file.path), encoding="utf-8", newline="") as f:
            return f.read()

    def modify(self, file: VaultFile, content: str) -> VaultFile:
        """Overwrite an existing file."""
        target = self._resolve(file.path)
        atomic_write(target, content)
        return self._file(file.path, target)

    def create(self, path: str, content: str) -> VaultFile:
        """
        Create a new file.

        Raises:
            FileExistsError: If something already exists at path.
        """
        target = self._resolve(path)
        if target.exists():
            raise FileExistsError(f"File already exists: {path}")
        atomic_write(target, content)
        return self._file(path, target)

    def create_folder(self, path: str) -> VaultFolder:
        """Create a folder (and missing parents)."""
        self._resolve(path).mkdir(parents=True, exist_ok=True)
        return VaultFolder(path=normalize_root(path))

    def ensure_parent_folder(self, path: str) -> None:
        """Create each missing ancestor folder of a file path."""
        for folder in parent_folders(path):
            if self.get(folder) is None:
                self.create_folder(folder)
