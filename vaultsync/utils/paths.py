# VaultSync Path Utilities
# Vault path mapping and safe file writes

import os
import tempfile
from pathlib import Path


def _clean(path: str) -> str:
    """Normalize separators and drop empty and '.' segments."""
    parts = [p for p in path.replace("\\", "/").split("/") if p not in ("", ".")]
    return "/".join(parts)


def normalize_root(raw: str | None) -> str:
    """
    Normalize a configured root folder.

    Empty values, "/" and "." all mean the vault root and map to "".

    Args:
        raw: Root path as configured.

    Returns:
        Root path without leading or trailing slashes.
    """
    value = (raw or "").strip()
    if value in ("", "/", "."):
        return ""
    return _clean(value)


def to_relative(root: str, full_path: str) -> str:
    """
    Get path relative to root.

    Paths outside of root are returned unchanged (normalized).

    Args:
        root: Root folder.
        full_path: Path to make relative.

    Returns:
        Relative path, or "" if full_path is the root itself.
    """
    r = normalize_root(root)
    f = _clean(full_path)
    if not r:
        return f
    if f == r:
        return ""
    if f.startswith(r + "/"):
        return f[len(r) + 1 :]
    return f


def join_path(root: str, relative: str) -> str:
    """
    Join a root folder and a relative path.

    Args:
        root: Root folder.
        relative: Path relative to root.

    Returns:
        Full path.
    """
    r = normalize_root(root)
    p = _clean(relative)
    if not r:
        return p
    return f"{r}/{p}" if p else r


def parent_folders(path: str) -> list[str]:
    """
    List ancestor folders of a path, outermost first.

    Args:
        path: File path, e.g. "a/b/c.md".

    Returns:
        Folder paths, e.g. ["a", "a/b"].
    """
    parts = _clean(path).split("/")[:-1]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = os.path.expanduser(str(path))
    path_str = os.path.expandvars(path_str)
    return Path(path_str).resolve()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    # Temp file in same directory for atomic rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
