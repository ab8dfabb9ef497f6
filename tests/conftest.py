# VaultSync Test Fixtures
# Pytest fixtures for VaultSync tests

import tempfile
from collections.abc import Generator
from io import StringIO
from pathlib import Path
from typing import Optional

import pytest
import yaml
from rich.console import Console as RichConsole

from vaultsync.config.schema import SyncPathConfig, VaultSyncConfig
from vaultsync.logger import SyncLogger
from vaultsync.remote.client import ConnectionStatus, RemoteFile, RemoteStoreError
from vaultsync.sync.state import SyncStateLedger
from vaultsync.sync.tree import LocalTree
from vaultsync.utils.hashing import fingerprint


class FakeRemoteStore:
    """In-memory sync server with the RemoteStoreClient interface."""

    def __init__(self, files: Optional[dict[str, str]] = None):
        self.files: dict[str, str] = dict(files or {})
        self.reads: list[str] = []
        self.writes: list[tuple[str, str, Optional[str]]] = []
        self.fail_list = False
        self.fail_read: set[str] = set()
        self.fail_write: set[str] = set()
        # Hash reported by write responses instead of the real one
        self.write_hash_override: Optional[str] = None

    def _meta(self, path: str, with_content: bool = False) -> RemoteFile:
        content = self.files[path]
        return RemoteFile(
            path=path,
            size=len(content.encode("utf-8")),
            modified="2026-01-01T00:00:00Z",
            hash=fingerprint(content),
            content=content if with_content else None,
        )

    def list_remote(self, path: str) -> list[RemoteFile]:
        if self.fail_list:
            raise RemoteStoreError("HTTP 500", status_code=500)
        prefix = f"{path}/" if path else ""
        return [self._meta(p) for p in self.files if p.startswith(prefix)]

    def read_remote(self, path: str) -> RemoteFile:
        if path in self.fail_read:
            raise RemoteStoreError("HTTP 503", status_code=503)
        if path not in self.files:
            raise RemoteStoreError("Not found", status_code=404)
        self.reads.append(path)
        return self._meta(path, with_content=True)

    def write_remote(self, path: str, content: str, expected_hash: Optional[str] = None) -> RemoteFile:
        if path in self.fail_write:
            raise RemoteStoreError("HTTP 500", status_code=500)
        self.writes.append((path, content, expected_hash))
        self.files[path] = content
        meta = self._meta(path)
        if self.write_hash_override is not None:
            meta.hash = self.write_hash_override
        return meta

    def test_connection(self) -> ConnectionStatus:
        return ConnectionStatus(ok=True)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("VAULTSYNC_CONFIG", raising=False)
    monkeypatch.delenv("VAULTSYNC_TOKEN", raising=False)
    return home


@pytest.fixture
def vault_dir(temp_dir: Path) -> Path:
    """Create an empty vault directory."""
    vault = temp_dir / "vault"
    vault.mkdir()
    return vault


@pytest.fixture
def tree(vault_dir: Path) -> LocalTree:
    """Vault tree over the temporary vault."""
    return LocalTree(vault_dir)


@pytest.fixture
def remote() -> FakeRemoteStore:
    """Empty in-memory sync server."""
    return FakeRemoteStore()


@pytest.fixture
def ledger() -> SyncStateLedger:
    """In-memory ledger."""
    return SyncStateLedger()


@pytest.fixture
def log_output() -> StringIO:
    """Buffer receiving logger output."""
    return StringIO()


@pytest.fixture
def sync_logger(log_output: StringIO) -> SyncLogger:
    """Logger writing to a captured, uncolored console."""
    return SyncLogger(RichConsole(file=log_output, no_color=True, width=200), verbose=True)


@pytest.fixture
def notes_pair() -> SyncPathConfig:
    """Path pair mapping vault folder Notes to server folder notes."""
    return SyncPathConfig(local_path="Notes", remote_path="notes")


@pytest.fixture
def sample_config(temp_home: Path, vault_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "vault": str(vault_dir),
        "server": {
            "url": "https://sync.example.com/",
            "token": "secret-token",
            "timeout": 10,
        },
        "sync_paths": [
            {"local_path": "Notes", "remote_path": "notes", "description": "Notes"},
            {"local_path": "Archive", "remote_path": "archive", "enabled": False},
        ],
        "conflict_policy": "skip",
        "state": {"persist": True, "path": str(temp_home / ".config" / "vaultsync" / "ledger.yaml")},
        "output": {"verbose": False, "colored": False, "log_file": None},
    }


@pytest.fixture
def vaultsync_config(sample_config: dict) -> VaultSyncConfig:
    """Validated configuration object."""
    return VaultSyncConfig.model_validate(sample_config)


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "vaultsync"
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
