# VaultSync Configuration Schema
# Pydantic models for YAML configuration validation

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from vaultsync.utils.hashing import ROLLING, SUPPORTED_ALGORITHMS
from vaultsync.utils.paths import expand_path


class ConflictPolicy(str, Enum):
    """How conflicts are resolved when both sides changed."""

    ASK = "ask"
    LOCAL = "local"
    REMOTE = "remote"
    SKIP = "skip"


class ServerConfig(BaseModel):
    """Remote sync server settings."""

    url: str = Field(default="http://localhost:8787", description="Base URL of the sync server")
    token: str | None = Field(default=None, description="Bearer token (prefer token_env)")
    token_env: str = Field(default="VAULTSYNC_TOKEN", description="Environment variable holding the bearer token")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_writes: bool = Field(default=False, description="Treat writes whose returned hash differs as errors")

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop trailing slashes so endpoints can be appended."""
        return v.rstrip("/")

    def resolve_token(self) -> str:
        """Resolve the bearer token, environment first."""
        return os.environ.get(self.token_env) or self.token or ""


class SyncPathConfig(BaseModel):
    """One local folder paired with one remote folder."""

    local_path: str = Field(default="", description="Folder inside the vault ('' for vault root)")
    remote_path: str = Field(default="", description="Folder on the sync server ('' for server root)")
    enabled: bool = Field(default=True, description="Whether this path pair is synced")
    description: str = Field(default="", description="Human-readable description")

    @property
    def label(self) -> str:
        """Display label for this path pair."""
        return f"{self.local_path or '/'} <-> {self.remote_path or '/'}"


class AutoSyncConfig(BaseModel):
    """Periodic sync settings."""

    enabled: bool = Field(default=False, description="Run sync periodically")
    interval_minutes: float = Field(default=5, ge=0, description="Minutes between runs")
    conflict_policy: ConflictPolicy = Field(
        default=ConflictPolicy.SKIP, description="Conflict policy for periodic runs ('ask' skips)"
    )


class StateConfig(BaseModel):
    """Sync ledger persistence."""

    persist: bool = Field(default=True, description="Persist the sync ledger across restarts")
    path: str = Field(
        default="~/.config/vaultsync/ledger.yaml",
        validate_default=True,
        description="Ledger file path",
    )

    @field_validator("path")
    @classmethod
    def expand_ledger_path(cls, v: str) -> str:
        """Expand ~ and environment variables in path."""
        return str(expand_path(v))


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ and environment variables in optional path."""
        if v is None:
            return None
        return str(expand_path(v))


class VaultSyncConfig(BaseModel):
    """Root configuration model for VaultSync."""

    vault: str = Field(description="Local vault directory")
    server: ServerConfig = Field(default_factory=ServerConfig, description="Sync server settings")
    sync_paths: list[SyncPathConfig] = Field(default_factory=list, description="Path pairs to sync")
    conflict_policy: ConflictPolicy = Field(
        default=ConflictPolicy.ASK, description="Conflict policy for manual sync runs"
    )
    auto_sync: AutoSyncConfig = Field(default_factory=AutoSyncConfig, description="Periodic sync settings")
    fingerprint_algorithm: str = Field(default=ROLLING, description="Content fingerprint algorithm")
    state: StateConfig = Field(default_factory=StateConfig, description="Ledger persistence")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("vault")
    @classmethod
    def expand_vault(cls, v: str) -> str:
        """Expand ~ in vault path."""
        return str(Path(v).expanduser())

    @field_validator("fingerprint_algorithm")
    @classmethod
    def check_algorithm(cls, v: str) -> str:
        """Reject fingerprint algorithms we cannot compute."""
        if v not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"unsupported fingerprint algorithm '{v}'")
        return v

    def get_enabled_paths(self) -> list[SyncPathConfig]:
        """Return only enabled path pairs, in declaration order."""
        return [p for p in self.sync_paths if p.enabled]
