# VaultSync Sync Actions
# Action types, classification and result types for synchronization

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vaultsync.sync.item import FileSnapshot


class ActionType(str, Enum):
    """Types of sync actions."""

    # No transfer needed
    UNCHANGED = "unchanged"

    # Transfers
    PULL = "pull"  # Remote to local
    PUSH = "push"  # Local to remote

    # Both sides changed since last sync
    CONFLICT = "conflict"


class ConflictChoice(str, Enum):
    """Resolution returned by a conflict resolver."""

    LOCAL = "local"
    REMOTE = "remote"
    SKIP = "skip"


@dataclass
class SyncConflict:
    """A path changed on both sides since the last agreed fingerprint."""

    local_path: str
    remote_path: str
    local_file: FileSnapshot
    remote_file: FileSnapshot


@dataclass
class SyncAction:
    """
    Planned action for one path.

    Represents what a sync run would do for a relative path,
    with the fingerprints the decision was based on.
    """

    relative_path: str
    local_path: str
    remote_path: str
    action_type: ActionType
    local_fingerprint: Optional[str] = None
    remote_fingerprint: Optional[str] = None
    known_fingerprint: Optional[str] = None
    reason: str = ""

    @property
    def is_new(self) -> bool:
        """Check if the target side does not have the file yet."""
        if self.action_type == ActionType.PULL:
            return self.local_fingerprint is None
        if self.action_type == ActionType.PUSH:
            return self.remote_fingerprint is None
        return False

    @property
    def needs_action(self) -> bool:
        """Check if this action transfers content or needs a decision."""
        return self.action_type != ActionType.UNCHANGED

    @property
    def direction(self) -> str:
        """Get human-readable direction of action."""
        if self.action_type == ActionType.PUSH:
            return "local → remote"
        elif self.action_type == ActionType.PULL:
            return "remote → local"
        elif self.action_type == ActionType.CONFLICT:
            return "local ↔ remote"
        else:
            return "—"


@dataclass
class SyncStats:
    """Counters for one path pair or a whole run."""

    pulled: int = 0
    pushed: int = 0
    conflicts: int = 0
    errors: int = 0

    def __iadd__(self, other: "SyncStats") -> "SyncStats":
        self.pulled += other.pulled
        self.pushed += other.pushed
        self.conflicts += other.conflicts
        self.errors += other.errors
        return self

    @property
    def has_transfers(self) -> bool:
        """Check if anything was pulled or pushed."""
        return self.pulled > 0 or self.pushed > 0


def determine_action(
    local_fingerprint: Optional[str],
    remote_fingerprint: Optional[str],
    known_fingerprint: Optional[str],
) -> ActionType:
    """
    Classify a path from its local, remote and last agreed fingerprints.

    A bare mismatch cannot tell which side moved; the last agreed
    fingerprint decides. Without one, local is assumed unchanged and
    remote wins.

    Args:
        local_fingerprint: Local fingerprint, None if the file is remote only.
        remote_fingerprint: Remote fingerprint, None if the file is local only.
        known_fingerprint: Ledger entry, None if never synced.

    Returns:
        ActionType for the path.
    """
    if local_fingerprint is None and remote_fingerprint is None:
        raise ValueError("Path exists on neither side")

    if local_fingerprint is None:
        return ActionType.PULL

    if remote_fingerprint is None:
        return ActionType.PUSH

    if local_fingerprint == remote_fingerprint:
        return ActionType.UNCHANGED

    if known_fingerprint and known_fingerprint != local_fingerprint and known_fingerprint != remote_fingerprint:
        return ActionType.CONFLICT

    if not known_fingerprint or known_fingerprint == local_fingerprint:
        return ActionType.PULL

    return ActionType.PUSH


def describe_action(action_type: ActionType, *, is_new: bool, known: bool) -> str:
    """Short reason text for a classified action."""
    if action_type == ActionType.UNCHANGED:
        return "Identical on both sides"
    if action_type == ActionType.CONFLICT:
        return "Changed locally and remotely since last sync"
    if action_type == ActionType.PULL:
        if is_new:
            return "Only on remote"
        return "Changed remotely" if known else "Differs, never synced (remote wins)"
    return "Only in vault" if is_new else "Changed locally"
