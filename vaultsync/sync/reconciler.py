# VaultSync Reconciler
# Reconciles one vault folder with one remote folder

from typing import Optional, Union

from vaultsync.config.schema import SyncPathConfig
from vaultsync.logger import SyncLogger
from vaultsync.remote.client import RemoteFile, RemoteStoreClient, RemoteStoreError
from vaultsync.sync.actions import (
    ActionType,
    ConflictChoice,
    SyncAction,
    SyncConflict,
    SyncStats,
    describe_action,
    determine_action,
)
from vaultsync.sync.item import FileSnapshot, LocalEntry, is_syncable, scan_local_tree
from vaultsync.sync.resolvers import ConflictResolver
from vaultsync.sync.state import SyncStateLedger
from vaultsync.sync.tree import LocalTree
from vaultsync.utils.hashing import ROLLING
from vaultsync.utils.paths import join_path, normalize_root, to_relative


class Reconciler:
    """
    Reconciles a path pair between the vault and the sync server.

    Classifies every path as pull, push, conflict or unchanged using
    the ledger as the last common state, then executes the transfers.
    """

    def __init__(
        self,
        tree: LocalTree,
        client: RemoteStoreClient,
        ledger: SyncStateLedger,
        *,
        logger: Optional[SyncLogger] = None,
        fingerprint_algorithm: str = ROLLING,
        verify_writes: bool = False,
    ):
        """
        Initialize reconciler.

        Args:
            tree: Vault file tree.
            client: Sync server client.
            ledger: Ledger of last agreed fingerprints (mutated by reconcile).
            logger: Optional logger (creates one if not provided).
            fingerprint_algorithm: Algorithm used for local fingerprints.
            verify_writes: Fail a push when the server reports a different hash.
        """
        self.tree = tree
        self.client = client
        self.ledger = ledger
        self.logger = logger or SyncLogger()
        self.fingerprint_algorithm = fingerprint_algorithm
        self.verify_writes = verify_writes

    def _snapshot(self, remote_root: str, local_root: str) -> tuple[dict[str, RemoteFile], dict[str, LocalEntry]]:
        """List remote and scan local, both keyed by path relative to their root."""
        remote_map: dict[str, RemoteFile] = {}
        for remote_file in self.client.list_remote(remote_root):
            if not is_syncable(remote_file.path):
                continue
            remote_map[to_relative(remote_root, remote_file.path)] = remote_file

        local_map = scan_local_tree(self.tree, local_root, algorithm=self.fingerprint_algorithm, logger=self.logger)
        return remote_map, local_map

    def plan(self, config: SyncPathConfig) -> list[SyncAction]:
        """
        Classify every path without transferring anything.

        Args:
            config: Path pair to inspect.

        Returns:
            One action per path: remote paths in listing order, then local-only paths.

        Raises:
            RemoteStoreError: If the remote listing fails.
            OSError: If the local scan fails.
        """
        local_root = normalize_root(config.local_path)
        remote_root = normalize_root(config.remote_path)
        remote_map, local_map = self._snapshot(remote_root, local_root)

        actions: list[SyncAction] = []
        paths = list(remote_map) + [p for p in local_map if p not in remote_map]

        for relative_path in paths:
            remote_file = remote_map.get(relative_path)
            local_entry = local_map.get(relative_path)
            local_path = join_path(local_root, relative_path)
            local_fp = local_entry.fingerprint if local_entry else None
            remote_fp = remote_file.hash if remote_file else None
            known = self.ledger.get(local_path)

            action = SyncAction(
                relative_path=relative_path,
                local_path=local_path,
                remote_path=join_path(remote_root, relative_path),
                action_type=determine_action(local_fp, remote_fp, known),
                local_fingerprint=local_fp,
                remote_fingerprint=remote_fp,
                known_fingerprint=known,
            )
            action.reason = describe_action(action.action_type, is_new=action.is_new, known=known is not None)
            actions.append(action)

        return actions

    def reconcile(self, config: SyncPathConfig, resolve_conflict: ConflictResolver) -> SyncStats:
        """
        Synchronize one path pair.

        Listing or scan failures abort the pair and count as one error.
        Failures for individual files are logged, counted and skipped.

        Args:
            config: Path pair to synchronize.
            resolve_conflict: Called for each path changed on both sides.

        Returns:
            SyncStats for this path pair.
        """
        stats = SyncStats()
        local_root = normalize_root(config.local_path)
        remote_root = normalize_root(config.remote_path)

        try:
            # The vault root always exists
            if local_root and self.tree.get(local_root) is None:
                self.tree.create_folder(local_root)
            remote_map, local_map = self._snapshot(remote_root, local_root)
        except Exception as e:
            self.logger.error(f"Sync failed for {config.label}: {e}")
            stats.errors += 1
            return stats

        for relative_path, remote_file in remote_map.items():
            try:
                self._sync_remote_path(
                    relative_path,
                    local_map.get(relative_path),
                    remote_file,
                    local_path=join_path(local_root, relative_path),
                    remote_path=join_path(remote_root, relative_path),
                    stats=stats,
                    resolve_conflict=resolve_conflict,
                )
            except Exception as e:
                self.logger.error(f"Sync error for {relative_path}: {e}")
                stats.errors += 1

        for relative_path, local_entry in local_map.items():
            if relative_path in remote_map:
                continue
            local_path = join_path(local_root, relative_path)
            try:
                self._push(join_path(remote_root, relative_path), local_entry.content, local_entry.fingerprint)
                self.ledger.set(local_path, local_entry.fingerprint)
                stats.pushed += 1
                self.logger.debug(f"Pushed new file {local_path}")
            except Exception as e:
                self.logger.error(f"Push error for {relative_path}: {e}")
                stats.errors += 1

        return stats

    def _sync_remote_path(
        self,
        relative_path: str,
        local_entry: Optional[LocalEntry],
        remote_file: RemoteFile,
        *,
        local_path: str,
        remote_path: str,
        stats: SyncStats,
        resolve_conflict: ConflictResolver,
    ) -> None:
        """Handle one path that exists on the remote side."""
        known = self.ledger.get(local_path)
        action_type = determine_action(
            local_entry.fingerprint if local_entry else None,
            remote_file.hash,
            known,
        )

        if local_entry is None:
            remote = self.client.read_remote(remote_path)
            self.tree.ensure_parent_folder(local_path)
            self.tree.create(local_path, remote.content or "")
            self.ledger.set(local_path, remote.hash or remote_file.hash)
            stats.pulled += 1
            self.logger.debug(f"Pulled new file {local_path}")

        elif action_type == ActionType.UNCHANGED:
            self.ledger.set(local_path, local_entry.fingerprint)

        elif action_type == ActionType.CONFLICT:
            self._resolve(relative_path, local_entry, remote_file, local_path, remote_path, stats, resolve_conflict)

        elif action_type == ActionType.PULL:
            remote = self.client.read_remote(remote_path)
            self.tree.modify(local_entry.file, remote.content or "")
            self.ledger.set(local_path, remote.hash or remote_file.hash)
            stats.pulled += 1
            self.logger.debug(f"Pulled {local_path}")

        else:
            self._push(remote_path, local_entry.content, local_entry.fingerprint, expected_hash=remote_file.hash)
            self.ledger.set(local_path, local_entry.fingerprint)
            stats.pushed += 1
            self.logger.debug(f"Pushed {local_path}")

    def _resolve(
        self,
        relative_path: str,
        local_entry: LocalEntry,
        remote_file: RemoteFile,
        local_path: str,
        remote_path: str,
        stats: SyncStats,
        resolve_conflict: ConflictResolver,
    ) -> None:
        """Ask the resolver about a conflicting path and apply its answer."""
        remote = self.client.read_remote(remote_path)
        local_content = self.tree.read(local_entry.file)

        conflict = SyncConflict(
            local_path=local_path,
            remote_path=remote_path,
            local_file=local_entry.snapshot(relative_path, local_content),
            remote_file=FileSnapshot(
                relative_path=relative_path,
                fingerprint=remote_file.hash,
                size=remote_file.size,
                modified=remote_file.modified,
                content=remote.content or "",
            ),
        )

        choice = _coerce_choice(resolve_conflict(conflict))

        if choice == ConflictChoice.LOCAL:
            self._push(remote_path, local_content, local_entry.fingerprint)
            self.ledger.set(local_path, local_entry.fingerprint)
            stats.pushed += 1
            self.logger.debug(f"Conflict on {local_path} resolved: kept local")
        elif choice == ConflictChoice.REMOTE:
            self.tree.modify(local_entry.file, remote.content or "")
            self.ledger.set(local_path, remote_file.hash)
            stats.pulled += 1
            self.logger.debug(f"Conflict on {local_path} resolved: kept remote")
        else:
            stats.conflicts += 1
            self.logger.warning(f"Conflict skipped: {local_path}")

    def _push(
        self,
        remote_path: str,
        content: str,
        local_fingerprint: str,
        *,
        expected_hash: Optional[str] = None,
    ) -> RemoteFile:
        """Write content to the server, optionally checking the stored hash."""
        written = self.client.write_remote(remote_path, content, expected_hash)

        if self.verify_writes and written.hash and written.hash != local_fingerprint:
            raise RemoteStoreError(
                f"Write to {remote_path} not applied (server has {written.hash}, expected {local_fingerprint})"
            )

        return written


def _coerce_choice(value: Union[ConflictChoice, str, None]) -> ConflictChoice:
    """Accept enum members or their string values; anything else skips."""
    try:
        return ConflictChoice(value)
    except ValueError:
        return ConflictChoice.SKIP

