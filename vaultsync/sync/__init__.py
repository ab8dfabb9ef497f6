# VaultSync Sync Module
# Core reconciliation engine and components

from vaultsync.sync.actions import (
    ActionType,
    ConflictChoice,
    SyncAction,
    SyncConflict,
    SyncStats,
    determine_action,
)
from vaultsync.sync.engine import SyncAlreadyRunningError, SyncEngine
from vaultsync.sync.item import ALLOWED_EXTENSIONS, FileSnapshot, LocalEntry, scan_local_tree
from vaultsync.sync.reconciler import Reconciler
from vaultsync.sync.resolvers import ConflictResolver, policy_resolver
from vaultsync.sync.state import LedgerStore, SyncStateLedger
from vaultsync.sync.tree import LocalTree, VaultFile, VaultFolder

__all__ = [
    # Tree and items
    "LocalTree",
    "VaultFile",
    "VaultFolder",
    "FileSnapshot",
    "LocalEntry",
    "ALLOWED_EXTENSIONS",
    "scan_local_tree",
    # Actions
    "ActionType",
    "ConflictChoice",
    "SyncAction",
    "SyncConflict",
    "SyncStats",
    "determine_action",
    # Resolvers
    "ConflictResolver",
    "policy_resolver",
    # State
    "SyncStateLedger",
    "LedgerStore",
    # Reconciliation
    "Reconciler",
    "SyncEngine",
    "SyncAlreadyRunningError",
]
