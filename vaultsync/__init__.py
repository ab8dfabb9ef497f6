"""VaultSync - bidirectional sync between a local vault and a file server.

Keeps folders of a local notes vault in sync with folders on a remote
sync server, using content fingerprints and a ledger of last agreed
fingerprints to tell which side changed.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "VaultSyncConfig",
    "load_config",
    "RemoteStoreClient",
    "RemoteStoreError",
    "SyncEngine",
    "Reconciler",
    "SyncStats",
    "SyncConflict",
    "ConflictChoice",
    "fingerprint",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("VaultSyncConfig", "load_config"):
        from vaultsync import config

        return getattr(config, name)
    if name in ("RemoteStoreClient", "RemoteStoreError"):
        from vaultsync import remote

        return getattr(remote, name)
    if name in ("SyncEngine", "Reconciler", "SyncStats", "SyncConflict", "ConflictChoice"):
        from vaultsync import sync

        return getattr(sync, name)
    if name == "fingerprint":
        from vaultsync.utils.hashing import fingerprint

        return fingerprint
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
