# VaultSync Remote Module
# HTTP client for the sync server

from vaultsync.remote.client import ConnectionStatus, RemoteFile, RemoteStoreClient, RemoteStoreError

__all__ = [
    "RemoteStoreClient",
    "RemoteStoreError",
    "RemoteFile",
    "ConnectionStatus",
]
