# VaultSync Utilities Module
# Helper functions for path mapping and content fingerprints

from vaultsync.utils.hashing import (
    ROLLING,
    SUPPORTED_ALGORITHMS,
    fingerprint,
    fingerprint_length,
)
from vaultsync.utils.paths import (
    atomic_write,
    ensure_dir,
    expand_path,
    join_path,
    normalize_root,
    parent_folders,
    to_relative,
)

__all__ = [
    # Paths
    "normalize_root",
    "to_relative",
    "join_path",
    "parent_folders",
    "expand_path",
    "ensure_dir",
    "atomic_write",
    # Hashing
    "ROLLING",
    "SUPPORTED_ALGORITHMS",
    "fingerprint",
    "fingerprint_length",
]
