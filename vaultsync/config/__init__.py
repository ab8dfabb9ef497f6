# VaultSync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from vaultsync.config.defaults import DEFAULT_CONFIG, default_config, generate_default_config
from vaultsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from vaultsync.config.schema import (
    AutoSyncConfig,
    ConflictPolicy,
    OutputConfig,
    ServerConfig,
    StateConfig,
    SyncPathConfig,
    VaultSyncConfig,
)

__all__ = [
    # Schema
    "VaultSyncConfig",
    "ServerConfig",
    "SyncPathConfig",
    "AutoSyncConfig",
    "StateConfig",
    "OutputConfig",
    "ConflictPolicy",
    # Loader
    "load_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "default_config",
    "generate_default_config",
]
