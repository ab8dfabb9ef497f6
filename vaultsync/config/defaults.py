# VaultSync Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "vault": "~/Vault",
    "server": {
        "url": "http://localhost:8787",
        "token_env": "VAULTSYNC_TOKEN",
        "timeout": 30.0,
        "verify_writes": False,
    },
    "sync_paths": [
        {
            "local_path": "Notes",
            "remote_path": "notes",
            "enabled": True,
            "description": "Notes folder",
        },
    ],
    "conflict_policy": "ask",
    "auto_sync": {
        "enabled": False,
        "interval_minutes": 5,
        "conflict_policy": "skip",
    },
    "fingerprint_algorithm": "rolling",
    "state": {
        "persist": True,
        "path": "~/.config/vaultsync/ledger.yaml",
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": "~/.config/vaultsync/sync.log",
    },
}


def default_config() -> dict[str, Any]:
    """Return a private copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# VaultSync Configuration
#
# Keeps folders of a local vault in sync with a remote sync server.
# Each entry in sync_paths pairs a vault folder with a server folder
# and can be individually enabled/disabled.
#
# The bearer token is read from the environment variable named in
# server.token_env on every request (server.token is a fallback).
#
# Conflict policies (both sides changed since the last sync):
#   - ask:    prompt interactively (periodic runs skip instead)
#   - local:  keep the vault version and overwrite the server
#   - remote: keep the server version and overwrite the vault
#   - skip:   leave both sides untouched

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
