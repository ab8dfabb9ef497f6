# VaultSync Output Module
# Rich console output and diff display

from vaultsync.output.console import Console, create_console
from vaultsync.output.diff import format_diff_summary, generate_diff, show_conflict_diff

__all__ = [
    "Console",
    "create_console",
    "generate_diff",
    "format_diff_summary",
    "show_conflict_diff",
]
