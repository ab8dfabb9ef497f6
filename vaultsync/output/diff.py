# VaultSync Diff Display
# Diff generation and display for conflicting files

import difflib
from typing import Optional

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.syntax import Syntax

from vaultsync.sync.actions import SyncConflict


def generate_diff(
    local_content: Optional[str],
    remote_content: Optional[str],
    *,
    context_lines: int = 3,
) -> list[str]:
    """
    Generate unified diff between two contents.

    Args:
        local_content: Local file content.
        remote_content: Remote file content.
        context_lines: Number of context lines.

    Returns:
        List of diff lines (remote → local).
    """
    local_lines = (local_content or "").splitlines()
    remote_lines = (remote_content or "").splitlines()

    diff = difflib.unified_diff(
        remote_lines,
        local_lines,
        fromfile="remote",
        tofile="local",
        lineterm="",
        n=context_lines,
    )

    return list(diff)


def format_diff_summary(diff_lines: list[str]) -> str:
    """
    Format a brief diff summary.

    Args:
        diff_lines: Lines from generate_diff.

    Returns:
        Summary string, e.g. "+3, -1".
    """
    if not diff_lines:
        return "No differences"

    additions = sum(1 for line in diff_lines if line.startswith("+") and not line.startswith("+++"))
    deletions = sum(1 for line in diff_lines if line.startswith("-") and not line.startswith("---"))

    parts = []
    if additions > 0:
        parts.append(f"+{additions}")
    if deletions > 0:
        parts.append(f"-{deletions}")

    return ", ".join(parts) if parts else "Changed"


def show_conflict_diff(
    conflict: SyncConflict,
    *,
    console: Optional[RichConsole] = None,
    context_lines: int = 3,
) -> list[str]:
    """
    Show diff between the two sides of a conflict.

    Args:
        conflict: Conflict to display.
        console: Optional Rich console for output.
        context_lines: Number of context lines.

    Returns:
        The diff lines shown.
    """
    if console is None:
        console = RichConsole()

    diff_lines = generate_diff(
        conflict.local_file.content,
        conflict.remote_file.content,
        context_lines=context_lines,
    )

    if not diff_lines:
        console.print(f"[green]No differences:[/green] {conflict.local_path}")
        return diff_lines

    console.print(
        Panel(
            Syntax("\n".join(diff_lines), "diff", theme="monokai", line_numbers=True),
            title=f"Diff: {conflict.local_path} ({format_diff_summary(diff_lines)})",
            border_style="yellow",
        )
    )

    return diff_lines
