# VaultSync Console Output
# Rich-based console output for user-friendly display

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vaultsync.output.diff import show_conflict_diff
from vaultsync.sync.actions import ActionType, ConflictChoice, SyncAction, SyncConflict, SyncStats


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_plan(self, plans: dict[str, list[SyncAction]]) -> None:
        """
        Print planned actions for multiple path pairs.

        Args:
            plans: Dict of path pair label to planned actions.
        """
        if not plans:
            self._console.print("[dim]No sync paths to display[/dim]")
            return

        for label, actions in plans.items():
            self._print_path_plan(label, actions)

    def _print_path_plan(self, label: str, actions: list[SyncAction]) -> None:
        """Print plan for a single path pair."""
        self._console.print(f"\n[bold]{escape(label)}[/bold]")

        if not actions:
            self._console.print("  [dim]No files found[/dim]")
            return

        counts = {action_type: 0 for action_type in ActionType}
        for action in actions:
            counts[action.action_type] += 1

        parts = []
        if counts[ActionType.UNCHANGED]:
            parts.append(f"[green]{counts[ActionType.UNCHANGED]} unchanged[/green]")
        if counts[ActionType.PULL]:
            parts.append(f"[cyan]{counts[ActionType.PULL]} to pull[/cyan]")
        if counts[ActionType.PUSH]:
            parts.append(f"[yellow]{counts[ActionType.PUSH]} to push[/yellow]")
        if counts[ActionType.CONFLICT]:
            parts.append(f"[red]{counts[ActionType.CONFLICT]} conflicts[/red]")
        self._console.print(f"  {len(actions)} files: {', '.join(parts)}")

        if not self.verbose and all(not a.needs_action for a in actions):
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("")
        table.add_column("Path", style="cyan")
        table.add_column("Direction", justify="center")
        table.add_column("Reason", style="dim")

        for action in actions:
            if action.action_type == ActionType.UNCHANGED and not self.verbose:
                continue
            table.add_row(
                self._get_action_icon(action.action_type),
                escape(action.relative_path),
                action.direction,
                action.reason,
            )

        self._console.print(table)

    def _get_action_icon(self, action_type: ActionType) -> str:
        """Get icon for action type."""
        icons = {
            ActionType.UNCHANGED: "[green]✓[/green]",
            ActionType.PULL: "[cyan]↓[/cyan]",
            ActionType.PUSH: "[yellow]↑[/yellow]",
            ActionType.CONFLICT: "[red]![/red]",
        }
        return icons.get(action_type, "?")

    def print_stats(self, stats: SyncStats) -> None:
        """
        Print sync result summary.

        Args:
            stats: Totals of a sync run.
        """
        self._console.print()

        if stats.errors:
            status_text = "[red]Sync completed with errors[/red]"
            border = "red"
        elif stats.conflicts:
            status_text = "[yellow]Sync completed with skipped conflicts[/yellow]"
            border = "yellow"
        elif stats.has_transfers:
            status_text = "[green]Sync completed[/green]"
            border = "green"
        else:
            status_text = "[green]Everything is in sync[/green]"
            border = "green"

        self._console.print(
            Panel(
                f"{status_text}\n"
                f"Pulled: {stats.pulled}  Pushed: {stats.pushed}  "
                f"Conflicts: {stats.conflicts}  Errors: {stats.errors}",
                title="Summary",
                border_style=border,
            )
        )

    def print_ledger(self, entries: dict[str, str], *, source: Optional[str] = None) -> None:
        """Print ledger entries."""
        if not entries:
            self._console.print("[dim]Ledger is empty[/dim]")
            return

        table = Table(title=source, show_header=True, header_style="bold")
        table.add_column("Vault path", style="cyan")
        table.add_column("Fingerprint", style="dim")
        for path, value in sorted(entries.items()):
            table.add_row(escape(path), value)

        self._console.print(table)

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask for confirmation.

        Args:
            message: Confirmation message.
            default: Default value if user just presses enter.

        Returns:
            True if confirmed.
        """
        suffix = " [Y/n]" if default else " [y/N]"
        response = self._console.input(f"{message}{suffix}: ").strip().lower()

        if not response:
            return default

        return response in ("y", "yes")

    def resolve_conflict(self, conflict: SyncConflict) -> ConflictChoice:
        """
        Interactive menu to resolve a conflict.

        Args:
            conflict: The conflicting file pair.

        Returns:
            ConflictChoice picked by the user.
        """
        self._console.print(f"\n[bold red]Conflict detected:[/bold red] {escape(conflict.local_path)}")
        self._console.print("  Both the vault and the server versions have changed since the last sync.")
        self._console.print(
            f"  [dim]local:  {conflict.local_file.size} bytes, {conflict.local_file.modified or 'unknown'}[/dim]"
        )
        self._console.print(
            f"  [dim]remote: {conflict.remote_file.size} bytes, {conflict.remote_file.modified or 'unknown'}[/dim]\n"
        )

        self._console.print("[bold]Options:[/bold]")
        self._console.print("  [cyan]1[/cyan] - Keep [bold]local[/bold] version (overwrite server)")
        self._console.print("  [cyan]2[/cyan] - Keep [bold]remote[/bold] version (overwrite vault)")
        self._console.print("  [cyan]3[/cyan] - View [bold]diff[/bold] first")
        self._console.print("  [cyan]4[/cyan] - [bold]Skip[/bold] this file")

        while True:
            choice = self._console.input("\nYour choice [1-4]: ").strip().lower()

            if choice in ("1", "l", "local"):
                return ConflictChoice.LOCAL
            elif choice in ("2", "r", "remote"):
                return ConflictChoice.REMOTE
            elif choice in ("3", "d", "diff"):
                show_conflict_diff(conflict, console=self._console)
            elif choice in ("4", "s", "skip"):
                return ConflictChoice.SKIP
            else:
                self._console.print("[yellow]Please enter 1, 2, 3 or 4[/yellow]")


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
