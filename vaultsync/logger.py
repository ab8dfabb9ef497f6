"""Rich console logging for sync operations."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from vaultsync.sync.actions import SyncStats


class SyncLogger:
    """Rich console output for sync operations.

    Messages can also be appended to a plain-text log file.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        log_file: Optional[Path] = None,
    ):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose (debug) output
            log_file: Optional file to append messages to
        """
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self.log_file = Path(log_file) if log_file else None

    def _write_log(self, level: str, message: str) -> None:
        if self.log_file is None:
            return
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"{datetime.now().isoformat(timespec='seconds')} {level:<7} {message}\n")
        except OSError as e:
            # Stop trying after the first failure, the console still works
            self.console.print(f"[yellow]⚠[/yellow] Cannot write log file {self.log_file}: {escape(str(e))}")
            self.log_file = None

    def debug(self, message: str) -> None:
        """Dim message, shown only in verbose mode."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")
        self._write_log("DEBUG", message)

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")
        self._write_log("INFO", message)

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")
        self._write_log("INFO", message)

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
        self._write_log("WARNING", message)

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")
        self._write_log("ERROR", message)

    def notice(self, message: str) -> None:
        """User-facing notice, e.g. a sync summary."""
        self.console.print(f"[bold cyan]⇅[/bold cyan] {escape(message)}")
        self._write_log("NOTICE", message)

    def stats(self, label: str, stats: "SyncStats") -> None:
        """Per path pair counters, verbose only."""
        self.debug(
            f"{label}: {stats.pulled} pulled, {stats.pushed} pushed, "
            f"{stats.conflicts} conflicts, {stats.errors} errors"
        )
