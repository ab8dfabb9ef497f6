"""Click-based CLI for VaultSync - vault to server file synchronization."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.syntax import Syntax

from vaultsync import __version__
from vaultsync.config import (
    ConflictPolicy,
    VaultSyncConfig,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_config,
    validate_config_file,
)
from vaultsync.logger import SyncLogger
from vaultsync.output import Console, create_console
from vaultsync.sync import LedgerStore, SyncAlreadyRunningError, SyncEngine, SyncStateLedger, policy_resolver

POLICY_CHOICES = [policy.value for policy in ConflictPolicy]

console = create_console()
logger = SyncLogger(console.rich)


def config_option(f):
    """Shared --config option."""
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Path to config file (default: $VAULTSYNC_CONFIG or ~/.config/vaultsync/config.yaml)",
    )(f)


def _load(config_path: Optional[Path]) -> VaultSyncConfig:
    """Load configuration, exiting with status 1 on failure."""
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        logger.error(str(e))
    except ValidationError as e:
        logger.error(f"Invalid configuration:\n{e}")
    except ValueError as e:
        logger.error(str(e))
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML syntax: {e}")
    sys.exit(1)


def _build(config: VaultSyncConfig, verbose: bool = False) -> tuple[Console, SyncEngine]:
    """Build console and engine for a loaded configuration."""
    verbose = verbose or config.output.verbose
    out = create_console(verbose=verbose, colored=config.output.colored)
    sync_logger = SyncLogger(
        out.rich,
        verbose=verbose,
        log_file=Path(config.output.log_file) if config.output.log_file else None,
    )
    return out, SyncEngine(config, logger=sync_logger)


@click.group()
@click.version_option(version=__version__, prog_name="vaultsync")
def cli() -> None:
    """VaultSync - keep a local vault in sync with a remote file server.

    Each configured path pair maps a folder in the vault to a folder on the
    server. Changes flow both ways; a ledger of last agreed fingerprints
    decides which side changed.
    """
    pass


@cli.command()
@click.option(
    "--policy",
    "-p",
    type=click.Choice(POLICY_CHOICES),
    default=None,
    help="Conflict policy (default: conflict_policy from config)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@config_option
def sync(policy: Optional[str], verbose: bool, config_path: Optional[Path]) -> None:
    """Synchronize all enabled path pairs once.

    With policy 'ask', each conflict is shown with a diff and
    resolved interactively.
    """
    config = _load(config_path)
    out, engine = _build(config, verbose)

    chosen = ConflictPolicy(policy) if policy else config.conflict_policy
    resolver = out.resolve_conflict if chosen == ConflictPolicy.ASK else policy_resolver(chosen)

    enabled = config.get_enabled_paths()
    if not enabled:
        engine.logger.warning("No enabled sync paths")
        return

    engine.logger.info(f"Vault:  {config.vault}")
    engine.logger.info(f"Server: {config.server.url}")
    for path_config in enabled:
        engine.logger.debug(f"Path pair: {path_config.label}")

    try:
        stats = engine.run_sync(resolver)
    except SyncAlreadyRunningError as e:
        engine.logger.error(str(e))
        sys.exit(1)

    out.print_stats(stats)

    if stats.errors:
        sys.exit(1)


@cli.command()
@click.option("--verbose", "-v", is_flag=True, help="Also list unchanged files")
@config_option
def status(verbose: bool, config_path: Optional[Path]) -> None:
    """Show what a sync would do, without changing anything."""
    config = _load(config_path)
    out, engine = _build(config, verbose)

    out.print_plan(engine.plan())


@cli.command()
@click.option("--interval", "-i", type=float, default=None, help="Minutes between runs (default: from config)")
@click.option(
    "--policy",
    "-p",
    type=click.Choice(POLICY_CHOICES),
    default=None,
    help="Conflict policy for background runs (default: auto_sync.conflict_policy)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@config_option
def watch(interval: Optional[float], policy: Optional[str], verbose: bool, config_path: Optional[Path]) -> None:
    """Sync once, then keep syncing periodically until interrupted.

    Conflicts cannot be asked about in the background; 'ask' skips them.
    """
    config = _load(config_path)
    out, engine = _build(config, verbose)

    minutes = interval if interval is not None else config.auto_sync.interval_minutes
    chosen = ConflictPolicy(policy) if policy else config.auto_sync.conflict_policy

    if minutes <= 0:
        engine.logger.error("Interval must be greater than 0")
        sys.exit(1)

    try:
        stats = engine.run_sync(policy_resolver(chosen))
        out.print_stats(stats)
    except SyncAlreadyRunningError as e:
        engine.logger.error(str(e))

    engine.start_periodic(minutes, chosen)
    engine.logger.info("Press Ctrl+C to stop")

    try:
        while engine.is_periodic:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop_periodic()


@cli.command()
@config_option
def check(config_path: Optional[Path]) -> None:
    """Check that the sync server is reachable and accepts the token."""
    config = _load(config_path)
    _, engine = _build(config)

    result = engine.test_connection()
    if result.ok:
        engine.logger.success(f"Connected to {config.server.url}")
    else:
        engine.logger.error(f"Cannot connect to {config.server.url}: {result.error}")
        sys.exit(1)


# =============================================================================
# Config Commands
# =============================================================================


@cli.group()
def config() -> None:
    """Manage the VaultSync configuration file."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@config_option
def config_init(force: bool, config_path: Optional[Path]) -> None:
    """Create a default configuration file."""
    path = config_path or get_config_path()

    if path.exists() and not force:
        logger.warning(f"Config already exists: {path}")
        logger.info("Use --force to overwrite")
        return

    if path.exists():
        path.write_text(generate_default_config(), encoding="utf-8")
        logger.success(f"Config overwritten: {path}")
        return

    path, _ = ensure_config_exists(path)
    logger.success(f"Config created: {path}")
    logger.info("Edit 'vault' and 'sync_paths', then run 'vaultsync check'")


@config.command("show")
@config_option
def config_show(config_path: Optional[Path]) -> None:
    """Show the effective configuration (defaults applied, token hidden)."""
    loaded = _load(config_path)

    data = loaded.model_dump(exclude_none=True, mode="json")
    if data.get("server", {}).get("token"):
        data["server"]["token"] = "********"

    text = yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    console.print(Syntax(text, "yaml", theme="monokai"))


@config.command("validate")
@config_option
def config_validate(config_path: Optional[Path]) -> None:
    """Validate the configuration file."""
    path = config_path or get_config_path()
    ok, errors = validate_config_file(path)

    if ok:
        logger.success(f"Configuration is valid: {path}")
        return

    logger.error(f"Configuration has {len(errors)} problem(s): {path}")
    for error in errors:
        console.print(f"  [yellow]{error}[/yellow]")
    sys.exit(1)


@config.command("path")
def config_path_cmd() -> None:
    """Print the config file location."""
    click.echo(str(get_config_path()))


# =============================================================================
# State Commands
# =============================================================================


@cli.group()
def state() -> None:
    """Inspect or reset the sync ledger."""
    pass


@state.command("show")
@config_option
def state_show(config_path: Optional[Path]) -> None:
    """List last agreed fingerprints per vault path."""
    loaded = _load(config_path)

    if not loaded.state.persist:
        logger.info("Ledger persistence is disabled (state.persist: false)")
        return

    store = LedgerStore(Path(loaded.state.path))
    console.print_ledger(SyncStateLedger(store).snapshot(), source=str(store.path))


@state.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@config_option
def state_reset(yes: bool, config_path: Optional[Path]) -> None:
    """Forget all last agreed fingerprints.

    The next sync treats every differing file as never synced,
    so the server version wins.
    """
    loaded = _load(config_path)
    store = LedgerStore(Path(loaded.state.path))
    ledger = SyncStateLedger(store)

    if not store.path.exists():
        logger.info("Ledger is already empty")
        return

    if not yes and not console.confirm(f"Delete ledger {store.path}?"):
        logger.warning("Reset cancelled")
        return

    ledger.clear()
    logger.success(f"Ledger deleted: {store.path}")


if __name__ == "__main__":
    cli()
