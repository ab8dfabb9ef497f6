# VaultSync Sync Engine
# Runs reconciliation across all enabled path pairs

import threading
from pathlib import Path
from typing import Optional, Union

from vaultsync.config.schema import ConflictPolicy, VaultSyncConfig
from vaultsync.logger import SyncLogger
from vaultsync.remote.client import ConnectionStatus, RemoteStoreClient
from vaultsync.sync.actions import SyncAction, SyncStats
from vaultsync.sync.reconciler import Reconciler
from vaultsync.sync.resolvers import ConflictResolver, policy_resolver
from vaultsync.sync.state import LedgerStore, SyncStateLedger
from vaultsync.sync.tree import LocalTree


class SyncAlreadyRunningError(RuntimeError):
    """A sync run was started while another one is in progress."""

    def __init__(self) -> None:
        super().__init__("Sync already in progress")


class SyncEngine:
    """
    Main synchronization engine.

    Coordinates sync across all enabled path pairs. Only one run may be
    in progress per engine; the ledger lives as long as the engine.
    """

    def __init__(
        self,
        config: VaultSyncConfig,
        *,
        client: Optional[RemoteStoreClient] = None,
        tree: Optional[LocalTree] = None,
        ledger: Optional[SyncStateLedger] = None,
        logger: Optional[SyncLogger] = None,
    ):
        """
        Initialize sync engine.

        Args:
            config: VaultSync configuration.
            client: Optional server client (built from config if not provided).
            tree: Optional vault tree (built from config if not provided).
            ledger: Optional ledger (loaded from the configured store if not provided).
            logger: Optional logger.
        """
        self.config = config
        self.logger = logger or SyncLogger(
            verbose=config.output.verbose,
            log_file=Path(config.output.log_file) if config.output.log_file else None,
        )
        self.client = client or RemoteStoreClient(
            config.server.url,
            config.server.resolve_token,
            timeout=config.server.timeout,
        )
        self.tree = tree or LocalTree(Path(config.vault))
        if ledger is None:
            store = LedgerStore(Path(config.state.path)) if config.state.persist else None
            ledger = SyncStateLedger(store)
        self.ledger = ledger
        self.reconciler = Reconciler(
            self.tree,
            self.client,
            self.ledger,
            logger=self.logger,
            fingerprint_algorithm=config.fingerprint_algorithm,
            verify_writes=config.server.verify_writes,
        )

        self._lock = threading.Lock()
        self._running = False
        self._timer: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        """Check if a sync run is in progress."""
        return self._running

    @property
    def is_periodic(self) -> bool:
        """Check if periodic sync is active."""
        return self._timer is not None and self._timer.is_alive()

    def run_sync(self, resolve_conflict: ConflictResolver) -> SyncStats:
        """
        Synchronize all enabled path pairs in declaration order.

        Args:
            resolve_conflict: Called for each path changed on both sides.

        Returns:
            SyncStats summed over all path pairs.

        Raises:
            SyncAlreadyRunningError: If a run is already in progress.
        """
        with self._lock:
            if self._running:
                raise SyncAlreadyRunningError()
            self._running = True

        totals = SyncStats()
        try:
            for path_config in self.config.get_enabled_paths():
                stats = self.reconciler.reconcile(path_config, resolve_conflict)
                self.logger.stats(path_config.label, stats)
                totals += stats

            if totals.has_transfers:
                message = f"Sync complete: {totals.pulled} pulled, {totals.pushed} pushed"
                if totals.errors > 0:
                    message += f", {totals.errors} errors"
                self.logger.notice(message)
        finally:
            try:
                self.ledger.flush()
            finally:
                self._running = False

        return totals

    def plan(self) -> dict[str, list[SyncAction]]:
        """
        Classify all paths of the enabled path pairs without syncing.

        Returns:
            Dict of path pair label to planned actions. Pairs that could
            not be listed or scanned map to an empty list.
        """
        plans: dict[str, list[SyncAction]] = {}

        for path_config in self.config.get_enabled_paths():
            try:
                plans[path_config.label] = self.reconciler.plan(path_config)
            except Exception as e:
                self.logger.error(f"Cannot inspect {path_config.label}: {e}")
                plans[path_config.label] = []

        return plans

    def start_periodic(
        self,
        interval_minutes: Optional[float] = None,
        policy: Union[ConflictPolicy, str, None] = None,
    ) -> bool:
        """
        Start syncing periodically in a background thread.

        Without arguments the auto_sync settings decide, and nothing starts
        when auto sync is disabled.

        Args:
            interval_minutes: Minutes between runs.
            policy: Conflict policy for periodic runs ("ask" skips).

        Returns:
            True if the periodic sync was started.
        """
        self.stop_periodic()

        auto = self.config.auto_sync
        if interval_minutes is None:
            if not auto.enabled:
                return False
            interval_minutes = auto.interval_minutes
        if interval_minutes <= 0:
            return False

        resolver = policy_resolver(policy if policy is not None else auto.conflict_policy)
        interval = interval_minutes * 60

        self._stop_event = threading.Event()
        self._timer = threading.Thread(
            target=self._periodic_loop,
            args=(interval, resolver, self._stop_event),
            name="vaultsync-periodic",
            daemon=True,
        )
        self._timer.start()

        self.logger.info(f"Auto-sync started (every {interval_minutes:g} min)")
        return True

    def stop_periodic(self, timeout: float = 5.0) -> None:
        """Stop periodic sync; a run already in progress is allowed to finish."""
        if self._timer is None:
            return

        self._stop_event.set()
        if self._timer is not threading.current_thread():
            self._timer.join(timeout)
        self._timer = None
        self.logger.info("Auto-sync stopped")

    def _periodic_loop(self, interval: float, resolver: ConflictResolver, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval):
            try:
                self.run_sync(resolver)
            except Exception as e:
                self.logger.error(f"Auto-sync failed: {e}")

    def test_connection(self) -> ConnectionStatus:
        """Check that the sync server is reachable and accepts the token."""
        return self.client.test_connection()
