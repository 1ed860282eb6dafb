"""Scan, select, delete, rescan.

A CleanupSession holds the one report a user is looking at. Each scan
replaces it wholesale; a deletion is always followed by a fresh scan
so the report only ever reflects what is actually on disk.
"""

import logging
from collections.abc import Callable
from typing import Any

from vaultclean.core.settings import Settings, load_settings
from vaultclean.scanner.models import DeletionOutcome, ScanEntry, ScanReport
from vaultclean.scanner.operator import DeletionExecutor, NothingSelectedError
from vaultclean.scanner.scanner import VaultScanner

logger = logging.getLogger(__name__)


class CleanupSession:
    """Sequences scans and deletions for one vault.

    Settings are re-read through ``settings_loader`` on every scan, so
    changes saved between scans always take effect.

    Args:
        scanner: Scanner for the vault.
        settings_loader: Returns the current settings.
        dry_run: If True, deletions are simulated.
    """

    def __init__(
        self,
        scanner: VaultScanner,
        settings_loader: Callable[[], Settings] = load_settings,
        *,
        dry_run: bool = False,
    ) -> None:
        self._scanner = scanner
        self._settings_loader = settings_loader
        self._dry_run = dry_run
        self._overrides: dict[str, Any] = {}
        self._report: ScanReport | None = None
        self._busy = False

    @property
    def report(self) -> ScanReport | None:
        """The current report, or None before the first scan or after a failed one."""
        return self._report

    @property
    def busy(self) -> bool:
        """True while a scan is running."""
        return self._busy

    def scan(self, **overrides: Any) -> ScanReport | None:
        """Run a fresh scan and replace the current report.

        A scan requested while another one is running is ignored. If the
        scan fails, no report remains.

        Args:
            **overrides: Per-call scan options (see Settings.to_scan_config).
                They are remembered for the rescan after a deletion.

        Returns:
            The new report, or None if a scan was already running.

        Raises:
            VaultScanError: If the vault cannot be scanned.
            SettingsError: If the settings cannot be loaded.
        """
        if self._busy:
            logger.debug("Scan already in progress, ignoring request")
            return None

        self._busy = True
        self._report = None
        try:
            config = self._settings_loader().to_scan_config(**overrides)
            self._report = self._scanner.scan(config)
            self._overrides = dict(overrides)
        finally:
            self._busy = False
        return self._report

    def select(self, predicate: Callable[[ScanEntry], bool]) -> int:
        """Set each entry's selection flag from a predicate.

        Args:
            predicate: Returns True for entries to select.

        Returns:
            Number of selected entries.
        """
        if self._report is None:
            return 0
        for entry in self._report.entries:
            entry.selected = predicate(entry)
        return len(self._report.selected)

    def select_all(self) -> int:
        """Select every entry of the current report."""
        return self.select(lambda _entry: True)

    def clear_selection(self) -> None:
        """Deselect every entry of the current report."""
        self.select(lambda _entry: False)

    def delete_selected(self) -> DeletionOutcome:
        """Delete the selected entries, then rescan.

        Returns:
            DeletionOutcome of the batch.

        Raises:
            NothingSelectedError: If nothing is selected. Nothing is touched.
        """
        if self._report is None or not self._report.selected:
            msg = "No entries selected for deletion"
            raise NothingSelectedError(msg)

        executor = DeletionExecutor(self._scanner.vault_root, dry_run=self._dry_run)
        outcome = executor.delete_items(self._report.entries)

        if not outcome.dry_run:
            self.scan(**self._overrides)
        return outcome
