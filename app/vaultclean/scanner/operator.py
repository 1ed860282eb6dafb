"""Deletion of confirmed cleanup candidates.

Handles removal of selected vault entries with dry-run support and
per-item failure isolation. Directories are removed non-recursively:
a directory that gained content since the scan fails instead of
taking its new content with it.
"""

import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from vaultclean.scanner.models import DeletionOutcome, ScanEntry

logger = logging.getLogger(__name__)


class NothingSelectedError(Exception):
    """Raised when a deletion is requested with no entry selected."""


class DeletionExecutor:
    """Deletes selected scan entries from a vault.

    Args:
        vault_root: Absolute path of the vault root.
        dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, vault_root: Path, dry_run: bool = False) -> None:
        self._vault_root = vault_root
        self._dry_run = dry_run

    def delete_items(self, items: Iterable[ScanEntry]) -> DeletionOutcome:
        """Delete every selected entry and aggregate the results.

        Unselected entries are ignored. Each selected entry is attempted
        independently; a failure is recorded and the batch continues.
        There is no rollback.

        Args:
            items: Scan entries, typically a whole report.

        Returns:
            DeletionOutcome listing removed paths and per-item errors.

        Raises:
            NothingSelectedError: If no entry is selected. Nothing is touched.
        """
        selected = [item for item in items if item.selected]
        if not selected:
            msg = "No entries selected for deletion"
            raise NothingSelectedError(msg)

        outcome = DeletionOutcome(dry_run=self._dry_run)
        for item in selected:
            error = self._delete_single(item)
            if error is None:
                outcome.deleted.append(item.path)
            else:
                logger.warning("%s", error)
                outcome.errors.append(error)

        return outcome

    def _delete_single(self, item: ScanEntry) -> str | None:
        """Delete a single entry.

        Args:
            item: Entry to delete.

        Returns:
            None on success, otherwise an error message naming the path.
        """
        target = self._resolve(item.path)
        if target is None:
            return f"Failed to delete {item.path}: path is outside the vault"

        if self._dry_run:
            logger.info("Dry-run: would delete %s", item.path)
            return None

        try:
            if item.is_directory:
                target.rmdir()
            else:
                target.unlink()
        except OSError as e:
            return f"Failed to delete {item.path}: {e.strerror or e}"

        logger.debug("Deleted %s", item.path)
        return None

    def _resolve(self, relative: str) -> Path | None:
        """Map a vault-relative path to an absolute path inside the vault.

        Returns:
            Absolute path, or None if the path would escape the vault root.
        """
        posix = PurePosixPath(relative)
        if posix.is_absolute() or ".." in posix.parts:
            return None
        return self._vault_root.joinpath(*posix.parts)
