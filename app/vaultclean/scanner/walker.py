"""Bounded-depth traversal of the vault tree.

The walker runs two independent passes over the same tree: one
collects empty directories, the other collects files accepted by the
classifier. Both apply the hidden-entry filter before anything else
and stop descending once ``max_depth`` is reached.

Depth counts directory hops from the vault root: the root's direct
children are at depth 0. Entries at ``max_depth`` are evaluated but
never descended into.
"""

import logging
import os
from pathlib import Path

from vaultclean.scanner.classifier import Classifier
from vaultclean.scanner.models import EntryKind, ScanConfiguration, ScanEntry

logger = logging.getLogger(__name__)


class VaultScanError(Exception):
    """Raised when a scan cannot produce any result (e.g. unreadable root)."""


class DirectoryWalker:
    """Walks a vault and collects cleanup candidates.

    Args:
        classifier: Classifier used for every file in the files pass.
    """

    def __init__(self, classifier: Classifier) -> None:
        self._classifier = classifier

    def walk(
        self, root_path: Path, config: ScanConfiguration
    ) -> tuple[list[ScanEntry], list[ScanEntry]]:
        """Collect empty directories and candidate files under ``root_path``.

        Args:
            root_path: Absolute path of the vault root.
            config: Configuration of the current scan.

        Returns:
            Tuple of (empty directories, candidate files) in traversal order.

        Raises:
            VaultScanError: If the root itself cannot be listed.
        """
        try:
            root_entries = self._list(root_path, config)
        except OSError as e:
            msg = f"Cannot read vault root {root_path}: {e}"
            raise VaultScanError(msg) from e

        empty_dirs: list[ScanEntry] = []
        files: list[ScanEntry] = []
        self._collect_empty_dirs(root_entries, 0, config, empty_dirs)
        self._collect_files(root_entries, 0, config, files)
        return empty_dirs, files

    def _collect_empty_dirs(
        self,
        entries: list[os.DirEntry[str]],
        depth: int,
        config: ScanConfiguration,
        result: list[ScanEntry],
    ) -> None:
        """Directories pass over one level of already-listed entries."""
        for entry in entries:
            if not entry.is_dir(follow_symlinks=False):
                continue

            child = Path(entry.path)
            try:
                children = self._list(child, config)
            except OSError as e:
                logger.warning("Cannot access directory %s: %s", child, e)
                continue

            if not children:
                result.append(
                    ScanEntry(
                        path=self._classifier.relative_path(child),
                        name=entry.name,
                        kind=EntryKind.DIRECTORY,
                    )
                )
            elif depth < config.max_depth:
                self._collect_empty_dirs(children, depth + 1, config, result)

    def _collect_files(
        self,
        entries: list[os.DirEntry[str]],
        depth: int,
        config: ScanConfiguration,
        result: list[ScanEntry],
    ) -> None:
        """Files pass over one level of already-listed entries."""
        for entry in entries:
            path = Path(entry.path)

            if entry.is_dir(follow_symlinks=False):
                if depth >= config.max_depth:
                    continue
                try:
                    children = self._list(path, config)
                except OSError as e:
                    logger.warning("Cannot access directory %s: %s", path, e)
                    continue
                self._collect_files(children, depth + 1, config, result)

            elif entry.is_file(follow_symlinks=False):
                size = self._classifier.candidate_size(path, entry.name, config)
                if size is None:
                    continue
                result.append(
                    ScanEntry(
                        path=self._classifier.relative_path(path),
                        name=entry.name,
                        kind=EntryKind.FILE,
                        size=size,
                    )
                )

    @staticmethod
    def _list(directory: Path, config: ScanConfiguration) -> list[os.DirEntry[str]]:
        """List a directory's visible entries sorted by name.

        Raises:
            OSError: If the directory cannot be listed.
        """
        with os.scandir(directory) as it:
            entries = [e for e in it if not config.is_hidden(e.name)]
        entries.sort(key=lambda e: e.name)
        return entries
