"""Vault scanner entry point.

Wires the reference resolver, classifier, and directory walker
together for one scan. Every scan builds a fresh view of the vault's
link graph and re-walks the tree: nothing is cached across scans.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from vaultclean.index.models import DocumentIndex
from vaultclean.index.vault import VaultIndex
from vaultclean.scanner.classifier import Classifier
from vaultclean.scanner.models import ScanConfiguration, ScanReport
from vaultclean.scanner.references import ReferenceResolver
from vaultclean.scanner.walker import DirectoryWalker, VaultScanError

logger = logging.getLogger(__name__)

IndexFactory = Callable[[Path], DocumentIndex]


class VaultScanner:
    """Scans a vault for empty directories and unreferenced files.

    Args:
        vault_root: Path of the vault to scan.
        index_factory: Builds the document index for a scan. Defaults to
            parsing the vault's Markdown notes and Canvas boards.
    """

    def __init__(self, vault_root: Path, index_factory: IndexFactory | None = None) -> None:
        self._vault_root = vault_root.expanduser().resolve()
        self._index_factory = index_factory or VaultIndex.build

    @property
    def vault_root(self) -> Path:
        """Absolute path of the scanned vault."""
        return self._vault_root

    def scan(self, config: ScanConfiguration) -> ScanReport:
        """Run a full scan with the given configuration.

        Args:
            config: Configuration for this scan.

        Returns:
            Fresh ScanReport.

        Raises:
            VaultScanError: If the vault root is missing or unreadable.
        """
        if not self._vault_root.is_dir():
            msg = f"Vault not found or not a directory: {self._vault_root}"
            raise VaultScanError(msg)

        logger.debug("Scanning %s with %s", self._vault_root, config)

        try:
            index = self._index_factory(self._vault_root)
        except OSError as e:
            msg = f"Cannot index vault {self._vault_root}: {e}"
            raise VaultScanError(msg) from e

        classifier = Classifier(self._vault_root, ReferenceResolver(index))
        walker = DirectoryWalker(classifier)
        empty_dirs, files = walker.walk(self._vault_root, config)

        report = ScanReport(empty_directories=empty_dirs, unlinked_files=files)
        logger.info(
            "Scan found %d empty directories and %d unlinked files",
            len(report.empty_directories),
            len(report.unlinked_files),
        )
        return report
