"""Per-file cleanup classification.

Combines the size filter, reference resolution, and the protected and
cleanable patterns into a single accept/reject decision.
"""

import logging
from pathlib import Path

from vaultclean.scanner.models import ScanConfiguration
from vaultclean.scanner.patterns import search
from vaultclean.scanner.references import ReferenceResolver

logger = logging.getLogger(__name__)


class Classifier:
    """Decides whether a file is a cleanup candidate.

    The classifier holds no configuration: the scan configuration is
    passed into every call.

    Args:
        vault_root: Absolute path of the vault root.
        resolver: Reference resolver for the current scan.
    """

    def __init__(self, vault_root: Path, resolver: ReferenceResolver) -> None:
        self._vault_root = vault_root
        self._resolver = resolver

    def classify(self, file_path: Path, file_name: str, config: ScanConfiguration) -> bool:
        """Check if a file may be proposed for deletion.

        See candidate_size for the decision order.
        """
        return self.candidate_size(file_path, file_name, config) is not None

    def candidate_size(
        self, file_path: Path, file_name: str, config: ScanConfiguration
    ) -> int | None:
        """Classify a file and return its size if it is a candidate.

        The file is stat'ed once; the returned size is the one the
        size filter saw.

        Decision order (first match wins):
        1. Unreadable file (stat fails): reject.
        2. Smaller than ``min_file_size``: reject.
        3. Referenced by any document: reject. No pattern overrides this.
        4. Matches the protected pattern: reject.
        5. Matches the cleanable pattern: accept.
        6. Otherwise: reject.

        Args:
            file_path: Absolute path of the file.
            file_name: Bare filename used for pattern matching.
            config: Configuration of the current scan.

        Returns:
            File size in bytes if the file is a cleanup candidate,
            otherwise None.
        """
        try:
            size = file_path.stat().st_size
        except OSError as e:
            logger.warning("Cannot stat %s, keeping it: %s", file_path, e)
            return None

        if size < config.min_file_size:
            return None

        if self._resolver.is_referenced(self.relative_path(file_path)):
            return None

        if search(file_name, config.protected_regex):
            return None

        if not search(file_name, config.cleanable_regex):
            return None
        return size

    def relative_path(self, path: Path) -> str:
        """Convert an absolute path into a vault-relative POSIX path."""
        return path.relative_to(self._vault_root).as_posix()
