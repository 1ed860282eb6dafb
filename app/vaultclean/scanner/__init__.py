"""Vault scanning and cleanup module.

This module provides empty-directory and unreferenced-file detection,
filename pattern matching, reference resolution, and deletion of
confirmed cleanup candidates.
"""

from vaultclean.scanner.classifier import Classifier
from vaultclean.scanner.models import (
    DeletionOutcome,
    EntryKind,
    ScanConfiguration,
    ScanEntry,
    ScanReport,
)
from vaultclean.scanner.operator import DeletionExecutor, NothingSelectedError
from vaultclean.scanner.patterns import compile_pattern, is_valid_pattern, matches
from vaultclean.scanner.references import ReferenceResolver
from vaultclean.scanner.scanner import VaultScanner
from vaultclean.scanner.walker import DirectoryWalker, VaultScanError

__all__ = [
    "Classifier",
    "DeletionExecutor",
    "DeletionOutcome",
    "DirectoryWalker",
    "EntryKind",
    "NothingSelectedError",
    "ReferenceResolver",
    "ScanConfiguration",
    "ScanEntry",
    "ScanReport",
    "VaultScanError",
    "VaultScanner",
    "compile_pattern",
    "is_valid_pattern",
    "matches",
]
