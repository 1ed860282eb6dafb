"""Vault scan domain models.

This module defines the core data structures for representing
vault entries discovered during a cleanup scan, the per-scan
configuration, the aggregated report, and deletion outcomes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

from vaultclean.scanner.patterns import compile_pattern


class EntryKind(str, Enum):
    """Kind of vault entry.

    Attributes:
        DIRECTORY: Directory (only ever reported when empty).
        FILE: Regular file.
    """

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(slots=True)
class ScanEntry:
    """A vault entry reported as a cleanup candidate.

    Equality ignores the ``selected`` flag: it is transient UI state
    and not part of the entry's identity within a scan.

    Attributes:
        path: Vault-relative path with forward slashes, no leading slash.
        name: Final path segment.
        kind: Directory or file.
        size: Size in bytes (always 0 for directories).
        selected: Whether the user picked this entry for deletion.
    """

    path: str
    name: str
    kind: EntryKind
    size: int = 0
    selected: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.path.startswith("/") or "\\" in self.path:
            msg = f"Path must be vault-relative with forward slashes, got {self.path!r}"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Size must be non-negative, got {self.size}"
            raise ValueError(msg)
        if self.kind == EntryKind.DIRECTORY and self.size != 0:
            msg = f"Directory entries have no size, got {self.size}"
            raise ValueError(msg)

    @property
    def is_directory(self) -> bool:
        """Check if this entry is a directory."""
        return self.kind == EntryKind.DIRECTORY


@dataclass(frozen=True)
class ScanConfiguration:
    """Immutable configuration for a single scan.

    Pattern sources are compiled lazily, at most once per configuration
    instance. A new instance is built for every scan, so a settings
    change is always picked up by the next scan.

    Attributes:
        max_depth: Deepest directory level evaluated (root children are 0).
        exclude_hidden: Skip entries whose name starts with a dot.
        min_file_size: Files strictly smaller than this are never cleanable.
        cleanable_pattern: Regex marking files as cleanup candidates.
        protected_pattern: Regex excluding files from cleanup.
    """

    max_depth: int = 10
    exclude_hidden: bool = True
    min_file_size: int = 0
    cleanable_pattern: str | None = None
    protected_pattern: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        if self.max_depth < 0:
            msg = f"max_depth must be non-negative, got {self.max_depth}"
            raise ValueError(msg)
        if self.min_file_size < 0:
            msg = f"min_file_size must be non-negative, got {self.min_file_size}"
            raise ValueError(msg)

    @cached_property
    def cleanable_regex(self) -> re.Pattern[str] | None:
        """Compiled cleanable pattern, or None if empty or invalid."""
        return compile_pattern(self.cleanable_pattern, label="cleanable")

    @cached_property
    def protected_regex(self) -> re.Pattern[str] | None:
        """Compiled protected pattern, or None if empty or invalid."""
        return compile_pattern(self.protected_pattern, label="protected")

    def is_hidden(self, name: str) -> bool:
        """Check if an entry name is hidden under this configuration."""
        return self.exclude_hidden and name.startswith(".")


@dataclass(slots=True)
class ScanReport:
    """Result of one vault scan.

    Attributes:
        empty_directories: Empty directories in traversal order.
        unlinked_files: Unreferenced cleanable files in traversal order.
    """

    empty_directories: list[ScanEntry] = field(default_factory=list)
    unlinked_files: list[ScanEntry] = field(default_factory=list)

    @property
    def entries(self) -> list[ScanEntry]:
        """All entries, directories first."""
        return [*self.empty_directories, *self.unlinked_files]

    @property
    def total_count(self) -> int:
        """Number of reported entries."""
        return len(self.empty_directories) + len(self.unlinked_files)

    @property
    def total_size(self) -> int:
        """Combined size in bytes of all reported entries."""
        return sum(entry.size for entry in self.entries)

    @property
    def is_empty(self) -> bool:
        """Check if the scan found nothing to clean."""
        return self.total_count == 0

    @property
    def selected(self) -> list[ScanEntry]:
        """Entries currently flagged for deletion."""
        return [entry for entry in self.entries if entry.selected]

    def to_dict(self) -> dict[str, object]:
        """Convert the report to a JSON-serializable dictionary."""
        return {
            "empty_directories": [_entry_to_dict(e) for e in self.empty_directories],
            "unlinked_files": [_entry_to_dict(e) for e in self.unlinked_files],
            "total_count": self.total_count,
            "total_size": self.total_size,
        }


@dataclass(slots=True)
class DeletionOutcome:
    """Aggregated result of a deletion batch.

    Attributes:
        errors: One message per failed item, each naming its path.
        deleted: Vault-relative paths removed (or that would be, in dry-run).
        dry_run: Whether the batch was simulated.
    """

    errors: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """True if no item failed."""
        return not self.errors


def _entry_to_dict(entry: ScanEntry) -> dict[str, object]:
    return {
        "path": entry.path,
        "name": entry.name,
        "kind": entry.kind.value,
        "size": entry.size,
    }
