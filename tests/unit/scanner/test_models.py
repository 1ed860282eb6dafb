"""Unit tests for vault scan domain models.

Tests for ScanEntry, ScanConfiguration, ScanReport and DeletionOutcome.
"""

import pytest
from vaultclean.scanner.models import (
    DeletionOutcome,
    EntryKind,
    ScanConfiguration,
    ScanEntry,
    ScanReport,
)


def _file(path: str, size: int = 10) -> ScanEntry:
    return ScanEntry(path=path, name=path.rsplit("/", 1)[-1], kind=EntryKind.FILE, size=size)


def _dir(path: str) -> ScanEntry:
    return ScanEntry(path=path, name=path.rsplit("/", 1)[-1], kind=EntryKind.DIRECTORY)


class TestScanEntry:
    """Tests for ScanEntry dataclass."""

    def test_create_file_entry(self) -> None:
        """File entries keep their size and start unselected."""
        entry = _file("assets/unused.png", size=2048)

        assert entry.kind == EntryKind.FILE
        assert entry.size == 2048
        assert entry.selected is False
        assert entry.is_directory is False

    def test_directory_entry(self) -> None:
        """Directory entries have size 0."""
        entry = _dir("assets/empty")

        assert entry.is_directory is True
        assert entry.size == 0

    def test_empty_path_rejected(self) -> None:
        """Entries must have a path."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            ScanEntry(path="", name="", kind=EntryKind.FILE)

    @pytest.mark.parametrize("path", ["/abs/file.png", "assets\\file.png"])
    def test_non_vault_relative_path_rejected(self, path: str) -> None:
        """Paths are vault-relative with forward slashes."""
        with pytest.raises(ValueError, match="vault-relative"):
            ScanEntry(path=path, name="file.png", kind=EntryKind.FILE)

    def test_negative_size_rejected(self) -> None:
        """Sizes cannot be negative."""
        with pytest.raises(ValueError, match="non-negative"):
            _file("a.png", size=-1)

    def test_directory_with_size_rejected(self) -> None:
        """Directories never carry a size."""
        with pytest.raises(ValueError, match="no size"):
            ScanEntry(path="dir", name="dir", kind=EntryKind.DIRECTORY, size=5)

    def test_equality_ignores_selection(self) -> None:
        """Selecting an entry does not change its identity."""
        a = _file("a.png")
        b = _file("a.png")
        b.selected = True

        assert a == b


class TestScanConfiguration:
    """Tests for ScanConfiguration dataclass."""

    def test_defaults(self) -> None:
        """Default configuration scans ten levels and hides dot entries."""
        config = ScanConfiguration()

        assert config.max_depth == 10
        assert config.exclude_hidden is True
        assert config.min_file_size == 0
        assert config.cleanable_regex is None
        assert config.protected_regex is None

    def test_negative_values_rejected(self) -> None:
        """Depth and size thresholds must be non-negative."""
        with pytest.raises(ValueError, match="max_depth"):
            ScanConfiguration(max_depth=-1)
        with pytest.raises(ValueError, match="min_file_size"):
            ScanConfiguration(min_file_size=-5)

    def test_is_frozen(self) -> None:
        """Configurations cannot be mutated after creation."""
        config = ScanConfiguration()
        with pytest.raises(AttributeError):
            config.max_depth = 3  # type: ignore[misc]

    def test_patterns_compile_once(self) -> None:
        """Compiled patterns are cached per configuration instance."""
        config = ScanConfiguration(cleanable_pattern=r"\.tmp$")

        assert config.cleanable_regex is config.cleanable_regex
        assert config.cleanable_regex is not None

    def test_invalid_pattern_compiles_to_none(self) -> None:
        """Invalid patterns are tolerated and match nothing."""
        config = ScanConfiguration(protected_pattern="(")

        assert config.protected_regex is None

    def test_is_hidden(self) -> None:
        """Dot-prefixed names are hidden only when exclusion is on."""
        assert ScanConfiguration(exclude_hidden=True).is_hidden(".obsidian")
        assert not ScanConfiguration(exclude_hidden=True).is_hidden("notes")
        assert not ScanConfiguration(exclude_hidden=False).is_hidden(".obsidian")


class TestScanReport:
    """Tests for ScanReport dataclass."""

    def test_totals(self) -> None:
        """Count and size aggregate both lists; directories add no size."""
        report = ScanReport(
            empty_directories=[_dir("a"), _dir("b/c")],
            unlinked_files=[_file("x.png", 100), _file("y.log", 23)],
        )

        assert report.total_count == 4
        assert report.total_size == 123
        assert report.is_empty is False

    def test_empty_report(self) -> None:
        """A new report has nothing in it."""
        report = ScanReport()

        assert report.total_count == 0
        assert report.total_size == 0
        assert report.is_empty is True

    def test_entries_directories_first(self) -> None:
        """entries lists directories before files."""
        report = ScanReport(empty_directories=[_dir("d")], unlinked_files=[_file("f.png")])

        assert [e.path for e in report.entries] == ["d", "f.png"]

    def test_selected(self) -> None:
        """selected returns only flagged entries."""
        keep = _file("keep.png")
        drop = _file("drop.png")
        drop.selected = True
        report = ScanReport(unlinked_files=[keep, drop])

        assert report.selected == [drop]

    def test_to_dict(self) -> None:
        """to_dict produces JSON-friendly data."""
        report = ScanReport(empty_directories=[_dir("empty")], unlinked_files=[_file("f.png", 7)])

        data = report.to_dict()

        assert data["total_count"] == 2
        assert data["total_size"] == 7
        assert data["empty_directories"] == [
            {"path": "empty", "name": "empty", "kind": "directory", "size": 0}
        ]
        assert data["unlinked_files"] == [
            {"path": "f.png", "name": "f.png", "kind": "file", "size": 7}
        ]


class TestDeletionOutcome:
    """Tests for DeletionOutcome dataclass."""

    def test_success_without_errors(self) -> None:
        """success is True when no item failed."""
        assert DeletionOutcome(deleted=["a"]).success is True

    def test_failure_with_errors(self) -> None:
        """success is False as soon as one item failed."""
        outcome = DeletionOutcome(errors=["Failed to delete a: busy"], deleted=["b"])

        assert outcome.success is False
