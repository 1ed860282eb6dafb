"""Unit tests for Classifier.

Covers the decision order: size filter, reference check, protected
pattern, cleanable pattern, default deny.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from vaultclean.scanner.classifier import Classifier
from vaultclean.scanner.models import ScanConfiguration


def _classifier(root: Path, referenced: bool = False) -> tuple[Classifier, MagicMock]:
    resolver = MagicMock()
    resolver.is_referenced.return_value = referenced
    return Classifier(root, resolver), resolver


def _write(path: Path, size: int = 10) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


class TestClassifier:
    """Tests for Classifier.classify."""

    def test_cleanable_unreferenced_file_accepted(self, tmp_path: Path) -> None:
        """A file matching only the cleanable pattern is a candidate."""
        file_path = _write(tmp_path / "scratch.tmp")
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=".*", protected_pattern=r"\.md$")

        assert classifier.classify(file_path, "scratch.tmp", config) is True

    def test_resolver_receives_vault_relative_path(self, tmp_path: Path) -> None:
        """References are looked up by vault-relative POSIX path."""
        file_path = _write(tmp_path / "assets" / "img.png")
        classifier, resolver = _classifier(tmp_path)

        classifier.classify(file_path, "img.png", ScanConfiguration(cleanable_pattern=".*"))

        resolver.is_referenced.assert_called_once_with("assets/img.png")

    @pytest.mark.parametrize(
        ("cleanable", "protected"),
        [(".*", None), (r"\.png$", ""), (".*", "(")],
    )
    def test_referenced_file_never_accepted(
        self, tmp_path: Path, cleanable: str, protected: str | None
    ) -> None:
        """No pattern combination can override a reference."""
        file_path = _write(tmp_path / "img.png")
        classifier, _ = _classifier(tmp_path, referenced=True)
        config = ScanConfiguration(cleanable_pattern=cleanable, protected_pattern=protected)

        assert classifier.classify(file_path, "img.png", config) is False

    def test_protected_wins_over_cleanable(self, tmp_path: Path) -> None:
        """Protection takes precedence when both patterns match."""
        file_path = _write(tmp_path / "note.md")
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=".*", protected_pattern=r"\.md$")

        assert classifier.classify(file_path, "note.md", config) is False

    def test_default_deny(self, tmp_path: Path) -> None:
        """Files matching neither pattern are left alone."""
        file_path = _write(tmp_path / "photo.jpg")
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=r"\.tmp$", protected_pattern=r"\.md$")

        assert classifier.classify(file_path, "photo.jpg", config) is False

    def test_empty_cleanable_pattern_matches_nothing(self, tmp_path: Path) -> None:
        """An empty cleanable pattern proposes nothing."""
        file_path = _write(tmp_path / "scratch.tmp")
        classifier, _ = _classifier(tmp_path)

        assert classifier.classify(file_path, "scratch.tmp", ScanConfiguration()) is False

    def test_below_min_size_rejected(self, tmp_path: Path) -> None:
        """Files smaller than the threshold are kept without a reference lookup."""
        file_path = _write(tmp_path / "small.tmp", size=500)
        classifier, resolver = _classifier(tmp_path)
        config = ScanConfiguration(min_file_size=1024, cleanable_pattern=".*")

        assert classifier.classify(file_path, "small.tmp", config) is False
        resolver.is_referenced.assert_not_called()

    def test_exactly_min_size_accepted(self, tmp_path: Path) -> None:
        """The size threshold is inclusive."""
        file_path = _write(tmp_path / "edge.tmp", size=1024)
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(min_file_size=1024, cleanable_pattern=".*")

        assert classifier.classify(file_path, "edge.tmp", config) is True

    def test_unstatable_file_rejected(self, tmp_path: Path) -> None:
        """A file whose size cannot be read is never proposed."""
        classifier, resolver = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=".*")

        assert classifier.classify(tmp_path / "gone.tmp", "gone.tmp", config) is False
        resolver.is_referenced.assert_not_called()

    def test_stat_permission_error_rejected(self, tmp_path: Path) -> None:
        """Any OSError from stat keeps the file."""
        file_path = _write(tmp_path / "locked.tmp")
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=".*")

        with patch.object(Path, "stat", side_effect=PermissionError("denied")):
            assert classifier.classify(file_path, "locked.tmp", config) is False

    def test_candidate_size_reports_stat_size(self, tmp_path: Path) -> None:
        """Accepted files report the size read during classification."""
        file_path = _write(tmp_path / "scratch.tmp", size=37)
        classifier, _ = _classifier(tmp_path)
        config = ScanConfiguration(cleanable_pattern=".*")

        assert classifier.candidate_size(file_path, "scratch.tmp", config) == 37

    def test_candidate_size_distinguishes_rejection_from_empty_file(
        self, tmp_path: Path
    ) -> None:
        """A rejected file gives None; an accepted empty file gives 0."""
        file_path = _write(tmp_path / "note.md", size=0)
        classifier, _ = _classifier(tmp_path)
        protected = ScanConfiguration(cleanable_pattern=".*", protected_pattern=r"\.md$")
        unprotected = ScanConfiguration(cleanable_pattern=".*")

        assert classifier.candidate_size(file_path, "note.md", protected) is None
        assert classifier.candidate_size(file_path, "note.md", unprotected) == 0


class TestRelativePath:
    """Tests for Classifier.relative_path."""

    def test_relative_posix_path(self, tmp_path: Path) -> None:
        """Absolute paths become forward-slash vault paths."""
        classifier, _ = _classifier(tmp_path)

        assert classifier.relative_path(tmp_path / "a" / "b.png") == "a/b.png"
