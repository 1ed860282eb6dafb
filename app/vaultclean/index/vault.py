"""Document index built by parsing a vault on disk.

Tracks Markdown notes and Canvas boards as documents, records their
outgoing links and embeds, and resolves every target against the
files present in the vault. Resolved targets are counted per source
under their vault path; targets that match no file are counted under
their link text.

Hidden entries (names starting with a dot, e.g. ``.obsidian`` or
``.trash``) are not part of the vault and are never indexed.
"""

import logging
import os
import posixpath
from collections import defaultdict
from collections.abc import Iterable, Mapping
from pathlib import Path

from vaultclean.index.links import ExtractedLinks, extract_canvas_links, extract_markdown_links
from vaultclean.index.models import VaultDocument

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = ".md"
CANVAS_EXTENSION = ".canvas"
DOCUMENT_EXTENSIONS: frozenset[str] = frozenset({MARKDOWN_EXTENSION, CANVAS_EXTENSION})


class VaultIndex:
    """In-memory document index and link maps for one vault.

    Instances are snapshots: build a new one for every scan.

    Args:
        documents: Tracked documents keyed by vault path.
        files: Every visible file path in the vault (documents included).
    """

    def __init__(self, documents: Mapping[str, VaultDocument], files: Iterable[str]) -> None:
        self._documents = dict(documents)
        # Keyed by casefolded path and name; values keep the on-disk spelling.
        self._files: dict[str, list[str]] = defaultdict(list)
        self._files_by_name: dict[str, list[str]] = defaultdict(list)
        for path in sorted(set(files)):
            self._files[path.casefold()].append(path)
            self._files_by_name[posixpath.basename(path).casefold()].append(path)

        self._resolved: dict[str, dict[str, int]] = {}
        self._unresolved: dict[str, dict[str, int]] = {}
        self._build_link_maps()

    @classmethod
    def build(cls, vault_root: Path) -> "VaultIndex":
        """Parse every document under ``vault_root``.

        Args:
            vault_root: Absolute path of the vault.

        Returns:
            VaultIndex snapshot of the vault.

        Raises:
            OSError: If a visible folder cannot be listed or a document
                exists but cannot be read.
        """
        files: list[str] = []
        documents: dict[str, VaultDocument] = {}

        for dirpath, dirnames, filenames in os.walk(vault_root, onerror=_raise_walk_error):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            base = Path(dirpath)
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                full_path = base / filename
                path = full_path.relative_to(vault_root).as_posix()
                files.append(path)

                if full_path.suffix.lower() not in DOCUMENT_EXTENSIONS:
                    continue
                extracted = _read_document(full_path, path)
                if extracted is None:
                    continue
                documents[path] = VaultDocument(
                    path=path,
                    links=tuple(extracted.links),
                    embeds=tuple(extracted.embeds),
                )

        logger.debug("Indexed %d documents out of %d files", len(documents), len(files))
        return cls(documents, files)

    @property
    def resolved_links(self) -> Mapping[str, Mapping[str, int]]:
        """Source document path -> {resolved target path: count}."""
        return self._resolved

    @property
    def unresolved_links(self) -> Mapping[str, Mapping[str, int]]:
        """Source document path -> {unresolved link text: count}."""
        return self._unresolved

    def get_document(self, path: str) -> VaultDocument | None:
        """Look up a tracked document by vault path."""
        return self._documents.get(path)

    def documents(self) -> Iterable[VaultDocument]:
        """Iterate over all tracked documents."""
        return self._documents.values()

    def resolve(self, target: str, source_path: str) -> str | None:
        """Resolve a link target the way the vault's editor does.

        Tries in order: the exact vault path, the path with ``.md``
        appended, the path relative to the source document's folder,
        and finally a match on the file name anywhere in the vault
        (shortest path wins). Matching ignores case; a file whose
        spelling matches exactly is preferred.

        Args:
            target: Link target as written.
            source_path: Vault path of the linking document.

        Returns:
            Vault path of the target file, or None if nothing matches.
        """
        target = target.strip().lstrip("/")
        if not target:
            return None

        candidates = [target, target + MARKDOWN_EXTENSION]
        source_dir = posixpath.dirname(source_path)
        if source_dir:
            relative = posixpath.normpath(posixpath.join(source_dir, target))
            if not relative.startswith(".."):
                candidates += [relative, relative + MARKDOWN_EXTENSION]

        for candidate in candidates:
            normalized = posixpath.normpath(candidate)
            paths = self._files.get(normalized.casefold())
            if paths:
                return normalized if normalized in paths else paths[0]

        return self._resolve_by_name(target)

    def _resolve_by_name(self, target: str) -> str | None:
        folded = target.casefold()
        name = posixpath.basename(folded)
        matches: list[str] = []
        for key, suffix in (
            (name, folded),
            (name + MARKDOWN_EXTENSION, folded + MARKDOWN_EXTENSION),
        ):
            for path in self._files_by_name.get(key, ()):
                if _has_suffix(path.casefold(), suffix):
                    matches.append(path)

        if not matches:
            return None
        exact = [
            p
            for p in matches
            if _has_suffix(p, target) or _has_suffix(p, target + MARKDOWN_EXTENSION)
        ]
        return min(exact or matches, key=lambda p: (p.count("/"), len(p), p))

    def _build_link_maps(self) -> None:
        for document in self._documents.values():
            resolved: dict[str, int] = {}
            unresolved: dict[str, int] = {}
            for target in document.targets:
                path = self.resolve(target, document.path)
                if path is None:
                    unresolved[target] = unresolved.get(target, 0) + 1
                else:
                    resolved[path] = resolved.get(path, 0) + 1
            self._resolved[document.path] = resolved
            if unresolved:
                self._unresolved[document.path] = unresolved


def _has_suffix(path: str, suffix: str) -> bool:
    """Check if ``suffix`` matches ``path`` on whole path segments."""
    return path == suffix or path.endswith("/" + suffix)


def _read_document(full_path: Path, path: str) -> ExtractedLinks | None:
    """Read and parse one document.

    Returns:
        Extracted references, or None if the file vanished.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    try:
        text = full_path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        logger.warning("Document vanished while indexing: %s", path)
        return None

    if full_path.suffix.lower() == CANVAS_EXTENSION:
        return extract_canvas_links(text, source=path)
    return extract_markdown_links(text)


def _raise_walk_error(error: OSError) -> None:
    """Propagate a folder listing failure out of ``os.walk``.

    Only a folder that vanished mid-walk is skipped.
    """
    if isinstance(error, FileNotFoundError):
        logger.warning("Folder vanished while indexing: %s", error.filename)
        return
    raise error
