"""Reference resolution against the vault's link graph.

The resolver answers a single question: is a vault path in use? It
consults every link representation the index exposes (per-document
links and embeds, the resolved link map, the unresolved link map)
and treats "referenced" as the logical OR across all of them. A file
wrongly kept is harmless; a file wrongly deleted is not.
"""

import logging

from vaultclean.index.models import DocumentIndex, VaultDocument

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Decides whether a vault path is referenced by any document.

    Args:
        index: Document index to query. The resolver holds no other state.
    """

    def __init__(self, index: DocumentIndex) -> None:
        self._index = index

    def is_referenced(self, path: str) -> bool:
        """Check if a vault-relative path is referenced or embedded.

        Checks in order, first hit wins:
        1. A tracked document with outgoing links or embeds is in use.
        2. Another document links/embeds the path or the document's basename.
        3. The resolved link map has the path as a target.
        For paths that are not tracked documents, only the resolved and
        unresolved link maps are consulted.

        Args:
            path: Vault-relative path with forward slashes.

        Returns:
            True if anything references the path.
        """
        document = self._index.get_document(path)
        if document is None:
            return self._is_link_map_target(path, include_unresolved=True)

        if document.has_structure:
            logger.debug("Document has outgoing references, keeping: %s", path)
            return True

        if self._is_linked_from_documents(document):
            return True

        return self._is_link_map_target(path, include_unresolved=False)

    def _is_linked_from_documents(self, document: VaultDocument) -> bool:
        """Check per-document links and embeds of every other document."""
        names = {document.path.casefold(), document.basename.casefold()}
        for source in self._index.documents():
            if source.path == document.path:
                continue
            for target in source.targets:
                if target.casefold() in names:
                    logger.debug("%s is referenced by %s", document.path, source.path)
                    return True
        return False

    def _is_link_map_target(self, path: str, *, include_unresolved: bool) -> bool:
        """Check the global link maps for a source pointing at ``path``."""
        maps = [self._index.resolved_links]
        if include_unresolved:
            maps.append(self._index.unresolved_links)

        for link_map in maps:
            for source, targets in link_map.items():
                if targets.get(path):
                    logger.debug("%s is a link target of %s", path, source)
                    return True
        return False
