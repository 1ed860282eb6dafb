"""Document index models.

Defines the tracked-document record and the read-only interface the
reference resolver queries. Any object with this shape can stand in
for the on-disk index, e.g. a fake in tests.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Protocol


@dataclass(frozen=True, slots=True)
class VaultDocument:
    """A tracked document and its outgoing references.

    Attributes:
        path: Vault-relative path of the document.
        links: Link targets as written (path or basename, no subpath).
        embeds: Embed targets as written (path or basename, no subpath).
    """

    path: str
    links: tuple[str, ...] = field(default=())
    embeds: tuple[str, ...] = field(default=())

    @property
    def basename(self) -> str:
        """File name without its extension."""
        return PurePosixPath(self.path).stem

    @property
    def targets(self) -> tuple[str, ...]:
        """All outgoing targets, links first."""
        return (*self.links, *self.embeds)

    @property
    def has_structure(self) -> bool:
        """Check if the document has any outgoing link or embed."""
        return bool(self.links or self.embeds)


class DocumentIndex(Protocol):
    """Read-only view of the vault's documents and link maps.

    ``resolved_links`` and ``unresolved_links`` map a source document
    path to ``{target: count}``. Resolved targets are vault paths;
    unresolved targets are the link text as written.
    """

    @property
    def resolved_links(self) -> Mapping[str, Mapping[str, int]]: ...

    @property
    def unresolved_links(self) -> Mapping[str, Mapping[str, int]]: ...

    def get_document(self, path: str) -> VaultDocument | None: ...

    def documents(self) -> Iterable[VaultDocument]: ...
