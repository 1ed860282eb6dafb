"""Vault document index.

Parses Markdown notes and Canvas boards into per-document links and
embeds plus the resolved and unresolved link maps used for reference
resolution.
"""

from vaultclean.index.links import ExtractedLinks, extract_canvas_links, extract_markdown_links
from vaultclean.index.models import DocumentIndex, VaultDocument
from vaultclean.index.vault import DOCUMENT_EXTENSIONS, VaultIndex

__all__ = [
    "DOCUMENT_EXTENSIONS",
    "DocumentIndex",
    "ExtractedLinks",
    "VaultDocument",
    "VaultIndex",
    "extract_canvas_links",
    "extract_markdown_links",
]
