"""Link and embed extraction from vault documents.

Recognises wikilinks (``[[target]]``, ``[[target|alias]]``,
``[[target#heading]]``), wikilink embeds (``![[target]]``), Markdown
links (``[text](target)``) and Markdown embeds (``![alt](target)``).
Links inside code blocks, inline code, and ``%%`` comments are ignored,
as are external URLs and same-document anchors.

Canvas boards are JSON: file nodes embed their file, and text nodes
contain Markdown that is parsed like a note.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from urllib.parse import unquote

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"^(`{3,}|~{3,})[^\n]*\n.*?^\1[ \t]*$", re.MULTILINE | re.DOTALL)
_INLINE_CODE = re.compile(r"(`+)(?!`).+?(?<!`)\1(?!`)")
_COMMENT = re.compile(r"%%.*?%%", re.DOTALL)

_WIKILINK = re.compile(r"(!?)\[\[([^\[\]\n]+?)\]\]")
_MARKDOWN_LINK = re.compile(
    r"(!?)\[(?:[^\[\]]|\[[^\[\]]*\])*\]\(\s*(<[^>\n]+>|[^)\s]+)(?:\s+[\"'(][^\n]*?[\"')])?\s*\)"
)
_URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(slots=True)
class ExtractedLinks:
    """Outgoing references of one document, in document order.

    Attributes:
        links: Link targets (path or name as written, no subpath).
        embeds: Embed targets (path or name as written, no subpath).
    """

    links: list[str] = field(default_factory=list)
    embeds: list[str] = field(default_factory=list)

    def add(self, target: str, *, embed: bool) -> None:
        """Record a target as a link or an embed."""
        (self.embeds if embed else self.links).append(target)

    def extend(self, other: "ExtractedLinks") -> None:
        """Append all targets of another extraction."""
        self.links.extend(other.links)
        self.embeds.extend(other.embeds)


def strip_code(text: str) -> str:
    """Remove fenced code blocks, inline code, and ``%%`` comments."""
    text = _FENCED_BLOCK.sub("", text)
    text = _COMMENT.sub("", text)
    return _INLINE_CODE.sub("", text)


def clean_wikilink_target(raw: str) -> str:
    """Reduce wikilink inner text to its target path.

    Drops the display alias (``|``) and any heading or block subpath (``#``).
    Inside Markdown tables the alias pipe is escaped as ``\\|``.
    """
    target = raw.split("|", 1)[0].rstrip("\\")
    target = target.split("#", 1)[0]
    return target.strip()


def clean_markdown_target(raw: str) -> str | None:
    """Reduce a Markdown link destination to a vault target.

    Returns:
        Decoded target path, or None for external URLs and pure anchors.
    """
    target = raw.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()
    if not target or target.startswith("#") or _URL_SCHEME.match(target):
        return None
    target = unquote(target.split("#", 1)[0]).strip()
    return target or None


def extract_markdown_links(text: str) -> ExtractedLinks:
    """Extract links and embeds from Markdown text.

    Args:
        text: Markdown source.

    Returns:
        ExtractedLinks in document order (per link syntax).
    """
    result = ExtractedLinks()
    body = strip_code(text)

    for match in _WIKILINK.finditer(body):
        target = clean_wikilink_target(match.group(2))
        if target:
            result.add(target, embed=bool(match.group(1)))

    for match in _MARKDOWN_LINK.finditer(body):
        target = clean_markdown_target(match.group(2))
        if target:
            result.add(target, embed=bool(match.group(1)))

    return result


def extract_canvas_links(text: str, *, source: str = "<canvas>") -> ExtractedLinks:
    """Extract references from a Canvas board.

    File nodes count as embeds of their file; text nodes are parsed as
    Markdown. A board that is not valid JSON yields no references.

    Args:
        text: Canvas JSON source.
        source: Path used in log messages.

    Returns:
        ExtractedLinks for the board.
    """
    result = ExtractedLinks()
    try:
        data = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        logger.warning("Cannot parse canvas %s: %s", source, e)
        return result

    nodes = data.get("nodes") if isinstance(data, dict) else None
    if not isinstance(nodes, list):
        return result

    for node in nodes:
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        if node_type == "file" and isinstance(node.get("file"), str):
            result.add(node["file"], embed=True)
        elif node_type == "text" and isinstance(node.get("text"), str):
            result.extend(extract_markdown_links(node["text"]))

    return result
