"""Markdown rendering with table of contents extraction.

Converts page sources to HTML with mistune. The converter prepends a
``<nav>`` outline of the page headings; the outline is then parsed back
into Toc entries and removed from the body, which also yields the plain
text used for search.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import mistune
from bs4 import BeautifulSoup, Tag
from mistune.toc import add_toc_hook

from docweave.core.site import Node

logger = logging.getLogger(__name__)

TOC_MAX_LEVEL = 2


@dataclass
class Toc:
    """Table of contents entry."""

    title: str = ""
    link: str = ""
    children: list["Toc"] = field(default_factory=list)


@dataclass
class PageContent:
    """HTML body, plain text and outline extracted from a rendered page."""

    html: str
    text: str
    toc: Toc


@dataclass
class RenderResult:
    """Result of rendering a page source."""

    html: str
    text: str
    toc: Toc
    source_path: Path


def _heading_id(token: dict, index: int) -> str:
    return f"toc_{index + 1}"


def render_toc_nav(items: list[tuple[int, str, str]]) -> str:
    """Render heading outline as a nested ``<nav>`` list.

    Each heading opens as many list levels as needed to reach its own
    level. Skipped levels get list items without an anchor, so a page
    whose first heading is ``##`` produces an unanchored top-level item.

    Args:
        items: (level, anchor id, text) tuples in document order

    Returns:
        ``<nav>`` block, empty string when there are no headings
    """
    if not items:
        return ""

    parts = ["<nav>\n"]
    depth = 0
    for level, anchor, text in items:
        if level > depth:
            while depth < level:
                parts.append("<ul>\n<li>")
                depth += 1
        else:
            while depth > level:
                parts.append("</li>\n</ul>\n")
                depth -= 1
            parts.append("</li>\n<li>")
        parts.append(f'<a href="#{anchor}">{text}</a>')

    parts.append("</li>\n</ul>\n" * depth)
    parts.append("</nav>\n")
    return "".join(parts)


class MarkdownConverter:
    """Convert markdown to an HTML fragment with a heading outline."""

    def __init__(self, *, toc: bool = True, toc_max_level: int = TOC_MAX_LEVEL) -> None:
        """Initialize converter.

        Args:
            toc: Prepend a ``<nav>`` outline of the page headings
            toc_max_level: Deepest heading level included in the outline
        """
        self._toc = toc
        self._toc_max_level = toc_max_level
        self._markdown = mistune.create_markdown(
            escape=False,
            plugins=["strikethrough", "table", "url", "footnotes", "task_lists"],
        )
        if toc:
            add_toc_hook(
                self._markdown,
                min_level=1,
                max_level=6,
                heading_id=_heading_id,
            )

    def convert(self, markdown_text: str) -> str:
        """Convert markdown text to HTML.

        Args:
            markdown_text: Markdown source text

        Returns:
            HTML fragment, starting with the ``<nav>`` outline when enabled
        """
        logger.debug(f"Converting {len(markdown_text)} characters of markdown")
        html, state = self._markdown.parse(markdown_text)
        if not self._toc:
            return html
        items = [
            item for item in state.env.get("toc_items", []) if item[0] <= self._toc_max_level
        ]
        return render_toc_nav(items) + html


def _toc_from_anchor(anchor: Tag | None) -> Toc | None:
    if anchor is None or not anchor.has_attr("href"):
        return None
    return Toc(title=anchor.get_text(), link=str(anchor["href"]))


def _sub_entries(item: Tag) -> list[Toc]:
    """Anchored entries of the lists nested directly in an outline item."""
    entries: list[Toc] = []
    for sublist in item.find_all("ul", recursive=False):
        for sub_item in sublist.find_all("li", recursive=False):
            entry = _toc_from_anchor(sub_item.find("a", recursive=False))
            if entry is not None:
                entries.append(entry)
    return entries


def extract_toc(html: str) -> PageContent:
    """Extract the outline, body and plain text from converter output.

    For every top-level outline item:

    ==================  =============================================
    item                result
    ==================  =============================================
    has an anchor       top-level entry, nested items as its children
    has no anchor       nested items promoted to top-level entries
    ==================  =============================================

    All ``<nav>`` elements are removed from the body afterwards.

    Args:
        html: HTML fragment produced by MarkdownConverter

    Returns:
        PageContent with the body HTML, plain text and root Toc
    """
    # html5lib keeps whitespace-only text between block elements
    soup = BeautifulSoup(html, "html5lib")
    body = soup.body

    root = Toc()
    for item in soup.select("nav > ul > li"):
        heading = _toc_from_anchor(item.find("a", recursive=False))
        subheadings = _sub_entries(item)
        if heading is None:
            root.children.extend(subheadings)
        else:
            heading.children.extend(subheadings)
            root.children.append(heading)

    for nav in body.find_all("nav"):
        nav.decompose()

    text = body.get_text().replace("\n\n", "")
    return PageContent(html=body.decode_contents(), text=text, toc=root)


class PageRenderer:
    """Renders page sources from the docs directory.

    In strict mode a source that can't be read fails the build. Otherwise
    the failure is logged and the page is rendered empty.
    """

    def __init__(
        self,
        source_dir: Path,
        *,
        strict: bool = True,
        converter: MarkdownConverter | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            source_dir: Root directory containing markdown sources
            strict: Raise on unreadable sources instead of rendering them empty
            converter: Markdown converter, a default one when None
        """
        self._source_dir = source_dir
        self._strict = strict
        self._converter = converter or MarkdownConverter()

    @property
    def source_dir(self) -> Path:
        """Root directory containing markdown sources."""
        return self._source_dir

    def render(self, node: Node) -> RenderResult:
        """Render the markdown source of a page.

        Args:
            node: File node to render

        Returns:
            RenderResult with body HTML, plain text and Toc

        Raises:
            FileNotFoundError: In strict mode, if the source file doesn't exist
        """
        source_path = self._source_dir / node.path
        markdown_text = self._read_source(source_path)
        content = extract_toc(self._converter.convert(markdown_text))
        return RenderResult(
            html=content.html,
            text=content.text,
            toc=content.toc,
            source_path=source_path,
        )

    def _read_source(self, source_path: Path) -> str:
        try:
            return source_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if self._strict:
                raise FileNotFoundError(f"Source file not found: {source_path}") from None
            logger.warning(f"Source file not found, rendering empty page: {source_path}")
        except (OSError, UnicodeDecodeError) as e:
            if self._strict:
                raise
            logger.warning(f"Could not read {source_path}, rendering empty page: {e}")
        return ""
