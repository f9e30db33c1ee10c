"""Static site build pipeline.

Runs the whole build in one sequential pass:

    theme -> navigation tree -> pagination -> pages + search docs
          -> theme static files -> search index

All per-build state lives on a BuildContext, so two builds never share
a link de-duplication table or a search corpus.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docweave.config import Config
from docweave.core.links import LinkNormalizer
from docweave.core.navigation import NavEntry, load_nav
from docweave.core.pagination import Pagination, paginate
from docweave.core.renderer import PageRenderer, Toc
from docweave.core.search import SearchConfig, SearchCorpus, SearchDoc, write_search_index
from docweave.core.site import NavTree, Node, build_tree
from docweave.theme import PageTemplate, Skin, Theme, load_theme

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """State shared by the stages of a single build."""

    config: Config
    theme: Theme
    skin: Skin
    links: LinkNormalizer
    corpus: SearchCorpus
    tree: NavTree | None = None
    pagination: Pagination | None = None


@dataclass
class BuildResult:
    """Summary of a finished build."""

    site_dir: Path
    pages: list[Path]
    search_index: Path | None


def page_output_path(site_dir: Path, node: Node) -> Path:
    """Output file of a page: ``<link>/index.html`` or the site root index."""
    if node.is_index or not node.link:
        return site_dir / "index.html"
    return site_dir / node.link / "index.html"


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class SiteGenerator:
    """Builds the HTML site and search index from a configuration."""

    def __init__(self, config: Config, *, nav: NavEntry | None = None) -> None:
        """Initialize generator.

        Args:
            config: Application configuration
            nav: Navigation document, loaded from docs.nav_file when None
        """
        self._config = config
        self._nav = nav

    def create_context(self) -> BuildContext:
        """Load the theme and set up fresh per-build state.

        Raises:
            ThemeError: If the theme or skin can't be loaded
        """
        theme = load_theme(self._config.theme.name)
        skin = theme.get_skin(self._config.theme.skin)
        search = self._config.search
        return BuildContext(
            config=self._config,
            theme=theme,
            skin=skin,
            links=LinkNormalizer(transliterate=self._config.build.transliterate_links),
            corpus=SearchCorpus(
                SearchConfig(
                    lang=list(search.lang),
                    prebuild_index=search.prebuild_index,
                    separator=search.separator,
                )
            ),
        )

    def build(self) -> BuildResult:
        """Run the full build.

        Returns:
            BuildResult listing the written pages

        Raises:
            ThemeError: If the theme or skin is invalid, before any page is written
            FileNotFoundError: If the navigation file or (in strict mode) a source is missing
            ValueError: If the navigation is invalid
        """
        ctx = self.create_context()
        template = PageTemplate(ctx.theme)

        nav = self._nav or load_nav(
            self._config.docs.nav_file,
            root_title=self._config.site.name,
        )
        ctx.tree = build_tree(nav, ctx.links)
        ctx.pagination = paginate(ctx.tree.pages)
        logger.info(f"Navigation has {len(ctx.tree)} nodes, {len(ctx.pagination)} pages")

        renderer = PageRenderer(self._config.docs.source_dir, strict=self._config.build.strict)
        site_dir = self._config.docs.site_dir
        written = [
            self._build_page(ctx, renderer, template, node, site_dir)
            for node in ctx.tree.pages
        ]

        copy_static(ctx.theme, site_dir)

        search_index: Path | None = None
        if self._config.search.enabled:
            search_index = write_search_index(ctx.corpus, site_dir)

        return BuildResult(site_dir=site_dir, pages=written, search_index=search_index)

    def _build_page(
        self,
        ctx: BuildContext,
        renderer: PageRenderer,
        template: PageTemplate,
        node: Node,
        site_dir: Path,
    ) -> Path:
        """Render, index and write a single page."""
        result = renderer.render(node)
        ctx.corpus.add_doc(SearchDoc(location=node.link, title=node.title, text=result.text))

        html = template.render(page_context(ctx, node, toc=result.toc, content=result.html))
        output_path = page_output_path(site_dir, node)
        logger.info(f"Building {output_path}")
        _write_file(output_path, html)
        return output_path


def page_context(ctx: BuildContext, node: Node, *, toc: Toc, content: str) -> dict[str, Any]:
    """Build the template context of a page.

    Args:
        ctx: Build context with tree and pagination set
        node: Page being rendered
        toc: Root Toc of the page
        content: Page body HTML

    Returns:
        Template context dictionary
    """
    if ctx.tree is None or ctx.pagination is None:
        raise RuntimeError("Navigation tree must be built before rendering pages")

    return {
        "config": ctx.config,
        "nav": ctx.tree,
        "tocs": toc,
        "content": content,
        "node": node,
        "prev": ctx.pagination.prev(node),
        "next": ctx.pagination.next(node),
        "index": ctx.tree.home,
        "theme": ctx.theme,
        "skin": ctx.skin,
        "base_dir": node.base_dir,
        "active": ctx.tree.active_path(node),
    }


def copy_static(theme: Theme, site_dir: Path) -> None:
    """Copy the theme's static files into ``<site>/static``."""
    if not theme.static_dir.is_dir():
        logger.debug(f"Theme {theme.name} has no static files")
        return
    logger.info(f"Copying static files from {theme.static_dir}")
    shutil.copytree(theme.static_dir, site_dir / "static", dirs_exist_ok=True)
