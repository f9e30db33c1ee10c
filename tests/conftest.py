"""Shared test fixtures."""

from pathlib import Path

import pytest
from docweave.config import (
    BuildConfig,
    Config,
    DocsConfig,
    SearchSettings,
    ServerConfig,
    SiteConfig,
    ThemeConfig,
)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates source_dir and returns a Config instance using the bundled
    default theme. Use exist_ok=True to allow other fixtures to also
    create the docs dir.
    """
    source_dir = tmp_path / "docs"
    source_dir.mkdir(exist_ok=True)

    return Config(
        site=SiteConfig(name="Test Docs"),
        docs=DocsConfig(
            source_dir=source_dir,
            site_dir=tmp_path / "site",
            nav_file=tmp_path / "nav.yaml",
        ),
        theme=ThemeConfig(),
        build=BuildConfig(),
        search=SearchSettings(),
        server=ServerConfig(),
    )


@pytest.fixture
def two_page_project(tmp_path: Path, test_config: Config) -> Config:
    """Create a project with an index page and one child guide page."""
    docs = test_config.docs.source_dir
    (docs / "index.md").write_text("# Welcome\n\nHome page.\n", encoding="utf-8")
    (docs / "guide.md").write_text(
        "# Guide\n\nFirst steps.\n\n## Install\n\nRun the installer.\n",
        encoding="utf-8",
    )
    test_config.docs.nav_file.write_text(
        """
- title: Home
  path: index.md
  index: true
  children:
    - title: Guide
      path: guide.md
""",
        encoding="utf-8",
    )
    return test_config
