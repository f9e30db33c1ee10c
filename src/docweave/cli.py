"""CLI interface for docweave.

Command-line tool for building and previewing documentation sites.
"""

import logging
import sys
from pathlib import Path

import click

from docweave.config import Config


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
def cli() -> None:
    """docweave - static documentation sites from markdown."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docweave.toml)",
)
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Documentation source directory (overrides config)",
)
@click.option(
    "--site-dir",
    "-d",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output site directory (overrides config)",
)
@click.option(
    "--skin",
    default=None,
    help="Theme skin (overrides config)",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on unreadable markdown sources (overrides config, default: strict)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def build(
    config_path: Path | None,
    source_dir: Path | None,
    site_dir: Path | None,
    skin: str | None,
    strict: bool | None,
    verbose: bool,
) -> None:
    """Build the HTML site and search index."""
    from docweave.core.builder import SiteGenerator

    _setup_logging(verbose)
    try:
        config = Config.load(config_path).with_overrides(
            source_dir=source_dir,
            site_dir=site_dir,
            skin=skin,
            strict=strict,
        )
        click.echo(f"Source directory: {config.docs.source_dir}")
        click.echo(f"Theme: {config.theme.name} ({config.theme.skin})")

        result = SiteGenerator(config).build()
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(
        click.style(
            f"Built {len(result.pages)} pages into {result.site_dir}",
            fg="green",
            bold=True,
        )
    )
    if result.search_index is not None:
        click.echo(f"Search index: {result.search_index}")


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docweave.toml)",
)
@click.option(
    "--site-dir",
    "-d",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Site directory to serve (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--build/--no-build",
    "build_first",
    default=True,
    help="Build the site before serving (default: enabled)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def serve(
    config_path: Path | None,
    site_dir: Path | None,
    host: str | None,
    port: int | None,
    build_first: bool,
    verbose: bool,
) -> None:
    """Serve the built site for local preview."""
    from docweave.core.builder import SiteGenerator
    from docweave.server import run_server

    _setup_logging(verbose)
    try:
        config = Config.load(config_path).with_overrides(
            site_dir=site_dir, host=host, port=port
        )
        if build_first:
            result = SiteGenerator(config).build()
            click.echo(f"Built {len(result.pages)} pages into {result.site_dir}")
        if not config.docs.site_dir.is_dir():
            raise FileNotFoundError(f"Site directory not found: {config.docs.site_dir}")
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Serving {config.docs.site_dir} on http://{config.server.host}:{config.server.port}")
    run_server(config.docs.site_dir, config.server.host, config.server.port)
