"""Theme loading and page templating.

A theme is a directory with a ``theme.yaml`` descriptor, a ``templates``
directory holding Jinja2 templates and a ``static`` directory copied into
the built site. The descriptor lists the skins (visual variants) the theme
provides.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from docweave.assets import resolve_theme_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.yaml"
PAGE_TEMPLATE = "body.html"


class ThemeError(Exception):
    """Raised when a theme or skin can't be loaded."""


@dataclass(frozen=True)
class Skin:
    """Named visual variant of a theme."""

    name: str
    stylesheet: str | None = None
    highlight: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class Theme:
    """Theme descriptor."""

    name: str
    path: Path
    skins: dict[str, Skin] = field(default_factory=dict)

    @property
    def template_dir(self) -> Path:
        return self.path / "templates"

    @property
    def static_dir(self) -> Path:
        return self.path / "static"

    def get_skin(self, name: str) -> Skin:
        """Get a skin by name.

        Raises:
            ThemeError: If the theme has no such skin
        """
        skin = self.skins.get(name)
        if skin is None:
            available = ", ".join(sorted(self.skins)) or "none"
            raise ThemeError(
                f"No skin '{name}' in {self.path / THEME_FILENAME} (available: {available})"
            )
        return skin


def load_theme(theme: str | Path) -> Theme:
    """Load a theme descriptor.

    Args:
        theme: Theme directory path or bundled theme name

    Returns:
        Theme instance

    Raises:
        ThemeError: If the theme is missing or its descriptor is invalid
    """
    try:
        theme_dir = resolve_theme_dir(theme)
    except FileNotFoundError as e:
        raise ThemeError(str(e)) from e

    descriptor = theme_dir / THEME_FILENAME
    try:
        data = yaml.safe_load(descriptor.read_text(encoding="utf-8"))
    except OSError as e:
        raise ThemeError(f"Cannot read theme descriptor {descriptor}: {e}") from e
    except yaml.YAMLError as e:
        raise ThemeError(f"Invalid YAML in {descriptor}: {e}") from e

    if not isinstance(data, dict):
        raise ThemeError(f"{descriptor} must be a mapping")

    name = data.get("name", theme_dir.name)
    if not isinstance(name, str):
        raise ThemeError(f"{descriptor}: name must be a string")

    skins_raw = data.get("skin", {})
    if not isinstance(skins_raw, dict):
        raise ThemeError(f"{descriptor}: skin must be a mapping")

    skins = {
        skin_name: _parse_skin(skin_name, skin_data, descriptor)
        for skin_name, skin_data in skins_raw.items()
    }
    logger.debug(f"Loaded theme '{name}' from {theme_dir} with skins {sorted(skins)}")
    return Theme(name=name, path=theme_dir, skins=skins)


def _parse_skin(name: str, data: object, descriptor: Path) -> Skin:
    if data is None:
        return Skin(name=name)
    if not isinstance(data, dict):
        raise ThemeError(f"{descriptor}: skin.{name} must be a mapping")

    options = dict(data)
    stylesheet = options.pop("stylesheet", None)
    highlight = options.pop("highlight", None)
    if stylesheet is not None and not isinstance(stylesheet, str):
        raise ThemeError(f"{descriptor}: skin.{name}.stylesheet must be a string")
    if highlight is not None and not isinstance(highlight, str):
        raise ThemeError(f"{descriptor}: skin.{name}.highlight must be a string")

    return Skin(name=name, stylesheet=stylesheet, highlight=highlight, options=options)


class PageTemplate:
    """Renders pages with the theme's page template."""

    def __init__(self, theme: Theme, template_name: str = PAGE_TEMPLATE) -> None:
        """Load the page template.

        Args:
            theme: Theme providing the templates directory
            template_name: Template file name inside the templates directory

        Raises:
            ThemeError: If the template can't be loaded
        """
        self._env = Environment(
            loader=FileSystemLoader(str(theme.template_dir)),
            autoescape=select_autoescape(),
        )
        try:
            self._template = self._env.get_template(template_name)
        except TemplateError as e:
            raise ThemeError(f"Cannot load template {template_name} from {theme.template_dir}: {e}") from e

    def render(self, context: dict[str, Any]) -> str:
        """Render a page from its template context."""
        return self._template.render(context)
