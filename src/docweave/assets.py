"""Asset discovery for bundled themes.

Locates themes bundled into the docweave package.
"""

from importlib.resources import files
from pathlib import Path


def get_themes_dir() -> Path:
    """Return path to bundled themes.

    Returns:
        Path to the directory containing one subdirectory per theme.

    Raises:
        FileNotFoundError: If bundled themes are missing from the package.
    """
    themes = files("docweave").joinpath("themes")
    if not themes.is_dir():
        msg = "Bundled themes not found. Reinstall docweave with its package data."
        raise FileNotFoundError(msg)
    return Path(str(themes))


def resolve_theme_dir(theme: str | Path) -> Path:
    """Resolve a theme reference to its directory.

    An existing directory is used as-is. Anything else is looked up by
    name among the bundled themes.

    Args:
        theme: Theme directory path or bundled theme name

    Returns:
        Path to the theme directory

    Raises:
        FileNotFoundError: If no such theme exists.
    """
    candidate = Path(theme)
    if candidate.is_dir():
        return candidate

    bundled = get_themes_dir() / str(theme)
    if not bundled.is_dir():
        raise FileNotFoundError(f"Theme not found: {theme}")
    return bundled
