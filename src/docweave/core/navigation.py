"""Navigation document loading.

Reads the declarative navigation file (YAML) into a tree of NavEntry
objects. The entries describe the site hierarchy only; links, flags and
pagination are computed by the tree builder.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass
class NavEntry:
    """One entry of the navigation document."""

    title: str | None = None
    path: str | None = None
    index: bool = False
    children: list["NavEntry"] = field(default_factory=list)


def load_nav(path: Path, *, root_title: str = "Documentation") -> NavEntry:
    """Load navigation document from a YAML file.

    The file holds either a list of entries or a mapping with ``title``
    and ``nav`` keys. A top-level list is wrapped into a root folder entry.

    Args:
        path: Path to the navigation YAML file
        root_title: Title of the synthetic root entry

    Returns:
        Root NavEntry

    Raises:
        FileNotFoundError: If the navigation file doesn't exist
        ValueError: If the navigation structure is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Navigation file not found: {path}")

    logger.debug(f"Loading navigation from {path}")
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_nav(data, root_title=root_title)


def parse_nav(data: object, *, root_title: str = "Documentation") -> NavEntry:
    """Parse raw navigation data into a NavEntry tree.

    Args:
        data: Decoded YAML document
        root_title: Title of the synthetic root entry

    Returns:
        Root NavEntry
    """
    if isinstance(data, dict):
        title = data.get("title", root_title)
        if not isinstance(title, str):
            raise ValueError("nav title must be a string")
        items = data.get("nav", [])
    else:
        title = root_title
        items = data

    if not isinstance(items, list):
        raise ValueError("nav must be a list of entries")

    return NavEntry(
        title=title,
        children=[_parse_entry(item, f"nav[{i}]") for i, item in enumerate(items)],
    )


def _parse_entry(data: object, where: str) -> NavEntry:
    """Recursively parse a single navigation entry."""
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be a mapping")

    title = data.get("title")
    if title is not None and not isinstance(title, str):
        raise ValueError(f"{where}.title must be a string")

    path = data.get("path")
    if path is not None and not isinstance(path, str):
        raise ValueError(f"{where}.path must be a string")

    index = data.get("index", False)
    if not isinstance(index, bool):
        raise ValueError(f"{where}.index must be a boolean")

    children_raw = data.get("children", [])
    if not isinstance(children_raw, list):
        raise ValueError(f"{where}.children must be a list")

    return NavEntry(
        title=title,
        path=path or None,
        index=index,
        children=[
            _parse_entry(child, f"{where}.children[{i}]")
            for i, child in enumerate(children_raw)
        ],
    )
