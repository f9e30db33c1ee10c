"""Full-text search corpus.

Collects one document per rendered page and serializes the corpus in the
lunr-style ``search_index.json`` layout read by the theme's search script.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)

SEARCH_INDEX_PATH = Path("static") / "search" / "search_index.json"


class SearchConfigDict(TypedDict):
    """Dictionary representation of the search configuration."""

    lang: list[str]
    prebuild_index: bool
    separator: str


class SearchDocDict(TypedDict):
    """Dictionary representation of a search document."""

    location: str
    text: str
    title: str


class SearchIndexDict(TypedDict):
    """Dictionary representation of the whole search index."""

    config: SearchConfigDict
    docs: list[SearchDocDict]


@dataclass(frozen=True)
class SearchDoc:
    """One indexable page."""

    location: str
    title: str
    text: str

    def to_dict(self) -> SearchDocDict:
        """Convert to dictionary for JSON serialization."""
        return {"location": self.location, "text": self.text, "title": self.title}


@dataclass
class SearchConfig:
    """Client-side search settings."""

    lang: list[str] = field(default_factory=lambda: ["en"])
    prebuild_index: bool = False
    separator: str = r"[\s\-]+"

    def to_dict(self) -> SearchConfigDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "lang": list(self.lang),
            "prebuild_index": self.prebuild_index,
            "separator": self.separator,
        }


class SearchCorpus:
    """Search configuration and documents in render order."""

    def __init__(self, config: SearchConfig | None = None) -> None:
        self._config = config or SearchConfig()
        self._docs: list[SearchDoc] = []

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def docs(self) -> list[SearchDoc]:
        return list(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def add_doc(self, doc: SearchDoc) -> None:
        """Append a document. No de-duplication is done."""
        self._docs.append(doc)

    def to_dict(self) -> SearchIndexDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "config": self._config.to_dict(),
            "docs": [doc.to_dict() for doc in self._docs],
        }


def write_search_index(corpus: SearchCorpus, site_dir: Path) -> Path:
    """Write the search index JSON file into the site.

    Args:
        corpus: Search corpus to serialize
        site_dir: Output site directory

    Returns:
        Path of the written index file
    """
    index_path = site_dir / SEARCH_INDEX_PATH
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(json.dumps(corpus.to_dict(), ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote search index with {len(corpus)} documents to {index_path}")
    return index_path
