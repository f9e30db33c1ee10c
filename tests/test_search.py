"""Tests for the search corpus."""

import json
from pathlib import Path

from docweave.core.search import SearchConfig, SearchCorpus, SearchDoc, write_search_index


class TestSearchCorpus:
    """Tests for SearchCorpus."""

    def test__add_doc__keeps_insertion_order(self) -> None:
        corpus = SearchCorpus()

        corpus.add_doc(SearchDoc(location="", title="Home", text="welcome"))
        corpus.add_doc(SearchDoc(location="guide", title="Guide", text="steps"))

        assert [doc.location for doc in corpus.docs] == ["", "guide"]
        assert len(corpus) == 2

    def test__add_doc__no_deduplication(self) -> None:
        """Identical documents are all kept."""
        corpus = SearchCorpus()
        doc = SearchDoc(location="guide", title="Guide", text="steps")

        corpus.add_doc(doc)
        corpus.add_doc(doc)

        assert len(corpus) == 2

    def test__to_dict__config_and_docs(self) -> None:
        corpus = SearchCorpus(SearchConfig(lang=["en", "zh"], prebuild_index=True, separator=" "))
        corpus.add_doc(SearchDoc(location="guide", title="Guide", text="steps"))

        data = corpus.to_dict()

        assert data == {
            "config": {"lang": ["en", "zh"], "prebuild_index": True, "separator": " "},
            "docs": [{"location": "guide", "text": "steps", "title": "Guide"}],
        }

    def test__default_config(self) -> None:
        config = SearchCorpus().config

        assert config.lang == ["en"]
        assert config.prebuild_index is False
        assert config.separator == r"[\s\-]+"


class TestWriteSearchIndex:
    """Tests for write_search_index()."""

    def test__writes_json_under_static_search(self, tmp_path: Path) -> None:
        corpus = SearchCorpus()
        corpus.add_doc(SearchDoc(location="指南", title="指南", text="内容"))

        path = write_search_index(corpus, tmp_path / "site")

        assert path == tmp_path / "site" / "static" / "search" / "search_index.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["docs"][0]["title"] == "指南"
        assert data["config"]["lang"] == ["en"]
