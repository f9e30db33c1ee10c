"""Tests for link normalization."""

import pytest
from docweave.core.links import LinkNormalizer, slugify_path


class TestSlugifyPath:
    """Tests for slugify_path()."""

    def test__ascii_segments__slugified_separately(self) -> None:
        """Slugify every segment and keep the separators."""
        assert slugify_path("User Guide/Getting Started") == "user-guide/getting-started"

    def test__non_latin_segment__transliterated(self) -> None:
        """Transliterate non-Latin scripts to ASCII."""
        assert slugify_path("中文/入门") == "zhong-wen/ru-men"

    def test__punctuation__replaced_with_hyphens(self) -> None:
        """Replace punctuation with hyphens."""
        assert slugify_path("faq/what's new?") == "faq/what-s-new"

    def test__segment_without_slug__raises_value_error(self) -> None:
        """Reject paths that would produce an empty link segment."""
        with pytest.raises(ValueError, match="Cannot derive a link from 'notes/___'"):
            slugify_path("notes/___")


class TestLinkNormalizer:
    """Tests for LinkNormalizer.normalize()."""

    def test__first_occurrence__kept(self) -> None:
        """Accept the first occurrence of a link unchanged."""
        links = LinkNormalizer()

        assert links.normalize("guide/install") == "guide/install"

    def test__second_occurrence__gets_suffix_one(self) -> None:
        """Second occurrence of the same slug gets a -1 suffix."""
        links = LinkNormalizer()

        first = links.normalize("Guide")
        second = links.normalize("guide")

        assert first == "guide"
        assert second == "guide-1"

    def test__third_occurrence__gets_suffix_two(self) -> None:
        """Each further repeat increments the suffix."""
        links = LinkNormalizer()

        results = [links.normalize("Guide") for _ in range(3)]

        assert results == ["guide", "guide-1", "guide-2"]

    def test__suffixed_candidate__tracked_separately(self) -> None:
        """An organic suffixed link is a distinct candidate from its base."""
        links = LinkNormalizer()

        links.normalize("guide")
        organic = links.normalize("guide-1")

        assert organic == "guide-1"
        assert links.normalize("guide") == "guide-1"

    def test__empty_link__unchanged_and_not_recorded(self) -> None:
        """Empty links are returned as-is and never de-duplicated."""
        links = LinkNormalizer()

        assert links.normalize("") == ""
        assert links.normalize("") == ""

    def test__transliteration_disabled__raw_link_returned(self) -> None:
        """Return raw links unchanged when transliteration is off."""
        links = LinkNormalizer(transliterate=False)

        assert links.normalize("中文/Guide") == "中文/Guide"
        assert links.normalize("中文/Guide") == "中文/Guide"
        assert links.transliterate is False

    def test__separate_instances__separate_tables(self) -> None:
        """De-duplication state belongs to one normalizer."""
        assert LinkNormalizer().normalize("guide") == "guide"
        assert LinkNormalizer().normalize("guide") == "guide"

    def test__unsluggable_link__raises_and_not_recorded(self) -> None:
        normalizer = LinkNormalizer()

        with pytest.raises(ValueError, match="Cannot derive a link"):
            normalizer.normalize("___")

        assert normalizer.normalize("guide") == "guide"
