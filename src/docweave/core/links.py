"""Output link normalization.

Turns navigation paths into URL-safe links. Each path segment is
transliterated and slugified separately, and repeated links get a numeric
suffix so that two pages never share an output directory.
"""

import logging

from slugify import slugify

logger = logging.getLogger(__name__)


def slugify_path(raw: str) -> str:
    """Slugify each segment of a slash-separated path.

    Args:
        raw: Path such as "中文/Getting Started"

    Returns:
        Slash-joined slugs, e.g. "zhong-wen/getting-started"

    Raises:
        ValueError: If a segment has nothing to slugify (e.g. "___")
    """
    slugs = [slugify(segment) for segment in raw.split("/")]
    if not all(slugs):
        raise ValueError(
            f"Cannot derive a link from '{raw}': a path segment has no usable characters"
        )
    return "/".join(slugs)


class LinkNormalizer:
    """Normalizes and de-duplicates output links for a single build.

    The first occurrence of a link is kept as-is. Every repeat of the same
    candidate gets a counter suffix: the second occurrence becomes
    ``<link>-1``, the third ``<link>-2`` and so on. Only the candidate
    string is counted, so an already suffixed link produced here is not
    registered as a candidate of its own.
    """

    def __init__(self, *, transliterate: bool = True) -> None:
        """Initialize normalizer.

        Args:
            transliterate: Slugify and de-duplicate links. When False,
                           raw links are returned unchanged.
        """
        self._transliterate = transliterate
        self._seen: dict[str, int] = {}

    @property
    def transliterate(self) -> bool:
        return self._transliterate

    def normalize(self, raw: str) -> str:
        """Return the unique output link for a raw navigation path.

        Args:
            raw: Raw link derived from the source path (e.g. "guide/install")

        Returns:
            Normalized link, suffixed when the candidate was seen before
        """
        if not raw or not self._transliterate:
            return raw

        candidate = slugify_path(raw)
        count = self._seen.get(candidate)
        if count is None:
            self._seen[candidate] = 0
            return candidate

        count += 1
        self._seen[candidate] = count
        link = f"{candidate}-{count}"
        logger.debug(f"Duplicate link '{candidate}' renamed to '{link}'")
        return link
