"""Previous/next pagination over the reading order."""

from docweave.core.site import Node
from docweave.core.types import NodeId


class Pagination:
    """Circular previous/next links between pages.

    The first page's previous page is the last one and the last page's
    next page is the first one. A single page links to itself.
    """

    __slots__ = ("_next", "_prev")

    def __init__(self, prev: dict[NodeId, Node], next_: dict[NodeId, Node]) -> None:
        self._prev = prev
        self._next = next_

    def __len__(self) -> int:
        return len(self._next)

    def prev(self, node: Node) -> Node:
        return self._prev[node.id]

    def next(self, node: Node) -> Node:
        return self._next[node.id]


def paginate(pages: list[Node]) -> Pagination:
    """Link pages into a circular reading order.

    Args:
        pages: File nodes in reading order

    Returns:
        Pagination where page i links to (i - 1) mod N and (i + 1) mod N

    Raises:
        ValueError: If there are no pages
    """
    if not pages:
        raise ValueError("Cannot paginate an empty page list")

    count = len(pages)
    prev: dict[NodeId, Node] = {}
    next_: dict[NodeId, Node] = {}
    for i, page in enumerate(pages):
        prev[page.id] = pages[(i - 1) % count]
        next_[page.id] = pages[(i + 1) % count]
    return Pagination(prev, next_)
