"""Site tree for the document hierarchy.

Stores navigation nodes in a flat arena with parent/children relationships
tracked by ids. The tree is built once per build from the navigation
document and is read-only afterwards.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from docweave.core.links import LinkNormalizer
from docweave.core.navigation import NavEntry
from docweave.core.types import NodeId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """Navigation node (folder or page)."""

    id: NodeId
    title: str
    path: str
    link: str
    is_index: bool = False

    @property
    def is_file(self) -> bool:
        """Whether the node has markdown content to render."""
        return bool(self.path)

    @property
    def href(self) -> str:
        """Link relative to the site root, with trailing slash."""
        return f"{self.link}/" if self.link else ""

    @property
    def base_dir(self) -> str:
        """Relative prefix from this node's page back to the site root."""
        if not self.link:
            return "./"
        return "../" * len(self.link.split("/"))


class NavTree:
    """Navigation tree with O(1) node lookups.

    Nodes live in a flat list; children and parents are tracked by node id.
    ``pages`` is the depth-first pre-order list of file nodes, so a parent's
    own page comes before the pages of its children.
    """

    __slots__ = ("_children", "_home", "_nodes", "_pages", "_parents")

    def __init__(
        self,
        nodes: list[Node],
        children: list[list[NodeId]],
        parents: list[NodeId | None],
        pages: list[NodeId],
        home: NodeId,
    ) -> None:
        """Initialize tree structure.

        Args:
            nodes: Flat list of all nodes, root first
            children: Children ids for each node
            parents: Parent id for each node (None for the root)
            pages: Ids of file nodes in pre-order
            home: Id of the index node
        """
        self._nodes = nodes
        self._children = children
        self._parents = parents
        self._pages = pages
        self._home = home

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[0]

    @property
    def home(self) -> Node:
        """The site index node."""
        return self._nodes[self._home]

    @property
    def pages(self) -> list[Node]:
        """File nodes in reading order."""
        return [self._nodes[i] for i in self._pages]

    def get(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def children(self, node: Node) -> list[Node]:
        """Get children of a node in declared order."""
        return [self._nodes[i] for i in self._children[node.id]]

    def parent(self, node: Node) -> Node | None:
        """Get parent of a node, None for the root."""
        parent_id = self._parents[node.id]
        if parent_id is None:
            return None
        return self._nodes[parent_id]

    def ancestors(self, node: Node) -> list[Node]:
        """Build the ancestor chain of a node, root first, node excluded."""
        ancestors: list[Node] = []
        current = self._parents[node.id]
        while current is not None:
            ancestors.append(self._nodes[current])
            current = self._parents[current]
        ancestors.reverse()
        return ancestors

    def active_path(self, node: Node) -> frozenset[NodeId]:
        """Ids of the node and all of its ancestors.

        Used by templates to highlight the current entry and the folders
        leading to it.
        """
        return frozenset([node.id, *(a.id for a in self.ancestors(node))])


class NavTreeBuilder:
    """Builder for constructing NavTree instances."""

    def __init__(self, links: LinkNormalizer) -> None:
        self._links = links
        self._nodes: list[Node] = []
        self._children: list[list[NodeId]] = []
        self._parents: list[NodeId | None] = []
        self._pages: list[NodeId] = []
        self._home: NodeId | None = None

    def add_node(
        self,
        title: str,
        path: str = "",
        *,
        is_index: bool = False,
        parent: NodeId | None = None,
    ) -> NodeId:
        """Add a node to the tree.

        Nodes must be added in pre-order: a parent before its children,
        siblings in navigation order.

        Args:
            title: Node title
            path: Source path relative to the docs directory, empty for folders
            is_index: Whether the node is the site index page
            parent: Id of the parent node, None for the root

        Returns:
            Id of the added node

        Raises:
            ValueError: If a second index node is added, or the index has no source path
        """
        if is_index and not path:
            raise ValueError(f"Index page '{title}' must have a source path")
        if is_index and self._home is not None:
            raise ValueError(
                f"Navigation has more than one index page: "
                f"'{self._nodes[self._home].title}' and '{title}'"
            )

        node_id = NodeId(len(self._nodes))
        link = "" if is_index else self._links.normalize(raw_link(path))
        node = Node(id=node_id, title=title, path=path, link=link, is_index=is_index)

        self._nodes.append(node)
        self._children.append([])
        self._parents.append(parent)
        if parent is not None:
            self._children[parent].append(node_id)

        if is_index:
            self._home = node_id
        if node.is_file:
            self._pages.append(node_id)

        logger.debug(f"Added node '{title}' -> '{link}'")
        return node_id

    def build(self) -> NavTree:
        """Build the NavTree instance.

        Raises:
            ValueError: If the tree is empty or has no index page
        """
        if not self._nodes:
            raise ValueError("Navigation is empty")
        if self._home is None:
            raise ValueError("Navigation must mark exactly one page as index")
        return NavTree(
            nodes=self._nodes,
            children=self._children,
            parents=self._parents,
            pages=self._pages,
            home=self._home,
        )


def build_tree(root: NavEntry, links: LinkNormalizer) -> NavTree:
    """Build the navigation tree from a navigation document.

    Args:
        root: Root navigation entry
        links: Link normalizer holding the de-duplication table of this build

    Returns:
        NavTree with normalized links, home node and page list

    Raises:
        ValueError: If the navigation doesn't mark exactly one index page
    """
    builder = NavTreeBuilder(links)
    _add_entry(builder, root, None)
    return builder.build()


def _add_entry(builder: NavTreeBuilder, entry: NavEntry, parent: NodeId | None) -> None:
    """Recursively add an entry and its children in pre-order."""
    path = entry.path or ""
    title = entry.title or _title_from_path(path)
    node_id = builder.add_node(title, path, is_index=entry.index, parent=parent)
    for child in entry.children:
        _add_entry(builder, child, node_id)


def raw_link(path: str) -> str:
    """Derive the raw output link from a source path.

    Drops the markdown suffix and a trailing ``index`` segment, so both
    ``guide.md`` and ``guide/index.md`` map to ``guide``.
    """
    if not path:
        return ""
    parts = list(PurePosixPath(path).with_suffix("").parts)
    if len(parts) > 1 and parts[-1] == "index":
        parts.pop()
    return "/".join(parts)


def _title_from_path(path: str) -> str:
    """Generate a title from a source file name (setup-guide.md -> Setup Guide)."""
    if not path:
        return "Untitled"
    stem = PurePosixPath(path).stem
    return stem.replace("-", " ").replace("_", " ").title()
