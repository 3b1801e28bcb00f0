"""
Domain models for the hierarchy module.

A Hierarchy is the display tree derived from a class graph: an id-indexed
arena of graph nodes plus two adjacency views, the tree-children of every
node and the list of secondary edges that were not used to place a node.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Iterator, Tuple

from ontology.domain import ClassNode, Edge, OntologyGraph

VIRTUAL_ROOT_ID = "OntologyRoot"
VIRTUAL_ROOT_NAME = "Ontology Root"


class LayoutDirection(str, Enum):
    """Orientation in which a positioned tree is drawn."""
    VERTICAL = "vertical"       # root at the top, levels grow downwards
    HORIZONTAL = "horizontal"   # root at the left, levels grow to the right


@dataclass
class LayoutConfig:
    """Configuration for the layout engine."""
    # Tree layout spacing
    node_width: float = 100.0       # horizontal distance between neighbouring siblings
    level_height: float = 120.0     # distance between depth levels

    # Label box approximation (monospaced text)
    char_width: float = 9.0
    padding: float = 20.0

    def box_width(self, name: str) -> float:
        return len(name) * self.char_width + self.padding


@dataclass
class Hierarchy:
    """Rooted display tree over a class graph."""

    root: str
    graph: OntologyGraph                                  # source graph, read-only
    children: Dict[str, List[str]]                        # node id -> tree children in order
    parent: Dict[str, Optional[str]]                      # node id -> tree parent (None for the root)
    tree_edges: List[Edge] = field(default_factory=list)  # graph edges used as tree links
    secondary_edges: List[Edge] = field(default_factory=list)
    virtual_root: Optional[ClassNode] = None              # synthetic root, if one was introduced

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.children

    def node(self, node_id: str) -> ClassNode:
        if self.is_virtual(node_id):
            return self.virtual_root
        return self.graph.nodes[node_id]

    def is_virtual(self, node_id: str) -> bool:
        return self.virtual_root is not None and node_id == self.virtual_root.id

    def is_multi_parent(self, node_id: str) -> bool:
        """Whether the class has more than one superclass in the graph."""
        node = self.graph.get(node_id)
        return node is not None and len(node.parents) > 1

    def walk(self, start: Optional[str] = None) -> Iterator[Tuple[str, int]]:
        """Pre-order traversal yielding (node id, depth) pairs."""
        start = self.root if start is None else start
        stack = [(start, 0)]
        while stack:
            node_id, depth = stack.pop()
            yield node_id, depth
            for child in reversed(self.children.get(node_id, [])):
                stack.append((child, depth + 1))

    def node_ids(self) -> List[str]:
        return [node_id for node_id, _ in self.walk()]

    def descendants(self, node_id: str) -> List[str]:
        """All tree descendants of a node, excluding the node itself."""
        return [descendant for descendant, _ in self.walk(node_id)][1:]


@dataclass
class PositionedNode:
    """Layout result for one node."""

    id: str
    name: str
    x: float                # position along a level
    y: float                # position across levels (depth * level height)
    depth: int
    half_width: float       # half of the approximate label box width


@dataclass
class PositionedTree:
    """Hierarchy with layout coordinates keyed by node id.

    Coordinates do not depend on the direction: a horizontal tree uses the
    same (x, y) pairs with the axes swapped.
    """

    hierarchy: Hierarchy
    nodes: Dict[str, PositionedNode]
    direction: LayoutDirection = LayoutDirection.VERTICAL

    def point(self, node_id: str) -> Tuple[float, float]:
        """Screen position of a node in the tree's direction."""
        node = self.nodes[node_id]
        if self.direction == LayoutDirection.HORIZONTAL:
            return node.y, node.x
        return node.x, node.y

    def with_direction(self, direction: LayoutDirection) -> "PositionedTree":
        """Same layout drawn in another direction (no recomputation)."""
        return replace(self, direction=LayoutDirection(direction))

    def levels(self) -> Dict[int, List[PositionedNode]]:
        """Nodes grouped by depth, each level ordered by x."""
        levels: Dict[int, List[PositionedNode]] = {}
        for node in self.nodes.values():
            levels.setdefault(node.depth, []).append(node)
        for row in levels.values():
            row.sort(key=lambda n: n.x)
        return dict(sorted(levels.items()))

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the node centers in screen orientation."""
        points = [self.point(node_id) for node_id in self.nodes]
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return min(xs), min(ys), max(xs), max(ys)
