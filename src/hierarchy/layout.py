"""
Layout engine assigning 2-D coordinates to a hierarchy.

The tree is first laid out with the Reingold-Tilford algorithm in the
linear-time formulation of Buchheim, Juenger and Leipert, using unit spacing
between siblings and double spacing between cousins. Label boxes are then
approximated from the display names and overlapping neighbours on each level
are pushed apart.
"""

import logging
from typing import Dict, List, Optional

from .domain import Hierarchy, LayoutConfig, LayoutDirection, PositionedNode, PositionedTree

logger = logging.getLogger(__name__)


class _LayoutNode:
    """Working state of one node during the tree layout."""

    __slots__ = ("id", "parent", "number", "children", "x", "mod",
                 "thread", "ancestor", "change", "shift")

    def __init__(self, node_id: str, parent: Optional["_LayoutNode"], number: int):
        self.id = node_id
        self.parent = parent
        self.number = number                        # 1-based position among siblings
        self.children: List["_LayoutNode"] = []
        self.x = 0.0                                # preliminary position
        self.mod = 0.0                              # offset applied to the whole subtree
        self.thread: Optional["_LayoutNode"] = None
        self.ancestor: "_LayoutNode" = self
        self.change = 0.0
        self.shift = 0.0

    def next_left(self) -> Optional["_LayoutNode"]:
        return self.children[0] if self.children else self.thread

    def next_right(self) -> Optional["_LayoutNode"]:
        return self.children[-1] if self.children else self.thread

    def left_sibling(self) -> Optional["_LayoutNode"]:
        if self.parent is None or self.number == 1:
            return None
        return self.parent.children[self.number - 2]

    def leftmost_sibling(self) -> Optional["_LayoutNode"]:
        if self.parent is None or self.number == 1:
            return None
        return self.parent.children[0]


def _separation(a: _LayoutNode, b: _LayoutNode) -> float:
    return 1.0 if a.parent is b.parent else 2.0


class LayoutEngine:
    """Computes collision-free positions for the nodes of a Hierarchy."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config if config is not None else LayoutConfig()

    def layout(self, hierarchy: Hierarchy,
               direction: LayoutDirection = LayoutDirection.VERTICAL) -> PositionedTree:
        """Lay out a hierarchy.

        Args:
            hierarchy: Tree to lay out; it is not modified
            direction: Direction recorded on the result (coordinates are the same for both)

        Returns:
            PositionedTree with one PositionedNode per tree node
        """
        x = self._tree_positions(hierarchy)
        depths = {node_id: depth for node_id, depth in hierarchy.walk()}
        half_widths = {
            node_id: self.config.box_width(hierarchy.node(node_id).name) / 2
            for node_id in depths
        }

        shifted = self._resolve_overlaps(hierarchy, x, depths, half_widths)
        if shifted:
            logger.debug(f"Resolved {shifted} label overlaps")

        nodes = {
            node_id: PositionedNode(
                id=node_id,
                name=hierarchy.node(node_id).name,
                x=x[node_id],
                y=depth * self.config.level_height,
                depth=depth,
                half_width=half_widths[node_id],
            )
            for node_id, depth in depths.items()
        }
        return PositionedTree(hierarchy=hierarchy, nodes=nodes, direction=LayoutDirection(direction))

    def _tree_positions(self, hierarchy: Hierarchy) -> Dict[str, float]:
        """Reingold-Tilford x coordinates with the root at 0."""
        root = self._build_layout_tree(hierarchy)
        self._first_walk(root)

        positions: Dict[str, float] = {}
        stack = [(root, 0.0)]
        while stack:
            node, modsum = stack.pop()
            positions[node.id] = node.x + modsum
            for child in node.children:
                stack.append((child, modsum + node.mod))

        offset = positions[root.id]
        return {node_id: (value - offset) * self.config.node_width for node_id, value in positions.items()}

    def _build_layout_tree(self, hierarchy: Hierarchy) -> _LayoutNode:
        root = _LayoutNode(hierarchy.root, None, 1)
        stack = [root]
        while stack:
            node = stack.pop()
            for number, child_id in enumerate(hierarchy.children.get(node.id, []), start=1):
                child = _LayoutNode(child_id, node, number)
                node.children.append(child)
                stack.append(child)
        return root

    def _first_walk(self, root: _LayoutNode) -> None:
        """Preliminary x and modifiers for every node, children before parents."""
        preorder: List[_LayoutNode] = []
        stack = [root]
        while stack:
            node = stack.pop()
            preorder.append(node)
            stack.extend(node.children)

        for node in reversed(preorder):
            if node.children:
                self._place_children(node)
        self._set_prelim(root)

    def _place_children(self, v: _LayoutNode) -> None:
        """Position the child subtrees of v next to each other, left to right."""
        default_ancestor = v.children[0]
        for child in v.children:
            self._set_prelim(child)
            default_ancestor = self._apportion(child, default_ancestor)
        self._execute_shifts(v)

    @staticmethod
    def _set_prelim(v: _LayoutNode) -> None:
        w = v.left_sibling()
        if not v.children:
            v.x = w.x + _separation(v, w) if w is not None else 0.0
            return

        midpoint = (v.children[0].x + v.children[-1].x) / 2
        if w is not None:
            v.x = w.x + _separation(v, w)
            v.mod = v.x - midpoint
        else:
            v.x = midpoint

    def _apportion(self, v: _LayoutNode, default_ancestor: _LayoutNode) -> _LayoutNode:
        """Push the subtree of v right until it clears the subtrees of its left siblings."""
        w = v.left_sibling()
        if w is None:
            return default_ancestor

        # Inside/outside contours on the right (ir/or) and left (il/ol)
        v_ir = v_or = v
        v_il = w
        v_ol = v.leftmost_sibling()
        s_ir = s_or = v.mod
        s_il = v_il.mod
        s_ol = v_ol.mod

        while v_il.next_right() is not None and v_ir.next_left() is not None:
            v_il = v_il.next_right()
            v_ir = v_ir.next_left()
            v_ol = v_ol.next_left()
            v_or = v_or.next_right()
            v_or.ancestor = v
            shift = (v_il.x + s_il) - (v_ir.x + s_ir) + _separation(v_il, v_ir)
            if shift > 0:
                self._move_subtree(self._ancestor(v_il, v, default_ancestor), v, shift)
                s_ir += shift
                s_or += shift
            s_il += v_il.mod
            s_ir += v_ir.mod
            s_ol += v_ol.mod
            s_or += v_or.mod

        if v_il.next_right() is not None and v_or.next_right() is None:
            v_or.thread = v_il.next_right()
            v_or.mod += s_il - s_or
        if v_ir.next_left() is not None and v_ol.next_left() is None:
            v_ol.thread = v_ir.next_left()
            v_ol.mod += s_ir - s_ol
            default_ancestor = v
        return default_ancestor

    @staticmethod
    def _move_subtree(w_left: _LayoutNode, w_right: _LayoutNode, shift: float) -> None:
        subtrees = w_right.number - w_left.number
        change = shift / subtrees
        w_right.change -= change
        w_right.shift += shift
        w_left.change += change
        w_right.x += shift
        w_right.mod += shift

    @staticmethod
    def _execute_shifts(v: _LayoutNode) -> None:
        shift = 0.0
        change = 0.0
        for w in reversed(v.children):
            w.x += shift
            w.mod += shift
            change += w.change
            shift += w.shift + change

    @staticmethod
    def _ancestor(v_il: _LayoutNode, v: _LayoutNode, default_ancestor: _LayoutNode) -> _LayoutNode:
        if v_il.ancestor.parent is v.parent:
            return v_il.ancestor
        return default_ancestor

    def _resolve_overlaps(self, hierarchy: Hierarchy,
                          x: Dict[str, float],
                          depths: Dict[str, int],
                          half_widths: Dict[str, float]) -> int:
        """Single left-to-right sweep per level moving overlapping nodes right.

        A moved node takes its whole subtree along. Pairs resolved earlier on
        a level are not checked again.
        """
        levels: Dict[int, List[str]] = {}
        for node_id, depth in depths.items():
            levels.setdefault(depth, []).append(node_id)

        shifted = 0
        for depth in sorted(levels):
            row = sorted(levels[depth], key=lambda node_id: x[node_id])
            for previous, current in zip(row, row[1:]):
                min_distance = half_widths[previous] + half_widths[current]
                distance = x[current] - x[previous]
                if distance >= min_distance:
                    continue
                overlap = min_distance - distance
                x[current] += overlap
                for descendant in hierarchy.descendants(current):
                    x[descendant] += overlap
                shifted += 1
        return shifted
