"""
Reduction of a multi-parent class graph to a single display tree.
"""

import logging
from typing import Dict, List, Optional

from ontology.domain import ClassNode, Edge, OntologyGraph

from .domain import Hierarchy, VIRTUAL_ROOT_ID, VIRTUAL_ROOT_NAME

logger = logging.getLogger(__name__)


def make_virtual_root(graph: OntologyGraph) -> ClassNode:
    """Synthetic root joining several parentless classes.

    The id is VIRTUAL_ROOT_ID unless the graph already has a class of that id,
    in which case underscores are appended until the id is free.
    """
    root_id = VIRTUAL_ROOT_ID
    while root_id in graph.nodes:
        root_id += "_"
    return ClassNode(id=root_id, name=VIRTUAL_ROOT_NAME)


class HierarchyBuilder:
    """Builds a Hierarchy from an OntologyGraph.

    Root selection:
    - the only class that is never an edge target, or
    - a virtual root over all such classes (in node order) when there are several, or
    - the first class of the graph when every class is an edge target (cyclic input).

    Every edge is then visited in graph order: the first edge naming a class as
    its target places the class under the edge's source, every other edge is
    kept as a secondary edge.
    """

    def build(self, graph: OntologyGraph) -> Hierarchy:
        """Derive the display tree of a graph.

        Args:
            graph: Class graph; it is not modified

        Returns:
            New Hierarchy whose tree edges and secondary edges together are
            exactly the edges of the graph
        """
        node_ids = graph.node_ids()
        targets = {edge.target for edge in graph.edges}
        candidates = [node_id for node_id in node_ids if node_id not in targets]

        children: Dict[str, List[str]] = {node_id: [] for node_id in node_ids}
        parent: Dict[str, Optional[str]] = {node_id: None for node_id in node_ids}
        virtual_root = None

        if not node_ids or len(candidates) > 1:
            virtual_root = make_virtual_root(graph)
            root = virtual_root.id
            children[root] = list(candidates)
            parent[root] = None
            for candidate in candidates:
                parent[candidate] = root
        elif len(candidates) == 1:
            root = candidates[0]
        else:
            root = node_ids[0]
            logger.warning(f"No parentless class found (cyclic hierarchy); using {root} as root")

        tree_edges: List[Edge] = []
        secondary_edges: List[Edge] = []
        for edge in graph.edges:
            if edge.target == root or parent[edge.target] is not None or self._closes_cycle(edge, parent):
                secondary_edges.append(edge)
                continue
            parent[edge.target] = edge.source
            children[edge.source].append(edge.target)
            tree_edges.append(edge)

        hierarchy = Hierarchy(
            root=root,
            graph=graph,
            children=children,
            parent=parent,
            tree_edges=tree_edges,
            secondary_edges=secondary_edges,
            virtual_root=virtual_root,
        )
        return self._attach_detached(hierarchy, node_ids)

    def _closes_cycle(self, edge: Edge, parent: Dict[str, Optional[str]]) -> bool:
        """Whether placing edge.target under edge.source would create a cycle."""
        current: Optional[str] = edge.source
        while current is not None:
            if current == edge.target:
                return True
            current = parent[current]
        return False

    def _attach_detached(self, hierarchy: Hierarchy, node_ids: List[str]) -> Hierarchy:
        """Attach classes unreachable from the root under the virtual root.

        Only cyclic input leaves classes unreachable: each detached part is
        hung under the virtual root by its topmost class.
        """
        reachable = set(hierarchy.node_ids())
        heads = [node_id for node_id in node_ids
                 if node_id not in reachable and hierarchy.parent[node_id] is None]
        if not heads:
            return hierarchy

        previous_root = hierarchy.root
        if hierarchy.virtual_root is None:
            hierarchy.virtual_root = make_virtual_root(hierarchy.graph)
            hierarchy.root = hierarchy.virtual_root.id
            hierarchy.children[hierarchy.root] = [previous_root]
            hierarchy.parent[hierarchy.root] = None
            hierarchy.parent[previous_root] = hierarchy.root

        logger.warning(f"{len(heads)} cyclic part(s) unreachable from {previous_root}; "
                       f"attaching them under {hierarchy.root}")

        for head in heads:
            hierarchy.children[hierarchy.root].append(head)
            hierarchy.parent[head] = hierarchy.root
        return hierarchy
