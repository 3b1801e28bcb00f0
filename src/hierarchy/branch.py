"""
Extraction of the branch (ancestors and descendants) around one class.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Set

from ontology.domain import OntologyGraph

logger = logging.getLogger(__name__)


class BranchExtractor:
    """Computes the subgraph induced by a focal class, its ancestors and its descendants."""

    def extract(self, graph: OntologyGraph, focal_id: str) -> OntologyGraph:
        """Extract the branch of a class.

        Args:
            graph: Full class graph; it is not modified
            focal_id: Local name of the focal class

        Returns:
            New OntologyGraph with the focal class, all its transitive
            subclasses and superclasses, and every edge between them.
            Empty when the class is not in the graph.
        """
        if focal_id not in graph:
            logger.debug(f"Branch requested for unknown class {focal_id}")
            return OntologyGraph()

        successors: Dict[str, List[str]] = {}
        predecessors: Dict[str, List[str]] = {}
        for edge in graph.edges:
            successors.setdefault(edge.source, []).append(edge.target)
            predecessors.setdefault(edge.target, []).append(edge.source)

        descendants = self._reachable(focal_id, successors)
        ancestors = self._reachable(focal_id, predecessors)
        keep = {focal_id} | descendants | ancestors

        nodes = {
            node_id: replace(node,
                             labels=dict(node.labels),
                             comments=list(node.comments),
                             super_classes=list(node.super_classes),
                             parents=[p for p in node.parents if p in keep])
            for node_id, node in graph.nodes.items()
            if node_id in keep
        }
        edges = [edge for edge in graph.edges if edge.source in keep and edge.target in keep]

        logger.debug(f"Branch of {focal_id}: {len(ancestors)} ancestors, {len(descendants)} descendants")
        return OntologyGraph(nodes=nodes, edges=edges, properties=dict(graph.properties))

    @staticmethod
    def _reachable(start: str, adjacency: Dict[str, List[str]]) -> Set[str]:
        """Nodes reachable from start (start itself only if it lies on a cycle)."""
        visited: Set[str] = set()
        stack = list(adjacency.get(start, []))
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            stack.extend(adjacency.get(node_id, []))
        return visited
