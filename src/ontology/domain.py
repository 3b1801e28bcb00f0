"""
Domain models for the ontology module.

These models represent the class graph extracted from an ontology document:
class nodes keyed by their local name, the subclass edges between them and
the object properties referenced by class restrictions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Iterator, Set


class OntologyLoadError(RuntimeError):
    """Raised when an ontology document cannot be read or parsed."""


class EdgeKind(str, Enum):
    """Kinds of edges in the class graph."""
    SUBCLASS_OF = "subClassOf"


@dataclass
class ClassNode:
    """Represents a named class of the ontology."""

    id: str                             # local name (e.g., "Vehicle")
    name: str                           # display name in the active language
    labels: Dict[str, str] = field(default_factory=dict)     # language -> label (e.g., {"cs": "Vozidlo", "en": "Vehicle"})
    comments: List[str] = field(default_factory=list)        # rdfs:comment texts in document order
    super_classes: List[str] = field(default_factory=list)   # declared superclasses (rdfs:subClassOf)
    parents: List[str] = field(default_factory=list)         # superclasses that became edges


@dataclass
class ObjectPropertyNode:
    """Represents an object property declared in the ontology."""

    id: str
    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    comments: List[str] = field(default_factory=list)
    domain: Optional[str] = None        # source class
    range: Optional[str] = None         # target class


@dataclass(frozen=True)
class Edge:
    """A directed edge from a superclass (source) to a subclass (target)."""

    source: str
    target: str
    kind: EdgeKind = EdgeKind.SUBCLASS_OF


@dataclass
class OntologyGraph:
    """Class graph built from one ontology document.

    Node and edge order follow the document and are significant for the
    hierarchy that is derived from the graph. A graph is never modified once
    built; derived views (branches, hierarchies) are new objects.
    """

    nodes: Dict[str, ClassNode] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    properties: Dict[str, ObjectPropertyNode] = field(default_factory=dict)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: str) -> Optional[ClassNode]:
        return self.nodes.get(node_id)

    def node_ids(self) -> List[str]:
        return list(self.nodes)

    def outgoing(self, node_id: str) -> Iterator[Edge]:
        """Edges leading from the node to its subclasses."""
        return (edge for edge in self.edges if edge.source == node_id)

    def incoming(self, node_id: str) -> Iterator[Edge]:
        """Edges leading from the node's superclasses to the node."""
        return (edge for edge in self.edges if edge.target == node_id)

    def edge_set(self) -> Set[Edge]:
        return set(self.edges)


@dataclass
class OntologyStats:
    """Statistics about the loaded ontology."""

    total_classes: int
    total_edges: int
    total_object_properties: int
    root_candidates: int
    multi_parent_classes: int
