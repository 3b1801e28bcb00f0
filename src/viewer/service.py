"""
High-level ontology service providing the public interface for all viewer operations.

This is the only public interface into the viewer core. It owns the
current session (document + graph + language) and answers the queries of the
rendering layer; document reading and graph building are delegated to the
ontology module, hierarchy building, layout and branch extraction to the
hierarchy module.
"""

import asyncio
import logging
from typing import List, Optional, Union

from hierarchy.branch import BranchExtractor
from hierarchy.builder import HierarchyBuilder
from hierarchy.domain import Hierarchy, LayoutConfig, LayoutDirection, PositionedTree
from hierarchy.layout import LayoutEngine

from ontology.axioms import ClassAxioms, extract_axioms
from ontology.builder import GraphBuilder, select_display_name
from ontology.datasource import OntologyDataSource, open_source
from ontology.document import OntologyDocument
from ontology.domain import ClassNode, OntologyGraph, OntologyStats
from ontology.expressions import ClassExpression, ExpressionParser, render

from .session import OntologySession
from .settings import ViewerSettings

logger = logging.getLogger(__name__)

LoadTarget = Union[str, OntologyDataSource]


class OntologyService:
    """High-level interface for loading an ontology and querying its hierarchy."""

    def __init__(self,
                 settings: Optional[ViewerSettings] = None,
                 layout_config: Optional[LayoutConfig] = None):
        """Initialize the ontology service.

        Args:
            settings: Optional viewer settings. If None, they are read from the environment.
            layout_config: Optional layout configuration. If None, defaults are used.
        """
        self.settings = settings if settings is not None else ViewerSettings.from_env()
        self.language = self.settings.language

        self.graph_builder = GraphBuilder(self.settings.fallback_language)
        self.parser = ExpressionParser()
        self.hierarchy_builder = HierarchyBuilder()
        self.layout_engine = LayoutEngine(layout_config)
        self.branch_extractor = BranchExtractor()

        self.session: Optional[OntologySession] = None
        self._generation = 0

    # --- Loading ---

    def load(self, target: LoadTarget) -> OntologyGraph:
        """Load an ontology document and make it the current session.

        Args:
            target: Document text, file path, URL or OntologyDataSource

        Returns:
            The class graph of the loaded document

        Raises:
            OntologyLoadError: If the document cannot be read or parsed.
                The previous session is kept in that case.
        """
        self._generation += 1
        source = open_source(target)
        return self._install(source, source.read())

    async def load_async(self, target: LoadTarget) -> Optional[OntologyGraph]:
        """Load a document with the read performed off the event loop.

        A load whose read finishes after a newer load has started is
        discarded, so the most recently started load always wins.

        Returns:
            The class graph, or None if the load was superseded

        Raises:
            OntologyLoadError: If the document cannot be read or parsed
        """
        self._generation += 1
        generation = self._generation
        source = open_source(target)

        text = await asyncio.to_thread(source.read)

        if generation != self._generation:
            logger.info(f"Discarding superseded load of {source.describe()}")
            return None
        return self._install(source, text)

    def load_default(self) -> OntologyGraph:
        """Load the configured default document."""
        return self.load(self.settings.default_document)

    def _install(self, source: OntologyDataSource, text: str) -> OntologyGraph:
        document = OntologyDocument.parse(text, source.format)
        graph = self.graph_builder.build(document, self.language)
        self.session = OntologySession(
            document=document,
            graph=graph,
            language=self.language,
            source=source.describe(),
        )
        logger.info(f"Loaded ontology from {source.describe()}: {len(graph)} classes")
        return graph

    def set_language(self, language: str) -> OntologyGraph:
        """Switch the active language and rebuild display names.

        Returns:
            The rebuilt class graph (empty if nothing is loaded)
        """
        self.language = language
        if self.session is None:
            return OntologyGraph()

        graph = self.graph_builder.build(self.session.document, language)
        self.session = OntologySession(
            document=self.session.document,
            graph=graph,
            language=language,
            source=self.session.source,
        )
        return graph

    # --- Queries ---

    def get_full_graph(self) -> OntologyGraph:
        """Class graph of the current session (empty if nothing is loaded)."""
        if self.session is None:
            return OntologyGraph()
        return self.session.graph

    def get_branch(self, focal_id: str) -> OntologyGraph:
        """Subgraph of the focal class with all its ancestors and descendants."""
        return self.branch_extractor.extract(self.get_full_graph(), focal_id)

    def resolve_label(self, class_id: str, language: Optional[str] = None) -> str:
        """Label of a class in the given (or active) language.

        Falls back to the fallback language label and then to the id itself.
        """
        node = self.get_full_graph().get(class_id)
        if node is None:
            return class_id
        return select_display_name(node.id, node.labels, language or self.language,
                                   self.settings.fallback_language)

    def get_axioms(self, class_id: str) -> ClassAxioms:
        """Subclasses, equivalent class expressions and property restrictions of a class."""
        if self.session is None:
            return ClassAxioms()
        return extract_axioms(self.session.document, self.session.graph, class_id, self.parser)

    def render_expression(self, expression: ClassExpression, language: Optional[str] = None) -> str:
        """Render a class expression using localized class labels."""
        return render(expression, lambda class_id: self.resolve_label(class_id, language))

    def get_property_comment(self, property_id: str) -> Optional[str]:
        """First rdfs:comment of an object property, or None."""
        prop = self.get_full_graph().properties.get(property_id)
        if prop is None or not prop.comments:
            return None
        return prop.comments[0]

    def search_classes(self, query: str) -> List[ClassNode]:
        """Classes whose id, display name or any label contains the query (case-insensitive)."""
        needle = query.strip().lower()
        if not needle:
            return []

        matches = []
        for node in self.get_full_graph().nodes.values():
            texts = [node.id, node.name, *node.labels.values()]
            if any(needle in text.lower() for text in texts):
                matches.append(node)
        return matches

    def get_stats(self) -> OntologyStats:
        """Basic statistics about the current graph."""
        graph = self.get_full_graph()
        targets = {edge.target for edge in graph.edges}
        return OntologyStats(
            total_classes=len(graph.nodes),
            total_edges=len(graph.edges),
            total_object_properties=len(graph.properties),
            root_candidates=sum(1 for node_id in graph.nodes if node_id not in targets),
            multi_parent_classes=sum(1 for node in graph.nodes.values() if len(node.parents) > 1),
        )

    # --- Hierarchy and layout ---

    def build_hierarchy(self, graph: Optional[OntologyGraph] = None) -> Hierarchy:
        """Display tree of a graph (the full graph by default)."""
        return self.hierarchy_builder.build(graph if graph is not None else self.get_full_graph())

    def layout(self, hierarchy: Hierarchy,
               direction: Union[LayoutDirection, str] = LayoutDirection.VERTICAL) -> PositionedTree:
        """Positions for every node of a hierarchy."""
        return self.layout_engine.layout(hierarchy, LayoutDirection(direction))

    def full_view(self, direction: Union[LayoutDirection, str] = LayoutDirection.VERTICAL) -> PositionedTree:
        """Positioned tree of the whole ontology."""
        return self.layout(self.build_hierarchy(), direction)

    def branch_view(self, focal_id: str,
                    direction: Union[LayoutDirection, str] = LayoutDirection.VERTICAL) -> PositionedTree:
        """Positioned tree of the branch around a class."""
        return self.layout(self.build_hierarchy(self.get_branch(focal_id)), direction)
