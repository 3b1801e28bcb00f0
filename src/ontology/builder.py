"""
Builder turning a parsed ontology document into a class graph.
"""

import logging
from typing import Dict

from .document import OntologyDocument, FALLBACK_LANGUAGE
from .domain import ClassNode, Edge, ObjectPropertyNode, OntologyGraph
from .resolver import resolve

logger = logging.getLogger(__name__)


def select_display_name(node_id: str,
                        labels: Dict[str, str],
                        language: str,
                        fallback_language: str = FALLBACK_LANGUAGE) -> str:
    """Pick the label to display for a node.

    Order: label in the active language, label in the fallback language,
    the node id itself.
    """
    if language in labels:
        return labels[language]
    if fallback_language in labels:
        return labels[fallback_language]
    return node_id


class GraphBuilder:
    """Builds an OntologyGraph from the declarations of an OntologyDocument."""

    def __init__(self, fallback_language: str = FALLBACK_LANGUAGE):
        self.fallback_language = fallback_language

    def build(self, document: OntologyDocument, language: str) -> OntologyGraph:
        """Build the class graph for the given active language.

        Args:
            document: Parsed ontology document
            language: Language code used to select display names

        Returns:
            New OntologyGraph with nodes and edges in document order
        """
        nodes = self._collect_classes(document)

        for node in nodes.values():
            node.name = select_display_name(node.id, node.labels, language, self.fallback_language)

        edges = []
        dropped = 0
        for node in nodes.values():
            for super_id in node.super_classes:
                if super_id not in nodes:
                    logger.debug(f"Dropping subClassOf reference from {node.id} to unknown class {super_id}")
                    dropped += 1
                    continue
                edges.append(Edge(source=super_id, target=node.id))
                node.parents.append(super_id)

        properties = self._collect_properties(document, language)

        logger.info(f"Built class graph with {len(nodes)} classes, {len(edges)} edges "
                    f"and {len(properties)} object properties ({dropped} dangling references dropped)")
        return OntologyGraph(nodes=nodes, edges=edges, properties=properties)

    def _collect_classes(self, document: OntologyDocument) -> Dict[str, ClassNode]:
        nodes: Dict[str, ClassNode] = {}
        for declaration in document.class_declarations():
            node = nodes.get(declaration.id)
            if node is None:
                node = ClassNode(id=declaration.id, name=declaration.id)
                nodes[node.id] = node

            # Repeated declarations of one class are merged into a single node
            for lang, text in declaration.labels:
                node.labels[lang] = text
            node.comments.extend(declaration.comments)
            for reference in declaration.super_class_refs:
                super_id = resolve(reference)
                if super_id not in node.super_classes:
                    node.super_classes.append(super_id)
        return nodes

    def _collect_properties(self, document: OntologyDocument, language: str) -> Dict[str, ObjectPropertyNode]:
        properties: Dict[str, ObjectPropertyNode] = {}
        for declaration in document.property_declarations():
            if declaration.property_type != "ObjectProperty":
                continue
            prop = properties.get(declaration.id)
            if prop is None:
                prop = ObjectPropertyNode(id=declaration.id, name=declaration.id)
                properties[prop.id] = prop

            for lang, text in declaration.labels:
                prop.labels[lang] = text
            prop.comments.extend(declaration.comments)
            if prop.domain is None and declaration.domain_ref:
                prop.domain = resolve(declaration.domain_ref)
            if prop.range is None and declaration.range_ref:
                prop.range = resolve(declaration.range_ref)

        for prop in properties.values():
            prop.name = select_display_name(prop.id, prop.labels, language, self.fallback_language)
        return properties
