"""
Extraction of the axioms describing a single class.
"""

from typing import Dict, List

from pydantic import BaseModel, Field

from .document import OntologyDocument
from .domain import OntologyGraph
from .expressions import ClassExpression, ExpressionParser, NamedClass
from .resolver import resolve


class ClassAxioms(BaseModel):
    """Axioms of a class as shown in the class information panel."""

    subclasses: List[str] = Field(default_factory=list, description="Ids of direct subclasses")
    equivalent_expressions: List[ClassExpression] = Field(
        default_factory=list, description="Parsed owl:equivalentClass expressions")
    property_restrictions: Dict[str, List[ClassExpression]] = Field(
        default_factory=dict,
        description="Property -> Restriction from rdfs:subClassOf, or NamedClass for a direct property assertion")


def extract_axioms(document: OntologyDocument,
                   graph: OntologyGraph,
                   class_id: str,
                   parser: ExpressionParser) -> ClassAxioms:
    """Collect subclasses, equivalent class expressions and property restrictions.

    Args:
        document: Document the graph was built from
        graph: Class graph of the document
        class_id: Local name of the class
        parser: Class expression parser

    Returns:
        ClassAxioms; empty for ids that are not classes of the graph
    """
    if class_id not in graph:
        return ClassAxioms()

    subclasses = [edge.target for edge in graph.outgoing(class_id)]
    equivalents: List[ClassExpression] = []
    restrictions: Dict[str, List[ClassExpression]] = {}
    property_types = document.property_types()

    for declaration in document.find_class(class_id):
        for element in declaration.equivalent_elements:
            expression = parser.parse_equivalent_class(element)
            if expression is not None:
                equivalents.append(expression)

        for element in declaration.restriction_elements:
            restriction = parser.parse_restriction(element)
            if restriction is not None:
                restrictions.setdefault(restriction.on_property, []).append(restriction)

        for predicate, resource in declaration.property_assertions:
            property_id = resolve(predicate)
            if property_id in property_types:
                restrictions.setdefault(property_id, []).append(NamedClass(id=resolve(resource)))

    return ClassAxioms(
        subclasses=subclasses,
        equivalent_expressions=equivalents,
        property_restrictions=restrictions,
    )
