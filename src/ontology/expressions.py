"""
Class expressions: AST, parser and renderer.

OWL class expressions (owl:equivalentClass contents and subclass restrictions)
are parsed from their RDF/XML elements into an immutable tree of pydantic
models and rendered back to readable Manchester-like text.

Grammar handled by the parser:

    expr         := named | intersection | union | complement | restriction
    named        := owl:Class / rdf:Description with rdf:about
    intersection := element with owl:intersectionOf collection
    union        := element with owl:unionOf collection
    complement   := element with owl:complementOf (rdf:resource or nested expr)
    restriction  := owl:Restriction with owl:onProperty (direct or owl:inverseOf)
                    and owl:someValuesFrom / owl:allValuesFrom (rdf:resource or nested expr)
"""

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Annotated, Callable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .document import (
    OWL_ALL_VALUES_FROM,
    OWL_COMPLEMENT_OF,
    OWL_INTERSECTION_OF,
    OWL_INVERSE_OF,
    OWL_ON_PROPERTY,
    OWL_RESTRICTION,
    OWL_SOME_VALUES_FROM,
    OWL_UNION_OF,
    element_reference,
    first_child,
    local_tag,
    resource_reference,
)
from .resolver import resolve

logger = logging.getLogger(__name__)


class RestrictionType(str, Enum):
    """Quantifier of a property restriction."""
    SOME = "some"   # owl:someValuesFrom
    ONLY = "only"   # owl:allValuesFrom


class _Expression(BaseModel):
    model_config = ConfigDict(frozen=True)


class NamedClass(_Expression):
    kind: Literal["named"] = "named"
    id: str = Field(..., description="Local name of the class")


class IntersectionOf(_Expression):
    kind: Literal["intersection"] = "intersection"
    operands: Tuple["ClassExpression", ...] = Field(..., description="Operands in document order")


class UnionOf(_Expression):
    kind: Literal["union"] = "union"
    operands: Tuple["ClassExpression", ...] = Field(..., description="Operands in document order")


class ComplementOf(_Expression):
    kind: Literal["complement"] = "complement"
    operand: "ClassExpression"


class Restriction(_Expression):
    kind: Literal["restriction"] = "restriction"
    on_property: str = Field(..., description="Property local name, or inverse(P) for an inverse property")
    restriction_type: RestrictionType
    value: "ClassExpression" = Field(..., description="Filler class, possibly a nested expression")


ClassExpression = Annotated[
    Union[NamedClass, IntersectionOf, UnionOf, ComplementOf, Restriction],
    Field(discriminator="kind"),
]

# Rebuild models to resolve the recursive ClassExpression references
IntersectionOf.model_rebuild()
UnionOf.model_rebuild()
ComplementOf.model_rebuild()
Restriction.model_rebuild()


class ExpressionParser:
    """Recursive-descent parser from RDF/XML elements to ClassExpression trees.

    Elements of an unrecognized shape produce None; list operands that produce
    None are left out of the containing intersection or union.
    """

    def parse_equivalent_class(self, element: ET.Element) -> Optional[ClassExpression]:
        """Parse the contents of an owl:equivalentClass element."""
        resource = resource_reference(element)
        if resource:
            return NamedClass(id=resolve(resource))
        child = first_child(element)
        if child is None:
            return None
        return self.parse(child)

    def parse(self, element: ET.Element) -> Optional[ClassExpression]:
        """Parse a single class expression element."""
        reference = element_reference(element)
        if reference and local_tag(element) in ("Class", "Description"):
            return NamedClass(id=resolve(reference))

        intersection = element.find(OWL_INTERSECTION_OF)
        if intersection is not None:
            operands = self._parse_operands(intersection)
            return IntersectionOf(operands=operands) if operands else None

        union = element.find(OWL_UNION_OF)
        if union is not None:
            operands = self._parse_operands(union)
            return UnionOf(operands=operands) if operands else None

        complement = element.find(OWL_COMPLEMENT_OF)
        if complement is not None:
            return self._parse_complement(complement)

        if element.tag == OWL_RESTRICTION:
            return self.parse_restriction(element)

        logger.debug(f"Unrecognized class expression element {element.tag}")
        return None

    def parse_restriction(self, element: ET.Element) -> Optional[Restriction]:
        """Parse an owl:Restriction element.

        Returns None when the restriction has no usable property or filler.
        """
        on_property = element.find(OWL_ON_PROPERTY)
        property_name = self._parse_property(on_property) if on_property is not None else None
        if property_name is None:
            logger.debug("Restriction without a resolvable owl:onProperty")
            return None

        restriction = None
        for value_tag, restriction_type in ((OWL_SOME_VALUES_FROM, RestrictionType.SOME),
                                            (OWL_ALL_VALUES_FROM, RestrictionType.ONLY)):
            value_element = element.find(value_tag)
            if value_element is None:
                continue
            value = self._parse_filler(value_element)
            if value is not None:
                restriction = Restriction(
                    on_property=property_name,
                    restriction_type=restriction_type,
                    value=value,
                )
        return restriction

    def _parse_operands(self, collection: ET.Element) -> List[ClassExpression]:
        operands = []
        for item in collection:
            operand = self.parse(item)
            if operand is not None:
                operands.append(operand)
        return operands

    def _parse_complement(self, complement: ET.Element) -> Optional[ComplementOf]:
        resource = resource_reference(complement)
        if resource:
            return ComplementOf(operand=NamedClass(id=resolve(resource)))
        child = first_child(complement)
        operand = self.parse(child) if child is not None else None
        if operand is None:
            return None
        return ComplementOf(operand=operand)

    def _parse_filler(self, value_element: ET.Element) -> Optional[ClassExpression]:
        resource = resource_reference(value_element)
        if resource:
            return NamedClass(id=resolve(resource))
        child = first_child(value_element)
        if child is None:
            return None
        return self.parse(child)

    def _parse_property(self, element: ET.Element) -> Optional[str]:
        """Property named by an owl:onProperty or owl:inverseOf element.

        The property is either referenced directly (rdf:resource) or described
        by a nested element, which may itself be an inverse of another property.
        """
        resource = resource_reference(element)
        if resource:
            return resolve(resource)

        description = first_child(element)
        if description is None:
            return None

        inverse = description.find(OWL_INVERSE_OF)
        if inverse is not None:
            inner = self._parse_property(inverse)
            return f"inverse({inner})" if inner else None

        reference = element_reference(description)
        return resolve(reference) if reference else None


def render(expression: ClassExpression, label_for: Optional[Callable[[str], str]] = None) -> str:
    """Render a class expression as readable text.

    Args:
        expression: Expression to render
        label_for: Maps a class id to its display label; ids are used as-is when omitted

    Returns:
        Text such as "Vehicle and (hasPart some Wheel)"
    """
    if label_for is None:
        label_for = _identity
    if isinstance(expression, NamedClass):
        return label_for(expression.id)
    if isinstance(expression, IntersectionOf):
        return " and ".join(render(operand, label_for) for operand in expression.operands)
    if isinstance(expression, UnionOf):
        return "(" + " or ".join(render(operand, label_for) for operand in expression.operands) + ")"
    if isinstance(expression, ComplementOf):
        return f"(not {render(expression.operand, label_for)})"
    if isinstance(expression, Restriction):
        value = render(expression.value, label_for)
        return f"({expression.on_property} {expression.restriction_type.value} {value})"
    raise TypeError(f"Unsupported class expression: {expression!r}")


def _identity(node_id: str) -> str:
    return node_id
