"""
Reader for ontology documents in RDF/XML.

The document is walked as XML rather than loaded as a set of triples so that
the order of declarations, labels and superclass references is preserved
exactly as written. Documents in other RDF serializations are normalized to
RDF/XML with rdflib first.
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Dict

from rdflib import Graph, Namespace

from .domain import OntologyLoadError
from .resolver import resolve

logger = logging.getLogger(__name__)

RDF_NS = Namespace("http://www.w3.org/1999/02/22-rdf-syntax-ns#")
RDFS_NS = Namespace("http://www.w3.org/2000/01/rdf-schema#")
OWL_NS = Namespace("http://www.w3.org/2002/07/owl#")
XML_NS = Namespace("http://www.w3.org/XML/1998/namespace")

FALLBACK_LANGUAGE = "en"


def tag(namespace: Namespace, local_name: str) -> str:
    """ElementTree tag (or attribute key) for a term of a namespace."""
    return f"{{{namespace}}}{local_name}"


def local_tag(element: ET.Element) -> str:
    """Local part of an element tag, without its namespace."""
    return element.tag.rpartition("}")[2]


def tag_to_iri(element_tag: str) -> str:
    """Convert an ElementTree tag back to the IRI of the term."""
    namespace, _, local_name = element_tag.partition("}")
    return f"{namespace.lstrip('{')}{local_name}" if local_name else element_tag


RDF_ROOT = tag(RDF_NS, "RDF")
RDF_ABOUT = tag(RDF_NS, "about")
RDF_ID = tag(RDF_NS, "ID")
RDF_RESOURCE = tag(RDF_NS, "resource")
RDF_DESCRIPTION = tag(RDF_NS, "Description")

RDFS_LABEL = tag(RDFS_NS, "label")
RDFS_COMMENT = tag(RDFS_NS, "comment")
RDFS_SUBCLASS_OF = tag(RDFS_NS, "subClassOf")
RDFS_DOMAIN = tag(RDFS_NS, "domain")
RDFS_RANGE = tag(RDFS_NS, "range")

OWL_CLASS = tag(OWL_NS, "Class")
OWL_OBJECT_PROPERTY = tag(OWL_NS, "ObjectProperty")
OWL_ANNOTATION_PROPERTY = tag(OWL_NS, "AnnotationProperty")
OWL_RESTRICTION = tag(OWL_NS, "Restriction")
OWL_EQUIVALENT_CLASS = tag(OWL_NS, "equivalentClass")
OWL_INTERSECTION_OF = tag(OWL_NS, "intersectionOf")
OWL_UNION_OF = tag(OWL_NS, "unionOf")
OWL_COMPLEMENT_OF = tag(OWL_NS, "complementOf")
OWL_ON_PROPERTY = tag(OWL_NS, "onProperty")
OWL_SOME_VALUES_FROM = tag(OWL_NS, "someValuesFrom")
OWL_ALL_VALUES_FROM = tag(OWL_NS, "allValuesFrom")
OWL_INVERSE_OF = tag(OWL_NS, "inverseOf")

XML_LANG = tag(XML_NS, "lang")

# Start of an XML document: declaration, comment/doctype or a (prefixed) tag name.
_XML_START = re.compile(r"^\s*<(\?xml|!|[A-Za-z_][\w.-]*(:[A-Za-z_][\w.-]*)?[\s/>])")

# Predicates that are structural and never reported as property assertions.
_STRUCTURAL_PREDICATES = {
    RDFS_SUBCLASS_OF,
    OWL_EQUIVALENT_CLASS,
    tag(RDF_NS, "type"),
}


def element_reference(element: ET.Element) -> Optional[str]:
    """Identifying reference of an element (rdf:about or rdf:ID)."""
    return element.get(RDF_ABOUT) or element.get(RDF_ID)


def resource_reference(element: ET.Element) -> Optional[str]:
    """Referenced resource of a property element (rdf:resource)."""
    return element.get(RDF_RESOURCE)


def first_child(element: ET.Element) -> Optional[ET.Element]:
    """First child element, if any."""
    for child in element:
        return child
    return None


def looks_like_xml(text: str) -> bool:
    return bool(_XML_START.match(text))


@dataclass
class ClassDeclaration:
    """A named owl:Class element of the document."""

    identifier: str                                           # full IRI (rdf:about / rdf:ID)
    labels: List[Tuple[str, str]] = field(default_factory=list)          # (language, text) in document order
    comments: List[str] = field(default_factory=list)
    super_class_refs: List[str] = field(default_factory=list)            # rdfs:subClassOf rdf:resource IRIs
    equivalent_elements: List[ET.Element] = field(default_factory=list)  # owl:equivalentClass elements
    restriction_elements: List[ET.Element] = field(default_factory=list) # owl:Restriction under rdfs:subClassOf
    property_assertions: List[Tuple[str, str]] = field(default_factory=list)  # (predicate IRI, resource IRI)

    @property
    def id(self) -> str:
        return resolve(self.identifier)


@dataclass
class PropertyDeclaration:
    """A named owl:ObjectProperty or owl:AnnotationProperty element."""

    identifier: str
    property_type: str                  # "ObjectProperty" | "AnnotationProperty"
    labels: List[Tuple[str, str]] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    domain_ref: Optional[str] = None
    range_ref: Optional[str] = None

    @property
    def id(self) -> str:
        return resolve(self.identifier)


class OntologyDocument:
    """Parsed RDF/XML ontology document exposing its declarations."""

    def __init__(self, root: ET.Element):
        if root.tag != RDF_ROOT:
            raise OntologyLoadError(f"Not an RDF/XML document: root element is {root.tag}")
        self.root = root
        self._classes: Optional[List[ClassDeclaration]] = None
        self._properties: Optional[List[PropertyDeclaration]] = None

    @classmethod
    def parse(cls, text: str, format: Optional[str] = None) -> "OntologyDocument":
        """Parse document text.

        Args:
            text: Document content
            format: Optional rdflib format name ("xml", "turtle", "nt", "json-ld", ...).
                When omitted, markup is read as RDF/XML and anything else as Turtle.

        Returns:
            OntologyDocument instance

        Raises:
            OntologyLoadError: If the document cannot be parsed
        """
        if format in (None, "xml", "application/rdf+xml") and looks_like_xml(text):
            xml_text = text
        else:
            xml_text = _normalize_to_rdf_xml(text, format or "turtle")

        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise OntologyLoadError(f"Document is not well-formed XML: {e}") from e

        return cls(root)

    def class_declarations(self) -> List[ClassDeclaration]:
        """All named class elements in document order.

        Anonymous owl:Class elements (inline class expressions) are skipped.
        """
        if self._classes is None:
            self._classes = []
            for element in self.root.iter(OWL_CLASS):
                identifier = element_reference(element)
                if not identifier:
                    continue
                self._classes.append(_read_class(identifier, element))
        return self._classes

    def property_declarations(self) -> List[PropertyDeclaration]:
        """All named object and annotation property elements in document order."""
        if self._properties is None:
            self._properties = []
            for element in self.root.iter():
                if element.tag not in (OWL_OBJECT_PROPERTY, OWL_ANNOTATION_PROPERTY):
                    continue
                identifier = element_reference(element)
                if not identifier:
                    logger.debug("Skipping anonymous property element")
                    continue
                self._properties.append(_read_property(identifier, element))
        return self._properties

    def find_class(self, class_id: str) -> List[ClassDeclaration]:
        """All declarations of the class with the given local name."""
        return [decl for decl in self.class_declarations() if decl.id == class_id]

    def find_property(self, property_id: str) -> List[PropertyDeclaration]:
        """All declarations of the property with the given local name."""
        return [decl for decl in self.property_declarations() if decl.id == property_id]

    def property_types(self) -> Dict[str, str]:
        """Local property name -> property type for all declared properties."""
        return {decl.id: decl.property_type for decl in self.property_declarations()}


def _read_labels_and_comments(element: ET.Element) -> Tuple[List[Tuple[str, str]], List[str]]:
    labels = []
    comments = []
    for child in element:
        text = (child.text or "").strip()
        if not text:
            continue
        if child.tag == RDFS_LABEL:
            labels.append((child.get(XML_LANG) or FALLBACK_LANGUAGE, text))
        elif child.tag == RDFS_COMMENT:
            comments.append(text)
    return labels, comments


def _read_class(identifier: str, element: ET.Element) -> ClassDeclaration:
    labels, comments = _read_labels_and_comments(element)
    declaration = ClassDeclaration(identifier=identifier, labels=labels, comments=comments)

    for child in element:
        if child.tag == RDFS_SUBCLASS_OF:
            resource = resource_reference(child)
            if resource:
                declaration.super_class_refs.append(resource)
            else:
                declaration.restriction_elements.extend(child.findall(OWL_RESTRICTION))
        elif child.tag == OWL_EQUIVALENT_CLASS:
            declaration.equivalent_elements.append(child)
        elif child.tag not in _STRUCTURAL_PREDICATES:
            resource = resource_reference(child)
            if resource:
                declaration.property_assertions.append((tag_to_iri(child.tag), resource))

    return declaration


def _read_property(identifier: str, element: ET.Element) -> PropertyDeclaration:
    labels, comments = _read_labels_and_comments(element)
    domain = element.find(RDFS_DOMAIN)
    range_element = element.find(RDFS_RANGE)
    return PropertyDeclaration(
        identifier=identifier,
        property_type=local_tag(element),
        labels=labels,
        comments=comments,
        domain_ref=resource_reference(domain) if domain is not None else None,
        range_ref=resource_reference(range_element) if range_element is not None else None,
    )


def _normalize_to_rdf_xml(text: str, format: str) -> str:
    """Re-serialize a document in another RDF syntax as RDF/XML."""
    graph = Graph()
    try:
        graph.parse(data=text, format=format)
    except Exception as e:
        raise OntologyLoadError(f"Could not parse {format} document: {e}") from e
    logger.info(f"Normalized {format} document with {len(graph)} triples to RDF/XML")
    return graph.serialize(format="pretty-xml")
