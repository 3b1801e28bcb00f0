"""
Ontology Loading & Class Graph Module

This module reads an OWL ontology document (RDF/XML, or any RDF syntax rdflib
can normalize to it) into a class graph with localized display names, parses
class expressions and extracts the axioms of individual classes.

Public Interface:
- OntologyDocument: Order-preserving RDF/XML reader
- GraphBuilder: OntologyDocument -> OntologyGraph
- ExpressionParser / render: RDF/XML class expressions <-> ClassExpression AST <-> text
- extract_axioms: Axioms of a single class
- OntologyLoadError: Raised when a document cannot be read or parsed

Private Components:
- Domain models: ClassNode, Edge, OntologyGraph, etc.
- Data sources: raw text, file path or URL
"""

from .axioms import ClassAxioms, extract_axioms
from .builder import GraphBuilder
from .document import OntologyDocument
from .domain import OntologyLoadError
from .expressions import ExpressionParser, render

__all__ = [
    "ClassAxioms",
    "ExpressionParser",
    "GraphBuilder",
    "OntologyDocument",
    "OntologyLoadError",
    "extract_axioms",
    "render",
]
