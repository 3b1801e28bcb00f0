"""
Session state of a loaded ontology.
"""

from dataclasses import dataclass

from ontology.document import OntologyDocument
from ontology.domain import OntologyGraph


@dataclass(frozen=True)
class OntologySession:
    """One successfully loaded document with the graph built from it.

    A session is replaced as a whole by a new load or a language switch and is
    never modified, so views derived from it stay consistent.
    """

    document: OntologyDocument
    graph: OntologyGraph
    language: str           # language the display names were built for
    source: str             # description of where the document came from
