"""
Ontology Viewer Core Module

This module ties the ontology and hierarchy modules together into one session:
it loads a document, keeps the document and its class graph, and answers the
queries of a rendering layer (full view, branch view, labels, axioms, search).

Public Interface:
- OntologyService: High-level service for loading an ontology and all viewer queries

Private Components:
- OntologySession: Immutable snapshot of the loaded document and graph
- ViewerSettings: Environment-driven configuration
"""

from .service import OntologyService

__all__ = ["OntologyService"]
