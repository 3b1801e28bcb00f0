"""
Tests for building the class graph from an ontology document.
"""

import pytest

from ontology.builder import GraphBuilder, select_display_name
from ontology.document import OntologyDocument
from ontology.domain import Edge

DOCUMENT = """<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
         xmlns:owl="http://www.w3.org/2002/07/owl#">
    <owl:Class rdf:about="http://example.org/vehicles#Vehicle">
        <rdfs:label xml:lang="en">Vehicle</rdfs:label>
        <rdfs:label xml:lang="cs">Vozidlo</rdfs:label>
    </owl:Class>
    <owl:Class rdf:about="http://example.org/vehicles#Car">
        <rdfs:label xml:lang="en">Car</rdfs:label>
        <rdfs:subClassOf rdf:resource="http://example.org/vehicles#Vehicle"/>
        <rdfs:subClassOf rdf:resource="http://example.org/vehicles#Unknown"/>
    </owl:Class>
    <owl:Class rdf:about="http://example.org/vehicles#Truck">
        <rdfs:subClassOf rdf:resource="http://example.org/vehicles#Vehicle"/>
    </owl:Class>
    <owl:Class rdf:about="http://example.org/vehicles#Car">
        <rdfs:label xml:lang="cs">Auto</rdfs:label>
        <rdfs:comment>Second declaration.</rdfs:comment>
        <rdfs:subClassOf rdf:resource="http://example.org/vehicles#Vehicle"/>
        <rdfs:subClassOf rdf:resource="http://example.org/other/Truck"/>
    </owl:Class>
    <owl:ObjectProperty rdf:about="http://example.org/vehicles#hasOwner">
        <rdfs:label xml:lang="en">has owner</rdfs:label>
        <rdfs:comment>Ownership.</rdfs:comment>
        <rdfs:domain rdf:resource="http://example.org/vehicles#Vehicle"/>
    </owl:ObjectProperty>
    <owl:AnnotationProperty rdf:about="http://example.org/vehicles#note"/>
</rdf:RDF>
"""


@pytest.fixture
def document():
    return OntologyDocument.parse(DOCUMENT)


@pytest.fixture
def builder():
    return GraphBuilder()


class TestSelectDisplayName:
    """Test display name selection."""

    def test_active_language(self):
        assert select_display_name("Car", {"en": "Car", "cs": "Auto"}, "cs") == "Auto"

    def test_fallback_language(self):
        assert select_display_name("Car", {"en": "Car"}, "cs") == "Car"

    def test_id_when_no_usable_label(self):
        assert select_display_name("Car", {"de": "Wagen"}, "cs") == "Car"

    def test_custom_fallback_language(self):
        assert select_display_name("Car", {"de": "Wagen"}, "cs", fallback_language="de") == "Wagen"


class TestGraphBuilder:
    """Test class graph construction."""

    def test_nodes_in_document_order(self, builder, document):
        graph = builder.build(document, "en")
        assert graph.node_ids() == ["Vehicle", "Car", "Truck"]

    def test_repeated_declarations_merged(self, builder, document):
        car = builder.build(document, "en").get("Car")
        assert car.labels == {"en": "Car", "cs": "Auto"}
        assert car.comments == ["Second declaration."]
        assert car.super_classes == ["Vehicle", "Unknown", "Truck"]

    def test_edges_only_between_existing_classes(self, builder, document):
        graph = builder.build(document, "en")
        assert graph.edges == [
            Edge(source="Vehicle", target="Car"),
            Edge(source="Truck", target="Car"),
            Edge(source="Vehicle", target="Truck"),
        ]
        for edge in graph.edges:
            assert edge.source in graph and edge.target in graph

    def test_parents_follow_edges(self, builder, document):
        graph = builder.build(document, "en")
        assert graph.get("Car").parents == ["Vehicle", "Truck"]
        assert graph.get("Vehicle").parents == []

    def test_display_names_per_language(self, builder, document):
        english = builder.build(document, "en")
        czech = builder.build(document, "cs")

        assert english.get("Vehicle").name == "Vehicle"
        assert czech.get("Vehicle").name == "Vozidlo"
        assert czech.get("Car").name == "Auto"
        assert czech.get("Truck").name == "Truck"

    def test_object_properties_collected(self, builder, document):
        graph = builder.build(document, "en")
        assert list(graph.properties) == ["hasOwner"]

        has_owner = graph.properties["hasOwner"]
        assert has_owner.name == "has owner"
        assert has_owner.comments == ["Ownership."]
        assert has_owner.domain == "Vehicle"
        assert has_owner.range is None

    def test_builds_are_independent(self, builder, document):
        first = builder.build(document, "en")
        second = builder.build(document, "en")
        assert first.get("Car") is not second.get("Car")
        assert first.get("Car").parents == second.get("Car").parents


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
