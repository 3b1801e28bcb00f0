"""
Tests for the RDF/XML ontology document reader.
"""

import pytest

from ontology.document import OntologyDocument, looks_like_xml
from ontology.domain import OntologyLoadError

RDF_HEADER = """<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
         xmlns:owl="http://www.w3.org/2002/07/owl#"
         xmlns:ex="http://example.org/vehicles#">
"""
RDF_FOOTER = "</rdf:RDF>"


def make_document(body: str) -> str:
    return RDF_HEADER + body + RDF_FOOTER


@pytest.fixture
def document():
    """Document with classes, properties and anonymous elements."""
    return OntologyDocument.parse(make_document("""
    <owl:ObjectProperty rdf:about="http://example.org/vehicles#hasPart">
        <rdfs:label xml:lang="en">has part</rdfs:label>
        <rdfs:comment>Part relation.</rdfs:comment>
        <rdfs:domain rdf:resource="http://example.org/vehicles#Vehicle"/>
        <rdfs:range rdf:resource="http://example.org/vehicles#Component"/>
    </owl:ObjectProperty>
    <owl:AnnotationProperty rdf:about="http://example.org/vehicles#related"/>
    <owl:ObjectProperty/>
    <owl:Class rdf:about="http://example.org/vehicles#Vehicle">
        <rdfs:label xml:lang="en">Vehicle</rdfs:label>
        <rdfs:label xml:lang="cs">Vozidlo</rdfs:label>
        <rdfs:label>Untagged</rdfs:label>
        <rdfs:label xml:lang="de">   </rdfs:label>
        <rdfs:comment>A means of transport.</rdfs:comment>
    </owl:Class>
    <owl:Class rdf:ID="Car">
        <rdfs:subClassOf rdf:resource="http://example.org/vehicles#Vehicle"/>
        <rdfs:subClassOf>
            <owl:Restriction>
                <owl:onProperty rdf:resource="http://example.org/vehicles#hasPart"/>
                <owl:someValuesFrom rdf:resource="http://example.org/vehicles#Wheel"/>
            </owl:Restriction>
        </rdfs:subClassOf>
        <owl:equivalentClass rdf:resource="http://example.org/vehicles#Automobile"/>
        <ex:related rdf:resource="http://example.org/vehicles#Truck"/>
    </owl:Class>
    <owl:Class>
        <rdfs:label>Anonymous</rdfs:label>
    </owl:Class>
    """))


class TestParse:
    """Test document parsing and error reporting."""

    def test_parse_rdf_xml(self, document):
        assert [decl.id for decl in document.class_declarations()] == ["Vehicle", "Car"]

    def test_malformed_xml_raises(self):
        with pytest.raises(OntologyLoadError):
            OntologyDocument.parse("<rdf:RDF><owl:Class></rdf:RDF>")

    def test_non_rdf_root_raises(self):
        with pytest.raises(OntologyLoadError):
            OntologyDocument.parse("<html><body>Not an ontology</body></html>")

    def test_invalid_turtle_raises(self):
        with pytest.raises(OntologyLoadError):
            OntologyDocument.parse("this is neither xml nor turtle", format="turtle")

    def test_turtle_is_normalized(self):
        turtle = """
        @prefix owl: <http://www.w3.org/2002/07/owl#> .
        @prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
        @prefix ex: <http://example.org/vehicles#> .

        ex:Vehicle a owl:Class ;
            rdfs:label "Vehicle"@en .
        ex:Car a owl:Class ;
            rdfs:subClassOf ex:Vehicle .
        """
        document = OntologyDocument.parse(turtle, format="turtle")
        declarations = {decl.id: decl for decl in document.class_declarations()}

        assert set(declarations) == {"Vehicle", "Car"}
        assert declarations["Vehicle"].labels == [("en", "Vehicle")]
        assert declarations["Car"].super_class_refs == ["http://example.org/vehicles#Vehicle"]

    def test_looks_like_xml(self):
        assert looks_like_xml('<?xml version="1.0"?><rdf:RDF/>')
        assert looks_like_xml("  <rdf:RDF xmlns:rdf='x'/>")
        assert not looks_like_xml("/data/ontology/domain_ontology.owl")
        assert not looks_like_xml("@prefix ex: <http://example.org/> .")


class TestClassDeclarations:
    """Test reading of class declarations."""

    def test_anonymous_classes_skipped(self, document):
        assert all(decl.id != "Anonymous" for decl in document.class_declarations())

    def test_labels_keep_order_and_default_language(self, document):
        vehicle = document.find_class("Vehicle")[0]
        assert vehicle.labels == [("en", "Vehicle"), ("cs", "Vozidlo"), ("en", "Untagged")]
        assert vehicle.comments == ["A means of transport."]

    def test_rdf_id_reference(self, document):
        car = document.find_class("Car")[0]
        assert car.identifier == "Car"

    def test_superclass_references_and_restrictions(self, document):
        car = document.find_class("Car")[0]
        assert car.super_class_refs == ["http://example.org/vehicles#Vehicle"]
        assert len(car.restriction_elements) == 1
        assert len(car.equivalent_elements) == 1

    def test_property_assertions(self, document):
        car = document.find_class("Car")[0]
        assert car.property_assertions == [
            ("http://example.org/vehicles#related", "http://example.org/vehicles#Truck"),
        ]

    def test_find_unknown_class(self, document):
        assert document.find_class("Boat") == []


class TestPropertyDeclarations:
    """Test reading of property declarations."""

    def test_named_properties_only(self, document):
        assert [decl.id for decl in document.property_declarations()] == ["hasPart", "related"]

    def test_object_property_details(self, document):
        has_part = document.find_property("hasPart")[0]
        assert has_part.property_type == "ObjectProperty"
        assert has_part.labels == [("en", "has part")]
        assert has_part.comments == ["Part relation."]
        assert has_part.domain_ref == "http://example.org/vehicles#Vehicle"
        assert has_part.range_ref == "http://example.org/vehicles#Component"

    def test_property_types(self, document):
        assert document.property_types() == {
            "hasPart": "ObjectProperty",
            "related": "AnnotationProperty",
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
