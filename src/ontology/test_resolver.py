"""
Tests for resolving resource identifiers to local names.
"""

import pytest

from ontology.resolver import resolve


class TestResolve:
    """Test local name resolution."""

    def test_fragment_and_path_give_same_name(self):
        assert resolve("http://x/y#Foo") == "Foo"
        assert resolve("http://x/y/Foo") == "Foo"

    def test_fragment_takes_precedence_over_path(self):
        assert resolve("http://example.org/a/b#Car") == "Car"

    def test_last_separator_is_used(self):
        assert resolve("http://example.org/a#b#Car") == "Car"
        assert resolve("http://example.org/a/b/c/Car") == "Car"

    def test_plain_name_unchanged(self):
        assert resolve("Car") == "Car"
        assert resolve("") == ""

    def test_trailing_separator_does_not_give_empty_name(self):
        assert resolve("http://x/y#") == "y#"
        assert resolve("urn:x/") == "urn:x/"

    @pytest.mark.parametrize("uri", [
        "http://example.org/vehicles#Car",
        "urn:isbn:0451450523",
        "Car",
    ])
    def test_resolve_is_idempotent(self, uri):
        assert resolve(resolve(uri)) == resolve(uri)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
