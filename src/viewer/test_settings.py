"""
Tests for environment-driven viewer settings.
"""

import pytest

from viewer.settings import DEFAULT_DOCUMENT, ViewerSettings

ENV_VARS = (
    "ONTOLOGY_VIEWER_LANGUAGE",
    "ONTOLOGY_VIEWER_FALLBACK_LANGUAGE",
    "ONTOLOGY_VIEWER_DEFAULT_DOCUMENT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestViewerSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, clean_env):
        settings = ViewerSettings.from_env()

        assert settings.language == "en"
        assert settings.fallback_language == "en"
        assert settings.default_document == str(DEFAULT_DOCUMENT)

    def test_default_document_exists(self):
        assert DEFAULT_DOCUMENT.is_file()

    def test_environment_overrides(self, clean_env, tmp_path):
        document = tmp_path / "vehicles.owl"
        clean_env.setenv("ONTOLOGY_VIEWER_LANGUAGE", "cs")
        clean_env.setenv("ONTOLOGY_VIEWER_FALLBACK_LANGUAGE", "de")
        clean_env.setenv("ONTOLOGY_VIEWER_DEFAULT_DOCUMENT", str(document))

        settings = ViewerSettings.from_env()

        assert settings.language == "cs"
        assert settings.fallback_language == "de"
        assert settings.default_document == str(document)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
