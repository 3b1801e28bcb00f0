"""
Configuration of the ontology viewer read from the environment.

Values can be provided in a .env file in the working directory:

    ONTOLOGY_VIEWER_LANGUAGE=cs
    ONTOLOGY_VIEWER_FALLBACK_LANGUAGE=en
    ONTOLOGY_VIEWER_DEFAULT_DOCUMENT=/path/to/domain_ontology.owl
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Project root is two levels above this package (src/viewer -> project root)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_DOCUMENT = PROJECT_ROOT / "data" / "ontology" / "domain_ontology.owl"


@dataclass
class ViewerSettings:
    """Settings for loading and labelling ontologies."""
    language: str = "en"                           # initially active label language
    fallback_language: str = "en"                  # used when no label exists in the active language
    default_document: str = str(DEFAULT_DOCUMENT)  # document loaded by load_default()

    @classmethod
    def from_env(cls) -> "ViewerSettings":
        """Create settings from environment variables (and .env file)."""
        load_dotenv()
        return cls(
            language=os.getenv("ONTOLOGY_VIEWER_LANGUAGE", cls.language),
            fallback_language=os.getenv("ONTOLOGY_VIEWER_FALLBACK_LANGUAGE", cls.fallback_language),
            default_document=os.getenv("ONTOLOGY_VIEWER_DEFAULT_DOCUMENT", cls.default_document),
        )
