"""
Sources of ontology documents.

A document is either given directly as text or read from a location (file
path or URL). Reading is the only blocking step of a load.
"""

import os
import re
from abc import ABC, abstractmethod
from typing import Optional, Union

from rdflib.parser import create_input_source
from rdflib.util import guess_format

from .document import looks_like_xml
from .domain import OntologyLoadError

# Statements that open a Turtle or N-Triples document.
_TURTLE_START = re.compile(r"^\s*(@prefix\s|@base\s|PREFIX\s+[\w.-]*:\s*<|BASE\s+<|<[^\s<>]*>\s)", re.IGNORECASE)


class OntologyDataSource(ABC):
    """
    Interface for reading the raw text of an ontology document.
    """
    format: Optional[str] = None    # rdflib format name, None to detect from content

    @abstractmethod
    def read(self) -> str:
        """
        Read the complete document.

        :return: Document text
        :raises OntologyLoadError: If the document cannot be read
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """
        Short description of the source for log messages.
        """
        pass


class TextDataSource(OntologyDataSource):
    """Document supplied as text, e.g. the content of an uploaded file."""

    def __init__(self, text: str, format: Optional[str] = None):
        self.text = text
        self.format = format

    def read(self) -> str:
        return self.text

    def describe(self) -> str:
        return f"<document text, {len(self.text)} characters>"


class LocationDataSource(OntologyDataSource):
    """Document read from a file path or URL through rdflib's input sources."""

    def __init__(self, location: str, format: Optional[str] = None):
        self.location = location
        self.format = format or guess_format(location)

    def read(self) -> str:
        try:
            source = create_input_source(location=self.location)
        except Exception as e:
            raise OntologyLoadError(f"Failed to open ontology document {self.location}: {e}") from e

        try:
            stream = source.getCharacterStream() or source.getByteStream()
            content = stream.read()
        except Exception as e:
            raise OntologyLoadError(f"Failed to read ontology document {self.location}: {e}") from e
        finally:
            source.close()

        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise OntologyLoadError(f"Ontology document {self.location} is not UTF-8 encoded: {e}") from e
        return content[1:] if content.startswith("\ufeff") else content

    def describe(self) -> str:
        return self.location


def open_source(target: Union[str, "os.PathLike[str]", OntologyDataSource]) -> OntologyDataSource:
    """Create the data source for a load target.

    Markup, text opening with a Turtle statement (@prefix, PREFIX, @base, an
    IRI) and any multi-line text are taken as the document itself, anything
    else as a file path or URL. Wrap text in a TextDataSource to skip the
    guess, e.g. for a one-line document in another syntax.
    """
    if isinstance(target, OntologyDataSource):
        return target
    if isinstance(target, os.PathLike):
        return LocationDataSource(os.fspath(target))
    if looks_like_xml(target) or _TURTLE_START.match(target) or "\n" in target.strip():
        return TextDataSource(target)
    return LocationDataSource(target)
