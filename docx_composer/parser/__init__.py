"""Reading .docx packages back into Document models."""

from .document_reader import DocumentReader
from .package_reader import PackageReader
from .xml_parser import XMLParser

__all__ = ["DocumentReader", "PackageReader", "XMLParser"]
