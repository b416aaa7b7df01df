"""
High-level API for docx_composer.

Example:
    >>> from docx_composer import Document, Paragraph, Run, read_docx
    >>> doc = Document().add_paragraph(Paragraph().add_run(Run("Hello world!!")))
    >>> data = doc.build()
    >>> read_docx(data)["children"][0]["children"][0]["children"][0]["text"]
    'Hello world!!'
"""

from typing import Any, Dict

from .models.document import Document
from .parser.document_reader import DocumentReader
from .parser.package_reader import PackageSource

__all__ = ["read_docx", "load_docx"]


def load_docx(data: PackageSource) -> Document:
    """Read a package (bytes, path or binary stream) into a Document."""
    return DocumentReader(data).read()


def read_docx(data: PackageSource) -> Dict[str, Any]:
    """Read a package into the canonical JSON value of its Document."""
    return load_docx(data).json()
