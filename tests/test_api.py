"""
Tests for the high-level API: building, saving and reading documents.
"""

import io

import pytest

import docx_composer
from docx_composer import Document, Paragraph, Run, ValidationError, load_docx, read_docx


class TestApi:
    """Test cases for load_docx and read_docx."""

    def test_version(self):
        assert docx_composer.__version__ == "0.1.0"

    def test_read_docx_scenario_a(self):
        doc = Document().add_paragraph(Paragraph().add_run(Run("Hello world!!")))
        data = read_docx(doc.build())
        assert data["children"][0]["children"][0]["children"][0]["text"] == "Hello world!!"

    def test_load_from_path(self, hello_document, temp_dir):
        path = hello_document.save(temp_dir / "hello.docx")
        assert load_docx(path) == hello_document
        assert load_docx(str(path)) == hello_document

    def test_load_from_stream(self, hello_document):
        assert load_docx(io.BytesIO(hello_document.build())) == hello_document

    def test_read_docx_equals_json(self, rich_document):
        assert read_docx(rich_document.build()) == rich_document.json()

    def test_invalid_document_not_saved(self, temp_dir):
        doc = Document().add_paragraph(Paragraph().set_numbering(3))
        with pytest.raises(ValidationError):
            doc.save(temp_dir / "invalid.docx")
        assert not (temp_dir / "invalid.docx").exists()
