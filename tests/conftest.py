"""
Pytest configuration for docx_composer
"""

import io
import logging
import sys
import zipfile
from pathlib import Path

import pytest

from docx_composer import (
    AbstractNumbering,
    Comment,
    Delete,
    Insert,
    Document,
    Level,
    LevelOverride,
    Numbering,
    Paragraph,
    Run,
    Style,
    Styles,
    Table,
    TableCell,
    TableRow,
)

FIXED_CREATED = "2024-01-02T03:04:05Z"
FIXED_UPDATED = "2024-01-03T04:05:06Z"

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(console_handler)

    yield

    root_logger.removeHandler(console_handler)
    for handler in root_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def make_hello_document() -> Document:
    doc = Document()
    doc.add_paragraph(Paragraph().add_run(Run("Hello world!!")))
    doc.set_created_at(FIXED_CREATED).set_updated_at(FIXED_UPDATED)
    return doc


@pytest.fixture
def hello_document():
    """Scenario A: one paragraph with one run."""
    return make_hello_document()


@pytest.fixture
def numbered_document():
    """Scenario B: a numbering instance overriding level 0."""
    doc = Document().set_created_at(FIXED_CREATED).set_updated_at(FIXED_UPDATED)
    abstract = AbstractNumbering(2).add_level(Level(0, 1, "decimal", "%1.", "left").set_indent(720, "hanging", 360))
    doc.add_abstract_numbering(abstract)
    override = LevelOverride(0).set_start_override(3).set_level(Level(0, 3, "decimal", "%1", "left"))
    doc.add_numbering(Numbering(2, 2).add_override(override))
    doc.add_paragraph(Paragraph().add_run(Run("First")).set_numbering(2, 0))
    return doc


@pytest.fixture
def rich_document():
    """A document touching every part the writer can emit."""
    doc = Document().set_created_at(FIXED_CREATED).set_updated_at(FIXED_UPDATED)

    styles = Styles().set_default_size(24).set_default_fonts(ascii="Calibri", hi_ansi="Calibri")
    heading = Style("Heading1").set_name("heading 1")
    heading.run_property.set_bold().set_size(32)
    heading.paragraph_property.keep_next = True
    styles.add_style(heading)
    doc.set_styles(styles)

    doc.add_abstract_numbering(AbstractNumbering(1).add_level(Level(0, 1, "bullet", "•", "left")))
    doc.add_numbering(Numbering(1, 1))

    comment = Comment(0).set_author("Alice").set_date("2024-02-01T00:00:00Z")
    comment.add_paragraph(Paragraph().add_run(Run("Check this")))
    reply = Comment(1).set_author("Bob").set_date("2024-02-02T00:00:00Z").set_parent_comment_id(0)
    reply.add_paragraph(Paragraph().add_run(Run("Done")))

    paragraph = Paragraph().set_style("Heading1").set_alignment("center")
    paragraph.add_bookmark_start(0, "top")
    paragraph.add_comment_start(comment)
    paragraph.add_comment_start(reply)
    paragraph.add_run(Run("Title").set_color("FF0000"))
    paragraph.add_comment_end(0)
    paragraph.add_comment_end(1)
    paragraph.add_bookmark_end(0)
    doc.add_paragraph(paragraph)

    doc.add_paragraph(Paragraph().add_run(Run("Item")).set_numbering(1, 0))

    tracked = Paragraph()
    tracked.add_insert(Insert(Run("new")).set_author("Carol"))
    tracked.add_delete(Delete(Run().add_delete_text("old")))
    doc.add_paragraph(tracked)

    table = Table().set_grid([3000, 3000])
    table.add_row(TableRow([
        TableCell().add_paragraph(Paragraph().add_run(Run("A1"))).set_vertical_merge("restart"),
        TableCell().add_paragraph(Paragraph().add_run(Run("B1"))),
    ]))
    table.add_row(TableRow([
        TableCell().add_paragraph(Paragraph()).set_vertical_merge("continue"),
        TableCell().add_paragraph(Paragraph().add_run(Run("B2"))),
    ]))
    doc.add_table(table)

    doc.set_doc_id("12345678-1234-1234-1234-123456789ABC")
    doc.add_doc_var("client", "ACME")
    doc.add_custom_property("Project", "Apollo")
    doc.add_custom_item("ABCDEF01-2345-6789-ABCD-EF0123456789", "<root><value>1</value></root>")
    return doc


def write_zip(entries) -> bytes:
    """Build raw ZIP bytes from ``{name: str | bytes}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def read_zip(data: bytes):
    """Entries of ZIP bytes as ``{name: bytes}``, in archive order."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


@pytest.fixture
def sample_zip_content():
    """Minimal package content for testing the reader."""
    return {
        '[Content_Types].xml': '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
    <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
    <Default Extension="xml" ContentType="application/xml"/>
    <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>''',
        '_rels/.rels': '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
    <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>''',
        'word/document.xml': '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
    <w:body>
        <w:p>
            <w:r>
                <w:t>Test paragraph</w:t>
            </w:r>
        </w:p>
    </w:body>
</w:document>''',
        'word/_rels/document.xml.rels': '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
</Relationships>''',
    }


@pytest.fixture
def sample_package(sample_zip_content):
    return write_zip(sample_zip_content)


@pytest.fixture
def build_zip():
    return write_zip


@pytest.fixture
def unzip():
    return read_zip
