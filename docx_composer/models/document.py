"""
Document model: the root of the node tree.

Besides the body children the document owns the numbering definitions,
styles, section setup, settings, properties and package extensions. It is
also the entry point for building (``build``/``save``) and for JSON export.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..metadata.doc_props import DocProps
from ..metadata.extensions import CustomItem, WebExtension
from ..metadata.settings import Settings
from .base import Models
from .bookmark import BookmarkEnd, BookmarkStart
from .comment import Comment, CommentRangeStart
from .numbering import AbstractNumbering, Numbering
from .paragraph import Paragraph, ParagraphProperty
from .run import Run, RunProperty
from .section import SectionProperty
from .style import Styles
from .table import Table

logger = logging.getLogger(__name__)


def iter_paragraphs(children: Iterable[Any]) -> Iterator[Paragraph]:
    """Yield paragraphs in document order, descending into table cells."""
    for child in children:
        if isinstance(child, Paragraph):
            yield child
        elif isinstance(child, Table):
            for row in child.rows:
                for cell in row.cells:
                    yield from iter_paragraphs(cell.children)


def iter_tables(children: Iterable[Any]) -> Iterator[Table]:
    """Yield tables in document order, nested tables after their parent."""
    for child in children:
        if isinstance(child, Table):
            yield child
            for row in child.rows:
                for cell in row.cells:
                    yield from iter_tables(cell.children)


class Document(Models):
    """A word-processing document under construction or freshly read."""

    allowed_children = (Paragraph, Table, BookmarkStart, BookmarkEnd)

    def __init__(self):
        super().__init__()
        self.abstract_numberings: List[AbstractNumbering] = []
        self.numberings: List[Numbering] = []
        self.settings = Settings()
        self.doc_props = DocProps()
        self.section_property = SectionProperty()
        self.styles = Styles()
        self.taskpanes: bool = False
        self.web_extensions: List[WebExtension] = []
        self.custom_items: List[CustomItem] = []

    # Body

    def add_paragraph(self, paragraph: Paragraph) -> "Document":
        return self.add_child(paragraph)

    def add_table(self, table: Table) -> "Document":
        return self.add_child(table)

    def add_bookmark_start(self, id: int, name: str) -> "Document":
        return self.add_child(BookmarkStart(id, name))

    def add_bookmark_end(self, id: int) -> "Document":
        return self.add_child(BookmarkEnd(id))

    # Numbering

    def add_abstract_numbering(self, abstract_numbering: AbstractNumbering) -> "Document":
        if not isinstance(abstract_numbering, AbstractNumbering):
            raise TypeError("expected an AbstractNumbering")
        self.abstract_numberings.append(abstract_numbering)
        return self

    def add_numbering(self, numbering: Numbering) -> "Document":
        if not isinstance(numbering, Numbering):
            raise TypeError("expected a Numbering")
        self.numberings.append(numbering)
        return self

    # Styles and section

    def set_styles(self, styles: Styles) -> "Document":
        if not isinstance(styles, Styles):
            raise TypeError("expected a Styles instance")
        self.styles = styles
        return self

    def set_default_size(self, size: int) -> "Document":
        self.styles.set_default_size(size)
        return self

    def set_default_fonts(self, ascii: Optional[str] = None, hi_ansi: Optional[str] = None,
                          east_asia: Optional[str] = None, cs: Optional[str] = None) -> "Document":
        self.styles.set_default_fonts(ascii, hi_ansi, east_asia, cs)
        return self

    def set_default_spacing(self, spacing: int) -> "Document":
        self.styles.set_default_spacing(spacing)
        return self

    def set_page_size(self, width: int, height: int) -> "Document":
        self.section_property.set_page_size(width, height)
        return self

    def set_page_orientation(self, orient: Any) -> "Document":
        self.section_property.set_orientation(orient)
        return self

    def set_page_margin(self, **margins: int) -> "Document":
        self.section_property.set_page_margin(**margins)
        return self

    def set_doc_grid(self, grid_type: Any, line_pitch: Optional[int] = None,
                     char_space: Optional[int] = None) -> "Document":
        self.section_property.set_doc_grid(grid_type, line_pitch, char_space)
        return self

    # Settings and properties

    def set_doc_id(self, doc_id: str) -> "Document":
        self.settings.set_doc_id(doc_id)
        return self

    def set_default_tab_stop(self, tab_stop: int) -> "Document":
        self.settings.set_default_tab_stop(tab_stop)
        return self

    def add_doc_var(self, name: str, value: str) -> "Document":
        self.settings.add_doc_var(name, value)
        return self

    def set_created_at(self, created: str) -> "Document":
        self.doc_props.set_created(created)
        return self

    def set_updated_at(self, updated: str) -> "Document":
        self.doc_props.set_updated(updated)
        return self

    def add_custom_property(self, name: str, value: str) -> "Document":
        self.doc_props.add_custom_property(name, value)
        return self

    # Extensions

    def enable_taskpanes(self, enabled: bool = True) -> "Document":
        self.taskpanes = enabled
        return self

    def add_web_extension(self, extension: WebExtension) -> "Document":
        """Register a web extension; its task pane part is enabled with it."""
        if not isinstance(extension, WebExtension):
            raise TypeError("expected a WebExtension")
        self.web_extensions.append(extension)
        self.taskpanes = True
        return self

    def add_custom_item(self, id: str, xml: str) -> "Document":
        self.custom_items.append(CustomItem(id, xml))
        return self

    # Queries

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        return iter_paragraphs(self.children)

    def iter_tables(self) -> Iterator[Table]:
        return iter_tables(self.children)

    def comments(self) -> List[Comment]:
        """Comments placed in the body, in the order their ranges start."""
        found = []
        for paragraph in self.iter_paragraphs():
            for start in paragraph.iter_children(CommentRangeStart):
                found.append(start.comment)
        return found

    def effective_run_property(self, run: Run, paragraph: Optional[Paragraph] = None) -> RunProperty:
        """Fully resolved character properties of ``run`` inside ``paragraph``."""
        from ..styles.style_resolver import PropertyResolver

        return PropertyResolver(self.styles).resolve_run(run, paragraph)

    def effective_paragraph_property(self, paragraph: Paragraph) -> ParagraphProperty:
        from ..styles.style_resolver import PropertyResolver

        return PropertyResolver(self.styles).resolve_paragraph(paragraph)

    # Output

    def build(self, **options: Any) -> bytes:
        """Serialize to .docx bytes. Options are passed to DOCXExporter."""
        from ..export.docx_exporter import DOCXExporter

        with DOCXExporter(self, **options) as exporter:
            return exporter.export_bytes()

    def save(self, path: Union[str, Path], **options: Any) -> Path:
        """Build and write the package to ``path``."""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(self.build(**options))
        logger.info(f"Document saved to {output}")
        return output

    def json(self) -> Dict[str, Any]:
        from ..export.json_exporter import JSONExporter

        return JSONExporter(self).export()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "children": [child.to_dict() for child in self.children],
            "abstract_numberings": [item.to_dict() for item in self.abstract_numberings],
            "numberings": [item.to_dict() for item in self.numberings],
            "settings": self.settings.to_dict(),
            "doc_props": self.doc_props.to_dict(),
            "section_property": self.section_property.to_dict(),
            "styles": self.styles.to_dict(),
            "taskpanes": self.taskpanes,
            "web_extensions": [item.to_dict() for item in self.web_extensions],
            "custom_items": [item.to_dict() for item in self.custom_items],
        }

    def __repr__(self) -> str:
        return f"Document(children={len(self.children)})"
