"""
Main document part writer (``word/document.xml``).

Walks the body in model order. Paragraph and run properties are written as
set on the nodes, or fully resolved when a PropertyResolver is supplied.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Iterable, List, Optional

from ..models.bookmark import BookmarkEnd, BookmarkStart
from ..models.comment import CommentEnd, CommentRangeStart
from ..models.document import Document
from ..models.paragraph import Delete, Insert, Paragraph
from ..models.run import Break, DeleteText, Run, Tab, Text
from ..models.section import SectionProperty
from ..models.table import Table, TableCell, TableRow
from ..styles.style_resolver import PropertyResolver
from ..utils.enums import BreakType, TableCellBorderPosition
from ..utils.id_manager import RevisionIdAllocator
from ..utils.xml_utils import make_element, qn, serialize, sub_element, val_element, xml_text
from .properties_writer import write_paragraph_property, write_run_property

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_WIDTH = 2000

XML_SPACE = qn("xml:space")


def reconcile_grid(table: Table) -> List[int]:
    """Column widths padded or truncated to the column count the rows occupy."""
    grid = list(table.grid)
    count = table.column_count()
    if count == 0 or len(grid) == count:
        return grid
    if len(grid) > count:
        logger.warning(f"Table grid truncated from {len(grid)} to {count} column(s)")
        return grid[:count]
    fill = grid[-1] if grid else DEFAULT_COLUMN_WIDTH
    logger.warning(f"Table grid padded from {len(grid)} to {count} column(s)")
    return grid + [fill] * (count - len(grid))


def _text_element(parent: ET.Element, name: str, text: str) -> ET.Element:
    element = sub_element(parent, name)
    element.set(XML_SPACE, "preserve")
    element.text = xml_text(text)
    return element


class DocumentWriter:
    """Renders block-level content into WordprocessingML elements."""

    def __init__(self, document: Document, revisions: Optional[RevisionIdAllocator] = None,
                 resolver: Optional[PropertyResolver] = None):
        self.document = document
        self.revisions = revisions or RevisionIdAllocator()
        self.resolver = resolver

    def write(self) -> bytes:
        root = make_element("w:document")
        body = sub_element(root, "w:body")
        for child in self.document.children:
            if isinstance(child, Paragraph):
                self.write_paragraph(body, child)
            elif isinstance(child, Table):
                self.write_table(body, child)
            elif isinstance(child, BookmarkStart):
                sub_element(body, "w:bookmarkStart", {"w:id": child.id, "w:name": child.name})
            elif isinstance(child, BookmarkEnd):
                sub_element(body, "w:bookmarkEnd", {"w:id": child.id})
        self.write_section(body, self.document.section_property)
        logger.debug(f"Rendered document body with {len(self.document.children)} block(s)")
        return serialize(root)

    def write_blocks(self, parent: ET.Element, children: Iterable[Any]) -> List[ET.Element]:
        """Write paragraphs and tables; returns the paragraph elements written directly under ``parent``."""
        paragraphs = []
        for child in children:
            if isinstance(child, Paragraph):
                paragraphs.append(self.write_paragraph(parent, child))
            elif isinstance(child, Table):
                self.write_table(parent, child)
        return paragraphs

    # Paragraph content

    def write_paragraph(self, parent: ET.Element, paragraph: Paragraph) -> ET.Element:
        p = sub_element(parent, "w:p")
        prop = self.resolver.resolve_paragraph(paragraph) if self.resolver else paragraph.property
        write_paragraph_property(p, prop)

        for child in paragraph.children:
            if isinstance(child, Run):
                self.write_run(p, child, paragraph)
            elif isinstance(child, (Insert, Delete)):
                self._write_tracked_change(p, child, paragraph)
            elif isinstance(child, BookmarkStart):
                sub_element(p, "w:bookmarkStart", {"w:id": child.id, "w:name": child.name})
            elif isinstance(child, BookmarkEnd):
                sub_element(p, "w:bookmarkEnd", {"w:id": child.id})
            elif isinstance(child, CommentRangeStart):
                sub_element(p, "w:commentRangeStart", {"w:id": child.id})
            elif isinstance(child, CommentEnd):
                sub_element(p, "w:commentRangeEnd", {"w:id": child.id})
                reference_run = sub_element(p, "w:r")
                sub_element(reference_run, "w:commentReference", {"w:id": child.id})
        return p

    def write_run(self, parent: ET.Element, run: Run, paragraph: Optional[Paragraph] = None) -> ET.Element:
        r = sub_element(parent, "w:r")
        prop = self.resolver.resolve_run(run, paragraph) if self.resolver else run.property
        write_run_property(r, prop)

        for child in run.children:
            if isinstance(child, Text):
                _text_element(r, "w:t", child.text)
            elif isinstance(child, DeleteText):
                _text_element(r, "w:delText", child.text)
            elif isinstance(child, Tab):
                sub_element(r, "w:tab")
            elif isinstance(child, Break):
                if child.break_type == BreakType.TEXT_WRAPPING:
                    sub_element(r, "w:br")
                else:
                    sub_element(r, "w:br", {"w:type": child.break_type})
        return r

    def _write_tracked_change(self, parent: ET.Element, change: Any, paragraph: Paragraph) -> ET.Element:
        name = "w:ins" if isinstance(change, Insert) else "w:del"
        element = sub_element(parent, name, {
            "w:id": self.revisions.next_id(),
            "w:author": change.author,
            "w:date": change.date,
        })
        for run in change.children:
            self.write_run(element, run, paragraph)
        return element

    # Tables

    def write_table(self, parent: ET.Element, table: Table) -> ET.Element:
        tbl = sub_element(parent, "w:tbl")
        self._write_table_property(tbl, table)
        grid = sub_element(tbl, "w:tblGrid")
        for width in reconcile_grid(table):
            sub_element(grid, "w:gridCol", {"w:w": width})
        for row in table.rows:
            self._write_row(tbl, row)
        return tbl

    def _write_table_property(self, tbl: ET.Element, table: Table) -> None:
        prop = table.property
        tbl_pr = sub_element(tbl, "w:tblPr")
        if prop.style_id is not None:
            val_element(tbl_pr, "w:tblStyle", prop.style_id)
        if prop.width is not None:
            sub_element(tbl_pr, "w:tblW", {"w:w": prop.width, "w:type": prop.width_type})
        if prop.alignment is not None:
            val_element(tbl_pr, "w:jc", prop.alignment)
        if prop.indent is not None:
            sub_element(tbl_pr, "w:tblInd", {"w:w": prop.indent, "w:type": "dxa"})
        if prop.layout is not None:
            sub_element(tbl_pr, "w:tblLayout", {"w:type": prop.layout})
        if prop.cell_margins:
            margins = sub_element(tbl_pr, "w:tblCellMar")
            for edge in ("top", "left", "bottom", "right"):
                if edge in prop.cell_margins:
                    sub_element(margins, f"w:{edge}", {"w:w": prop.cell_margins[edge], "w:type": "dxa"})

    def _write_row(self, tbl: ET.Element, row: TableRow) -> ET.Element:
        tr = sub_element(tbl, "w:tr")
        if row.grid_before or row.grid_after or row.height is not None:
            tr_pr = sub_element(tr, "w:trPr")
            if row.grid_before:
                val_element(tr_pr, "w:gridBefore", row.grid_before)
            if row.grid_after:
                val_element(tr_pr, "w:gridAfter", row.grid_after)
            if row.height is not None:
                sub_element(tr_pr, "w:trHeight", {"w:val": row.height, "w:hRule": row.height_rule})
        for cell in row.cells:
            self._write_cell(tr, cell)
        return tr

    def _write_cell(self, tr: ET.Element, cell: TableCell) -> ET.Element:
        tc = sub_element(tr, "w:tc")
        prop = cell.property
        tc_pr = sub_element(tc, "w:tcPr")
        if prop.width is not None:
            sub_element(tc_pr, "w:tcW", {"w:w": prop.width, "w:type": prop.width_type})
        if prop.grid_span is not None:
            val_element(tc_pr, "w:gridSpan", prop.grid_span)
        if prop.vertical_merge is not None:
            val_element(tc_pr, "w:vMerge", prop.vertical_merge)
        if prop.borders:
            borders = sub_element(tc_pr, "w:tcBorders")
            for position in TableCellBorderPosition:
                border = prop.borders.get(position)
                if border is None:
                    continue
                sub_element(borders, f"w:{position.value}", {
                    "w:val": border.border_type,
                    "w:sz": border.size,
                    "w:space": border.space,
                    "w:color": border.color,
                })
        if prop.shading is not None:
            sub_element(tc_pr, "w:shd", {
                "w:val": prop.shading.shd_type,
                "w:color": prop.shading.color,
                "w:fill": prop.shading.fill,
            })
        if prop.text_direction is not None:
            val_element(tc_pr, "w:textDirection", prop.text_direction)
        if prop.vertical_align is not None:
            val_element(tc_pr, "w:vAlign", prop.vertical_align)

        self.write_blocks(tc, cell.children)
        # A cell must end with a paragraph.
        if not cell.children or isinstance(cell.children[-1], Table):
            sub_element(tc, "w:p")
        return tc

    # Section

    def write_section(self, body: ET.Element, section: SectionProperty) -> ET.Element:
        sect_pr = sub_element(body, "w:sectPr")
        size = section.page_size
        sub_element(sect_pr, "w:pgSz", {"w:w": size.width, "w:h": size.height, "w:orient": size.orient})
        margin = section.page_margin
        sub_element(sect_pr, "w:pgMar", {
            "w:top": margin.top,
            "w:right": margin.right,
            "w:bottom": margin.bottom,
            "w:left": margin.left,
            "w:header": margin.header,
            "w:footer": margin.footer,
            "w:gutter": margin.gutter,
        })
        grid = section.doc_grid
        sub_element(sect_pr, "w:docGrid", {
            "w:type": grid.grid_type,
            "w:linePitch": grid.line_pitch,
            "w:charSpace": grid.char_space,
        })
        return sect_pr
