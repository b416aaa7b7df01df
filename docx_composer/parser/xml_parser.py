"""
Main document body parser.

Turns ``w:body`` (and any other block container such as a comment or a table
cell) back into model nodes. Dispatch goes through tag registries; elements
without a registered handler are skipped.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..models.bookmark import BookmarkEnd, BookmarkStart
from ..models.comment import DEFAULT_AUTHOR, DEFAULT_DATE, Comment, CommentEnd, CommentRangeStart
from ..models.paragraph import Delete, Insert, Paragraph
from ..models.run import Break, DeleteText, Run, Tab, Text
from ..models.table import Shading, Table, TableCell, TableCellBorder, TableRow
from ..utils.enums import (
    HeightRule,
    TableAlignmentType,
    TableCellBorderPosition,
    TableLayoutType,
    TextDirectionType,
    VAlignType,
    VMergeType,
    WidthType,
)
from ..utils.xml_utils import NAMESPACES, find, find_val, get_attr, local_name, parse_int, qn
from .formatting_parser import parse_paragraph_property, parse_run_property

logger = logging.getLogger(__name__)

W_NS = NAMESPACES["w"]

_CELL_MARGIN_EDGES = {"top": "top", "left": "left", "start": "left", "bottom": "bottom", "right": "right", "end": "right"}


def _is_w(element: Any) -> bool:
    return isinstance(element.tag, str) and element.tag.startswith(f"{{{W_NS}}}")


class XMLParser:
    """
    Parses WordprocessingML block content into model nodes.

    Args:
        comments: comments parsed from the comments part, by id; comment
            starts in the body are bound to these objects
    """

    def __init__(self, comments: Optional[Dict[int, Comment]] = None):
        self.comments = comments or {}
        self._block_handlers = self._build_block_registry()
        self._inline_handlers = self._build_inline_registry()

    def _build_block_registry(self) -> Dict[str, Callable[[Any], Any]]:
        return {
            "p": self.parse_paragraph,
            "tbl": self.parse_table,
            "bookmarkStart": self._parse_bookmark_start,
            "bookmarkEnd": self._parse_bookmark_end,
        }

    def _build_inline_registry(self) -> Dict[str, Callable[[Any], Any]]:
        return {
            "r": self.parse_run,
            "ins": self._parse_insert,
            "del": self._parse_delete,
            "bookmarkStart": self._parse_bookmark_start,
            "bookmarkEnd": self._parse_bookmark_end,
            "commentRangeStart": self._parse_comment_start,
            "commentRangeEnd": self._parse_comment_end,
        }

    def parse_blocks(self, container: Any, allow_bookmarks: bool = True) -> List[Any]:
        """Block-level children of ``container`` in order."""
        blocks = []
        for node in container:
            if not _is_w(node):
                continue
            name = local_name(node.tag)
            if not allow_bookmarks and name in ("bookmarkStart", "bookmarkEnd"):
                continue
            handler = self._block_handlers.get(name)
            if handler is None:
                continue
            parsed = handler(node)
            if parsed is not None:
                blocks.append(parsed)
        return blocks

    # Paragraph content

    def parse_paragraph(self, p_node: Any) -> Paragraph:
        paragraph = Paragraph()
        paragraph.property = parse_paragraph_property(find(p_node, "w:pPr"))
        for node in p_node:
            if not _is_w(node):
                continue
            handler = self._inline_handlers.get(local_name(node.tag))
            if handler is None:
                continue
            parsed = handler(node)
            if parsed is not None:
                paragraph.add_child(parsed)
        return paragraph

    def parse_run(self, r_node: Any) -> Optional[Run]:
        # Runs carrying a comment reference are re-created from CommentEnd on write.
        if find(r_node, "w:commentReference") is not None:
            return None
        run = Run()
        run.property = parse_run_property(find(r_node, "w:rPr"))
        for node in r_node:
            if not _is_w(node):
                continue
            name = local_name(node.tag)
            if name == "t":
                run.add_child(Text(node.text or ""))
            elif name == "delText":
                run.add_child(DeleteText(node.text or ""))
            elif name == "tab":
                run.add_child(Tab())
            elif name == "br":
                run.add_child(Break(get_attr(node, "w:type")))
        return run

    def _parse_tracked_change(self, node: Any, change: Any) -> Any:
        change.set_author(get_attr(node, "w:author") or DEFAULT_AUTHOR)
        change.set_date(get_attr(node, "w:date") or DEFAULT_DATE)
        for r_node in node.findall(qn("w:r")):
            run = self.parse_run(r_node)
            if run is not None:
                change.add_run(run)
        return change

    def _parse_insert(self, node: Any) -> Insert:
        return self._parse_tracked_change(node, Insert())

    def _parse_delete(self, node: Any) -> Delete:
        return self._parse_tracked_change(node, Delete())

    def _parse_bookmark_start(self, node: Any) -> Optional[BookmarkStart]:
        bookmark_id = parse_int(get_attr(node, "w:id"))
        if bookmark_id is None:
            return None
        return BookmarkStart(bookmark_id, get_attr(node, "w:name") or "")

    def _parse_bookmark_end(self, node: Any) -> Optional[BookmarkEnd]:
        bookmark_id = parse_int(get_attr(node, "w:id"))
        if bookmark_id is None:
            return None
        return BookmarkEnd(bookmark_id)

    def _parse_comment_start(self, node: Any) -> Optional[CommentRangeStart]:
        comment_id = parse_int(get_attr(node, "w:id"))
        if comment_id is None:
            return None
        comment = self.comments.get(comment_id)
        if comment is None:
            logger.debug(f"Comment {comment_id} has a range in the body but no content")
            comment = Comment(comment_id)
        return CommentRangeStart(comment)

    def _parse_comment_end(self, node: Any) -> Optional[CommentEnd]:
        comment_id = parse_int(get_attr(node, "w:id"))
        if comment_id is None:
            return None
        return CommentEnd(comment_id)

    # Tables

    def parse_table(self, tbl_node: Any) -> Table:
        table = Table()
        self._parse_table_property(table, find(tbl_node, "w:tblPr"))
        grid = find(tbl_node, "w:tblGrid")
        if grid is not None:
            table.set_grid([parse_int(get_attr(col, "w:w"), 0) for col in grid.findall(qn("w:gridCol"))])
        for tr_node in tbl_node.findall(qn("w:tr")):
            table.add_row(self._parse_table_row(tr_node))
        return table

    def _parse_table_property(self, table: Table, tbl_pr: Any) -> None:
        if tbl_pr is None:
            return
        prop = table.property
        prop.style_id = find_val(tbl_pr, "w:tblStyle")
        width = find(tbl_pr, "w:tblW")
        if width is not None:
            prop.width = parse_int(get_attr(width, "w:w"))
            prop.width_type = WidthType.parse(get_attr(width, "w:type"))
        prop.alignment = TableAlignmentType.parse(find_val(tbl_pr, "w:jc"))
        indent = find(tbl_pr, "w:tblInd")
        if indent is not None:
            prop.indent = parse_int(get_attr(indent, "w:w"))
        layout = find(tbl_pr, "w:tblLayout")
        if layout is not None:
            prop.layout = TableLayoutType.parse(get_attr(layout, "w:type"))
        margins = find(tbl_pr, "w:tblCellMar")
        if margins is not None:
            parsed = {}
            for node in margins:
                edge = _CELL_MARGIN_EDGES.get(local_name(node.tag))
                value = parse_int(get_attr(node, "w:w"))
                if edge is not None and value is not None:
                    parsed[edge] = value
            prop.cell_margins = parsed or None

    def _parse_table_row(self, tr_node: Any) -> TableRow:
        row = TableRow()
        tr_pr = find(tr_node, "w:trPr")
        if tr_pr is not None:
            row.grid_before = parse_int(find_val(tr_pr, "w:gridBefore"), 0)
            row.grid_after = parse_int(find_val(tr_pr, "w:gridAfter"), 0)
            height = find(tr_pr, "w:trHeight")
            if height is not None:
                row.height = parse_int(get_attr(height, "w:val"))
                row.height_rule = HeightRule.parse(get_attr(height, "w:hRule"))
        for tc_node in tr_node.findall(qn("w:tc")):
            row.add_cell(self._parse_table_cell(tc_node))
        return row

    def _parse_table_cell(self, tc_node: Any) -> TableCell:
        cell = TableCell()
        self._parse_cell_property(cell, find(tc_node, "w:tcPr"))

        nodes = [node for node in tc_node if _is_w(node) and local_name(node.tag) in ("p", "tbl")]
        # Drop the filler paragraph written after a trailing nested table.
        if (len(nodes) >= 2 and local_name(nodes[-1].tag) == "p" and len(nodes[-1]) == 0
                and local_name(nodes[-2].tag) == "tbl"):
            nodes = nodes[:-1]
        for node in nodes:
            if local_name(node.tag) == "p":
                cell.add_child(self.parse_paragraph(node))
            else:
                cell.add_child(self.parse_table(node))
        return cell

    def _parse_cell_property(self, cell: TableCell, tc_pr: Any) -> None:
        if tc_pr is None:
            return
        prop = cell.property
        width = find(tc_pr, "w:tcW")
        if width is not None:
            prop.width = parse_int(get_attr(width, "w:w"))
            prop.width_type = WidthType.parse(get_attr(width, "w:type"))
        prop.grid_span = parse_int(find_val(tc_pr, "w:gridSpan"))
        v_merge = find(tc_pr, "w:vMerge")
        if v_merge is not None:
            # A bare <w:vMerge/> means continue.
            prop.vertical_merge = VMergeType.parse(get_attr(v_merge, "w:val") or "continue")
        borders = find(tc_pr, "w:tcBorders")
        if borders is not None:
            for node in borders:
                if not _is_w(node):
                    continue
                position = TableCellBorderPosition.parse(local_name(node.tag))
                cell.set_border(TableCellBorder(
                    position=position,
                    border_type=get_attr(node, "w:val"),
                    size=parse_int(get_attr(node, "w:sz")),
                    color=get_attr(node, "w:color"),
                    space=parse_int(get_attr(node, "w:space")),
                ))
        shading = find(tc_pr, "w:shd")
        if shading is not None:
            prop.shading = Shading(get_attr(shading, "w:val"), get_attr(shading, "w:color"), get_attr(shading, "w:fill"))
        prop.text_direction = TextDirectionType.parse(find_val(tc_pr, "w:textDirection"))
        prop.vertical_align = VAlignType.parse(find_val(tc_pr, "w:vAlign"))
