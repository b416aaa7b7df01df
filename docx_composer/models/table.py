"""
Table models.

A table is rows of cells laid on a column grid. A row occupies
``grid_before + sum(cell spans) + grid_after`` grid columns; the widest row
defines the logical column count the emitted grid must match.
"""

import logging
from typing import Any, Dict, List, Optional

from ..utils.enums import (
    BorderType,
    HeightRule,
    TableAlignmentType,
    TableCellBorderPosition,
    TableLayoutType,
    TextDirectionType,
    VAlignType,
    VMergeType,
    WidthType,
    enum_value,
)
from .base import Models, Properties, compact
from .paragraph import Paragraph

logger = logging.getLogger(__name__)


class TableCellBorder(Properties):
    """One border slot of a cell."""

    FIELDS = ("position", "border_type", "size", "color", "space")

    def __init__(self, position: Any = TableCellBorderPosition.TOP, border_type: Any = BorderType.SINGLE,
                 size: Optional[int] = 2, color: Optional[str] = "000000", space: Optional[int] = 0):
        self.position = TableCellBorderPosition.parse(position)
        self.border_type = BorderType.parse(border_type)
        self.size = size
        self.color = color
        self.space = space

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "position": enum_value(self.position),
            "border_type": enum_value(self.border_type),
            "size": self.size,
            "color": self.color,
            "space": self.space,
        })


class Shading(Properties):
    FIELDS = ("shd_type", "color", "fill")

    def __init__(self, shd_type: Optional[str] = "clear", color: Optional[str] = "auto",
                 fill: Optional[str] = "FFFFFF"):
        self.shd_type = shd_type
        self.color = color
        self.fill = fill

    def to_dict(self) -> Dict[str, Any]:
        return compact({"shd_type": self.shd_type, "color": self.color, "fill": self.fill})


class CellProperty(Properties):
    """Cell properties. ``borders`` maps each position to its own border."""

    FIELDS = (
        "width", "width_type", "grid_span", "vertical_merge", "vertical_align",
        "text_direction", "borders", "shading",
    )

    def __init__(self):
        self.width: Optional[int] = None
        self.width_type: Optional[WidthType] = None
        self.grid_span: Optional[int] = None
        self.vertical_merge: Optional[VMergeType] = None
        self.vertical_align: Optional[VAlignType] = None
        self.text_direction: Optional[TextDirectionType] = None
        self.borders: Optional[Dict[TableCellBorderPosition, TableCellBorder]] = None
        self.shading: Optional[Shading] = None

    def to_dict(self) -> Dict[str, Any]:
        borders = None
        if self.borders:
            # Listed in the fixed slot order so equality ignores insertion order.
            borders = [
                self.borders[position].to_dict()
                for position in TableCellBorderPosition
                if position in self.borders
            ]
        return compact({
            "width": self.width,
            "width_type": enum_value(self.width_type),
            "grid_span": self.grid_span,
            "vertical_merge": enum_value(self.vertical_merge),
            "vertical_align": enum_value(self.vertical_align),
            "text_direction": enum_value(self.text_direction),
            "borders": borders,
            "shading": self.shading.to_dict() if self.shading else None,
        })


class TableCell(Models):
    """A cell holding paragraphs and nested tables."""

    def __init__(self):
        super().__init__()
        self.property = CellProperty()

    def add_child(self, child: Models) -> "TableCell":
        if not isinstance(child, (Paragraph, Table)):
            raise TypeError(f"TableCell cannot contain {child.__class__.__name__}")
        self.children.append(child)
        return self

    def add_paragraph(self, paragraph: Paragraph) -> "TableCell":
        return self.add_child(paragraph)

    def add_table(self, table: "Table") -> "TableCell":
        return self.add_child(table)

    def set_width(self, width: int, width_type: Any = WidthType.DXA) -> "TableCell":
        self.property.width = int(width)
        self.property.width_type = WidthType.parse(width_type)
        return self

    def set_grid_span(self, span: int) -> "TableCell":
        if int(span) < 1:
            raise ValueError("grid span must be at least 1")
        self.property.grid_span = int(span)
        return self

    def set_vertical_merge(self, merge: Any) -> "TableCell":
        self.property.vertical_merge = VMergeType.parse(merge)
        return self

    def set_vertical_align(self, align: Any) -> "TableCell":
        self.property.vertical_align = VAlignType.parse(align)
        return self

    def set_text_direction(self, direction: Any) -> "TableCell":
        self.property.text_direction = TextDirectionType.parse(direction)
        return self

    def set_border(self, border: TableCellBorder) -> "TableCell":
        """Set the border of ``border.position``; other slots are untouched."""
        if not isinstance(border, TableCellBorder):
            raise TypeError("set_border requires a TableCellBorder")
        if self.property.borders is None:
            self.property.borders = {}
        self.property.borders[border.position] = border
        return self

    def clear_border(self, position: Any) -> "TableCell":
        position = TableCellBorderPosition.parse(position)
        if self.property.borders and position in self.property.borders:
            del self.property.borders[position]
            if not self.property.borders:
                self.property.borders = None
        return self

    def set_shading(self, shd_type: str = "clear", color: str = "auto", fill: str = "FFFFFF") -> "TableCell":
        self.property.shading = Shading(shd_type, color, fill)
        return self

    @property
    def grid_span(self) -> int:
        return self.property.grid_span or 1

    def get_text(self) -> str:
        return "\n".join(child.get_text() for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "table_cell",
            "property": self.property.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


class TableRow(Models):
    allowed_children = (TableCell,)

    def __init__(self, cells: Optional[List[TableCell]] = None):
        super().__init__()
        self.height: Optional[int] = None
        self.height_rule: Optional[HeightRule] = None
        self.grid_before: int = 0
        self.grid_after: int = 0
        for cell in cells or []:
            self.add_cell(cell)

    @property
    def cells(self) -> List[TableCell]:
        return self.children

    def add_cell(self, cell: TableCell) -> "TableRow":
        return self.add_child(cell)

    def set_height(self, height: int) -> "TableRow":
        self.height = int(height)
        return self

    def set_height_rule(self, rule: Any) -> "TableRow":
        self.height_rule = HeightRule.parse(rule)
        return self

    def set_grid_before(self, count: int) -> "TableRow":
        if int(count) < 0:
            raise ValueError("grid_before cannot be negative")
        self.grid_before = int(count)
        return self

    def set_grid_after(self, count: int) -> "TableRow":
        if int(count) < 0:
            raise ValueError("grid_after cannot be negative")
        self.grid_after = int(count)
        return self

    def grid_width(self) -> int:
        """Number of grid columns this row occupies."""
        return self.grid_before + sum(cell.grid_span for cell in self.cells) + self.grid_after

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "type": "table_row",
            "height": self.height,
            "height_rule": enum_value(self.height_rule),
            "grid_before": self.grid_before or None,
            "grid_after": self.grid_after or None,
            "cells": [cell.to_dict() for cell in self.cells],
        })


class TableProperty(Properties):
    FIELDS = ("style_id", "width", "width_type", "indent", "cell_margins", "alignment", "layout")

    def __init__(self):
        self.style_id: Optional[str] = None
        self.width: Optional[int] = None
        self.width_type: Optional[WidthType] = None
        self.indent: Optional[int] = None
        # edge name ("top", "left", "bottom", "right") -> width in twips
        self.cell_margins: Optional[Dict[str, int]] = None
        self.alignment: Optional[TableAlignmentType] = None
        self.layout: Optional[TableLayoutType] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "style_id": self.style_id,
            "width": self.width,
            "width_type": enum_value(self.width_type),
            "indent": self.indent,
            "cell_margins": dict(self.cell_margins) if self.cell_margins else None,
            "alignment": enum_value(self.alignment),
            "layout": enum_value(self.layout),
        })


CELL_MARGIN_EDGES = ("top", "left", "bottom", "right")


class Table(Models):
    """Represents a table: rows, a column grid and table-level properties."""

    allowed_children = (TableRow,)

    def __init__(self, rows: Optional[List[TableRow]] = None):
        super().__init__()
        self.grid: List[int] = []
        self.property = TableProperty()
        for row in rows or []:
            self.add_row(row)

    @property
    def rows(self) -> List[TableRow]:
        return self.children

    def add_row(self, row: TableRow) -> "Table":
        return self.add_child(row)

    def set_grid(self, widths: List[int]) -> "Table":
        self.grid = [int(width) for width in widths]
        return self

    def set_style(self, style_id: str) -> "Table":
        self.property.style_id = style_id
        return self

    def set_width(self, width: int, width_type: Any = WidthType.DXA) -> "Table":
        self.property.width = int(width)
        self.property.width_type = WidthType.parse(width_type)
        return self

    def set_indent(self, indent: int) -> "Table":
        self.property.indent = int(indent)
        return self

    def set_cell_margins(self, top: Optional[int] = None, left: Optional[int] = None,
                         bottom: Optional[int] = None, right: Optional[int] = None) -> "Table":
        margins = {"top": top, "left": left, "bottom": bottom, "right": right}
        self.property.cell_margins = {edge: int(value) for edge, value in margins.items() if value is not None} or None
        return self

    def set_alignment(self, alignment: Any) -> "Table":
        self.property.alignment = TableAlignmentType.parse(alignment)
        return self

    def set_layout(self, layout: Any) -> "Table":
        self.property.layout = TableLayoutType.parse(layout)
        return self

    def column_count(self) -> int:
        """Logical column count: the widest row, or the grid length for a table without rows."""
        if not self.rows:
            return len(self.grid)
        return max(row.grid_width() for row in self.rows)

    def get_text(self) -> str:
        return "\n".join(cell.get_text() for row in self.rows for cell in row.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "table",
            "grid": list(self.grid),
            "property": self.property.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
        }

    def __repr__(self) -> str:
        return f"Table(rows={len(self.rows)}, grid={self.grid})"
