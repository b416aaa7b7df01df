"""Document model nodes."""

from .base import Models, Properties
from .bookmark import BookmarkEnd, BookmarkStart
from .comment import Comment, CommentEnd, CommentRangeStart
from .document import Document
from .numbering import AbstractNumbering, Level, LevelOverride, Numbering
from .paragraph import Delete, Indent, Insert, LineSpacing, NumberingReference, Paragraph, ParagraphProperty
from .run import Break, DeleteText, Run, RunFonts, RunProperty, Tab, Text, TextBorder
from .section import DocGrid, PageMargin, PageSize, SectionProperty
from .style import DocDefaults, Style, Styles
from .table import CellProperty, Shading, Table, TableCell, TableCellBorder, TableProperty, TableRow

__all__ = [
    "AbstractNumbering",
    "BookmarkEnd",
    "BookmarkStart",
    "Break",
    "CellProperty",
    "Comment",
    "CommentEnd",
    "CommentRangeStart",
    "Delete",
    "DeleteText",
    "DocDefaults",
    "DocGrid",
    "Document",
    "Indent",
    "Insert",
    "Level",
    "LevelOverride",
    "LineSpacing",
    "Models",
    "Numbering",
    "NumberingReference",
    "PageMargin",
    "PageSize",
    "Paragraph",
    "ParagraphProperty",
    "Properties",
    "Run",
    "RunFonts",
    "RunProperty",
    "SectionProperty",
    "Shading",
    "Style",
    "Styles",
    "Tab",
    "Table",
    "TableCell",
    "TableCellBorder",
    "TableProperty",
    "TableRow",
    "Text",
    "TextBorder",
]
