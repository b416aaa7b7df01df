"""
docx_composer - build and read Office Open XML word-processing documents.

Build a document from model nodes and serialize it with ``Document.build()``;
read a package back with ``load_docx()`` or straight to JSON with
``read_docx()``.
"""

__version__ = "0.1.0"

from .api import load_docx, read_docx
from .exceptions import DocxComposerError, PackageError, ValidationError
from .metadata import CustomItem, DocProps, Settings, WebExtension
from .models import (
    AbstractNumbering,
    BookmarkEnd,
    BookmarkStart,
    Break,
    Comment,
    CommentEnd,
    CommentRangeStart,
    Delete,
    DeleteText,
    Document,
    Insert,
    Level,
    LevelOverride,
    Numbering,
    Paragraph,
    Run,
    Style,
    Styles,
    Tab,
    Table,
    TableCell,
    TableCellBorder,
    TableRow,
    Text,
)
from .utils.enums import (
    AlignmentType,
    BorderType,
    BreakType,
    PageOrientationType,
    SpecialIndentKind,
    TableCellBorderPosition,
    VMergeType,
    WidthType,
)
from .utils.logger import configure_logging, get_logger

__all__ = [
    "__version__",
    # API
    "load_docx",
    "read_docx",
    # Models
    "AbstractNumbering",
    "BookmarkEnd",
    "BookmarkStart",
    "Break",
    "Comment",
    "CommentEnd",
    "CommentRangeStart",
    "Delete",
    "DeleteText",
    "Document",
    "Insert",
    "Level",
    "LevelOverride",
    "Numbering",
    "Paragraph",
    "Run",
    "Style",
    "Styles",
    "Tab",
    "Table",
    "TableCell",
    "TableCellBorder",
    "TableRow",
    "Text",
    # Metadata
    "CustomItem",
    "DocProps",
    "Settings",
    "WebExtension",
    # Enums
    "AlignmentType",
    "BorderType",
    "BreakType",
    "PageOrientationType",
    "SpecialIndentKind",
    "TableCellBorderPosition",
    "VMergeType",
    "WidthType",
    # Exceptions
    "DocxComposerError",
    "PackageError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
]
