"""
Closed enumerations used across the document model.

Every enumeration accepts free-form strings through ``parse()``. Matching is
exact first, then case-insensitive, then through a small alias table. A string
that matches nothing resolves to the enumeration's fallback listed in
``FALLBACKS`` (``None`` means "leave the property unset") and is never
reported to the caller.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="LenientEnum")


class LenientEnum(str, Enum):
    """String enum with a lenient, fallback-based parser."""

    @classmethod
    def parse(cls: Type[E], value: Any) -> Optional[E]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for member in cls:
            if member.value == key:
                return member
        lowered = key.lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        alias = ALIASES.get(cls, {}).get(lowered)
        if alias is not None:
            return alias
        fallback = FALLBACKS.get(cls)
        logger.debug(f"Unrecognized {cls.__name__} value {value!r}, using {fallback!r}")
        return fallback

    def __str__(self) -> str:
        return self.value


class BorderType(LenientEnum):
    """Line styles for cell and text borders."""

    NIL = "nil"
    NONE = "none"
    SINGLE = "single"
    THICK = "thick"
    DOUBLE = "double"
    DOTTED = "dotted"
    DASHED = "dashed"
    DOT_DASH = "dotDash"
    DOT_DOT_DASH = "dotDotDash"
    TRIPLE = "triple"


class WidthType(LenientEnum):
    """Units of table, cell and margin widths."""

    NIL = "nil"
    PCT = "pct"
    DXA = "dxa"
    AUTO = "auto"


class AlignmentType(LenientEnum):
    """Paragraph justification."""

    LEFT = "left"
    START = "start"
    CENTER = "center"
    RIGHT = "right"
    END = "end"
    BOTH = "both"
    DISTRIBUTE = "distribute"


class TableAlignmentType(LenientEnum):
    """Horizontal placement of a table."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TableLayoutType(LenientEnum):
    """Table layout algorithm."""

    FIXED = "fixed"
    AUTOFIT = "autofit"


class VMergeType(LenientEnum):
    """Vertical merge state of a table cell."""

    RESTART = "restart"
    CONTINUE = "continue"


class VAlignType(LenientEnum):
    """Vertical alignment of cell content."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class TextDirectionType(LenientEnum):
    """Text flow direction inside a cell."""

    LR_TB = "lrTb"
    TB_RL = "tbRl"
    BT_LR = "btLr"
    LR_TB_V = "lrTbV"
    TB_RL_V = "tbRlV"
    TB_LR_V = "tbLrV"


class BreakType(LenientEnum):
    """Run break kinds."""

    PAGE = "page"
    COLUMN = "column"
    TEXT_WRAPPING = "textWrapping"


class LineSpacingType(LenientEnum):
    """Interpretation of the paragraph ``line`` spacing value."""

    AUTO = "auto"
    EXACT = "exact"
    AT_LEAST = "atLeast"


class SpecialIndentKind(LenientEnum):
    """First-line indentation kind."""

    FIRST_LINE = "firstLine"
    HANGING = "hanging"


class PageOrientationType(LenientEnum):
    """Page orientation flag written next to the page size."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class DocGridType(LenientEnum):
    """Document grid mode of a section."""

    DEFAULT = "default"
    LINES = "lines"
    LINES_AND_CHARS = "linesAndChars"
    SNAP_TO_CHARS = "snapToChars"


class HeightRule(LenientEnum):
    """How a row height value is applied."""

    AUTO = "auto"
    AT_LEAST = "atLeast"
    EXACT = "exact"


class LevelSuffixType(LenientEnum):
    """Character written between a list number and the paragraph text."""

    TAB = "tab"
    SPACE = "space"
    NOTHING = "nothing"


class VertAlignType(LenientEnum):
    """Run vertical alignment (superscript / subscript)."""

    BASELINE = "baseline"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


class StyleType(LenientEnum):
    """Style families defined in the styles part."""

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


class TableCellBorderPosition(LenientEnum):
    """Independent border slots of a table cell."""

    TOP = "top"
    LEFT = "left"
    BOTTOM = "bottom"
    RIGHT = "right"
    INSIDE_H = "insideH"
    INSIDE_V = "insideV"
    TL2BR = "tl2br"
    TR2BL = "tr2bl"


FALLBACKS: Dict[Type[LenientEnum], Optional[LenientEnum]] = {
    BorderType: BorderType.SINGLE,
    WidthType: WidthType.DXA,
    AlignmentType: None,
    TableAlignmentType: None,
    TableLayoutType: None,
    VMergeType: None,
    VAlignType: None,
    TextDirectionType: None,
    BreakType: BreakType.TEXT_WRAPPING,
    LineSpacingType: None,
    SpecialIndentKind: None,
    PageOrientationType: None,
    DocGridType: DocGridType.DEFAULT,
    HeightRule: None,
    LevelSuffixType: LevelSuffixType.TAB,
    VertAlignType: None,
    StyleType: StyleType.PARAGRAPH,
    TableCellBorderPosition: TableCellBorderPosition.TOP,
}

ALIASES: Dict[Type[LenientEnum], Dict[str, LenientEnum]] = {
    AlignmentType: {
        "justified": AlignmentType.BOTH,
        "justify": AlignmentType.BOTH,
    },
    WidthType: {
        "twips": WidthType.DXA,
        "percent": WidthType.PCT,
    },
    TableLayoutType: {
        "auto": TableLayoutType.AUTOFIT,
    },
    TableCellBorderPosition: {
        "start": TableCellBorderPosition.LEFT,
        "end": TableCellBorderPosition.RIGHT,
    },
    BreakType: {
        "line": BreakType.TEXT_WRAPPING,
    },
    VertAlignType: {
        "super": VertAlignType.SUPERSCRIPT,
        "sub": VertAlignType.SUBSCRIPT,
    },
}


def enum_value(member: Optional[LenientEnum]) -> Optional[str]:
    """Return the XML/JSON string of an optional enum member."""
    return member.value if member is not None else None
