"""Parsing of ``w:rPr`` and ``w:pPr`` property elements into property bags."""

import logging
from typing import Any, Optional

from ..models.paragraph import Indent, LineSpacing, NumberingReference, ParagraphProperty
from ..models.run import RunFonts, RunProperty, TextBorder
from ..utils.enums import AlignmentType, BorderType, SpecialIndentKind, VertAlignType
from ..utils.xml_utils import find, find_val, get_attr, parse_int, parse_on_off

logger = logging.getLogger(__name__)


def parse_run_property(rpr: Any) -> RunProperty:
    """Build a RunProperty from ``w:rPr``; a missing element gives an empty bag."""
    prop = RunProperty()
    if rpr is None:
        return prop

    prop.style_id = find_val(rpr, "w:rStyle")
    fonts = find(rpr, "w:rFonts")
    if fonts is not None:
        parsed = RunFonts(
            ascii=get_attr(fonts, "w:ascii"),
            hi_ansi=get_attr(fonts, "w:hAnsi"),
            east_asia=get_attr(fonts, "w:eastAsia"),
            cs=get_attr(fonts, "w:cs"),
        )
        prop.fonts = None if parsed.is_empty() else parsed
    prop.bold = parse_on_off(find(rpr, "w:b"))
    prop.italic = parse_on_off(find(rpr, "w:i"))
    prop.vanish = parse_on_off(find(rpr, "w:vanish"))
    prop.color = find_val(rpr, "w:color")
    prop.spacing = parse_int(find_val(rpr, "w:spacing"))
    prop.size = parse_int(find_val(rpr, "w:sz"))
    prop.highlight = find_val(rpr, "w:highlight")
    prop.underline = find_val(rpr, "w:u")

    border = find(rpr, "w:bdr")
    if border is not None:
        prop.text_border = TextBorder(
            border_type=BorderType.parse(get_attr(border, "w:val")) or BorderType.SINGLE,
            size=parse_int(get_attr(border, "w:sz")),
            space=parse_int(get_attr(border, "w:space")),
            color=get_attr(border, "w:color"),
        )
    prop.vert_align = VertAlignType.parse(find_val(rpr, "w:vertAlign"))
    return prop


def parse_indent(ind: Any) -> Optional[Indent]:
    if ind is None:
        return None
    # start/end are the bidi-aware spellings of left/right.
    left = parse_int(get_attr(ind, "w:left") or get_attr(ind, "w:start"))
    right = parse_int(get_attr(ind, "w:right") or get_attr(ind, "w:end"))
    special_kind = None
    special_size = None
    if get_attr(ind, "w:hanging") is not None:
        special_kind = SpecialIndentKind.HANGING
        special_size = parse_int(get_attr(ind, "w:hanging"))
    elif get_attr(ind, "w:firstLine") is not None:
        special_kind = SpecialIndentKind.FIRST_LINE
        special_size = parse_int(get_attr(ind, "w:firstLine"))
    return Indent(left, right, special_kind, special_size)


def parse_spacing(spacing: Any) -> Optional[LineSpacing]:
    if spacing is None:
        return None
    return LineSpacing(
        before=parse_int(get_attr(spacing, "w:before")),
        after=parse_int(get_attr(spacing, "w:after")),
        line=parse_int(get_attr(spacing, "w:line")),
        rule=get_attr(spacing, "w:lineRule"),
    )


def parse_paragraph_property(ppr: Any) -> ParagraphProperty:
    """Build a ParagraphProperty from ``w:pPr``; a missing element gives an empty bag."""
    prop = ParagraphProperty()
    if ppr is None:
        return prop

    prop.style_id = find_val(ppr, "w:pStyle")
    prop.keep_next = parse_on_off(find(ppr, "w:keepNext"))
    prop.keep_lines = parse_on_off(find(ppr, "w:keepLines"))
    prop.page_break_before = parse_on_off(find(ppr, "w:pageBreakBefore"))
    prop.widow_control = parse_on_off(find(ppr, "w:widowControl"))

    num_pr = find(ppr, "w:numPr")
    if num_pr is not None:
        num_id = parse_int(find_val(num_pr, "w:numId"))
        if num_id is not None:
            prop.numbering = NumberingReference(num_id, parse_int(find_val(num_pr, "w:ilvl"), 0))

    prop.line_spacing = parse_spacing(find(ppr, "w:spacing"))
    prop.indent = parse_indent(find(ppr, "w:ind"))
    prop.alignment = AlignmentType.parse(find_val(ppr, "w:jc"))

    rpr = find(ppr, "w:rPr")
    if rpr is not None:
        run_property = parse_run_property(rpr)
        prop.run_property = None if run_property.is_empty() else run_property
    return prop
