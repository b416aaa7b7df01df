"""
Serialization of run and paragraph property bags (``w:rPr`` / ``w:pPr``).

Child elements are written in schema order. Unset (``None``) values are
omitted, so an empty bag yields an empty element.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from ..models.paragraph import Indent, LineSpacing, ParagraphProperty
from ..models.run import RunProperty
from ..utils.enums import SpecialIndentKind
from ..utils.xml_utils import on_off_element, sub_element, val_element


def write_run_property(parent: ET.Element, run_property: Optional[RunProperty],
                       always: bool = False) -> Optional[ET.Element]:
    """Append ``w:rPr``; skipped when the bag is empty unless ``always`` is set."""
    if run_property is None or run_property.is_empty():
        if not always:
            return None
        return sub_element(parent, "w:rPr")

    rpr = sub_element(parent, "w:rPr")
    if run_property.style_id is not None:
        val_element(rpr, "w:rStyle", run_property.style_id)
    fonts = run_property.fonts
    if fonts is not None and not fonts.is_empty():
        sub_element(rpr, "w:rFonts", {
            "w:ascii": fonts.ascii,
            "w:hAnsi": fonts.hi_ansi,
            "w:eastAsia": fonts.east_asia,
            "w:cs": fonts.cs,
        })
    on_off_element(rpr, "w:b", run_property.bold)
    on_off_element(rpr, "w:bCs", run_property.bold)
    on_off_element(rpr, "w:i", run_property.italic)
    on_off_element(rpr, "w:iCs", run_property.italic)
    on_off_element(rpr, "w:vanish", run_property.vanish)
    if run_property.color is not None:
        val_element(rpr, "w:color", run_property.color)
    if run_property.spacing is not None:
        val_element(rpr, "w:spacing", run_property.spacing)
    if run_property.size is not None:
        val_element(rpr, "w:sz", run_property.size)
        val_element(rpr, "w:szCs", run_property.size)
    if run_property.highlight is not None:
        val_element(rpr, "w:highlight", run_property.highlight)
    if run_property.underline is not None:
        val_element(rpr, "w:u", run_property.underline)
    border = run_property.text_border
    if border is not None:
        sub_element(rpr, "w:bdr", {
            "w:val": border.border_type,
            "w:sz": border.size,
            "w:space": border.space,
            "w:color": border.color,
        })
    if run_property.vert_align is not None:
        val_element(rpr, "w:vertAlign", run_property.vert_align)
    return rpr


def write_spacing(parent: ET.Element, spacing: Optional[LineSpacing]) -> None:
    if spacing is None or spacing.is_empty():
        return
    sub_element(parent, "w:spacing", {
        "w:before": spacing.before,
        "w:after": spacing.after,
        "w:line": spacing.line,
        "w:lineRule": spacing.rule,
    })


def write_indent(parent: ET.Element, indent: Optional[Indent]) -> None:
    if indent is None or indent.is_empty():
        return
    attrs = {"w:left": indent.left, "w:right": indent.right}
    if indent.special_kind == SpecialIndentKind.HANGING:
        attrs["w:hanging"] = indent.special_size
    elif indent.special_kind == SpecialIndentKind.FIRST_LINE:
        attrs["w:firstLine"] = indent.special_size
    sub_element(parent, "w:ind", attrs)


def write_paragraph_property(parent: ET.Element, paragraph_property: Optional[ParagraphProperty],
                             always: bool = False) -> Optional[ET.Element]:
    """Append ``w:pPr``; skipped when the bag is empty unless ``always`` is set."""
    if paragraph_property is None or paragraph_property.is_empty():
        if not always:
            return None
        return sub_element(parent, "w:pPr")

    ppr = sub_element(parent, "w:pPr")
    if paragraph_property.style_id is not None:
        val_element(ppr, "w:pStyle", paragraph_property.style_id)
    on_off_element(ppr, "w:keepNext", paragraph_property.keep_next)
    on_off_element(ppr, "w:keepLines", paragraph_property.keep_lines)
    on_off_element(ppr, "w:pageBreakBefore", paragraph_property.page_break_before)
    on_off_element(ppr, "w:widowControl", paragraph_property.widow_control)
    numbering = paragraph_property.numbering
    if numbering is not None and numbering.id is not None:
        num_pr = sub_element(ppr, "w:numPr")
        val_element(num_pr, "w:ilvl", numbering.level or 0)
        val_element(num_pr, "w:numId", numbering.id)
    write_spacing(ppr, paragraph_property.line_spacing)
    write_indent(ppr, paragraph_property.indent)
    if paragraph_property.alignment is not None:
        val_element(ppr, "w:jc", paragraph_property.alignment)
    write_run_property(ppr, paragraph_property.run_property)
    return ppr
