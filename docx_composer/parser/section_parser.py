"""Parsing of the body's final ``w:sectPr``."""

from typing import Any

from ..models.section import DocGrid, SectionProperty
from ..utils.enums import PageOrientationType
from ..utils.xml_utils import find, get_attr, parse_int

_MARGIN_ATTRS = ("top", "left", "right", "bottom", "header", "footer", "gutter")


def parse_section(sect_pr: Any) -> SectionProperty:
    """Section properties; attributes absent from the XML keep the model defaults."""
    section = SectionProperty()
    if sect_pr is None:
        return section

    page_size = find(sect_pr, "w:pgSz")
    if page_size is not None:
        width = parse_int(get_attr(page_size, "w:w"))
        height = parse_int(get_attr(page_size, "w:h"))
        if width is not None:
            section.page_size.width = width
        if height is not None:
            section.page_size.height = height
        section.page_size.orient = PageOrientationType.parse(get_attr(page_size, "w:orient"))

    page_margin = find(sect_pr, "w:pgMar")
    if page_margin is not None:
        for name in _MARGIN_ATTRS:
            value = parse_int(get_attr(page_margin, f"w:{name}"))
            if value is not None:
                setattr(section.page_margin, name, value)

    doc_grid = find(sect_pr, "w:docGrid")
    if doc_grid is not None:
        section.doc_grid = DocGrid(
            grid_type=get_attr(doc_grid, "w:type"),
            line_pitch=parse_int(get_attr(doc_grid, "w:linePitch")),
            char_space=parse_int(get_attr(doc_grid, "w:charSpace")),
        )
    return section
