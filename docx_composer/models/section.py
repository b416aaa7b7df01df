"""Section setup: page size, margins and document grid (all in twips)."""

from typing import Any, Dict, Optional

from ..utils.enums import DocGridType, PageOrientationType, enum_value
from .base import Properties, compact

A4_WIDTH = 11906
A4_HEIGHT = 16838


class PageSize(Properties):
    FIELDS = ("width", "height", "orient")

    def __init__(self, width: Optional[int] = A4_WIDTH, height: Optional[int] = A4_HEIGHT, orient: Any = None):
        self.width = width
        self.height = height
        self.orient = PageOrientationType.parse(orient)

    def to_dict(self) -> Dict[str, Any]:
        return compact({"width": self.width, "height": self.height, "orient": enum_value(self.orient)})


class PageMargin(Properties):
    FIELDS = ("top", "left", "right", "bottom", "header", "footer", "gutter")

    def __init__(self, top: Optional[int] = 1985, left: Optional[int] = 1701, right: Optional[int] = 1701,
                 bottom: Optional[int] = 1701, header: Optional[int] = 851, footer: Optional[int] = 992,
                 gutter: Optional[int] = 0):
        self.top = top
        self.left = left
        self.right = right
        self.bottom = bottom
        self.header = header
        self.footer = footer
        self.gutter = gutter

    def to_dict(self) -> Dict[str, Any]:
        return compact({name: getattr(self, name) for name in self.FIELDS})


class DocGrid(Properties):
    FIELDS = ("grid_type", "line_pitch", "char_space")

    def __init__(self, grid_type: Any = DocGridType.LINES, line_pitch: Optional[int] = 360,
                 char_space: Optional[int] = None):
        self.grid_type = DocGridType.parse(grid_type) or DocGridType.DEFAULT
        self.line_pitch = line_pitch
        self.char_space = char_space

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "grid_type": enum_value(self.grid_type),
            "line_pitch": self.line_pitch,
            "char_space": self.char_space,
        })


class SectionProperty(Properties):
    """Final section properties of the document body (``w:body/w:sectPr``)."""

    FIELDS = ("page_size", "page_margin", "doc_grid")

    def __init__(self):
        self.page_size = PageSize()
        self.page_margin = PageMargin()
        self.doc_grid = DocGrid()

    def set_page_size(self, width: int, height: int) -> "SectionProperty":
        self.page_size.width = int(width)
        self.page_size.height = int(height)
        return self

    def set_orientation(self, orient: Any) -> "SectionProperty":
        self.page_size.orient = PageOrientationType.parse(orient)
        return self

    def set_page_margin(self, **margins: int) -> "SectionProperty":
        """Update named margins (top, left, right, bottom, header, footer, gutter)."""
        for name, value in margins.items():
            if name not in PageMargin.FIELDS:
                raise ValueError(f"Unknown page margin: {name}")
            setattr(self.page_margin, name, int(value))
        return self

    def set_doc_grid(self, grid_type: Any, line_pitch: Optional[int] = None,
                     char_space: Optional[int] = None) -> "SectionProperty":
        self.doc_grid = DocGrid(grid_type, line_pitch, char_space)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_size": self.page_size.to_dict(),
            "page_margin": self.page_margin.to_dict(),
            "doc_grid": self.doc_grid.to_dict(),
        }
