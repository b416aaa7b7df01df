"""Style sheet models: document defaults and named styles."""

from typing import Any, Dict, List, Optional

from ..utils.enums import StyleType, enum_value
from .base import Models, compact
from .paragraph import LineSpacing, ParagraphProperty
from .run import RunFonts, RunProperty


class DocDefaults(Models):
    """Document-wide run and paragraph defaults (``w:docDefaults``)."""

    def __init__(self):
        super().__init__()
        self.run_property = RunProperty()
        self.paragraph_property = ParagraphProperty()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_property": self.run_property.to_dict(),
            "paragraph_property": self.paragraph_property.to_dict(),
        }


class Style(Models):
    """A named style. ``based_on`` names the parent style in the inheritance chain."""

    def __init__(self, style_id: str, style_type: Any = StyleType.PARAGRAPH):
        super().__init__()
        self.style_id = style_id
        self.style_type = StyleType.parse(style_type) or StyleType.PARAGRAPH
        self.name: Optional[str] = None
        self.based_on: Optional[str] = None
        self.run_property = RunProperty()
        self.paragraph_property = ParagraphProperty()

    def set_name(self, name: str) -> "Style":
        self.name = name
        return self

    def set_based_on(self, style_id: Optional[str]) -> "Style":
        self.based_on = style_id
        return self

    def set_run_property(self, run_property: RunProperty) -> "Style":
        self.run_property = run_property
        return self

    def set_paragraph_property(self, paragraph_property: ParagraphProperty) -> "Style":
        self.paragraph_property = paragraph_property
        return self

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "style_id": self.style_id,
            "style_type": enum_value(self.style_type),
            "name": self.name,
            "based_on": self.based_on,
            "run_property": self.run_property.to_dict(),
            "paragraph_property": self.paragraph_property.to_dict(),
        })

    def __repr__(self) -> str:
        return f"Style(style_id={self.style_id!r}, based_on={self.based_on!r})"


class Styles(Models):
    """The style sheet. One instance may be shared by several documents."""

    allowed_children = (Style,)

    def __init__(self):
        super().__init__()
        self.doc_defaults = DocDefaults()

    @property
    def styles(self) -> List[Style]:
        return self.children

    def add_style(self, style: Style) -> "Styles":
        return self.add_child(style)

    def get(self, style_id: Optional[str]) -> Optional[Style]:
        """Return the style with ``style_id``; the last definition wins on duplicates."""
        if style_id is None:
            return None
        found = None
        for style in self.styles:
            if style.style_id == style_id:
                found = style
        return found

    def set_default_size(self, size: int) -> "Styles":
        self.doc_defaults.run_property.set_size(size)
        return self

    def set_default_fonts(self, ascii: Optional[str] = None, hi_ansi: Optional[str] = None,
                          east_asia: Optional[str] = None, cs: Optional[str] = None) -> "Styles":
        self.doc_defaults.run_property.fonts = RunFonts(ascii, hi_ansi, east_asia, cs)
        return self

    def set_default_spacing(self, spacing: int) -> "Styles":
        self.doc_defaults.run_property.set_spacing(spacing)
        return self

    def set_default_line_spacing(self, before: Optional[int] = None, after: Optional[int] = None,
                                 line: Optional[int] = None, rule: Any = None) -> "Styles":
        self.doc_defaults.paragraph_property.line_spacing = LineSpacing(before, after, line, rule)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "doc_defaults": self.doc_defaults.to_dict(),
            "styles": [style.to_dict() for style in self.styles],
        }
