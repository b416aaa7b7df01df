"""Run model: a span of text content sharing one set of character properties."""

from typing import Any, Dict, Optional

from ..utils.enums import BorderType, BreakType, VertAlignType, enum_value
from .base import Models, Properties, compact


class Text(Models):
    """Literal text; whitespace is always preserved on output."""

    def __init__(self, text: str = ""):
        super().__init__()
        self.text = text

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


class DeleteText(Models):
    """Text removed by a tracked deletion (``w:delText``)."""

    def __init__(self, text: str = ""):
        super().__init__()
        self.text = text

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "delete_text", "text": self.text}


class Tab(Models):
    def to_dict(self) -> Dict[str, Any]:
        return {"type": "tab"}


class Break(Models):
    def __init__(self, break_type: Any = BreakType.TEXT_WRAPPING):
        super().__init__()
        self.break_type = BreakType.parse(break_type) or BreakType.TEXT_WRAPPING

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "break", "break_type": self.break_type.value}


class TextBorder(Properties):
    """Border drawn around a run."""

    FIELDS = ("border_type", "size", "space", "color")

    def __init__(self, border_type: Any = BorderType.SINGLE, size: Optional[int] = 4,
                 space: Optional[int] = 0, color: Optional[str] = "auto"):
        self.border_type = BorderType.parse(border_type)
        self.size = size
        self.space = space
        self.color = color

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "border_type": enum_value(self.border_type),
            "size": self.size,
            "space": self.space,
            "color": self.color,
        })


class RunFonts(Properties):
    FIELDS = ("ascii", "hi_ansi", "east_asia", "cs")

    def __init__(self, ascii: Optional[str] = None, hi_ansi: Optional[str] = None,
                 east_asia: Optional[str] = None, cs: Optional[str] = None):
        self.ascii = ascii
        self.hi_ansi = hi_ansi
        self.east_asia = east_asia
        self.cs = cs

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "ascii": self.ascii,
            "hi_ansi": self.hi_ansi,
            "east_asia": self.east_asia,
            "cs": self.cs,
        })


class RunProperty(Properties):
    """Character properties. ``size`` and ``spacing`` are in half-points / twips."""

    FIELDS = (
        "style_id", "size", "color", "highlight", "vert_align", "bold", "italic",
        "underline", "vanish", "spacing", "text_border", "fonts",
    )

    def __init__(self):
        self.style_id: Optional[str] = None
        self.size: Optional[int] = None
        self.color: Optional[str] = None
        self.highlight: Optional[str] = None
        self.vert_align: Optional[VertAlignType] = None
        self.bold: Optional[bool] = None
        self.italic: Optional[bool] = None
        self.underline: Optional[str] = None
        self.vanish: Optional[bool] = None
        self.spacing: Optional[int] = None
        self.text_border: Optional[TextBorder] = None
        self.fonts: Optional[RunFonts] = None

    def set_style(self, style_id: str) -> "RunProperty":
        self.style_id = style_id
        return self

    def set_size(self, size: int) -> "RunProperty":
        self.size = int(size)
        return self

    def set_color(self, color: str) -> "RunProperty":
        self.color = color
        return self

    def set_highlight(self, color: str) -> "RunProperty":
        self.highlight = color
        return self

    def set_vert_align(self, vert_align: Any) -> "RunProperty":
        self.vert_align = VertAlignType.parse(vert_align)
        return self

    def set_bold(self, value: bool = True) -> "RunProperty":
        self.bold = value
        return self

    def set_italic(self, value: bool = True) -> "RunProperty":
        self.italic = value
        return self

    def set_underline(self, underline: str = "single") -> "RunProperty":
        self.underline = underline
        return self

    def set_vanish(self, value: bool = True) -> "RunProperty":
        self.vanish = value
        return self

    def set_spacing(self, spacing: int) -> "RunProperty":
        self.spacing = int(spacing)
        return self

    def set_text_border(self, border_type: Any = BorderType.SINGLE, size: int = 4,
                        space: int = 0, color: str = "auto") -> "RunProperty":
        self.text_border = TextBorder(border_type, size, space, color)
        return self

    def set_fonts(self, ascii: Optional[str] = None, hi_ansi: Optional[str] = None,
                  east_asia: Optional[str] = None, cs: Optional[str] = None) -> "RunProperty":
        self.fonts = RunFonts(ascii, hi_ansi, east_asia, cs)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "style_id": self.style_id,
            "size": self.size,
            "color": self.color,
            "highlight": self.highlight,
            "vert_align": enum_value(self.vert_align),
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
            "vanish": self.vanish,
            "spacing": self.spacing,
            "text_border": self.text_border.to_dict() if self.text_border else None,
            "fonts": self.fonts.to_dict() if self.fonts else None,
        })


class Run(Models):
    """Represents a run of text with consistent formatting."""

    allowed_children = (Text, DeleteText, Tab, Break)

    def __init__(self, text: Optional[str] = None):
        super().__init__()
        self.property = RunProperty()
        if text is not None:
            self.add_text(text)

    def add_text(self, text: str) -> "Run":
        return self.add_child(Text(text))

    def add_delete_text(self, text: str) -> "Run":
        return self.add_child(DeleteText(text))

    def add_tab(self) -> "Run":
        return self.add_child(Tab())

    def add_break(self, break_type: Any = BreakType.TEXT_WRAPPING) -> "Run":
        return self.add_child(Break(break_type))

    # Formatting shortcuts delegate to the property bag and keep chaining on the run.

    def set_style(self, style_id: str) -> "Run":
        self.property.set_style(style_id)
        return self

    def set_size(self, size: int) -> "Run":
        self.property.set_size(size)
        return self

    def set_color(self, color: str) -> "Run":
        self.property.set_color(color)
        return self

    def set_highlight(self, color: str) -> "Run":
        self.property.set_highlight(color)
        return self

    def set_vert_align(self, vert_align: Any) -> "Run":
        self.property.set_vert_align(vert_align)
        return self

    def set_bold(self, value: bool = True) -> "Run":
        self.property.set_bold(value)
        return self

    def set_italic(self, value: bool = True) -> "Run":
        self.property.set_italic(value)
        return self

    def set_underline(self, underline: str = "single") -> "Run":
        self.property.set_underline(underline)
        return self

    def set_vanish(self, value: bool = True) -> "Run":
        self.property.set_vanish(value)
        return self

    def set_spacing(self, spacing: int) -> "Run":
        self.property.set_spacing(spacing)
        return self

    def set_text_border(self, border_type: Any = BorderType.SINGLE, size: int = 4,
                        space: int = 0, color: str = "auto") -> "Run":
        self.property.set_text_border(border_type, size, space, color)
        return self

    def set_fonts(self, ascii: Optional[str] = None, hi_ansi: Optional[str] = None,
                  east_asia: Optional[str] = None, cs: Optional[str] = None) -> "Run":
        self.property.set_fonts(ascii, hi_ansi, east_asia, cs)
        return self

    def get_text(self) -> str:
        parts = []
        for child in self.children:
            if isinstance(child, (Text, DeleteText)):
                parts.append(child.text)
            elif isinstance(child, Tab):
                parts.append("\t")
            elif isinstance(child, Break):
                parts.append("\n")
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "run",
            "property": self.property.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"Run(text={self.get_text()!r})"
