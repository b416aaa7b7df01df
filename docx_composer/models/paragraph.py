"""Paragraph model, paragraph properties and tracked changes."""

from typing import Any, Dict, List, Optional

from ..utils.enums import AlignmentType, LineSpacingType, SpecialIndentKind, enum_value
from .base import Models, Properties, compact
from .bookmark import BookmarkEnd, BookmarkStart
from .comment import DEFAULT_AUTHOR, DEFAULT_DATE, Comment, CommentEnd, CommentRangeStart
from .run import Run, RunProperty


class Indent(Properties):
    """Paragraph indentation in twips. ``special_kind`` selects first-line or hanging."""

    FIELDS = ("left", "right", "special_kind", "special_size")

    def __init__(self, left: Optional[int] = None, right: Optional[int] = None,
                 special_kind: Any = None, special_size: Optional[int] = None):
        self.left = left
        self.right = right
        self.special_kind = SpecialIndentKind.parse(special_kind)
        self.special_size = special_size

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "left": self.left,
            "right": self.right,
            "special_kind": enum_value(self.special_kind),
            "special_size": self.special_size,
        })


class LineSpacing(Properties):
    FIELDS = ("before", "after", "line", "rule")

    def __init__(self, before: Optional[int] = None, after: Optional[int] = None,
                 line: Optional[int] = None, rule: Any = None):
        self.before = before
        self.after = after
        self.line = line
        self.rule = LineSpacingType.parse(rule)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "before": self.before,
            "after": self.after,
            "line": self.line,
            "rule": enum_value(self.rule),
        })


class NumberingReference(Properties):
    """Link from a paragraph to a numbering instance and level."""

    FIELDS = ("id", "level")

    def __init__(self, id: Optional[int] = None, level: Optional[int] = None):
        self.id = id
        self.level = level

    def to_dict(self) -> Dict[str, Any]:
        return compact({"id": self.id, "level": self.level})


class ParagraphProperty(Properties):
    FIELDS = (
        "style_id", "numbering", "alignment", "indent", "line_spacing", "keep_next",
        "keep_lines", "page_break_before", "widow_control", "run_property",
    )

    def __init__(self):
        self.style_id: Optional[str] = None
        self.numbering: Optional[NumberingReference] = None
        self.alignment: Optional[AlignmentType] = None
        self.indent: Optional[Indent] = None
        self.line_spacing: Optional[LineSpacing] = None
        self.keep_next: Optional[bool] = None
        self.keep_lines: Optional[bool] = None
        self.page_break_before: Optional[bool] = None
        self.widow_control: Optional[bool] = None
        # Properties of the paragraph mark itself.
        self.run_property: Optional[RunProperty] = None

    def to_dict(self) -> Dict[str, Any]:
        run_property = self.run_property.to_dict() if self.run_property else None
        return compact({
            "style_id": self.style_id,
            "numbering": self.numbering.to_dict() if self.numbering else None,
            "alignment": enum_value(self.alignment),
            "indent": self.indent.to_dict() if self.indent else None,
            "line_spacing": self.line_spacing.to_dict() if self.line_spacing else None,
            "keep_next": self.keep_next,
            "keep_lines": self.keep_lines,
            "page_break_before": self.page_break_before,
            "widow_control": self.widow_control,
            "run_property": run_property or None,
        })


class _TrackedChange(Models):
    """Shared shape of tracked insertions and deletions."""

    allowed_children = (Run,)
    kind = ""

    def __init__(self, run: Optional[Run] = None):
        super().__init__()
        self.author: str = DEFAULT_AUTHOR
        self.date: str = DEFAULT_DATE
        if run is not None:
            self.add_run(run)

    def add_run(self, run: Run) -> "_TrackedChange":
        return self.add_child(run)

    def set_author(self, author: str) -> "_TrackedChange":
        self.author = author
        return self

    def set_date(self, date: str) -> "_TrackedChange":
        self.date = date
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "author": self.author,
            "date": self.date,
            "children": [child.to_dict() for child in self.children],
        }


class Insert(_TrackedChange):
    kind = "insert"


class Delete(_TrackedChange):
    """Tracked deletion. Removed text belongs in ``DeleteText`` children of its runs."""

    kind = "delete"


class Paragraph(Models):
    """Represents a paragraph: inline children plus paragraph properties."""

    allowed_children = (Run, Insert, Delete, BookmarkStart, BookmarkEnd, CommentRangeStart, CommentEnd)

    def __init__(self):
        super().__init__()
        self.property = ParagraphProperty()

    def add_run(self, run: Run) -> "Paragraph":
        return self.add_child(run)

    def add_insert(self, insert: Insert) -> "Paragraph":
        return self.add_child(insert)

    def add_delete(self, delete: Delete) -> "Paragraph":
        return self.add_child(delete)

    def add_bookmark_start(self, id: int, name: str) -> "Paragraph":
        return self.add_child(BookmarkStart(id, name))

    def add_bookmark_end(self, id: int) -> "Paragraph":
        return self.add_child(BookmarkEnd(id))

    def add_comment_start(self, comment: Comment) -> "Paragraph":
        return self.add_child(CommentRangeStart(comment))

    def add_comment_end(self, id: int) -> "Paragraph":
        return self.add_child(CommentEnd(id))

    def set_style(self, style_id: str) -> "Paragraph":
        self.property.style_id = style_id
        return self

    def set_alignment(self, alignment: Any) -> "Paragraph":
        self.property.alignment = AlignmentType.parse(alignment)
        return self

    def set_indent(self, left: Optional[int] = None, special_kind: Any = None,
                   special_size: Optional[int] = None, right: Optional[int] = None) -> "Paragraph":
        self.property.indent = Indent(left, right, special_kind, special_size)
        return self

    def set_numbering(self, id: int, level: int = 0) -> "Paragraph":
        self.property.numbering = NumberingReference(int(id), int(level))
        return self

    def set_line_spacing(self, before: Optional[int] = None, after: Optional[int] = None,
                         line: Optional[int] = None, rule: Any = None) -> "Paragraph":
        self.property.line_spacing = LineSpacing(before, after, line, rule)
        return self

    def set_keep_next(self, value: bool = True) -> "Paragraph":
        self.property.keep_next = value
        return self

    def set_keep_lines(self, value: bool = True) -> "Paragraph":
        self.property.keep_lines = value
        return self

    def set_page_break_before(self, value: bool = True) -> "Paragraph":
        self.property.page_break_before = value
        return self

    def set_widow_control(self, value: bool = True) -> "Paragraph":
        self.property.widow_control = value
        return self

    def set_run_property(self, run_property: RunProperty) -> "Paragraph":
        if not isinstance(run_property, RunProperty):
            raise TypeError("run_property must be a RunProperty")
        self.property.run_property = run_property
        return self

    def runs(self) -> List[Run]:
        """Direct runs and runs nested in tracked changes, in order."""
        result = []
        for child in self.children:
            if isinstance(child, Run):
                result.append(child)
            elif isinstance(child, _TrackedChange):
                result.extend(child.children)
        return result

    def get_text(self) -> str:
        return "".join(run.get_text() for run in self.runs())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "paragraph",
            "property": self.property.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return f"Paragraph(text={self.get_text()[:40]!r})"
