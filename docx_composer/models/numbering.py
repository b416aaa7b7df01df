"""
Numbering models.

``AbstractNumbering`` defines list levels. A ``Numbering`` instance is what
paragraphs reference; it points at one abstract definition and may override
the start value or the whole definition of individual levels.
"""

from typing import Any, Dict, List, Optional

from ..utils.enums import AlignmentType, LevelSuffixType, enum_value
from .base import Models, compact
from .paragraph import Indent
from .run import RunProperty


class Level(Models):
    """One list level: counter start, number format, level text and layout."""

    def __init__(self, level: int, start: int = 1, format: str = "decimal", text: str = "%1.",
                 alignment: Any = AlignmentType.LEFT):
        super().__init__()
        self.level = int(level)
        self.start = int(start)
        self.format = format
        self.text = text
        self.alignment = AlignmentType.parse(alignment)
        self.suffix: LevelSuffixType = LevelSuffixType.TAB
        self.indent: Optional[Indent] = None
        self.run_property: Optional[RunProperty] = None

    def set_suffix(self, suffix: Any) -> "Level":
        self.suffix = LevelSuffixType.parse(suffix) or LevelSuffixType.TAB
        return self

    def set_indent(self, left: Optional[int] = None, special_kind: Any = None,
                   special_size: Optional[int] = None, right: Optional[int] = None) -> "Level":
        self.indent = Indent(left, right, special_kind, special_size)
        return self

    def set_run_property(self, run_property: RunProperty) -> "Level":
        self.run_property = run_property
        return self

    def to_dict(self) -> Dict[str, Any]:
        run_property = self.run_property.to_dict() if self.run_property else None
        return compact({
            "level": self.level,
            "start": self.start,
            "format": self.format,
            "text": self.text,
            "alignment": enum_value(self.alignment),
            "suffix": enum_value(self.suffix),
            "indent": self.indent.to_dict() if self.indent else None,
            "run_property": run_property or None,
        })


class AbstractNumbering(Models):
    allowed_children = (Level,)

    def __init__(self, id: int):
        super().__init__()
        self.id = int(id)

    @property
    def levels(self) -> List[Level]:
        return self.children

    def add_level(self, level: Level) -> "AbstractNumbering":
        return self.add_child(level)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "levels": [level.to_dict() for level in self.levels]}


class LevelOverride(Models):
    """Per-level override: a new start value, a replacement Level, or both."""

    def __init__(self, level: int):
        super().__init__()
        self.level = int(level)
        self.start_override: Optional[int] = None
        self.override_level: Optional[Level] = None

    def set_start_override(self, start: int) -> "LevelOverride":
        self.start_override = int(start)
        return self

    def set_level(self, level: Level) -> "LevelOverride":
        if not isinstance(level, Level):
            raise TypeError("override level must be a Level")
        self.override_level = level
        return self

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "level": self.level,
            "start_override": self.start_override,
            "override_level": self.override_level.to_dict() if self.override_level else None,
        })


class Numbering(Models):
    allowed_children = (LevelOverride,)

    def __init__(self, id: int, abstract_num_id: int):
        super().__init__()
        self.id = int(id)
        self.abstract_num_id = int(abstract_num_id)

    @property
    def overrides(self) -> List[LevelOverride]:
        return self.children

    def add_override(self, override: LevelOverride) -> "Numbering":
        return self.add_child(override)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "abstract_num_id": self.abstract_num_id,
            "overrides": [override.to_dict() for override in self.overrides],
        }
