"""
Base classes for document model nodes.

Nodes are plain mutable objects. Containers own an ordered ``children`` list
restricted to ``allowed_children``; property bags carry optional values where
``None`` means "not set here, inherit". Equality of two nodes is equality of
their canonical dictionaries.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

logger = logging.getLogger(__name__)


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) entries from a canonical dictionary."""
    return {key: value for key, value in data.items() if value is not None}


class Models(ABC):
    """Base class for model nodes with an ordered child list."""

    allowed_children: Tuple[Type["Models"], ...] = ()

    def __init__(self):
        self.children: List[Any] = []

    def add_child(self, child: "Models") -> "Models":
        """Append a child; raises TypeError if this node cannot own it."""
        if self.allowed_children and not isinstance(child, self.allowed_children):
            allowed = ", ".join(cls.__name__ for cls in self.allowed_children)
            raise TypeError(
                f"{self.__class__.__name__} cannot contain {child.__class__.__name__} "
                f"(allowed: {allowed})"
            )
        self.children.append(child)
        return self

    def iter_children(self, type_filter: Optional[Type["Models"]] = None) -> Iterator[Any]:
        for child in self.children:
            if type_filter is None or isinstance(child, type_filter):
                yield child

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Canonical dictionary of this node."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(children={len(self.children)})"


class Properties(ABC):
    """Base class for property bags.

    Subclasses list their attribute names in ``FIELDS``. Layering helpers
    (``merge``, ``is_empty``) work over that list only.
    """

    FIELDS: Tuple[str, ...] = ()

    def merge(self, fallback: Optional["Properties"]) -> "Properties":
        """Return a copy where every unset field is taken from ``fallback``."""
        merged = self.__class__()
        for name in self.FIELDS:
            value = getattr(self, name)
            inherited = getattr(fallback, name) if fallback is not None else None
            if value is None:
                value = inherited
            elif isinstance(value, Properties) and isinstance(inherited, Properties):
                value = value.merge(inherited)
            setattr(merged, name, value)
        return merged

    def is_empty(self) -> bool:
        for name in self.FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, Properties) and value.is_empty():
                continue
            return False
        return True

    def copy(self) -> "Properties":
        return self.merge(None)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Canonical dictionary of the property bag."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()!r})"
