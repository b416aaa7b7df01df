"""
Package extensions: task-pane web extensions and custom XML data items.
"""

from typing import Any, Dict, List, Tuple


class WebExtension:
    """An Office add-in reference shown in a task pane."""

    def __init__(self, id: str, reference_id: str, version: str, store: str, store_type: str):
        self.id = id.strip().strip("{}")
        self.reference_id = reference_id
        self.version = version
        self.store = store
        self.store_type = store_type
        self.properties: List[Tuple[str, str]] = []

    def add_property(self, name: str, value: str) -> "WebExtension":
        self.properties.append((name, str(value)))
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "reference_id": self.reference_id,
            "version": self.version,
            "store": self.store,
            "store_type": self.store_type,
            "properties": [[name, value] for name, value in self.properties],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebExtension):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"WebExtension(id={self.id!r}, reference_id={self.reference_id!r})"


class CustomItem:
    """A custom XML data item. ``xml`` is stored verbatim and must be well-formed."""

    def __init__(self, id: str, xml: str):
        self.id = id.strip().strip("{}")
        self.xml = xml

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "xml": self.xml}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"CustomItem(id={self.id!r})"
