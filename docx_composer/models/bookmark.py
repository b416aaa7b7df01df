"""Bookmark markers. A start and an end are paired by ``id``."""

from typing import Any, Dict

from .base import Models


class BookmarkStart(Models):
    def __init__(self, id: int, name: str):
        super().__init__()
        self.id = int(id)
        self.name = name

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "bookmark_start", "id": self.id, "name": self.name}

    def __repr__(self) -> str:
        return f"BookmarkStart(id={self.id}, name={self.name!r})"


class BookmarkEnd(Models):
    def __init__(self, id: int):
        super().__init__()
        self.id = int(id)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "bookmark_end", "id": self.id}

    def __repr__(self) -> str:
        return f"BookmarkEnd(id={self.id})"
