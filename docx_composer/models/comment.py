"""
Comment models.

A ``Comment`` holds the annotation content. It enters the body through a
``CommentRangeStart`` placed in a paragraph; a ``CommentEnd`` with the same id
closes the annotated range. Replies point at their parent through
``parent_comment_id``.
"""

from typing import Any, Dict, List, Optional

from .base import Models, compact

DEFAULT_AUTHOR = "unnamed"
DEFAULT_DATE = "1970-01-01T00:00:00Z"


class Comment(Models):
    """Annotation content with author metadata."""

    def __init__(self, id: int):
        super().__init__()
        self.id = int(id)
        self.author: str = DEFAULT_AUTHOR
        self.date: str = DEFAULT_DATE
        self.parent_comment_id: Optional[int] = None

    def add_child(self, child: Models) -> "Comment":
        from .paragraph import Paragraph
        from .table import Table

        if not isinstance(child, (Paragraph, Table)):
            raise TypeError(f"Comment cannot contain {child.__class__.__name__}")
        self.children.append(child)
        return self

    def add_paragraph(self, paragraph: Models) -> "Comment":
        return self.add_child(paragraph)

    def add_table(self, table: Models) -> "Comment":
        return self.add_child(table)

    def set_author(self, author: str) -> "Comment":
        self.author = author
        return self

    def set_date(self, date: str) -> "Comment":
        self.date = date
        return self

    def set_parent_comment_id(self, parent_id: Optional[int]) -> "Comment":
        self.parent_comment_id = None if parent_id is None else int(parent_id)
        return self

    @property
    def paragraphs(self) -> List[Models]:
        from .paragraph import Paragraph

        return list(self.iter_children(Paragraph))

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "id": self.id,
            "author": self.author,
            "date": self.date,
            "parent_comment_id": self.parent_comment_id,
            "children": [child.to_dict() for child in self.children],
        })

    def __repr__(self) -> str:
        return f"Comment(id={self.id}, author={self.author!r})"


class CommentRangeStart(Models):
    """Opens the annotated range of ``comment`` inside a paragraph."""

    def __init__(self, comment: Comment):
        super().__init__()
        if not isinstance(comment, Comment):
            raise TypeError("CommentRangeStart requires a Comment")
        self.comment = comment

    @property
    def id(self) -> int:
        return self.comment.id

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "comment_start", "id": self.id, "comment": self.comment.to_dict()}


class CommentEnd(Models):
    def __init__(self, id: int):
        super().__init__()
        self.id = int(id)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "comment_end", "id": self.id}
