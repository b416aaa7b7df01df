"""
Comments part writers: ``word/comments.xml`` and ``word/commentsExtended.xml``.

Every comment with at least one paragraph gets a paragraph id on its last
paragraph (``w14:paraId``). The extended part links a reply to its parent
through those ids.
"""

import logging
from typing import Dict, List, Optional

from ..models.comment import Comment
from ..utils.xml_utils import make_element, qn, serialize, sub_element
from .document_writer import DocumentWriter

logger = logging.getLogger(__name__)


def comment_para_id(comment: Comment) -> str:
    """Deterministic 8-digit hex paragraph id for a comment."""
    return format((comment.id + 1) & 0x7FFFFFFF, "08X")


class CommentsWriter:
    """Renders the comments and extended comments parts for one build."""

    def __init__(self, comments: List[Comment], block_writer: DocumentWriter):
        self.comments = comments
        self.block_writer = block_writer
        self._para_ids: Dict[int, str] = {}

    def write_comments(self) -> bytes:
        root = make_element("w:comments")
        for comment in self.comments:
            element = sub_element(root, "w:comment", {
                "w:id": comment.id,
                "w:author": comment.author,
                "w:date": comment.date,
                "w:initials": "",
            })
            paragraphs = self.block_writer.write_blocks(element, comment.children)
            if paragraphs:
                para_id = comment_para_id(comment)
                paragraphs[-1].set(qn("w14:paraId"), para_id)
                self._para_ids[comment.id] = para_id
        logger.debug(f"Rendered {len(self.comments)} comment(s)")
        return serialize(root)

    def write_comments_extended(self) -> bytes:
        """Render after ``write_comments`` so paragraph ids are known."""
        root = make_element("w15:commentsEx")
        for comment in self.comments:
            para_id = self._para_ids.get(comment.id)
            if para_id is None:
                continue
            attrs = {"w15:paraId": para_id, "w15:done": "0"}
            parent_para_id = self._parent_para_id(comment)
            if parent_para_id is not None:
                attrs["w15:paraIdParent"] = parent_para_id
            sub_element(root, "w15:commentEx", attrs)
        return serialize(root)

    def _parent_para_id(self, comment: Comment) -> Optional[str]:
        if comment.parent_comment_id is None:
            return None
        parent_para_id = self._para_ids.get(comment.parent_comment_id)
        if parent_para_id is None:
            logger.debug(f"Comment {comment.id} replies to {comment.parent_comment_id}, which has no paragraph")
        return parent_para_id
