"""
Comment parser for DOCX documents.

Reads ``word/comments.xml`` into Comment models and links replies to their
parents through ``word/commentsExtended.xml``.
"""

import logging
from typing import Dict, Optional

from ..models.comment import DEFAULT_AUTHOR, DEFAULT_DATE, Comment
from ..utils.xml_utils import get_attr, parse_int, qn
from .xml_parser import XMLParser

logger = logging.getLogger(__name__)


class CommentParser:
    """
    Parser for comments and their reply threading.

    Args:
        package_reader: PackageReader of the package being read
    """

    def __init__(self, package_reader):
        self.package_reader = package_reader
        self.comments: Dict[int, Comment] = {}
        # paraId of a comment's paragraphs -> comment id
        self._para_ids: Dict[str, int] = {}

    def parse_comments(self, part_name: Optional[str]) -> Dict[int, Comment]:
        """Comments keyed by id; an absent or malformed part gives an empty map."""
        if part_name is None:
            return self.comments
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return self.comments

        block_parser = XMLParser()
        for node in root.findall(qn("w:comment")):
            comment_id = parse_int(get_attr(node, "w:id"))
            if comment_id is None:
                logger.warning("Skipping comment without an id")
                continue
            comment = Comment(comment_id)
            comment.set_author(get_attr(node, "w:author") or DEFAULT_AUTHOR)
            comment.set_date(get_attr(node, "w:date") or DEFAULT_DATE)
            for block in block_parser.parse_blocks(node, allow_bookmarks=False):
                comment.add_child(block)
            for p_node in node.findall(qn("w:p")):
                para_id = get_attr(p_node, "w14:paraId")
                if para_id:
                    self._para_ids[para_id.upper()] = comment_id
            self.comments[comment_id] = comment

        logger.info(f"Parsed {len(self.comments)} comments")
        return self.comments

    def parse_comments_extended(self, part_name: Optional[str]) -> None:
        """Set ``parent_comment_id`` on replies listed in the extended part."""
        if part_name is None or not self.comments:
            return
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return
        for node in root.findall(qn("w15:commentEx")):
            parent_para_id = get_attr(node, "w15:paraIdParent")
            if not parent_para_id:
                continue
            comment_id = self._para_ids.get((get_attr(node, "w15:paraId") or "").upper())
            parent_id = self._para_ids.get(parent_para_id.upper())
            if comment_id is None or parent_id is None:
                logger.debug(f"Unresolved comment reply link {parent_para_id}")
                continue
            self.comments[comment_id].set_parent_comment_id(parent_id)
