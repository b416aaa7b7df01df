"""
Document reader: rebuilds a Document model from a .docx package.

Parts are located through relationships, falling back to the conventional
part names. Only the main document is required; every other part is
optional and a malformed optional part is skipped with a warning.
"""

import logging
from typing import List, Optional

from ..exceptions import PackageError
from ..export.docx_exporter import (
    COMMENTS_EXTENDED_PART,
    COMMENTS_PART,
    CORE_PROPERTIES_PART,
    CUSTOM_PROPERTIES_PART,
    NUMBERING_PART,
    REL_COMMENTS,
    REL_COMMENTS_EXTENDED,
    REL_CORE_PROPERTIES,
    REL_CUSTOM_PROPERTIES,
    REL_CUSTOM_XML,
    REL_CUSTOM_XML_PROPS,
    REL_NUMBERING,
    REL_SETTINGS,
    REL_STYLES,
    REL_TASKPANES,
    SETTINGS_PART,
    STYLES_PART,
    TASKPANES_PART,
)
from ..models.document import Document
from ..utils.xml_utils import find
from .comment_parser import CommentParser
from .extensions_parser import ExtensionsParser
from .numbering_parser import NumberingParser
from .package_reader import PackageReader, PackageSource
from .properties_parser import PropertiesParser
from .section_parser import parse_section
from .settings_parser import SettingsParser
from .style_parser import StyleParser
from .xml_parser import XMLParser

logger = logging.getLogger(__name__)


class DocumentReader:
    """
    Reads a .docx package into a Document.

    Args:
        source: package bytes, a file path, or a binary stream

    Raises:
        PackageError: the input is not a ZIP, or the main document is
            missing or not well-formed
    """

    def __init__(self, source: PackageSource):
        self.source = source

    def read(self) -> Document:
        with PackageReader(self.source) as package:
            return self._read_package(package)

    def _find_part(self, package: PackageReader, source: str, rel_type: str,
                   fallback: Optional[str] = None) -> Optional[str]:
        for candidate in package.related_parts(source, rel_type):
            if package.has_part(candidate):
                return candidate
        if fallback is not None and package.has_part(fallback):
            return fallback
        return None

    def _read_package(self, package: PackageReader) -> Document:
        main_part = package.main_document_part
        document = Document()

        root = package.parse_xml(main_part, required=True)
        body = find(root, "w:body")
        if body is None:
            raise PackageError("Main document has no body", main_part)

        document.set_styles(StyleParser(package).parse_styles(
            self._find_part(package, main_part, REL_STYLES, STYLES_PART)))
        document.settings = SettingsParser(package).parse_settings(
            self._find_part(package, main_part, REL_SETTINGS, SETTINGS_PART))
        abstracts, numberings = NumberingParser(package).parse(
            self._find_part(package, main_part, REL_NUMBERING, NUMBERING_PART))
        document.abstract_numberings.extend(abstracts)
        document.numberings.extend(numberings)

        comment_parser = CommentParser(package)
        comments = comment_parser.parse_comments(
            self._find_part(package, main_part, REL_COMMENTS, COMMENTS_PART))
        comment_parser.parse_comments_extended(
            self._find_part(package, main_part, REL_COMMENTS_EXTENDED, COMMENTS_EXTENDED_PART))

        body_parser = XMLParser(comments)
        for block in body_parser.parse_blocks(body):
            document.add_child(block)
        document.section_property = parse_section(find(body, "w:sectPr"))

        document.doc_props = PropertiesParser(package).parse(
            self._find_part(package, "", REL_CORE_PROPERTIES, CORE_PROPERTIES_PART),
            self._find_part(package, "", REL_CUSTOM_PROPERTIES, CUSTOM_PROPERTIES_PART),
        )

        self._read_extensions(package, main_part, document)
        logger.info(f"Read document with {len(document.children)} block(s) from {main_part}")
        return document

    def _read_extensions(self, package: PackageReader, main_part: str, document: Document) -> None:
        extensions = ExtensionsParser(package)
        # Task panes may hang off the main document or the package root.
        taskpanes_part = (self._find_part(package, main_part, REL_TASKPANES)
                          or self._find_part(package, "", REL_TASKPANES, TASKPANES_PART))
        if taskpanes_part is not None:
            document.taskpanes = True
            document.web_extensions.extend(extensions.parse_taskpanes(taskpanes_part))

        item_parts: List[str] = [part for part in package.related_parts(main_part, REL_CUSTOM_XML)
                                 if package.has_part(part)]
        document.custom_items.extend(extensions.parse_custom_items(item_parts, REL_CUSTOM_XML_PROPS))
