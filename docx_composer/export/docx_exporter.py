"""
DOCX exporter - assembles a .docx package from a Document model.

Validates the model, plans every part and relationship up front, renders the
XML parts with the part writers and packs everything into a deterministic ZIP
with ``[Content_Types].xml`` and the relationship parts.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..models.document import Document
from ..styles.style_resolver import PropertyResolver
from ..utils.id_manager import Relationship, RelationshipIdAllocator, RevisionIdAllocator
from ..utils.xml_utils import CONTENT_TYPES_NS, PACKAGE_RELATIONSHIPS_NS, register_namespaces, serialize
from ..validator import DocumentValidator, FeatureFlags
from .comments_writer import CommentsWriter
from .document_writer import DocumentWriter
from .extensions_writer import (
    custom_item_payload,
    write_custom_item_props,
    write_taskpanes,
    write_web_extension,
)
from .numbering_writer import write_numbering
from .props_writer import write_core_properties, write_custom_properties
from .settings_writer import write_settings
from .styles_writer import write_styles

logger = logging.getLogger(__name__)

# Part names
DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"
SETTINGS_PART = "word/settings.xml"
NUMBERING_PART = "word/numbering.xml"
COMMENTS_PART = "word/comments.xml"
COMMENTS_EXTENDED_PART = "word/commentsExtended.xml"
TASKPANES_PART = "word/webextensions/taskpanes.xml"
CORE_PROPERTIES_PART = "docProps/core.xml"
CUSTOM_PROPERTIES_PART = "docProps/custom.xml"
CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_SOURCE = ""

# Relationship types
_OFFICE_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
_MS_REL = "http://schemas.microsoft.com/office/2011/relationships"
REL_OFFICE_DOCUMENT = f"{_OFFICE_REL}/officeDocument"
REL_CORE_PROPERTIES = "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
REL_CUSTOM_PROPERTIES = f"{_OFFICE_REL}/custom-properties"
REL_STYLES = f"{_OFFICE_REL}/styles"
REL_SETTINGS = f"{_OFFICE_REL}/settings"
REL_NUMBERING = f"{_OFFICE_REL}/numbering"
REL_COMMENTS = f"{_OFFICE_REL}/comments"
REL_COMMENTS_EXTENDED = f"{_MS_REL}/commentsExtended"
REL_TASKPANES = f"{_MS_REL}/webextensiontaskpanes"
REL_WEB_EXTENSION = f"{_MS_REL}/webextension"
REL_CUSTOM_XML = f"{_OFFICE_REL}/customXml"
REL_CUSTOM_XML_PROPS = f"{_OFFICE_REL}/customXmlProps"

# Content types
_WML = "application/vnd.openxmlformats-officedocument.wordprocessingml"
CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_DOCUMENT = f"{_WML}.document.main+xml"
CT_STYLES = f"{_WML}.styles+xml"
CT_SETTINGS = f"{_WML}.settings+xml"
CT_NUMBERING = f"{_WML}.numbering+xml"
CT_COMMENTS = f"{_WML}.comments+xml"
CT_COMMENTS_EXTENDED = f"{_WML}.commentsExtended+xml"
CT_CORE_PROPERTIES = "application/vnd.openxmlformats-package.core-properties+xml"
CT_CUSTOM_PROPERTIES = "application/vnd.openxmlformats-officedocument.custom-properties+xml"
CT_TASKPANES = "application/vnd.ms-office.webextensiontaskpanes+xml"
CT_WEB_EXTENSION = "application/vnd.ms-office.webextension+xml"
CT_CUSTOM_XML_PROPS = "application/vnd.openxmlformats-officedocument.customXmlProperties+xml"

DEFAULT_CONTENT_TYPES: List[Tuple[str, str]] = [("rels", CT_RELATIONSHIPS), ("xml", CT_XML)]

# Fixed ZIP entry metadata so repeated builds are byte-identical.
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)
ZIP_EXTERNAL_ATTR = 0o644 << 16


def web_extension_part(index: int) -> str:
    return f"word/webextensions/webextension{index}.xml"


def custom_item_part(index: int) -> str:
    return f"customXml/item{index}.xml"


def custom_item_props_part(index: int) -> str:
    return f"customXml/item{index}Props/core.xml"


class DOCXExporter:
    """
    DOCX exporter - builds package bytes from a Document.

    Args:
        document: Document to export
        resolve_styles: Write fully resolved run/paragraph properties instead of
            the explicitly set ones
        compression: zipfile compression method
        compresslevel: compression level passed to zipfile
    """

    def __init__(
        self,
        document: Document,
        resolve_styles: bool = False,
        compression: int = zipfile.ZIP_DEFLATED,
        compresslevel: Optional[int] = 6,
    ):
        if not isinstance(document, Document):
            raise TypeError("DOCXExporter requires a Document")
        self.document = document
        self.resolve_styles = resolve_styles
        self.compression = compression
        self.compresslevel = compresslevel

        # Parts in emission order (part_name -> content)
        self._parts: Dict[str, bytes] = {}
        # Overrides (part_name -> content_type)
        self._content_types: Dict[str, str] = {}
        self._relations = RelationshipIdAllocator()
        self.features: Optional[FeatureFlags] = None

        register_namespaces()
        logger.debug("DOCXExporter initialized")

    def __enter__(self) -> "DOCXExporter":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Release rendered parts."""
        self._parts.clear()
        self._content_types.clear()

    @property
    def relations(self) -> RelationshipIdAllocator:
        return self._relations

    def export_bytes(self) -> bytes:
        """Validate, render and pack the document; returns the ZIP bytes."""
        self.close()
        self._relations = RelationshipIdAllocator()
        self.features = DocumentValidator(self.document).check()

        self._prepare_relationships(self.features)
        self._prepare_parts(self.features)

        with io.BytesIO() as buffer:
            self._write_package(buffer)
            data = buffer.getvalue()
        logger.info(f"Built package with {len(self._parts)} part(s), {len(data)} bytes")
        return data

    def export(self, output_path: Union[str, Path]) -> Path:
        """Write the package to ``output_path``."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.export_bytes())
        return output_path

    def _prepare_relationships(self, features: FeatureFlags) -> None:
        """Build the relation table; part writers only look ids up afterwards."""
        relations = self._relations
        relations.allocate(PACKAGE_SOURCE, REL_OFFICE_DOCUMENT, DOCUMENT_PART)
        relations.allocate(PACKAGE_SOURCE, REL_CORE_PROPERTIES, CORE_PROPERTIES_PART)
        if features.custom_properties:
            relations.allocate(PACKAGE_SOURCE, REL_CUSTOM_PROPERTIES, CUSTOM_PROPERTIES_PART)

        relations.allocate(DOCUMENT_PART, REL_STYLES, "styles.xml")
        relations.allocate(DOCUMENT_PART, REL_SETTINGS, "settings.xml")
        if features.numbering:
            relations.allocate(DOCUMENT_PART, REL_NUMBERING, "numbering.xml")
        if features.comments:
            relations.allocate(DOCUMENT_PART, REL_COMMENTS, "comments.xml")
            relations.allocate(DOCUMENT_PART, REL_COMMENTS_EXTENDED, "commentsExtended.xml")
        if features.taskpanes:
            relations.allocate(DOCUMENT_PART, REL_TASKPANES, "webextensions/taskpanes.xml")
            for index, _ in enumerate(self.document.web_extensions, start=1):
                relations.allocate(TASKPANES_PART, REL_WEB_EXTENSION, f"webextension{index}.xml")
        if features.custom_items:
            for index, _ in enumerate(self.document.custom_items, start=1):
                relations.allocate(DOCUMENT_PART, REL_CUSTOM_XML, f"../{custom_item_part(index)}")
                relations.allocate(custom_item_part(index), REL_CUSTOM_XML_PROPS, f"item{index}Props/core.xml")

    def _add_part(self, part_name: str, content: bytes, content_type: str) -> None:
        self._parts[part_name] = content
        self._content_types[part_name] = content_type
        logger.debug(f"Rendered part {part_name} ({len(content)} bytes)")

    def _prepare_parts(self, features: FeatureFlags) -> None:
        document = self.document
        resolver = PropertyResolver(document.styles) if self.resolve_styles else None
        body_writer = DocumentWriter(document, RevisionIdAllocator(), resolver)

        self._add_part(CORE_PROPERTIES_PART, write_core_properties(document.doc_props), CT_CORE_PROPERTIES)
        if features.custom_properties:
            self._add_part(CUSTOM_PROPERTIES_PART, write_custom_properties(document.doc_props), CT_CUSTOM_PROPERTIES)

        self._add_part(DOCUMENT_PART, body_writer.write(), CT_DOCUMENT)
        self._add_part(STYLES_PART, write_styles(document.styles), CT_STYLES)
        self._add_part(SETTINGS_PART, write_settings(document.settings), CT_SETTINGS)
        if features.numbering:
            self._add_part(NUMBERING_PART, write_numbering(document), CT_NUMBERING)
        if features.comments:
            comments_writer = CommentsWriter(document.comments(), body_writer)
            self._add_part(COMMENTS_PART, comments_writer.write_comments(), CT_COMMENTS)
            self._add_part(COMMENTS_EXTENDED_PART, comments_writer.write_comments_extended(), CT_COMMENTS_EXTENDED)
        if features.taskpanes:
            rel_ids = [
                self._relations.lookup(TASKPANES_PART, f"webextension{index}.xml")
                for index, _ in enumerate(document.web_extensions, start=1)
            ]
            self._add_part(TASKPANES_PART, write_taskpanes(rel_ids), CT_TASKPANES)
            for index, extension in enumerate(document.web_extensions, start=1):
                self._add_part(web_extension_part(index), write_web_extension(extension), CT_WEB_EXTENSION)
        if features.custom_items:
            for index, item in enumerate(document.custom_items, start=1):
                self._add_part(custom_item_part(index), custom_item_payload(item), CT_XML)
                self._add_part(custom_item_props_part(index), write_custom_item_props(item), CT_CUSTOM_XML_PROPS)

    def _write_package(self, buffer: io.BytesIO) -> None:
        entries: List[Tuple[str, bytes]] = [(CONTENT_TYPES_PART, self._generate_content_types_xml())]
        for source in self._relations.sources():
            entries.append((
                self._get_relationship_path(source),
                self._generate_relationships_xml(self._relations.relationships(source)),
            ))
        entries.extend(self._parts.items())

        with zipfile.ZipFile(buffer, "w", compression=self.compression) as archive:
            for name, content in entries:
                info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
                info.compress_type = self.compression
                info.create_system = 3
                info.external_attr = ZIP_EXTERNAL_ATTR
                archive.writestr(info, content, compresslevel=self.compresslevel)

    def _generate_content_types_xml(self) -> bytes:
        """Generate [Content_Types].xml."""
        root = ET.Element(f"{{{CONTENT_TYPES_NS}}}Types")
        for extension, content_type in DEFAULT_CONTENT_TYPES:
            default = ET.SubElement(root, f"{{{CONTENT_TYPES_NS}}}Default")
            default.set("Extension", extension)
            default.set("ContentType", content_type)
        for part_name, content_type in self._content_types.items():
            override = ET.SubElement(root, f"{{{CONTENT_TYPES_NS}}}Override")
            override.set("PartName", f"/{part_name}")
            override.set("ContentType", content_type)
        ET.indent(root, space="  ")
        return serialize(root, default_namespace=CONTENT_TYPES_NS)

    def _generate_relationships_xml(self, relationships: List[Relationship]) -> bytes:
        """Generate a relationships part."""
        root = ET.Element(f"{{{PACKAGE_RELATIONSHIPS_NS}}}Relationships")
        for relationship in relationships:
            element = ET.SubElement(root, f"{{{PACKAGE_RELATIONSHIPS_NS}}}Relationship")
            element.set("Id", relationship.rel_id)
            element.set("Type", relationship.rel_type)
            element.set("Target", relationship.target)
            if relationship.target_mode == "External":
                element.set("TargetMode", "External")
        ET.indent(root, space="  ")
        return serialize(root, default_namespace=PACKAGE_RELATIONSHIPS_NS)

    def _get_relationship_path(self, part_name: str) -> str:
        """Relationships part of ``part_name``: word/document.xml -> word/_rels/document.xml.rels."""
        if not part_name:
            return "_rels/.rels"
        if "/" in part_name:
            dir_part, file_part = part_name.rsplit("/", 1)
            return f"{dir_part}/_rels/{file_part}.rels"
        return f"_rels/{part_name}.rels"
