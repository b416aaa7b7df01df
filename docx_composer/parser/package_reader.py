"""
Package reader for .docx files.

Opens the ZIP container in memory, indexes content types and relationship
parts, locates the main document and hands out parsed XML for individual
parts.
"""

import io
import logging
import posixpath
import zipfile
import zlib
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from lxml import etree as lxml_etree

from ..exceptions import PackageError
from ..utils.xml_utils import CONTENT_TYPES_NS, PACKAGE_RELATIONSHIPS_NS, make_parser

logger = logging.getLogger(__name__)

DEFAULT_MAIN_DOCUMENT = "word/document.xml"
REL_OFFICE_DOCUMENT = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument"

PackageSource = Union[bytes, bytearray, str, Path, BinaryIO]


class PackageReader:
    """
    Reads and indexes the parts of a .docx package.

    Args:
        source: package bytes, a file path, or a binary stream

    Raises:
        PackageError: the ZIP cannot be opened, or the main document is
            missing or not well-formed
    """

    def __init__(self, source: PackageSource):
        self._zip_file: Optional[zipfile.ZipFile] = None
        self._content_types: Dict[str, str] = {}
        self._relationships: Dict[str, Dict[str, Dict[str, str]]] = {}
        self._parser = make_parser()

        self._open_package(source)
        try:
            self._parse_content_types()
            self._parse_relationships()
            self.main_document_part = self._locate_main_document()
        except PackageError:
            self.close()
            raise

    def __enter__(self) -> "PackageReader":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        if self._zip_file is not None:
            self._zip_file.close()
            self._zip_file = None

    @property
    def zip_file(self) -> Optional[zipfile.ZipFile]:
        return self._zip_file

    @property
    def content_types(self) -> Dict[str, str]:
        """Overrides keyed by part name (``/word/document.xml``) and defaults keyed ``*.ext``."""
        return self._content_types

    @property
    def relationships(self) -> Dict[str, Dict[str, Dict[str, str]]]:
        """Relationship parts keyed by their path, each mapping rel id to target/type/target_mode."""
        return self._relationships

    def _open_package(self, source: PackageSource) -> None:
        try:
            if isinstance(source, (bytes, bytearray)):
                self._zip_file = zipfile.ZipFile(io.BytesIO(bytes(source)), "r")
            elif isinstance(source, (str, Path)):
                self._zip_file = zipfile.ZipFile(Path(source), "r")
            else:
                self._zip_file = zipfile.ZipFile(source, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise PackageError("Cannot open package as ZIP", str(e)) from e
        except OSError as e:
            raise PackageError("Cannot read package", str(e)) from e
        logger.debug(f"Opened package with {len(self._zip_file.namelist())} entries")

    def list_parts(self) -> List[str]:
        return [info.filename for info in self._zip_file.infolist() if not info.is_dir()]

    def has_part(self, part_name: str) -> bool:
        try:
            self._zip_file.getinfo(part_name)
        except KeyError:
            return False
        return True

    def read_part(self, part_name: str) -> Optional[bytes]:
        """Raw bytes of a part, or None when it does not exist."""
        if not self.has_part(part_name):
            return None
        try:
            return self._zip_file.read(part_name)
        except (zipfile.BadZipFile, zlib.error) as e:
            raise PackageError(f"Corrupt ZIP entry {part_name}", str(e)) from e

    def get_xml_content(self, part_name: str) -> Optional[str]:
        data = self.read_part(part_name)
        if data is None:
            return None
        return data.decode("utf-8-sig")

    def parse_xml(self, part_name: str, required: bool = False) -> Optional[Any]:
        """
        Parse a part into an lxml element.

        Missing or malformed optional parts give None (malformed ones are
        logged); for a required part both raise PackageError.
        """
        try:
            data = self.read_part(part_name)
        except PackageError as e:
            if required:
                raise
            logger.warning(f"Skipping unreadable part {part_name}: {e}")
            return None
        if data is None:
            if required:
                raise PackageError("Required part is missing", part_name)
            return None
        try:
            return lxml_etree.fromstring(data, parser=self._parser)
        except lxml_etree.XMLSyntaxError as e:
            if required:
                raise PackageError(f"Part {part_name} is not well-formed XML", str(e)) from e
            logger.warning(f"Skipping malformed part {part_name}: {e}")
            return None

    def _parse_content_types(self) -> None:
        root = self.parse_xml("[Content_Types].xml")
        if root is None:
            logger.warning("Package has no readable [Content_Types].xml")
            return
        for override in root.iter(f"{{{CONTENT_TYPES_NS}}}Override"):
            part_name = override.get("PartName", "")
            content_type = override.get("ContentType", "")
            if part_name and content_type:
                self._content_types[part_name] = content_type
        for default in root.iter(f"{{{CONTENT_TYPES_NS}}}Default"):
            extension = default.get("Extension", "")
            content_type = default.get("ContentType", "")
            if extension and content_type:
                self._content_types[f"*.{extension}"] = content_type
        logger.debug(f"Parsed {len(self._content_types)} content types")

    def _parse_relationships(self) -> None:
        for part_name in self.list_parts():
            if not part_name.endswith(".rels"):
                continue
            root = self.parse_xml(part_name)
            if root is None:
                continue
            self._relationships[part_name] = self._parse_relationship_xml(root)
        logger.debug(f"Parsed {len(self._relationships)} relationship parts")

    @staticmethod
    def _parse_relationship_xml(root: Any) -> Dict[str, Dict[str, str]]:
        relationships = {}
        for rel in root.iter(f"{{{PACKAGE_RELATIONSHIPS_NS}}}Relationship"):
            rel_id = rel.get("Id", "")
            target = rel.get("Target", "")
            if not rel_id or not target:
                continue
            entry = {"target": target, "type": rel.get("Type", "")}
            target_mode = rel.get("TargetMode", "")
            if target_mode:
                entry["target_mode"] = target_mode
            relationships[rel_id] = entry
        return relationships

    @staticmethod
    def relationship_path(part_name: str) -> str:
        """word/document.xml -> word/_rels/document.xml.rels; "" -> _rels/.rels."""
        if not part_name:
            return "_rels/.rels"
        directory, _, file_name = part_name.rpartition("/")
        if directory:
            return f"{directory}/_rels/{file_name}.rels"
        return f"_rels/{file_name}.rels"

    @staticmethod
    def resolve_target(source_part: str, target: str) -> str:
        """Absolute part name of ``target`` relative to ``source_part``."""
        if target.startswith("/"):
            return target.lstrip("/")
        base = posixpath.dirname(source_part)
        return posixpath.normpath(posixpath.join(base, target)).lstrip("/")

    def part_relationships(self, part_name: str) -> Dict[str, Dict[str, str]]:
        return self._relationships.get(self.relationship_path(part_name), {})

    def related_parts(self, part_name: str, rel_type: str) -> List[str]:
        """Internal targets of ``part_name`` with relationship type ``rel_type``, in rels order."""
        parts = []
        for entry in self.part_relationships(part_name).values():
            if entry["type"] != rel_type or entry.get("target_mode") == "External":
                continue
            parts.append(self.resolve_target(part_name, entry["target"]))
        return parts

    def resolve_rel_id(self, part_name: str, rel_id: str) -> Optional[str]:
        entry = self.part_relationships(part_name).get(rel_id)
        if entry is None:
            return None
        return self.resolve_target(part_name, entry["target"])

    def _locate_main_document(self) -> str:
        candidates = self.related_parts("", REL_OFFICE_DOCUMENT)
        for candidate in candidates:
            if self.has_part(candidate):
                return candidate
        if self.has_part(DEFAULT_MAIN_DOCUMENT):
            return DEFAULT_MAIN_DOCUMENT
        raise PackageError("Package has no main document part", DEFAULT_MAIN_DOCUMENT)
