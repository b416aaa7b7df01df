"""
Parser for package extensions: task panes with their web extensions, and
custom XML data items.
"""

import logging
from typing import Any, List, Optional

from lxml import etree as lxml_etree

from ..metadata.extensions import CustomItem, WebExtension
from ..utils.xml_utils import find, get_attr, qn

logger = logging.getLogger(__name__)


class ExtensionsParser:
    """
    Args:
        package_reader: PackageReader of the package being read
    """

    def __init__(self, package_reader):
        self.package_reader = package_reader

    def parse_taskpanes(self, part_name: Optional[str]) -> List[WebExtension]:
        """Web extensions referenced from the task pane part, in pane order."""
        if part_name is None:
            return []
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return []

        extensions = []
        for ref in root.iter(qn("wetp:webextensionref")):
            rel_id = get_attr(ref, "r:id")
            target = self.package_reader.resolve_rel_id(part_name, rel_id) if rel_id else None
            if target is None:
                logger.warning(f"Task pane references unknown relationship {rel_id!r}")
                continue
            extension = self.parse_web_extension(target)
            if extension is not None:
                extensions.append(extension)
        logger.debug(f"Parsed {len(extensions)} web extension(s)")
        return extensions

    def parse_web_extension(self, part_name: str) -> Optional[WebExtension]:
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return None
        reference = find(root, "we:reference")
        extension = WebExtension(
            root.get("id", ""),
            reference_id=reference.get("id", "") if reference is not None else "",
            version=reference.get("version", "") if reference is not None else "",
            store=reference.get("store", "") if reference is not None else "",
            store_type=reference.get("storeType", "") if reference is not None else "",
        )
        properties = find(root, "we:properties")
        if properties is not None:
            for prop in properties.findall(qn("we:property")):
                extension.add_property(prop.get("name", ""), prop.get("value", ""))
        return extension

    def parse_custom_item(self, part_name: str, props_part: Optional[str]) -> Optional[CustomItem]:
        """
        A custom XML item with its payload kept verbatim. The id comes from
        the item's properties part; without one the id is empty.

        Payloads in another encoding are parsed with their declared encoding
        and kept as re-serialized text.
        """
        data = self.package_reader.read_part(part_name)
        if data is None:
            logger.warning(f"Custom XML part {part_name} is missing")
            return None
        item_id = ""
        if props_part is not None:
            props = self.package_reader.parse_xml(props_part)
            item_id = get_attr(props, "ds:itemID", "") if props is not None else ""
        try:
            xml = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            root = self.package_reader.parse_xml(part_name)
            if root is None:
                return None
            xml = lxml_etree.tostring(root, encoding="unicode")
        return CustomItem(item_id, xml)

    def parse_custom_items(self, part_names: List[str], props_rel_type: str) -> List[CustomItem]:
        items = []
        for part_name in part_names:
            props_parts: List[Any] = self.package_reader.related_parts(part_name, props_rel_type)
            item = self.parse_custom_item(part_name, props_parts[0] if props_parts else None)
            if item is not None:
                items.append(item)
        return items
