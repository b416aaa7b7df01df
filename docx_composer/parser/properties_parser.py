"""Properties parser for ``docProps/core.xml`` and ``docProps/custom.xml``."""

import logging
from typing import Any, Optional

from ..metadata.doc_props import DocProps
from ..utils.xml_utils import CUSTOM_PROPERTIES_NS, find, local_name

logger = logging.getLogger(__name__)


class PropertiesParser:
    """Parse core timestamps and custom string properties into DocProps."""

    def __init__(self, package_reader: Any) -> None:
        self.package_reader = package_reader

    def parse(self, core_part: Optional[str], custom_part: Optional[str]) -> DocProps:
        doc_props = DocProps()
        self.parse_core_properties(core_part, doc_props)
        self.parse_custom_properties(custom_part, doc_props)
        return doc_props

    def parse_core_properties(self, part_name: Optional[str], doc_props: DocProps) -> None:
        root = self._load_xml(part_name)
        if root is None:
            return
        created = find(root, "dcterms:created")
        if created is not None and (created.text or "").strip():
            doc_props.set_created(created.text.strip())
        modified = find(root, "dcterms:modified")
        if modified is not None and (modified.text or "").strip():
            doc_props.set_updated(modified.text.strip())

    def parse_custom_properties(self, part_name: Optional[str], doc_props: DocProps) -> None:
        root = self._load_xml(part_name)
        if root is None:
            return
        for prop in root.iter(f"{{{CUSTOM_PROPERTIES_NS}}}property"):
            name = prop.get("name")
            if not name:
                continue
            value_node = next((child for child in prop if local_name(child.tag)), None)
            value = "" if value_node is None else (value_node.text or "")
            doc_props.add_custom_property(name, value)
        logger.debug(f"Parsed {len(doc_props.custom_properties)} custom propert(ies)")

    def _load_xml(self, part_name: Optional[str]) -> Any:
        if part_name is None:
            return None
        return self.package_reader.parse_xml(part_name)
