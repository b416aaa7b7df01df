"""
Style parser for DOCX documents.

Reads ``word/styles.xml``: document defaults and the named styles with their
``basedOn`` links.
"""

import logging
from typing import Any, Optional

from ..models.style import Style, Styles
from ..utils.enums import StyleType
from ..utils.xml_utils import find, find_val, get_attr, qn
from .formatting_parser import parse_paragraph_property, parse_run_property

logger = logging.getLogger(__name__)


class StyleParser:
    """
    Parser for document styles.

    Args:
        package_reader: PackageReader instance for accessing the styles part
    """

    def __init__(self, package_reader):
        self.package_reader = package_reader
        logger.debug("Style parser initialized")

    def parse_styles(self, part_name: Optional[str]) -> Styles:
        styles = Styles()
        if part_name is None:
            logger.debug("Package has no styles part")
            return styles
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return styles

        self._parse_doc_defaults(root, styles)
        for node in root.findall(qn("w:style")):
            style = self.parse_style_element(node)
            if style is not None:
                styles.add_style(style)

        logger.info(f"Parsed {len(styles.styles)} styles")
        return styles

    def _parse_doc_defaults(self, root: Any, styles: Styles) -> None:
        doc_defaults = find(root, "w:docDefaults")
        if doc_defaults is None:
            return
        rpr_default = find(doc_defaults, "w:rPrDefault")
        if rpr_default is not None:
            styles.doc_defaults.run_property = parse_run_property(find(rpr_default, "w:rPr"))
        ppr_default = find(doc_defaults, "w:pPrDefault")
        if ppr_default is not None:
            styles.doc_defaults.paragraph_property = parse_paragraph_property(find(ppr_default, "w:pPr"))

    def parse_style_element(self, node: Any) -> Optional[Style]:
        style_id = get_attr(node, "w:styleId")
        if not style_id:
            logger.warning("Skipping style without a styleId")
            return None
        style = Style(style_id, StyleType.parse(get_attr(node, "w:type")))
        style.name = find_val(node, "w:name")
        style.based_on = find_val(node, "w:basedOn")
        style.paragraph_property = parse_paragraph_property(find(node, "w:pPr"))
        style.run_property = parse_run_property(find(node, "w:rPr"))
        return style
