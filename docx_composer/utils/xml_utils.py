"""
XML helpers shared by the part writers and the part parsers.

Writers build trees with ``xml.etree.ElementTree``; parsers read with
``lxml.etree``. Both sides address names in Clark notation produced by
``qn("prefix:local")`` so the same constants serve both libraries.
"""

import copy
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional

from lxml import etree as lxml_etree

logger = logging.getLogger(__name__)

NAMESPACES: Dict[str, str] = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "w14": "http://schemas.microsoft.com/office/word/2010/wordml",
    "w15": "http://schemas.microsoft.com/office/word/2012/wordml",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "dcmitype": "http://purl.org/dc/dcmitype/",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "vt": "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes",
    "we": "http://schemas.microsoft.com/office/webextensions/webextension/2010/11",
    "wetp": "http://schemas.microsoft.com/office/webextensions/taskpanes/2010/11",
    "ds": "http://schemas.openxmlformats.org/officeDocument/2006/customXml",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

PACKAGE_RELATIONSHIPS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
CUSTOM_PROPERTIES_NS = "http://schemas.openxmlformats.org/officeDocument/2006/custom-properties"

_FALSE_VALUES = ("false", "0", "off", "none")

# Characters XML 1.0 cannot carry, escaped or not.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def register_namespaces() -> None:
    """Register the OOXML prefixes with ElementTree so output keeps them."""
    for prefix, uri in NAMESPACES.items():
        if prefix == "xml":
            continue
        ET.register_namespace(prefix, uri)


def qn(name: str) -> str:
    """Turn ``"w:val"`` into ``"{http://...main}val"``; Clark names pass through."""
    if name.startswith("{"):
        return name
    prefix, _, local = name.partition(":")
    if not local:
        return name
    return f"{{{NAMESPACES[prefix]}}}{local}"


def local_name(tag: Any) -> str:
    """Local part of a Clark-notation tag; non-string tags (comments, PIs) give ''."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def make_element(name: str, attrs: Optional[Dict[str, Any]] = None) -> ET.Element:
    """Create an ElementTree element; attribute names use prefixed form and None values are skipped."""
    element = ET.Element(qn(name))
    _apply_attrs(element, attrs)
    return element


def sub_element(parent: ET.Element, name: str, attrs: Optional[Dict[str, Any]] = None) -> ET.Element:
    element = ET.SubElement(parent, qn(name))
    _apply_attrs(element, attrs)
    return element


def _apply_attrs(element: ET.Element, attrs: Optional[Dict[str, Any]]) -> None:
    if not attrs:
        return
    for key, value in attrs.items():
        if value is None:
            continue
        element.set(qn(key), format_value(value))


def format_value(value: Any) -> str:
    """Render attribute values: enums by value, booleans as true/false, text made XML-safe."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    return xml_text(str(value))


def xml_text(text: str) -> str:
    """Drop characters that XML 1.0 cannot represent, logging what was removed."""
    cleaned = _INVALID_XML_CHARS.sub("", text)
    if len(cleaned) != len(text):
        logger.warning(f"Removed {len(text) - len(cleaned)} character(s) not allowed in XML from {cleaned[:40]!r}")
    return cleaned


def val_element(parent: ET.Element, name: str, value: Any) -> ET.Element:
    """Append ``<name w:val="value"/>``."""
    return sub_element(parent, name, {"w:val": value})


def on_off_element(parent: ET.Element, name: str, value: Optional[bool]) -> Optional[ET.Element]:
    """Append an on/off toggle: ``<w:b/>`` for True, ``w:val="false"`` for False, nothing for None."""
    if value is None:
        return None
    if value:
        return sub_element(parent, name)
    return sub_element(parent, name, {"w:val": "false"})


def serialize(element: ET.Element, default_namespace: Optional[str] = None) -> bytes:
    """Serialize a part root with an XML declaration.

    Elements in ``default_namespace`` are written unprefixed under an
    ``xmlns="..."`` declaration on the root; the tree passed in is left as is.
    """
    if default_namespace:
        element = _with_default_namespace(element, default_namespace)
    return ET.tostring(element, encoding="UTF-8", xml_declaration=True)


def _with_default_namespace(element: ET.Element, namespace: str) -> ET.Element:
    prefix = f"{{{namespace}}}"
    root = copy.deepcopy(element)
    for node in root.iter():
        if isinstance(node.tag, str) and node.tag.startswith(prefix):
            node.tag = node.tag[len(prefix):]
    root.set("xmlns", namespace)
    return root


# Reading side (lxml elements, but only the ElementTree-compatible API is used)

def make_parser() -> lxml_etree.XMLParser:
    """XML parser that never resolves entities or touches the network."""
    return lxml_etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def get_attr(element: Any, name: str, default: Optional[str] = None) -> Optional[str]:
    if element is None:
        return default
    return element.get(qn(name), default)


def parse_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """Parse an integer attribute; missing or malformed values give ``default``."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        try:
            return int(float(value))
        except ValueError:
            logger.debug(f"Ignoring non-numeric value {value!r}")
            return default


def parse_on_off(element: Any) -> Optional[bool]:
    """Read an on/off toggle element: absent gives None, no ``w:val`` gives True."""
    if element is None:
        return None
    value = element.get(qn("w:val"))
    if value is None:
        return True
    return value.strip().lower() not in _FALSE_VALUES


def find(element: Any, name: str) -> Any:
    if element is None:
        return None
    return element.find(qn(name))


def find_val(element: Any, name: str) -> Optional[str]:
    """``w:val`` of the named child, or None."""
    return get_attr(find(element, name), "w:val")
