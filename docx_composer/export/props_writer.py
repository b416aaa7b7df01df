"""Document property part writers: ``docProps/core.xml`` and ``docProps/custom.xml``."""

import logging

from ..metadata.doc_props import DocProps, now_w3cdtf
from ..utils.xml_utils import CUSTOM_PROPERTIES_NS, make_element, serialize, sub_element, xml_text

logger = logging.getLogger(__name__)

# Format id shared by all user-defined custom properties.
CUSTOM_PROPERTY_FMTID = "{D5CDD505-2E9C-101B-9397-08002B2CF9AE}"
FIRST_CUSTOM_PID = 2


def write_core_properties(doc_props: DocProps) -> bytes:
    """Core properties; unset timestamps are stamped with the current time."""
    stamp = None
    if doc_props.created is None or doc_props.updated is None:
        stamp = now_w3cdtf()
    root = make_element("cp:coreProperties")
    created = sub_element(root, "dcterms:created", {"xsi:type": "dcterms:W3CDTF"})
    created.text = xml_text(doc_props.created or stamp)
    modified = sub_element(root, "dcterms:modified", {"xsi:type": "dcterms:W3CDTF"})
    modified.text = xml_text(doc_props.updated or stamp)
    sub_element(root, "cp:revision").text = "1"
    return serialize(root)


def write_custom_properties(doc_props: DocProps) -> bytes:
    root = make_element(f"{{{CUSTOM_PROPERTIES_NS}}}Properties")
    for pid, (name, value) in enumerate(doc_props.custom_properties, start=FIRST_CUSTOM_PID):
        prop = sub_element(root, f"{{{CUSTOM_PROPERTIES_NS}}}property")
        prop.set("fmtid", CUSTOM_PROPERTY_FMTID)
        prop.set("pid", str(pid))
        prop.set("name", xml_text(name))
        sub_element(prop, "vt:lpwstr").text = xml_text(value)
    logger.debug(f"Rendered {len(doc_props.custom_properties)} custom propert(ies)")
    return serialize(root, default_namespace=CUSTOM_PROPERTIES_NS)
