"""
Writers for package extensions: task panes, web extensions and the
properties parts of custom XML items.
"""

import logging
from typing import List

from ..metadata.extensions import CustomItem, WebExtension
from ..utils.xml_utils import make_element, serialize, sub_element

logger = logging.getLogger(__name__)

TASKPANE_DOCK_STATE = "right"
TASKPANE_WIDTH = "350"


def write_taskpanes(rel_ids: List[str]) -> bytes:
    """One task pane per web extension relationship id."""
    root = make_element("wetp:taskpanes")
    for row, rel_id in enumerate(rel_ids, start=1):
        pane = sub_element(root, "wetp:taskpane", {
            "dockstate": TASKPANE_DOCK_STATE,
            "visibility": "1",
            "width": TASKPANE_WIDTH,
            "row": row,
        })
        sub_element(pane, "wetp:webextensionref", {"r:id": rel_id})
    return serialize(root)


def write_web_extension(extension: WebExtension) -> bytes:
    root = make_element("we:webextension", {"id": f"{{{extension.id}}}"})
    sub_element(root, "we:reference", {
        "id": extension.reference_id,
        "version": extension.version,
        "store": extension.store,
        "storeType": extension.store_type,
    })
    sub_element(root, "we:alternateReferences")
    properties = sub_element(root, "we:properties")
    for name, value in extension.properties:
        sub_element(properties, "we:property", {"name": name, "value": value})
    sub_element(root, "we:bindings")
    sub_element(root, "we:snapshot")
    return serialize(root)


def write_custom_item_props(item: CustomItem) -> bytes:
    root = make_element("ds:datastoreItem", {"ds:itemID": f"{{{item.id}}}"})
    sub_element(root, "ds:schemaRefs")
    return serialize(root)


def custom_item_payload(item: CustomItem) -> bytes:
    """The item XML exactly as supplied."""
    return item.xml.encode("utf-8")
