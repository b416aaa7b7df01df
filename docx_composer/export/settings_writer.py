"""Settings part writer (``word/settings.xml``)."""

from ..metadata.settings import Settings
from ..utils.xml_utils import make_element, serialize, sub_element, val_element


def write_settings(settings: Settings) -> bytes:
    root = make_element("w:settings")
    val_element(root, "w:defaultTabStop", settings.default_tab_stop)
    if settings.doc_vars:
        doc_vars = sub_element(root, "w:docVars")
        for name, value in settings.doc_vars:
            sub_element(doc_vars, "w:docVar", {"w:name": name, "w:val": value})
    if settings.doc_id is not None:
        sub_element(root, "w15:docId", {"w15:val": f"{{{settings.doc_id}}}"})
    return serialize(root)
