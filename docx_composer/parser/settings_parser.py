"""Settings parser (``word/settings.xml``)."""

import logging
from typing import Optional

from ..metadata.settings import DEFAULT_TAB_STOP, Settings
from ..utils.xml_utils import find, find_val, get_attr, parse_int, qn

logger = logging.getLogger(__name__)


class SettingsParser:
    def __init__(self, package_reader):
        self.package_reader = package_reader

    def parse_settings(self, part_name: Optional[str]) -> Settings:
        settings = Settings()
        if part_name is None:
            return settings
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return settings

        settings.default_tab_stop = parse_int(find_val(root, "w:defaultTabStop"), DEFAULT_TAB_STOP)
        doc_vars = find(root, "w:docVars")
        if doc_vars is not None:
            for node in doc_vars.findall(qn("w:docVar")):
                name = get_attr(node, "w:name")
                if name:
                    settings.add_doc_var(name, get_attr(node, "w:val") or "")
        doc_id = find(root, "w15:docId")
        if doc_id is not None and get_attr(doc_id, "w15:val"):
            settings.set_doc_id(get_attr(doc_id, "w15:val"))
        return settings
