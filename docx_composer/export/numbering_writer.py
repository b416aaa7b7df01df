"""Numbering definitions part writer (``word/numbering.xml``)."""

import logging
import xml.etree.ElementTree as ET

from ..models.document import Document
from ..models.numbering import Level
from ..utils.enums import LevelSuffixType
from ..utils.xml_utils import make_element, serialize, sub_element, val_element
from .properties_writer import write_indent, write_run_property

logger = logging.getLogger(__name__)


def write_level(parent: ET.Element, level: Level) -> ET.Element:
    lvl = sub_element(parent, "w:lvl", {"w:ilvl": level.level})
    val_element(lvl, "w:start", level.start)
    val_element(lvl, "w:numFmt", level.format)
    if level.suffix is not None and level.suffix != LevelSuffixType.TAB:
        val_element(lvl, "w:suff", level.suffix)
    val_element(lvl, "w:lvlText", level.text)
    if level.alignment is not None:
        val_element(lvl, "w:lvlJc", level.alignment)
    if level.indent is not None and not level.indent.is_empty():
        ppr = sub_element(lvl, "w:pPr")
        write_indent(ppr, level.indent)
    write_run_property(lvl, level.run_property)
    return lvl


def write_numbering(document: Document) -> bytes:
    root = make_element("w:numbering")
    # All abstract definitions precede the instances.
    for abstract in document.abstract_numberings:
        element = sub_element(root, "w:abstractNum", {"w:abstractNumId": abstract.id})
        for level in abstract.levels:
            write_level(element, level)

    for numbering in document.numberings:
        num = sub_element(root, "w:num", {"w:numId": numbering.id})
        val_element(num, "w:abstractNumId", numbering.abstract_num_id)
        for override in numbering.overrides:
            lvl_override = sub_element(num, "w:lvlOverride", {"w:ilvl": override.level})
            if override.start_override is not None:
                val_element(lvl_override, "w:startOverride", override.start_override)
            if override.override_level is not None:
                write_level(lvl_override, override.override_level)

    logger.debug(
        f"Rendered {len(document.abstract_numberings)} abstract numbering(s) "
        f"and {len(document.numberings)} numbering(s)"
    )
    return serialize(root)
