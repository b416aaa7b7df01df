"""Styles part writer (``word/styles.xml``)."""

import logging

from ..models.style import Styles
from ..utils.xml_utils import make_element, serialize, sub_element, val_element
from .properties_writer import write_paragraph_property, write_run_property

logger = logging.getLogger(__name__)


def write_styles(styles: Styles) -> bytes:
    root = make_element("w:styles")

    doc_defaults = sub_element(root, "w:docDefaults")
    rpr_default = sub_element(doc_defaults, "w:rPrDefault")
    write_run_property(rpr_default, styles.doc_defaults.run_property, always=True)
    ppr_default = sub_element(doc_defaults, "w:pPrDefault")
    write_paragraph_property(ppr_default, styles.doc_defaults.paragraph_property, always=True)

    for style in styles.styles:
        element = sub_element(root, "w:style", {"w:type": style.style_type, "w:styleId": style.style_id})
        if style.name is not None:
            val_element(element, "w:name", style.name)
        if style.based_on is not None:
            val_element(element, "w:basedOn", style.based_on)
        write_paragraph_property(element, style.paragraph_property)
        write_run_property(element, style.run_property)

    logger.debug(f"Rendered {len(styles.styles)} style(s)")
    return serialize(root)
