"""Numbering part parser (``word/numbering.xml``)."""

import logging
from typing import Any, List, Optional, Tuple

from ..models.numbering import AbstractNumbering, Level, LevelOverride, Numbering
from ..utils.enums import AlignmentType
from ..utils.xml_utils import find, find_val, get_attr, parse_int, qn
from .formatting_parser import parse_indent, parse_run_property

logger = logging.getLogger(__name__)


class NumberingParser:
    """Reads abstract numbering definitions and numbering instances."""

    def __init__(self, package_reader):
        self.package_reader = package_reader

    def parse(self, part_name: Optional[str]) -> Tuple[List[AbstractNumbering], List[Numbering]]:
        if part_name is None:
            return [], []
        root = self.package_reader.parse_xml(part_name)
        if root is None:
            return [], []

        abstracts = []
        for node in root.findall(qn("w:abstractNum")):
            abstract_id = parse_int(get_attr(node, "w:abstractNumId"))
            if abstract_id is None:
                logger.warning("Skipping abstractNum without an id")
                continue
            abstract = AbstractNumbering(abstract_id)
            for lvl in node.findall(qn("w:lvl")):
                abstract.add_level(self.parse_level(lvl))
            abstracts.append(abstract)

        numberings = []
        for node in root.findall(qn("w:num")):
            num_id = parse_int(get_attr(node, "w:numId"))
            abstract_id = parse_int(find_val(node, "w:abstractNumId"))
            if num_id is None or abstract_id is None:
                logger.warning("Skipping num without numId or abstractNumId")
                continue
            numbering = Numbering(num_id, abstract_id)
            for override_node in node.findall(qn("w:lvlOverride")):
                override = LevelOverride(parse_int(get_attr(override_node, "w:ilvl"), 0))
                start = parse_int(find_val(override_node, "w:startOverride"))
                if start is not None:
                    override.set_start_override(start)
                lvl = find(override_node, "w:lvl")
                if lvl is not None:
                    override.set_level(self.parse_level(lvl))
                numbering.add_override(override)
            numberings.append(numbering)

        logger.debug(f"Parsed {len(abstracts)} abstract numbering(s) and {len(numberings)} numbering(s)")
        return abstracts, numberings

    @staticmethod
    def parse_level(lvl: Any) -> Level:
        level = Level(
            parse_int(get_attr(lvl, "w:ilvl"), 0),
            start=parse_int(find_val(lvl, "w:start"), 1),
            format=find_val(lvl, "w:numFmt") or "decimal",
            text=find_val(lvl, "w:lvlText") or "",
            alignment=AlignmentType.parse(find_val(lvl, "w:lvlJc")),
        )
        suffix = find_val(lvl, "w:suff")
        if suffix is not None:
            level.set_suffix(suffix)
        ppr = find(lvl, "w:pPr")
        if ppr is not None:
            level.indent = parse_indent(find(ppr, "w:ind"))
        rpr = find(lvl, "w:rPr")
        if rpr is not None:
            run_property = parse_run_property(rpr)
            level.run_property = None if run_property.is_empty() else run_property
        return level
