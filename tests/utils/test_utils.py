"""
Tests for the utility modules: lenient enums, XML helpers, id allocation
and logging configuration.
"""

import logging
import xml.etree.ElementTree as ET

import pytest

from docx_composer.utils.enums import (
    AlignmentType,
    BorderType,
    BreakType,
    DocGridType,
    LevelSuffixType,
    StyleType,
    TableLayoutType,
    VertAlignType,
    WidthType,
    enum_value,
)
from docx_composer.utils.id_manager import RelationshipIdAllocator, RevisionIdAllocator
from docx_composer.utils.logger import configure_logging, get_logger
from docx_composer.utils.xml_utils import (
    CONTENT_TYPES_NS,
    NAMESPACES,
    format_value,
    make_element,
    on_off_element,
    parse_int,
    parse_on_off,
    qn,
    serialize,
    sub_element,
    xml_text,
)


class TestLenientEnum:
    """Test cases for enum parsing."""

    def test_exact_match(self):
        assert BorderType.parse("double") == BorderType.DOUBLE

    def test_case_insensitive_match(self):
        assert BorderType.parse("DotDash") == BorderType.DOT_DASH

    def test_aliases(self):
        assert AlignmentType.parse("justify") == AlignmentType.BOTH
        assert WidthType.parse("twips") == WidthType.DXA
        assert WidthType.parse("percent") == WidthType.PCT
        assert TableLayoutType.parse("auto") == TableLayoutType.AUTOFIT

    @pytest.mark.parametrize("enum_cls, expected", [
        (BorderType, BorderType.SINGLE),
        (WidthType, WidthType.DXA),
        (BreakType, BreakType.TEXT_WRAPPING),
        (DocGridType, DocGridType.DEFAULT),
        (LevelSuffixType, LevelSuffixType.TAB),
        (StyleType, StyleType.PARAGRAPH),
        (AlignmentType, None),
        (VertAlignType, None),
    ])
    def test_fallbacks(self, enum_cls, expected):
        """Test that unknown strings resolve to the documented fallback."""
        assert enum_cls.parse("no-such-value") is expected

    def test_none_stays_none(self):
        assert BorderType.parse(None) is None

    def test_member_passes_through(self):
        assert WidthType.parse(WidthType.PCT) is WidthType.PCT

    def test_enum_value(self):
        assert enum_value(BorderType.NIL) == "nil"
        assert enum_value(None) is None


class TestXmlUtils:
    """Test cases for XML helpers."""

    def test_qn(self):
        assert qn("w:p") == f"{{{NAMESPACES['w']}}}p"
        assert qn("{urn:x}a") == "{urn:x}a"
        assert qn("plain") == "plain"

    def test_format_value(self):
        assert format_value(True) == "true"
        assert format_value(BorderType.SINGLE) == "single"
        assert format_value(12) == "12"

    def test_on_off_element(self):
        parent = make_element("w:rPr")
        on_off_element(parent, "w:b", True)
        on_off_element(parent, "w:i", False)
        on_off_element(parent, "w:vanish", None)
        assert len(parent) == 2
        assert parent[0].get(qn("w:val")) is None
        assert parent[1].get(qn("w:val")) == "false"

    def test_parse_on_off(self):
        element = ET.Element(qn("w:b"))
        assert parse_on_off(element) is True
        element.set(qn("w:val"), "0")
        assert parse_on_off(element) is False
        assert parse_on_off(None) is None

    def test_parse_int(self):
        assert parse_int("12") == 12
        assert parse_int("12.0") == 12
        assert parse_int("abc", 5) == 5
        assert parse_int(None) is None

    def test_serialize_has_declaration(self):
        data = serialize(make_element("w:document"))
        assert data.startswith(b"<?xml")

    def test_xml_text(self, caplog):
        assert xml_text("tab\there\nok") == "tab\there\nok"
        with caplog.at_level(logging.WARNING):
            assert xml_text("a\x0bb\ufffe") == "ab"
        assert "Removed 2 character(s)" in caplog.text
        assert format_value("x\x07y") == "xy"

    def test_serialize_default_namespace(self):
        root = make_element("{%s}Types" % CONTENT_TYPES_NS)
        sub_element(root, "{%s}Default" % CONTENT_TYPES_NS, {"Extension": "xml"})
        data = serialize(root, default_namespace=CONTENT_TYPES_NS)
        assert b'<Types xmlns="%s"><Default Extension="xml" /></Types>' % CONTENT_TYPES_NS.encode() in data
        # The caller's tree keeps its qualified names.
        assert root.tag == "{%s}Types" % CONTENT_TYPES_NS
        assert "xmlns" not in root.attrib


class TestIdAllocation:
    """Test cases for relationship and revision ids."""

    def test_relationship_ids_per_source(self):
        allocator = RelationshipIdAllocator()
        assert allocator.allocate("", "t1", "a.xml") == "rId1"
        assert allocator.allocate("", "t2", "b.xml") == "rId2"
        assert allocator.allocate("word/document.xml", "t1", "styles.xml") == "rId1"
        assert allocator.lookup("", "b.xml") == "rId2"
        assert allocator.sources() == ["", "word/document.xml"]

    def test_lookup_unknown(self):
        with pytest.raises(KeyError):
            RelationshipIdAllocator().lookup("", "missing.xml")

    def test_revision_ids(self):
        revisions = RevisionIdAllocator()
        assert [revisions.next_id() for _ in range(3)] == [1, 2, 3]


class TestLogger:
    """Test cases for logging configuration."""

    def test_get_logger(self):
        assert get_logger("docx_composer.x").name == "docx_composer.x"
        with pytest.raises(ValueError):
            get_logger("")

    def test_configure_logging_level(self):
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_invalid(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_configure_logging_file(self, temp_dir):
        log_file = temp_dir / "logs" / "composer.log"
        configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("docx_composer.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written" in log_file.read_text()
