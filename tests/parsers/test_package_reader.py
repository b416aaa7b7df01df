"""
Tests for PackageReader.

Covers opening packages from bytes, paths and streams, locating the main
document, relationship resolution and tolerance of malformed parts.
"""

import io

import pytest

from docx_composer import PackageError
from docx_composer.parser import PackageReader


class TestOpenPackage:
    """Test cases for opening packages."""

    def test_open_bytes(self, sample_package):
        with PackageReader(sample_package) as reader:
            assert reader.main_document_part == "word/document.xml"
            assert "word/document.xml" in reader.list_parts()

    def test_open_path(self, sample_package, temp_dir):
        path = temp_dir / "sample.docx"
        path.write_bytes(sample_package)
        with PackageReader(path) as reader:
            assert reader.has_part("_rels/.rels")
        with PackageReader(str(path)) as reader:
            assert reader.has_part("[Content_Types].xml")

    def test_open_stream(self, sample_package):
        with PackageReader(io.BytesIO(sample_package)) as reader:
            assert reader.read_part("word/document.xml").startswith(b"<?xml")

    def test_not_a_zip(self):
        with pytest.raises(PackageError, match="ZIP"):
            PackageReader(b"this is not a zip file")

    def test_missing_file(self, temp_dir):
        with pytest.raises(PackageError):
            PackageReader(temp_dir / "absent.docx")

    def test_close_releases_zip(self, sample_package):
        reader = PackageReader(sample_package)
        reader.close()
        assert reader.zip_file is None


class TestMainDocument:
    """Test cases for main document lookup."""

    def test_missing_main_document(self, build_zip, sample_zip_content):
        del sample_zip_content["word/document.xml"]
        with pytest.raises(PackageError, match="main document"):
            PackageReader(build_zip(sample_zip_content))

    def test_main_document_from_relationship(self, build_zip, sample_zip_content):
        """Test that a non-default main part name is found through _rels/.rels."""
        content = sample_zip_content.pop("word/document.xml")
        sample_zip_content["word/main.xml"] = content
        sample_zip_content["_rels/.rels"] = sample_zip_content["_rels/.rels"].replace(
            "word/document.xml", "word/main.xml")
        with PackageReader(build_zip(sample_zip_content)) as reader:
            assert reader.main_document_part == "word/main.xml"

    def test_fallback_without_root_relationships(self, build_zip, sample_zip_content):
        del sample_zip_content["_rels/.rels"]
        with PackageReader(build_zip(sample_zip_content)) as reader:
            assert reader.main_document_part == "word/document.xml"

    def test_malformed_required_part(self, build_zip, sample_zip_content):
        sample_zip_content["word/document.xml"] = "<w:document"
        with PackageReader(build_zip(sample_zip_content)) as reader:
            with pytest.raises(PackageError, match="not well-formed"):
                reader.parse_xml("word/document.xml", required=True)


class TestParts:
    """Test cases for part access."""

    def test_content_types(self, sample_package):
        with PackageReader(sample_package) as reader:
            assert reader.content_types["/word/document.xml"].endswith("document.main+xml")
            assert reader.content_types["*.rels"].endswith("relationships+xml")

    def test_missing_optional_part(self, sample_package):
        with PackageReader(sample_package) as reader:
            assert reader.read_part("word/styles.xml") is None
            assert reader.parse_xml("word/styles.xml") is None
            with pytest.raises(PackageError):
                reader.parse_xml("word/styles.xml", required=True)

    def test_malformed_optional_part(self, build_zip, sample_zip_content, caplog):
        sample_zip_content["word/styles.xml"] = "<w:styles><unclosed>"
        with PackageReader(build_zip(sample_zip_content)) as reader:
            with caplog.at_level("WARNING"):
                assert reader.parse_xml("word/styles.xml") is None
        assert "malformed part word/styles.xml" in caplog.text

    def test_get_xml_content_strips_bom(self, build_zip, sample_zip_content):
        sample_zip_content["word/extra.xml"] = "\ufeff<a/>".encode("utf-8")
        with PackageReader(build_zip(sample_zip_content)) as reader:
            assert reader.get_xml_content("word/extra.xml") == "<a/>"

    def test_entities_not_expanded(self, build_zip, sample_zip_content):
        sample_zip_content["word/extra.xml"] = (
            '<!DOCTYPE a [<!ENTITY secret SYSTEM "file:///etc/passwd">]><a>&secret;</a>'
        )
        with PackageReader(build_zip(sample_zip_content)) as reader:
            root = reader.parse_xml("word/extra.xml")
        assert root is not None
        assert "root:" not in (root.xpath("string()") or "")


class TestRelationships:
    """Test cases for relationship resolution."""

    def test_relationship_path(self):
        assert PackageReader.relationship_path("") == "_rels/.rels"
        assert PackageReader.relationship_path("word/document.xml") == "word/_rels/document.xml.rels"
        assert PackageReader.relationship_path("customXml/item1.xml") == "customXml/_rels/item1.xml.rels"

    @pytest.mark.parametrize("source, target, expected", [
        ("", "word/document.xml", "word/document.xml"),
        ("word/document.xml", "styles.xml", "word/styles.xml"),
        ("word/document.xml", "../customXml/item1.xml", "customXml/item1.xml"),
        ("word/document.xml", "/word/numbering.xml", "word/numbering.xml"),
        ("word/webextensions/taskpanes.xml", "webextension1.xml", "word/webextensions/webextension1.xml"),
    ])
    def test_resolve_target(self, source, target, expected):
        assert PackageReader.resolve_target(source, target) == expected

    def test_related_parts(self, rich_document):
        from docx_composer.export.docx_exporter import REL_STYLES

        with PackageReader(rich_document.build()) as reader:
            assert reader.related_parts("word/document.xml", REL_STYLES) == ["word/styles.xml"]
            assert reader.resolve_rel_id("", "rId1") == "word/document.xml"
            assert reader.resolve_rel_id("", "rId99") is None

    def test_external_targets_ignored(self, build_zip, sample_zip_content):
        sample_zip_content["word/_rels/document.xml.rels"] = (
            '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
            '<Relationship Id="rId1" Type="urn:link" Target="https://example.com" TargetMode="External"/>'
            '</Relationships>'
        )
        with PackageReader(build_zip(sample_zip_content)) as reader:
            assert reader.related_parts("word/document.xml", "urn:link") == []
            entry = reader.part_relationships("word/document.xml")["rId1"]
            assert entry["target_mode"] == "External"
