"""
Tests for the document model nodes.

This module contains unit tests for node construction, mutators, canonical
dictionaries and equality.
"""

import pytest

from docx_composer import (
    BookmarkStart,
    Comment,
    CommentRangeStart,
    Delete,
    Document,
    Insert,
    Paragraph,
    Run,
    Table,
    TableCell,
    TableCellBorder,
    TableRow,
    WebExtension,
)
from docx_composer.models import Indent, RunProperty
from docx_composer.models.base import Models, Properties
from docx_composer.utils.enums import (
    AlignmentType,
    BreakType,
    SpecialIndentKind,
    TableCellBorderPosition,
    WidthType,
)


class TestRun:
    """Test cases for Run."""

    def test_text_constructor(self):
        """Test that the constructor text becomes a Text child."""
        run = Run("Hello")
        assert run.get_text() == "Hello"
        assert run.to_dict()["children"] == [{"type": "text", "text": "Hello"}]

    def test_mutators_chain(self):
        """Test that formatting setters return the run."""
        run = Run("x").set_bold().set_italic(False).set_size(28).set_color("00FF00")
        assert isinstance(run, Run)
        assert run.property.bold is True
        assert run.property.italic is False
        assert run.property.size == 28
        assert run.property.color == "00FF00"

    def test_tab_and_break(self):
        """Test inline tab and break children."""
        run = Run("a").add_tab().add_text("b").add_break().add_break("page")
        assert run.get_text() == "a\tb\n\n"
        assert run.children[3].break_type == BreakType.TEXT_WRAPPING
        assert run.children[4].break_type == BreakType.PAGE

    def test_unknown_break_type_falls_back(self):
        """Test that an unknown break kind becomes a text-wrapping break."""
        run = Run().add_break("sideways")
        assert run.children[0].break_type == BreakType.TEXT_WRAPPING

    def test_rejects_paragraph_child(self):
        """Test that a run cannot own a paragraph."""
        with pytest.raises(TypeError):
            Run().add_child(Paragraph())


class TestParagraph:
    """Test cases for Paragraph."""

    def test_alignment_alias(self):
        """Test that justified text maps to both."""
        paragraph = Paragraph().set_alignment("justified")
        assert paragraph.property.alignment == AlignmentType.BOTH

    def test_indent(self):
        """Test hanging indentation."""
        paragraph = Paragraph().set_indent(720, "hanging", 360)
        assert paragraph.property.indent == Indent(720, None, SpecialIndentKind.HANGING, 360)

    def test_numbering_reference(self):
        """Test the numbering reference defaults to level 0."""
        paragraph = Paragraph().set_numbering(4)
        assert paragraph.property.numbering.id == 4
        assert paragraph.property.numbering.level == 0

    def test_runs_include_tracked_changes(self):
        """Test that runs() descends into insertions and deletions."""
        paragraph = Paragraph().add_run(Run("a"))
        paragraph.add_insert(Insert(Run("b")))
        paragraph.add_delete(Delete(Run().add_delete_text("c")))
        assert [run.get_text() for run in paragraph.runs()] == ["a", "b", "c"]
        assert paragraph.get_text() == "abc"

    def test_rejects_table_child(self):
        """Test that a paragraph cannot own a table."""
        with pytest.raises(TypeError):
            Paragraph().add_child(Table())

    def test_set_run_property_type_check(self):
        with pytest.raises(TypeError):
            Paragraph().set_run_property({"bold": True})

    def test_tracked_change_defaults(self):
        """Test default author and date of tracked changes."""
        insert = Insert(Run("x"))
        assert insert.author == "unnamed"
        assert insert.date == "1970-01-01T00:00:00Z"
        assert insert.to_dict()["type"] == "insert"


class TestComment:
    """Test cases for Comment and its range markers."""

    def test_comment_children(self):
        comment = Comment(3).add_paragraph(Paragraph().add_run(Run("note")))
        assert len(comment.paragraphs) == 1
        with pytest.raises(TypeError):
            comment.add_child(Run("x"))

    def test_paragraphs_skip_tables(self):
        comment = Comment(3).add_paragraph(Paragraph()).add_child(Table()).add_paragraph(Paragraph())
        assert len(comment.children) == 3
        assert len(comment.paragraphs) == 2
        assert list(comment.iter_children(Table)) == [comment.children[1]]
        assert list(comment.iter_children()) == comment.children

    def test_range_start_exposes_id(self):
        comment = Comment(7)
        start = CommentRangeStart(comment)
        assert start.id == 7
        assert start.to_dict()["comment"]["id"] == 7

    def test_range_start_requires_comment(self):
        with pytest.raises(TypeError):
            CommentRangeStart(7)

    def test_document_comments_in_order(self):
        """Test that Document.comments() follows range start order."""
        first, second = Comment(1), Comment(0)
        paragraph = Paragraph().add_comment_start(first).add_comment_start(second)
        paragraph.add_comment_end(1).add_comment_end(0)
        doc = Document().add_paragraph(paragraph)
        assert [comment.id for comment in doc.comments()] == [1, 0]


class TestTable:
    """Test cases for tables, rows and cells."""

    def test_borders_are_independent(self):
        """Test Scenario C: setting two diagonal borders keeps both."""
        cell = TableCell()
        cell.set_border(TableCellBorder("tr2bl", "double", 4, "FF0000"))
        cell.set_border(TableCellBorder("tl2br", "single", 2, "0000FF"))
        borders = cell.property.borders
        assert set(borders) == {TableCellBorderPosition.TR2BL, TableCellBorderPosition.TL2BR}
        assert borders[TableCellBorderPosition.TR2BL].color == "FF0000"

    def test_border_replaces_same_position(self):
        cell = TableCell()
        cell.set_border(TableCellBorder("top", "single", 2))
        cell.set_border(TableCellBorder("top", "double", 8))
        assert len(cell.property.borders) == 1
        assert cell.property.borders[TableCellBorderPosition.TOP].size == 8

    def test_clear_border(self):
        cell = TableCell().set_border(TableCellBorder("left"))
        cell.clear_border("left")
        assert cell.property.borders is None

    def test_border_dict_order_ignores_insertion_order(self):
        a = TableCell().set_border(TableCellBorder("bottom")).set_border(TableCellBorder("top"))
        b = TableCell().set_border(TableCellBorder("top")).set_border(TableCellBorder("bottom"))
        assert a == b

    def test_unknown_border_type_falls_back_to_single(self):
        border = TableCellBorder("top", "wavy-ish")
        assert border.border_type.value == "single"

    def test_unknown_width_type_falls_back_to_dxa(self):
        cell = TableCell().set_width(1200, "furlongs")
        assert cell.property.width_type == WidthType.DXA

    def test_column_count(self):
        """Test that the widest row defines the column count."""
        table = Table()
        table.add_row(TableRow([TableCell(), TableCell().set_grid_span(2)]))
        table.add_row(TableRow([TableCell()]).set_grid_before(1))
        assert table.column_count() == 3

    def test_column_count_without_rows(self):
        assert Table().set_grid([100, 200]).column_count() == 2

    def test_invalid_grid_span(self):
        with pytest.raises(ValueError):
            TableCell().set_grid_span(0)

    def test_negative_grid_before(self):
        with pytest.raises(ValueError):
            TableRow().set_grid_before(-1)

    def test_nested_table(self):
        """Test Scenario E at model level: a cell owns a nested table."""
        inner = Table().add_row(TableRow([TableCell().add_paragraph(Paragraph().add_run(Run("inner")))]))
        outer = Table().set_grid([4000])
        outer.add_row(TableRow([TableCell().add_table(inner)]))
        assert outer.column_count() == 1
        assert outer.rows[0].cells[0].children[0] is inner


class TestProperties:
    """Test cases for property bag layering."""

    def test_merge_takes_unset_fields_from_fallback(self):
        explicit = RunProperty().set_bold()
        fallback = RunProperty().set_size(30).set_bold(False)
        merged = explicit.merge(fallback)
        assert merged.bold is True
        assert merged.size == 30

    def test_merge_nested_fields(self):
        explicit = RunProperty().set_fonts(ascii="Arial")
        fallback = RunProperty().set_fonts(ascii="Times", east_asia="MS Mincho")
        merged = explicit.merge(fallback)
        assert merged.fonts.ascii == "Arial"
        assert merged.fonts.east_asia == "MS Mincho"

    def test_is_empty(self):
        assert RunProperty().is_empty()
        assert not RunProperty().set_vanish(False).is_empty()

    def test_bases_are_abstract(self):
        """Test that the base classes cannot be instantiated without to_dict."""
        with pytest.raises(TypeError):
            Models()
        with pytest.raises(TypeError):
            Properties()


class TestDocument:
    """Test cases for the Document root."""

    def test_body_children(self):
        doc = Document().add_paragraph(Paragraph()).add_table(Table()).add_bookmark_start(1, "b")
        assert len(doc.children) == 3
        assert isinstance(doc.children[2], BookmarkStart)

    def test_rejects_run_in_body(self):
        with pytest.raises(TypeError):
            Document().add_child(Run("x"))

    def test_iter_paragraphs_descends_into_tables(self):
        table = Table().add_row(TableRow([TableCell().add_paragraph(Paragraph().add_run(Run("cell")))]))
        doc = Document().add_paragraph(Paragraph().add_run(Run("body"))).add_table(table)
        assert [p.get_text() for p in doc.iter_paragraphs()] == ["body", "cell"]

    def test_page_setup(self):
        doc = Document().set_page_size(16838, 11906).set_page_orientation("landscape")
        doc.set_page_margin(top=1000, gutter=10)
        size = doc.section_property.page_size
        assert (size.width, size.height, size.orient.value) == (16838, 11906, "landscape")
        assert doc.section_property.page_margin.top == 1000

    def test_unknown_page_margin(self):
        with pytest.raises(ValueError):
            Document().set_page_margin(middle=10)

    def test_doc_id_braces_stripped(self):
        doc = Document().set_doc_id("{ABC}")
        assert doc.settings.doc_id == "ABC"

    def test_custom_property_replaces_in_place(self):
        doc = Document().add_custom_property("a", "1").add_custom_property("b", "2").add_custom_property("a", "3")
        assert doc.doc_props.custom_properties == [("a", "3"), ("b", "2")]

    def test_custom_property_requires_name(self):
        with pytest.raises(ValueError):
            Document().add_custom_property("", "x")

    def test_get_custom_property(self):
        doc = Document().add_custom_property("Project", 42)
        assert doc.doc_props.get_custom_property("Project") == "42"
        assert doc.doc_props.get_custom_property("Missing") is None

    def test_web_extension_enables_taskpanes(self):
        doc = Document().add_web_extension(WebExtension("{1}", "wa1", "1.0", "en-US", "OMEX"))
        assert doc.taskpanes is True
        assert doc.web_extensions[0].id == "1"

    def test_equality_by_canonical_dict(self, hello_document):
        from tests.conftest import make_hello_document

        assert hello_document == make_hello_document()
        other = make_hello_document()
        other.children[0].children[0].set_bold()
        assert hello_document != other
