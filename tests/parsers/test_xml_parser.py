"""
Tests for XMLParser: body, paragraph, run and table parsing.
"""

from lxml import etree

from docx_composer import Comment, CommentRangeStart, Delete, Insert, Paragraph, Table
from docx_composer.models.bookmark import BookmarkEnd, BookmarkStart
from docx_composer.models.comment import CommentEnd
from docx_composer.models.run import Break, DeleteText, Tab, Text
from docx_composer.parser import XMLParser
from docx_composer.utils.enums import BreakType, TableCellBorderPosition, VMergeType

from tests.conftest import W_NS


def body(inner: str):
    return etree.fromstring(
        f'<w:body xmlns:w="{W_NS}" xmlns:x="urn:unknown">{inner}</w:body>'
    )


class TestParagraphs:
    """Test cases for paragraph and run content."""

    def test_text_tab_and_breaks(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:p><w:r><w:t>a</w:t><w:tab/><w:t>b</w:t><w:br/><w:br w:type="page"/></w:r></w:p>'
        ))
        run = blocks[0].children[0]
        assert [type(child) for child in run.children] == [Text, Tab, Text, Break, Break]
        assert run.children[3].break_type == BreakType.TEXT_WRAPPING
        assert run.children[4].break_type == BreakType.PAGE

    def test_run_properties(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:p><w:pPr><w:pStyle w:val="Title"/><w:jc w:val="center"/></w:pPr>'
            '<w:r><w:rPr><w:b/><w:sz w:val="28"/><w:color w:val="FF0000"/></w:rPr><w:t>x</w:t></w:r></w:p>'
        ))
        paragraph = blocks[0]
        assert paragraph.property.style_id == "Title"
        run = paragraph.children[0]
        assert run.property.bold is True
        assert run.property.size == 28
        assert run.property.color == "FF0000"

    def test_unknown_elements_ignored(self):
        """Test that unregistered and foreign elements are skipped."""
        blocks = XMLParser().parse_blocks(body(
            '<w:sdt/><x:thing/>'
            '<w:p><w:proofErr w:type="spellStart"/><w:r><w:t>kept</w:t><w:lastRenderedPageBreak/></w:r></w:p>'
        ))
        assert len(blocks) == 1
        assert blocks[0].get_text() == "kept"

    def test_comment_reference_run_skipped(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:p><w:r><w:t>x</w:t></w:r><w:r><w:commentReference w:id="0"/></w:r></w:p>'
        ))
        assert len(blocks[0].children) == 1

    def test_tracked_changes(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:p><w:ins w:id="1" w:author="Ann" w:date="2024-01-01T00:00:00Z"><w:r><w:t>new</w:t></w:r></w:ins>'
            '<w:del w:id="2"><w:r><w:delText>old</w:delText></w:r></w:del></w:p>'
        ))
        insert, delete = blocks[0].children
        assert isinstance(insert, Insert)
        assert insert.author == "Ann"
        assert insert.date == "2024-01-01T00:00:00Z"
        assert isinstance(delete, Delete)
        assert delete.author == "unnamed"
        assert delete.date == "1970-01-01T00:00:00Z"
        assert isinstance(delete.children[0].children[0], DeleteText)

    def test_bookmarks(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:bookmarkStart w:id="3" w:name="top"/>'
            '<w:p><w:bookmarkStart w:id="4" w:name="inner"/><w:bookmarkEnd w:id="4"/></w:p>'
            '<w:bookmarkEnd w:id="3"/>'
        ))
        assert isinstance(blocks[0], BookmarkStart)
        assert blocks[0].name == "top"
        assert isinstance(blocks[2], BookmarkEnd)
        assert isinstance(blocks[1].children[0], BookmarkStart)

    def test_block_bookmarks_can_be_disabled(self):
        blocks = XMLParser().parse_blocks(body('<w:bookmarkStart w:id="3" w:name="x"/><w:p/>'),
                                          allow_bookmarks=False)
        assert len(blocks) == 1
        assert isinstance(blocks[0], Paragraph)


class TestCommentMarkers:
    """Test cases for comment range markers."""

    def test_start_bound_to_parsed_comment(self):
        comment = Comment(5).set_author("Ann")
        blocks = XMLParser({5: comment}).parse_blocks(body(
            '<w:p><w:commentRangeStart w:id="5"/><w:commentRangeEnd w:id="5"/></w:p>'
        ))
        start, end = blocks[0].children
        assert isinstance(start, CommentRangeStart)
        assert start.comment is comment
        assert isinstance(end, CommentEnd)
        assert end.id == 5

    def test_unknown_comment_gets_placeholder(self):
        blocks = XMLParser().parse_blocks(body('<w:p><w:commentRangeStart w:id="9"/></w:p>'))
        assert blocks[0].children[0].comment.id == 9


class TestTables:
    """Test cases for table parsing."""

    def test_grid_rows_and_cells(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tblPr><w:tblStyle w:val="Grid"/><w:tblW w:w="5000" w:type="pct"/></w:tblPr>'
            '<w:tblGrid><w:gridCol w:w="1000"/><w:gridCol w:w="2000"/></w:tblGrid>'
            '<w:tr><w:trPr><w:gridBefore w:val="1"/><w:trHeight w:val="300" w:hRule="atLeast"/></w:trPr>'
            '<w:tc><w:tcPr><w:tcW w:w="2000" w:type="dxa"/></w:tcPr><w:p><w:r><w:t>c</w:t></w:r></w:p></w:tc></w:tr>'
            '</w:tbl>'
        ))
        table = blocks[0]
        assert isinstance(table, Table)
        assert table.grid == [1000, 2000]
        assert table.property.style_id == "Grid"
        assert table.property.width_type.value == "pct"
        row = table.rows[0]
        assert row.grid_before == 1
        assert row.height == 300
        assert row.height_rule.value == "atLeast"
        assert row.cells[0].get_text() == "c"
        assert row.cells[0].property.width == 2000

    def test_cell_margins_start_end(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tblPr><w:tblCellMar><w:top w:w="10"/><w:start w:w="20"/><w:end w:w="30"/>'
            '</w:tblCellMar></w:tblPr><w:tr><w:tc><w:p/></w:tc></w:tr></w:tbl>'
        ))
        assert blocks[0].property.cell_margins == {"top": 10, "left": 20, "right": 30}

    def test_bare_vmerge_is_continue(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tr><w:tc><w:tcPr><w:vMerge w:val="restart"/></w:tcPr><w:p/></w:tc></w:tr>'
            '<w:tr><w:tc><w:tcPr><w:vMerge/></w:tcPr><w:p/></w:tc></w:tr></w:tbl>'
        ))
        rows = blocks[0].rows
        assert rows[0].cells[0].property.vertical_merge == VMergeType.RESTART
        assert rows[1].cells[0].property.vertical_merge == VMergeType.CONTINUE

    def test_cell_borders_and_span(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tr><w:tc><w:tcPr><w:gridSpan w:val="2"/>'
            '<w:tcBorders><w:tl2br w:val="single" w:sz="4" w:color="FF0000"/>'
            '<w:tr2bl w:val="double" w:sz="8" w:color="0000FF"/></w:tcBorders>'
            '<w:shd w:val="clear" w:color="auto" w:fill="EEEEEE"/></w:tcPr><w:p/></w:tc></w:tr></w:tbl>'
        ))
        cell = blocks[0].rows[0].cells[0]
        assert cell.grid_span == 2
        borders = cell.property.borders
        assert borders[TableCellBorderPosition.TL2BR].color == "FF0000"
        assert borders[TableCellBorderPosition.TR2BL].border_type.value == "double"
        assert cell.property.shading.fill == "EEEEEE"

    def test_filler_paragraph_after_nested_table_dropped(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tr><w:tc><w:tbl><w:tr><w:tc><w:p/></w:tc></w:tr></w:tbl><w:p/></w:tc></w:tr></w:tbl>'
        ))
        cell = blocks[0].rows[0].cells[0]
        assert len(cell.children) == 1
        assert isinstance(cell.children[0], Table)

    def test_paragraph_with_content_after_nested_table_kept(self):
        blocks = XMLParser().parse_blocks(body(
            '<w:tbl><w:tr><w:tc><w:tbl><w:tr><w:tc><w:p/></w:tc></w:tr></w:tbl>'
            '<w:p><w:r><w:t>after</w:t></w:r></w:p></w:tc></w:tr></w:tbl>'
        ))
        cell = blocks[0].rows[0].cells[0]
        assert len(cell.children) == 2
        assert cell.children[1].get_text() == "after"
