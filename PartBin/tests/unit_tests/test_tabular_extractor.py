import pytest

from PartBin.exceptions import FormatError
from PartBin.services.order_import.tabular_extractor import (
    decode_text,
    extract_binary_sheet,
    extract_delimited_text,
    extract_html_table,
    split_delimited_line,
)
from PartBin.tests.conftest import make_workbook


class TestHtmlTable:
    def test_rows_without_table_tag_still_parse(self):
        markup = "<tr><td>Name</td><td>Quantity</td></tr><tr><td>R1</td><td>5</td></tr>"
        assert extract_html_table(markup) == [["Name", "Quantity"], ["R1", "5"]]

    def test_only_first_table_is_read(self):
        markup = (
            "<table><tr><th>Name</th></tr><tr><td>R1</td></tr></table>"
            "<table><tr><td>ignored</td></tr></table>"
        )
        assert extract_html_table(markup) == [["Name"], ["R1"]]

    def test_tags_are_case_insensitive(self):
        markup = "<TABLE><TR><TH>Name</TH></TR><TR><TD> C1 </TD></TR></TABLE>"
        assert extract_html_table(markup) == [["Name"], ["C1"]]

    def test_entities_decoded_and_tags_stripped(self):
        markup = "<table><tr><th>Name</th></tr><tr><td><b>A&amp;B</b>&nbsp;&lt;1&gt;</td></tr></table>"
        assert extract_html_table(markup)[1] == ["A&B <1>"]

    def test_bytes_are_decoded(self):
        markup = "<tr><td>商品编号</td></tr><tr><td>C1</td></tr>".encode("utf-8")
        assert extract_html_table(markup)[0] == ["商品编号"]

    def test_single_row_is_rejected(self):
        with pytest.raises(FormatError) as exc_info:
            extract_html_table("<table><tr><td>Name</td></tr></table>")
        assert exc_info.value.reason == "no rows found"


class TestDelimitedText:
    def test_quoted_commas_stay_in_cell(self):
        grid = extract_delimited_text('Name,Description,Quantity\n"R1","10k, 1%",5\n')
        assert grid == [["Name", "Description", "Quantity"], ["R1", "10k, 1%", "5"]]

    def test_doubled_quotes_are_not_unescaped(self):
        assert split_delimited_line('"say ""hi""",x') == ["say hi", "x"]

    def test_blank_lines_and_carriage_returns(self):
        grid = extract_delimited_text("a,b\r\n\r\n   \nc,d\r\n")
        assert grid == [["a", "b"], ["c", "d"]]

    def test_empty_trailing_cell_kept(self):
        assert split_delimited_line("a,,") == ["a", "", ""]

    def test_single_line_is_rejected(self):
        with pytest.raises(FormatError) as exc_info:
            extract_delimited_text("Name,Quantity\n\n")
        assert exc_info.value.reason == "insufficient rows"


class TestBinarySheet:
    def test_first_sheet_read_as_strings(self):
        content = make_workbook([["Name", "Quantity"], ["R1", 5], ["C1", 2.5]])

        grid = extract_binary_sheet(content)

        assert grid[0] == ["Name", "Quantity"]
        assert grid[1] == ["R1", "5"]
        assert grid[2] == ["C1", "2.5"]

    def test_blank_cells_become_empty_strings(self):
        content = make_workbook([["Name", "Location"], ["R1", None]])
        assert extract_binary_sheet(content)[1] == ["R1", ""]

    def test_garbage_is_rejected(self):
        with pytest.raises(FormatError) as exc_info:
            extract_binary_sheet(b"definitely not a workbook")
        assert exc_info.value.reason == "unreadable binary sheet"
        assert exc_info.value.error_code == "FORMAT_ERROR"


class TestDecodeText:
    def test_utf8_bom_is_removed(self):
        assert decode_text("\ufeffName".encode("utf-8")) == "Name"

    def test_gb18030_fallback(self):
        assert decode_text("商品编号".encode("gb18030")) == "商品编号"

    def test_text_passes_through(self):
        assert decode_text("already text") == "already text"

    def test_latin1_last_resort(self):
        assert decode_text(b"R\xff") == "R\xff"
