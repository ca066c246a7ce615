"""Tests for CSV text parsing and template generation."""

import pytest

from catalog_cms.imports import (
    EmptyFileError,
    ImportFileError,
    RowErrorKind,
    generate_template_csv,
    parse_csv_text,
)


@pytest.mark.unit
class TestParseCsvText:
    def test_headers_and_rows(self):
        table = parse_csv_text("a,b\n1,2\n3,4\n")

        assert table.headers == ["a", "b"]
        assert [r.values for r in table.rows] == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]
        assert table.total_rows == 2

    def test_rows_numbered_from_two(self):
        """The header is row 1, as a spreadsheet shows it."""
        table = parse_csv_text("a\nx\ny\n")
        assert [r.row for r in table.rows] == [2, 3]

    def test_strips_bom_from_bytes_and_text(self):
        for raw in ("\ufeffname,age\nAna,3\n".encode("utf-8"), "\ufeffname,age\nAna,3\n"):
            table = parse_csv_text(raw)
            assert table.headers == ["name", "age"]

    def test_header_whitespace_stripped(self):
        table = parse_csv_text(" name , age \nAna,3\n")
        assert table.headers == ["name", "age"]
        assert table.rows[0].get("age") == "3"

    def test_quoted_comma_newline_and_escaped_quote(self):
        text = 'title,body\n"Hola, mundo","Line one\nline ""two"""\n'
        table = parse_csv_text(text)

        assert len(table.rows) == 1
        row = table.rows[0]
        assert row.get("title") == "Hola, mundo"
        assert row.get("body") == 'Line one\nline "two"'

    def test_crlf_line_endings(self):
        table = parse_csv_text("a,b\r\n1,2\r\n")
        assert table.rows[0].values == {"a": "1", "b": "2"}

    def test_empty_lines_dropped(self):
        table = parse_csv_text("a,b\n\n1,2\n   \n3,4\n")
        assert table.total_rows == 2
        assert [r.row for r in table.rows] == [2, 3]

    def test_line_of_empty_cells_is_kept(self):
        table = parse_csv_text("a,b\n1,2\n,\n , \n")

        assert table.total_rows == 3
        assert [r.values for r in table.rows[1:]] == [{"a": "", "b": ""}, {"a": " ", "b": " "}]
        assert table.errors == []

    def test_field_count_mismatch_is_row_error(self):
        table = parse_csv_text("a,b\n1,2\n1,2,3\n5\n")

        assert len(table.rows) == 1
        assert [(e.row, e.kind) for e in table.errors] == [
            (3, RowErrorKind.FIELD_COUNT),
            (4, RowErrorKind.FIELD_COUNT),
        ]
        assert table.errors[0].message == "Expected 2 fields, found 3"
        assert table.total_rows == 3

    @pytest.mark.parametrize("raw", ["", "\n\n", "a,b\n", "a,b\n\n  \n"])
    def test_empty_file(self, raw):
        with pytest.raises(EmptyFileError):
            parse_csv_text(raw)

    def test_invalid_utf8(self):
        with pytest.raises(ImportFileError) as exc_info:
            parse_csv_text(b"a\n\xff\xfe\xfa\n")
        assert exc_info.value.error_code == "INVALID_ENCODING"


@pytest.mark.unit
class TestGenerateTemplateCsv:
    def test_headers_only(self):
        assert generate_template_csv(["a", "b"]) == "a,b\n"

    def test_sample_rows_follow_header_order(self):
        text = generate_template_csv(["a", "b"], [{"b": "2", "a": "1"}, {"a": "x"}])
        assert text == "a,b\n1,2\nx,\n"

    def test_awkward_values_survive_parsing(self):
        """Commas, quotes and newlines written by the template parse back intact."""
        sample = {"title": 'Say "hi", then', "body": "two\nlines"}
        table = parse_csv_text(generate_template_csv(["title", "body"], [sample]))
        assert table.rows[0].values == sample
