"""Unit tests for the delimited-text tokenizer."""

from __future__ import annotations

import pytest

from tabular.csv_tokenizer import max_column_count, pad_rows, tokenize


def test_tokenize_unescapes_doubled_quotes() -> None:
    """Two quotes inside a quoted field should yield one literal quote."""
    rows = tokenize('"a""b",c')

    assert rows == [['a"b', "c"]]


def test_tokenize_treats_crlf_like_lf() -> None:
    """CRLF terminators should split rows exactly like LF."""
    assert tokenize("a,b\r\nc,d") == tokenize("a,b\nc,d") == [["a", "b"], ["c", "d"]]


def test_tokenize_drops_blank_lines() -> None:
    """Empty lines between rows should not produce rows."""
    rows = tokenize("a,b\n\nc,d")

    assert rows == [["a", "b"], ["c", "d"]]


@pytest.mark.parametrize(
    "text",
    ["a,b,c\nd,e,f", "one\ntwo,three\n,,\nfour", "x,,y\r\nz"],
)
def test_tokenize_splits_unquoted_text_at_commas_and_newlines(text: str) -> None:
    """Text without quotes should split exactly at commas and line breaks."""
    expected = [line.split(",") for line in text.replace("\r\n", "\n").split("\n")]

    assert tokenize(text) == expected


def test_tokenize_keeps_delimiters_inside_quotes() -> None:
    """Commas and newlines inside quotes should stay in the field."""
    rows = tokenize('name,note\nx,"line one,\nline two"')

    assert rows == [["name", "note"], ["x", "line one,\nline two"]]


def test_tokenize_closes_unterminated_quote_at_end_of_input() -> None:
    """An unterminated quote should swallow the rest of the input without failing."""
    rows = tokenize('a,"b,c\nd')

    assert rows == [["a", "b,c\nd"]]


def test_tokenize_flushes_last_row_without_terminator() -> None:
    """The final row should be emitted with or without a trailing newline."""
    assert tokenize("a,b\nc,d") == tokenize("a,b\nc,d\n")


def test_tokenize_returns_no_rows_for_empty_text() -> None:
    """Empty input should produce an empty table."""
    assert tokenize("") == []


def test_tokenize_drops_whitespace_only_single_field_rows() -> None:
    """Single-field rows holding only whitespace should be dropped."""
    rows = tokenize("header\n   \nvalue\n\t")

    assert rows == [["header"], ["value"]]


def test_tokenize_keeps_rows_of_empty_fields() -> None:
    """Rows with several empty fields are structure, not blank noise."""
    rows = tokenize("a,b\n,\n")

    assert rows == [["a", "b"], ["", ""]]


def test_tokenize_accepts_lone_carriage_return() -> None:
    """A bare CR should terminate a row."""
    assert tokenize("a\rb") == [["a"], ["b"]]


def test_tokenize_preserves_ragged_rows() -> None:
    """Rows of different widths should be returned as-is."""
    rows = tokenize("a,b,c\nd\ne,f")

    assert [len(row) for row in rows] == [3, 1, 2]


def test_pad_rows_extends_to_widest_row() -> None:
    """Padding should right-fill ragged rows with empty fields."""
    rows = [["a", "b", "c"], ["d"]]

    assert max_column_count(rows) == 3 and pad_rows(rows) == [["a", "b", "c"], ["d", "", ""]]


def test_max_column_count_is_zero_for_empty_table() -> None:
    """An empty table should have zero columns."""
    assert max_column_count([]) == 0
