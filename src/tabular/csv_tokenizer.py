"""Delimited-text tokenizer.

This module splits comma-separated text into rows of string fields.
It never rejects input: unterminated quotes and ragged rows produce a
best-effort result.
"""

from __future__ import annotations

from core.types import Row

_QUOTE = '"'
_DELIMITER = ","
_LINE_BREAKS = ("\n", "\r")


def tokenize(text: str) -> list[Row]:
    """Split delimited text into rows of fields.

    Args:
        text: Raw CSV text.

    Returns:
        Rows in input order, without blank single-field rows.
    """
    rows: list[Row] = []
    row: Row = []
    field_chars: list[str] = []
    inside_quotes = False
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        next_char = text[index + 1] if index + 1 < length else ""
        if char == _QUOTE:
            if inside_quotes and next_char == _QUOTE:
                field_chars.append(_QUOTE)
                index += 1
            else:
                inside_quotes = not inside_quotes
        elif char == _DELIMITER and not inside_quotes:
            row.append("".join(field_chars))
            field_chars = []
        elif char in _LINE_BREAKS and not inside_quotes:
            if char == "\r" and next_char == "\n":
                index += 1
            row.append("".join(field_chars))
            rows.append(row)
            row = []
            field_chars = []
        else:
            field_chars.append(char)
        index += 1
    row.append("".join(field_chars))
    rows.append(row)
    return [row for row in rows if not _is_blank_row(row)]


def max_column_count(rows: list[Row]) -> int:
    """Return the width of the widest row."""
    return max((len(row) for row in rows), default=0)


def pad_rows(rows: list[Row]) -> list[Row]:
    """Right-pad ragged rows with empty fields to a common width."""
    width = max_column_count(rows)
    return [row + [""] * (width - len(row)) for row in rows]


def _is_blank_row(row: Row) -> bool:
    return len(row) == 1 and not row[0].strip()
