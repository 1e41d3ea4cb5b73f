"""Unit tests for cell display classification."""

from __future__ import annotations

from tabular.cell_kind import classify_cell, is_image_value, is_url


def test_classify_blank_cell_as_empty() -> None:
    """Whitespace-only cells should be empty."""
    assert classify_cell("  ") == "empty"


def test_classify_object_uri_image_by_raw_value() -> None:
    """An s3:// image should stay an image after presign routing."""
    kind = classify_cell("s3://b/a.png", "/api/s3-presign?uri=s3%3A%2F%2Fb%2Fa.png")

    assert kind == "image"


def test_classify_url_without_image_extension_as_link() -> None:
    """Absolute URLs without an image extension should be links."""
    assert classify_cell("https://example.com/docs") == "link"


def test_classify_plain_words_as_text() -> None:
    """Ordinary values should be text."""
    assert classify_cell("hello world") == "text"


def test_is_image_value_ignores_query_and_case() -> None:
    """Image extensions should match case-insensitively before the query."""
    assert is_image_value("https://x.example/y.JPG?w=1")
    assert is_image_value("data:image/png;base64,AAAA")
    assert not is_image_value("https://x.example/y?f=a.png")


def test_is_url_rejects_relative_paths() -> None:
    """Relative and root-relative paths are not absolute URLs."""
    assert is_url("https://example.com") and not is_url("/server-data/a.csv")
