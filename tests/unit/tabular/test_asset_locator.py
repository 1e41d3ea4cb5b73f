"""Unit tests for cell value dereferencing."""

from __future__ import annotations

import pytest

from core.path_resolver import normalize_virtual_path
from core.types import Rejected
from tabular.asset_locator import is_absolute_like_url, resolve_asset_reference


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_resolve_returns_none_for_blank_values(value: str) -> None:
    """Blank cells should not resolve to anything."""
    assert resolve_asset_reference(value) is None


def test_resolve_routes_object_uri_through_presign_proxy() -> None:
    """An s3:// value should become an encoded presign proxy route."""
    reference = resolve_asset_reference("s3://bucket/img/a.png")

    assert reference == "/api/s3-presign?uri=s3%3A%2F%2Fbucket%2Fimg%2Fa.png"


def test_resolve_encodes_like_uri_component() -> None:
    """Spaces should be percent-encoded while parentheses stay literal."""
    reference = resolve_asset_reference("s3://b/a b(1).png")

    assert reference == "/api/s3-presign?uri=s3%3A%2F%2Fb%2Fa%20b(1).png"


def test_resolve_converts_object_store_https_url() -> None:
    """A virtual-hosted S3 URL should be proxied as its s3:// form."""
    reference = resolve_asset_reference("https://my-bucket.s3.us-west-2.amazonaws.com/a/b.png")

    assert reference == "/api/s3-presign?uri=s3%3A%2F%2Fmy-bucket%2Fa%2Fb.png"


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com/a.png",
        "data:image/png;base64,AAAA",
        "//cdn.example.com/x.png",
        "s3://bucket-without-key",
    ],
)
def test_resolve_returns_external_urls_unchanged(value: str) -> None:
    """Non-object-store URLs and data URIs should pass through."""
    assert resolve_asset_reference(value) == value


def test_resolve_collapses_slashes_under_public_prefix() -> None:
    """Values already under the public mount should only lose duplicate slashes."""
    assert resolve_asset_reference("/server-data//imgs///a.png") == "/server-data/imgs/a.png"


def test_resolve_keeps_other_absolute_paths() -> None:
    """Other absolute paths should be returned with single slashes."""
    assert resolve_asset_reference("/static//logo.png") == "/static/logo.png"


def test_resolve_places_relative_values_under_public_prefix() -> None:
    """Relative values should be joined under the public mount."""
    assert resolve_asset_reference("./imgs/a.png") == "/server-data/imgs/a.png"


def test_resolve_uses_dataset_directory_for_relative_values() -> None:
    """Relative values should resolve from the viewed dataset's directory."""
    reference = resolve_asset_reference("thumbs/a.png", "reports/2024")

    assert reference == "/server-data/reports/2024/thumbs/a.png"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("../../secret.png", "/server-data/secret.png"),
        ("imgs/../../a.png", "/server-data/imgs/a.png"),
        ("imgs\\..\\a.png", "/server-data/imgs\\a.png"),
        ("a..b/c.png", "/server-data/a..b/c.png"),
    ],
)
def test_resolve_strips_parent_segments_silently(value: str, expected: str) -> None:
    """Relative values should lose '..' segments instead of being rejected."""
    assert resolve_asset_reference(value) == expected


def test_parent_segment_handling_differs_from_path_resolver() -> None:
    """The asset locator strips '..' where the path resolver rejects it."""
    rejected = normalize_virtual_path("../x.png")
    reference = resolve_asset_reference("../x.png")

    assert isinstance(rejected, Rejected) and reference == "/server-data/x.png"


def test_resolve_honors_custom_prefix_and_route() -> None:
    """Configured prefix and presign route should be used verbatim."""
    relative = resolve_asset_reference("a.png", public_prefix="/files/")
    proxied = resolve_asset_reference("s3://b/k.png", presign_route="/sign")

    assert relative == "/files/a.png" and proxied == "/sign?uri=s3%3A%2F%2Fb%2Fk.png"


def test_is_absolute_like_url_detects_schemes_and_protocol_relative() -> None:
    """Scheme-prefixed and protocol-relative values count as absolute."""
    assert is_absolute_like_url("ftp://x") and is_absolute_like_url("//x")
    assert not is_absolute_like_url("imgs/a.png")
