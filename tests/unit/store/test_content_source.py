"""Unit tests for local and object-store content sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import CsvLensConfig
from core.errors import NotAFileError, NotFoundError, OutOfBoundsError
from core.types import ObjectAddress, ObjectRoot
from store.content_source import (
    LocalContentSource,
    ObjectStoreContentSource,
    build_content_source,
    guess_content_type,
)
from tests.fake_s3 import FakeS3Client


def _local_source(root: Path, client: FakeS3Client | None = None) -> LocalContentSource:
    return LocalContentSource(root, lambda: client or FakeS3Client(), 300)


def test_local_read_text_returns_file_contents(tmp_path: Path) -> None:
    """Local reads should return the whole file as text."""
    (tmp_path / "a.csv").write_text("x,y\n1,2\n", encoding="utf-8")

    assert _local_source(tmp_path).read_text("a.csv") == "x,y\n1,2\n"


def test_local_read_text_raises_for_missing_file(tmp_path: Path) -> None:
    """Missing files should be reported as not found."""
    with pytest.raises(NotFoundError):
        _local_source(tmp_path).read_text("missing.csv")

    assert not (tmp_path / "missing.csv").exists()


def test_local_read_text_raises_for_directory(tmp_path: Path) -> None:
    """Directories should be reported as not a file."""
    (tmp_path / "reports").mkdir()

    with pytest.raises(NotAFileError):
        _local_source(tmp_path).read_text("reports")


def test_local_read_text_rejects_escape(tmp_path: Path) -> None:
    """Reads outside the content root should be out of bounds."""
    root = tmp_path / "root"
    root.mkdir()
    (tmp_path / "secret.csv").write_text("s", encoding="utf-8")

    with pytest.raises(OutOfBoundsError):
        _local_source(root).read_text("../secret.csv")


def test_local_open_asset_returns_bytes_and_content_type(tmp_path: Path) -> None:
    """Local assets should be served with their bytes and MIME type."""
    (tmp_path / "logo.PNG").write_bytes(b"\x89PNG")

    asset = _local_source(tmp_path).open_asset("logo.PNG")

    assert asset.body == b"\x89PNG" and asset.content_type == "image/png"
    assert asset.redirect_url is None


def test_local_presign_uses_object_store_client(tmp_path: Path) -> None:
    """Local mode should still presign s3:// references."""
    url = _local_source(tmp_path).presign(ObjectAddress(bucket="b", key="k.png"))

    assert url.startswith("https://signed.example/b/k.png") and "expires=300" in url


def test_local_read_text_keeps_subdirectory_named_like_root(tmp_path: Path) -> None:
    """A root-relative path is not stripped of the root name again."""
    (tmp_path / "server-data").mkdir()
    (tmp_path / "server-data" / "x.csv").write_text("nested,1\n", encoding="utf-8")
    (tmp_path / "x.csv").write_text("top,1\n", encoding="utf-8")

    assert _local_source(tmp_path).read_text("server-data/x.csv") == "nested,1\n"


def test_local_presign_builds_client_once(tmp_path: Path) -> None:
    """The object-store client is created on first use and then reused."""
    created: list[FakeS3Client] = []

    def _factory() -> FakeS3Client:
        created.append(FakeS3Client())
        return created[-1]

    source = LocalContentSource(tmp_path, _factory, 300)
    source.presign(ObjectAddress(bucket="b", key="one.png"))
    source.presign(ObjectAddress(bucket="b", key="two.png"))

    assert len(created) == 1


def test_object_store_read_text_reads_body_to_completion() -> None:
    """Object bodies should be downloaded from the root-prefixed key."""
    client = FakeS3Client({"data/reports/q1.csv": "a,b\né,2\n".encode("utf-8")})
    source = ObjectStoreContentSource(client, ObjectRoot(bucket="datasets", prefix="data/"), 300)

    assert source.read_text("reports//q1.csv") == "a,b\né,2\n"


def test_object_store_read_text_raises_for_missing_key() -> None:
    """Missing objects should be reported as not found."""
    source = ObjectStoreContentSource(FakeS3Client(), ObjectRoot(bucket="datasets", prefix=""), 300)

    with pytest.raises(NotFoundError):
        source.read_text("missing.csv")


def test_object_store_open_asset_redirects_to_presigned_url() -> None:
    """Object-store assets should be served as presigned redirects."""
    source = ObjectStoreContentSource(FakeS3Client(), ObjectRoot(bucket="datasets", prefix="data/"), 900)

    asset = source.open_asset("img/a.jpg")

    assert asset.body is None and asset.content_type == "image/jpeg"
    assert asset.redirect_url == "https://signed.example/datasets/data/img/a.jpg?op=get_object&expires=900"


def test_object_store_open_asset_reports_signing_failure_as_not_found() -> None:
    """Signing failures while serving an asset should read as not found."""
    client = FakeS3Client(presign_error=RuntimeError("no credentials"))
    source = ObjectStoreContentSource(client, ObjectRoot(bucket="datasets", prefix=""), 300)

    with pytest.raises(NotFoundError):
        source.open_asset("a.png")


def test_build_content_source_selects_by_object_root(tmp_path: Path) -> None:
    """An object root selects the object-store source; otherwise local."""
    local_config = CsvLensConfig(content_root=tmp_path)
    remote_config = CsvLensConfig(content_root=tmp_path, object_root=ObjectRoot(bucket="b", prefix=""))

    assert isinstance(build_content_source(local_config), LocalContentSource)
    assert isinstance(build_content_source(remote_config, FakeS3Client()), ObjectStoreContentSource)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a.csv", "text/csv; charset=utf-8"),
        ("a.svg", "image/svg+xml; charset=utf-8"),
        ("a.jpeg", "image/jpeg"),
        ("a.bin", "application/octet-stream"),
        ("noext", "application/octet-stream"),
    ],
)
def test_guess_content_type(path: str, expected: str) -> None:
    """Content types should follow the file extension."""
    assert guess_content_type(path) == expected
