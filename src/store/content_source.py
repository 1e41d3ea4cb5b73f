"""Content readers for the local and object-store content roots.

This module reads dataset files to completion as text and opens
served assets. Both backends implement the ``ContentSource`` protocol
so the SDK never branches on the storage mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol

from core.config import CsvLensConfig
from core.constants import CONTENT_TYPES_BY_EXTENSION, DEFAULT_CONTENT_TYPE, TEXT_ENCODING
from core.errors import NotAFileError, NotFoundError, error_for_rejection
from core.object_uri import object_key_for
from core.path_resolver import resolve_relative_to_root
from core.types import ObjectAddress, ObjectRoot, Rejected, ServedAsset
from store.object_store import create_s3_client, presign_get_url


class ContentSource(Protocol):
    """Read access to files below a content root."""

    def read_text(self, relative_path: str) -> str:
        """Read a content-root-relative file to completion as text."""
        ...

    def open_asset(self, relative_path: str) -> ServedAsset:
        """Open a content-root-relative file for serving."""
        ...

    def presign(self, address: ObjectAddress) -> str:
        """Return a presigned download URL for an object address."""
        ...


class LocalContentSource:
    """Content source backed by a local directory.

    Paths are relative to the content root; callers strip the root name.
    """

    def __init__(
        self,
        root_dir: Path,
        client_factory: Callable[[], Any],
        presign_expires_seconds: int,
    ) -> None:
        self._root_dir = root_dir
        self._client_factory = client_factory
        self._presign_expires_seconds = presign_expires_seconds
        self._s3_client: Any | None = None

    def read_text(self, relative_path: str) -> str:
        """Read a local file as UTF-8 text.

        Raises:
            OutOfBoundsError: If the path escapes the content root.
            NotAFileError: If the path is not a regular file.
            NotFoundError: If the file is missing or unreadable.
        """
        return self._read_bytes(relative_path).decode(TEXT_ENCODING, errors="replace")

    def open_asset(self, relative_path: str) -> ServedAsset:
        """Open a local file with a content type guessed from its extension."""
        body = self._read_bytes(relative_path)
        return ServedAsset(content_type=guess_content_type(relative_path), body=body)

    def presign(self, address: ObjectAddress) -> str:
        """Presign an object referenced from a locally stored dataset."""
        if self._s3_client is None:
            self._s3_client = self._client_factory()
        return presign_get_url(self._s3_client, address, self._presign_expires_seconds)

    def _read_bytes(self, relative_path: str) -> bytes:
        resolved = resolve_relative_to_root(relative_path, self._root_dir)
        if isinstance(resolved, Rejected):
            raise error_for_rejection(resolved)
        if not resolved.exists():
            raise NotFoundError(
                f"Failed to read {relative_path}: file does not exist. "
                "Pick a file listed in its directory."
            )
        if not resolved.is_file():
            raise NotAFileError(
                f"Failed to read {relative_path}: path is not a file. "
                "Request a file path instead of a directory."
            )
        try:
            return resolved.read_bytes()
        except OSError as error:
            raise NotFoundError(
                f"Failed to read {relative_path}: {error.strerror or error}. "
                "Check file permissions and retry."
            ) from error


class ObjectStoreContentSource:
    """Content source backed by an object-store prefix."""

    def __init__(self, s3_client: Any, root: ObjectRoot, presign_expires_seconds: int) -> None:
        self._s3_client = s3_client
        self._root = root
        self._presign_expires_seconds = presign_expires_seconds

    def read_text(self, relative_path: str) -> str:
        """Download an object and read its body to completion as text.

        Raises:
            NotFoundError: If the object is missing or the store fails.
        """
        key = object_key_for(self._root, relative_path)
        try:
            response = self._s3_client.get_object(Bucket=self._root.bucket, Key=key)
            body = response.get("Body")
            payload = body.read() if body is not None else None
        except Exception as error:
            raise NotFoundError(
                f"Failed to read s3://{self._root.bucket}/{key}: {error}. "
                "Check that the object exists and credentials allow reading it."
            ) from error
        if payload is None:
            raise NotFoundError(
                f"Failed to read s3://{self._root.bucket}/{key}: response has no body. "
                "Re-upload the object and retry."
            )
        if isinstance(payload, str):
            return payload
        return payload.decode(TEXT_ENCODING, errors="replace")

    def open_asset(self, relative_path: str) -> ServedAsset:
        """Return a presigned redirect for an object below the root."""
        address = ObjectAddress(
            bucket=self._root.bucket,
            key=object_key_for(self._root, relative_path),
        )
        try:
            redirect_url = self.presign(address)
        except Exception as error:
            raise NotFoundError(
                f"Failed to open {address.uri}: {error}. "
                "Check object-store credentials and retry."
            ) from error
        return ServedAsset(
            content_type=guess_content_type(relative_path),
            redirect_url=redirect_url,
        )

    def presign(self, address: ObjectAddress) -> str:
        """Presign an object with the configured expiry."""
        return presign_get_url(self._s3_client, address, self._presign_expires_seconds)


def build_content_source(config: CsvLensConfig, s3_client: Any | None = None) -> ContentSource:
    """Build the content source matching the configured storage mode.

    Args:
        config: Runtime configuration.
        s3_client: Optional pre-built client, mainly for tests.

    Returns:
        Object-store source when a root URI is configured, else local.
    """
    if config.object_root is not None:
        client = s3_client if s3_client is not None else create_s3_client(config)
        return ObjectStoreContentSource(client, config.object_root, config.presign_expires_seconds)

    def _client_factory() -> Any:
        return s3_client if s3_client is not None else create_s3_client(config)

    return LocalContentSource(
        config.content_root,
        _client_factory,
        config.presign_expires_seconds,
    )


def guess_content_type(file_path: str) -> str:
    """Guess a response content type from a file extension."""
    suffix = Path(file_path).suffix.lower()
    return CONTENT_TYPES_BY_EXTENSION.get(suffix, DEFAULT_CONTENT_TYPE)
