"""Python SDK for dataset browsing.

This module exposes high-level APIs for directory listing, table
loading, asset serving, and object presigning backed by the
configured content root.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote

from catalog.backend_factory import build_directory_backend
from catalog.directory_catalog import DirectoryBackend, list_directory
from core.config import CsvLensConfig
from core.errors import MissingParameterError, error_for_rejection
from core.logging_config import get_logger
from core.object_uri import parse_object_uri
from core.path_resolver import normalize_server_file, normalize_virtual_path, virtual_to_server
from core.types import DirectoryEntry, Rejected, Row, ServedAsset
from store.content_source import ContentSource, build_content_source
from tabular.asset_locator import resolve_asset_reference
from tabular.csv_tokenizer import tokenize

_LOGGER = get_logger(__name__)


class CsvLensClient:
    """Primary SDK entry point for browsing and previewing datasets."""

    def __init__(
        self,
        config: CsvLensConfig | None = None,
        s3_client: Any | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            s3_client: Optional pre-built object-store client.
        """
        self._config = config or CsvLensConfig.from_env()
        self._s3_client = s3_client
        self._backend: DirectoryBackend | None = None
        self._source: ContentSource | None = None

    @property
    def config(self) -> CsvLensConfig:
        """Runtime configuration used by this client."""
        return self._config

    def list_directory(self, path: str | None = None) -> list[DirectoryEntry]:
        """List a dataset directory.

        Args:
            path: Server or root-relative directory; None for the root.

        Returns:
            Directories first, then CSV files, ordered by path.

        Raises:
            OutOfBoundsError: If the path escapes the content root.
            DirectoryUnavailableError: If the directory cannot be listed.
        """
        return list_directory(path, self._directory_backend(), self._config.content_root_name)

    def read_text(self, path: str | None) -> str:
        """Read a dataset file as text.

        Args:
            path: Server path or root-relative file path.

        Returns:
            Complete file contents.

        Raises:
            MissingParameterError: If no path was given.
            OutOfBoundsError: If the path escapes the content root.
            NotFoundError: If the file cannot be read.
            NotAFileError: If the path names a directory.
        """
        relative = self._relative_file(path)
        return self._content_source().read_text(relative)

    def read_table(self, virtual_path: str) -> list[Row]:
        """Load and tokenize the CSV file behind a virtual path.

        Args:
            virtual_path: Externally visible dataset route.

        Returns:
            Tokenized rows, header included.
        """
        normalized = normalize_virtual_path(virtual_path)
        if isinstance(normalized, Rejected):
            raise error_for_rejection(normalized)
        server_path = virtual_to_server(normalized, self._config.content_root_name)
        rows = tokenize(self.read_text(server_path))
        _LOGGER.info("table_loaded", path=server_path, row_count=len(rows))
        return rows

    def open_asset(self, path: str | None) -> ServedAsset:
        """Open a file below the content root for serving."""
        relative = self._relative_file(path)
        return self._content_source().open_asset(relative)

    def resolve_asset(self, value: str, base_directory: str = "") -> str | None:
        """Resolve a cell value into a fetchable reference."""
        return resolve_asset_reference(
            value,
            base_directory,
            public_prefix=self._config.public_prefix,
            presign_route=self._config.presign_route,
        )

    def presign(self, raw_uri: str | None) -> str:
        """Exchange an ``s3://`` URI for a presigned download URL.

        Args:
            raw_uri: Object URI, possibly percent-encoded.

        Returns:
            Presigned URL.

        Raises:
            MissingParameterError: If no URI was given.
            InvalidUriError: If the URI is not ``s3://bucket/key``.
            PresignError: If signing fails.
        """
        if not raw_uri:
            raise MissingParameterError(
                "Missing object URI: provide a value in the form s3://bucket/key."
            )
        address = parse_object_uri(unquote(raw_uri))
        if isinstance(address, Rejected):
            raise error_for_rejection(address)
        return self._content_source().presign(address)

    def _relative_file(self, path: str | None) -> str:
        relative = normalize_server_file(path, self._config.content_root_name)
        if isinstance(relative, Rejected):
            raise error_for_rejection(relative)
        return relative

    def _directory_backend(self) -> DirectoryBackend:
        if self._backend is None:
            self._backend = build_directory_backend(self._config, self._s3_client)
        return self._backend

    def _content_source(self) -> ContentSource:
        if self._source is None:
            self._source = build_content_source(self._config, self._s3_client)
        return self._source
