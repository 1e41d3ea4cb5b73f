"""Catalog backend selection from runtime configuration."""

from __future__ import annotations

from typing import Any

from catalog.directory_catalog import DirectoryBackend
from catalog.local_backend import LocalDirectoryBackend
from catalog.object_store_backend import ObjectStoreDirectoryBackend
from core.config import CsvLensConfig
from store.object_store import create_s3_client


def build_directory_backend(config: CsvLensConfig, s3_client: Any | None = None) -> DirectoryBackend:
    """Build the listing backend matching the configured storage mode.

    Args:
        config: Runtime configuration.
        s3_client: Optional pre-built client, mainly for tests.

    Returns:
        Object-store backend when a root URI is configured, else local.
    """
    if config.object_root is not None:
        client = s3_client if s3_client is not None else create_s3_client(config)
        return ObjectStoreDirectoryBackend(client, config.object_root, config.content_root_name)
    return LocalDirectoryBackend(config.content_root, config.content_root_name)
