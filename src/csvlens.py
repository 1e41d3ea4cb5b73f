"""Public SDK surface for csvlens.

This module provides a stable import path for library users.
It re-exports the primary client, typed models, and core functions.
"""

from __future__ import annotations

from catalog.directory_catalog import list_directory, sort_entries
from core.config import CsvLensConfig
from core.errors import CsvLensError
from core.object_uri import https_to_object_uri, join_object_prefix, parse_object_uri
from core.path_resolver import (
    normalize_virtual_path,
    resolve_against_root,
    resolve_relative_to_root,
    server_to_virtual,
    virtual_to_server,
)
from core.types import DirectoryEntry, ObjectAddress, Rejected, ServedAsset
from store.viewer_sdk import CsvLensClient
from tabular.asset_locator import resolve_asset_reference
from tabular.csv_tokenizer import tokenize

__all__ = [
    "CsvLensClient",
    "CsvLensConfig",
    "CsvLensError",
    "DirectoryEntry",
    "ObjectAddress",
    "Rejected",
    "ServedAsset",
    "https_to_object_uri",
    "join_object_prefix",
    "list_directory",
    "normalize_virtual_path",
    "parse_object_uri",
    "resolve_against_root",
    "resolve_relative_to_root",
    "resolve_asset_reference",
    "server_to_virtual",
    "sort_entries",
    "tokenize",
    "virtual_to_server",
]
