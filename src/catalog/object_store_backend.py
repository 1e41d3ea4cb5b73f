"""Object-store catalog backend.

Lists one delimiter-scoped level of keys below the configured root.
Every common prefix is trusted as a directory; unlike the local
backend, nested CSV presence is not verified.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from catalog.directory_catalog import is_csv_name
from core.constants import OBJECT_KEY_DELIMITER
from core.errors import DirectoryUnavailableError
from core.logging_config import get_logger
from core.object_uri import join_object_prefix
from core.path_resolver import server_to_virtual
from core.types import DirectoryEntry, ObjectRoot

_LOGGER = get_logger(__name__)


class ObjectStoreDirectoryBackend:
    """Catalog backend reading an object-store prefix."""

    def __init__(self, s3_client: Any, root: ObjectRoot, root_name: str) -> None:
        self._s3_client = s3_client
        self._root = root
        self._root_name = root_name

    def list(self, server_dir: str) -> list[DirectoryEntry]:
        """List common prefixes and CSV objects directly below a server path.

        Args:
            server_dir: Normalized server directory ending with ``/``.

        Returns:
            Unsorted entries whose paths are server paths.

        Raises:
            DirectoryUnavailableError: If the listing call fails.
        """
        relative = server_to_virtual(server_dir, self._root_name).lstrip("/")
        prefix = join_object_prefix(self._root.prefix, relative)
        try:
            directory_names, file_names = self._collect_names(prefix)
        except (BotoCoreError, ClientError) as error:
            _LOGGER.warning(
                "directory_listing_failed",
                bucket=self._root.bucket,
                prefix=prefix,
                error=str(error),
            )
            raise DirectoryUnavailableError(
                f"Failed to list s3://{self._root.bucket}/{prefix}: {error}. "
                "Check the bucket, prefix, and credentials, then retry."
            ) from error
        base = server_dir.rstrip("/")
        entries = [
            DirectoryEntry(name=name, path=f"{base}/{name}/", is_directory=True)
            for name in sorted(directory_names)
        ]
        entries.extend(
            DirectoryEntry(name=name, path=f"{base}/{name}", is_directory=False)
            for name in sorted(file_names)
        )
        return entries

    def _collect_names(self, prefix: str) -> tuple[set[str], set[str]]:
        """Page through one listing level and collect child names.

        Args:
            prefix: Key prefix ending with ``/``, or empty for the bucket root.

        Returns:
            Directory names and CSV file names directly below the prefix.
        """
        paginator = self._s3_client.get_paginator("list_objects_v2")
        pages = paginator.paginate(
            Bucket=self._root.bucket,
            Prefix=prefix,
            Delimiter=OBJECT_KEY_DELIMITER,
        )
        directory_names: set[str] = set()
        file_names: set[str] = set()
        for page in pages:
            for common_prefix in page.get("CommonPrefixes", []):
                name = _directory_name(common_prefix.get("Prefix", ""), prefix)
                if name:
                    directory_names.add(name)
            for obj in page.get("Contents", []):
                name = _file_name(obj.get("Key", ""), prefix)
                if name:
                    file_names.add(name)
        return directory_names, file_names


def _directory_name(child_prefix: str, prefix: str) -> str | None:
    if not child_prefix.startswith(prefix) or child_prefix == prefix:
        return None
    segments = [segment for segment in child_prefix[len(prefix):].split("/") if segment]
    if not segments or segments[0].startswith("."):
        return None
    return segments[0]


def _file_name(key: str, prefix: str) -> str | None:
    if not key.startswith(prefix) or key == prefix:
        return None
    remainder = key[len(prefix):]
    if "/" in remainder or remainder.startswith(".") or not is_csv_name(remainder):
        return None
    return remainder
