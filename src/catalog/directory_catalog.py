"""Directory catalog entry point and backend protocol."""

from __future__ import annotations

from typing import Protocol

from core.constants import CSV_EXTENSION
from core.errors import error_for_rejection
from core.logging_config import get_logger
from core.path_resolver import normalize_server_directory
from core.types import DirectoryEntry, Rejected

_LOGGER = get_logger(__name__)


class DirectoryBackend(Protocol):
    """Listing capability shared by all catalog backends."""

    def list(self, server_dir: str) -> list[DirectoryEntry]:
        """List the immediate children of a normalized server directory."""
        ...


def list_directory(
    path: str | None,
    backend: DirectoryBackend,
    root_name: str,
) -> list[DirectoryEntry]:
    """List a directory through a backend in display order.

    Args:
        path: Requested directory; empty or None means the content root.
        backend: Listing backend for the configured storage mode.
        root_name: Content-root name prefixing server paths.

    Returns:
        Directories first, then files, each ordered by ``path``.

    Raises:
        OutOfBoundsError: If the path contains a ``..`` segment.
        DirectoryUnavailableError: If the backend cannot list it.
    """
    server_dir = normalize_server_directory(path, root_name)
    if isinstance(server_dir, Rejected):
        raise error_for_rejection(server_dir)
    entries = sort_entries(backend.list(server_dir))
    _LOGGER.info("directory_listed", path=server_dir, entry_count=len(entries))
    return entries


def sort_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Order entries with directories first, ties broken by path."""
    return sorted(entries, key=lambda entry: (not entry.is_directory, entry.path))


def is_csv_name(name: str) -> bool:
    """Return whether a file name has the ``.csv`` extension."""
    return name.lower().endswith(CSV_EXTENSION)
