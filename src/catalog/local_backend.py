"""Local filesystem catalog backend.

A directory is listed only when its subtree holds at least one CSV
file. The containment search is breadth-first and skips hidden entries,
symbolic links, and subdirectories that cannot be read.
"""

from __future__ import annotations

from collections import deque
from pathlib import Path

from catalog.directory_catalog import is_csv_name
from core.errors import DirectoryUnavailableError, error_for_rejection
from core.logging_config import get_logger
from core.path_resolver import resolve_against_root
from core.types import DirectoryEntry, Rejected

_LOGGER = get_logger(__name__)


class LocalDirectoryBackend:
    """Catalog backend reading a local content root."""

    def __init__(self, root_dir: Path, root_name: str) -> None:
        self._root_dir = root_dir
        self._root_name = root_name

    def list(self, server_dir: str) -> list[DirectoryEntry]:
        """List CSV files and CSV-bearing directories below a server path.

        Args:
            server_dir: Normalized server directory ending with ``/``.

        Returns:
            Unsorted entries whose paths are server paths.

        Raises:
            OutOfBoundsError: If the directory escapes the content root.
            DirectoryUnavailableError: If the directory cannot be read.
        """
        resolved = resolve_against_root(server_dir, self._root_dir, self._root_name)
        if isinstance(resolved, Rejected):
            raise error_for_rejection(resolved)
        try:
            children = sorted(resolved.iterdir())
        except OSError as error:
            _LOGGER.warning("directory_listing_failed", path=server_dir, error=str(error))
            raise DirectoryUnavailableError(
                f"Failed to list {server_dir}: {error.strerror or error}. "
                "Check that the directory exists and is readable."
            ) from error
        entries: list[DirectoryEntry] = []
        for child in children:
            if child.name.startswith(".") or child.is_symlink():
                continue
            if child.is_file():
                if is_csv_name(child.name):
                    entries.append(_to_entry(server_dir, child.name, is_directory=False))
            elif child.is_dir() and contains_csv(child):
                entries.append(_to_entry(server_dir, child.name, is_directory=True))
        return entries


def contains_csv(directory: Path) -> bool:
    """Return whether a directory subtree holds a visible CSV file.

    Args:
        directory: Directory to search breadth-first.

    Returns:
        True as soon as one ``.csv`` file is found at any depth.
    """
    queue: deque[Path] = deque([directory])
    while queue:
        current = queue.popleft()
        try:
            children = list(current.iterdir())
        except OSError as error:
            _LOGGER.debug("csv_search_skipped_directory", path=str(current), error=str(error))
            continue
        for child in children:
            if child.name.startswith(".") or child.is_symlink():
                continue
            if child.is_file() and is_csv_name(child.name):
                return True
            if child.is_dir():
                queue.append(child)
    return False


def _to_entry(server_dir: str, name: str, is_directory: bool) -> DirectoryEntry:
    path = f"{server_dir.rstrip('/')}/{name}"
    if is_directory:
        path += "/"
    return DirectoryEntry(name=name, path=path, is_directory=is_directory)
