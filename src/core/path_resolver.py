"""Address translation between virtual, server, and filesystem paths.

A virtual path (``/reports/a.csv``) is the externally visible route.
A server path (``server-data/reports/a.csv``) is the same location
rooted at the content-root name. This module converts between the two
and enforces the traversal boundary. Rejections are returned as typed
``Rejected`` values; callers branch on them explicitly.
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import unquote

from core.constants import DEFAULT_CONTENT_ROOT_NAME, DEFAULT_TABLE_LABEL
from core.types import Breadcrumb, Rejected

_DUPLICATE_SLASHES = re.compile(r"/+")
_LEADING_CURRENT_DIR = re.compile(r"^\./+")


def normalize_virtual_path(raw: str) -> str | Rejected:
    """Normalize a requested virtual path.

    Args:
        raw: Raw, possibly percent-encoded route path.

    Returns:
        Absolute, traversal-free virtual path, or an ``out_of_bounds``
        rejection when any segment is ``..``.
    """
    decoded = unquote(raw.strip()).replace("\\", "/")
    normalized = _DUPLICATE_SLASHES.sub("/", f"/{decoded}")
    if _has_parent_segment(normalized):
        return _out_of_bounds(raw)
    return normalized


def virtual_to_server(virtual_path: str, root_name: str = DEFAULT_CONTENT_ROOT_NAME) -> str:
    """Convert a virtual path into a server path."""
    return f"{root_name}/{virtual_path.lstrip('/')}"


def server_to_virtual(server_path: str, root_name: str = DEFAULT_CONTENT_ROOT_NAME) -> str:
    """Convert a server path into a virtual path."""
    return f"/{_strip_root_name(server_path, root_name).lstrip('/')}"


def resolve_against_root(
    server_path: str,
    root_dir: Path,
    root_name: str = DEFAULT_CONTENT_ROOT_NAME,
) -> Path | Rejected:
    """Resolve a server path to a filesystem path inside the content root.

    Args:
        server_path: Server path, or a path relative to the content root.
        root_dir: Configured content-root directory.
        root_name: Content-root name prefixing server paths.

    Returns:
        Fully resolved filesystem path, or an ``out_of_bounds`` rejection
        when the resolved location escapes the resolved root.
    """
    relative = _strip_root_name(server_path.replace("\\", "/"), root_name)
    return resolve_relative_to_root(relative, root_dir)


def resolve_relative_to_root(relative_path: str, root_dir: Path) -> Path | Rejected:
    """Resolve an already root-relative path inside the content root.

    Unlike ``resolve_against_root`` no root name is stripped, so a
    subdirectory that shares the root's name is addressed as itself.
    """
    relative = relative_path.replace("\\", "/").lstrip("/")
    resolved_root = root_dir.resolve()
    resolved = (resolved_root / relative).resolve()
    if resolved != resolved_root and resolved_root not in resolved.parents:
        return _out_of_bounds(relative_path)
    return resolved


def normalize_server_directory(
    raw: str | None,
    root_name: str = DEFAULT_CONTENT_ROOT_NAME,
) -> str | Rejected:
    """Normalize a requested directory into a server path.

    Args:
        raw: Requested directory; empty or None means the content root.
        root_name: Content-root name prefixing server paths.

    Returns:
        Server path ending with ``/``, or an ``out_of_bounds`` rejection.
    """
    value = (raw or "").strip().replace("\\", "/")
    value = _LEADING_CURRENT_DIR.sub("", value).lstrip("/")
    if value != root_name and not value.startswith(f"{root_name}/"):
        value = f"{root_name}/{value}"
    value = _DUPLICATE_SLASHES.sub("/", value)
    if not value.endswith("/"):
        value += "/"
    if _has_parent_segment(value):
        return _out_of_bounds(raw or "")
    return value


def normalize_server_file(
    raw: str | None,
    root_name: str = DEFAULT_CONTENT_ROOT_NAME,
) -> str | Rejected:
    """Normalize a requested file into a content-root-relative path.

    Args:
        raw: Requested file as a server path or root-relative path.
        root_name: Content-root name prefixing server paths.

    Returns:
        Relative file path, or a ``missing_parameter`` or
        ``out_of_bounds`` rejection.
    """
    value = (raw or "").strip().replace("\\", "/")
    value = _LEADING_CURRENT_DIR.sub("", value.lstrip("/"))
    value = _strip_root_name(value, root_name).lstrip("/")
    if not value:
        return Rejected(
            code="missing_parameter",
            reason="Missing file path: provide a path below the content root.",
        )
    if _has_parent_segment(value):
        return _out_of_bounds(value)
    return value


def parent_directory(
    server_dir: str,
    root_name: str = DEFAULT_CONTENT_ROOT_NAME,
) -> str | None:
    """Return the parent server directory, or None at the content root."""
    parts = [part for part in server_dir.split("/") if part]
    if len(parts) <= 1 or parts[0] != root_name:
        return None
    return "/".join(parts[:-1]) + "/"


def build_breadcrumbs(
    server_dir: str,
    root_name: str = DEFAULT_CONTENT_ROOT_NAME,
) -> list[Breadcrumb]:
    """Build navigation breadcrumbs below the content root.

    Args:
        server_dir: Normalized server directory path.
        root_name: Content-root name prefixing server paths.

    Returns:
        One crumb per segment below the root, the last one current.
    """
    parts = [part for part in _strip_root_name(server_dir, root_name).split("/") if part]
    crumbs: list[Breadcrumb] = []
    accumulated = f"{root_name}/"
    for index, part in enumerate(parts):
        accumulated = f"{accumulated}{part}/"
        crumbs.append(
            Breadcrumb(label=part, path=accumulated, is_current=index == len(parts) - 1)
        )
    return crumbs


def label_for_virtual_path(virtual_path: str) -> str:
    """Return the display label for a virtual path."""
    segments = [segment for segment in virtual_path.split("/") if segment]
    return segments[-1] if segments else DEFAULT_TABLE_LABEL


def _strip_root_name(path: str, root_name: str) -> str:
    if path == root_name:
        return ""
    if path.startswith(f"{root_name}/"):
        return path[len(root_name) + 1:]
    return path


def _has_parent_segment(path: str) -> bool:
    return any(segment == ".." for segment in path.split("/"))


def _out_of_bounds(path: str) -> Rejected:
    return Rejected(
        code="out_of_bounds",
        reason=(
            f"Path '{path}' escapes the content root. "
            "Request a location below the content root without '..' segments."
        ),
    )
