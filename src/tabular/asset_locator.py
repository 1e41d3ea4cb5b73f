"""Cell value dereferencing rules.

This module decides which fetchable reference a rendered cell value
points at: a presigning proxy route for object-store URIs, an
unchanged external URL, or a path under the public content mount.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from core.constants import DEFAULT_PRESIGN_ROUTE, DEFAULT_PUBLIC_PREFIX
from core.object_uri import https_to_object_uri, parse_object_uri
from core.types import Rejected

_DUPLICATE_SLASHES = re.compile(r"/+")
_LEADING_CURRENT_DIR = re.compile(r"^\./+")
# ".." only when it forms a whole segment, followed by a separator or the end.
_PARENT_SEGMENT = re.compile(r"(?<![^/\\])\.\.(?:[/\\]|$)")
_ABSOLUTE_URL = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*://")
# Characters encodeURIComponent leaves untouched, beyond the quote() defaults.
_URI_COMPONENT_SAFE = "!~*'()"


def resolve_asset_reference(
    value: str,
    base_directory: str = "",
    *,
    public_prefix: str = DEFAULT_PUBLIC_PREFIX,
    presign_route: str = DEFAULT_PRESIGN_ROUTE,
) -> str | None:
    """Decide how a cell value should be fetched.

    Relative values have ``..`` segments removed silently rather than
    rejected, unlike the server-side path resolver.

    Args:
        value: Raw cell value.
        base_directory: Directory of the viewed dataset, relative to the
            content root. Empty means the content root itself.
        public_prefix: Public mount prefix for content-root files.
        presign_route: Route of the presigning proxy.

    Returns:
        Dereferenceable reference, or None for blank values.
    """
    trimmed = value.strip()
    if not trimmed:
        return None
    if not isinstance(parse_object_uri(trimmed), Rejected):
        return presign_reference(trimmed, presign_route)
    if is_absolute_like_url(trimmed) or trimmed.startswith("data:"):
        object_uri = https_to_object_uri(trimmed)
        if isinstance(object_uri, Rejected):
            return trimmed
        return presign_reference(object_uri, presign_route)
    if trimmed.startswith(public_prefix) or trimmed.startswith("/"):
        return collapse_slashes(trimmed)
    relative = _PARENT_SEGMENT.sub("", _LEADING_CURRENT_DIR.sub("", trimmed))
    directory = _PARENT_SEGMENT.sub("", base_directory.strip().lstrip("/"))
    if directory and not directory.endswith("/"):
        directory += "/"
    return collapse_slashes(f"{public_prefix}{directory}{relative}")


def presign_reference(object_uri: str, presign_route: str = DEFAULT_PRESIGN_ROUTE) -> str:
    """Return the presigning proxy route for an object URI."""
    return f"{presign_route}?uri={quote(object_uri, safe=_URI_COMPONENT_SAFE)}"


def is_absolute_like_url(value: str) -> bool:
    """Return whether a value has a URL scheme or is protocol-relative."""
    return bool(_ABSOLUTE_URL.match(value)) or value.startswith("//")


def collapse_slashes(value: str) -> str:
    """Collapse runs of ``/`` into one."""
    return _DUPLICATE_SLASHES.sub("/", value)
