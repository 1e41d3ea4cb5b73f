"""Object-store URI parsing helpers.

This module centralizes ``s3://`` URI recognition for the catalog,
content source, and asset locator layers. Every function returns a
typed ``Rejected`` value instead of raising on bad input.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.constants import OBJECT_KEY_DELIMITER, OBJECT_URI_SCHEME
from core.types import ObjectAddress, ObjectRoot, Rejected

_DUPLICATE_SLASHES = re.compile(r"/+")
_VIRTUAL_HOSTED_PATTERNS = (
    re.compile(r"^(.+)\.s3[.-][a-z0-9-]+\.amazonaws\.com$", re.IGNORECASE),
    re.compile(r"^(.+)\.s3\.amazonaws\.com$", re.IGNORECASE),
)
_PATH_STYLE_PATTERN = re.compile(r"^s3([.-][a-z0-9-]+)?\.amazonaws\.com$", re.IGNORECASE)


def parse_object_uri(uri: str) -> ObjectAddress | Rejected:
    """Parse and validate an object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair, or an ``invalid_uri`` rejection.
    """
    without_scheme = _strip_scheme(uri)
    if without_scheme is None:
        return _invalid_uri(uri)
    bucket, _, key = without_scheme.partition("/")
    if not bucket or not key:
        return _invalid_uri(uri)
    return ObjectAddress(bucket=bucket, key=key)


def parse_object_root(uri: str) -> ObjectRoot | Rejected:
    """Parse the configured object-store content root.

    Unlike ``parse_object_uri`` the prefix may be empty, which makes
    the bucket itself the content root.

    Args:
        uri: URI in format ``s3://bucket`` or ``s3://bucket/prefix``.

    Returns:
        Parsed root with a normalized prefix, or a rejection.
    """
    without_scheme = _strip_scheme(uri)
    if without_scheme is None:
        return _invalid_uri(uri)
    bucket, _, prefix = without_scheme.partition("/")
    if not bucket:
        return _invalid_uri(uri)
    prefix = prefix.replace("\\", "/").lstrip("/")
    if prefix and not prefix.endswith(OBJECT_KEY_DELIMITER):
        prefix += OBJECT_KEY_DELIMITER
    return ObjectRoot(bucket=bucket, prefix=prefix)


def join_object_prefix(base_prefix: str, relative: str) -> str:
    """Join a root key prefix with a relative directory.

    Args:
        base_prefix: Configured root prefix.
        relative: Directory path relative to the content root.

    Returns:
        Key prefix with single slashes and one trailing slash, or an
        empty string when both parts are empty.
    """
    base = base_prefix.replace("\\", "/").lstrip("/")
    rest = relative.replace("\\", "/").lstrip("/")
    joined = _DUPLICATE_SLASHES.sub("/", f"{base}{rest}")
    if not joined or joined.endswith(OBJECT_KEY_DELIMITER):
        return joined
    return f"{joined}{OBJECT_KEY_DELIMITER}"


def object_key_for(root: ObjectRoot, relative: str) -> str:
    """Return the object key of a content-root-relative file."""
    return _DUPLICATE_SLASHES.sub("/", f"{root.prefix}{relative}")


def https_to_object_uri(url: str) -> str | Rejected:
    """Convert an HTTP(S) object-store URL into an ``s3://`` URI.

    Recognizes virtual-hosted style (``bucket.s3.<region>.amazonaws.com/key``)
    and path style (``s3.<region>.amazonaws.com/bucket/key``) addressing.

    Args:
        url: Absolute URL taken from a cell value.

    Returns:
        Equivalent ``s3://bucket/key`` URI, or an ``invalid_uri`` rejection.
    """
    if url.startswith("data:"):
        return _invalid_uri(url)
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return _invalid_uri(url)
    if not host:
        return _invalid_uri(url)
    path = parts.path.lstrip("/")
    for pattern in _VIRTUAL_HOSTED_PATTERNS:
        match = pattern.match(host)
        if match:
            if not path:
                return _invalid_uri(url)
            return f"{OBJECT_URI_SCHEME}{match.group(1)}/{path}"
    if _PATH_STYLE_PATTERN.match(host):
        bucket, _, key = path.partition("/")
        if bucket and key:
            return f"{OBJECT_URI_SCHEME}{bucket}/{key}"
    return _invalid_uri(url)


def _strip_scheme(uri: str) -> str | None:
    """Return the URI without its ``s3://`` scheme, or None if absent."""
    trimmed = uri.strip()
    if not trimmed.lower().startswith(OBJECT_URI_SCHEME):
        return None
    return trimmed[len(OBJECT_URI_SCHEME):]


def _invalid_uri(uri: str) -> Rejected:
    return Rejected(
        code="invalid_uri",
        reason=(
            f"Invalid object URI '{uri}': expected s3://bucket/key. "
            "Provide both bucket and key."
        ),
    )
