"""Display classification for cell values."""

from __future__ import annotations

from urllib.parse import urlsplit

from core.constants import IMAGE_EXTENSIONS
from core.types import CellKind


def classify_cell(value: str, resolved: str | None = None) -> CellKind:
    """Classify a cell as empty, image, link, or plain text.

    Args:
        value: Raw cell value.
        resolved: Reference produced by the asset locator, if any.

    Returns:
        Display kind of the cell.
    """
    trimmed = value.strip()
    if not trimmed:
        return "empty"
    media_value = resolved or trimmed
    if is_image_value(trimmed) or is_image_value(media_value):
        return "image"
    if is_url(media_value):
        return "link"
    return "text"


def is_image_value(value: str) -> bool:
    """Return whether a value names an image by data URI or extension."""
    if value.startswith("data:image/"):
        return True
    stripped = value.split("?", 1)[0].lower()
    return stripped.endswith(IMAGE_EXTENSIONS)


def is_url(value: str) -> bool:
    """Return whether a value parses as an absolute URL."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return len(parts.scheme) > 1 and bool(parts.netloc or parts.path)
