"""Core constants used across csvlens modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONTENT_ROOT = Path("public") / "server-data"
DEFAULT_CONTENT_ROOT_NAME = "server-data"
DEFAULT_PUBLIC_PREFIX = "/server-data/"
DEFAULT_PRESIGN_ROUTE = "/api/s3-presign"
DEFAULT_S3_REGION = "us-east-1"
OBJECT_URI_SCHEME = "s3://"
OBJECT_KEY_DELIMITER = "/"
CSV_EXTENSION = ".csv"
DEFAULT_PRESIGN_EXPIRES_SECONDS = 300
MIN_PRESIGN_EXPIRES_SECONDS = 60
MAX_PRESIGN_EXPIRES_SECONDS = 60 * 60 * 24 * 7
DEFAULT_TABLE_LABEL = "CSV preview"
TEXT_ENCODING = "utf-8"
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".avif", ".svg")
DEFAULT_CONTENT_TYPE = "application/octet-stream"
CONTENT_TYPES_BY_EXTENSION = {
    ".csv": "text/csv; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml; charset=utf-8",
    ".txt": "text/plain; charset=utf-8",
    ".json": "application/json; charset=utf-8",
}
