"""Shared typed models.

This module defines immutable data models used by the resolver,
catalog, content source, and SDK layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorCode = Literal[
    "missing_parameter",
    "invalid_uri",
    "out_of_bounds",
    "not_found",
    "not_a_file",
    "directory_unavailable",
    "presign_failed",
    "invalid_config",
    "missing_dependency",
    "internal_error",
]
CellKind = Literal["empty", "image", "link", "text"]
Row = list[str]


@dataclass(frozen=True)
class Rejected:
    """Typed rejection returned instead of a resolved value.

    Attributes:
        code: Boundary error code for the rejection.
        reason: Human-readable explanation with a suggested fix.
    """

    code: ErrorCode
    reason: str


@dataclass(frozen=True)
class ObjectAddress:
    """Bucket and key pair identifying one object."""

    bucket: str
    key: str

    @property
    def uri(self) -> str:
        """Return the ``s3://bucket/key`` form of this address."""
        return f"s3://{self.bucket}/{self.key}"


@dataclass(frozen=True)
class ObjectRoot:
    """Object-store content root.

    Attributes:
        bucket: Bucket holding the content root.
        prefix: Key prefix, empty or ending with ``/``.
    """

    bucket: str
    prefix: str


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a listed directory.

    Attributes:
        name: Entry name without any parent segments.
        path: Server path of the entry; directories end with ``/``.
        is_directory: Whether the entry is a directory.
    """

    name: str
    path: str
    is_directory: bool

    def to_wire(self) -> dict[str, object]:
        """Return the JSON wire shape of this entry."""
        return {"name": self.name, "path": self.path, "isDirectory": self.is_directory}


@dataclass(frozen=True)
class Breadcrumb:
    """Navigation crumb for one directory segment."""

    label: str
    path: str
    is_current: bool


@dataclass(frozen=True)
class ServedAsset:
    """Result of opening an asset for serving.

    Exactly one of ``body`` and ``redirect_url`` is set.

    Attributes:
        content_type: MIME type guessed from the file extension.
        body: Raw file bytes for locally served assets.
        redirect_url: Presigned URL for object-store assets.
    """

    content_type: str
    body: bytes | None = None
    redirect_url: str | None = None
