"""Runtime configuration model for csvlens.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CONTENT_ROOT,
    DEFAULT_CONTENT_ROOT_NAME,
    DEFAULT_PRESIGN_EXPIRES_SECONDS,
    DEFAULT_PRESIGN_ROUTE,
    DEFAULT_PUBLIC_PREFIX,
    DEFAULT_S3_REGION,
    MAX_PRESIGN_EXPIRES_SECONDS,
    MIN_PRESIGN_EXPIRES_SECONDS,
)
from core.errors import CsvLensConfigError
from core.object_uri import parse_object_root
from core.types import ObjectRoot, Rejected


@dataclass(frozen=True)
class CsvLensConfig:
    """Validated runtime configuration.

    Attributes:
        content_root: Local directory holding the datasets.
        content_root_name: Name that prefixes every server path.
        s3_region: Region for object-store clients.
        s3_endpoint: Optional endpoint override for S3-compatible stores.
        s3_force_path_style: Whether to use path-style bucket addressing.
        s3_profile: Optional AWS profile for boto3 session initialization.
        presign_expires_seconds: Lifetime of presigned URLs.
        object_root: Object-store content root; None means local mode.
        public_prefix: Public mount prefix for served assets.
        presign_route: Route of the presigning proxy.
    """

    content_root: Path
    content_root_name: str = DEFAULT_CONTENT_ROOT_NAME
    s3_region: str = DEFAULT_S3_REGION
    s3_endpoint: str | None = None
    s3_force_path_style: bool = False
    s3_profile: str | None = None
    presign_expires_seconds: int = DEFAULT_PRESIGN_EXPIRES_SECONDS
    object_root: ObjectRoot | None = None
    public_prefix: str = DEFAULT_PUBLIC_PREFIX
    presign_route: str = DEFAULT_PRESIGN_ROUTE

    @property
    def uses_object_store(self) -> bool:
        """Whether the content root lives in an object store."""
        return self.object_root is not None

    @classmethod
    def from_env(cls) -> "CsvLensConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CsvLensConfigError: If environment values are invalid.
        """
        content_root_value = os.getenv("CSVLENS_CONTENT_ROOT", str(DEFAULT_CONTENT_ROOT))
        s3_region = (
            os.getenv("CSVLENS_S3_REGION")
            or os.getenv("AWS_REGION")
            or os.getenv("AWS_DEFAULT_REGION")
            or DEFAULT_S3_REGION
        )
        return cls(
            content_root=Path(content_root_value).expanduser().resolve(),
            content_root_name=os.getenv("CSVLENS_CONTENT_ROOT_NAME", DEFAULT_CONTENT_ROOT_NAME),
            s3_region=s3_region,
            s3_endpoint=os.getenv("CSVLENS_S3_ENDPOINT") or None,
            s3_force_path_style=os.getenv("CSVLENS_S3_FORCE_PATH_STYLE") == "true",
            s3_profile=os.getenv("CSVLENS_S3_PROFILE") or None,
            presign_expires_seconds=clamp_presign_expires(os.getenv("CSVLENS_S3_PRESIGN_EXPIRES")),
            object_root=parse_object_root_setting(os.getenv("CSVLENS_S3_ROOT")),
            public_prefix=os.getenv("CSVLENS_PUBLIC_PREFIX", DEFAULT_PUBLIC_PREFIX),
            presign_route=os.getenv("CSVLENS_PRESIGN_ROUTE", DEFAULT_PRESIGN_ROUTE),
        )


def clamp_presign_expires(raw_value: str | None) -> int:
    """Parse and clamp the presigned URL lifetime.

    Args:
        raw_value: Raw seconds value from environment.

    Returns:
        Rounded seconds within [60, 604800]; the default for missing
        or non-numeric values.
    """
    if not raw_value:
        return DEFAULT_PRESIGN_EXPIRES_SECONDS
    try:
        parsed = float(raw_value)
    except ValueError:
        return DEFAULT_PRESIGN_EXPIRES_SECONDS
    if not math.isfinite(parsed):
        return DEFAULT_PRESIGN_EXPIRES_SECONDS
    return min(MAX_PRESIGN_EXPIRES_SECONDS, max(MIN_PRESIGN_EXPIRES_SECONDS, round(parsed)))


def parse_object_root_setting(raw_value: str | None) -> ObjectRoot | None:
    """Parse the optional object-store content root setting.

    Args:
        raw_value: Raw ``s3://bucket/prefix`` value from environment.

    Returns:
        Parsed root, or None when unset.

    Raises:
        CsvLensConfigError: If the value is set but not a valid root URI.
    """
    if raw_value is None or not raw_value.strip():
        return None
    root = parse_object_root(raw_value)
    if isinstance(root, Rejected):
        raise CsvLensConfigError(
            f"Invalid CSVLENS_S3_ROOT value '{raw_value}': expected s3://bucket/prefix. "
            "Unset CSVLENS_S3_ROOT to browse the local content root."
        )
    return root
