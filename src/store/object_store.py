"""Object-store client helpers.

This module encapsulates boto3 client creation and URL presigning.
It is shared by the object-store catalog backend and content sources.
"""

from __future__ import annotations

from typing import Any

from core.config import CsvLensConfig
from core.errors import CsvLensDependencyError, PresignError
from core.logging_config import get_logger
from core.types import ObjectAddress

_LOGGER = get_logger(__name__)


def create_s3_client(config: CsvLensConfig) -> Any:
    """Create a boto3 S3 client from runtime config.

    Args:
        config: Runtime config with region, endpoint, and addressing style.

    Returns:
        Boto3 S3 client.

    Raises:
        CsvLensDependencyError: If boto3 is missing.
    """
    try:
        import boto3
        from botocore.config import Config
    except ImportError as error:
        raise CsvLensDependencyError(
            "Object-store access requires boto3, but it is not installed. "
            "Install boto3 to browse s3:// content roots or presign s3:// assets."
        ) from error
    session = boto3.session.Session(**_build_session_kwargs(config))
    client_kwargs: dict[str, Any] = {}
    if config.s3_endpoint:
        client_kwargs["endpoint_url"] = config.s3_endpoint
    if config.s3_force_path_style:
        client_kwargs["config"] = Config(s3={"addressing_style": "path"})
    return session.client("s3", **client_kwargs)


def presign_get_url(s3_client: Any, address: ObjectAddress, expires_seconds: int) -> str:
    """Generate a presigned GET URL for one object.

    Args:
        s3_client: Boto3 S3 client.
        address: Object to sign.
        expires_seconds: URL lifetime in seconds.

    Returns:
        Presigned URL.

    Raises:
        PresignError: If the client cannot sign the request.
    """
    try:
        url = s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": address.bucket, "Key": address.key},
            ExpiresIn=expires_seconds,
        )
    except Exception as error:
        raise PresignError(
            f"Failed to presign {address.uri}: {error}. "
            "Check object-store credentials and region settings."
        ) from error
    _LOGGER.info("object_presigned", uri=address.uri, expires_seconds=expires_seconds)
    return str(url)


def _build_session_kwargs(config: CsvLensConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {"region_name": config.s3_region}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    return kwargs
