"""csvlens exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each error carries the boundary code surfaced to callers.
"""

from __future__ import annotations

from core.types import ErrorCode, Rejected


class CsvLensError(Exception):
    """Base exception for all csvlens failures."""

    code: ErrorCode = "internal_error"


class CsvLensConfigError(CsvLensError):
    """Raised for invalid runtime configuration."""

    code: ErrorCode = "invalid_config"


class CsvLensDependencyError(CsvLensError):
    """Raised when an optional runtime dependency is missing."""

    code: ErrorCode = "missing_dependency"


class MissingParameterError(CsvLensError):
    """Raised when a required path or URI was not supplied."""

    code: ErrorCode = "missing_parameter"


class InvalidUriError(CsvLensError):
    """Raised for malformed object-store URIs."""

    code: ErrorCode = "invalid_uri"


class OutOfBoundsError(CsvLensError):
    """Raised when a location escapes the configured content root."""

    code: ErrorCode = "out_of_bounds"


class NotFoundError(CsvLensError):
    """Raised when a requested file cannot be read."""

    code: ErrorCode = "not_found"


class NotAFileError(CsvLensError):
    """Raised when a requested file path names something else."""

    code: ErrorCode = "not_a_file"


class DirectoryUnavailableError(CsvLensError):
    """Raised when a directory or prefix cannot be listed."""

    code: ErrorCode = "directory_unavailable"


class PresignError(CsvLensError):
    """Raised when the object store cannot sign a download URL."""

    code: ErrorCode = "presign_failed"


_ERRORS_BY_CODE: dict[str, type[CsvLensError]] = {
    "missing_parameter": MissingParameterError,
    "invalid_uri": InvalidUriError,
    "out_of_bounds": OutOfBoundsError,
    "not_found": NotFoundError,
    "not_a_file": NotAFileError,
    "directory_unavailable": DirectoryUnavailableError,
    "presign_failed": PresignError,
    "invalid_config": CsvLensConfigError,
    "missing_dependency": CsvLensDependencyError,
}


def error_for_rejection(rejected: Rejected) -> CsvLensError:
    """Build the exception matching a typed rejection.

    Args:
        rejected: Rejection returned by a resolver function.

    Returns:
        Exception instance whose ``code`` equals the rejection code;
        the base error with code ``internal_error`` for unmapped codes.
    """
    if rejected.code not in _ERRORS_BY_CODE:
        return CsvLensError(rejected.reason)
    return _ERRORS_BY_CODE[rejected.code](rejected.reason)
