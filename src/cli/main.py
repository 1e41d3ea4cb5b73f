"""csvlens CLI entry points.

This module exposes directory listing, table preview, and asset
commands. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import CsvLensConfig, parse_object_root_setting
from core.errors import CsvLensError, error_for_rejection
from core.path_resolver import (
    build_breadcrumbs,
    normalize_server_directory,
    normalize_virtual_path,
    parent_directory,
)
from core.types import Rejected, Row
from store.viewer_sdk import CsvLensClient
from tabular.cell_kind import classify_cell
from tabular.csv_tokenizer import pad_rows


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="csvlens", description="Browse and preview CSV datasets")
    parser.add_argument("--content-root", help="Override CSVLENS_CONTENT_ROOT for this command")
    parser.add_argument("--object-root", help="Override CSVLENS_S3_ROOT with s3://bucket/prefix")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ls_command(subparsers)
    _add_preview_command(subparsers)
    _add_resolve_asset_command(subparsers)
    _add_presign_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the csvlens CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.content_root, args.object_root)
        if args.command == "ls":
            return _run_ls_command(client, args)
        if args.command == "preview":
            return _run_preview_command(client, args)
        if args.command == "resolve-asset":
            return _run_resolve_asset_command(client, args)
        if args.command == "presign":
            return _run_presign_command(client, args)
    except CsvLensError as error:
        print(f"error={error.code}")
        print(f"message={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(content_root: str | None, object_root: str | None) -> CsvLensClient:
    """Build SDK client with optional root overrides.

    Args:
        content_root: Optional local content-root override.
        object_root: Optional object-store root override.

    Returns:
        Configured SDK client.
    """
    config = CsvLensConfig.from_env()
    if content_root:
        config = replace(config, content_root=Path(content_root).expanduser().resolve())
    if object_root:
        config = replace(config, object_root=parse_object_root_setting(object_root))
    return CsvLensClient(config)


def _run_ls_command(client: CsvLensClient, args: argparse.Namespace) -> int:
    """Handle ls command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    entries = client.list_directory(args.path)
    root_name = client.config.content_root_name
    server_dir = normalize_server_directory(args.path, root_name)
    if isinstance(server_dir, Rejected):
        raise error_for_rejection(server_dir)
    payload = {
        "path": server_dir,
        "parent": parent_directory(server_dir, root_name),
        "breadcrumbs": [crumb.path for crumb in build_breadcrumbs(server_dir, root_name)],
        "entries": [entry.to_wire() for entry in entries],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def _run_preview_command(client: CsvLensClient, args: argparse.Namespace) -> int:
    """Handle preview command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    rows = client.read_table(args.virtual_path)
    if args.limit is not None:
        rows = rows[: args.limit]
    if args.resolve_assets:
        base_directory = _dataset_directory(args.virtual_path)
        rows = [_resolve_row(client, row, base_directory) for row in rows]
    for row in pad_rows(rows):
        print("\t".join(row))
    return 0


def _run_resolve_asset_command(client: CsvLensClient, args: argparse.Namespace) -> int:
    """Handle resolve-asset command."""
    reference = client.resolve_asset(args.value, args.base_dir)
    print(reference or "")
    return 0


def _run_presign_command(client: CsvLensClient, args: argparse.Namespace) -> int:
    """Handle presign command."""
    print(client.presign(args.uri))
    return 0


def _resolve_row(client: CsvLensClient, row: Row, base_directory: str) -> Row:
    """Replace image and link cells with their resolved references."""
    resolved_row: Row = []
    for value in row:
        reference = client.resolve_asset(value, base_directory)
        if reference and classify_cell(value, reference) in ("image", "link"):
            resolved_row.append(reference)
        else:
            resolved_row.append(value)
    return resolved_row


def _dataset_directory(virtual_path: str) -> str:
    """Return the root-relative directory holding a dataset."""
    normalized = normalize_virtual_path(virtual_path)
    if isinstance(normalized, Rejected):
        return ""
    directory, _, _ = normalized.lstrip("/").rpartition("/")
    return f"{directory}/" if directory else ""


def _add_ls_command(subparsers: Any) -> None:
    """Register ls subcommand."""
    parser = subparsers.add_parser("ls", help="List CSV files and directories")
    parser.add_argument("path", nargs="?", help="Directory below the content root")


def _add_preview_command(subparsers: Any) -> None:
    """Register preview subcommand."""
    parser = subparsers.add_parser("preview", help="Print a CSV dataset as tab-separated rows")
    parser.add_argument("virtual_path", help="Dataset route, e.g. /reports/q1.csv")
    parser.add_argument("--limit", type=int, help="Maximum number of rows to print")
    parser.add_argument(
        "--resolve-assets",
        action="store_true",
        help="Replace image and link cells with fetchable references",
    )


def _add_resolve_asset_command(subparsers: Any) -> None:
    """Register resolve-asset subcommand."""
    parser = subparsers.add_parser("resolve-asset", help="Resolve one cell value")
    parser.add_argument("value", help="Raw cell value")
    parser.add_argument("--base-dir", default="", help="Dataset directory below the content root")


def _add_presign_command(subparsers: Any) -> None:
    """Register presign subcommand."""
    parser = subparsers.add_parser("presign", help="Presign an s3:// object URI")
    parser.add_argument("uri", help="Object URI in the form s3://bucket/key")
