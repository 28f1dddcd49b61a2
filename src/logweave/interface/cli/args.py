from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
base options overrides understood by the LogManager.
"""

import argparse
from typing import Any, Dict, List, Optional

from logweave.domain import constants as const

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the logweave CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="logweave",
        description="Resolve per-category JSON logging setups and inspect or exercise them.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON document with 'base' options and per-category 'categories' overrides.",
    )
    p.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=None,
        help="Register a category with the base configuration (repeatable).",
    )

    # --- Base Options Overrides ---
    p.add_argument(
        "-d", "--directory",
        dest="directory",
        default=None,
        help="Existing directory receiving the log files.",
    )
    p.add_argument(
        "--file-name",
        dest="file_name",
        default=None,
        help="Base log file name, without extension.",
    )
    p.add_argument(
        "--fields",
        dest="extra_log_fields",
        default=None,
        help="Comma-separated extra fields (e.g. level,file,category).",
    )
    p.add_argument(
        "--short-names",
        action="store_true",
        help="Render short field names (ts, dt, lvl...).",
    )
    p.add_argument(
        "--rotation",
        choices=[t.value for t in const.RotationType],
        default=None,
        help="Enable rotation with the given strategy.",
    )
    p.add_argument(
        "--frequency",
        choices=[f.value for f in const.RotationFrequency],
        default=None,
        help="Rotation window for time-based rotation.",
    )
    p.add_argument(
        "--max-file-size",
        dest="max_file_size",
        default=None,
        help="Rollover threshold for size-based rotation (bytes, or 10K/10M/1G).",
    )
    p.add_argument(
        "--backups",
        dest="backup_count",
        type=int,
        default=None,
        help="Number of rotated files to keep.",
    )
    p.add_argument(
        "--compress",
        action="store_true",
        help="Gzip rotated files.",
    )

    # --- Actions and Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved appender of every category as JSON and exit.",
    )
    p.add_argument(
        "--emit",
        nargs=2,
        metavar=("CATEGORY", "MESSAGE"),
        default=None,
        help="Write one info event with MESSAGE as data through CATEGORY.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate diagnostics verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into base options overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Options subset; unset flags are omitted.
    """
    overrides: Dict[str, Any] = {}

    if args.directory:
        overrides["directory"] = args.directory
    if args.file_name:
        overrides["file_name"] = args.file_name
    if args.short_names:
        overrides["short_field_names"] = True

    fields = _split_csv(args.extra_log_fields)
    if fields:
        overrides["extra_log_fields"] = fields

    rotation: Dict[str, Any] = {}
    if args.rotation:
        overrides["enable_rotation"] = True
        rotation["type"] = args.rotation
    if args.frequency:
        rotation["frequency"] = args.frequency
    if args.max_file_size:
        rotation["max_file_size"] = _parse_size_arg(args.max_file_size)
    if args.backup_count is not None:
        rotation["backup_count"] = args.backup_count
    if args.compress:
        rotation["archive_backups"] = True
    if rotation:
        overrides["rotation_options"] = rotation

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]


def _parse_size_arg(value: str) -> Any:
    """Digits-only sizes are byte counts; everything else is validated later."""
    return int(value) if value.isdigit() else value
