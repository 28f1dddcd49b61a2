from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to base options overrides.
2. CSV string parsing logic.
3. Merging of file options with command-line overrides.
"""

import pytest

from logweave.interface.cli.app import _collect_categories, _merge_options
from logweave.interface.cli.args import _split_csv, args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_empty_invocation_produces_no_overrides():
    """Unset flags must not shadow values coming from the options file."""
    assert args_to_overrides(parse_args([])) == {}


def test_cli_simple_flags_mapping():
    """Verify plain flags are mapped to base options."""
    args = parse_args([
        "-d", "/var/log/api",
        "--file-name", "api",
        "--short-names",
    ])

    overrides = args_to_overrides(args)

    assert overrides == {
        "directory": "/var/log/api",
        "file_name": "api",
        "short_field_names": True,
    }


def test_cli_fields_csv_parsing():
    """Verify comma-separated fields are parsed into a list."""
    overrides = args_to_overrides(parse_args(["--fields", "level, file,,category"]))
    assert overrides["extra_log_fields"] == ["level", "file", "category"]


def test_cli_size_rotation_mapping():
    args = parse_args([
        "--rotation", "size",
        "--max-file-size", "2048",
        "--backups", "3",
        "--compress",
    ])

    overrides = args_to_overrides(args)

    assert overrides["enable_rotation"] is True
    assert overrides["rotation_options"] == {
        "type": "size",
        "max_file_size": 2048,
        "backup_count": 3,
        "archive_backups": True,
    }


def test_cli_suffixed_size_is_kept_as_text():
    overrides = args_to_overrides(parse_args(["--rotation", "size", "--max-file-size", "10M"]))
    assert overrides["rotation_options"]["max_file_size"] == "10M"


def test_cli_rotation_details_without_strategy_do_not_enable_rotation():
    overrides = args_to_overrides(parse_args(["--frequency", "hourly"]))

    assert "enable_rotation" not in overrides
    assert overrides["rotation_options"] == {"frequency": "hourly"}


@pytest.mark.parametrize("arg_list", [
    ["--rotation", "weekly"],
    ["--frequency", "yearly"],
    ["--backups", "many"],
    ["--emit", "app"],
])
def test_cli_rejects_invalid_arguments(arg_list):
    with pytest.raises(SystemExit):
        parse_args(arg_list)


def test_cli_repeatable_category_and_emit():
    args = parse_args(["--category", "app", "--category", "http", "--emit", "http", "GET /"])

    assert args.categories == ["app", "http"]
    assert args.emit == ["http", "GET /"]


def test_split_csv_none():
    assert _split_csv(None) is None
    assert _split_csv(" , ") == []


# -----------------------------------------------------------------------------
# Configuration merging (app layer)
# -----------------------------------------------------------------------------

def test_merge_options_overrides_top_level_keys():
    merged = _merge_options({"file_name": "file", "directory": "/a"}, {"file_name": "cli"})
    assert merged == {"file_name": "cli", "directory": "/a"}


def test_merge_options_merges_rotation_key_by_key():
    base = {"rotation_options": {"type": "time", "frequency": "hourly", "backup_count": 5}}
    merged = _merge_options(base, {"rotation_options": {"backup_count": 1}})

    assert merged["rotation_options"] == {"type": "time", "frequency": "hourly", "backup_count": 1}
    # Source untouched
    assert base["rotation_options"]["backup_count"] == 5


def test_collect_categories_defaults_to_app():
    assert _collect_categories({}, None) == {"app": None}


def test_collect_categories_file_entries_win_over_flags():
    document = {"categories": {"http": {"file_name": "http"}}}
    categories = _collect_categories(document, ["http", "audit"])

    assert categories == {"http": {"file_name": "http"}, "audit": None}
