from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: diagnostics bootstrap, loading and
merging of configuration sources (options file and command-line
overrides), category registration, and either a configuration dump or a
smoke-test emission through the configured loggers.
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logweave.core.normalizer import canonicalize_options, sanitize_options
from logweave.core.registry import LogManager
from logweave.domain import constants as const
from logweave.domain.config import load_options
from logweave.domain.errors import LogweaveError
from logweave.infra.logging import DiagnosticsConfig, configure_diagnostics
from logweave.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 configuration error, 2 usage error).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_diagnostics(DiagnosticsConfig(level="DEBUG" if args.debug else "WARNING"), force=True)
    logger.debug("CLI execution initiated. Resolving configuration sources...")

    try:
        document = load_options(args.config_path) if args.config_path else {}
        base = _merge_options(
            canonicalize_options(document.get("base")),
            cli_args.args_to_overrides(args),
        )

        manager = LogManager(base)
        for name, overrides in _collect_categories(document, args.categories).items():
            manager.register_category(name, overrides)

        if args.dump_config:
            appenders = manager.get_appenders()
            print(json.dumps(_appenders_to_json(appenders), ensure_ascii=False, indent=2))
            return 0

        loggers = manager.get_loggers()
    except LogweaveError as e:
        logger.debug("Configuration rejected.", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        if args.emit:
            category, message = args.emit
            if category not in loggers:
                print(f"ERROR: Unknown category '{category}'. Registered: {sorted(loggers)}", file=sys.stderr)
                return 2
            loggers[category].info({"data": message})

        for name in manager.categories:
            print(f"{name}: {manager.get_config(name).log_path}")
    finally:
        manager.shutdown()

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_options(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge command-line overrides into file options.

    Top-level keys are replaced; `rotation_options` is merged key by key
    so a single flag does not discard the rest of the file's policy.
    """
    out = dict(base)
    for key, value in overrides.items():
        if key == "rotation_options":
            rotation = dict(sanitize_options(out.get(key)))
            rotation.update(value)
            out[key] = rotation
        else:
            out[key] = value
    return out


def _collect_categories(document: Dict[str, Any], extra: Optional[List[str]]) -> Dict[str, Any]:
    """Categories from the options file first, then the --category flags."""
    categories: Dict[str, Any] = dict(sanitize_options(document.get("categories")))
    for name in extra or []:
        categories.setdefault(name, None)
    if not categories:
        categories[const.DEFAULT_LOGGER_CATEGORY] = None
    return categories

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _appenders_to_json(appenders: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Replace the LoggerConfig carried by each layout with a plain dict."""
    out: Dict[str, Any] = {}
    for category, appender in appenders.items():
        item = dict(appender)
        layout = dict(item["layout"])
        layout["config"] = asdict(layout["config"])
        item["layout"] = layout
        out[category] = item
    return out
