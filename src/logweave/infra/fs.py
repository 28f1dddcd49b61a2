from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path helpers shared by the configuration defaults and the handler
factories. Nothing in this module creates directories: a missing output
directory is a configuration error, reported by the caller.
"""

import os
from typing import Tuple


def get_project_root() -> str:
    """
    Resolve the directory used as the default log destination.

    Returns:
        str: Absolute path of the current working directory.
    """
    return os.path.abspath(os.getcwd())


def directory_exists(path: str) -> bool:
    """Return True if `path` points to an existing directory."""
    return bool(path) and os.path.isdir(path)


def split_log_path(path: str, keep_ext: bool) -> Tuple[str, str]:
    """
    Split a log path into the stem and extension used to build backup names.

    With `keep_ext` the extension is kept apart so backups read
    `app-01-01-2026.log` instead of `app.log-01-01-2026`.

    Returns:
        Tuple[str, str]: `(stem, extension)`; the extension is empty without `keep_ext`.
    """
    if not keep_ext:
        return path, ""
    stem, ext = os.path.splitext(path)
    return stem, ext
