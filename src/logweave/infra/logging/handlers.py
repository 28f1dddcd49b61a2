from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Thin specializations of the standard rotating handlers that honour the
resolved rotation settings (backup naming, compression, date-windowed
files), plus the tagging helpers used to tell our handlers apart from
handlers installed by the host application.
"""

import gzip
import logging
import os
import shutil
import time
from datetime import datetime
from logging.handlers import BaseRotatingHandler, RotatingFileHandler
from typing import Callable, List, Optional, Tuple

from logweave.infra.fs import split_log_path

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_logweave_handler"

GZIP_SUFFIX = ".gz"


# ==============================================================================
# HANDLER TAGGING
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as managed by this package."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _remove_our_handlers(logger: logging.Logger) -> int:
    """
    Detach and close every tagged handler of `logger`.

    Returns:
        int: Number of handlers removed.
    """
    removed = 0
    for h in list(logger.handlers):
        if _is_our_handler(h):
            logger.removeHandler(h)
            h.close()
            removed += 1
    return removed


# ==============================================================================
# ROTATION HOOKS
# ==============================================================================

def gzip_rotator(source: str, dest: str) -> None:
    """Compress `source` into `dest` and remove the original."""
    if not os.path.exists(source):
        return
    with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


def size_backup_namer(keep_file_ext: bool, compress: bool) -> Callable[[str], str]:
    """
    Build the namer of size-based backups.

    `app.log.1` becomes `app.1.log` when the extension is kept, with a
    `.gz` suffix when backups are compressed.
    """
    def namer(default_name: str) -> str:
        name = default_name
        if keep_file_ext:
            base, index = default_name.rsplit(".", 1)
            stem, ext = os.path.splitext(base)
            name = f"{stem}.{index}{ext}"
        return f"{name}{GZIP_SUFFIX}" if compress else name

    return namer


# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def create_size_rotating_handler(
        filename: str,
        max_bytes: int,
        backup_count: int,
        *,
        keep_file_ext: bool = True,
        compress: bool = False,
        encoding: str = "utf-8",
) -> RotatingFileHandler:
    """
    Initialize a RotatingFileHandler for size-based rotation.

    Args:
        filename: Active log file.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.
        keep_file_ext: Keep `.log` as the last suffix of backup names.
        compress: Gzip rotated backups.
        encoding: File encoding.

    Returns:
        RotatingFileHandler: Configured handler.
    """
    fh = RotatingFileHandler(
        filename,
        maxBytes=int(max_bytes),
        backupCount=int(backup_count),
        encoding=encoding,
    )
    fh.namer = size_backup_namer(keep_file_ext, compress)
    if compress:
        fh.rotator = gzip_rotator
    return fh


class DateRollingFileHandler(BaseRotatingHandler):
    """
    Time-windowed file handler.

    The window is the `strftime` rendering of `pattern`: a new file is
    started whenever an event falls into a different window. With
    `always_include_pattern` the active file already carries the window
    (`app-18-10-2026.log`); otherwise the active file is `app.log` and is
    renamed to the dated name when the window closes.
    """

    def __init__(
            self,
            filename: str,
            pattern: str,
            num_backups: int,
            *,
            always_include_pattern: bool = True,
            keep_file_ext: bool = True,
            compress: bool = False,
            file_name_sep: str = "-",
            encoding: str = "utf-8",
            delay: bool = False,
    ) -> None:
        self.pattern = pattern
        self.num_backups = int(num_backups)
        self.always_include_pattern = bool(always_include_pattern)
        self.compress = bool(compress)
        self.file_name_sep = file_name_sep
        self.template_filename = os.path.abspath(filename)
        self._stem, self._ext = split_log_path(self.template_filename, keep_file_ext)
        self._pending_period: Optional[str] = None

        if self.always_include_pattern:
            self._period = self._period_of(time.time())
            target = self.dated_filename(self._period)
        else:
            self._period = self._initial_period()
            target = self.template_filename

        super().__init__(target, "a", encoding=encoding, delay=delay)
        if self.compress:
            self.namer = lambda name: f"{name}{GZIP_SUFFIX}"
            self.rotator = gzip_rotator

    # --------------------------------------------------------------------------
    # BaseRotatingHandler contract
    # --------------------------------------------------------------------------

    def shouldRollover(self, record: logging.LogRecord) -> bool:
        period = self._period_of(record.created)
        if period == self._period:
            return False
        self._pending_period = period
        return True

    def doRollover(self) -> None:
        if self.stream:
            self.stream.close()
            self.stream = None  # type: ignore[assignment]

        previous = self._period
        self._period = self._pending_period or self._period_of(time.time())
        self._pending_period = None

        if self.always_include_pattern:
            finished = self.baseFilename
            if self.compress:
                self.rotate(finished, self.rotation_filename(finished))
            self.baseFilename = self.dated_filename(self._period)
        else:
            self.rotate(self.baseFilename, self.rotation_filename(self.dated_filename(previous)))

        self._prune_backups()

        if not self.delay:
            self.stream = self._open()

    # --------------------------------------------------------------------------
    # Naming
    # --------------------------------------------------------------------------

    def dated_filename(self, period: str) -> str:
        return f"{self._stem}{self.file_name_sep}{period}{self._ext}"

    def list_backups(self) -> List[str]:
        """Return dated files of this log, oldest first, excluding the active file."""
        directory = os.path.dirname(self._stem)
        prefix = os.path.basename(self._stem) + self.file_name_sep
        found: List[Tuple[datetime, float, str]] = []

        for entry in os.listdir(directory):
            path = os.path.join(directory, entry)
            if path == self.baseFilename or not entry.startswith(prefix):
                continue
            started = self._period_from_name(entry[len(prefix):])
            if started is None:
                continue
            found.append((started, os.path.getmtime(path), path))

        return [path for _, _, path in sorted(found)]

    # --------------------------------------------------------------------------
    # Private helpers
    # --------------------------------------------------------------------------

    def _period_of(self, timestamp: float) -> str:
        return time.strftime(self.pattern, time.localtime(timestamp))

    def _initial_period(self) -> str:
        """Resume the window of an existing active file so restarts roll it over."""
        if os.path.exists(self.template_filename):
            return self._period_of(os.path.getmtime(self.template_filename))
        return self._period_of(time.time())

    def _period_from_name(self, remainder: str) -> Optional[datetime]:
        if remainder.endswith(GZIP_SUFFIX):
            remainder = remainder[:-len(GZIP_SUFFIX)]
        if self._ext:
            if not remainder.endswith(self._ext):
                return None
            remainder = remainder[:-len(self._ext)]
        try:
            return datetime.strptime(remainder, self.pattern)
        except ValueError:
            return None

    def _prune_backups(self) -> None:
        backups = self.list_backups()
        keep = max(0, self.num_backups)
        for path in backups[:max(0, len(backups) - keep)]:
            os.remove(path)
