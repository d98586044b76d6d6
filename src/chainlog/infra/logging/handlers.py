from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the handler factories used both by the diagnostic channel and by
the line dispatcher (file, stdout and writer targets), plus the internal
tagging mechanism that distinguishes chainlog's own handlers from external
or library-injected ones.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional, TextIO

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_chainlog_handler"

# Rendered lines are complete, handlers only append the terminator
_LINE_FORMATTER = logging.Formatter("%(message)s")


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed chainlog handler.

    Args:
        handler: The logging handler instance to tag.
    """
    try:
        setattr(handler, _HANDLER_TAG_ATTR, True)
    except Exception:
        pass


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was initialized by this module.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Initialize a RotatingFileHandler with robust error handling.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[RotatingFileHandler]: Configured handler or None if I/O fails.
    """
    try:
        _ensure_parent_dir(log_file)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
        fh.setLevel(level_int)
        fh.setFormatter(formatter)
        _tag_handler(fh)
        return fh
    except Exception as e:
        sys.stderr.write(f"WARNING: Diagnostic persistence failure at '{log_file}': {e}\n")
        return None


# ==============================================================================
# LINE TARGET HANDLERS
# ==============================================================================

class StdoutHandler(logging.StreamHandler):
    """
    Stream handler bound to whatever sys.stdout is at emit time.

    Keeps working when stdout is swapped after creation (test capture,
    redirection helpers).
    """

    def __init__(self) -> None:
        super().__init__(sys.stdout)
        self.setFormatter(_LINE_FORMATTER)
        _tag_handler(self)

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stdout

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def create_writer_handler(writer: Any) -> logging.StreamHandler:
    """
    Wrap a custom write sink into a line handler.

    Args:
        writer: Any object exposing write(str). flush() is used when present.

    Returns:
        logging.StreamHandler: Handler writing one line per record.
    """
    handler = logging.StreamHandler(writer)
    handler.setFormatter(_LINE_FORMATTER)
    _tag_handler(handler)
    return handler


def create_line_file_handler(
        file_path: str,
        rotate_size: int = 0,
        backup_count: int = 0,
) -> Optional[logging.FileHandler]:
    """
    Open an append-mode file handler for rendered lines.

    Uses size-based rotation when rotate_size is positive.

    Args:
        file_path: Absolute path of the output file.
        rotate_size: Rollover threshold in bytes, 0 disables rotation.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[logging.FileHandler]: Configured handler or None if I/O fails.
    """
    if rotate_size > 0:
        return _create_rotating_file_handler(
            file_path, logging.NOTSET, _LINE_FORMATTER, rotate_size, backup_count
        )
    try:
        _ensure_parent_dir(file_path)
        fh = logging.FileHandler(file_path, encoding="utf-8")
        fh.setFormatter(_LINE_FORMATTER)
        _tag_handler(fh)
        return fh
    except Exception as e:
        logging.getLogger(__name__).warning(f"Cannot open log file '{file_path}': {e}")
        return None


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _ensure_parent_dir(path: str) -> None:
    """
    Safely create the parent directory hierarchy for a target file.

    Args:
        path: Absolute path to the target file.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
