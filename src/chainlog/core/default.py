from __future__ import annotations

"""
Process-wide Default Logger.

Holds the shared root logger and exposes module-level shortcuts that start
a chain from it, eg: chainlog.with_directory("/var/log/app").info("ready").
Because the default logger is a root, these shortcuts always return a
derived logger and never change the shared instance.
"""

import threading
from typing import Any, Mapping, Optional

from chainlog.core.logger import Logger

_default_lock = threading.Lock()
_default_logger: Optional[Logger] = None


def default_logger() -> Logger:
    """Return the shared root logger, creating it on first use."""
    global _default_logger
    with _default_lock:
        if _default_logger is None:
            _default_logger = Logger()
        return _default_logger


def set_default_logger(logger: Logger) -> None:
    """
    Replace the shared root logger.

    Args:
        logger: New root. Must not be a derived logger, since derived
            loggers are modified in place by chaining.

    Raises:
        ValueError: If logger has a parent.
    """
    global _default_logger
    if logger.parent is not None:
        raise ValueError("the default logger must be a root logger")
    with _default_lock:
        _default_logger = logger


# -----------------------------------------------------------------------------
# CHAINING SHORTCUTS
# -----------------------------------------------------------------------------

def with_context(ctx: Optional[Mapping[Any, Any]], *keys: Any) -> Logger:
    return default_logger().with_context(ctx, *keys)


def to_writer(writer: Any) -> Logger:
    return default_logger().to_writer(writer)


def with_directory(path: str) -> Logger:
    return default_logger().with_directory(path)


def with_category(category: str) -> Logger:
    return default_logger().with_category(category)


def with_file(pattern: str) -> Logger:
    return default_logger().with_file(pattern)


def with_level(level: int) -> Logger:
    return default_logger().with_level(level)


def with_level_name(name: str) -> Logger:
    return default_logger().with_level_name(name)


def with_stack_skip(skip: int) -> Logger:
    return default_logger().with_stack_skip(skip)


def with_stack(enabled: bool, skip: Optional[int] = None) -> Logger:
    return default_logger().with_stack(enabled, skip)


def with_stack_filter(stack_filter: str) -> Logger:
    return default_logger().with_stack_filter(stack_filter)


def with_stdout(enabled: bool = True) -> Logger:
    return default_logger().with_stdout(enabled)


def with_header(enabled: bool = True) -> Logger:
    return default_logger().with_header(enabled)


def with_line_number(long: bool = False) -> Logger:
    return default_logger().with_line_number(long)


def with_async(enabled: bool = True) -> Logger:
    return default_logger().with_async(enabled)
