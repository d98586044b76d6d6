from __future__ import annotations

"""
chainlog: chainable logger configuration.

    import chainlog

    log = chainlog.with_directory("/var/log/app").with_category("api/user")
    log.with_level_name("info").with_line_number().info("user %s logged in", uid)

Chaining from a root logger never modifies it; the first chained call
returns a private derived logger and the following calls modify that one.
"""

import logging

from chainlog.core.default import (
    default_logger,
    set_default_logger,
    to_writer,
    with_async,
    with_category,
    with_context,
    with_directory,
    with_file,
    with_header,
    with_level,
    with_level_name,
    with_line_number,
    with_stack,
    with_stack_filter,
    with_stack_skip,
    with_stdout,
)
from chainlog.core.logger import Logger
from chainlog.domain.config import (
    LoggerConfig,
    config_from_mapping,
    load_config_file,
    read_config_file,
)
from chainlog.domain.constants import (
    F_FILE_LONG,
    F_FILE_SHORT,
    F_TIME_DATE,
    F_TIME_MILLI,
    F_TIME_STD,
    F_TIME_TIME,
    LEVEL_ALL,
    LEVEL_CRITICAL,
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_NOTICE,
    LEVEL_WARNING,
)
from chainlog.domain.exceptions import (
    ChainlogError,
    ConfigError,
    InvalidPathError,
    UnknownLevelError,
)
from chainlog.infra.dispatch import flush, shutdown
from chainlog.infra.logging import LoggingConfig, configure_logging
from chainlog.infra.network import HttpWriter

__version__ = "1.0.0"

# Diagnostics stay silent until configure_logging() or a host handler is set up
logging.getLogger("chainlog").addHandler(logging.NullHandler())

__all__ = [
    "Logger",
    "LoggerConfig",
    "LoggingConfig",
    "HttpWriter",
    "ChainlogError",
    "ConfigError",
    "InvalidPathError",
    "UnknownLevelError",
    "config_from_mapping",
    "load_config_file",
    "read_config_file",
    "configure_logging",
    "default_logger",
    "set_default_logger",
    "flush",
    "shutdown",
    "with_context",
    "to_writer",
    "with_directory",
    "with_category",
    "with_file",
    "with_level",
    "with_level_name",
    "with_stack_skip",
    "with_stack",
    "with_stack_filter",
    "with_stdout",
    "with_header",
    "with_line_number",
    "with_async",
    "F_FILE_LONG",
    "F_FILE_SHORT",
    "F_TIME_DATE",
    "F_TIME_TIME",
    "F_TIME_MILLI",
    "F_TIME_STD",
    "LEVEL_ALL",
    "LEVEL_DEBUG",
    "LEVEL_INFO",
    "LEVEL_NOTICE",
    "LEVEL_WARNING",
    "LEVEL_ERROR",
    "LEVEL_CRITICAL",
]
