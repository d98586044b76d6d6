from __future__ import annotations

from .config import LoggingConfig
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_diagnostic_logger,
    get_logger,
    report_error,
    reset_logging,
)
from .handlers import (
    _HANDLER_TAG_ATTR,
    StdoutHandler,
    create_line_file_handler,
    create_writer_handler,
)

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "reset_logging",
    "get_logger",
    "get_diagnostic_logger",
    "report_error",
    "StdoutHandler",
    "create_line_file_handler",
    "create_writer_handler",
]
