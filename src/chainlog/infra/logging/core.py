from __future__ import annotations

"""
Diagnostic Channel Orchestrator.

Maintains the idempotent lifecycle of chainlog's own diagnostic logging:
the stdlib logger tree under 'chainlog', fed through a non-blocking Queue
so that reporting a swallowed configuration failure never blocks the
caller on I/O. Also exposes the default diagnostic sink used by loggers
that were not given an explicit callback.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional, Union

from chainlog.domain.config import parse_level
from chainlog.domain.constants import INTERNAL_LOGGER_NAME
from chainlog.domain.exceptions import UnknownLevelError
from chainlog.infra.logging.config import LoggingConfig
from chainlog.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_chainlog_configured"
_QUEUE_LISTENER_ATTR: str = "_chainlog_queue_listener"

_PACKAGE_LOGGER_NAME: str = "chainlog"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Execute idempotent configuration of the 'chainlog' logger tree.

    Implements a QueueListener architecture to prevent caller blocking during
    diagnostic writes. Checks internal flags to avoid redundant handler
    attachments unless explicit re-configuration is requested.

    Args:
        cfg: Structural configuration for the diagnostic channel.
        force: If True, bypass idempotency checks and re-initialize handlers.

    Returns:
        logging.Logger: The configured package logger.
    """
    pkg = logging.getLogger(_PACKAGE_LOGGER_NAME)

    try:
        # 1. Idempotency Check
        already_configured = bool(getattr(pkg, _CONFIGURED_FLAG_ATTR, False))
        if already_configured and not force:
            return pkg

        level_int = _parse_level(cfg.level)
        pkg.setLevel(level_int)

        # Cleanup existing infrastructure to prevent handler leakage
        _remove_our_handlers(pkg)
        _stop_existing_listener(pkg)

        # 2. Handler Definition
        console_formatter = logging.Formatter(cfg.console_fmt)
        file_formatter = logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt)

        handlers_list: List[logging.Handler] = []

        if cfg.console:
            sh = logging.StreamHandler(sys.stderr)
            sh.setLevel(level_int)
            sh.setFormatter(console_formatter)
            _tag_handler(sh)
            handlers_list.append(sh)

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                file_formatter,
                cfg.max_bytes,
                cfg.backup_count
            )
            if fh:
                handlers_list.append(fh)

        if not handlers_list:
            return pkg

        # 3. Queue-Based Orchestration (Non-blocking I/O)
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        pkg.addHandler(queue_handler)
        # Host application handlers on the root must not duplicate our output
        pkg.propagate = False

        setattr(pkg, _QUEUE_LISTENER_ATTR, listener)
        setattr(pkg, _CONFIGURED_FLAG_ATTR, True)

        # Register cleanup to ensure diagnostics are flushed on shutdown
        atexit.register(_safe_stop_listener, listener)

        return pkg

    # Fallback to emergency console logging if the infrastructure fails
    except Exception:
        try:
            fallback = logging.getLogger(_PACKAGE_LOGGER_NAME)
            fallback.setLevel(logging.WARNING)
            _remove_our_handlers(fallback)
            _stop_existing_listener(fallback)

            sh = logging.StreamHandler(sys.stderr)
            sh.setFormatter(logging.Formatter("CHAINLOG FALLBACK | %(levelname)s | %(message)s"))
            _tag_handler(sh)
            fallback.addHandler(sh)

            fallback.warning("Diagnostic infrastructure failed. Switched to emergency console.")
            return fallback
        except Exception:
            return pkg


def reset_logging() -> None:
    """
    Detach the diagnostic handlers and restore the unconfigured state.

    The package logger propagates to the host application again afterwards.
    """
    pkg = logging.getLogger(_PACKAGE_LOGGER_NAME)
    _stop_existing_listener(pkg)
    _remove_our_handlers(pkg)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    if hasattr(pkg, _CONFIGURED_FLAG_ATTR):
        delattr(pkg, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance compliant with the diagnostic configuration.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


def get_diagnostic_logger() -> logging.Logger:
    """Return the logger backing the internal diagnostic channel."""
    return logging.getLogger(INTERNAL_LOGGER_NAME)


def report_error(err: BaseException) -> None:
    """
    Default diagnostic sink for swallowed configuration failures.

    Args:
        err: The failure that was recovered from.
    """
    get_diagnostic_logger().error(f"{type(err).__name__}: {err}")


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: Union[str, int]) -> int:
    """Resolve the channel level, falling back to WARNING."""
    if level is None or level == "":
        return logging.WARNING
    try:
        return parse_level(level)
    except UnknownLevelError:
        return logging.WARNING


def _remove_our_handlers(target: logging.Logger) -> None:
    """Identify and detach all internally-managed handlers from a logger."""
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            try:
                h.close()
            except Exception:
                pass


def _stop_existing_listener(target: logging.Logger) -> None:
    """Terminate and release the existing QueueListener to reset state."""
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Safely stop a QueueListener preventing crashes on double-stop calls.

    Handles cases where the internal thread has already been joined or
    set to None, preventing AttributeError in atexit or test resets.
    """
    if not listener:
        return

    try:
        if getattr(listener, "_thread", None) is not None:
            listener.stop()
    except Exception:
        pass
