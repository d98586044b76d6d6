from __future__ import annotations

"""
Line Dispatch Infrastructure.

Delivers rendered log lines to their targets either synchronously in the
caller's thread or through a process-wide queue drained by a background
QueueListener. File handlers are opened lazily and cached per file path so
that many derived loggers writing to the same file share one descriptor.
"""

import atexit
import logging
import os
import queue
import threading
from logging.handlers import QueueListener
from typing import Any, Dict, List, Optional

from chainlog.infra.logging.handlers import (
    StdoutHandler,
    create_line_file_handler,
    create_writer_handler,
)

logger = logging.getLogger(__name__)

# Attribute carrying the destination handlers on a queued record
_TARGETS_ATTR: str = "chainlog_targets"


# ==============================================================================
# TARGET ROUTING
# ==============================================================================

class _TargetRouter(logging.Handler):
    """Fan a dequeued record out to the handlers it was addressed to."""

    def emit(self, record: logging.LogRecord) -> None:
        for target in getattr(record, _TARGETS_ATTR, ()):
            target.handle(record)


class Dispatcher:
    """
    Owns the target handler cache and the background delivery queue.

    The queue and its listener thread are created on first async delivery.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._file_handlers: Dict[str, logging.Handler] = {}
        self._stdout = StdoutHandler()
        self._queue: Optional[queue.Queue[logging.LogRecord]] = None
        self._listener: Optional[QueueListener] = None

    # --------------------------------------------------------------------------
    # Target resolution
    # --------------------------------------------------------------------------

    def stdout_handler(self) -> logging.Handler:
        return self._stdout

    def writer_handler(self, writer: Any) -> logging.Handler:
        return create_writer_handler(writer)

    def file_handler(
            self,
            file_path: str,
            rotate_size: int = 0,
            backup_count: int = 0,
    ) -> Optional[logging.Handler]:
        """
        Return the cached handler for a file, opening it on first use.

        Rotation settings apply when the file is first opened.

        Args:
            file_path: Output file path.
            rotate_size: Rollover threshold in bytes, 0 disables rotation.
            backup_count: Number of archived files to keep.

        Returns:
            Optional[logging.Handler]: The handler, or None if the file cannot be opened.
        """
        key = os.path.abspath(file_path)
        with self._lock:
            handler = self._file_handlers.get(key)
            if handler is None:
                handler = create_line_file_handler(key, rotate_size, backup_count)
                if handler is not None:
                    self._file_handlers[key] = handler
            return handler

    # --------------------------------------------------------------------------
    # Delivery
    # --------------------------------------------------------------------------

    def deliver(
            self,
            record: logging.LogRecord,
            targets: List[logging.Handler],
            async_enabled: bool = False,
    ) -> None:
        """
        Hand a record to its targets.

        Args:
            record: Record whose message is the fully rendered line.
            targets: Destination handlers.
            async_enabled: Queue the record for the background thread
                instead of writing it in the caller's thread.
        """
        if not targets:
            return
        if not async_enabled:
            for target in targets:
                target.handle(record)
            return

        setattr(record, _TARGETS_ATTR, list(targets))
        self._ensure_listener().put_nowait(record)

    def flush(self) -> None:
        """Block until every queued record has been written."""
        q = self._queue
        if q is not None:
            q.join()
        with self._lock:
            handlers = [self._stdout, *self._file_handlers.values()]
        for handler in handlers:
            handler.flush()

    def shutdown(self) -> None:
        """
        Drain the queue, stop the listener thread and close cached files.

        The dispatcher stays usable: later deliveries reopen what they need.
        """
        with self._lock:
            listener, self._listener = self._listener, None
            self._queue = None
            handlers = list(self._file_handlers.values())
            self._file_handlers.clear()

        if listener is not None:
            try:
                listener.stop()
            except Exception as e:
                logger.warning(f"Async listener did not stop cleanly: {e}")

        for handler in handlers:
            try:
                handler.close()
            except Exception as e:
                logger.debug(f"Closing {handler!r} failed: {e}")

    def _ensure_listener(self) -> queue.Queue[logging.LogRecord]:
        with self._lock:
            if self._queue is None:
                self._queue = queue.Queue(-1)
                self._listener = QueueListener(self._queue, _TargetRouter())
                self._listener.start()
                logger.debug("Async dispatch listener started.")
            return self._queue


# ==============================================================================
# MODULE-LEVEL FACADE
# ==============================================================================

_dispatcher = Dispatcher()


def get_dispatcher() -> Dispatcher:
    """Return the process-wide dispatcher."""
    return _dispatcher


def flush() -> None:
    """Block until all asynchronously dispatched lines are written."""
    _dispatcher.flush()


def shutdown() -> None:
    """Stop background delivery and release open files."""
    _dispatcher.shutdown()


atexit.register(shutdown)
