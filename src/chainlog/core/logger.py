from __future__ import annotations

"""
Base Logger.

Holds an optional parent reference and a configuration record, exposes the
setters and accessors the chaining overlay is built on, and emits lines by
rendering them and handing them to the dispatcher.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from chainlog.core.chaining import ChainingMixin
from chainlog.domain.config import (
    LoggerConfig,
    config_from_mapping,
    get_default_config,
    parse_level,
)
from chainlog.domain.constants import (
    LEVEL_CRITICAL,
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_NOTICE,
    LEVEL_WARNING,
)
from chainlog.infra import dispatch
from chainlog.infra.fs import ensure_directory, join_path, resolve_file_name
from chainlog.infra.logging import report_error
from chainlog.infra.render import caller_frames, format_stack, render_line

DiagnosticSink = Callable[[BaseException], None]


class Logger(ChainingMixin):
    """
    A configurable logger.

    Instances built directly are roots: chaining methods never modify them
    and return derived copies instead. Setters (set_*) always modify the
    instance they are called on.

    Attributes:
        config: The option record of this instance.
        parent: The logger this one was cloned from, None for a root.
        last_error: Most recent configuration failure swallowed by chaining.
    """

    def __init__(
            self,
            config: Optional[LoggerConfig] = None,
            *,
            diagnostic: Optional[DiagnosticSink] = None,
    ) -> None:
        self.config: LoggerConfig = config if config is not None else get_default_config()
        self.parent: Optional[Logger] = None
        self.last_error: Optional[BaseException] = None
        self._diagnostic: DiagnosticSink = diagnostic or report_error

    def __repr__(self) -> str:
        kind = "derived" if self.parent is not None else "root"
        return f"<Logger {kind} path={self.config.path!r} level={self.config.level}>"

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    def clone(self) -> Logger:
        """
        Create a derived logger carrying an independent copy of the config.

        Returns:
            Logger: New instance whose parent is this logger.
        """
        logger = Logger(self.config.copy(), diagnostic=self._diagnostic)
        logger.parent = self
        return logger

    def _report(self, err: BaseException) -> None:
        """Record a swallowed failure and forward it to the diagnostic sink."""
        self.last_error = err
        try:
            self._diagnostic(err)
        except Exception:
            logging.getLogger(__name__).exception("Diagnostic sink failed")

    # ==========================================================================
    # SETTERS
    # ==========================================================================

    def set_config(self, config: LoggerConfig) -> None:
        """
        Replace the whole configuration record.

        The directory, when set, is validated and created.

        Raises:
            InvalidPathError: If the directory cannot be used.
        """
        cfg = config.copy()
        if cfg.path:
            cfg.path = ensure_directory(cfg.path)
        self.config = cfg

    def set_config_with_map(self, data: Mapping[str, Any]) -> None:
        """
        Apply a mapping of options on top of the current configuration.

        Raises:
            ConfigError: If a value has the wrong shape.
            InvalidPathError: If the directory cannot be used.
        """
        self.set_config(config_from_mapping(data, base=self.config))

    def set_path(self, path: Union[str, os.PathLike]) -> None:
        """
        Set the output directory, creating it when missing.

        Raises:
            InvalidPathError: If the path is empty or unusable. The previous
                path is kept.
        """
        self.config.path = ensure_directory(path)

    def set_file(self, pattern: str) -> None:
        self.config.file = pattern

    def set_level(self, level: int) -> None:
        self.config.level = level

    def set_level_str(self, name: str) -> None:
        """
        Set the level by name.

        Raises:
            UnknownLevelError: If the name is not a known alias. The previous
                level is kept.
        """
        self.config.level = parse_level(name)

    def set_flags(self, flags: int) -> None:
        self.config.flags = flags

    def set_writer(self, writer: Any) -> None:
        self.config.writer = writer

    def set_ctx_keys(self, *keys: Any) -> None:
        self.config.ctx_keys = list(keys)

    def set_prefix(self, prefix: str) -> None:
        self.config.prefix = prefix

    def set_stack(self, enabled: bool) -> None:
        self.config.stack_status = enabled

    def set_stack_skip(self, skip: int) -> None:
        self.config.stack_skip = skip

    def set_stack_filter(self, stack_filter: str) -> None:
        self.config.stack_filter = stack_filter

    def set_stdout_print(self, enabled: bool) -> None:
        self.config.stdout_print = enabled

    def set_header_print(self, enabled: bool) -> None:
        self.config.header_print = enabled

    def set_async(self, enabled: bool) -> None:
        self.config.async_enabled = enabled

    # ==========================================================================
    # ACCESSORS
    # ==========================================================================

    def get_config(self) -> LoggerConfig:
        """Return a copy of the configuration record."""
        return self.config.copy()

    def get_path(self) -> str:
        return self.config.path

    def get_level(self) -> int:
        return self.config.level

    def get_flags(self) -> int:
        return self.config.flags

    def get_writer(self) -> Any:
        return self.config.writer

    def get_ctx_keys(self) -> List[Any]:
        return list(self.config.ctx_keys)

    def is_async(self) -> bool:
        return self.config.async_enabled

    def file_path(self) -> str:
        """
        Resolve the file the next line would be written to.

        Returns:
            str: File path, or "" when no directory is configured.
        """
        if not self.config.path:
            return ""
        return join_path(self.config.path, resolve_file_name(self.config.file))

    # ==========================================================================
    # EMISSION
    # ==========================================================================

    def debug(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_DEBUG, msg, args)

    def info(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_INFO, msg, args)

    def notice(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_NOTICE, msg, args)

    def warning(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_WARNING, msg, args)

    def error(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_ERROR, msg, args)

    def critical(self, msg: Any, *args: Any) -> None:
        self._log(LEVEL_CRITICAL, msg, args)

    def print(self, msg: Any, *args: Any) -> None:
        """Emit a line without level tag or level filtering."""
        self._emit(None, msg, args)

    def is_enabled_for(self, level: int) -> bool:
        return level >= self.config.level

    def stack(self) -> str:
        """Return the current caller stack, honoring skip and filter."""
        return format_stack(caller_frames(self.config.stack_skip), self.config.stack_filter)

    def _log(self, level: int, msg: Any, args: tuple) -> None:
        if self.is_enabled_for(level):
            self._emit(level, msg, args)

    def _emit(self, level: Optional[int], msg: Any, args: tuple) -> None:
        text = _interpolate(msg, args)
        line = render_line(self.config, level, text)
        targets = self._targets()
        if not targets:
            return

        record_level = level if level is not None else LEVEL_INFO
        record = logging.makeLogRecord(self._record_fields(record_level, line))
        dispatch.get_dispatcher().deliver(record, targets, self.config.async_enabled)

    def _targets(self) -> List[logging.Handler]:
        """Resolve the handlers a line goes to: the writer alone, else file and stdout."""
        dispatcher = dispatch.get_dispatcher()
        if self.config.writer is not None:
            return [dispatcher.writer_handler(self.config.writer)]

        targets: List[logging.Handler] = []
        path = self.file_path()
        if path:
            fh = dispatcher.file_handler(
                path, self.config.rotate_size, self.config.rotate_backup_limit
            )
            if fh is not None:
                targets.append(fh)
        if self.config.stdout_print:
            targets.append(dispatcher.stdout_handler())
        return targets

    @staticmethod
    def _record_fields(level: int, line: str) -> Dict[str, Any]:
        return {
            "name": "chainlog.output",
            "msg": line,
            "args": None,
            "levelno": level,
            "levelname": logging.getLevelName(level),
        }


def _interpolate(msg: Any, args: tuple) -> str:
    """Apply %-style arguments, falling back to space-joined values on mismatch."""
    text = str(msg)
    if not args:
        return text
    try:
        return text % args
    except (TypeError, ValueError):
        return " ".join([text, *(str(a) for a in args)])
