from __future__ import annotations

"""
Chaining Configuration Overlay.

Each method here overrides one logging option and returns a logger ready
for further chaining or for emitting a line. All of them follow the
clone-on-first-configure rule:

    working = self.clone() if self.parent is None else self
    <apply the change to working>
    return working

A root logger (no parent) is therefore never modified by chaining, so one
shared root can be specialized concurrently from many call sites. A derived
logger (has a parent) is private to whoever obtained it and is modified in
place, so a multi-step chain clones exactly once.

Chaining never raises. Invalid paths and unknown level names are reported
to the logger's diagnostic sink and the previous value is kept.
"""

import os
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from chainlog.domain.constants import F_FILE_LONG, F_FILE_MASK, F_FILE_SHORT
from chainlog.domain.exceptions import ChainlogError
from chainlog.infra.fs import join_path

if TYPE_CHECKING:
    from chainlog.core.logger import Logger


class ChainingMixin:
    """Chaining methods shared by every Logger."""

    # Provided by the concrete logger
    parent: Optional[Logger]

    def _working(self) -> Logger:
        """Return the instance a chaining call is allowed to modify."""
        if self.parent is None:
            return self.clone()  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    # --------------------------------------------------------------------------
    # Context and destination
    # --------------------------------------------------------------------------

    def with_context(self, ctx: Optional[Mapping[Any, Any]], *keys: Any) -> Logger:
        """
        Attach a context value to the emitted lines.

        Args:
            ctx: Context mapping, eg: a dict or contextvars.copy_context().
                None leaves the logger untouched and returns it as is.
            *keys: When given, replaces the keys extracted from the context.

        Returns:
            Logger: The configured logger.
        """
        if ctx is None:
            return self  # type: ignore[return-value]
        logger = self._working()
        logger.config.ctx = ctx
        if keys:
            logger.set_ctx_keys(*keys)
        return logger

    def to_writer(self, writer: Any) -> Logger:
        """Redirect emitted lines to a custom sink exposing write(str)."""
        logger = self._working()
        logger.set_writer(writer)
        return logger

    def with_directory(self, path: Union[str, os.PathLike]) -> Logger:
        """
        Set the output directory. Note that path is a directory, not a file.

        An empty path still yields a derived logger but changes nothing.
        """
        logger = self._working()
        if path != "":
            try:
                logger.set_path(path)
            except ChainlogError as e:
                logger._report(e)
        return logger

    def with_category(self, category: Union[str, os.PathLike]) -> Logger:
        """
        Nest the output directory under a category, eg: "module/user".

        Only applies when a directory is already configured.
        """
        logger = self._working()
        if logger.config.path != "":
            try:
                logger.set_path(join_path(logger.config.path, category))
            except ChainlogError as e:
                logger._report(e)
        return logger

    def with_file(self, pattern: str) -> Logger:
        """Set the file-name pattern, eg: "access-{%Y%m%d}.log"."""
        logger = self._working()
        logger.set_file(pattern)
        return logger

    # --------------------------------------------------------------------------
    # Level
    # --------------------------------------------------------------------------

    def with_level(self, level: int) -> Logger:
        logger = self._working()
        logger.set_level(level)
        return logger

    def with_level_name(self, name: str) -> Logger:
        """Set the level by name, eg: "info", "WARN", "prod"."""
        logger = self._working()
        try:
            logger.set_level_str(name)
        except ChainlogError as e:
            logger._report(e)
        return logger

    # --------------------------------------------------------------------------
    # Stack
    # --------------------------------------------------------------------------

    def with_stack_skip(self, skip: int) -> Logger:
        """
        Set the caller frames to skip.

        Also shifts the caller location printed when line numbers are on.
        """
        logger = self._working()
        logger.set_stack_skip(skip)
        return logger

    def with_stack(self, enabled: bool, skip: Optional[int] = None) -> Logger:
        logger = self._working()
        logger.set_stack(enabled)
        if skip is not None:
            logger.set_stack_skip(skip)
        return logger

    def with_stack_filter(self, stack_filter: str) -> Logger:
        """Enable stack traces, hiding frames whose path contains stack_filter."""
        logger = self._working()
        logger.set_stack(True)
        logger.set_stack_filter(stack_filter)
        return logger

    # --------------------------------------------------------------------------
    # Output toggles
    # --------------------------------------------------------------------------

    def with_stdout(self, enabled: bool = True) -> Logger:
        logger = self._working()
        logger.set_stdout_print(enabled)
        return logger

    def with_header(self, enabled: bool = True) -> Logger:
        logger = self._working()
        logger.set_header_print(enabled)
        return logger

    def with_line_number(self, long: bool = False) -> Logger:
        """
        Print the caller file and line with each entry.

        Args:
            long: Absolute path (/a/b/c/d.py:23) instead of the basename (d.py:23).
        """
        logger = self._working()
        flag = F_FILE_LONG if long else F_FILE_SHORT
        logger.set_flags((logger.config.flags & ~F_FILE_MASK) | flag)
        return logger

    def with_async(self, enabled: bool = True) -> Logger:
        logger = self._working()
        logger.set_async(enabled)
        return logger
