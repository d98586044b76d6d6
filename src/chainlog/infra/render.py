from __future__ import annotations

"""
Log Line Rendering.

Turns a configuration record, a level and a message into the final text
of one log line: time and level header, context values, prefix, caller
location and, for error levels, the captured stack trace.
"""

import os
import traceback
from datetime import datetime
from typing import Any, List, Optional

from chainlog.domain.config import LoggerConfig
from chainlog.domain.constants import (
    F_FILE_LONG,
    F_FILE_SHORT,
    F_TIME_DATE,
    F_TIME_MILLI,
    F_TIME_TIME,
    LEVEL_TAGS,
    STACK_TRACE_MIN_LEVEL,
)

# Frames from inside the package never count as the caller
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# -----------------------------------------------------------------------------
# FRAME CAPTURE
# -----------------------------------------------------------------------------

def _is_internal(filename: str) -> bool:
    return os.path.abspath(filename).startswith(_PACKAGE_DIR + os.sep)


def caller_frames(skip: int = 0) -> List[traceback.FrameSummary]:
    """
    Capture the current call stack outside chainlog, innermost first.

    Args:
        skip: Additional caller frames to drop after the package frames.

    Returns:
        List[traceback.FrameSummary]: Remaining frames, innermost first.
    """
    frames = list(reversed(traceback.extract_stack()))
    index = 0
    while index < len(frames) and _is_internal(frames[index].filename):
        index += 1
    return frames[index + max(0, skip):]


def format_caller(frame: Optional[traceback.FrameSummary], long: bool) -> str:
    """Render 'file:line' in long (absolute) or short (basename) form."""
    if frame is None:
        return ""
    name = os.path.abspath(frame.filename) if long else os.path.basename(frame.filename)
    return f"{name}:{frame.lineno}"


def format_stack(frames: List[traceback.FrameSummary], stack_filter: str = "") -> str:
    """
    Render frames as a numbered list, hiding those matching the filter.

    Args:
        frames: Frames innermost first.
        stack_filter: Frames whose file path contains this text are left out.

    Returns:
        str: One entry per frame, empty when nothing is left.
    """
    lines: List[str] = []
    number = 0
    for frame in frames:
        if stack_filter and stack_filter in frame.filename:
            continue
        number += 1
        lines.append(f"{number}.  {frame.name}")
        lines.append(f"    {frame.filename}:{frame.lineno}")
    return "\n".join(lines)

# -----------------------------------------------------------------------------
# LINE COMPOSITION
# -----------------------------------------------------------------------------

def format_time(flags: int, now: datetime) -> str:
    parts: List[str] = []
    if flags & F_TIME_DATE:
        parts.append(now.strftime("%Y-%m-%d"))
    if flags & F_TIME_MILLI:
        parts.append(now.strftime("%H:%M:%S") + f".{now.microsecond // 1000:03d}")
    elif flags & F_TIME_TIME:
        parts.append(now.strftime("%H:%M:%S"))
    return " ".join(parts)


def level_tag(level: int) -> str:
    """Return the bracketed four-letter tag of a level, eg: [INFO]."""
    return f"[{LEVEL_TAGS.get(level, str(level))}]"


def format_context(ctx: Any, keys: List[Any]) -> str:
    """
    Extract the configured keys from a context mapping.

    Args:
        ctx: Context mapping, eg: a dict or a contextvars.Context.
        keys: Keys to look up. Missing keys are skipped.

    Returns:
        str: Values rendered as "{v1, v2}", or "" when none are present.
    """
    if ctx is None or not keys:
        return ""
    values: List[str] = []
    for key in keys:
        try:
            value = ctx.get(key)
        except (AttributeError, TypeError):
            value = None
        if value is not None:
            values.append(str(value))
    if not values:
        return ""
    return "{" + ", ".join(values) + "}"


def render_line(
        cfg: LoggerConfig,
        level: Optional[int],
        message: str,
        now: Optional[datetime] = None,
) -> str:
    """
    Compose one complete log line from a configuration record.

    Args:
        cfg: Options of the emitting logger.
        level: Numeric level, or None for level-less output.
        message: Interpolated message text.
        now: Timestamp of the line. Defaults to the current local time.

    Returns:
        str: The rendered line, with the stack appended when applicable.
    """
    parts: List[str] = []

    if cfg.header_print:
        stamp = format_time(cfg.flags, now or datetime.now())
        if stamp:
            parts.append(stamp)
        if level is not None:
            parts.append(level_tag(level))

    ctx_text = format_context(cfg.ctx, cfg.ctx_keys)
    if ctx_text:
        parts.append(ctx_text)

    if cfg.prefix:
        parts.append(cfg.prefix)

    want_stack = (
        cfg.stack_status and level is not None and level >= STACK_TRACE_MIN_LEVEL
    )
    frames: List[traceback.FrameSummary] = []
    if cfg.flags & (F_FILE_LONG | F_FILE_SHORT) or want_stack:
        frames = caller_frames(cfg.stack_skip)

    if cfg.flags & (F_FILE_LONG | F_FILE_SHORT):
        location = format_caller(frames[0] if frames else None, bool(cfg.flags & F_FILE_LONG))
        if location:
            parts.append(location + ":")

    parts.append(message)
    line = " ".join(parts)

    if want_stack:
        stack_text = format_stack(frames, cfg.stack_filter)
        if stack_text:
            line += "\nStack:\n" + stack_text
    return line
