from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the path utilities the logger relies on: joining a category
segment under a directory, validating and creating output directories,
and resolving dated file-name patterns.
"""

import os
import re
from datetime import datetime
from typing import Any, Optional

from chainlog.domain.exceptions import InvalidPathError

# Brace segment of a file-name pattern, eg: "{%Y-%m-%d}"
_PATTERN_SEGMENT = re.compile(r"\{([^{}]*)\}")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_dir(path: Any) -> str:
    """
    Normalize a directory path string without touching the filesystem.

    Expands '~' and environment variables, collapses redundant separators
    and drops trailing ones.

    Args:
        path: Raw directory path, a str or an os.PathLike.

    Returns:
        str: Normalized path, or "" for blank input.

    Raises:
        InvalidPathError: If the value is not a path.
    """
    p = _as_text(path).strip()
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.normpath(p)


def join_path(base: Any, segment: Any) -> str:
    """
    Combine a directory and a relative segment into a normalized path.

    The segment may be hierarchical ("module/user"); leading separators are
    stripped so the result always stays under base.

    Args:
        base: Parent directory.
        segment: Relative segment.

    Returns:
        str: Normalized joined directory path.
    """
    seg = _as_text(segment).strip().lstrip("/\\")
    if not seg:
        return normalize_dir(base)
    return normalize_dir(os.path.join(_as_text(base), seg))


def resolve_file_name(pattern: str, now: Optional[datetime] = None) -> str:
    """
    Expand the strftime segments of a file-name pattern.

    Args:
        pattern: Pattern such as "{%Y-%m-%d}.log" or "access-{%Y%m}.log".
        now: Timestamp to expand with. Defaults to the current local time.

    Returns:
        str: The concrete file name.
    """
    moment = now or datetime.now()
    return _PATTERN_SEGMENT.sub(lambda m: moment.strftime(m.group(1)), pattern)

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def ensure_directory(path: Any) -> str:
    """
    Validate a logging directory, creating the hierarchy when missing.

    Args:
        path: Directory path.

    Returns:
        str: The normalized directory path.

    Raises:
        InvalidPathError: If the path is blank, points to a file, or cannot
            be created (including names the OS rejects, eg: embedded NUL).
    """
    p = normalize_dir(path)
    if not p:
        raise InvalidPathError(str(path), "logging path is empty")

    try:
        if os.path.isdir(p):
            return p
        if os.path.exists(p):
            raise InvalidPathError(p, "path exists and is not a directory")
        os.makedirs(p, exist_ok=True)
    except (OSError, ValueError, TypeError) as e:
        raise InvalidPathError(p, str(e)) from e
    return p

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_text(path: Any) -> str:
    """Coerce a str, bytes or os.PathLike value to text. None counts as blank."""
    if path is None:
        return ""
    try:
        return os.fsdecode(path)
    except TypeError as e:
        raise InvalidPathError(repr(path), "expected str or os.PathLike") from e
