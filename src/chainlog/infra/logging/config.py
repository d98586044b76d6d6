from __future__ import annotations

"""
Diagnostic Channel Configuration.

The diagnostic channel is the stdlib logger tree under 'chainlog' that
receives swallowed configuration failures and infrastructure warnings.
Its level accepts the same names and numbers as a Logger's level.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings of the diagnostic channel.

    Attributes:
        level: Level name ("warn", "prod", "notice", ...) or number.
            Unresolvable values fall back to WARNING.
        console: Write diagnostics to stderr.
        log_file: Also write diagnostics to this file, rotated by size.
        max_bytes: Rollover threshold of log_file.
        backup_count: Rotated diagnostic files to keep.
        console_fmt: Format of stderr entries.
        file_fmt: Format of file entries.
        datefmt: Timestamp format of file entries.
    """
    level: Union[str, int] = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "chainlog | %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
