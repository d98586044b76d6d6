from __future__ import annotations

"""
Domain Constants.

Centralizes numeric severity levels, their textual aliases, the header
tags rendered for each level, the flag bits controlling time and caller
annotations, and the default values of a fresh logger configuration.
"""

from typing import Dict

# -----------------------------------------------------------------------------
# SEVERITY LEVELS
# -----------------------------------------------------------------------------

# Aligned with the stdlib 'logging' numbering, NOTICE sits between INFO and WARNING
LEVEL_ALL = 0
LEVEL_DEBUG = 10
LEVEL_INFO = 20
LEVEL_NOTICE = 25
LEVEL_WARNING = 30
LEVEL_ERROR = 40
LEVEL_CRITICAL = 50

# Case-insensitive aliases accepted by level-name resolution
LEVEL_NAMES: Dict[str, int] = {
    "ALL": LEVEL_ALL,
    "DEV": LEVEL_DEBUG,
    "DEVELOP": LEVEL_DEBUG,
    "PROD": LEVEL_WARNING,
    "PRODUCT": LEVEL_WARNING,
    "DEBU": LEVEL_DEBUG,
    "DEBUG": LEVEL_DEBUG,
    "INFO": LEVEL_INFO,
    "NOTI": LEVEL_NOTICE,
    "NOTICE": LEVEL_NOTICE,
    "WARN": LEVEL_WARNING,
    "WARNING": LEVEL_WARNING,
    "ERRO": LEVEL_ERROR,
    "ERROR": LEVEL_ERROR,
    "CRIT": LEVEL_CRITICAL,
    "CRITICAL": LEVEL_CRITICAL,
}

LEVEL_TAGS: Dict[int, str] = {
    LEVEL_DEBUG: "DEBU",
    LEVEL_INFO: "INFO",
    LEVEL_NOTICE: "NOTI",
    LEVEL_WARNING: "WARN",
    LEVEL_ERROR: "ERRO",
    LEVEL_CRITICAL: "CRIT",
}

# -----------------------------------------------------------------------------
# FLAG BITS
# -----------------------------------------------------------------------------

F_FILE_LONG = 1 << 0   # Absolute caller path, eg: /a/b/c/d.py:23
F_FILE_SHORT = 1 << 1  # Caller basename only, eg: d.py:23
F_TIME_DATE = 1 << 2   # 2009-01-23
F_TIME_TIME = 1 << 3   # 01:23:23
F_TIME_MILLI = 1 << 4  # 01:23:23.675
F_TIME_STD = F_TIME_DATE | F_TIME_MILLI

F_FILE_MASK = F_FILE_LONG | F_FILE_SHORT

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

# Brace segments are strftime formats resolved at write time
DEFAULT_FILE_PATTERN = "{%Y-%m-%d}.log"
DEFAULT_LEVEL = LEVEL_ALL
DEFAULT_FLAGS = F_TIME_STD

# Levels at or above this one get a stack trace appended when enabled
STACK_TRACE_MIN_LEVEL = LEVEL_ERROR

INTERNAL_LOGGER_NAME = "chainlog.internal"
