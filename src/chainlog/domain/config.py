from __future__ import annotations

"""
Logger Configuration Domain.

Defines the per-logger configuration record, its defaults, the independent
copy used when a logger is cloned, and the builders that translate a plain
mapping (e.g. decoded JSON) into a record. Persistent configuration files
are loaded with a fall-back-to-defaults policy.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from chainlog.domain.constants import (
    DEFAULT_FILE_PATTERN,
    DEFAULT_FLAGS,
    DEFAULT_LEVEL,
    LEVEL_NAMES,
)
from chainlog.domain.exceptions import ConfigError, UnknownLevelError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CONFIGURATION RECORD
# -----------------------------------------------------------------------------

@dataclass
class LoggerConfig:
    """
    Mutable option record owned by exactly one logger instance.

    Attributes:
        ctx: Context value (any mapping, e.g. a contextvars.Context).
        ctx_keys: Keys whose values are extracted from ctx into each line.
        writer: Custom sink receiving rendered lines instead of file/stdout.
        path: Output directory. Empty disables file output.
        file: File-name pattern, brace segments are strftime formats.
        level: Minimum numeric level emitted.
        flags: Bitset of F_* flags (time format, caller path form).
        prefix: Free text rendered before the message.
        stdout_print: Echo lines to stdout.
        header_print: Render the time and level header.
        stack_status: Append a stack trace to error-level lines.
        stack_skip: Extra frames to skip for caller and stack computation.
        stack_filter: Frames whose file path contains this text are hidden.
        async_enabled: Dispatch lines through the background queue.
        rotate_size: Rotate the output file past this many bytes (0 = never).
        rotate_backup_limit: Rotated files to keep.
    """
    ctx: Optional[Mapping[Any, Any]] = None
    ctx_keys: List[Any] = field(default_factory=list)
    writer: Optional[Any] = None
    path: str = ""
    file: str = DEFAULT_FILE_PATTERN
    level: int = DEFAULT_LEVEL
    flags: int = DEFAULT_FLAGS
    prefix: str = ""
    stdout_print: bool = True
    header_print: bool = True
    stack_status: bool = True
    stack_skip: int = 0
    stack_filter: str = ""
    async_enabled: bool = False
    rotate_size: int = 0
    rotate_backup_limit: int = 0

    def copy(self) -> LoggerConfig:
        """
        Produce an independent copy of this record.

        Mutable containers are duplicated so that the copy and the source
        never share state. The context value and writer are caller-owned
        objects and are shared by reference.

        Returns:
            LoggerConfig: The copy.
        """
        return replace(self, ctx_keys=list(self.ctx_keys))


def get_default_config() -> LoggerConfig:
    """Return a fresh record carrying the default options."""
    return LoggerConfig()


# -----------------------------------------------------------------------------
# VALUE PARSING
# -----------------------------------------------------------------------------

def parse_level(value: Any) -> int:
    """
    Resolve a level given as a number or as a case-insensitive name.

    Args:
        value: Numeric level or alias such as "info", "WARN", "prod".

    Returns:
        int: The numeric level.

    Raises:
        UnknownLevelError: If a name does not match any alias.
    """
    if isinstance(value, bool):
        raise UnknownLevelError(str(value))
    if isinstance(value, int):
        return value
    name = str(value or "").strip().upper()
    if name not in LEVEL_NAMES:
        raise UnknownLevelError(str(value))
    return LEVEL_NAMES[name]


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off", ""):
            return False
    raise ConfigError(f"expected a boolean, got {value!r}")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"expected an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"expected an integer, got {value!r}") from None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    raise ConfigError(f"expected a list, got {value!r}")


def _as_level(value: Any) -> int:
    try:
        return parse_level(value)
    except UnknownLevelError as e:
        raise ConfigError(str(e)) from e


# Normalized key -> (field name, converter)
_FIELD_PARSERS: Dict[str, tuple[str, Callable[[Any], Any]]] = {
    "path": ("path", _as_str),
    "file": ("file", _as_str),
    "level": ("level", _as_level),
    "flags": ("flags", _as_int),
    "prefix": ("prefix", _as_str),
    "ctxkeys": ("ctx_keys", _as_list),
    "stdout": ("stdout_print", _as_bool),
    "stdoutprint": ("stdout_print", _as_bool),
    "header": ("header_print", _as_bool),
    "headerprint": ("header_print", _as_bool),
    "stack": ("stack_status", _as_bool),
    "stackstatus": ("stack_status", _as_bool),
    "stackskip": ("stack_skip", _as_int),
    "stackfilter": ("stack_filter", _as_str),
    "async": ("async_enabled", _as_bool),
    "asyncenabled": ("async_enabled", _as_bool),
    "rotatesize": ("rotate_size", _as_int),
    "rotatebackuplimit": ("rotate_backup_limit", _as_int),
}


def _normalize_key(key: str) -> str:
    return str(key).replace("_", "").replace("-", "").lower()


# -----------------------------------------------------------------------------
# BUILDERS
# -----------------------------------------------------------------------------

def config_from_mapping(
        data: Mapping[str, Any],
        base: Optional[LoggerConfig] = None,
) -> LoggerConfig:
    """
    Build a configuration record from a plain mapping.

    Keys are matched case-insensitively, ignoring '_' and '-', so that
    "stack_skip", "StackSkip" and "stack-skip" are equivalent. Unknown keys
    are ignored with a debug message.

    Args:
        data: Source mapping.
        base: Record providing values for absent keys. Defaults are used
            when omitted. The base itself is never modified.

    Returns:
        LoggerConfig: The resulting record.

    Raises:
        ConfigError: If a value has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")

    cfg = base.copy() if base is not None else get_default_config()
    for key, value in data.items():
        parser = _FIELD_PARSERS.get(_normalize_key(key))
        if parser is None:
            logger.debug(f"Ignoring unknown configuration key: {key}")
            continue
        name, convert = parser
        setattr(cfg, name, convert(value))
    return cfg


def config_to_dict(cfg: LoggerConfig) -> Dict[str, Any]:
    """
    Export the serializable part of a record.

    The context value and writer are runtime objects and are left out.
    """
    skipped = ("ctx", "writer")
    return {
        f.name: (list(getattr(cfg, f.name)) if f.name == "ctx_keys" else getattr(cfg, f.name))
        for f in fields(cfg)
        if f.name not in skipped
    }


def load_config_file(config_path: str) -> LoggerConfig:
    """
    Load a configuration record from a JSON file.

    Falls back to defaults when the file is missing, unreadable, not a
    JSON object, or carries invalid values.

    Args:
        config_path: Path to the JSON document.

    Returns:
        LoggerConfig: The loaded record or the defaults on failure.
    """
    if not os.path.exists(config_path):
        logger.debug(f"Config file not found: {config_path}. Using defaults.")
        return get_default_config()

    try:
        return read_config_file(config_path)
    except ConfigError as e:
        logger.warning(f"{e}. Using defaults.")
        return get_default_config()


def read_config_file(config_path: str) -> LoggerConfig:
    """
    Strictly load a configuration record from a JSON file.

    Args:
        config_path: Path to the JSON document.

    Returns:
        LoggerConfig: The loaded record.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or
            carries invalid values.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} is not a JSON object")

    try:
        return config_from_mapping(data)
    except ConfigError as e:
        raise ConfigError(f"Invalid value in config file {config_path}: {e}") from e
