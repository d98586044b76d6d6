from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of the diagnostic channel,
loading the base logger configuration, applying command-line overrides as
a chain on the root logger, and emitting the message.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from chainlog.core.logger import Logger
from chainlog.domain.config import config_to_dict, read_config_file
from chainlog.domain.exceptions import ConfigError
from chainlog.infra import dispatch
from chainlog.infra.logging import LoggingConfig, configure_logging, get_logger
from chainlog.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)
    if not args.message and not args.dump_config:
        parser.error("a message is required unless --dump-config is given")

    # 2. Diagnostic bootstrap (console stderr)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=None))

    # 3. Resolve the root logger
    if args.config_file:
        if not os.path.exists(args.config_file):
            print(f"ERROR: config file does not exist: {args.config_file}", file=sys.stderr)
            return 2
        try:
            root = Logger(read_config_file(args.config_file))
        except ConfigError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
    else:
        root = Logger()

    # 4. Chain the command-line overrides
    overrides = cli_args.args_to_overrides(args)
    log = apply_overrides(root, overrides)
    logger.debug(f"CLI overrides applied: {sorted(overrides)}")

    if args.dump_config:
        print(json.dumps(config_to_dict(log.config), ensure_ascii=False, indent=2))
        return 0

    # 5. Emission phase
    message = " ".join(args.message)
    emit = getattr(log, args.emit_level)
    emit(message)
    dispatch.flush()

    return 0

# -----------------------------------------------------------------------------
# CHAIN CONSTRUCTION
# -----------------------------------------------------------------------------

def apply_overrides(root: Logger, overrides: Dict[str, Any]) -> Logger:
    """
    Derive a configured logger from the root, one chaining call per override.

    The root is never modified; the first call clones it.

    Args:
        root: Root logger built from the base configuration.
        overrides: Output of args_to_overrides().

    Returns:
        Logger: The derived logger (a clone of the root even with no overrides).
    """
    log = root.clone()
    if "path" in overrides:
        log = log.with_directory(overrides["path"])
    if "category" in overrides:
        log = log.with_category(overrides["category"])
    if "file" in overrides:
        log = log.with_file(overrides["file"])
    if "level" in overrides:
        log = log.with_level_name(overrides["level"])
    if "stdout" in overrides:
        log = log.with_stdout(overrides["stdout"])
    if "header" in overrides:
        log = log.with_header(overrides["header"])
    if "prefix" in overrides:
        log.set_prefix(overrides["prefix"])
    if "line" in overrides:
        log = log.with_line_number(overrides["line"] == "long")
    if "stack" in overrides:
        log = log.with_stack(overrides["stack"])
    if "stack_filter" in overrides:
        log = log.with_stack_filter(overrides["stack_filter"])
    if "async" in overrides:
        log = log.with_async(overrides["async"])
    return log
