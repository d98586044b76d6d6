from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw argparse
namespace into the ordered chaining overrides applied to the root logger.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the chainlog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="chainlog",
        description="Emit a log line through a chained logger configuration.",
    )

    p.add_argument(
        "message",
        nargs="*",
        help="Message text (words are joined by spaces). Required unless --dump-config.",
    )

    # --- Destination ---
    p.add_argument(
        "--path",
        dest="path",
        default=None,
        help="Output directory for log files.",
    )
    p.add_argument(
        "--cat",
        dest="category",
        default=None,
        help="Category nested under --path, eg: module/user.",
    )
    p.add_argument(
        "--file",
        dest="file",
        default=None,
        help="File-name pattern, brace segments are strftime formats.",
    )
    p.add_argument(
        "--no-stdout",
        action="store_true",
        help="Do not echo the line to stdout.",
    )

    # --- Level ---
    p.add_argument(
        "--level",
        dest="level",
        default=None,
        help="Minimum level emitted (eg: info, warn, prod).",
    )
    p.add_argument(
        "--as",
        dest="emit_level",
        default="info",
        choices=["debug", "info", "notice", "warning", "error", "critical", "print"],
        help="Level of the emitted message.",
    )

    # --- Rendering ---
    p.add_argument("--no-header", action="store_true", help="Omit time and level tag.")
    p.add_argument("--prefix", dest="prefix", default=None, help="Text placed before the message.")
    line_group = p.add_mutually_exclusive_group()
    line_group.add_argument("--line", action="store_true", help="Print caller basename:line.")
    line_group.add_argument("--line-long", action="store_true", help="Print caller absolute path:line.")
    p.add_argument(
        "--no-stack",
        action="store_true",
        help="Never append stack traces.",
    )
    p.add_argument(
        "--stack-filter",
        dest="stack_filter",
        default=None,
        help="Hide stack frames whose path contains this text.",
    )

    # --- Delivery ---
    p.add_argument("--async", dest="async_enabled", action="store_true", help="Write in background.")

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with the base logger configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resulting configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Show chainlog's own diagnostics on stderr.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into chaining overrides.

    Only options given on the command line appear in the result, in the
    order they must be applied (the category needs the path first).

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Override name -> value.
    """
    overrides: Dict[str, Any] = {}

    if args.path:
        overrides["path"] = args.path
    if args.category:
        overrides["category"] = args.category
    if args.file:
        overrides["file"] = args.file
    if args.level:
        overrides["level"] = args.level
    if args.no_stdout:
        overrides["stdout"] = False
    if args.no_header:
        overrides["header"] = False
    if args.prefix is not None:
        overrides["prefix"] = args.prefix

    # Line number form
    if args.line_long:
        overrides["line"] = "long"
    elif args.line:
        overrides["line"] = "short"

    if args.no_stack:
        overrides["stack"] = False
    if args.stack_filter:
        overrides["stack_filter"] = args.stack_filter
    if args.async_enabled:
        overrides["async"] = True

    return overrides
