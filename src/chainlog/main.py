from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Runs the CLI controller and traps unhandled exceptions so that a fatal
crash is reported on the diagnostic channel and stderr with a non-zero
exit code.
"""

import logging
import os
import sys
import traceback
from typing import Any

# -----------------------------------------------------------------------------
# ENVIRONMENT INITIALIZATION
# -----------------------------------------------------------------------------

# Anti-shadowing and path visibility logic when run as a script
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, 'frozen', False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)


# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Trap unhandled exceptions, persist them and report them on stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    error_msg = str(value)

    logger = logging.getLogger("chainlog.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {error_msg}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (CHAINLOG CLI)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Delegate to the CLI controller.

    Returns:
        int: Standard process exit code (0: Success, non-zero: Error).
    """
    try:
        from chainlog.interface.cli.app import main as cli_main
        return cli_main()
    except Exception as e:
        global_exception_handler(type(e), e, sys.exc_info()[2])
        return 1


if __name__ == "__main__":
    sys.exit(main())
