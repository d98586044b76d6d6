from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess: exit codes, stream output and file side effects.
"""

import os
import re
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "chainlog" / "main.py"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


def test_cli_emits_line_with_header() -> None:
    result = run_cli(["--as", "notice", "service", "started"])

    assert result.returncode == 0, result.stderr
    assert re.fullmatch(
        r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} \[NOTI\] service started\n",
        result.stdout,
    )


def test_cli_writes_category_file(tmp_path: Path) -> None:
    result = run_cli([
        "--path", str(tmp_path),
        "--cat", "module/user",
        "--file", "user.log",
        "--no-stdout",
        "--no-header",
        "--async",
        "signed in",
    ])

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    log_file = tmp_path / "module" / "user" / "user.log"
    assert log_file.read_text(encoding="utf-8") == "signed in\n"


def test_cli_unknown_level_does_not_fail() -> None:
    result = run_cli(["--debug", "--level", "noisy", "--no-header", "still logged"])

    assert result.returncode == 0
    assert result.stdout == "still logged\n"
    assert "UnknownLevelError" in result.stderr


def test_cli_missing_config_exit_code(tmp_path: Path) -> None:
    result = run_cli(["--config", str(tmp_path / "nope.json"), "x"])

    assert result.returncode == 2
    assert "config file does not exist" in result.stderr
