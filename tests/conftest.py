from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Reset of the process-wide dispatcher and diagnostic channel between tests.
3. Shared fixtures for root loggers and in-memory sinks.
"""

import io
import os
import sys
from typing import Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from chainlog.core.logger import Logger  # noqa: E402
from chainlog.infra import dispatch  # noqa: E402
from chainlog.infra.logging import reset_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Global State Reset
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    """Close cached files, stop async delivery and detach diagnostic handlers."""
    yield
    dispatch.shutdown()
    reset_logging()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def diagnostics() -> List[BaseException]:
    """Collect the failures a logger reports instead of raising."""
    return []


@pytest.fixture
def root(diagnostics: List[BaseException]) -> Logger:
    """
    Return a fresh root logger whose diagnostics are collected in a list.

    Returns:
        Logger: A root logger with default configuration.
    """
    return Logger(diagnostic=diagnostics.append)


@pytest.fixture
def buf() -> io.StringIO:
    """In-memory write sink."""
    return io.StringIO()
