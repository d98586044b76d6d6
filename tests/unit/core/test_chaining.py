from __future__ import annotations

"""
Unit tests for the Chaining Configuration Overlay.

Verifies:
1. Clone-on-first-configure: roots are never modified, derived loggers are.
2. Variadic-default toggles (stdout/header/async/line number).
3. Swallowed failures keep the previous value and reach the diagnostic sink.
4. Category/path interplay.
"""

import os
import threading
from pathlib import Path
from typing import Dict, List

from chainlog.core.logger import Logger
from chainlog.domain.constants import (
    F_FILE_LONG,
    F_FILE_SHORT,
    F_TIME_STD,
    LEVEL_ALL,
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_WARNING,
)
from chainlog.domain.exceptions import InvalidPathError, UnknownLevelError

# -----------------------------------------------------------------------------
# CLONE POLICY
# -----------------------------------------------------------------------------

def test_clone_isolation(root: Logger) -> None:
    """TC-01: Two chains from one root are independent and leave the root intact."""
    a = root.with_level(LEVEL_INFO)
    b = root.with_level(LEVEL_ERROR)

    assert root.get_level() == LEVEL_ALL
    assert a.get_level() == LEVEL_INFO
    assert b.get_level() == LEVEL_ERROR
    assert a is not b
    assert a.config is not b.config


def test_single_clone_then_mutate(root: Logger) -> None:
    """TC-02: A multi-step chain clones once and mutates that clone afterwards."""
    intermediate = root.with_level(LEVEL_WARNING)
    assert intermediate.parent is root

    final = intermediate.with_stdout(False)

    assert final is intermediate
    assert final.parent is root
    assert final.get_level() == LEVEL_WARNING
    assert final.config.stdout_print is False
    assert root.config.stdout_print is True


def test_every_chaining_method_clones_a_root(root: Logger, tmp_path, buf) -> None:
    """Each chaining method returns a derived logger when called on a root."""
    derived = [
        root.to_writer(buf),
        root.with_directory(str(tmp_path)),
        root.with_category("x"),
        root.with_file("a.log"),
        root.with_level(LEVEL_INFO),
        root.with_level_name("info"),
        root.with_stack_skip(1),
        root.with_stack(False),
        root.with_stack_filter("site-packages"),
        root.with_stdout(),
        root.with_header(),
        root.with_line_number(),
        root.with_async(),
        root.with_context({"k": "v"}),
    ]
    for d in derived:
        assert d is not root
        assert d.parent is root


def test_clone_copies_mutable_containers(root: Logger) -> None:
    """The ctx_keys list of a derived logger is not shared with its root."""
    root.set_ctx_keys("trace_id")
    derived = root.with_level(LEVEL_INFO)
    derived.config.ctx_keys.append("user")

    assert root.get_ctx_keys() == ["trace_id"]
    assert derived.get_ctx_keys() == ["trace_id", "user"]


def test_concurrent_derivation_from_shared_root(root: Logger) -> None:
    """Threads chaining from the same root never see each other's options."""
    results: Dict[int, Logger] = {}

    def worker(n: int) -> None:
        results[n] = root.with_level(n).with_file(f"worker-{n}.log").with_stack_skip(n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 33)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert root.get_level() == LEVEL_ALL
    assert root.config.stack_skip == 0
    for n, logger in results.items():
        assert logger.get_level() == n
        assert logger.config.file == f"worker-{n}.log"
        assert logger.config.stack_skip == n
        assert logger.parent is root

# -----------------------------------------------------------------------------
# CONTEXT
# -----------------------------------------------------------------------------

def test_absent_context_is_a_no_op(root: Logger) -> None:
    """TC-03: with_context(None) returns the very same instance without cloning."""
    assert root.with_context(None) is root

    derived = root.with_level(LEVEL_INFO)
    assert derived.with_context(None) is derived


def test_context_with_keys(root: Logger) -> None:
    ctx = {"trace_id": "abc"}
    derived = root.with_context(ctx, "trace_id")

    assert derived.config.ctx is ctx
    assert derived.get_ctx_keys() == ["trace_id"]
    assert root.config.ctx is None


def test_context_without_keys_keeps_existing_keys(root: Logger) -> None:
    root.set_ctx_keys("request_id")
    derived = root.with_context({"request_id": 1})

    assert derived.get_ctx_keys() == ["request_id"]

# -----------------------------------------------------------------------------
# DIRECTORY AND CATEGORY
# -----------------------------------------------------------------------------

def test_category_requires_path(root: Logger) -> None:
    """TC-04: A category without a configured directory is silently ignored."""
    derived = root.with_category("a/b")

    assert derived.get_path() == ""
    assert derived.parent is root


def test_category_joins_path(root: Logger, tmp_path) -> None:
    """TC-05: The category is nested under the configured directory."""
    base = tmp_path / "logs"
    derived = root.with_directory(str(base)).with_category("app/user")

    assert derived.get_path() == os.path.join(str(base), "app", "user")
    assert os.path.isdir(derived.get_path())
    assert root.get_path() == ""


def test_empty_directory_still_clones(root: Logger) -> None:
    derived = root.with_directory("")

    assert derived is not root
    assert derived.parent is root
    assert derived.get_path() == ""


def test_invalid_directory_is_swallowed(
        root: Logger, tmp_path, diagnostics: List[BaseException]
) -> None:
    """A path pointing to a file keeps the previous path and reports the error."""
    good = tmp_path / "good"
    blocker = tmp_path / "blocker.txt"
    blocker.write_text("not a directory", encoding="utf-8")

    derived = root.with_directory(str(good)).with_directory(str(blocker))

    assert derived.get_path() == str(good)
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], InvalidPathError)
    assert derived.last_error is diagnostics[0]


def test_invalid_category_is_swallowed(
        root: Logger, tmp_path, diagnostics: List[BaseException]
) -> None:
    (tmp_path / "taken").write_text("", encoding="utf-8")

    derived = root.with_directory(str(tmp_path)).with_category("taken")

    assert derived.get_path() == str(tmp_path)
    assert isinstance(diagnostics[-1], InvalidPathError)


def test_nul_byte_directory_is_swallowed(
        root: Logger, tmp_path, diagnostics: List[BaseException]
) -> None:
    """A name the OS refuses (ValueError, not OSError) never escapes the chain."""
    good = tmp_path / "ok"

    derived = root.with_directory(str(good)).with_directory(str(tmp_path) + "/bad\0dir")

    assert derived.get_path() == str(good)
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], InvalidPathError)
    assert derived.last_error is diagnostics[0]


def test_nul_byte_category_is_swallowed(
        root: Logger, tmp_path, diagnostics: List[BaseException]
) -> None:
    derived = root.with_directory(str(tmp_path)).with_category("a\0b")

    assert derived.get_path() == str(tmp_path)
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], InvalidPathError)


def test_path_objects_accepted(root: Logger, tmp_path) -> None:
    derived = root.with_directory(tmp_path / "p").with_category(Path("api") / "user")

    assert derived.get_path() == os.path.join(str(tmp_path), "p", "api", "user")
    assert os.path.isdir(derived.get_path())


def test_non_path_directory_is_swallowed(
        root: Logger, diagnostics: List[BaseException]
) -> None:
    derived = root.with_directory(42)  # type: ignore[arg-type]

    assert derived.get_path() == ""
    assert isinstance(diagnostics[0], InvalidPathError)

# -----------------------------------------------------------------------------
# LEVEL
# -----------------------------------------------------------------------------

def test_level_by_name(root: Logger) -> None:
    assert root.with_level_name("debug").get_level() == LEVEL_DEBUG
    assert root.with_level_name("WARN").get_level() == LEVEL_WARNING
    assert root.with_level_name("prod").get_level() == LEVEL_WARNING


def test_unknown_level_name_preserves_prior_value(
        root: Logger, diagnostics: List[BaseException]
) -> None:
    """TC-06: An unresolvable name leaves the level untouched and never raises."""
    derived = root.with_level(LEVEL_ERROR).with_level_name("loud")

    assert derived.get_level() == LEVEL_ERROR
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], UnknownLevelError)
    assert isinstance(derived.last_error, UnknownLevelError)
    assert root.last_error is None

# -----------------------------------------------------------------------------
# TOGGLES
# -----------------------------------------------------------------------------

def test_async_default_enable(root: Logger) -> None:
    """TC-07: No argument enables, an explicit False disables."""
    assert root.with_async().is_async() is True
    assert root.with_async(False).is_async() is False
    assert root.is_async() is False


def test_stdout_and_header_default_enable(root: Logger) -> None:
    quiet = root.with_stdout(False).with_header(False)
    assert quiet.config.stdout_print is False
    assert quiet.config.header_print is False

    loud = quiet.with_stdout().with_header()
    assert loud is quiet
    assert loud.config.stdout_print is True
    assert loud.config.header_print is True


def test_line_number_verbosity(root: Logger) -> None:
    """TC-08: Short form by default, long form on request, never both."""
    short = root.with_line_number()
    assert short.get_flags() & F_FILE_SHORT
    assert not short.get_flags() & F_FILE_LONG

    long = root.with_line_number(True)
    assert long.get_flags() & F_FILE_LONG
    assert not long.get_flags() & F_FILE_SHORT

    switched = root.with_line_number().with_line_number(long=True)
    assert switched.get_flags() & F_FILE_LONG
    assert not switched.get_flags() & F_FILE_SHORT

    # Time bits are untouched
    assert switched.get_flags() & F_TIME_STD == F_TIME_STD
    assert root.get_flags() == F_TIME_STD


def test_stack_options(root: Logger) -> None:
    off = root.with_stack(False)
    assert off.config.stack_status is False
    assert off.config.stack_skip == 0

    skipping = root.with_stack(True, 3)
    assert skipping.config.stack_status is True
    assert skipping.config.stack_skip == 3

    filtered = root.with_stack(False).with_stack_filter("site-packages")
    assert filtered.config.stack_status is True
    assert filtered.config.stack_filter == "site-packages"

    assert root.with_stack_skip(2).config.stack_skip == 2


def test_writer_and_file(root: Logger, buf) -> None:
    derived = root.to_writer(buf).with_file("{%Y}.log")

    assert derived.get_writer() is buf
    assert derived.config.file == "{%Y}.log"
    assert root.get_writer() is None
