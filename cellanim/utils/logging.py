"""
Unified logging for cellanim.

Console output with optional mirroring to a log file.
Tracks warnings and errors for an end-of-run summary.

Usage:
    from cellanim.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    # At start of a command (log file is optional):
    init_logging(Path("cellanim.log"))

    # Throughout code:
    log("Serialized agb_tap.bccad")           # Info - results, major points
    logWarning("non-zero terminator byte")    # Tolerated but suspicious input
    logError("file is not a BXCAD")           # Command cannot continue
    logDebug("read 12 sprites")               # Useful for debugging

    # At end:
    print_summary()  # Shows warning/error counts
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    GREY = '\033[90m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


# Module state
_log_file = None
_log_path: Optional[Path] = None
_initialized = False
_verbose = False
_warnings: List[str] = []
_errors: List[str] = []

RULE = "=" * 70


def _now() -> str:
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def init_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Initialize logging.

    Calling again after a console-only start (e.g. an early log call) only
    attaches the log file; warning and error tallies are kept.

    Args:
        log_path: Optional path to a log file. Console only when omitted.
        verbose: Also echo debug messages to the console
    """
    global _log_file, _log_path, _initialized, _verbose, _warnings, _errors

    if _initialized:
        _verbose = _verbose or verbose
        if log_path is None or _log_file is not None:
            return
    else:
        _warnings = []
        _errors = []
        _verbose = verbose
        _initialized = True

    if log_path is None:
        return

    _log_path = Path(log_path)
    _log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _log_file = open(_log_path, 'w', encoding='utf-8')
    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None
        return

    _write_to_file(f"cellanim run started: {_now()}\n{RULE}\n")
    atexit.register(close_logging)


def close_logging():
    """Close the log file and reset module state."""
    global _log_file, _initialized

    if _log_file is not None:
        _write_to_file(f"\n{RULE}\ncellanim run finished: {_now()}")
        _log_file.close()
        _log_file = None

    _initialized = False


def _summary_section(title: str, messages: List[str], color: str):
    if not messages:
        return
    print(f"\n{color}{Colors.BOLD}{title} ({len(messages)}):{Colors.RESET}", file=sys.stderr)
    _write_to_file(f"\n{title} ({len(messages)}):")
    for msg in messages:
        print(f"  {color}- {msg}{Colors.RESET}", file=sys.stderr)
        _write_to_file(f"  - {msg}")


def _count(n: int, noun: str, color: str) -> str:
    if n == 0:
        return f"{Colors.GREEN}0 {noun}s{Colors.RESET}"
    return f"{color}{Colors.BOLD}{n} {noun}(s){Colors.RESET}"


def print_summary():
    """
    Print the collected errors and warnings, then a one-line tally.
    Prints nothing when the run was clean.
    """
    if not _errors and not _warnings:
        return

    _summary_section("Errors", _errors, Colors.RED)
    _summary_section("Warnings", _warnings, Colors.YELLOW)

    print(f"\n{_count(len(_errors), 'Error', Colors.RED)} | "
          f"{_count(len(_warnings), 'Warning', Colors.YELLOW)}", file=sys.stderr)
    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def _write_to_file(msg: str, end: str = "\n"):
    """Write message to log file."""
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """
    Log an info message to console and file.
    """
    if not _initialized:
        init_logging()

    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning message. Warnings flag input that was accepted but looks wrong.
    Displayed in yellow. Tracked for the summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error message. Displayed in red. Tracked for the summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message. Written to the log file, and to the console
    only in verbose mode.
    """
    if not _initialized:
        init_logging()

    formatted = f"[DEBUG] {msg}"
    if _verbose:
        print(f"{Colors.GREY}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
