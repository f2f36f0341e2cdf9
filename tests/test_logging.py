"""Tests for the logging helpers."""

from cellanim.utils import (
    close_logging,
    get_counts,
    init_logging,
    log,
    logDebug,
    logError,
    logWarning,
    print_summary,
)


def test_counts_and_log_file(tmp_path, capsys):
    log_path = tmp_path / "logs" / "run.log"
    init_logging(log_path)

    log("Serialized agb_tap.bccad")
    logWarning("odd terminator")
    logError("not a BXCAD")
    logDebug("read 1 sprite")
    print_summary()

    assert get_counts() == (1, 1)

    captured = capsys.readouterr()
    assert "Serialized agb_tap.bccad" in captured.out
    assert "[DEBUG]" not in captured.err
    assert "odd terminator" in captured.err

    close_logging()
    text = log_path.read_text(encoding='utf-8')
    assert "Serialized agb_tap.bccad" in text
    assert "Warning: odd terminator" in text
    assert "ERROR: not a BXCAD" in text
    assert "[DEBUG] read 1 sprite" in text
    assert "1 Error(s) | 1 Warning(s)" in text


def test_verbose_echoes_debug(capsys):
    init_logging(verbose=True)
    logDebug("read 1 sprite")
    captured = capsys.readouterr()
    assert "[DEBUG] read 1 sprite" in captured.err
    assert captured.out == ""


def test_late_log_file_keeps_counts(tmp_path):
    logWarning("before the log file")
    init_logging(tmp_path / "run.log")
    log("after")

    assert get_counts() == (0, 1)
    close_logging()
    assert "after" in (tmp_path / "run.log").read_text(encoding='utf-8')


def test_reinit_resets_counts():
    logError("first run")
    close_logging()
    init_logging()
    assert get_counts() == (0, 0)
