"""Tests for the Rich playground CLI."""

import asyncio
import logging
from unittest.mock import MagicMock, patch

import pytest

from twotrack.cli import (
    DivisionError,
    NegativeQuotientError,
    configure_logging,
    main,
    run_async,
    run_sync,
    show_outcome,
    show_steps,
)
from twotrack.result import err_sync, ok_sync

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_console(monkeypatch):
    """Replace the module-level Console so no Rich output is produced."""
    mc = MagicMock()
    monkeypatch.setattr("twotrack.cli.console", mc)
    return mc


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_run_sync_success():
    """A valid division succeeds at every step."""
    steps = run_sync(10, 4)
    assert [name for name, _ in steps] == ["safe_try", "and_then", "map", "or_tee"]
    assert steps[0][1] == ok_sync(2.5)
    assert steps[-1][1] == ok_sync(2.5)


def test_run_sync_division_by_zero():
    """Dividing by zero is captured and mapped, then short-circuits."""
    steps = run_sync(1, 0)
    for _, result in steps:
        assert result.is_err()
        assert isinstance(result.err, DivisionError)
    assert "Division by zero" in str(steps[-1][1].err)


def test_run_sync_negative_quotient():
    """The validation step produces its own error type."""
    steps = run_sync(-5, 2)
    assert steps[0][1].is_ok()
    assert isinstance(steps[1][1].err, NegativeQuotientError)


def test_run_async_matches_sync():
    """The async scenario yields the same results as the sync one."""
    for dividend, divisor in ((10, 4), (-5, 2)):
        async_steps = asyncio.run(run_async(dividend, divisor))
        sync_steps = run_sync(dividend, divisor)
        assert [r.is_ok() for _, r in async_steps] == [
            r.is_ok() for _, r in sync_steps
        ]

    steps = asyncio.run(run_async(1, 0))
    assert isinstance(steps[-1][1].err, DivisionError)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def test_show_steps_prints_table(mock_console):
    """show_steps prints one table."""
    show_steps([("map", ok_sync(1)), ("and_then", err_sync("[e]"))], "title")
    mock_console.print.assert_called_once()


def test_show_outcome_with_fallback(mock_console):
    """show_outcome prints the match panel and the fallback line."""
    show_outcome(err_sync("boom"), fallback=0.0)
    assert mock_console.print.call_count == 2
    assert "0.0" in mock_console.print.call_args[0][0]


def test_show_outcome_without_fallback(mock_console):
    """show_outcome prints only the match panel by default."""
    show_outcome(ok_sync(3))
    mock_console.print.assert_called_once()


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------


def test_configure_logging_verbose():
    """-v selects DEBUG."""
    with patch("twotrack.cli.logging.basicConfig") as basic:
        configure_logging(verbose=True)
    assert basic.call_args.kwargs["level"] == logging.DEBUG


def test_configure_logging_from_env(monkeypatch):
    """TWOTRACK_LOG_LEVEL is used when -v is absent."""
    monkeypatch.setenv("TWOTRACK_LOG_LEVEL", "info")
    with patch("twotrack.cli.logging.basicConfig") as basic:
        configure_logging()
    assert basic.call_args.kwargs["level"] == logging.INFO


def test_configure_logging_invalid_env(monkeypatch):
    """An unknown level name falls back to WARNING."""
    monkeypatch.setenv("TWOTRACK_LOG_LEVEL", "chatty")
    with patch("twotrack.cli.logging.basicConfig") as basic:
        configure_logging()
    assert basic.call_args.kwargs["level"] == logging.WARNING


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


@patch("twotrack.cli.configure_logging")
def test_main_success_exits_zero(mock_logging, mock_console):
    """main exits 0 when the scenario succeeds."""
    with pytest.raises(SystemExit) as exc_info:
        main(["10", "2"])
    assert exc_info.value.code == 0
    mock_logging.assert_called_once_with(False)
    assert mock_console.print.called


@patch("twotrack.cli.configure_logging")
def test_main_failure_exits_one(mock_logging):
    """main exits 1 when the scenario fails."""
    with pytest.raises(SystemExit) as exc_info:
        main(["1", "0", "--fallback", "0"])
    assert exc_info.value.code == 1


@patch("twotrack.cli.configure_logging")
def test_main_async_mode(mock_logging):
    """--async runs the AsyncResult scenario."""
    with patch("twotrack.cli.run_sync") as mock_run_sync:
        with pytest.raises(SystemExit) as exc_info:
            main(["-5", "2", "--async", "-v"])
    assert exc_info.value.code == 1
    mock_run_sync.assert_not_called()
    mock_logging.assert_called_once_with(True)
