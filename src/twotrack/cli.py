"""Rich playground for twotrack.

Runs a small division scenario through every kind of combinator and shows
what each step produced.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .async_result import AsyncResult, safe_try
from .result import ResultSync, err_sync, ok_sync, safe_try_sync

console = Console()
logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "TWOTRACK_LOG_LEVEL"

Steps = List[Tuple[str, ResultSync]]


class DivisionError(Exception):
    """Raised-then-captured failure of the division step."""


class NegativeQuotientError(Exception):
    """Produced by the validation step for quotients below zero."""


def divide(dividend: float, divisor: float) -> float:
    if divisor == 0:
        raise ZeroDivisionError("Division by zero")
    return dividend / divisor


async def divide_async(dividend: float, divisor: float) -> float:
    await asyncio.sleep(0)
    return divide(dividend, divisor)


def to_division_error(exc: Exception) -> DivisionError:
    return DivisionError(f"Division error: {exc}")


def require_non_negative(value: float) -> ResultSync[float, NegativeQuotientError]:
    if value < 0:
        return err_sync(NegativeQuotientError(f"Quotient {value} is negative"))
    return ok_sync(value)


async def require_non_negative_async(
    value: float,
) -> ResultSync[float, NegativeQuotientError]:
    return require_non_negative(value)


def _log_failure(error: Exception) -> None:
    logger.info(f"Playground scenario failed: {error}")


def run_sync(dividend: float, divisor: float) -> Steps:
    """Run the scenario with ResultSync and return every intermediate result."""
    divided = safe_try_sync(lambda: divide(dividend, divisor), to_division_error)
    checked = divided.and_then(require_non_negative)
    rounded = checked.map(lambda value: round(value, 2))
    observed = rounded.or_tee(_log_failure)
    return [
        ("safe_try", divided),
        ("and_then", checked),
        ("map", rounded),
        ("or_tee", observed),
    ]


async def run_async(dividend: float, divisor: float) -> Steps:
    """Run the scenario with AsyncResult; each step is awaited for display."""
    divided = safe_try(lambda: divide_async(dividend, divisor), to_division_error)
    checked = divided.and_then(require_non_negative_async)
    rounded = checked.map(lambda value: round(value, 2))
    observed: AsyncResult = rounded.or_tee(_log_failure)
    return [
        ("safe_try", await divided),
        ("and_then", await checked),
        ("map", await rounded),
        ("or_tee", await observed),
    ]


def show_steps(steps: Steps, title: str) -> None:
    """Print a table with the status and payload of each step."""
    table = Table(title=title, box=box.ROUNDED, show_header=True)
    table.add_column("Step", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Payload", style="white")

    for name, result in steps:
        status = (
            "[green]✓ ok[/green]" if result.is_ok() else "[red]✗ err[/red]"
        )
        payload = result.match(ok=repr, err=repr)
        table.add_row(name, status, escape(payload))

    console.print(table)


def show_outcome(result: ResultSync, fallback: Optional[float] = None) -> None:
    """Print the terminal consumption of the last step."""
    message = result.match(
        ok=lambda value: f"[green]Result: {escape(str(value))}[/green]",
        err=lambda error: f"[red]An error occurred: {escape(str(error))}[/red]",
    )
    console.print(Panel(message, title="match", box=box.ROUNDED))

    if fallback is not None:
        console.print(
            f"[blue]i[/blue] unwrap_or({fallback}) -> "
            f"[bold]{result.unwrap_or(fallback)}[/bold]"
        )


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from the -v flag or TWOTRACK_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Playground entry point."""
    parser = argparse.ArgumentParser(
        description="twotrack playground (Rich CLI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  twotrack-playground                 # 10 / 2 with ResultSync
  twotrack-playground 10 0            # captured ZeroDivisionError
  twotrack-playground -5 2 --async    # validation error through AsyncResult
  twotrack-playground 1 0 --fallback 0
        """,
    )
    parser.add_argument("dividend", nargs="?", type=float, default=10.0)
    parser.add_argument("divisor", nargs="?", type=float, default=2.0)
    parser.add_argument(
        "--async", dest="use_async", action="store_true", help="use AsyncResult"
    )
    parser.add_argument(
        "--fallback", type=float, default=None, help="show unwrap_or(FALLBACK)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.use_async:
        steps = asyncio.run(run_async(args.dividend, args.divisor))
        title = "AsyncResult chain"
    else:
        steps = run_sync(args.dividend, args.divisor)
        title = "ResultSync chain"

    show_steps(steps, f"{title}: {args.dividend} / {args.divisor}")
    final = steps[-1][1]
    show_outcome(final, args.fallback)

    sys.exit(0 if final.is_ok() else 1)


if __name__ == "__main__":
    main()
