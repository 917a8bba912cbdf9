"""Command line entry point: check a puzzle file, or serve the web UI."""

import logging
from pathlib import Path
from typing import Optional

import typer
from aiohttp import web

from .config import DEFAULT_FILL_PASSES, Settings
from .filler import fill_missing_numbers
from .grid import PuzzleFormatError, copy_grid, read_puzzle
from .reporter import print_fill_result, print_grid, print_status
from .validator import ValidationError, validate_puzzle
from .web import create_app

app = typer.Typer(help="Validate Sudoku puzzles and fill single-candidate cells.")

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.command()
def check(
    puzzle_file: Path = typer.Argument(..., help="Puzzle file: size, then N×N integers."),
    passes: int = typer.Option(
        DEFAULT_FILL_PASSES, "--passes", envvar="SUDOKU_FILL_PASSES", help="Fill passes to run."
    ),
    stop_when_stable: bool = typer.Option(
        False,
        "--stop-when-stable",
        envvar="SUDOKU_STOP_WHEN_STABLE",
        help="Stop filling after a pass that changes nothing.",
    ),
    max_workers: Optional[int] = typer.Option(
        None, "--max-workers", envvar="SUDOKU_MAX_WORKERS", help="Bound on checker threads."
    ),
    join_timeout: Optional[float] = typer.Option(
        None, "--join-timeout", envvar="SUDOKU_JOIN_TIMEOUT", help="Seconds to wait for checks."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and unit details."),
) -> None:
    _configure_logging(verbose)
    settings = Settings(
        fill_passes=passes,
        stop_when_stable=stop_when_stable,
        max_workers=max_workers,
        join_timeout=join_timeout,
    )
    try:
        settings.validate()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    try:
        grid = read_puzzle(puzzle_file)
    except OSError:
        typer.echo(f"Could not open file {puzzle_file}", err=True)
        raise typer.Exit(code=1)
    except PuzzleFormatError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    size = len(grid)
    log.info("Loaded %dx%d puzzle from %s", size, size, puzzle_file)
    try:
        report = validate_puzzle(size, grid, settings)
    except ValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    print_status(report, verbose=verbose)
    if report.complete:
        print_grid(grid)
        return

    before = copy_grid(grid)
    filled = fill_missing_numbers(
        grid, size, passes=settings.fill_passes, stop_when_stable=settings.stop_when_stable
    )
    print_fill_result(before, grid, filled if verbose else None)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Host interface for the UI."),
    port: int = typer.Option(8080, "--port", "-p", help="Port for the UI."),
    passes: int = typer.Option(
        DEFAULT_FILL_PASSES, "--passes", envvar="SUDOKU_FILL_PASSES", help="Fill passes to run."
    ),
    stop_when_stable: bool = typer.Option(
        False,
        "--stop-when-stable",
        envvar="SUDOKU_STOP_WHEN_STABLE",
        help="Stop filling after a pass that changes nothing.",
    ),
    max_workers: Optional[int] = typer.Option(
        None, "--max-workers", envvar="SUDOKU_MAX_WORKERS", help="Bound on checker threads per request."
    ),
    join_timeout: Optional[float] = typer.Option(
        None, "--join-timeout", envvar="SUDOKU_JOIN_TIMEOUT", help="Seconds to wait for checks."
    ),
) -> None:
    _configure_logging(False)
    settings = Settings(
        fill_passes=passes,
        stop_when_stable=stop_when_stable,
        max_workers=max_workers,
        join_timeout=join_timeout,
    )
    try:
        settings.validate()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Open http://{host}:{port} in a browser to check puzzles.")
    web.run_app(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    app()
