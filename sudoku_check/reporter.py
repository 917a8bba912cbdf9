"""Terminal output for the CLI."""

from typing import Optional

import typer

from .grid import Grid, format_puzzle
from .validator import PuzzleReport


def _flag(value: bool) -> str:
    return "true" if value else "false"


def print_grid(grid: Grid) -> None:
    typer.echo(format_puzzle(grid), nl=False)


def print_status(report: PuzzleReport, verbose: bool = False) -> None:
    """Print the completeness line, and the validity line for complete puzzles."""
    typer.echo(f"Complete puzzle? {_flag(report.complete)}")
    if report.complete:
        typer.echo(f"Valid puzzle? {_flag(report.valid)}")
    if not verbose:
        return
    for label in report.duplicate_units:
        typer.echo(f"  duplicate in {label}")
    for label in report.incomplete_units:
        typer.echo(f"  empty cells in {label}")


def print_fill_result(before: Grid, after: Grid, filled: Optional[int] = None) -> None:
    print_grid(before)
    typer.echo("Solve result: ")
    print_grid(after)
    if filled is not None:
        typer.echo(f"Filled {filled} cell(s).")
