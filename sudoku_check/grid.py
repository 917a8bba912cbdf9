"""Grid model plus the plain-text puzzle format (size, then N×N integers)."""

from __future__ import annotations

import math
from pathlib import Path
from typing import List, Optional, Sequence, Union

Grid = List[List[int]]


class PuzzleFormatError(ValueError):
    """Raised when puzzle text does not describe an N×N grid."""


def subgrid_side(size: int) -> Optional[int]:
    """Return the subgrid side when ``size`` is a perfect square above 1."""
    if size < 1:
        return None
    side = math.isqrt(size)
    if side * side == size and side > 1:
        return side
    return None


def ensure_grid(size: int, grid: Sequence[Sequence[int]]) -> None:
    if size < 1:
        raise ValueError(f"puzzle size must be positive, got {size}")
    if len(grid) != size:
        raise ValueError(f"expected {size} rows, got {len(grid)}")
    for index, row in enumerate(grid):
        if len(row) != size:
            raise ValueError(f"row {index + 1} has {len(row)} cells, expected {size}")


def parse_puzzle(text: str) -> Grid:
    """Build a grid from whitespace-separated tokens.

    The first token is the size N; the next N×N tokens are the cells in
    row-major order, 0 for an empty cell.
    """
    tokens = text.split()
    if not tokens:
        raise PuzzleFormatError("parse error: empty puzzle")
    try:
        size = int(tokens[0])
    except ValueError as exc:
        raise PuzzleFormatError(f"parse error: invalid size {tokens[0]!r}") from exc
    if size < 1:
        raise PuzzleFormatError(f"parse error: size must be positive, got {size}")

    expected = size * size
    values = tokens[1:]
    if len(values) != expected:
        raise PuzzleFormatError(
            f"parse error: expected {expected} integers, found {len(values)}"
        )

    digits: List[int] = []
    for token in values:
        try:
            value = int(token)
        except ValueError as exc:
            raise PuzzleFormatError(f"parse error: invalid cell {token!r}") from exc
        if not 0 <= value <= size:
            raise PuzzleFormatError(
                f"parse error: cell value {value} outside 0..{size}"
            )
        digits.append(value)

    return [digits[i : i + size] for i in range(0, expected, size)]


def read_puzzle(path: Union[str, Path]) -> Grid:
    try:
        text = Path(path).read_text()
    except UnicodeDecodeError as exc:
        raise PuzzleFormatError(f"parse error: {path} is not a text file") from exc
    return parse_puzzle(text)


def format_puzzle(grid: Grid) -> str:
    """Render the grid the way the CLI prints it: size line, rows, blank line."""
    lines = [str(len(grid))]
    for row in grid:
        lines.append("".join(f"{value} " for value in row))
    return "\n".join(lines) + "\n\n"


def is_complete(grid: Grid) -> bool:
    return all(cell != 0 for row in grid for cell in row)


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]
