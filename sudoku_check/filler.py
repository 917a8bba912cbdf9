"""Single-candidate elimination using row and column peers."""

from __future__ import annotations

import logging
from typing import Set

from .config import DEFAULT_FILL_PASSES
from .grid import Grid

log = logging.getLogger(__name__)


def candidates(grid: Grid, row: int, col: int) -> Set[int]:
    """Digits not yet used in the cell's row or column."""
    size = len(grid)
    possible = set(range(1, size + 1))
    for i in range(size):
        if grid[row][i] > 0:
            possible.discard(grid[row][i])
        if grid[i][col] > 0:
            possible.discard(grid[i][col])
    return possible


def fill_pass(grid: Grid, size: int) -> int:
    """Scan cells in row-major order, filling each empty cell with one candidate.

    Cells filled earlier in the pass count as peers for later cells.
    Returns how many cells were filled.
    """
    filled = 0
    for row in range(size):
        for col in range(size):
            if grid[row][col] != 0:
                continue
            possible = candidates(grid, row, col)
            if len(possible) == 1:
                grid[row][col] = possible.pop()
                filled += 1
    return filled


def solve_missing_number(grid: Grid, size: int) -> None:
    fill_pass(grid, size)


def fill_missing_numbers(
    grid: Grid,
    size: int,
    passes: int = DEFAULT_FILL_PASSES,
    stop_when_stable: bool = False,
) -> int:
    """Run up to ``passes`` fill passes; returns the number of cells filled.

    Without ``stop_when_stable`` every pass runs even if an earlier one
    changed nothing.
    """
    total = 0
    for index in range(passes):
        filled = fill_pass(grid, size)
        total += filled
        log.debug("Fill pass %d filled %d cells", index + 1, filled)
        if stop_when_stable and not filled:
            break
    return total
