"""Checks for a single row, column or subgrid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Set

from .grid import Grid, subgrid_side


class UnitKind(str, Enum):
    ROW = "row"
    COLUMN = "column"
    SUBGRID = "subgrid"


@dataclass(frozen=True)
class UnitDescriptor:
    """One unit to check: its kind, 0-based anchor cell and the puzzle size."""

    kind: UnitKind
    row: int
    column: int
    size: int

    @property
    def label(self) -> str:
        if self.kind is UnitKind.ROW:
            return f"row {self.row + 1}"
        if self.kind is UnitKind.COLUMN:
            return f"column {self.column + 1}"
        return f"subgrid ({self.row + 1}, {self.column + 1})"


@dataclass(frozen=True)
class CheckResult:
    unit: UnitDescriptor
    duplicate_found: bool = False
    incomplete_found: bool = False


def cells(grid: Grid, unit: UnitDescriptor) -> Iterator[int]:
    """Yield the values a unit covers, in scan order."""
    if unit.kind is UnitKind.ROW:
        yield from grid[unit.row][: unit.size]
    elif unit.kind is UnitKind.COLUMN:
        for r in range(unit.size):
            yield grid[r][unit.column]
    else:
        side = subgrid_side(unit.size)
        if side is None:
            raise ValueError(f"size {unit.size} has no subgrids")
        for r in range(unit.row, unit.row + side):
            for c in range(unit.column, unit.column + side):
                yield grid[r][c]


def check_unit(grid: Grid, unit: UnitDescriptor) -> CheckResult:
    """Report whether a unit repeats a digit and whether it has empty cells.

    Empty cells (values <= 0) never count as duplicates. Duplicate tracking
    stops at the first repeated digit; the rest of the unit is only looked
    at for empty cells.
    """
    seen: Set[int] = set()
    duplicate = False
    incomplete = False
    values = cells(grid, unit)
    for value in values:
        if value <= 0:
            incomplete = True
            continue
        if value in seen:
            duplicate = True
            break
        seen.add(value)
    if duplicate and not incomplete:
        incomplete = any(value <= 0 for value in values)
    return CheckResult(unit=unit, duplicate_found=duplicate, incomplete_found=incomplete)
