"""Concurrent validation: one worker thread per row, column and subgrid."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .config import Settings
from .grid import Grid, ensure_grid, subgrid_side
from .unit_checker import CheckResult, UnitDescriptor, UnitKind, check_unit

log = logging.getLogger(__name__)


class ValidationError(RuntimeError):
    """Raised when unit checks fail or do not finish in time."""


@dataclass
class PuzzleReport:
    """Aggregated outcome of one validation run."""

    size: int
    complete: bool
    valid: bool
    results: List[CheckResult] = field(default_factory=list)

    @property
    def duplicate_units(self) -> List[str]:
        return [result.unit.label for result in self.results if result.duplicate_found]

    @property
    def incomplete_units(self) -> List[str]:
        return [result.unit.label for result in self.results if result.incomplete_found]


def build_units(size: int) -> List[UnitDescriptor]:
    """List every unit of a puzzle: rows and columns interleaved, then subgrids."""
    units: List[UnitDescriptor] = []
    for i in range(size):
        units.append(UnitDescriptor(UnitKind.ROW, i, 0, size))
        units.append(UnitDescriptor(UnitKind.COLUMN, 0, i, size))

    side = subgrid_side(size)
    if side is not None:
        for row in range(0, size, side):
            for col in range(0, size, side):
                units.append(UnitDescriptor(UnitKind.SUBGRID, row, col, size))
    return units


def aggregate(results: Iterable[CheckResult]) -> Tuple[bool, bool]:
    """Fold per-unit results into ``(complete, valid)``."""
    complete = True
    valid = True
    for result in results:
        if result.duplicate_found:
            valid = False
        if result.incomplete_found:
            complete = False
    return complete, valid


def _abandon(executor: ThreadPoolExecutor, tasks: List[asyncio.Future]) -> None:
    # Checks already running finish on their own; nothing waits for them.
    for task in tasks:
        task.cancel()
    executor.shutdown(wait=False, cancel_futures=True)


async def check_puzzle_async(
    size: int, grid: Grid, settings: Optional[Settings] = None
) -> PuzzleReport:
    """Check every unit on its own worker thread and aggregate once all finish.

    The grid must not change until this returns. Each unit check returns its
    own result; ``gather`` keeps them in task order so no slot is shared.
    """
    settings = (settings or Settings()).validate()
    ensure_grid(size, grid)
    units = build_units(size)
    workers = min(settings.max_workers or len(units), len(units))
    log.debug("Checking %d units of a %dx%d puzzle on %d threads", len(units), size, size, workers)

    loop = asyncio.get_running_loop()
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="unit-check")
    tasks: List[asyncio.Future] = []
    try:
        for unit in units:
            tasks.append(loop.run_in_executor(executor, check_unit, grid, unit))
        results = await asyncio.wait_for(asyncio.gather(*tasks), timeout=settings.join_timeout)
    except asyncio.TimeoutError as exc:
        _abandon(executor, tasks)
        raise ValidationError(
            f"unit checks did not finish within {settings.join_timeout}s"
        ) from exc
    except Exception as exc:
        _abandon(executor, tasks)
        raise ValidationError(f"unit check failed: {exc}") from exc
    executor.shutdown(wait=True)

    complete, valid = aggregate(results)
    log.debug("Joined %d unit checks: complete=%s valid=%s", len(results), complete, valid)
    return PuzzleReport(size=size, complete=complete, valid=valid, results=list(results))


def validate_puzzle(size: int, grid: Grid, settings: Optional[Settings] = None) -> PuzzleReport:
    return asyncio.run(check_puzzle_async(size, grid, settings))


def check_puzzle(size: int, grid: Grid, settings: Optional[Settings] = None) -> Tuple[bool, bool]:
    """Return ``(complete, valid)`` for the puzzle without modifying it."""
    report = validate_puzzle(size, grid, settings)
    return report.complete, report.valid
