"""Tests for the concurrent validator."""

import threading
import time

import pytest

from . import validator
from .config import Settings
from .unit_checker import UnitKind


def solved_grid(size):
    """Pattern-based solution for a perfect-square size (or size 1)."""
    side = int(size ** 0.5)
    return [[(side * (r % side) + r // side + c) % size + 1 for c in range(size)] for r in range(size)]


def latin_square(size):
    return [[(r + c) % size + 1 for c in range(size)] for r in range(size)]


@pytest.mark.parametrize("size", [1, 4, 9, 16])
def test_solved_grids_are_complete_and_valid(size):
    assert validator.check_puzzle(size, solved_grid(size)) == (True, True)


@pytest.mark.parametrize("row, col", [(0, 0), (4, 7), (8, 8)])
def test_swapped_cell_makes_grid_invalid(row, col):
    board = solved_grid(9)
    board[row][col] = board[row][col] % 9 + 1
    complete, valid = validator.check_puzzle(9, board)
    assert complete
    assert not valid


def test_subgrid_only_duplicate_is_invalid():
    # Rows and columns are fine; the 3x3 boxes repeat digits.
    assert validator.check_puzzle(9, latin_square(9)) == (True, False)


def test_non_square_size_skips_subgrids():
    assert len(validator.build_units(6)) == 12
    assert validator.check_puzzle(6, latin_square(6)) == (True, True)


def test_any_empty_cell_is_incomplete():
    board = solved_grid(9)
    board[5][3] = 0
    complete, valid = validator.check_puzzle(9, board)
    assert not complete
    assert valid


def test_incomplete_even_when_duplicates_hide_the_empty_cell():
    # Row 4, column 4 and the last box all repeat a 4 before reaching (4, 4).
    board = [
        [1, 2, 3, 4],
        [3, 4, 1, 4],
        [2, 3, 4, 4],
        [4, 4, 2, 0],
    ]
    complete, valid = validator.check_puzzle(4, board)
    assert not complete
    assert not valid


def test_row_two_duplicate_is_reported_by_its_row():
    board = solved_grid(4)
    board[1][1] = board[1][0]
    report = validator.validate_puzzle(4, board)
    assert not report.valid
    assert "row 2" in report.duplicate_units


def test_all_zero_grid_is_incomplete():
    board = [[0] * 9 for _ in range(9)]
    report = validator.validate_puzzle(9, board)
    assert not report.complete
    assert report.valid
    assert len(report.incomplete_units) == 27


def test_build_units_counts_and_order():
    units = validator.build_units(9)
    assert len(units) == 27
    assert [u.kind for u in units[:2]] == [UnitKind.ROW, UnitKind.COLUMN]
    anchors = [(u.row, u.column) for u in units if u.kind is UnitKind.SUBGRID]
    assert anchors == [(r, c) for r in (0, 3, 6) for c in (0, 3, 6)]


def test_results_keep_task_order():
    report = validator.validate_puzzle(4, solved_grid(4))
    assert [r.unit for r in report.results] == validator.build_units(4)


def test_validation_leaves_grid_untouched():
    board = solved_grid(9)
    board[0][0] = 0
    snapshot = [list(row) for row in board]
    validator.check_puzzle(9, board)
    assert board == snapshot


def test_bad_preconditions_fail_before_checks(monkeypatch):
    calls = []
    monkeypatch.setattr(validator, "check_unit", lambda grid, unit: calls.append(unit))
    with pytest.raises(ValueError):
        validator.check_puzzle(0, [])
    with pytest.raises(ValueError):
        validator.check_puzzle(4, solved_grid(9))
    assert calls == []


def test_units_run_on_worker_threads(monkeypatch):
    names = set()
    original = validator.check_unit

    def recording(grid, unit):
        names.add(threading.current_thread().name)
        return original(grid, unit)

    monkeypatch.setattr(validator, "check_unit", recording)
    validator.check_puzzle(9, solved_grid(9))
    assert names
    assert all(name.startswith("unit-check") for name in names)
    assert threading.current_thread().name not in names


def test_max_workers_bounds_threads(monkeypatch):
    names = set()
    original = validator.check_unit

    def recording(grid, unit):
        names.add(threading.current_thread().name)
        return original(grid, unit)

    monkeypatch.setattr(validator, "check_unit", recording)
    validator.check_puzzle(4, solved_grid(4), Settings(max_workers=1))
    assert len(names) == 1


def test_failing_unit_check_aborts_validation(monkeypatch):
    def broken(grid, unit):
        raise RuntimeError("boom")

    monkeypatch.setattr(validator, "check_unit", broken)
    with pytest.raises(validator.ValidationError, match="boom"):
        validator.check_puzzle(4, solved_grid(4))


def test_join_timeout(monkeypatch):
    original = validator.check_unit

    def slow(grid, unit):
        time.sleep(1.5)
        return original(grid, unit)

    monkeypatch.setattr(validator, "check_unit", slow)
    started = time.monotonic()
    with pytest.raises(validator.ValidationError, match="did not finish"):
        validator.check_puzzle(4, solved_grid(4), Settings(join_timeout=0.05))
    assert time.monotonic() - started < 1.0


def test_thread_start_failure_aborts_validation(monkeypatch):
    class NoThreads(validator.ThreadPoolExecutor):
        def submit(self, *args, **kwargs):
            raise RuntimeError("can't start new thread")

    monkeypatch.setattr(validator, "ThreadPoolExecutor", NoThreads)
    with pytest.raises(validator.ValidationError, match="can't start new thread"):
        validator.check_puzzle(4, solved_grid(4))


def test_invalid_settings_rejected():
    with pytest.raises(ValueError):
        validator.check_puzzle(4, solved_grid(4), Settings(max_workers=0))
