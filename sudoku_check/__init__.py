"""Concurrent Sudoku validation with a single-candidate filler."""

from .config import Settings
from .filler import fill_missing_numbers, solve_missing_number
from .grid import Grid, PuzzleFormatError, format_puzzle, parse_puzzle, read_puzzle
from .validator import PuzzleReport, ValidationError, check_puzzle, check_puzzle_async, validate_puzzle

__all__ = [
    "Grid",
    "PuzzleFormatError",
    "PuzzleReport",
    "Settings",
    "ValidationError",
    "check_puzzle",
    "check_puzzle_async",
    "fill_missing_numbers",
    "format_puzzle",
    "parse_puzzle",
    "read_puzzle",
    "solve_missing_number",
    "validate_puzzle",
]
