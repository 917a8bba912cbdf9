"""Runtime knobs shared by the CLI and the web UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_FILL_PASSES = 5


@dataclass
class Settings:
    """Tuning for validation and filling.

    ``max_workers`` of None lets every unit check run at once; a number
    bounds how many worker threads check units at the same time.
    ``join_timeout`` bounds the wait for all unit checks, in seconds.
    """

    fill_passes: int = DEFAULT_FILL_PASSES
    stop_when_stable: bool = False
    max_workers: Optional[int] = None
    join_timeout: Optional[float] = None

    def validate(self) -> "Settings":
        if self.fill_passes < 0:
            raise ValueError(f"fill_passes must be >= 0, got {self.fill_passes}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.join_timeout is not None and self.join_timeout <= 0:
            raise ValueError(f"join_timeout must be > 0, got {self.join_timeout}")
        return self
