from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class GameGrid:
    """Discrete 2D grid for dropped blocks.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != 0:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], value: int) -> int:
        """Fill cells checked with `can_place`, clear full rows, return how many were cleared."""
        for x, y in cells:
            self.grid[y, x] = value
        return self._clear_full_lines()

    def _clear_full_lines(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        self.grid = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, self.grid))
        return num

    def any_filled_above(self, row: int) -> bool:
        return bool(np.any(self.grid[:row] != 0))

    def free_space_profile(self, start_row: int) -> Tuple[int, ...]:
        """Per column, the number of empty cells from `start_row` down to the first block."""
        profile = []
        for x in range(self.width):
            column = self.grid[start_row:, x]
            filled = np.flatnonzero(column)
            profile.append(int(filled[0]) if filled.size else int(column.size))
        return tuple(profile)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
