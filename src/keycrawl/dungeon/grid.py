from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from ..exceptions import GenerationError
from .rooms import Direction

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class OccupancyGrid:
    """
    Bookkeeping for which grid cells already hold a room. Used only during
    generation; the finished dungeon is the room tree itself. All access is
    bounds-checked.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid must be at least 1x1")
        self.width = width
        self.height = height
        self._cells: List[List[bool]] = [[False for _ in range(width)] for _ in range(height)]

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupied(self, row: int, col: int) -> bool:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell out of bounds: ({row},{col}) not in [0,{self.height})x[0,{self.width})")
        return self._cells[row][col]

    def is_free(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and not self._cells[row][col]

    def occupy(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise GenerationError(f"Attempt to place a room out of bounds at ({row},{col})")
        if self._cells[row][col]:
            raise GenerationError(f"Cell ({row},{col}) already holds a room")
        self._cells[row][col] = True

    @property
    def occupied_count(self) -> int:
        return sum(1 for line in self._cells for taken in line if taken)

    # ---- Query -----------------------------------------------------------
    def adjacent_tiles(
        self,
        row: int,
        col: int,
        predicate: Optional[Callable[[int, int], bool]] = None,
    ) -> List[Cell]:
        """In-bounds cells one move away, ordered UP, LEFT, DOWN, RIGHT."""
        tiles: List[Cell] = []
        for d in Direction:
            r, c = row + d.drow, col + d.dcol
            if self.in_bounds(r, c) and (predicate is None or predicate(r, c)):
                tiles.append((r, c))
        return tiles

    def free_adjacent_tiles(self, row: int, col: int) -> List[Cell]:
        return self.adjacent_tiles(row, col, lambda r, c: not self._cells[r][c])

    def __str__(self) -> str:  # pragma: no cover - debugging helper
        return "\n".join("".join("#" if taken else "." for taken in line) for line in self._cells)
