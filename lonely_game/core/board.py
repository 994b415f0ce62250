"""Numpy-backed status grids for both sides of the table."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from lonely_game.core.models import BOARD_SIZE, CellStatus, Coord


def _grid(fill: CellStatus) -> np.ndarray:
    return np.full((BOARD_SIZE, BOARD_SIZE), int(fill), dtype=np.int8)


@dataclass(slots=True)
class EnemyChart:
    """The player's record of the opponent's sea, indexed [x, y]."""

    cells: np.ndarray = field(default_factory=lambda: _grid(CellStatus.UNKNOWN))

    def status(self, coord: Coord) -> CellStatus:
        return CellStatus(int(self.cells[coord.x, coord.y]))

    def is_resolved(self, coord: Coord) -> bool:
        """Return whether this cell was already attacked."""
        return bool(self.cells[coord.x, coord.y] != CellStatus.UNKNOWN)

    def record(self, coord: Coord, hit: bool) -> bool:
        """Mark an attacked cell. Returns False when it was already resolved."""
        if not coord.in_bounds() or self.is_resolved(coord):
            return False
        self.cells[coord.x, coord.y] = CellStatus.HIT if hit else CellStatus.MISS
        return True


@dataclass(slots=True)
class HomeField:
    """The player's own field: factories and where the opponent has fired."""

    cells: np.ndarray = field(default_factory=lambda: _grid(CellStatus.SEA))

    def status(self, coord: Coord) -> CellStatus:
        return CellStatus(int(self.cells[coord.x, coord.y]))

    def mark(self, coord: Coord, status: CellStatus) -> None:
        if coord.in_bounds():
            self.cells[coord.x, coord.y] = status

    def count(self, status: CellStatus) -> int:
        return int(np.count_nonzero(self.cells == status))
