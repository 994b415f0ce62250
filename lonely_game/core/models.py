"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 10
MAX_FACTORIES_COUNT = 4
MAX_SHIPS_COUNT = 7
MAX_VESSEL_LENGTH = 5

# Declaration order matters: the player's attacks scan vessels in this order.
FLEET_LENGTHS: tuple[int, ...] = (5, 4, 3, 2, 2, 1, 1)


class Orientation(StrEnum):
    """Vessel orientation. Horizontal runs along x, vertical along y."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CellStatus(IntEnum):
    """Per-cell status stored in numpy-backed grids."""

    UNKNOWN = 0
    SEA = 1
    MISS = 2
    HIT = 3
    FACTORY = 4
    DESTROYED = 5
    OPENED_BY_ENEMY = 6


class RoundPhase(StrEnum):
    """Phase of a single round."""

    SETUP = "SETUP"
    CONSTRUCTION = "CONSTRUCTION"
    BATTLE = "BATTLE"
    VICTORY = "VICTORY"
    LOSS = "LOSS"

    @property
    def is_terminal(self) -> bool:
        return self in (RoundPhase.VICTORY, RoundPhase.LOSS)


class Side(StrEnum):
    """Who made a move."""

    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    x: int
    y: int

    def in_bounds(self, size: int = BOARD_SIZE) -> bool:
        """Return whether the coordinate lies on a size x size board."""
        return 0 <= self.x < size and 0 <= self.y < size

    def shifted(self, orientation: Orientation, offset: int) -> Coord:
        """Return the coordinate moved `offset` cells along `orientation`."""
        if orientation is Orientation.HORIZONTAL:
            return Coord(self.x + offset, self.y)
        return Coord(self.x, self.y + offset)


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Result of a single opponent attack."""

    coord: Coord
    hit: bool


def all_cells(size: int = BOARD_SIZE) -> set[Coord]:
    """Return every cell of the board."""
    return {Coord(x, y) for x in range(size) for y in range(size)}


def exclusion_zone(coord: Coord) -> tuple[Coord, ...]:
    """Return a cell and its four orthogonal neighbours.

    Cells outside the board are included; callers intersect with their own sets.
    """
    return (
        coord,
        Coord(coord.x + 1, coord.y),
        Coord(coord.x - 1, coord.y),
        Coord(coord.x, coord.y + 1),
        Coord(coord.x, coord.y - 1),
    )
