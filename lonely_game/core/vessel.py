"""Opponent vessel state and damage resolution."""

from __future__ import annotations

import random
from collections.abc import Iterable

from lonely_game.core.models import (
    BOARD_SIZE,
    MAX_VESSEL_LENGTH,
    Coord,
    Orientation,
    exclusion_zone,
)


class VesselConfigError(ValueError):
    """Raised when a vessel is built or mutated with malformed data."""


def random_orientation(rng: random.Random) -> Orientation:
    """Pick an orientation with even odds."""
    return Orientation.HORIZONTAL if rng.random() < 0.5 else Orientation.VERTICAL


class Vessel:
    """A single ship: fixed length and orientation, shrinking cell list, health."""

    def __init__(
        self,
        length: int,
        orientation: Orientation | None = None,
        position: Iterable[Coord] | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if not isinstance(length, int) or not 1 <= length <= MAX_VESSEL_LENGTH:
            raise VesselConfigError(f"Vessel length must be 1..{MAX_VESSEL_LENGTH}, got {length!r}.")
        if orientation is None:
            if rng is None:
                raise VesselConfigError("Random orientation requires an rng.")
            orientation = random_orientation(rng)
        if not isinstance(orientation, Orientation):
            raise VesselConfigError(f"Undefined vessel orientation: {orientation!r}.")

        self._length = length
        self._orientation = orientation
        self._position: tuple[Coord, ...] = ()
        self.cells: list[Coord] = []
        self._health = 0
        if position is not None:
            self.place(position)
        self.health = length

    def __repr__(self) -> str:
        return (
            f"Vessel(length={self._length}, orientation={self._orientation.value}, "
            f"health={self._health}, cells={self.cells!r})"
        )

    @property
    def length(self) -> int:
        return self._length

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def position(self) -> tuple[Coord, ...]:
        """Cells assigned at placement time, unaffected by damage."""
        return self._position

    @property
    def is_placed(self) -> bool:
        return bool(self._position)

    @property
    def health(self) -> int:
        return self._health

    @health.setter
    def health(self, value: int) -> None:
        if not 0 <= value <= self._length:
            raise VesselConfigError(
                f"Vessel health must be within [0, {self._length}], got {value}."
            )
        self._health = value

    def place(self, cells: Iterable[Coord]) -> None:
        """Assign the vessel's position. Cells must form a valid straight run."""
        ordered = list(cells)
        _validate_position(ordered, self._length, self._orientation)
        self._position = tuple(ordered)
        self.cells = list(ordered)

    def occupies(self, coord: Coord) -> bool:
        """Return whether an undamaged part of the vessel sits on `coord`."""
        return coord in self.cells

    def take_damage(self, coord: Coord) -> bool:
        """Remove `coord` from the vessel if present; return whether it was a hit."""
        if not self.occupies(coord):
            return False
        self.cells.remove(coord)
        self.health -= 1
        return True

    def is_destroyed(self) -> bool:
        return self._health == 0

    def exclusion_zone(self) -> set[Coord]:
        """Return in-bounds cells covered by the vessel and its orthogonal neighbours."""
        zone: set[Coord] = set()
        for cell in self._position:
            zone.update(near for near in exclusion_zone(cell) if near.in_bounds())
        return zone


def _validate_position(cells: list[Coord], length: int, orientation: Orientation) -> None:
    if len(cells) != length:
        raise VesselConfigError(
            f"Vessel position must have {length} cells, got {len(cells)}."
        )
    if len(set(cells)) != len(cells):
        raise VesselConfigError("Vessel position contains duplicate cells.")
    for cell in cells:
        if not isinstance(cell, Coord) or not cell.in_bounds(BOARD_SIZE):
            raise VesselConfigError(f"Vessel cell out of bounds: {cell!r}.")

    if orientation is Orientation.HORIZONTAL:
        fixed = {cell.y for cell in cells}
        running = sorted(cell.x for cell in cells)
    else:
        fixed = {cell.x for cell in cells}
        running = sorted(cell.y for cell in cells)
    if len(fixed) != 1:
        raise VesselConfigError(f"Vessel cells are not aligned {orientation.value.lower()}ly.")
    if running[-1] - running[0] != length - 1:
        raise VesselConfigError("Vessel cells are not contiguous.")
