"""Uniform random targeting over a shrinking pool of candidate cells."""

from __future__ import annotations

import random

from lonely_game.ai.strategy import TargetingStrategy, TargetPoolExhausted
from lonely_game.core.models import Coord, all_cells, exclusion_zone


class RandomPoolTargeting(TargetingStrategy):
    """Pick any unresolved cell; prune a destroyed factory's construction zone.

    Factories cannot stand next to each other, so once one is destroyed its
    neighbours cannot hold another factory and are dropped from the pool.
    """

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self._pool: set[Coord] = all_cells()

    @property
    def remaining(self) -> frozenset[Coord]:
        return frozenset(self._pool)

    def choose_target(self) -> Coord:
        if not self._pool:
            raise TargetPoolExhausted("No unresolved cells left to attack.")
        return self._rng.choice(sorted(self._pool, key=lambda cell: (cell.x, cell.y)))

    def notify_result(self, coord: Coord, hit: bool) -> None:
        if hit:
            self._pool.difference_update(exclusion_zone(coord))
        else:
            self._pool.discard(coord)
