"""Randomized fleet placement with exclusion zones."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from lonely_game.core.models import FLEET_LENGTHS, Coord, Orientation, all_cells
from lonely_game.core.vessel import Vessel

logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 8


class PlacementError(RuntimeError):
    """Raised when a vessel cannot be placed within the attempt guard."""


def build_fleet(rng: random.Random, lengths: Sequence[int] = FLEET_LENGTHS) -> list[Vessel]:
    """Create vessels with random orientations and place them on an empty board."""
    vessels = [Vessel(length, rng=rng) for length in lengths]
    place_fleet(vessels, rng)
    return vessels


def place_fleet(vessels: Sequence[Vessel], rng: random.Random) -> None:
    """Place every vessel in order, sharing one candidate pool across the fleet."""
    candidates = all_cells()
    for vessel in vessels:
        place_vessel(vessel, candidates, rng)
    if not fleet_is_separated(vessels):
        logger.warning("placement_overlap vessels=%s", vessels)


def place_vessel(vessel: Vessel, candidates: set[Coord], rng: random.Random) -> None:
    """Place one vessel from `candidates` and remove its exclusion zone from them.

    When no seed in the pool fits, the pool is reset to the full board. Vessels
    placed before the reset keep their cells but their exclusion zones are not
    reapplied, so later vessels may touch them.
    """
    for attempt in range(1, MAX_PLACEMENT_ATTEMPTS + 1):
        if not candidates:
            candidates.update(all_cells())
        run = _find_run(vessel.length, vessel.orientation, candidates, rng)
        if run is not None:
            vessel.place(run)
            candidates.difference_update(vessel.exclusion_zone())
            return
        logger.warning(
            "placement_pool_reset length=%d orientation=%s attempt=%d remaining=%d",
            vessel.length,
            vessel.orientation.value,
            attempt,
            len(candidates),
        )
        candidates.clear()
    raise PlacementError(
        f"Failed to place vessel of length {vessel.length} after {MAX_PLACEMENT_ATTEMPTS} attempts."
    )


def fleet_is_separated(vessels: Sequence[Vessel]) -> bool:
    """Return whether no vessel overlaps or touches another along an axis."""
    for index, vessel in enumerate(vessels):
        zone = vessel.exclusion_zone()
        for other in vessels[index + 1 :]:
            if zone.intersection(other.position):
                return False
    return True


def _find_run(
    length: int,
    orientation: Orientation,
    candidates: set[Coord],
    rng: random.Random,
) -> list[Coord] | None:
    working = sorted(candidates, key=lambda cell: (cell.x, cell.y))
    while working:
        seed = rng.choice(working)
        run = _lay_run(seed, length, orientation, 1, candidates)
        if run is None:
            working.remove(seed)
            run = _lay_run(seed, length, orientation, -1, candidates)
        if run is not None:
            return run
    return None


def _lay_run(
    seed: Coord,
    length: int,
    orientation: Orientation,
    direction: int,
    candidates: set[Coord],
) -> list[Coord] | None:
    run: list[Coord] = []
    for offset in range(length):
        cell = seed.shifted(orientation, direction * offset)
        if cell not in candidates:
            return None
        run.append(cell)
    return run
