import logging
import random

import pytest

import lonely_game.core.placement as placement
from lonely_game.core.models import FLEET_LENGTHS, Coord, Orientation, all_cells
from lonely_game.core.placement import (
    PlacementError,
    build_fleet,
    fleet_is_separated,
    place_vessel,
)
from lonely_game.core.vessel import Vessel


def _manhattan(a: Coord, b: Coord) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def test_random_fleets_are_separated_for_many_seeds() -> None:
    for seed in range(1000):
        vessels = build_fleet(random.Random(seed))
        assert [vessel.length for vessel in vessels] == list(FLEET_LENGTHS)
        for index, vessel in enumerate(vessels):
            assert len(vessel.cells) == vessel.length
            assert all(cell.in_bounds() for cell in vessel.cells)
            for other in vessels[index + 1 :]:
                assert all(
                    _manhattan(a, b) > 1 for a in vessel.cells for b in other.cells
                ), f"seed={seed}"
        assert fleet_is_separated(vessels)


def test_build_fleet_is_reproducible_for_seed() -> None:
    first = [vessel.position for vessel in build_fleet(random.Random(42))]
    second = [vessel.position for vessel in build_fleet(random.Random(42))]
    assert first == second


def test_place_vessel_removes_exclusion_zone_from_candidates() -> None:
    candidates = all_cells()
    vessel = Vessel(3, Orientation.HORIZONTAL)
    place_vessel(vessel, candidates, random.Random(3))
    assert vessel.is_placed
    assert candidates.isdisjoint(vessel.exclusion_zone())
    assert len(candidates) == 100 - len(vessel.exclusion_zone())


def test_single_cell_vessel_takes_first_seed() -> None:
    candidates = {Coord(6, 6)}
    vessel = Vessel(1, Orientation.VERTICAL)
    place_vessel(vessel, candidates, random.Random(0))
    assert vessel.cells == [Coord(6, 6)]
    assert candidates == set()


def test_place_vessel_extends_backwards_when_forward_is_blocked() -> None:
    candidates = {Coord(4, 5), Coord(5, 5)}
    for seed in range(10):
        vessel = Vessel(2, Orientation.HORIZONTAL)
        place_vessel(vessel, set(candidates), random.Random(seed))
        assert set(vessel.cells) == candidates


def test_empty_candidates_are_refilled() -> None:
    candidates: set[Coord] = set()
    vessel = Vessel(4, Orientation.VERTICAL)
    place_vessel(vessel, candidates, random.Random(1))
    assert vessel.is_placed
    assert len(candidates) == 100 - len(vessel.exclusion_zone())


def test_exhausted_candidates_reset_to_full_board(caplog) -> None:
    candidates = {Coord(0, 0), Coord(5, 5)}
    vessel = Vessel(3, Orientation.HORIZONTAL)
    with caplog.at_level(logging.WARNING, logger="lonely_game.core.placement"):
        place_vessel(vessel, candidates, random.Random(9))
    assert vessel.is_placed
    assert any("placement_pool_reset" in message for message in caplog.messages)


def test_attempt_guard_raises(monkeypatch) -> None:
    monkeypatch.setattr(placement, "MAX_PLACEMENT_ATTEMPTS", 1)
    vessel = Vessel(2, Orientation.HORIZONTAL)
    with pytest.raises(PlacementError):
        place_vessel(vessel, {Coord(0, 0)}, random.Random(0))


def test_fleet_is_separated_detects_touching_vessels() -> None:
    touching = [
        Vessel(2, Orientation.HORIZONTAL, [Coord(0, 0), Coord(1, 0)]),
        Vessel(1, Orientation.HORIZONTAL, [Coord(1, 1)]),
    ]
    diagonal = [
        Vessel(2, Orientation.HORIZONTAL, [Coord(0, 0), Coord(1, 0)]),
        Vessel(1, Orientation.HORIZONTAL, [Coord(2, 1)]),
    ]
    assert not fleet_is_separated(touching)
    assert fleet_is_separated(diagonal)


@pytest.mark.parametrize("seed", range(5))
def test_place_fleet_warns_when_reset_leaves_vessels_touching(monkeypatch, caplog, seed) -> None:
    strip = {Coord(x, 0) for x in range(4)}
    monkeypatch.setattr(placement, "all_cells", lambda: set(strip))
    vessels = [Vessel(2, Orientation.HORIZONTAL), Vessel(2, Orientation.HORIZONTAL)]

    with caplog.at_level(logging.WARNING, logger="lonely_game.core.placement"):
        placement.place_fleet(vessels, random.Random(seed))

    assert all(vessel.is_placed and set(vessel.cells) <= strip for vessel in vessels)
    assert not fleet_is_separated(vessels)
    assert any("placement_overlap" in message for message in caplog.messages)
