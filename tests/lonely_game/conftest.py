from __future__ import annotations

import random

import pytest

from lonely_game.core.combatants import Opponent
from lonely_game.core.models import CellStatus, Coord, Orientation, RoundPhase
from lonely_game.core.rules import GameSession, RoundSummary, create_session
from lonely_game.core.vessel import Vessel


def make_fixed_fleet() -> list[Vessel]:
    """Separated fleet in declaration order; the first length-1 vessel sits on (3, 3)."""
    return [
        Vessel(5, Orientation.HORIZONTAL, [Coord(x, 0) for x in range(0, 5)]),
        Vessel(4, Orientation.HORIZONTAL, [Coord(x, 2) for x in range(6, 10)]),
        Vessel(3, Orientation.HORIZONTAL, [Coord(x, 4) for x in range(0, 3)]),
        Vessel(2, Orientation.VERTICAL, [Coord(5, 6), Coord(5, 7)]),
        Vessel(2, Orientation.HORIZONTAL, [Coord(0, 8), Coord(1, 8)]),
        Vessel(1, Orientation.HORIZONTAL, [Coord(3, 3)]),
        Vessel(1, Orientation.VERTICAL, [Coord(9, 9)]),
    ]


def fixed_session(rng: random.Random) -> GameSession:
    return create_session(rng, opponent=Opponent(rng, vessels=make_fixed_fleet()))


def battle_session(rng: random.Random) -> GameSession:
    session = fixed_session(rng)
    for coord in FACTORY_SITES:
        session.player.build_factory(coord.x, coord.y)
        session.home.mark(coord, CellStatus.FACTORY)
    session.phase = RoundPhase.BATTLE
    return session


FACTORY_SITES = (Coord(1, 1), Coord(8, 1), Coord(1, 7), Coord(8, 7))


class RecordingDisplay:
    """Display double that keeps every notification."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def factory_changed(self, coord: Coord, *, built: bool, success: bool) -> None:
        self.events.append(("factory", coord, built, success))

    def cell_attacked(self, attacker, coord: Coord, *, hit: bool, repeated: bool = False) -> None:
        self.events.append(("attack", attacker, coord, hit, repeated))

    def round_ended(self, summary: RoundSummary) -> None:
        self.events.append(("round_ended", summary))

    def status(self, message: str) -> None:
        self.events.append(("status", message))

    def of_kind(self, kind: str) -> list[tuple]:
        return [event for event in self.events if event[0] == kind]


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def fixed_fleet() -> list[Vessel]:
    return make_fixed_fleet()


@pytest.fixture
def fixed_opponent(seeded_rng: random.Random) -> Opponent:
    return Opponent(seeded_rng, vessels=make_fixed_fleet())


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def session(seeded_rng: random.Random) -> GameSession:
    return fixed_session(seeded_rng)


@pytest.fixture
def battle(seeded_rng: random.Random) -> GameSession:
    return battle_session(seeded_rng)


@pytest.fixture
def session_factory():
    return fixed_session


@pytest.fixture
def factory_sites() -> tuple[Coord, ...]:
    return FACTORY_SITES
