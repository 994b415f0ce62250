"""Round state machine and turn resolution logic."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from lonely_game.core.board import EnemyChart, HomeField
from lonely_game.core.combatants import Opponent, Player
from lonely_game.core.models import (
    MAX_FACTORIES_COUNT,
    MAX_SHIPS_COUNT,
    AttackOutcome,
    CellStatus,
    Coord,
    RoundPhase,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhaseTransition:
    """One edge of the round state machine."""

    trigger: str
    source: RoundPhase
    target: RoundPhase


_PHASE_FLOW: tuple[PhaseTransition, ...] = (
    PhaseTransition("setup_done", RoundPhase.SETUP, RoundPhase.CONSTRUCTION),
    PhaseTransition("factories_complete", RoundPhase.CONSTRUCTION, RoundPhase.BATTLE),
    PhaseTransition("fleet_sunk", RoundPhase.BATTLE, RoundPhase.VICTORY),
    PhaseTransition("factories_lost", RoundPhase.BATTLE, RoundPhase.LOSS),
)


@dataclass(slots=True)
class GameSession:
    """Runtime state of one round."""

    player: Player
    opponent: Opponent
    phase: RoundPhase = RoundPhase.SETUP
    chart: EnemyChart = field(default_factory=EnemyChart)
    home: HomeField = field(default_factory=HomeField)
    last_message: str = ""
    history: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PlayerAttackResult:
    """Outcome of a single player attack."""

    coord: Coord
    hit: bool
    repeated: bool
    sunk: bool


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """End-of-round statistics."""

    victory: bool
    player_mishits: int
    opponent_mishits: int
    sunken_ships: int
    destroyed_factories: int


def create_session(rng: random.Random, *, opponent: Opponent | None = None) -> GameSession:
    """Create players, hide the opponent fleet and open the construction phase."""
    session = GameSession(
        player=Player(),
        opponent=opponent if opponent is not None else Opponent(rng),
    )
    _advance(session, "setup_done")
    _record(session, "Build your factories.")
    return session


def build_factory(session: GameSession, coord: Coord) -> bool:
    """Build a factory during construction; the fourth one starts the battle."""
    if session.phase is not RoundPhase.CONSTRUCTION:
        return False
    if not session.player.build_factory(coord.x, coord.y):
        _record(session, f"Factory is already built in the zone of ({coord.x}, {coord.y}).")
        return False

    session.home.mark(coord, CellStatus.FACTORY)
    _record(session, f"Factory built at ({coord.x}, {coord.y}).")
    if len(session.player.factories) >= MAX_FACTORIES_COUNT:
        _advance(session, "factories_complete")
        _record(session, "All factories built. Battle started.")
    return True


def destroy_factory(session: GameSession, coord: Coord) -> bool:
    """Remove one of the player's own factories during construction."""
    if session.phase is not RoundPhase.CONSTRUCTION:
        return False
    if not session.player.destroy_factory(coord.x, coord.y):
        _record(session, f"No factory to destroy at ({coord.x}, {coord.y}).")
        return False
    session.home.mark(coord, CellStatus.SEA)
    _record(session, f"Factory at ({coord.x}, {coord.y}) destroyed.")
    return True


def player_attack(session: GameSession, coord: Coord) -> PlayerAttackResult | None:
    """Resolve the player's attack on the opponent's sea."""
    if session.phase is not RoundPhase.BATTLE:
        return None

    sunk_before = session.player.sunken_ships_count
    hit = session.player.attack_enemy(session.opponent, coord.x, coord.y)
    repeated = not session.chart.record(coord, hit)
    sunk = session.player.sunken_ships_count > sunk_before
    logger.debug("player_attack at=%s hit=%s repeated=%s sunk=%s", coord, hit, repeated, sunk)

    if sunk:
        _record(session, f"You fired at ({coord.x}, {coord.y}): ship sunk.")
    elif hit:
        _record(session, f"You fired at ({coord.x}, {coord.y}): hit.")
    elif repeated:
        _record(session, f"You fired at ({coord.x}, {coord.y}) again.")
    else:
        _record(session, f"You fired at ({coord.x}, {coord.y}): miss.")

    if session.player.sunken_ships_count >= MAX_SHIPS_COUNT:
        _advance(session, "fleet_sunk")
        _record(session, "Victory!")
    return PlayerAttackResult(coord=coord, hit=hit, repeated=repeated, sunk=sunk)


def opponent_attack(session: GameSession) -> AttackOutcome | None:
    """Resolve the opponent's reply against the player's factories."""
    if session.phase is not RoundPhase.BATTLE:
        return None

    outcome = session.opponent.attack_player(session.player)
    coord = outcome.coord
    logger.debug("opponent_attack at=%s hit=%s", coord, outcome.hit)
    if outcome.hit:
        session.home.mark(coord, CellStatus.DESTROYED)
        _record(session, f"Enemy shot your factory in ({coord.x}, {coord.y}).")
    else:
        session.home.mark(coord, CellStatus.OPENED_BY_ENEMY)
        _record(session, f"Enemy missed you in ({coord.x}, {coord.y}).")

    if session.opponent.destroyed_factories_count >= MAX_FACTORIES_COUNT:
        _advance(session, "factories_lost")
        _record(session, "Loss!")
    return outcome


def round_summary(session: GameSession) -> RoundSummary:
    """Collect end-of-round statistics."""
    return RoundSummary(
        victory=session.phase is RoundPhase.VICTORY,
        player_mishits=session.player.mishits_count,
        opponent_mishits=session.opponent.mishits_count,
        sunken_ships=session.player.sunken_ships_count,
        destroyed_factories=session.opponent.destroyed_factories_count,
    )


def _advance(session: GameSession, trigger: str) -> bool:
    for transition in _PHASE_FLOW:
        if transition.trigger == trigger and transition.source is session.phase:
            logger.info("round_phase from=%s to=%s", session.phase.value, transition.target.value)
            session.phase = transition.target
            return True
    return False


def _record(session: GameSession, message: str) -> None:
    session.last_message = message
    session.history.append(message)
