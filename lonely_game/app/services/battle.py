"""Battle flow orchestration separated from controller logic."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from lonely_game.core.models import AttackOutcome, Coord, RoundPhase
from lonely_game.core.rules import (
    GameSession,
    PlayerAttackResult,
    create_session,
    opponent_attack,
    player_attack,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlayerTurnResult:
    """Outcome of a full player action (player attack + optional opponent reply)."""

    player: PlayerAttackResult | None
    opponent: AttackOutcome | None
    phase: RoundPhase


def start_round(rng: random.Random) -> GameSession:
    """Create a fresh round with a newly placed opponent fleet."""
    session = create_session(rng)
    logger.info(
        "round_started vessels=%s",
        [vessel.length for vessel in session.opponent.vessels],
    )
    return session


def resolve_player_turn(session: GameSession, coord: Coord) -> PlayerTurnResult:
    """Apply the player's attack and let the opponent reply unless the round ended."""
    result = player_attack(session, coord)
    if result is None:
        return PlayerTurnResult(player=None, opponent=None, phase=session.phase)
    if session.phase.is_terminal:
        return PlayerTurnResult(player=result, opponent=None, phase=session.phase)

    reply = opponent_attack(session)
    return PlayerTurnResult(player=result, opponent=reply, phase=session.phase)
