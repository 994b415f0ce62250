"""Player and opponent state with their attack and build operations."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from lonely_game.ai.random_pool import RandomPoolTargeting
from lonely_game.ai.strategy import TargetingStrategy
from lonely_game.core.models import AttackOutcome, Coord, exclusion_zone
from lonely_game.core.placement import build_fleet
from lonely_game.core.vessel import Vessel

logger = logging.getLogger(__name__)


class Player:
    """Human side: builds factories and attacks the opponent's fleet."""

    def __init__(self) -> None:
        self._factories: set[Coord] = set()
        self._sunken_ships_count = 0
        self._mishits_count = 0

    @property
    def factories(self) -> frozenset[Coord]:
        return frozenset(self._factories)

    @property
    def sunken_ships_count(self) -> int:
        return self._sunken_ships_count

    @property
    def mishits_count(self) -> int:
        return self._mishits_count

    def has_factory(self, coord: Coord) -> bool:
        return coord in self._factories

    def build_factory(self, x: int, y: int) -> bool:
        """Build on (x, y) unless the cell or a 4-neighbour already holds a factory."""
        target = Coord(x, y)
        if not target.in_bounds():
            return False
        if any(cell in self._factories for cell in exclusion_zone(target)):
            return False
        self._factories.add(target)
        return True

    def destroy_factory(self, x: int, y: int) -> bool:
        """Remove the factory on exactly (x, y); return whether one was there."""
        target = Coord(x, y)
        if target not in self._factories:
            return False
        self._factories.remove(target)
        return True

    def attack_enemy(self, opponent: Opponent, x: int, y: int) -> bool:
        """Fire at (x, y). The first vessel in fleet order holding the cell takes the hit."""
        target = Coord(x, y)
        vessel = next((v for v in opponent.vessels if v.occupies(target)), None)
        if vessel is None:
            self._mishits_count += 1
            return False
        vessel.take_damage(target)
        if vessel.is_destroyed():
            self._sunken_ships_count += 1
            logger.debug("vessel_sunk length=%d at=%s", vessel.length, target)
        return True


class Opponent:
    """Computer side: hides a fleet and attacks the player's factories."""

    def __init__(
        self,
        rng: random.Random,
        *,
        vessels: Sequence[Vessel] | None = None,
        strategy: TargetingStrategy | None = None,
    ) -> None:
        self.vessels: list[Vessel] = list(vessels) if vessels is not None else build_fleet(rng)
        self._strategy = strategy if strategy is not None else RandomPoolTargeting(rng)
        self._destroyed_factories_count = 0
        self._mishits_count = 0

    @property
    def strategy(self) -> TargetingStrategy:
        return self._strategy

    @property
    def destroyed_factories_count(self) -> int:
        return self._destroyed_factories_count

    @property
    def mishits_count(self) -> int:
        return self._mishits_count

    def remaining_vessels(self) -> list[Vessel]:
        return [vessel for vessel in self.vessels if not vessel.is_destroyed()]

    def attack_player(self, player: Player) -> AttackOutcome:
        """Attack one cell from the target pool and report where and whether it hit."""
        target = self._strategy.choose_target()
        hit = player.destroy_factory(target.x, target.y)
        self._strategy.notify_result(target, hit)
        if hit:
            self._destroyed_factories_count += 1
        else:
            self._mishits_count += 1
        return AttackOutcome(coord=target, hit=hit)
