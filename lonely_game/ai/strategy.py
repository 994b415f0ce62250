"""Opponent targeting strategy contract."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lonely_game.core.models import Coord


class TargetPoolExhausted(RuntimeError):
    """Raised when a target is requested but every cell has been resolved."""


class TargetingStrategy(ABC):
    """Chooses which of the player's cells the opponent attacks next."""

    @property
    @abstractmethod
    def remaining(self) -> frozenset[Coord]:
        """Cells still considered as targets."""

    @abstractmethod
    def choose_target(self) -> Coord:
        """Return next coordinate to attack."""

    @abstractmethod
    def notify_result(self, coord: Coord, hit: bool) -> None:
        """Update strategy state with attack result."""
