"""Display contract the controller reports game events to."""

from __future__ import annotations

from typing import Protocol

from lonely_game.core.models import Coord, Side
from lonely_game.core.rules import RoundSummary


class Display(Protocol):
    """Notification-only surface. The game never reads anything back from it."""

    def factory_changed(self, coord: Coord, *, built: bool, success: bool) -> None:
        """Report a build (`built=True`) or destroy attempt at `coord`."""

    def cell_attacked(
        self, attacker: Side, coord: Coord, *, hit: bool, repeated: bool = False
    ) -> None:
        """Report an attack by either side."""

    def round_ended(self, summary: RoundSummary) -> None:
        """Report victory or loss with round statistics."""

    def status(self, message: str) -> None:
        """Show an informational message."""
