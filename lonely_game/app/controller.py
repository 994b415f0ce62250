"""Application controller: cursor, menu, and round actions."""

from __future__ import annotations

import dataclasses
import logging
import random

from lonely_game.app.action_dispatch import ActionDispatcher
from lonely_game.app.display import Display
from lonely_game.app.services.battle import resolve_player_turn, start_round
from lonely_game.core.models import BOARD_SIZE, Coord, RoundPhase, Side
from lonely_game.core.rules import GameSession, build_factory, destroy_factory, round_summary

logger = logging.getLogger(__name__)

MENU_OPTIONS: tuple[str, ...] = ("resume", "help", "about", "new_game", "quit")

HELP_TEXT = (
    "Move the cursor with the arrows (w/a/s/d).\n"
    "Construction: b builds a factory, x removes it. Factories need one free cell\n"
    "between them along each axis. Build four to start the battle.\n"
    "Battle: f attacks the cell under the cursor. Sink all seven ships to win;\n"
    "lose all four factories and the round is lost.\n"
    "m opens the menu."
)
ABOUT_TEXT = "Lonely Game: build factories, find the hidden fleet before it finds you."

_MENU_ACTIONS = frozenset({"move_up", "move_down", "select", "quit"})


class GameController:
    """Maps action ids onto round operations and reports outcomes to the display."""

    def __init__(self, display: Display, rng: random.Random) -> None:
        self._display = display
        self._rng = rng
        self._session = start_round(rng)
        self._cursor = Coord(0, 0)
        self._menu_open = False
        self._menu_index = 0
        self._is_closing = False
        self._dispatcher = ActionDispatcher(
            direct_handlers={
                "move_up": lambda: self._move(0, -1),
                "move_down": lambda: self._move(0, 1),
                "move_left": lambda: self._move(-1, 0),
                "move_right": lambda: self._move(1, 0),
                "build": self._on_build,
                "destroy": self._on_destroy,
                "attack": self._on_attack_cursor,
                "where": self._on_where,
                "open_menu": self._on_open_menu,
                "select": self._on_select,
                "retry": self._on_retry,
                "quit": self._on_quit,
            },
            prefixed_handlers=(
                ("attack:", self._on_attack_at),
                ("menu:", self._on_menu_option),
            ),
        )
        self._display.status(self._session.last_message)

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> RoundPhase:
        return self._session.phase

    @property
    def cursor(self) -> Coord:
        return self._cursor

    @property
    def menu_open(self) -> bool:
        return self._menu_open

    @property
    def menu_index(self) -> int:
        return self._menu_index

    @property
    def is_closing(self) -> bool:
        return self._is_closing

    def handle(self, action_id: str) -> bool:
        """Dispatch one action. Returns whether it changed or reported anything."""
        if self._is_closing:
            return False
        if self._menu_open and action_id not in _MENU_ACTIONS and not action_id.startswith("menu:"):
            self._display.status("Close the menu first.")
            return False
        handled = self._dispatcher.dispatch(action_id)
        if handled is None:
            logger.debug("unknown_action action=%s", action_id)
            return False
        return handled

    def _move(self, dx: int, dy: int) -> bool:
        if self._menu_open:
            self._menu_index = min(max(self._menu_index + dy, 0), len(MENU_OPTIONS) - 1)
            return True
        x = min(max(self._cursor.x + dx, 0), BOARD_SIZE - 1)
        y = min(max(self._cursor.y + dy, 0), BOARD_SIZE - 1)
        self._cursor = Coord(x, y)
        return True

    def _on_build(self) -> bool:
        if self.phase is not RoundPhase.CONSTRUCTION:
            self._display.status("Factories can only be built before the battle.")
            return False
        success = build_factory(self._session, self._cursor)
        self._display.factory_changed(self._cursor, built=True, success=success)
        if self.phase is RoundPhase.BATTLE:
            self._cursor = Coord(0, 0)
            self._display.status(self._session.last_message)
        return success

    def _on_destroy(self) -> bool:
        if self.phase is not RoundPhase.CONSTRUCTION:
            self._display.status("Factories can only be removed before the battle.")
            return False
        success = destroy_factory(self._session, self._cursor)
        self._display.factory_changed(self._cursor, built=False, success=success)
        return success

    def _on_attack_cursor(self) -> bool:
        return self._attack(self._cursor)

    def _on_attack_at(self, suffix: str) -> bool:
        coord = _parse_coord(suffix)
        if coord is None:
            self._display.status(f"Invalid target: {suffix!r}.")
            return False
        self._cursor = coord
        return self._attack(coord)

    def _attack(self, coord: Coord) -> bool:
        if self.phase is not RoundPhase.BATTLE:
            self._display.status("There is nothing to attack yet.")
            return False
        turn = resolve_player_turn(self._session, coord)
        if turn.player is None:
            return False
        self._display.cell_attacked(
            Side.PLAYER, coord, hit=turn.player.hit, repeated=turn.player.repeated
        )
        if turn.opponent is not None:
            self._display.cell_attacked(Side.OPPONENT, turn.opponent.coord, hit=turn.opponent.hit)
        if turn.phase.is_terminal:
            summary = round_summary(self._session)
            logger.info(
                "round_ended victory=%s player_mishits=%d opponent_mishits=%d "
                "sunken_ships=%d destroyed_factories=%d",
                summary.victory,
                summary.player_mishits,
                summary.opponent_mishits,
                summary.sunken_ships,
                summary.destroyed_factories,
                extra={"summary": dataclasses.asdict(summary)},
            )
            self._display.round_ended(summary)
        return True

    def _on_where(self) -> bool:
        self._display.status(f"{self._cursor.x}, {self._cursor.y}")
        return True

    def _on_open_menu(self) -> bool:
        self._menu_open = True
        self._menu_index = 0
        self._display.status("Menu: " + ", ".join(MENU_OPTIONS))
        return True

    def _on_select(self) -> bool:
        if not self._menu_open:
            return self._on_where()
        return self._on_menu_option(MENU_OPTIONS[self._menu_index])

    def _on_menu_option(self, option: str) -> bool:
        if option not in MENU_OPTIONS:
            self._display.status(f"Unknown menu option: {option!r}.")
            return False
        if option == "resume":
            self._menu_open = False
            return True
        if option == "help":
            self._display.status(HELP_TEXT)
            return True
        if option == "about":
            self._display.status(ABOUT_TEXT)
            return True
        if option == "new_game":
            self._new_round()
            return True
        return self._on_quit()

    def _on_retry(self) -> bool:
        if not self.phase.is_terminal:
            self._display.status("The round is still in progress.")
            return False
        self._new_round()
        return True

    def _on_quit(self) -> bool:
        self._is_closing = True
        self._menu_open = False
        logger.info("quit phase=%s", self.phase.value)
        return True

    def _new_round(self) -> None:
        self._session = start_round(self._rng)
        self._cursor = Coord(0, 0)
        self._menu_open = False
        self._menu_index = 0
        self._display.status(self._session.last_message)


def _parse_coord(raw: str) -> Coord | None:
    parts = raw.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        coord = Coord(int(parts[0]), int(parts[1]))
    except ValueError:
        return None
    return coord if coord.in_bounds() else None
