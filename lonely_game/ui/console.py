"""Plain-text display and line-based input loop."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from lonely_game.app.controller import MENU_OPTIONS, GameController
from lonely_game.core.models import BOARD_SIZE, CellStatus, Coord, RoundPhase, Side
from lonely_game.core.rules import RoundSummary

logger = logging.getLogger(__name__)

CELL_SYMBOLS: dict[CellStatus, str] = {
    CellStatus.UNKNOWN: "#",
    CellStatus.SEA: "~",
    CellStatus.MISS: "~",
    CellStatus.HIT: "✶",
    CellStatus.FACTORY: "●",
    CellStatus.DESTROYED: "✶",
    CellStatus.OPENED_BY_ENEMY: "x",
}

COMMANDS: dict[str, str] = {
    "w": "move_up",
    "up": "move_up",
    "s": "move_down",
    "down": "move_down",
    "a": "move_left",
    "left": "move_left",
    "d": "move_right",
    "right": "move_right",
    "b": "build",
    "x": "destroy",
    "f": "attack",
    "m": "open_menu",
    "": "select",
    "?": "where",
    "r": "retry",
    "q": "quit",
}


class ConsoleDisplay:
    """Display implementation writing plain text to a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def factory_changed(self, coord: Coord, *, built: bool, success: bool) -> None:
        if built:
            text = "Factory was successfully built!" if success else "Factory is already built in this zone!"
        else:
            text = (
                "Factory was successfully destroyed!"
                if success
                else "There are no factories to destroy in this cell!"
            )
        self._write(f"({coord.x}, {coord.y}) {text}")

    def cell_attacked(
        self, attacker: Side, coord: Coord, *, hit: bool, repeated: bool = False
    ) -> None:
        if attacker is Side.PLAYER:
            if hit:
                text = "You hit the ship!"
            elif repeated:
                text = "You hit the same cell again."
            else:
                text = "You missed!"
            self._write(f"({coord.x}, {coord.y}) {text}")
            return
        if hit:
            self._write(f"Enemy shot your factory in ({coord.x}, {coord.y}) cell!")
        else:
            self._write(f"Enemy missed you in ({coord.x}, {coord.y}) cell!")

    def round_ended(self, summary: RoundSummary) -> None:
        self._write(
            ("Victory!" if summary.victory else "Loss!")
            + "\nTotally:"
            + f"\n* {summary.player_mishits} mishits by player"
            + f"\n* {summary.opponent_mishits} mishits by enemy"
            + f"\n* {summary.sunken_ships} sunken ships"
            + f"\n* {summary.destroyed_factories} destroyed factories"
            + "\n(press r to retry, q to quit)"
        )

    def status(self, message: str) -> None:
        self._write(message)

    def render(self, controller: GameController) -> None:
        """Draw the home field and the enemy chart side by side."""
        session = controller.session
        if controller.menu_open:
            for index, option in enumerate(MENU_OPTIONS):
                marker = ">" if index == controller.menu_index else " "
                self._write(f"{marker} {index + 1}. {option.replace('_', ' ')}")
            return

        home_cursor = controller.cursor if controller.phase is RoundPhase.CONSTRUCTION else None
        chart_cursor = controller.cursor if controller.phase is RoundPhase.BATTLE else None
        header = " ".join(f" {x} " for x in range(BOARD_SIZE))
        self._write(f"   {header}    {header}")
        for y in range(BOARD_SIZE):
            home_row = _render_row(
                [session.home.status(Coord(x, y)) for x in range(BOARD_SIZE)], y, home_cursor
            )
            chart_row = _render_row(
                [session.chart.status(Coord(x, y)) for x in range(BOARD_SIZE)], y, chart_cursor
            )
            self._write(f"{y:>2} {home_row}    {chart_row}")
        self._write(
            f"phase={controller.phase.value.lower()} "
            f"sunken={session.player.sunken_ships_count} "
            f"afloat={len(session.opponent.remaining_vessels())} "
            f"lost={session.opponent.destroyed_factories_count}"
        )

    def _write(self, text: str) -> None:
        self._stream.write(text + "\n")


def _render_row(statuses: list[CellStatus], y: int, cursor: Coord | None) -> str:
    cells = []
    for x, status in enumerate(statuses):
        symbol = CELL_SYMBOLS[status]
        if cursor is not None and cursor == Coord(x, y):
            cells.append(f"[{symbol}]")
        else:
            cells.append(f" {symbol} ")
    return " ".join(cells)


def parse_command(line: str) -> str | None:
    """Translate one typed line into a controller action id."""
    text = line.strip().lower()
    parts = text.split()
    if len(parts) == 3 and parts[0] == "f":
        return f"attack:{parts[1]},{parts[2]}"
    if text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(MENU_OPTIONS):
            return f"menu:{MENU_OPTIONS[index]}"
        return None
    return COMMANDS.get(text)


def run_console(
    controller: GameController, display: ConsoleDisplay, lines: Iterable[str]
) -> None:
    """Feed typed lines to the controller until it closes or input ends."""
    display.render(controller)
    for line in lines:
        action_id = parse_command(line)
        if action_id is None:
            display.status(f"Unknown command: {line.strip()!r}. Type m for the menu.")
            continue
        controller.handle(action_id)
        if controller.is_closing:
            break
        display.render(controller)
    logger.info("console_closed phase=%s", controller.phase.value)
