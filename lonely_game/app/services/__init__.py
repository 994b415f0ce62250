"""Application service-layer helpers."""

from lonely_game.app.services.battle import PlayerTurnResult, resolve_player_turn, start_round

__all__ = [
    "PlayerTurnResult",
    "resolve_player_turn",
    "start_round",
]
