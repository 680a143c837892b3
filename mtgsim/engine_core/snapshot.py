"""
Snapshot - Serializable view of a game for one viewer seat.

Hidden information: only the viewer's hand is revealed. Every other seat
reports counts only, with an empty hand list.
"""

from __future__ import annotations
from typing import Any

from .errors import InvalidViewerError
from .state import GameState, PlayerState
from .turn import current_phase, current_step


def build_snapshot(game: GameState, viewer_idx: int | None = None) -> dict[str, Any]:
    """
    Project the game into the state contract.

    viewer_idx defaults to the game's human seat. Exactly one seat is
    revealed, so a viewer outside the seat range raises InvalidViewerError.
    """
    if viewer_idx is None:
        viewer_idx = game.human_player_idx
    if not 0 <= viewer_idx < game.num_players:
        raise InvalidViewerError(viewer_idx, game.num_players)

    return {
        "gameId": game.game_id,
        "turn": game.turn,
        "phase": current_phase(game),
        "step": current_step(game),
        "activePlayerIndex": game.active_player_idx,
        "activePlayerName": game.active_player.name,
        "players": [
            _player_view(player, revealed=(i == viewer_idx))
            for i, player in enumerate(game.players)
        ],
    }


def _player_view(player: PlayerState, revealed: bool) -> dict[str, Any]:
    return {
        "name": player.name,
        "life": player.life,
        "handCount": len(player.hand),
        "libraryCount": len(player.library),
        "graveyardCount": len(player.graveyard),
        "battlefieldCount": len(player.battlefield),
        "exileCount": len(player.exile),
        "deckName": player.deck_name,
        "commander": player.commander,
        "hand": [card.to_dict() for card in player.hand] if revealed else [],
    }
