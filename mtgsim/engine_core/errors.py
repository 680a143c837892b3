"""
Engine errors.

Empty-library draws are deliberately absent: drawing past the bottom of the
library is a silent no-op, not a failure.
"""

from __future__ import annotations


class MtgSimError(Exception):
    """Base class for all mtgsim errors."""


class InvalidDecklistError(MtgSimError, ValueError):
    """Raised when a decklist is empty or malformed. Nothing is published."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid decklist: {'; '.join(errors)}")


class NoActiveGameError(MtgSimError, LookupError):
    """Raised when a game is queried or advanced but does not exist."""

    def __init__(self, game_id: str | None):
        self.game_id = game_id
        super().__init__(f"No active game with id {game_id!r}")


class GameInvariantError(MtgSimError, RuntimeError):
    """Phase/step bookkeeping is corrupt. Not recoverable."""


class UnsupportedDeckSourceError(MtgSimError, ValueError):
    """Deck URL does not belong to a supported deck-building site."""

    def __init__(self, deck_url: str):
        self.deck_url = deck_url
        super().__init__(f"Invalid or unsupported deck URL: {deck_url}")


class InvalidViewerError(MtgSimError, ValueError):
    """Snapshot viewer is not one of the game's seats."""

    def __init__(self, viewer_idx: int, num_players: int):
        self.viewer_idx = viewer_idx
        self.num_players = num_players
        super().__init__(f"Viewer seat {viewer_idx} is not one of {num_players} seats")
