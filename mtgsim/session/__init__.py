"""
Session Module - Owns live game instances.

A game lives in the registry from creation until it is ended:
- Created from resolved decklists, opening hands already dealt
- Advanced and queried by id
- Discarded when ended

Games are EPHEMERAL: nothing is persisted.
"""

from .manager import GameRegistry, GameRecord

__all__ = [
    "GameRegistry",
    "GameRecord",
]
