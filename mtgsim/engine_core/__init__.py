"""
Engine Core - Zone transitions and turn sequencing.

The engine:
1. Builds and shuffles each player's library from a resolved decklist
2. Deals opening hands
3. Walks the phase/step schedule, drawing on the draw step
4. Projects the game into a serializable snapshot
"""

from .state import (
    Card,
    DeckEntry,
    PlayerConfig,
    PlayerState,
    GameState,
    STARTING_LIFE,
    OPENING_HAND_SIZE,
)
from .errors import (
    MtgSimError,
    InvalidDecklistError,
    NoActiveGameError,
    GameInvariantError,
    UnsupportedDeckSourceError,
    InvalidViewerError,
)
from .zones import validate_decklist, build_library, shuffle_library, draw, create_player
from .turn import (
    Phase,
    PHASES,
    PHASE_NAMES,
    STEP_NAMES,
    NO_STEP,
    NO_STEP_LABEL,
    initialize,
    advance,
    current_phase,
    current_step,
)
from .snapshot import build_snapshot

__all__ = [
    "Card",
    "DeckEntry",
    "PlayerConfig",
    "PlayerState",
    "GameState",
    "STARTING_LIFE",
    "OPENING_HAND_SIZE",
    "MtgSimError",
    "InvalidDecklistError",
    "NoActiveGameError",
    "GameInvariantError",
    "UnsupportedDeckSourceError",
    "InvalidViewerError",
    "validate_decklist",
    "build_library",
    "shuffle_library",
    "draw",
    "create_player",
    "Phase",
    "PHASES",
    "PHASE_NAMES",
    "STEP_NAMES",
    "NO_STEP",
    "NO_STEP_LABEL",
    "initialize",
    "advance",
    "current_phase",
    "current_step",
    "build_snapshot",
]
