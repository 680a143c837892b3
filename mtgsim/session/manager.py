"""
Game Registry - Creates and manages game instances.

LIFECYCLE:
1. Caller submits resolved decklists for every seat
2. All decklists are validated before any player is built
3. Game is built, opening hands dealt, then published under a fresh id
4. Caller advances / queries the game by id
5. Game ends → removed from the registry, state discarded

PERSISTENCE RULES:
- In-memory only, nothing survives a restart
- A game that fails construction is never published

One lock guards every read-modify-publish of the registry and every
mutation of a registered game.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Sequence
import logging
import random
import threading
import time
import uuid

from ..engine_core.errors import InvalidDecklistError, NoActiveGameError
from ..engine_core.snapshot import build_snapshot
from ..engine_core.state import GameState, PlayerConfig
from ..engine_core.turn import advance, initialize
from ..engine_core.zones import create_player, validate_decklist

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """A registered game plus its bookkeeping."""
    game: GameState
    created_at: float
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def game_id(self) -> str:
        return self.game.game_id


class GameRegistry:
    """
    Owns every live game, keyed by an opaque id.

    Responsibilities:
    - Build and publish games atomically
    - Look games up, raising NoActiveGameError for unknown ids
    - Serialize mutations so concurrent requests cannot interleave
    """

    def __init__(self):
        self._games: dict[str, GameRecord] = {}
        self._lock = threading.Lock()

    def create_game(
        self,
        player_configs: Sequence[PlayerConfig],
        seed: int | None = None,
        human_player_idx: int = 0,
    ) -> GameState:
        """
        Create, initialize and publish a new game.

        Args:
            player_configs: One config per seat, in turn order
            seed: Seed for shuffling (random if not provided)
            human_player_idx: Seat whose hand snapshots reveal

        Returns:
            The published GameState, opening hands already dealt

        Raises:
            InvalidDecklistError: if any seat's decklist is unusable
        """
        if not player_configs:
            raise InvalidDecklistError(["at least one player is required"])
        if not 0 <= human_player_idx < len(player_configs):
            raise InvalidDecklistError(
                [f"human seat {human_player_idx} is not one of {len(player_configs)} seats"]
            )

        # Validate every seat before building anything
        errors: list[str] = []
        for config in player_configs:
            try:
                validate_decklist(config.decklist)
            except InvalidDecklistError as e:
                errors.extend(f"{config.name}: {msg}" for msg in e.errors)
        if errors:
            raise InvalidDecklistError(errors)

        rng = random.Random(seed)
        game = GameState(
            game_id=str(uuid.uuid4()),
            players=[create_player(config, rng) for config in player_configs],
            human_player_idx=human_player_idx,
            rng=rng,
        )
        initialize(game)

        with self._lock:
            self._games[game.game_id] = GameRecord(game=game, created_at=time.time())

        logger.info(
            "Game %s created with players: %s (seed %s)",
            game.game_id, ", ".join(p.name for p in game.players), seed,
        )
        return game

    def get_game(self, game_id: str) -> GameState:
        """Get a game by id."""
        with self._lock:
            record = self._games.get(game_id)
        if record is None:
            raise NoActiveGameError(game_id)
        return record.game

    def advance(self, game_id: str, steps: int = 1) -> list[str]:
        """
        Advance a game `steps` times.

        Returns the state changes of every advance, in order.
        """
        with self._lock:
            record = self._games.get(game_id)
            if record is None:
                raise NoActiveGameError(game_id)
            changes: list[str] = []
            for _ in range(steps):
                changes.extend(advance(record.game))
        return changes

    def snapshot(self, game_id: str, viewer_idx: int | None = None) -> dict[str, Any]:
        """Snapshot a game under the lock."""
        with self._lock:
            record = self._games.get(game_id)
            if record is None:
                raise NoActiveGameError(game_id)
            return build_snapshot(record.game, viewer_idx)

    def end_game(self, game_id: str) -> bool:
        """
        Remove a game from the registry.

        Returns False if no such game was registered.
        """
        with self._lock:
            record = self._games.pop(game_id, None)
        if record is None:
            return False
        logger.info("Game %s ended after turn %d", game_id, record.game.turn)
        return True

    def list_games(self) -> list[str]:
        """List ids of live games."""
        with self._lock:
            return list(self._games)

    def cleanup_stale_games(self, max_age_seconds: int = 3600) -> int:
        """
        End games older than max_age.

        Returns the number of games removed.
        """
        current_time = time.time()
        with self._lock:
            stale = [
                game_id for game_id, record in self._games.items()
                if current_time - record.created_at > max_age_seconds
            ]
        for game_id in stale:
            self.end_game(game_id)
        return len(stale)
