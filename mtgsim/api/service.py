"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Owns the game registry and reaps games past their time-to-live
3. Formats snapshots as responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Missing games come back as ErrorResponse(NO_ACTIVE_GAME) so the caller can
recreate; bad decklists raise InvalidDecklistError.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from .schemas import (
    # Requests
    CreateGameRequest,
    ImportDeckRequest,
    DeckLookupRequest,
    PlayerSetup,
    # Responses
    GameStateResponse,
    DeckLookupResponse,
    ErrorResponse,
    ErrorCode,
)
from ..decks import (
    SCRYFALL_COLLECTION_URL,
    chunk_identifiers,
    deck_source,
    parse_deck_payload,
    resolve_decklist,
)
from ..engine_core.errors import InvalidDecklistError, InvalidViewerError, NoActiveGameError
from ..engine_core.state import Card, DeckEntry, PlayerConfig
from ..session import GameRegistry

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create a game
        state = service.create_game(request)

        # Step through the turn
        state = service.advance(state.game_id)

    Games older than game_ttl_seconds are ended whenever a new game is
    created. None keeps games until they are ended explicitly.
    """
    registry: GameRegistry = field(default_factory=GameRegistry)
    game_ttl_seconds: int | None = None

    def create_game(self, request: CreateGameRequest) -> GameStateResponse:
        """
        Create a new game and return its opening snapshot.
        """
        configs = [self._to_player_config(seat) for seat in request.players]
        self._reap_stale_games()
        game = self.registry.create_game(
            configs,
            seed=request.seed,
            human_player_idx=request.human_player_index,
        )
        return self._build_game_state(game.game_id, changes=list(game.log))

    def import_game(self, request: ImportDeckRequest) -> GameStateResponse:
        """
        Create a game where every seat plays one imported deck.

        The deck and card payloads must already be fetched.
        """
        source = deck_source(request.deck_url)
        items = parse_deck_payload(source, request.deck_payload)
        decklist = resolve_decklist(items, request.scryfall_cards)

        configs = [
            PlayerConfig(name=name, decklist=list(decklist))
            for name in request.player_names
        ]
        self._reap_stale_games()
        game = self.registry.create_game(configs, seed=request.seed)
        return self._build_game_state(game.game_id, changes=list(game.log))

    def lookup_deck(self, request: DeckLookupRequest) -> DeckLookupResponse:
        """
        Locate a deck's JSON and, given its payload, batch the card lookups.

        Raises UnsupportedDeckSourceError or InvalidDecklistError.
        """
        source = deck_source(request.deck_url)
        batches: list[list[dict[str, str]]] = []
        if request.deck_payload is not None:
            items = parse_deck_payload(source, request.deck_payload)
            batches = list(chunk_identifiers(items))

        return DeckLookupResponse(
            site=source.site,
            deck_id=source.deck_id,
            api_url=source.api_url,
            collection_url=SCRYFALL_COLLECTION_URL,
            identifier_batches=batches,
        )

    def get_state(
        self,
        game_id: str,
        viewer: int | None = None,
    ) -> GameStateResponse | ErrorResponse:
        """
        Get current game state.
        """
        try:
            return self._build_game_state(game_id, viewer=viewer)
        except NoActiveGameError as e:
            return self._no_active_game(e)
        except InvalidViewerError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_VIEWER,
                details={"viewer": e.viewer_idx, "players": e.num_players},
            )

    def advance(self, game_id: str, steps: int = 1) -> GameStateResponse | ErrorResponse:
        """
        Advance the game and return the resulting snapshot.
        """
        try:
            changes = self.registry.advance(game_id, steps)
            return self._build_game_state(game_id, changes=changes)
        except NoActiveGameError as e:
            return self._no_active_game(e)

    def end_game(self, game_id: str) -> bool:
        """
        End a game.
        """
        return self.registry.end_game(game_id)

    def list_games(self) -> list[str]:
        """
        List live game IDs.
        """
        return self.registry.list_games()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _reap_stale_games(self) -> None:
        if self.game_ttl_seconds is None:
            return
        removed = self.registry.cleanup_stale_games(self.game_ttl_seconds)
        if removed:
            logger.info("Ended %d games older than %ds", removed, self.game_ttl_seconds)

    def _to_player_config(self, seat: PlayerSetup) -> PlayerConfig:
        """Convert a request seat to an engine PlayerConfig."""
        decklist = []
        for entry in seat.decklist:
            try:
                card = Card.from_dict(entry.card.model_dump(by_alias=True))
            except ValueError as e:
                raise InvalidDecklistError([f"{seat.name}: {e}"]) from e
            decklist.append(DeckEntry(quantity=entry.quantity, card=card))

        return PlayerConfig(
            name=seat.name,
            decklist=decklist,
            deck_name=seat.deck_name,
            commander=seat.commander,
        )

    def _build_game_state(
        self,
        game_id: str,
        viewer: int | None = None,
        changes: list[str] | None = None,
    ) -> GameStateResponse:
        """Build a snapshot response."""
        snapshot: dict[str, Any] = self.registry.snapshot(game_id, viewer)
        return GameStateResponse.model_validate({**snapshot, "changes": changes or []})

    def _no_active_game(self, error: NoActiveGameError) -> ErrorResponse:
        return ErrorResponse(
            error=str(error),
            error_code=ErrorCode.NO_ACTIVE_GAME,
            details={"game_id": error.game_id},
        )
