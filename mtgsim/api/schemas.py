"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Snapshot fields are serialized with camelCase aliases (handCount,
activePlayerName, ...) so the wire contract is the same whatever the
transport. Requests accept either the alias or the field name.

Error Codes:
- INVALID_DECKLIST: Decklist empty or malformed, no game was created
- NO_ACTIVE_GAME: Game does not exist or has been ended
- INVALID_VIEWER: Viewer seat is not one of the game's seats
- UNSUPPORTED_DECK_SOURCE: Deck URL is not a Moxfield/Archidekt deck
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server error
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_DECKLIST = "INVALID_DECKLIST"
    NO_ACTIVE_GAME = "NO_ACTIVE_GAME"
    INVALID_VIEWER = "INVALID_VIEWER"
    UNSUPPORTED_DECK_SOURCE = "UNSUPPORTED_DECK_SOURCE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card attributes, as resolved from the card database."""
    card_id: str = Field(..., alias="id")
    name: str
    mana_cost: str = Field("", alias="manaCost")
    type_line: str = Field("", alias="typeLine")
    oracle_text: str = Field("", alias="oracleText")
    power: Optional[str] = Field(None, description="Creatures only")
    toughness: Optional[str] = Field(None, description="Creatures only")
    image_uris: Optional[dict[str, str]] = Field(None, alias="imageUris")

    model_config = {"populate_by_name": True}


class PlayerInfo(BaseModel):
    """One seat in a snapshot. hand is empty unless this is the viewer."""
    name: str
    life: int
    hand_count: int = Field(..., alias="handCount")
    library_count: int = Field(..., alias="libraryCount")
    graveyard_count: int = Field(0, alias="graveyardCount")
    battlefield_count: int = Field(0, alias="battlefieldCount")
    exile_count: int = Field(0, alias="exileCount")
    deck_name: Optional[str] = Field(None, alias="deckName")
    commander: Optional[str] = None
    hand: list[CardInfo] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# =============================================================================
# Request Models
# =============================================================================

class DeckEntryModel(BaseModel):
    """One decklist line: quantity copies of a resolved card."""
    quantity: int = Field(..., description="Number of copies (0 is allowed and ignored)")
    card: CardInfo = Field(..., alias="cardAttributes")

    model_config = {"populate_by_name": True}


class PlayerSetup(BaseModel):
    """A seat and its resolved decklist."""
    name: str = Field(..., min_length=1)
    decklist: list[DeckEntryModel]
    deck_name: Optional[str] = Field(None, alias="deckName")
    commander: Optional[str] = None

    model_config = {"populate_by_name": True}


class CreateGameRequest(BaseModel):
    """Request to create a new game from resolved decklists."""
    players: list[PlayerSetup] = Field(..., min_length=1, description="Seats in turn order")
    seed: Optional[int] = Field(None, description="Seed for reproducible shuffles")
    human_player_index: int = Field(
        0, ge=0, alias="humanPlayerIndex", description="Seat whose hand is revealed"
    )

    model_config = {"populate_by_name": True}


class ImportDeckRequest(BaseModel):
    """
    Request to create a game from already-fetched third-party payloads.

    Both seats play the imported deck.
    """
    deck_url: str = Field(..., alias="deckUrl")
    deck_payload: dict[str, Any] = Field(..., alias="deckPayload", description="Moxfield/Archidekt deck JSON")
    scryfall_cards: list[dict[str, Any]] = Field(
        ..., alias="scryfallCards", description="Card objects from Scryfall /cards/collection"
    )
    player_names: list[str] = Field(
        default_factory=lambda: ["Player 1", "AI Opponent"], alias="playerNames", min_length=1
    )
    seed: Optional[int] = None

    model_config = {"populate_by_name": True}


class DeckLookupRequest(BaseModel):
    """
    Request to locate a deck and plan its card lookups.

    With a deck payload, the response also carries the Scryfall collection
    batches needed to resolve it.
    """
    deck_url: str = Field(..., alias="deckUrl")
    deck_payload: Optional[dict[str, Any]] = Field(None, alias="deckPayload")

    model_config = {"populate_by_name": True}


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Snapshot of a game for one viewer."""
    game_id: str = Field(..., alias="gameId")
    turn: int = Field(..., ge=1)
    phase: str
    step: str
    active_player_index: int = Field(..., alias="activePlayerIndex")
    active_player_name: str = Field(..., alias="activePlayerName")
    players: list[PlayerInfo] = Field(default_factory=list)
    changes: list[str] = Field(default_factory=list, description="State changes made by this call")
    api_version: str = Field("v1", alias="apiVersion")

    model_config = {"populate_by_name": True}


class GameListResponse(BaseModel):
    """Response listing live games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str = Field(..., alias="gameId")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    env: str


class DeckLookupResponse(BaseModel):
    """Where to fetch a deck and which Scryfall lookups resolve it."""
    site: str
    deck_id: str = Field(..., alias="deckId")
    api_url: str = Field(..., alias="apiUrl", description="URL serving the deck JSON")
    collection_url: str = Field(..., alias="collectionUrl")
    identifier_batches: list[list[dict[str, str]]] = Field(
        default_factory=list,
        alias="identifierBatches",
        description="Request bodies for Scryfall /cards/collection, at most 75 names each",
    )

    model_config = {"populate_by_name": True}
