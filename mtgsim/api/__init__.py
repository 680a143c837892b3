"""
API Module - HTTP interface to the engine.

Clients:
1. Create a game from resolved decklists (or fetched deck payloads)
2. Advance it step by step
3. Read snapshots, with only their own hand revealed
4. End it when done

All state is registry-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    ImportDeckRequest,
    DeckLookupRequest,
    PlayerSetup,
    DeckEntryModel,
    # Responses
    GameStateResponse,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
    DeckLookupResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    PlayerInfo,
    CardInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "ImportDeckRequest",
    "DeckLookupRequest",
    "PlayerSetup",
    "DeckEntryModel",
    # Responses
    "GameStateResponse",
    "GameListResponse",
    "EndGameResponse",
    "HealthResponse",
    "DeckLookupResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "PlayerInfo",
    "CardInfo",
    # Service
    "APIService",
    "create_app",
]
