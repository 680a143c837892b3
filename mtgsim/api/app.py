"""
FastAPI Application - REST API for the game engine.

Endpoints:
    POST   /api/v1/games                 Create a game from resolved decklists
    POST   /api/v1/games/import          Create a game from fetched deck payloads
    POST   /api/v1/decks/lookup          Locate a deck and batch its card lookups
    GET    /api/v1/games                 List live games
    GET    /api/v1/games/{id}/state      Get a snapshot
    POST   /api/v1/games/{id}/advance    Advance to the next step or phase
    DELETE /api/v1/games/{id}            End a game
    GET    /health                       Health check

All responses are JSON with explicit Pydantic schemas. Snapshot fields use
camelCase keys.
"""

from typing import Annotated, Optional, Union

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..engine_core.errors import InvalidDecklistError, UnsupportedDeckSourceError
from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    ImportDeckRequest,
    DeckLookupRequest,
    # Response models
    GameStateResponse,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
    DeckLookupResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()
    api_service = service or APIService(game_ttl_seconds=settings.game_ttl_seconds)

    app = FastAPI(
        title="mtgsim API",
        description="""
Turn and zone engine for a simplified Commander table.

## Game Flow

1. `POST /api/v1/games` with one resolved decklist per seat.
   Libraries are shuffled and opening hands dealt.
2. `POST /api/v1/games/{id}/advance` walks untap, upkeep, draw,
   main, combat steps, main, end, cleanup, then the next turn.
3. Every response is a snapshot. Only the human seat's hand is revealed.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_DECKLIST` | Decklist empty or malformed |
| `NO_ACTIVE_GAME` | Game does not exist, create a new one |
| `INVALID_VIEWER` | Viewer seat is not one of the game's seats |
| `UNSUPPORTED_DECK_SOURCE` | Deck URL is not Moxfield or Archidekt |
| `VALIDATION_ERROR` | Request body failed validation |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_status(response: ErrorResponse) -> int:
        return 404 if response.error_code == ErrorCode.NO_ACTIVE_GAME else 400

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": [
                {"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid decklist"}},
        tags=["Games"],
        summary="Create a new game",
    )
    def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Create a game, shuffle every library and deal opening hands.

        Nothing is created if any decklist is invalid.
        """
        try:
            return api_service.create_game(request)
        except InvalidDecklistError as e:
            return make_error_response(
                ErrorCode.INVALID_DECKLIST, str(e), details={"errors": e.errors}
            )

    @app.post(
        "/api/v1/games/import",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Create a game from fetched deck payloads",
    )
    def import_game(request: ImportDeckRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Create a game where every seat plays the imported deck.

        The Moxfield/Archidekt deck JSON and the Scryfall card objects are
        supplied by the caller; this endpoint does no fetching.
        """
        try:
            return api_service.import_game(request)
        except UnsupportedDeckSourceError as e:
            return make_error_response(ErrorCode.UNSUPPORTED_DECK_SOURCE, str(e))
        except InvalidDecklistError as e:
            return make_error_response(
                ErrorCode.INVALID_DECKLIST, str(e), details={"errors": e.errors}
            )

    @app.post(
        "/api/v1/decks/lookup",
        response_model=DeckLookupResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Decks"],
        summary="Locate a deck and batch its card lookups",
    )
    def lookup_deck(request: DeckLookupRequest) -> Union[DeckLookupResponse, JSONResponse]:
        """
        Resolve a deck URL to the API URL serving its JSON.

        When the fetched deck JSON is supplied, the response also lists the
        Scryfall collection batches whose results feed /api/v1/games/import.
        """
        try:
            return api_service.lookup_deck(request)
        except UnsupportedDeckSourceError as e:
            return make_error_response(ErrorCode.UNSUPPORTED_DECK_SOURCE, str(e))
        except InvalidDecklistError as e:
            return make_error_response(
                ErrorCode.INVALID_DECKLIST, str(e), details={"errors": e.errors}
            )

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List live games",
    )
    def list_games() -> GameListResponse:
        """List all live game IDs."""
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}/state",
        response_model=GameStateResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Viewer is not a seat"},
            404: {"model": ErrorResponse},
        },
        tags=["Game Loop"],
        summary="Get a game snapshot",
    )
    def get_state(
        game_id: str,
        viewer: Annotated[Optional[int], Query(ge=0, description="Seat whose hand to reveal")] = None,
    ) -> Union[GameStateResponse, JSONResponse]:
        """Get the current snapshot of a game."""
        response = api_service.get_state(game_id, viewer=viewer)
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code, response.error, error_status(response), response.details
            )
        return response

    @app.post(
        "/api/v1/games/{game_id}/advance",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Advance to the next step or phase",
    )
    def advance(
        game_id: str,
        steps: Annotated[int, Query(ge=1, le=100, description="How many times to advance")] = 1,
    ) -> Union[GameStateResponse, JSONResponse]:
        """
        Advance the game.

        Each advance lands on a step or a main phase. The draw step draws
        for the active player, except on turn 1.
        """
        response = api_service.advance(game_id, steps)
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code, response.error, error_status(response), response.details
            )
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    def end_game(game_id: str) -> EndGameResponse:
        """End a game and release it."""
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Check that the server is running."""
        return HealthResponse(
            status="healthy",
            service="mtgsim",
            version=__version__,
            env=settings.env,
        )

    return app


# For running directly: uvicorn mtgsim.api.app:app
app = create_app()
