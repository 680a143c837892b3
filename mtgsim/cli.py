"""
mtgsim CLI - Command-line interface for the engine.

Usage:
    mtgsim serve                       Run the HTTP API
    mtgsim simulate <game_file>        Create a game and advance it
"""

import argparse
import json
import logging
import sys

from .config import get_settings


def main(argv=None):
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="mtgsim - Turn and zone engine for a Commander table",
        prog="mtgsim",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Create a game and advance it")
    simulate_parser.add_argument(
        "game_file",
        help="JSON file: a create-game request, or a bare decklist both seats will play",
    )
    simulate_parser.add_argument("--advances", "-n", type=int, default=13, help="Number of advances")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    simulate_parser.add_argument("--viewer", type=int, default=None, help="Seat whose hand to show")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("mtgsim.api.app:app", host=args.host, port=args.port)


def cmd_simulate(args):
    """Create a game from a file and print a snapshot after every advance."""
    from pydantic import ValidationError

    from .api.schemas import CreateGameRequest, ErrorResponse
    from .api.service import APIService
    from .engine_core.errors import InvalidDecklistError

    try:
        with open(args.game_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.game_file}")
        sys.exit(1)

    if isinstance(data, list):
        data = {
            "players": [
                {"name": "Player 1", "decklist": data},
                {"name": "AI Opponent", "decklist": data},
            ],
        }
    if args.seed is not None:
        data["seed"] = args.seed
    if args.viewer is not None:
        data["humanPlayerIndex"] = args.viewer

    try:
        request = CreateGameRequest.model_validate(data)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    service = APIService()
    try:
        state = service.create_game(request)
    except InvalidDecklistError as e:
        print("Error: invalid decklist")
        for msg in e.errors:
            print(f"  - {msg}")
        sys.exit(1)

    _print_state(state)
    for _ in range(args.advances):
        state = service.advance(state.game_id)
        if isinstance(state, ErrorResponse):
            print(f"Error: {state.error}")
            sys.exit(1)
        _print_state(state)


def _print_state(state):
    print(json.dumps(state.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
