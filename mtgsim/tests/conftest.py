"""
Pytest fixtures for mtgsim tests.
"""

import random

import pytest

from ..engine_core.state import Card, DeckEntry, PlayerConfig, GameState
from ..engine_core.turn import initialize
from ..engine_core.zones import create_player
from ..session import GameRegistry


def make_card(i: int, creature: bool = True) -> Card:
    """Build a distinct test card."""
    if creature:
        return Card(
            card_id=f"card-{i}",
            name=f"Grizzly Bears {i}",
            mana_cost="{1}{G}",
            type_line="Creature — Bear",
            oracle_text="",
            power="2",
            toughness="2",
            image_uris={"normal": f"https://img.example/{i}.jpg"},
        )
    return Card(
        card_id=f"card-{i}",
        name=f"Forest {i}",
        type_line="Basic Land — Forest",
        oracle_text="({T}: Add {G}.)",
    )


def distinct_decklist(size: int) -> list[DeckEntry]:
    """A decklist of `size` distinct cards, one copy each."""
    return [DeckEntry(quantity=1, card=make_card(i)) for i in range(size)]


@pytest.fixture
def ten_card_decklist() -> list[DeckEntry]:
    """Ten distinct cards."""
    return distinct_decklist(10)


@pytest.fixture
def two_player_configs(ten_card_decklist) -> list[PlayerConfig]:
    """Two seats, each with the ten-card deck."""
    return [
        PlayerConfig(name="Player 1", decklist=ten_card_decklist, deck_name="Bears", commander="Bear Lord"),
        PlayerConfig(name="AI Opponent", decklist=ten_card_decklist),
    ]


@pytest.fixture
def registry() -> GameRegistry:
    """A fresh, empty registry."""
    return GameRegistry()


@pytest.fixture
def new_game(registry, two_player_configs) -> GameState:
    """A freshly created two-player game, opening hands dealt."""
    return registry.create_game(two_player_configs, seed=42)


@pytest.fixture
def bare_game(two_player_configs) -> GameState:
    """An initialized game built without the registry."""
    rng = random.Random(7)
    game = GameState(
        game_id="test_game",
        players=[create_player(config, rng) for config in two_player_configs],
        rng=rng,
    )
    initialize(game)
    return game
