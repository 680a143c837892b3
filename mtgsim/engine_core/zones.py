"""
Deck/Zone Engine - Builds libraries and moves cards between zones.

This module handles:
- Validating resolved decklists
- Expanding decklists into libraries
- Shuffling with an injected random source
- Drawing from library to hand

It knows nothing about turns, phases or steps.
"""

from __future__ import annotations
import logging
from dataclasses import replace
import random
from typing import Sequence

from .errors import InvalidDecklistError
from .state import Card, DeckEntry, PlayerConfig, PlayerState, STARTING_LIFE

logger = logging.getLogger(__name__)


def validate_decklist(decklist: Sequence[DeckEntry]) -> None:
    """
    Check that a decklist is usable.

    Raises InvalidDecklistError listing every problem found.
    """
    errors: list[str] = []

    if not decklist:
        raise InvalidDecklistError(["decklist has no entries"])

    total = 0
    for i, entry in enumerate(decklist):
        if not isinstance(entry, DeckEntry):
            errors.append(f"entry {i} is not a deck entry")
            continue
        quantity = entry.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            errors.append(f"entry {i} quantity must be an integer, got {quantity!r}")
            continue
        if quantity < 0:
            errors.append(f"entry {i} ({getattr(entry.card, 'name', '?')}) has negative quantity {quantity}")
            continue
        if not isinstance(entry.card, Card):
            errors.append(f"entry {i} has no card attributes")
            continue
        total += quantity

    if not errors and total == 0:
        errors.append("decklist contains no cards")

    if errors:
        raise InvalidDecklistError(errors)


def build_library(decklist: Sequence[DeckEntry]) -> list[Card]:
    """
    Expand (quantity, card) entries into a flat list of card copies.

    Order follows the decklist; quantity 0 contributes nothing.
    """
    library: list[Card] = []
    for entry in decklist:
        if entry.quantity < 0:
            raise InvalidDecklistError(
                [f"{entry.card.name} has negative quantity {entry.quantity}"]
            )
        for _ in range(entry.quantity):
            library.append(replace(entry.card))
    return library


def shuffle_library(library: list[Card], rng: random.Random) -> None:
    """Shuffle in place (Fisher-Yates) using the given source."""
    rng.shuffle(library)


def draw(player: PlayerState, n: int = 1) -> list[Card]:
    """
    Move up to n cards from the top of the library to the end of the hand.

    Draws past an empty library are skipped. Returns the cards drawn.
    """
    drawn: list[Card] = []
    for _ in range(n):
        if not player.library:
            logger.warning("%s tried to draw a card, but their library is empty", player.name)
            continue
        card = player.library.pop()
        player.hand.append(card)
        drawn.append(card)
        logger.debug("%s drew %s", player.name, card.name)
    return drawn


def create_player(config: PlayerConfig, rng: random.Random) -> PlayerState:
    """
    Seat a player: validate the decklist, build and shuffle the library.

    The shuffle happens exactly once, before any draw.
    """
    validate_decklist(config.decklist)

    library = build_library(config.decklist)
    player = PlayerState(
        name=config.name,
        life=STARTING_LIFE,
        deck_size=len(library),
        library=library,
        deck_name=config.deck_name,
        commander=config.commander,
    )

    logger.info("%s is shuffling their library (%d cards)", player.name, len(library))
    shuffle_library(player.library, rng)
    return player
