"""
Game State - Cards, players and the game aggregate.

Design principles:
- Cards are immutable values; zones hold full copies
- Players and games are mutated in place by the zone engine and sequencer
- Serializable: cards round-trip through plain mappings
- Game-agnostic about rules: no combat, stack or priority here
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping
import random


STARTING_LIFE = 40
OPENING_HAND_SIZE = 7
LOG_LIMIT = 500


@dataclass(frozen=True)
class Card:
    """
    A card definition as supplied by the card database.

    power/toughness are only present on creatures.
    """
    card_id: str
    name: str
    mana_cost: str = ""
    type_line: str = ""
    oracle_text: str = ""
    power: str | None = None
    toughness: str | None = None
    image_uris: Mapping[str, str] | None = None

    def __post_init__(self):
        # Each copy owns a read-only snapshot of its image links
        if self.image_uris is not None:
            object.__setattr__(self, "image_uris", MappingProxyType(dict(self.image_uris)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Card:
        """
        Build a card from a resolved attribute mapping.

        Accepts both the snapshot spelling (manaCost, typeLine, ...) and
        the Scryfall spelling (mana_cost, type_line, ...).
        """
        card_id = data.get("id")
        name = data.get("name")
        if not isinstance(card_id, str) or not card_id:
            raise ValueError("card attribute 'id' must be a non-empty string")
        if not isinstance(name, str) or not name:
            raise ValueError(f"card {card_id!r} has no name")

        image_uris = data.get("imageUris", data.get("image_uris"))
        return cls(
            card_id=card_id,
            name=name,
            mana_cost=data.get("manaCost", data.get("mana_cost")) or "",
            type_line=data.get("typeLine", data.get("type_line")) or "",
            oracle_text=data.get("oracleText", data.get("oracle_text")) or "",
            power=data.get("power"),
            toughness=data.get("toughness"),
            image_uris=image_uris or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the snapshot card shape."""
        return {
            "id": self.card_id,
            "name": self.name,
            "manaCost": self.mana_cost,
            "typeLine": self.type_line,
            "oracleText": self.oracle_text,
            "power": self.power,
            "toughness": self.toughness,
            "imageUris": dict(self.image_uris) if self.image_uris else None,
        }

    def __hash__(self):
        return hash((self.card_id, self.name))


@dataclass(frozen=True)
class DeckEntry:
    """One line of a resolved decklist: N copies of a card."""
    quantity: int
    card: Card


@dataclass
class PlayerConfig:
    """
    Everything needed to seat a player.

    deck_name and commander are display labels, passed through to snapshots.
    """
    name: str
    decklist: list[DeckEntry]
    deck_name: str | None = None
    commander: str | None = None


@dataclass
class PlayerState:
    """
    State for a single player.

    library is a stack: the last element is the top of the library.
    hand keeps draw order. graveyard, battlefield and exile are reserved
    zones that no core operation fills yet.
    """
    name: str
    life: int = STARTING_LIFE
    deck_size: int = 0

    library: list[Card] = field(default_factory=list)
    hand: list[Card] = field(default_factory=list)
    graveyard: list[Card] = field(default_factory=list)
    battlefield: list[Card] = field(default_factory=list)
    exile: list[Card] = field(default_factory=list)

    deck_name: str | None = None
    commander: str | None = None

    @property
    def zone_total(self) -> int:
        """Cards across all five zones."""
        return (
            len(self.library)
            + len(self.hand)
            + len(self.graveyard)
            + len(self.battlefield)
            + len(self.exile)
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    phase_idx/step_idx index into the static phase schedule; step_idx is
    NO_STEP (-1) in main phases and before the first step of a phase.
    """
    game_id: str
    players: list[PlayerState] = field(default_factory=list)

    turn: int = 1
    active_player_idx: int = 0
    phase_idx: int = 0
    step_idx: int = -1

    # Seat whose hand is revealed in snapshots
    human_player_idx: int = 0

    # Seeded source for shuffling
    rng: random.Random = field(default_factory=random.Random)

    # Most recent human-readable state changes
    log: deque[str] = field(default_factory=lambda: deque(maxlen=LOG_LIMIT))

    @property
    def active_player(self) -> PlayerState:
        return self.players[self.active_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)
