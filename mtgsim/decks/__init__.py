"""
Decks - Adapters from deck-building sites to resolved decklists.
"""

from .sources import (
    DeckSource,
    DeckListItem,
    deck_source,
    parse_moxfield_deck,
    parse_archidekt_deck,
    parse_deck_payload,
    chunk_identifiers,
    resolve_decklist,
    SCRYFALL_CHUNK_SIZE,
    SCRYFALL_COLLECTION_URL,
)

__all__ = [
    "DeckSource",
    "DeckListItem",
    "deck_source",
    "parse_moxfield_deck",
    "parse_archidekt_deck",
    "parse_deck_payload",
    "chunk_identifiers",
    "resolve_decklist",
    "SCRYFALL_CHUNK_SIZE",
    "SCRYFALL_COLLECTION_URL",
]
