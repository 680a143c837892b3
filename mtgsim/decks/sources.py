"""
Deck Sources - Turn third-party deck payloads into resolved decklists.

Supported sites:
- Moxfield:  https://www.moxfield.com/decks/<id>
- Archidekt: https://archidekt.com/decks/<id>

Nothing here performs network I/O. Callers fetch the deck JSON and the
Scryfall collection JSON themselves and hand the payloads in. Payloads
that do not have the expected shape raise InvalidDecklistError.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Sequence
import logging

from ..engine_core.errors import InvalidDecklistError, UnsupportedDeckSourceError
from ..engine_core.state import Card, DeckEntry

logger = logging.getLogger(__name__)


# Scryfall /cards/collection accepts at most 75 identifiers per request
SCRYFALL_CHUNK_SIZE = 75
SCRYFALL_COLLECTION_URL = "https://api.scryfall.com/cards/collection"

MOXFIELD = "moxfield"
ARCHIDEKT = "archidekt"


@dataclass(frozen=True)
class DeckSource:
    """Where a deck lives and the API URL that serves its JSON."""
    site: str
    deck_id: str
    api_url: str


@dataclass(frozen=True)
class DeckListItem:
    """An unresolved decklist line: a card name and a count."""
    name: str
    quantity: int


def deck_source(deck_url: str) -> DeckSource:
    """
    Identify the site behind a deck URL.

    Raises UnsupportedDeckSourceError for anything but Moxfield/Archidekt.
    """
    if "moxfield.com/decks/" in deck_url:
        deck_id = _deck_id(deck_url)
        return DeckSource(
            site=MOXFIELD,
            deck_id=deck_id,
            api_url=f"https://api.moxfield.com/v2/decks/all/{deck_id}",
        )
    if "archidekt.com/decks/" in deck_url:
        deck_id = _deck_id(deck_url)
        return DeckSource(
            site=ARCHIDEKT,
            deck_id=deck_id,
            api_url=f"https://archidekt.com/api/decks/{deck_id}/",
        )
    raise UnsupportedDeckSourceError(deck_url)


def _deck_id(deck_url: str) -> str:
    deck_id = deck_url.split("/decks/", 1)[1].split("/")[0].split("?")[0]
    if not deck_id:
        raise UnsupportedDeckSourceError(deck_url)
    return deck_id


def parse_moxfield_deck(payload: Mapping[str, Any]) -> list[DeckListItem]:
    """Read the mainboard of a Moxfield deck payload."""
    try:
        return [
            DeckListItem(name=entry["card"]["name"], quantity=int(entry["quantity"]))
            for entry in (payload.get("mainboard") or {}).values()
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise _malformed(MOXFIELD, e) from e


def parse_archidekt_deck(payload: Mapping[str, Any]) -> list[DeckListItem]:
    """Read the card list of an Archidekt deck payload."""
    try:
        return [
            DeckListItem(
                name=entry["card"]["oracleCard"]["name"],
                quantity=int(entry["quantity"]),
            )
            for entry in payload.get("cards") or []
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise _malformed(ARCHIDEKT, e) from e


def _malformed(site: str, error: Exception) -> InvalidDecklistError:
    return InvalidDecklistError([f"malformed {site} deck payload ({error!r})"])


def parse_deck_payload(source: DeckSource, payload: Mapping[str, Any]) -> list[DeckListItem]:
    """Dispatch to the parser for the source's site."""
    parsers = {
        MOXFIELD: parse_moxfield_deck,
        ARCHIDEKT: parse_archidekt_deck,
    }
    return parsers[source.site](payload)


def chunk_identifiers(
    items: Sequence[DeckListItem],
    size: int = SCRYFALL_CHUNK_SIZE,
) -> Iterator[list[dict[str, str]]]:
    """Yield Scryfall collection identifier batches of at most `size`."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    identifiers = [{"name": item.name} for item in items]
    for i in range(0, len(identifiers), size):
        yield identifiers[i:i + size]


def resolve_decklist(
    items: Iterable[DeckListItem],
    scryfall_cards: Iterable[Mapping[str, Any]],
) -> list[DeckEntry]:
    """
    Join decklist names with Scryfall card objects.

    Names with no matching card are dropped. Card objects without a name
    or id raise InvalidDecklistError.
    """
    try:
        by_name = {card["name"]: card for card in scryfall_cards}
    except (KeyError, TypeError) as e:
        raise InvalidDecklistError([f"malformed Scryfall card list ({e!r})"]) from e

    resolved = []
    for item in items:
        data = by_name.get(item.name)
        if data is None:
            logger.warning("No card data found for %s, dropping it", item.name)
            continue
        try:
            card = Card.from_dict(data)
        except ValueError as e:
            raise InvalidDecklistError([f"{item.name}: {e}"]) from e
        resolved.append(DeckEntry(quantity=item.quantity, card=card))
    return resolved
