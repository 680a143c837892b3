"""
Tests for the deck/zone engine.

Tests:
- Decklist validation
- Library construction
- Shuffling
- Drawing and zone conservation
"""

import random
from collections import Counter

import pytest

from ..engine_core.errors import InvalidDecklistError
from ..engine_core.state import Card, DeckEntry, PlayerConfig, PlayerState, STARTING_LIFE
from ..engine_core.zones import (
    build_library,
    create_player,
    draw,
    shuffle_library,
    validate_decklist,
)
from .conftest import distinct_decklist, make_card


class TestValidateDecklist:
    """Tests for decklist validation."""

    def test_valid_decklist_passes(self, ten_card_decklist):
        """A normal decklist raises nothing."""
        validate_decklist(ten_card_decklist)

    def test_empty_decklist_rejected(self):
        """No entries is invalid."""
        with pytest.raises(InvalidDecklistError):
            validate_decklist([])

    def test_all_zero_quantities_rejected(self):
        """Entries that add up to no cards are invalid."""
        decklist = [DeckEntry(quantity=0, card=make_card(1))]
        with pytest.raises(InvalidDecklistError) as exc_info:
            validate_decklist(decklist)
        assert "no cards" in str(exc_info.value)

    def test_negative_quantity_rejected(self):
        """Negative quantities are malformed."""
        decklist = [
            DeckEntry(quantity=2, card=make_card(1)),
            DeckEntry(quantity=-1, card=make_card(2)),
        ]
        with pytest.raises(InvalidDecklistError) as exc_info:
            validate_decklist(decklist)
        assert len(exc_info.value.errors) == 1
        assert "negative" in exc_info.value.errors[0]

    def test_non_integer_quantity_rejected(self):
        """Quantities must be ints, and bools don't count."""
        for bad in ("3", 1.5, True):
            with pytest.raises(InvalidDecklistError):
                validate_decklist([DeckEntry(quantity=bad, card=make_card(1))])

    def test_missing_card_rejected(self):
        """An entry without card attributes is malformed."""
        with pytest.raises(InvalidDecklistError):
            validate_decklist([DeckEntry(quantity=1, card=None)])

    def test_invalid_decklist_is_a_value_error(self):
        """Callers can catch it as ValueError."""
        with pytest.raises(ValueError):
            validate_decklist([])


class TestBuildLibrary:
    """Tests for expanding decklists into libraries."""

    def test_expands_quantities(self):
        """Each entry contributes quantity copies, in order."""
        decklist = [
            DeckEntry(quantity=3, card=make_card(1)),
            DeckEntry(quantity=2, card=make_card(2, creature=False)),
        ]
        library = build_library(decklist)

        assert len(library) == 5
        assert [c.card_id for c in library] == ["card-1"] * 3 + ["card-2"] * 2

    def test_zero_quantity_is_noop(self):
        """Quantity 0 adds nothing."""
        decklist = [
            DeckEntry(quantity=0, card=make_card(1)),
            DeckEntry(quantity=1, card=make_card(2)),
        ]
        library = build_library(decklist)
        assert [c.card_id for c in library] == ["card-2"]

    def test_copies_are_equal_by_value(self):
        """Copies equal the source card but are separate objects."""
        card = make_card(1)
        library = build_library([DeckEntry(quantity=2, card=card)])

        assert library[0] == card
        assert library[1] == card
        assert library[0] is not card
        assert library[0] is not library[1]

    def test_copies_do_not_share_image_links(self):
        """Each copy carries its own read-only image mapping."""
        image_uris = {"normal": "https://img.example/1.jpg"}
        card = Card(card_id="c1", name="Bear", image_uris=image_uris)
        library = build_library([DeckEntry(quantity=2, card=card)])

        image_uris["normal"] = "https://img.example/changed.jpg"

        assert library[0].image_uris is not library[1].image_uris
        assert library[0].image_uris["normal"] == "https://img.example/1.jpg"
        with pytest.raises(TypeError):
            library[0].image_uris["normal"] = "x"

    def test_negative_quantity_raises(self):
        """build_library rejects negative quantities on its own."""
        with pytest.raises(InvalidDecklistError):
            build_library([DeckEntry(quantity=-2, card=make_card(1))])


class TestShuffle:
    """Tests for library shuffling."""

    def test_shuffle_is_a_permutation(self):
        """Shuffling keeps the same multiset of cards."""
        decklist = [
            DeckEntry(quantity=4, card=make_card(1)),
            DeckEntry(quantity=3, card=make_card(2)),
            DeckEntry(quantity=1, card=make_card(3)),
        ]
        library = build_library(decklist)
        before = Counter(c.card_id for c in library)

        shuffle_library(library, random.Random(1))

        assert Counter(c.card_id for c in library) == before

    def test_seeded_shuffle_is_reproducible(self):
        """Same seed, same order."""
        first = build_library(distinct_decklist(20))
        second = build_library(distinct_decklist(20))

        shuffle_library(first, random.Random(99))
        shuffle_library(second, random.Random(99))

        assert [c.card_id for c in first] == [c.card_id for c in second]

    def test_positions_are_roughly_uniform(self):
        """Over many trials every card lands in every position about equally."""
        rng = random.Random(2024)
        size = 4
        trials = 4000
        counts = Counter()

        for _ in range(trials):
            library = build_library(distinct_decklist(size))
            shuffle_library(library, rng)
            for position, card in enumerate(library):
                counts[(position, card.card_id)] += 1

        expected = trials / size
        for position in range(size):
            for i in range(size):
                assert abs(counts[(position, f"card-{i}")] - expected) < expected * 0.2


class TestDraw:
    """Tests for drawing cards."""

    def _player(self, size: int) -> PlayerState:
        library = build_library(distinct_decklist(size))
        return PlayerState(name="Tester", deck_size=len(library), library=library)

    def test_draw_takes_from_top(self):
        """The top of the library is its last element."""
        player = self._player(5)
        top = player.library[-1]

        drawn = draw(player)

        assert drawn == [top]
        assert player.hand == [top]
        assert len(player.library) == 4

    def test_hand_keeps_draw_order(self):
        """Cards are appended to the hand in the order drawn."""
        player = self._player(5)
        expected = list(reversed(player.library))[:3]

        draw(player, 3)

        assert player.hand == expected

    @pytest.mark.parametrize("library_size,n", [(10, 3), (3, 3), (2, 5), (0, 4)])
    def test_draw_monotonicity(self, library_size, n):
        """Hand grows and library shrinks by min(n, library size)."""
        player = self._player(library_size)
        hand_before = len(player.hand)
        library_before = len(player.library)

        draw(player, n)

        moved = min(n, library_before)
        assert len(player.hand) == hand_before + moved
        assert len(player.library) == library_before - moved

    def test_draw_from_empty_library_is_silent(self):
        """Drawing past the bottom is a no-op, not an error."""
        player = self._player(0)
        assert draw(player, 3) == []
        assert player.hand == []

    def test_zone_conservation(self):
        """The five zones always add up to the deck size."""
        player = self._player(12)
        rng = random.Random(3)

        for _ in range(10):
            draw(player, rng.randint(0, 4))
            assert player.zone_total == player.deck_size == 12


class TestCreatePlayer:
    """Tests for seating a player."""

    def test_player_starts_at_forty_life(self, ten_card_decklist):
        """Commander starting life."""
        player = create_player(PlayerConfig("Alice", ten_card_decklist), random.Random(0))
        assert player.life == STARTING_LIFE == 40

    def test_player_library_is_full_and_hand_empty(self, ten_card_decklist):
        """Nothing is drawn at construction."""
        player = create_player(PlayerConfig("Alice", ten_card_decklist), random.Random(0))

        assert player.deck_size == 10
        assert len(player.library) == 10
        assert player.hand == []
        assert player.graveyard == [] and player.battlefield == [] and player.exile == []

    def test_labels_pass_through(self, ten_card_decklist):
        """Deck and commander labels are kept untouched."""
        config = PlayerConfig("Alice", ten_card_decklist, deck_name="Bears", commander="Bear Lord")
        player = create_player(config, random.Random(0))

        assert player.deck_name == "Bears"
        assert player.commander == "Bear Lord"

    def test_invalid_decklist_aborts(self):
        """No player is built from a bad decklist."""
        with pytest.raises(InvalidDecklistError):
            create_player(PlayerConfig("Alice", []), random.Random(0))


class TestCard:
    """Tests for card values."""

    def test_from_dict_accepts_scryfall_keys(self):
        """Scryfall spellings map onto card fields."""
        card = Card.from_dict({
            "id": "abc",
            "name": "Llanowar Elves",
            "mana_cost": "{G}",
            "type_line": "Creature — Elf Druid",
            "oracle_text": "{T}: Add {G}.",
            "power": "1",
            "toughness": "1",
            "image_uris": {"small": "https://img.example/s.jpg"},
        })

        assert card.mana_cost == "{G}"
        assert card.type_line == "Creature — Elf Druid"
        assert card.image_uris == {"small": "https://img.example/s.jpg"}

    def test_non_creature_has_no_power(self):
        """power/toughness stay absent on non-creatures."""
        card = Card.from_dict({"id": "sol", "name": "Sol Ring", "manaCost": "{1}", "typeLine": "Artifact"})

        assert card.power is None
        assert card.toughness is None

    def test_from_dict_requires_id_and_name(self):
        """Cards without identity are rejected."""
        with pytest.raises(ValueError):
            Card.from_dict({"name": "Nameless"})
        with pytest.raises(ValueError):
            Card.from_dict({"id": "x", "name": ""})

    def test_round_trip_shape(self):
        """to_dict uses the snapshot keys."""
        data = make_card(3).to_dict()
        assert set(data) == {
            "id", "name", "manaCost", "typeLine", "oracleText",
            "power", "toughness", "imageUris",
        }
        assert Card.from_dict(data) == make_card(3)
