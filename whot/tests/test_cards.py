"""
Tests for the card catalog and deck handling.

Tests:
- Deck composition
- Shuffle, deal and first discard
- Drawing and reshuffling
"""

import random
from collections import Counter

import pytest

from ..engine_core.cards import (
    Card, Suit, DECK_SIZE, SHAPE_RANKS, CATALOG, create_catalog, get_card,
)
from ..engine_core.deck import shuffle, build_deck, deal, reshuffle_if_empty, draw_cards, can_draw
from ..engine_core.state import PlayerState


class TestCatalog:
    """Tests for deck composition."""

    def test_deck_has_65_cards(self):
        cards = create_catalog()
        assert len(cards) == 65
        assert DECK_SIZE == 65

    def test_card_ids_are_unique(self):
        ids = [c.card_id for c in create_catalog()]
        assert len(set(ids)) == len(ids)
        assert len(CATALOG) == 65

    def test_twelve_ranks_per_shape_without_6_or_9(self):
        by_suit = Counter(c.suit for c in create_catalog())
        for shape in Suit.shapes():
            assert by_suit[shape] == 12
        assert 6 not in SHAPE_RANKS
        assert 9 not in SHAPE_RANKS

    def test_five_whot_cards_of_rank_20(self):
        whots = [c for c in create_catalog() if c.is_wild]
        assert len(whots) == 5
        assert all(c.rank == 20 and c.suit is Suit.WHOT for c in whots)

    def test_special_cards(self):
        assert get_card("circle-1").is_special
        assert get_card("star-2").is_special
        assert get_card("cross-5").is_special
        assert get_card("square-8").is_special
        assert get_card("triangle-14").is_special
        assert get_card("whot-3").is_special
        assert not get_card("circle-7").is_special
        assert not get_card("star-13").is_special

    def test_card_ids_follow_suit_rank_format(self):
        assert get_card("circle-7") == Card(card_id="circle-7", suit=Suit.CIRCLE, rank=7)
        assert get_card("circle-9") is None

    def test_cards_are_immutable(self):
        card = get_card("circle-7")
        with pytest.raises(Exception):
            card.rank = 8

    def test_parse_shape(self):
        assert Suit.parse_shape("Star") is Suit.STAR
        with pytest.raises(ValueError):
            Suit.parse_shape("whot")
        with pytest.raises(ValueError):
            Suit.parse_shape("hexagon")


class TestShuffle:
    """Tests for Fisher-Yates shuffling."""

    def test_shuffle_is_a_permutation(self):
        cards = create_catalog()
        shuffled = shuffle(cards, random.Random(1))
        assert sorted(c.card_id for c in shuffled) == sorted(c.card_id for c in cards)

    def test_shuffle_does_not_modify_input(self):
        cards = create_catalog()
        before = list(cards)
        shuffle(cards, random.Random(1))
        assert cards == before

    def test_same_seed_same_order(self):
        assert build_deck(random.Random(7)) == build_deck(random.Random(7))

    def test_different_seeds_different_order(self):
        assert build_deck(random.Random(7)) != build_deck(random.Random(8))

    def test_all_permutations_roughly_equally_likely(self):
        rng = random.Random(123)
        cards = [Card.shape(Suit.CIRCLE, r) for r in (3, 4, 7)]
        counts = Counter(
            tuple(c.rank for c in shuffle(cards, rng)) for _ in range(6000)
        )
        assert len(counts) == 6
        for count in counts.values():
            assert 850 < count < 1150


class TestDeal:
    """Tests for dealing."""

    def test_deal_five_each_then_flip(self):
        """65 cards, 5 each to 2 players, 1 flipped: 54 left to draw."""
        players = [PlayerState("player", "You"), PlayerState("computer", "Computer", True)]
        remaining = deal(build_deck(random.Random(3)), players, 5)
        first_discard = remaining.pop()

        assert all(p.hand_count == 5 for p in players)
        assert first_discard is not None
        assert len(remaining) == 54

    def test_deal_takes_from_the_end(self):
        deck = create_catalog()
        players = [PlayerState("a", "A"), PlayerState("b", "B")]
        remaining = deal(deck, players, 2)

        assert players[0].hand == [deck[-1], deck[-2]]
        assert players[1].hand == [deck[-3], deck[-4]]
        assert remaining == deck[:-4]

    def test_deal_stops_when_deck_runs_out(self):
        deck = create_catalog()[:3]
        players = [PlayerState("a", "A"), PlayerState("b", "B")]
        remaining = deal(deck, players, 2)

        assert players[0].hand_count == 2
        assert players[1].hand_count == 1
        assert remaining == []


class TestReshuffle:
    """Tests for recycling the discard pile."""

    def test_noop_when_draw_pile_has_cards(self):
        draw = [get_card("circle-3")]
        discard = [get_card("star-4"), get_card("star-7")]
        assert reshuffle_if_empty(draw, discard, random.Random(1)) == (draw, discard)

    def test_keeps_top_card(self):
        discard = [get_card(cid) for cid in ("star-4", "star-7", "cross-10", "circle-3")]
        draw, new_discard = reshuffle_if_empty([], discard, random.Random(1))

        assert new_discard == [get_card("circle-3")]
        assert sorted(c.card_id for c in draw) == ["cross-10", "star-4", "star-7"]

    def test_only_top_card_leaves_draw_pile_empty(self):
        discard = [get_card("circle-3")]
        draw, new_discard = reshuffle_if_empty([], discard, random.Random(1))
        assert draw == []
        assert new_discard == discard
        assert not can_draw(draw, new_discard)

    def test_draw_cards_reshuffles_mid_draw(self):
        draw = [get_card("cross-3")]
        discard = [get_card("star-4"), get_card("star-7"), get_card("circle-3")]
        drawn, draw, discard = draw_cards(draw, discard, 3, random.Random(1))

        assert drawn[0] == get_card("cross-3")
        assert len(drawn) == 3
        assert draw == []
        assert discard == [get_card("circle-3")]

    def test_draw_cards_returns_fewer_when_exhausted(self):
        drawn, draw, discard = draw_cards(
            [get_card("cross-3")], [get_card("circle-3")], 3, random.Random(1)
        )
        assert drawn == [get_card("cross-3")]
        assert draw == []
        assert discard == [get_card("circle-3")]
