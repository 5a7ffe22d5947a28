"""
Deck handling - shuffling, dealing, drawing and reshuffling.

All randomness comes from an injected random.Random so a seed
reproduces the same game.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from .cards import Card, create_catalog

if TYPE_CHECKING:
    from .state import PlayerState


def shuffle(cards: list[Card], rng: random.Random) -> list[Card]:
    """
    Return a uniformly shuffled copy of cards (Fisher-Yates).

    Walks from the last index down to 1, swapping each slot with
    a uniformly chosen index in [0, i].
    """
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def build_deck(rng: random.Random) -> list[Card]:
    """Build the full 65-card deck, shuffled."""
    return shuffle(create_catalog(), rng)


def deal(deck: list[Card], players: list[PlayerState], hand_size: int) -> list[Card]:
    """
    Deal hand_size cards to each player in order, taken from the end of deck.

    Deals fewer if the deck runs out. Returns the remaining cards,
    which become the draw pile. The input list is not modified.
    """
    remaining = list(deck)
    for player in players:
        player.hand = []
        for _ in range(hand_size):
            if not remaining:
                break
            player.hand.append(remaining.pop())
    return remaining


def reshuffle_if_empty(
    draw_pile: list[Card],
    discard_pile: list[Card],
    rng: random.Random,
) -> tuple[list[Card], list[Card]]:
    """
    Recycle the discard pile into a new draw pile when the draw pile is empty.

    The top discard stays where it is. If it is the only discard,
    the draw pile stays empty and the caller must handle that.

    Returns (draw_pile, discard_pile).
    """
    if draw_pile or len(discard_pile) <= 1:
        return draw_pile, discard_pile
    top_card = discard_pile[-1]
    return shuffle(discard_pile[:-1], rng), [top_card]


def draw_cards(
    draw_pile: list[Card],
    discard_pile: list[Card],
    count: int,
    rng: random.Random,
) -> tuple[list[Card], list[Card], list[Card]]:
    """
    Draw up to count cards from the end of the draw pile, reshuffling on empty.

    Returns (drawn, draw_pile, discard_pile). Fewer than count cards
    are drawn only when both piles are exhausted.
    """
    drawn: list[Card] = []
    draw_pile = list(draw_pile)
    discard_pile = list(discard_pile)
    for _ in range(count):
        draw_pile, discard_pile = reshuffle_if_empty(draw_pile, discard_pile, rng)
        if not draw_pile:
            break
        drawn.append(draw_pile.pop())
    return drawn, draw_pile, discard_pile


def can_draw(draw_pile: list[Card], discard_pile: list[Card]) -> bool:
    """Whether at least one card could be drawn (possibly after a reshuffle)."""
    return bool(draw_pile) or len(discard_pile) > 1
