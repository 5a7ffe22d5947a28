"""
Card Catalog - The fixed Whot deck composition.

The deck has five shapes, each with ranks 1-14 minus 6 and 9,
plus five Whot (wild) cards of rank 20. That is 65 cards.

Special ranks:
    1   Hold On         same player plays again, anything goes
    2   Pick Two        next player draws 2, cannot be defended
    5   Pick Three      next player draws 3 unless they play another 5
    8   Suspension      same player plays again under normal rules
    14  General Market  every other player draws 1
    20  Whot            wild, the player names a shape
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    """Card suits. WHOT is the wild sentinel, the rest are shapes."""
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    STAR = "star"
    CROSS = "cross"
    WHOT = "whot"

    @classmethod
    def shapes(cls) -> list[Suit]:
        """The five demandable shapes, in fixed enumeration order."""
        return [cls.CIRCLE, cls.TRIANGLE, cls.SQUARE, cls.STAR, cls.CROSS]

    @classmethod
    def parse_shape(cls, value: str | Suit) -> Suit:
        """Parse a shape name. Raises ValueError for unknown names and for WHOT."""
        suit = value if isinstance(value, Suit) else cls(str(value).strip().lower())
        if suit is cls.WHOT:
            raise ValueError("A Whot card cannot demand another Whot")
        return suit


HOLD_ON = 1
PICK_TWO = 2
PICK_THREE = 5
SUSPENSION = 8
GENERAL_MARKET = 14
WHOT_RANK = 20

SHAPE_RANKS = (1, 2, 3, 4, 5, 7, 8, 10, 11, 12, 13, 14)
SPECIAL_RANKS = frozenset({HOLD_ON, PICK_TWO, PICK_THREE, SUSPENSION, GENERAL_MARKET})
WHOT_CARD_COUNT = 5
DECK_SIZE = len(Suit.shapes()) * len(SHAPE_RANKS) + WHOT_CARD_COUNT

PICK_TWO_PENALTY = 2
PICK_THREE_PENALTY = 3

RANK_NAMES = {
    HOLD_ON: "Hold On",
    PICK_TWO: "Pick Two",
    PICK_THREE: "Pick Three",
    SUSPENSION: "Suspension",
    GENERAL_MARKET: "General Market",
    WHOT_RANK: "Whot",
}


@dataclass(frozen=True)
class Card:
    """
    A physical card. Never changes after creation; only its
    owning container (hand, draw pile, discard pile) changes.
    """
    card_id: str
    suit: Suit
    rank: int

    @property
    def is_wild(self) -> bool:
        return self.suit is Suit.WHOT

    @property
    def is_special(self) -> bool:
        return self.is_wild or self.rank in SPECIAL_RANKS

    @property
    def label(self) -> str:
        """Display name, e.g. 'star 14 (General Market)' or 'Whot'."""
        if self.is_wild:
            return "Whot"
        name = RANK_NAMES.get(self.rank)
        base = f"{self.suit.value} {self.rank}"
        return f"{base} ({name})" if name else base

    @classmethod
    def shape(cls, suit: Suit, rank: int) -> Card:
        """Factory for a shape card with the catalog id format."""
        return cls(card_id=f"{suit.value}-{rank}", suit=suit, rank=rank)

    @classmethod
    def whot(cls, number: int) -> Card:
        """Factory for the n-th Whot card."""
        return cls(card_id=f"whot-{number}", suit=Suit.WHOT, rank=WHOT_RANK)


def create_catalog() -> list[Card]:
    """All 65 cards in catalog order (unshuffled)."""
    cards = [Card.shape(suit, rank) for suit in Suit.shapes() for rank in SHAPE_RANKS]
    cards.extend(Card.whot(i) for i in range(1, WHOT_CARD_COUNT + 1))
    return cards


CATALOG: dict[str, Card] = {card.card_id: card for card in create_catalog()}


def get_card(card_id: str) -> Card | None:
    """Look up a catalog card by id."""
    return CATALOG.get(card_id)
