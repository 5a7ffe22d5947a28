"""
Play Legality - Decides whether a card may be played right now.

check_play() is a pure function of the card and the parts of the
match state that constrain a play: the top card, the pending
penalty, the demanded shape and whether a Hold On is pending.

Rules are evaluated in order, first match wins:
1. Hold On pending: anything goes
2. Pick Two pending: nothing can be played, the player must draw
3. Pick Three pending: only another 5 defends
4. Whot: always playable when no penalty is pending
5. Shape demanded by a Whot: must be that shape
6. Otherwise: match the top card's shape or number
"""

from __future__ import annotations
from dataclasses import dataclass

from .cards import Card, PICK_THREE, PICK_TWO_PENALTY, PICK_THREE_PENALTY
from .state import MatchState


@dataclass(frozen=True)
class PlayCheck:
    """Outcome of a legality check. reason is set only when illegal."""
    legal: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.legal


ALLOWED = PlayCheck(legal=True)


def check_play(card: Card, state: MatchState) -> PlayCheck:
    """Check whether card is a legal play in state."""
    if state.awaiting_hold_on:
        return ALLOWED

    if state.pending_penalty == PICK_TWO_PENALTY:
        return PlayCheck(
            legal=False,
            reason="Pick 2 is active and cannot be defended: draw 2 cards",
        )

    if state.pending_penalty == PICK_THREE_PENALTY:
        if card.rank == PICK_THREE and not card.is_wild:
            return ALLOWED
        return PlayCheck(
            legal=False,
            reason="Pick 3 is active: play another Pick 3 or draw 3 cards",
        )

    if card.is_wild:
        return ALLOWED

    if state.shape_demand is not None:
        if card.suit is state.shape_demand:
            return ALLOWED
        shape = state.shape_demand.value
        return PlayCheck(
            legal=False,
            reason=f"Whot demands {shape.upper()}: play a {shape} card or a Whot",
        )

    top = state.top_card
    # Nothing to match yet, or an opening Whot with no shape named
    if top is None or top.is_wild:
        return ALLOWED

    if card.suit is top.suit or card.rank == top.rank:
        return ALLOWED
    return PlayCheck(
        legal=False,
        reason=(
            f"Card must match either the shape ({top.suit.value.upper()}) "
            f"or the number ({top.rank})"
        ),
    )


def is_legal_play(card: Card, state: MatchState) -> bool:
    return check_play(card, state).legal


def playable_cards(hand: list[Card], state: MatchState) -> list[Card]:
    """The cards in hand that could legally be played now."""
    return [card for card in hand if check_play(card, state).legal]
