"""
Whot Bot - The computer opponent.

A greedy, hand-only heuristic:
- Sheds special cards first, then high cards
- Keeps Whot cards for when nothing else fits
- Names the shape it holds most of after playing a Whot

The bot does NOT:
- Count cards or track the opponent's hand
- Look ahead more than the current move
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from .policy import BotPolicy, BotDecision
from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Card, Suit, PICK_THREE, PICK_TWO_PENALTY, PICK_THREE_PENALTY
from ..engine_core.rules import playable_cards

if TYPE_CHECKING:
    from ..engine_core.state import MatchState

HIGH_RANK = 10


def most_common_shape(cards: list[Card]) -> Suit:
    """
    The shape with the most cards among the non-Whot cards given.

    Ties go to the shape listed first in Suit.shapes(); with no
    shape cards at all the first shape is returned.
    """
    counts = {shape: 0 for shape in Suit.shapes()}
    for card in cards:
        if not card.is_wild:
            counts[card.suit] += 1

    best = Suit.shapes()[0]
    best_count = 0
    for shape in Suit.shapes():
        if counts[shape] > best_count:
            best, best_count = shape, counts[shape]
    return best


@dataclass
class WhotBot(BotPolicy):
    """
    Computer opponent policy.

    Usage:
        bot = WhotBot(rng=random.Random(7))
        decision = bot.choose_move(player.hand, state)
        # decision.action is a play or a draw; decision.chosen_shape
        # is set when the play is a Whot
    """
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random()

    def select_action(
        self,
        state: MatchState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """Pick the next action for the current player."""
        if not legal_actions:
            raise ValueError("No legal actions available")

        player = state.current_player

        if state.awaiting_shape:
            shape = most_common_shape(player.hand)
            return BotDecision(
                action=Action.choose_shape(shape.value, player.player_id),
                chosen_shape=shape,
                explanation=f"Most cards in hand are {shape.value}",
                evaluated_actions=len(legal_actions),
            )

        decision = self.choose_move(player.hand, state)
        if decision.is_draw and not _contains(legal_actions, ActionType.DRAW_CARD):
            # Nothing left to draw: stop a suspension chain, else play on
            fallback = (
                _first(legal_actions, ActionType.END_TURN)
                or legal_actions[0]
            )
            return BotDecision(
                action=fallback,
                explanation="Market is empty",
                evaluated_actions=len(legal_actions),
            )
        decision.evaluated_actions = len(legal_actions)
        return decision

    def choose_move(self, hand: list[Card], state: MatchState) -> BotDecision:
        """
        Choose between playing a card and drawing.

        Priority:
        1. No legal card: draw
        2. Hold On pending: a special card if possible, else the first legal card
        3. Pick 2 pending: draw
        4. Pick 3 pending: defend with a 5, else draw
        5. Otherwise: a special card, then a card ranked 10 or more,
           then any shape card at random, and a Whot only as a last resort
        """
        player_id = state.current_player.player_id
        legal = playable_cards(hand, state)

        if not legal:
            return self._draw(player_id, "No playable card")

        if state.awaiting_hold_on:
            specials = [c for c in legal if c.is_special and not c.is_wild]
            card = specials[0] if specials else legal[0]
            return self._play(card, hand, player_id, "Hold on: shedding a card")

        if state.pending_penalty == PICK_TWO_PENALTY:
            return self._draw(player_id, "Pick 2 cannot be defended")

        if state.pending_penalty == PICK_THREE_PENALTY:
            fives = [c for c in legal if c.rank == PICK_THREE and not c.is_wild]
            if fives:
                return self._play(fives[0], hand, player_id, "Defending Pick 3")
            return self._draw(player_id, "No Pick 3 to defend with")

        shape_cards = [c for c in legal if not c.is_wild]
        specials = [c for c in shape_cards if c.is_special]
        if specials:
            return self._play(specials[0], hand, player_id, "Playing special card")

        high = [c for c in shape_cards if c.rank >= HIGH_RANK]
        if high:
            return self._play(high[0], hand, player_id, "Shedding high card")

        if shape_cards:
            card = self.rng.choice(shape_cards)
            return self._play(card, hand, player_id, "Playing matching card")

        return self._play(legal[0], hand, player_id, "Only a Whot fits")

    def _play(self, card: Card, hand: list[Card], player_id: str, why: str) -> BotDecision:
        chosen_shape = None
        if card.is_wild:
            rest = [c for c in hand if c.card_id != card.card_id]
            chosen_shape = most_common_shape(rest)
        return BotDecision(
            action=Action.play_card(player_id, card.card_id),
            chosen_shape=chosen_shape,
            explanation=why,
            evaluation_details={"card": card.label},
        )

    def _draw(self, player_id: str, why: str) -> BotDecision:
        return BotDecision(action=Action.draw_card(player_id), explanation=why)


def _contains(actions: list[Action], action_type: ActionType) -> bool:
    return _first(actions, action_type) is not None


def _first(actions: list[Action], action_type: ActionType) -> Action | None:
    for a in actions:
        if a.action_type == action_type:
            return a
    return None
