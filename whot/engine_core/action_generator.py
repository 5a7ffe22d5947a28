"""
Action Generator - Generates all legal actions from a match state.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to highlight playable cards
3. Validation (is this action in legal_actions?)

Every generated action is one the reducer would accept.
"""

from __future__ import annotations
from dataclasses import dataclass

from .cards import Suit
from .deck import can_draw
from .rules import playable_cards
from .state import MatchState, TurnPhase
from .action import Action, ActionType


@dataclass
class ActionGenerator:
    """Generates legal actions for the current turn owner."""

    def generate(self, state: MatchState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if not state.is_playing:
            return []

        player = state.current_player

        # A Whot was just played: only naming a shape is allowed
        if state.turn_phase is TurnPhase.CHOOSING_SHAPE:
            return [
                Action.choose_shape(shape.value, player.player_id)
                for shape in Suit.shapes()
            ]

        actions = [
            Action.play_card(player.player_id, card.card_id)
            for card in playable_cards(player.hand, state)
        ]

        if can_draw(state.draw_pile, state.discard_pile):
            actions.append(Action.draw_card(player.player_id))

        if state.turn_phase is TurnPhase.SUSPENSION:
            actions.append(Action.end_turn(player.player_id))

        return actions


def legal_actions(state: MatchState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state)


def is_legal(state: MatchState, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(state):
        if (
            a.action_type == action.action_type
            and a.payload.player_id == action.payload.player_id
            and a.payload.card_id == action.payload.card_id
            and (
                a.action_type != ActionType.CHOOSE_SHAPE
                or a.payload.shape == action.payload.shape
            )
        ):
            return True
    return False
