"""
Engine Core - Deterministic match state management and effect resolution.

The engine is the runtime that:
1. Builds and deals the deck
2. Manages MatchState
3. Decides which plays are legal
4. Applies commands via the reducer
5. Resolves special card effects
"""

from .cards import Card, Suit, DECK_SIZE, CATALOG, get_card
from .deck import shuffle, build_deck, deal, reshuffle_if_empty, draw_cards
from .state import MatchState, PlayerState, GameStatus, TurnPhase
from .action import (
    Action, ActionType, ActionPayload, ActionResult, ErrorCode, CardConservationError,
)
from .rules import PlayCheck, check_play, is_legal_play, playable_cards
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions, is_legal
from .view import MatchView, PlayerView, CardView, snapshot

__all__ = [
    "Card",
    "Suit",
    "DECK_SIZE",
    "CATALOG",
    "get_card",
    "shuffle",
    "build_deck",
    "deal",
    "reshuffle_if_empty",
    "draw_cards",
    "MatchState",
    "PlayerState",
    "GameStatus",
    "TurnPhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "CardConservationError",
    "PlayCheck",
    "check_play",
    "is_legal_play",
    "playable_cards",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "MatchView",
    "PlayerView",
    "CardView",
    "snapshot",
]
