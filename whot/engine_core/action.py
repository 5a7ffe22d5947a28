"""
Action System - Commands, payloads, and results.

Actions represent the commands a caller can issue:
1. Match lifecycle (start, reset)
2. Turn commands (play, choose shape, draw, end turn)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Lifecycle
    START_GAME = "start_game"
    RESET_GAME = "reset_game"

    # Turn commands
    PLAY_CARD = "play_card"
    CHOOSE_SHAPE = "choose_shape"
    DRAW_CARD = "draw_card"
    END_TURN = "end_turn"


class ErrorCode(str, Enum):
    """Rejection codes. Every rejection leaves the state untouched."""
    ILLEGAL_PLAY = "ILLEGAL_PLAY"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    DECK_EXHAUSTED = "DECK_EXHAUSTED"
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    SHAPE_CHOICE_PENDING = "SHAPE_CHOICE_PENDING"
    NO_SHAPE_PENDING = "NO_SHAPE_PENDING"
    INVALID_SHAPE = "INVALID_SHAPE"
    TURN_NOT_COMPLETE = "TURN_NOT_COMPLETE"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"


class CardConservationError(AssertionError):
    """Cards were created or lost. Only a bug in the engine can cause this."""


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None
    shape: str | None = None

    # Generic params
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete command to be applied to the match state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    timestamp: float | None = None
    action_id: str | None = None

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def reset_game(cls) -> Action:
        return cls(action_type=ActionType.RESET_GAME)

    @classmethod
    def play_card(cls, player_id: str, card_id: str) -> Action:
        """Factory for playing a card from hand."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def choose_shape(cls, shape: str, player_id: str | None = None) -> Action:
        """Factory for naming the shape after a Whot card."""
        return cls(
            action_type=ActionType.CHOOSE_SHAPE,
            payload=ActionPayload(player_id=player_id, shape=shape),
        )

    @classmethod
    def draw_card(cls, player_id: str) -> Action:
        """Factory for drawing (one card, or the pending penalty)."""
        return cls(
            action_type=ActionType.DRAW_CARD,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def end_turn(cls, player_id: str | None = None) -> Action:
        return cls(
            action_type=ActionType.END_TURN,
            payload=ActionPayload(player_id=player_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and error code (if rejected)
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # MatchState
    error: str | None = None
    error_code: ErrorCode | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Cards that moved into the acting player's hand
    drawn_cards: list[Any] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        drawn: list[Any] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            drawn_cards=drawn or [],
        )
