"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client and the engine.

Error Codes:
- ILLEGAL_PLAY: Card does not follow the rules right now
- NOT_YOUR_TURN: Command sent for a player who is not up
- CARD_NOT_IN_HAND: Card id is not in the player's hand (stale client)
- DECK_EXHAUSTED: Nothing left to draw, even after a reshuffle
- GAME_NOT_ACTIVE: No game in progress
- SESSION_NOT_FOUND: Session does not exist or has ended
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
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
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class Shape(str, Enum):
    """Shapes a Whot card can demand."""
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    STAR = "star"
    CROSS = "cross"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    suit: str = Field(description="circle, triangle, square, star, cross or whot")
    rank: int
    is_special: bool = False
    label: str

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Player information for display. hand is null for hidden hands."""
    player_id: str
    name: str
    is_computer: bool
    hand_count: int = 0
    is_current_turn: bool = False
    hand: Optional[list[CardInfo]] = None

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to open a table against the computer."""
    player_name: str = Field("You", min_length=1, max_length=40)
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")
    hand_size: int = Field(5, ge=1, le=10)
    start_game: bool = Field(True, description="Deal immediately")


class PlayCardRequest(BaseModel):
    """Play a card from the human's hand."""
    card_id: str = Field(..., description="e.g. circle-7 or whot-2")


class ChooseShapeRequest(BaseModel):
    """Name the shape after playing a Whot."""
    shape: Shape


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Match snapshot from the human player's point of view."""
    session_id: str
    session_status: SessionStatus
    status: str = Field(description="waiting, playing or finished")
    turn_phase: str = Field(description="normal, hold_on, suspension or choosing_shape")
    current_player_id: Optional[str] = None
    is_your_turn: bool = False
    players: list[PlayerInfo] = Field(default_factory=list)
    draw_pile_count: int = 0
    discard_pile_count: int = 0
    top_card: Optional[CardInfo] = None
    pending_penalty: int = 0
    shape_demand: Optional[str] = None
    awaiting_hold_on: bool = False
    awaiting_suspension: bool = False
    awaiting_shape: bool = False
    winner_id: Optional[str] = None
    turn_number: int = 0
    playable_card_ids: list[str] = Field(
        default_factory=list, description="Cards in your hand you may play now"
    )

    # What the last command did
    state_changes: list[str] = Field(default_factory=list)
    bot_moves: list[str] = Field(default_factory=list)
    drawn_cards: list[CardInfo] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
