"""
API Module - HTTP interface for a Whot table.

A client:
1. Opens a session (a table against the computer)
2. Sends play / shape / draw / end-turn commands
3. Receives a snapshot after the computer has answered

All state is session-scoped. No accounts, no persistence.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    PlayCardRequest,
    ChooseShapeRequest,
    # Responses
    GameStateResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "PlayCardRequest",
    "ChooseShapeRequest",
    # Responses
    "GameStateResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
