"""
Session Module - Manages ephemeral game sessions.

A session is one table: a human, the computer, and the current match.
- Created when the user opens a table
- Runs any number of games (start, reset)
- Mirrors the human's moves to an optional ledger
- Destroyed when the user leaves

Nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState, HUMAN_ID, COMPUTER_ID
from .game_loop import GameLoop, TurnResult
from .ledger import (
    LedgerEvent,
    LedgerSink,
    NullLedgerSink,
    RecordingLedgerSink,
    GraphQLLedgerSink,
    create_ledger_sink,
)

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "HUMAN_ID",
    "COMPUTER_ID",
    "GameLoop",
    "TurnResult",
    "LedgerEvent",
    "LedgerSink",
    "NullLedgerSink",
    "RecordingLedgerSink",
    "GraphQLLedgerSink",
    "create_ledger_sink",
]
