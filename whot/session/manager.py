"""
Session Manager - Creates and manages game sessions.

A session is one human playing the computer:
- Created when the user opens a table
- Holds the match state, the reducer and the computer's policy
- Survives new games and resets; destroyed when the user leaves

Sessions are EPHEMERAL: in-memory only, nothing is persisted.
The only thing that leaves the process is the optional ledger mirror.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import random
import time
import uuid

from ..config import RuleConfig
from ..engine_core.reducer import Reducer
from ..engine_core.state import MatchState, GameStatus
from ..bots import BotPolicy, WhotBot
from .ledger import LedgerSink, NullLedgerSink

logger = logging.getLogger(__name__)

HUMAN_ID = "player"
COMPUTER_ID = "computer"


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Table open, no game started yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game finished, a new one may be started
    ABANDONED = "abandoned"  # User left


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The rule config and a seeded reducer
    - Current match state
    - Bots for computer players
    - Ledger sink for mirroring human moves
    """
    session_id: str
    config: RuleConfig
    reducer: Reducer
    match: MatchState
    created_at: float

    state: SessionState = SessionState.CREATED
    bots: dict[str, BotPolicy] = field(default_factory=dict)
    human_player_id: str = HUMAN_ID
    ledger: LedgerSink = field(default_factory=NullLedgerSink)

    # Hand position of a human Whot play still waiting for its shape
    pending_wild_index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if session is still open."""
        return self.state in {
            SessionState.CREATED,
            SessionState.ACTIVE,
            SessionState.GAME_OVER,
        }

    def is_human_turn(self) -> bool:
        """Check if it's the human player's turn."""
        if self.match.status is not GameStatus.PLAYING:
            return False
        return self.match.current_player.player_id == self.human_player_id

    def sync_state(self) -> None:
        """Derive the session state from the match status."""
        if self.state is SessionState.ABANDONED:
            return
        self.state = {
            GameStatus.WAITING: SessionState.CREATED,
            GameStatus.PLAYING: SessionState.ACTIVE,
            GameStatus.FINISHED: SessionState.GAME_OVER,
        }[self.match.status]


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        config: RuleConfig | None = None,
        seed: int | None = None,
        ledger: LedgerSink | None = None,
        bot: BotPolicy | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            config: Rule config (defaults apply if not given)
            seed: Seed for shuffles and the computer's random choices
            ledger: Sink mirroring human moves (none by default)
            bot: Policy for the computer player (WhotBot by default)

        Returns:
            New Session in the waiting state; start a game through GameLoop
        """
        config = config or RuleConfig()
        session_id = str(uuid.uuid4())
        rng = random.Random(seed)

        match = MatchState.create(
            match_id=session_id,
            players=[
                (HUMAN_ID, config.human_name, False),
                (COMPUTER_ID, config.computer_name, True),
            ],
        )

        session = Session(
            session_id=session_id,
            config=config,
            reducer=Reducer(config=config, rng=rng),
            match=match,
            created_at=time.time(),
            bots={COMPUTER_ID: bot or WhotBot(rng=random.Random(rng.random()))},
            ledger=ledger or NullLedgerSink(),
            metadata={"seed": seed},
        )

        self._sessions[session_id] = session
        logger.info("Session %s created", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget it.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ABANDONED
        session.pending_wild_index = None
        logger.info("Session %s ended", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions older than max_age whose game is not in progress.

        Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and session.state is not SessionState.ACTIVE
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
