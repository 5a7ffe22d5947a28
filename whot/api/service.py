"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to game loop commands
2. Manages sessions
3. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    CreateSessionRequest,
    GameStateResponse,
    ErrorResponse,
    CardInfo,
    PlayerInfo,
    ErrorCode,
    SessionStatus,
)
from ..config import create_rules
from ..engine_core.rules import playable_cards
from ..engine_core.view import CardView
from ..session import SessionManager, Session, GameLoop, TurnResult, LedgerSink, create_ledger_sink


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        response = service.create_session(CreateSessionRequest(seed=7))
        response = service.play_card(response.session_id, "circle-7")
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    # Shared by every session; a GraphQL sink when WHOT_LEDGER_URL is set
    ledger: LedgerSink = field(default_factory=create_ledger_sink)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Open a table against the computer, dealing straight away by default."""
        config = create_rules(human_name=request.player_name, hand_size=request.hand_size)
        session = self.session_manager.create_session(
            config=config,
            seed=request.seed,
            ledger=self.ledger,
        )
        loop = GameLoop(session)
        self._game_loops[session.session_id] = loop

        if request.start_game:
            return self._to_response(session, loop.start_new_game())
        return self._to_response(session)

    def get_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._to_response(session)

    def start_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._run(session_id, lambda loop: loop.start_new_game())

    def reset_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._run(session_id, lambda loop: loop.reset_game())

    def play_card(self, session_id: str, card_id: str) -> GameStateResponse | ErrorResponse:
        return self._run(
            session_id,
            lambda loop: loop.play_card(card_id, loop.session.human_player_id),
        )

    def choose_shape(self, session_id: str, shape: str) -> GameStateResponse | ErrorResponse:
        return self._run(
            session_id,
            lambda loop: loop.choose_wild_shape(shape, loop.session.human_player_id),
        )

    def draw_card(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._run(
            session_id,
            lambda loop: loop.draw_card(loop.session.human_player_id),
        )

    def end_turn(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._run(
            session_id,
            lambda loop: loop.end_turn(loop.session.human_player_id),
        )

    def end_session(self, session_id: str) -> bool:
        """End a game session."""
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _run(self, session_id: str, command) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        loop = self._game_loops.get(session_id)
        if not session or not loop:
            return self._not_found(session_id)

        result: TurnResult = command(loop)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Command rejected",
                error_code=ErrorCode(result.error_code.value)
                if result.error_code else ErrorCode.INTERNAL_ERROR,
                details={"session_id": session_id},
            )
        return self._to_response(session, result)

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _to_response(
        self,
        session: Session,
        result: TurnResult | None = None,
    ) -> GameStateResponse:
        """Convert a session (and the last command's result) to a response."""
        loop = self._game_loops[session.session_id]
        view = loop.snapshot()
        match = session.match

        playable: list[str] = []
        if session.is_human_turn() and not match.awaiting_shape:
            human = match.get_player(session.human_player_id)
            playable = [c.card_id for c in playable_cards(human.hand, match)]

        return GameStateResponse(
            session_id=session.session_id,
            session_status=SessionStatus(session.state.value),
            status=view.status,
            turn_phase=view.turn_phase,
            current_player_id=view.current_player_id,
            is_your_turn=session.is_human_turn(),
            players=[PlayerInfo.model_validate(p) for p in view.players],
            draw_pile_count=view.draw_pile_count,
            discard_pile_count=view.discard_pile_count,
            top_card=CardInfo.model_validate(view.top_card) if view.top_card else None,
            pending_penalty=view.pending_penalty,
            shape_demand=view.shape_demand,
            awaiting_hold_on=view.awaiting_hold_on,
            awaiting_suspension=view.awaiting_suspension,
            awaiting_shape=view.awaiting_shape,
            winner_id=view.winner_id,
            turn_number=view.turn_number,
            playable_card_ids=playable,
            state_changes=result.state_changes if result else [],
            bot_moves=result.bot_moves if result else [],
            drawn_cards=[
                CardInfo.model_validate(CardView.of(c))
                for c in (result.drawn_cards if result else [])
            ],
        )
