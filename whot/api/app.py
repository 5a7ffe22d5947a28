"""
FastAPI Application - REST API for a Whot table.

Endpoints:
    POST   /api/v1/sessions                    Open a table (deals by default)
    GET    /api/v1/sessions                    List active sessions
    GET    /api/v1/sessions/{id}               Get match snapshot
    DELETE /api/v1/sessions/{id}               End session
    POST   /api/v1/sessions/{id}/start         Start a new game
    POST   /api/v1/sessions/{id}/reset         Reset to waiting
    POST   /api/v1/sessions/{id}/play          Play a card
    POST   /api/v1/sessions/{id}/shape         Name the shape after a Whot
    POST   /api/v1/sessions/{id}/draw          Draw (one card or the penalty)
    POST   /api/v1/sessions/{id}/end-turn      End a suspension chain

Computer Turn Flow:
    Every command that hands the turn to the computer returns only
    after the computer has moved. Its moves are listed in `bot_moves`
    and the snapshot is already back on the human's turn (or finished).

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging

from .. import __version__
from ..config import ALLOWED_ORIGINS, LOG_LEVEL, WHOT_ENV

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "SESSION_NOT_FOUND": 404,
    "NOT_YOUR_TURN": 409,
    "SHAPE_CHOICE_PENDING": 409,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Body
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        PlayCardRequest,
        ChooseShapeRequest,
        GameStateResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Whot Engine API",
        description="""
Whot card game against a computer opponent.

## Turn Flow

1. `POST /sessions` opens a table and deals.
2. Play with `/play`, or `/draw` when you cannot (or will not) play.
3. After a Whot card, `/shape` names the demanded shape.
4. After a Suspension (8) you may play again or `/end-turn`.

The computer moves before each response returns.

## Error Codes

| Code | Description |
|------|-------------|
| `ILLEGAL_PLAY` | Card does not follow the rules right now |
| `NOT_YOUR_TURN` | It is the computer's turn |
| `CARD_NOT_IN_HAND` | Card id not in your hand |
| `DECK_EXHAUSTED` | Nothing left to draw |
| `GAME_NOT_ACTIVE` | No game in progress |
| `SESSION_NOT_FOUND` | Session does not exist |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()
    logger.info("Whot API created (%s, log level %s)", WHOT_ENV, LOG_LEVEL)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(
        response: Union[GameStateResponse, ErrorResponse],
    ) -> Union[GameStateResponse, JSONResponse]:
        """Pass snapshots through, turn errors into JSON with a status code."""
        if isinstance(response, ErrorResponse):
            return JSONResponse(
                status_code=ERROR_STATUS.get(response.error_code.value, 400),
                content=response.model_dump(mode="json"),
            )
        return response

    error_responses = {
        400: {"model": ErrorResponse, "description": "Command rejected"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Not your turn"},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        tags=["Sessions"],
        summary="Open a table against the computer",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = Body(None),
    ) -> GameStateResponse:
        return api_service.create_session(body or CreateSessionRequest())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Sessions"],
        summary="Get the match snapshot",
    )
    async def get_session(session_id: str):
        return respond(api_service.get_state(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/start",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Start a new game",
    )
    async def start_game(session_id: str):
        return respond(api_service.start_game(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Reset the table",
    )
    async def reset_game(session_id: str):
        return respond(api_service.reset_game(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/play",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Play a card",
    )
    async def play_card(session_id: str, body: PlayCardRequest):
        return respond(api_service.play_card(session_id, body.card_id))

    @app.post(
        "/api/v1/sessions/{session_id}/shape",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Choose the shape after a Whot",
    )
    async def choose_shape(session_id: str, body: ChooseShapeRequest):
        return respond(api_service.choose_shape(session_id, body.shape.value))

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Draw a card or pay the penalty",
    )
    async def draw_card(session_id: str):
        return respond(api_service.draw_card(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/end-turn",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="End a suspension chain",
    )
    async def end_turn(session_id: str):
        return respond(api_service.end_turn(session_id))

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="whot-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Whot Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
