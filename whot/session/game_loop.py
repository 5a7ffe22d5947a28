"""
Game Loop - The command surface a presentation layer drives.

The loop:
1. Caller issues a human command (play, choose shape, draw, end turn)
2. Reducer validates and applies it
3. Committed human moves are mirrored to the ledger sink
4. If the turn passed to the computer, the computer moves until
   the human owns the turn again or the game ends
5. Caller gets a TurnResult with a snapshot to render

Step 4 runs synchronously. A caller that wants to show each computer
move separately turns auto_bot_turns off and calls bot_step() itself,
pausing between calls as it likes; pacing never affects the rules.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging

from ..engine_core.action import Action, ActionResult, ErrorCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.cards import Card
from ..engine_core.view import MatchView, snapshot
from .ledger import LedgerEvent

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """
    Result of a command, including any computer moves it triggered.

    snapshot is taken from the human player's point of view.
    """
    success: bool
    snapshot: MatchView | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    # What the command itself changed
    state_changes: list[str] = field(default_factory=list)
    drawn_cards: list[Card] = field(default_factory=list)

    # What the computer did afterwards
    bot_moves: list[str] = field(default_factory=list)

    winner_id: str | None = None


class GameLoop:
    """
    Drives one session.

    Usage:
        loop = GameLoop(session)
        loop.start_new_game()

        result = loop.play_card("circle-7", "player")
        if not result.success:
            show_error(result.error)
        render(result.snapshot)
    """

    def __init__(self, session: Session, auto_bot_turns: bool = True):
        self.session = session
        self.auto_bot_turns = auto_bot_turns

    # =========================================================================
    # Commands
    # =========================================================================

    def start_new_game(self) -> TurnResult:
        self.session.pending_wild_index = None
        return self._command(Action.start_game())

    def reset_game(self) -> TurnResult:
        self.session.pending_wild_index = None
        return self._command(Action.reset_game())

    def play_card(self, card_id: str, player_id: str) -> TurnResult:
        """Play a card. A Whot leaves the turn open until a shape is chosen."""
        player = self.session.match.get_player(player_id)
        card_index = player.index_of(card_id) if player else None

        def mirror(match):
            if match.awaiting_shape:
                self.session.pending_wild_index = card_index
            else:
                self._mirror(LedgerEvent("play", card_index, player_id=player_id))

        return self._command(Action.play_card(player_id, card_id), mirror)

    def choose_wild_shape(self, shape: str, player_id: str | None = None) -> TurnResult:
        acting_id = self.session.match.current_player.player_id

        def mirror(match):
            card_index = self.session.pending_wild_index
            self.session.pending_wild_index = None
            if card_index is not None:
                self._mirror(LedgerEvent("play", card_index, shape, player_id=acting_id))

        return self._command(Action.choose_shape(shape, player_id), mirror)

    def draw_card(self, player_id: str) -> TurnResult:
        def mirror(match):
            self._mirror(LedgerEvent("draw", player_id=player_id))

        return self._command(Action.draw_card(player_id), mirror)

    def end_turn(self, player_id: str | None = None) -> TurnResult:
        return self._command(Action.end_turn(player_id))

    # =========================================================================
    # Computer turns
    # =========================================================================

    def bot_step(self) -> TurnResult:
        """
        Make one computer move: a play (with its shape, for a Whot),
        a draw, or ending a suspension chain.
        """
        match = self.session.match
        player = match.current_player
        if not match.is_playing or not player.is_computer:
            return TurnResult(
                success=False,
                snapshot=self.snapshot(),
                error="Not the computer's turn",
                error_code=ErrorCode.NOT_YOUR_TURN,
            )

        bot = self.session.bots[player.player_id]
        legal = legal_actions(match)
        if not legal:
            return TurnResult(
                success=False,
                snapshot=self.snapshot(),
                error=f"{player.name} cannot play and there is nothing to draw",
                error_code=ErrorCode.DECK_EXHAUSTED,
            )

        decision = bot.select_action(match, legal)
        result = self._apply(decision.action)
        changes = list(result.state_changes)

        if result.success and decision.chosen_shape and self.session.match.awaiting_shape:
            shape_result = self._apply(
                Action.choose_shape(decision.chosen_shape.value, player.player_id)
            )
            if shape_result.success:
                changes.extend(shape_result.state_changes)
            else:
                result = shape_result

        if not result.success:
            logger.warning(
                "%s move rejected (%s): %s", player.name, result.error_code, result.error
            )
        return TurnResult(
            success=result.success,
            snapshot=self.snapshot(),
            error=result.error,
            error_code=result.error_code,
            state_changes=changes,
            winner_id=self.session.match.winner_id,
        )

    def run_bot_turns(self) -> list[str]:
        """Let computer players move until the human is up or the game ends."""
        moves: list[str] = []
        for _ in range(self.session.config.max_bot_steps):
            match = self.session.match
            if not match.is_playing or not match.current_player.is_computer:
                break
            step = self.bot_step()
            if not step.success:
                break
            moves.extend(step.state_changes)
        return moves

    # =========================================================================
    # Helpers
    # =========================================================================

    def snapshot(self) -> MatchView:
        return snapshot(self.session.match, viewer_id=self.session.human_player_id)

    def _apply(self, action: Action) -> ActionResult:
        result = self.session.reducer.apply(self.session.match, action)
        if result.success:
            self.session.match = result.new_state
            self.session.sync_state()
        return result

    def _command(self, action: Action, on_commit=None) -> TurnResult:
        """Apply a caller command, mirror it, then hand over to the computer."""
        acting = self.session.match.current_player if self.session.match.players else None
        result = self._apply(action)
        if not result.success:
            return TurnResult(
                success=False,
                snapshot=self.snapshot(),
                error=result.error,
                error_code=result.error_code,
            )

        if on_commit and acting is not None and not acting.is_computer:
            on_commit(self.session.match)

        bot_moves = self.run_bot_turns() if self.auto_bot_turns else []
        return TurnResult(
            success=True,
            snapshot=self.snapshot(),
            state_changes=result.state_changes,
            drawn_cards=result.drawn_cards,
            bot_moves=bot_moves,
            winner_id=self.session.match.winner_id,
        )

    def _mirror(self, event: LedgerEvent) -> None:
        """Hand a committed move to the ledger sink. Never raises."""
        try:
            self.session.ledger.notify(event)
        except Exception as e:
            logger.warning("Ledger sink failed for %s: %s", event.action, e)
