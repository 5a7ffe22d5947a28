"""
Reducer - Applies actions to match state.

The reducer is the single point of state mutation.
All state changes must go through apply().

Design principles:
- (state, action) -> ActionResult holding the next state
- The input state is never modified
- Validates before applying; rejections leave state untouched
- Special card effects are dispatched in one place by rank
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from ..config import RuleConfig
from .cards import (
    Card, Suit, DECK_SIZE,
    HOLD_ON, PICK_TWO, PICK_THREE, SUSPENSION, GENERAL_MARKET,
    PICK_TWO_PENALTY, PICK_THREE_PENALTY,
)
from .deck import build_deck, deal, draw_cards
from .rules import check_play
from .state import MatchState, PlayerState, GameStatus, TurnPhase
from .action import Action, ActionType, ActionResult, ErrorCode, CardConservationError

logger = logging.getLogger(__name__)

LIFECYCLE_ACTIONS = {ActionType.START_GAME, ActionType.RESET_GAME}


@dataclass
class Reducer:
    """
    Reducer applies actions to match state.

    Holds no match data; the config sets the hand size and the
    rng drives shuffles so a seeded reducer replays the same game.
    """
    config: RuleConfig = field(default_factory=RuleConfig)
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: MatchState, action: Action) -> ActionResult:
        """
        Apply an action to the match state.

        Returns ActionResult with new state or error.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            return rejection

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(f"No handler for action type: {action.action_type}")

        result = handler(state, action)
        if result.success and result.new_state is not None:
            result.new_state.action_history.append(action)
            self._check_conservation(result.new_state)
            logger.debug(
                "%s applied %s: %s",
                state.match_id, action.action_type.value, "; ".join(result.state_changes),
            )
        return result

    def _validate_action(self, state: MatchState, action: Action) -> ActionResult | None:
        """
        Validate that an action is allowed in the current state.

        Returns a failure result if not, None if allowed.
        """
        if action.action_type in LIFECYCLE_ACTIONS:
            return None

        if state.status is GameStatus.WAITING:
            return ActionResult.failure("Game has not started", ErrorCode.GAME_NOT_ACTIVE)
        if state.status is GameStatus.FINISHED:
            return ActionResult.failure("Game is over", ErrorCode.GAME_NOT_ACTIVE)

        player_id = action.payload.player_id
        if player_id is not None:
            player = state.get_player(player_id)
            if player is None:
                return ActionResult.failure(
                    f"Player {player_id} not found", ErrorCode.PLAYER_NOT_FOUND
                )
            if player_id != state.current_player.player_id:
                return ActionResult.failure(
                    f"Not {player.name}'s turn", ErrorCode.NOT_YOUR_TURN
                )
        elif action.action_type in {ActionType.PLAY_CARD, ActionType.DRAW_CARD}:
            return ActionResult.failure("A player is required", ErrorCode.PLAYER_NOT_FOUND)

        if state.awaiting_shape and action.action_type != ActionType.CHOOSE_SHAPE:
            return ActionResult.failure(
                "Choose a shape for the Whot card first", ErrorCode.SHAPE_CHOICE_PENDING
            )
        if action.action_type == ActionType.CHOOSE_SHAPE and not state.awaiting_shape:
            return ActionResult.failure(
                "No Whot card is waiting for a shape", ErrorCode.NO_SHAPE_PENDING
            )

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.RESET_GAME: self._handle_reset_game,
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.CHOOSE_SHAPE: self._handle_choose_shape,
            ActionType.DRAW_CARD: self._handle_draw_card,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _handle_start_game(self, state: MatchState, action: Action) -> ActionResult:
        """Shuffle a fresh deck, deal, and flip the first discard."""
        if not state.players:
            return ActionResult.failure("A match needs players", ErrorCode.PLAYER_NOT_FOUND)

        players = self._fresh_players(state)
        draw_pile = deal(build_deck(self.rng), players, self.config.hand_size)
        first_card = draw_pile.pop()

        new_state = MatchState(
            match_id=state.match_id,
            players=players,
            draw_pile=draw_pile,
            discard_pile=[first_card],
            status=GameStatus.PLAYING,
            metadata=dict(state.metadata),
        )
        logger.info("%s started, %s to play", state.match_id, players[0].name)
        return ActionResult.success_with_state(
            new_state,
            changes=[
                f"New game started, {players[0].name} to play",
                f"First card is {first_card.label}",
            ],
        )

    def _handle_reset_game(self, state: MatchState, action: Action) -> ActionResult:
        """Discard the match and go back to waiting."""
        new_state = MatchState(
            match_id=state.match_id,
            players=self._fresh_players(state),
            metadata=dict(state.metadata),
        )
        return ActionResult.success_with_state(new_state, changes=["Game reset"])

    def _fresh_players(self, state: MatchState) -> list[PlayerState]:
        return [
            PlayerState(player_id=p.player_id, name=p.name, is_computer=p.is_computer)
            for p in state.players
        ]

    # =========================================================================
    # Turn commands
    # =========================================================================

    def _handle_play_card(self, state: MatchState, action: Action) -> ActionResult:
        """Play a card from the current player's hand and apply its effect."""
        player = state.current_player
        card_id = action.payload.card_id
        idx = player.index_of(card_id) if card_id else None
        if idx is None:
            return ActionResult.failure(
                f"Card {card_id} not in {player.name}'s hand", ErrorCode.CARD_NOT_IN_HAND
            )

        card = player.hand[idx]
        check = check_play(card, state)
        if not check.legal:
            return ActionResult.failure(check.reason, ErrorCode.ILLEGAL_PLAY)

        new_state = state.clone()
        actor = new_state.current_player
        actor.hand.pop(idx)
        new_state.discard_pile.append(card)
        # Any pending Hold On or Suspension is resolved by this play
        new_state.turn_phase = TurnPhase.NORMAL
        changes = [f"{actor.name} played {card.label}"]

        if not actor.hand:
            new_state.status = GameStatus.FINISHED
            new_state.winner_id = actor.player_id
            changes.append(f"{actor.name} wins!")
            logger.info("%s finished, winner %s", state.match_id, actor.player_id)
            return ActionResult.success_with_state(new_state, changes=changes)

        if len(actor.hand) == 1:
            changes.append(f"{actor.name} is on last card")

        if not card.is_wild:
            new_state.shape_demand = None

        changes.extend(self._apply_effect(new_state, card))
        return ActionResult.success_with_state(new_state, changes=changes)

    def _apply_effect(self, state: MatchState, card: Card) -> list[str]:
        """Apply the played card's effect to state in place. Returns changes."""
        actor = state.current_player

        if card.is_wild:
            state.pending_penalty = 0
            state.shape_demand = None
            state.turn_phase = TurnPhase.CHOOSING_SHAPE
            return [f"{actor.name} must choose a shape"]

        if card.rank == HOLD_ON:
            state.pending_penalty = 0
            state.turn_phase = TurnPhase.HOLD_ON
            return [f"Hold on! {actor.name} plays again"]

        if card.rank == PICK_TWO:
            state.pending_penalty = PICK_TWO_PENALTY
            self._advance_turn(state)
            return [f"{state.current_player.name} must pick 2"]

        if card.rank == PICK_THREE:
            # A fresh Pick Three and a defence end the same way: 3, never 6
            state.pending_penalty = PICK_THREE_PENALTY
            self._advance_turn(state)
            return [f"{state.current_player.name} must pick 3"]

        if card.rank == SUSPENSION:
            state.pending_penalty = 0
            state.turn_phase = TurnPhase.SUSPENSION
            return [f"Suspension! {actor.name} plays again"]

        if card.rank == GENERAL_MARKET:
            state.pending_penalty = 0
            changes = self._general_market(state)
            self._advance_turn(state)
            return changes

        state.pending_penalty = 0
        self._advance_turn(state)
        return []

    def _general_market(self, state: MatchState) -> list[str]:
        """Every player except the current one draws a card."""
        changes = ["General market!"]
        n = state.num_players
        for offset in range(1, n):
            player = state.players[(state.current_player_idx + offset) % n]
            drawn, state.draw_pile, state.discard_pile = draw_cards(
                state.draw_pile, state.discard_pile, 1, self.rng
            )
            if drawn:
                player.hand.extend(drawn)
                changes.append(f"{player.name} drew 1 card from the market")
            else:
                changes.append(f"Market is empty, {player.name} draws nothing")
        return changes

    def _handle_choose_shape(self, state: MatchState, action: Action) -> ActionResult:
        """Name the shape the next player must follow, then pass the turn."""
        try:
            shape = Suit.parse_shape(action.payload.shape or "")
        except ValueError:
            return ActionResult.failure(
                f"Invalid shape: {action.payload.shape!r}. Choose one of "
                + ", ".join(s.value for s in Suit.shapes()),
                ErrorCode.INVALID_SHAPE,
            )

        new_state = state.clone()
        actor = new_state.current_player
        new_state.shape_demand = shape
        self._advance_turn(new_state)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{actor.name} demands {shape.value.upper()}"],
        )

    def _handle_draw_card(self, state: MatchState, action: Action) -> ActionResult:
        """Draw one card, or the pending penalty, then pass the turn."""
        owed = state.pending_penalty or 1
        drawn, draw_pile, discard_pile = draw_cards(
            state.draw_pile, state.discard_pile, owed, self.rng
        )
        if not drawn:
            return ActionResult.failure("No cards left to draw", ErrorCode.DECK_EXHAUSTED)

        new_state = state.clone()
        actor = new_state.current_player
        new_state.draw_pile = draw_pile
        new_state.discard_pile = discard_pile
        actor.hand.extend(drawn)

        if state.pending_penalty:
            changes = [f"{actor.name} picked {len(drawn)} cards"]
            if len(drawn) < owed:
                changes.append("Market ran out before the penalty was paid")
        else:
            changes = [f"{actor.name} drew a card"]

        new_state.pending_penalty = 0
        self._advance_turn(new_state)
        return ActionResult.success_with_state(new_state, changes=changes, drawn=drawn)

    def _handle_end_turn(self, state: MatchState, action: Action) -> ActionResult:
        """Hand the turn on. Only allowed once the mandatory play is made."""
        if state.turn_phase is not TurnPhase.SUSPENSION:
            return ActionResult.failure(
                "You must play or draw before ending your turn",
                ErrorCode.TURN_NOT_COMPLETE,
            )
        new_state = state.clone()
        actor = new_state.current_player
        self._advance_turn(new_state)
        return ActionResult.success_with_state(
            new_state, changes=[f"{actor.name} ended their turn"]
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _advance_turn(self, state: MatchState) -> None:
        state.current_player_idx = state.next_player_idx()
        state.turn_phase = TurnPhase.NORMAL
        state.turn_number += 1

    def _check_conservation(self, state: MatchState) -> None:
        if state.status is GameStatus.WAITING:
            return
        total = state.card_count()
        if total != DECK_SIZE:
            raise CardConservationError(
                f"{state.match_id}: {total} cards in play, expected {DECK_SIZE}"
            )


def apply_action(
    state: MatchState,
    action: Action,
    config: RuleConfig | None = None,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(config=config or RuleConfig(), rng=rng or random.Random())
    return reducer.apply(state, action)
