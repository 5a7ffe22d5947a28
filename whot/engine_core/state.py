"""
Match State - The single record a Whot match is played on.

Design principles:
- Owned, not global: each session holds its own MatchState
- Immutable-friendly: the reducer clones before changing anything
- One turn phase enum instead of a pile of boolean flags
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum
from typing import Any

from .cards import Card, Suit


class GameStatus(Enum):
    """High-level match status."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class TurnPhase(Enum):
    """
    What the turn owner is in the middle of.

    NORMAL: must play or draw.
    HOLD_ON: played a 1, must play again and any card goes (or draw).
    SUSPENSION: played an 8, plays again under normal matching rules.
    CHOOSING_SHAPE: played a Whot, must name a shape before the turn passes.
    """
    NORMAL = "normal"
    HOLD_ON = "hold_on"
    SUSPENSION = "suspension"
    CHOOSING_SHAPE = "choosing_shape"


@dataclass
class PlayerState:
    """A player and their hand. Hand order only matters for display."""
    player_id: str
    name: str
    is_computer: bool = False
    hand: list[Card] = field(default_factory=list)

    @property
    def hand_count(self) -> int:
        return len(self.hand)

    def index_of(self, card_id: str) -> int | None:
        """Position of a card in the hand, or None."""
        for i, card in enumerate(self.hand):
            if card.card_id == card_id:
                return i
        return None

    def find_card(self, card_id: str) -> Card | None:
        idx = self.index_of(card_id)
        return self.hand[idx] if idx is not None else None


@dataclass
class MatchState:
    """
    Complete match state at a point in time.

    Hands, draw pile and discard pile partition the deck:
    once a match has started they always hold 65 cards between them.
    All changes go through the reducer.
    """
    match_id: str
    players: list[PlayerState] = field(default_factory=list)
    current_player_idx: int = 0

    draw_pile: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)

    # Only "forward" is meaningful with two players
    turn_direction: str = "forward"

    pending_penalty: int = 0
    shape_demand: Suit | None = None
    turn_phase: TurnPhase = TurnPhase.NORMAL

    status: GameStatus = GameStatus.WAITING
    winner_id: str | None = None
    turn_number: int = 0

    action_history: list[Any] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        match_id: str,
        players: list[tuple[str, str, bool]],
    ) -> MatchState:
        """Create a waiting match from (player_id, name, is_computer) tuples."""
        return cls(
            match_id=match_id,
            players=[
                PlayerState(player_id=pid, name=name, is_computer=is_computer)
                for pid, name, is_computer in players
            ],
        )

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_idx]

    @property
    def awaiting_hold_on(self) -> bool:
        return self.turn_phase is TurnPhase.HOLD_ON

    @property
    def awaiting_suspension(self) -> bool:
        return self.turn_phase is TurnPhase.SUSPENSION

    @property
    def awaiting_shape(self) -> bool:
        return self.turn_phase is TurnPhase.CHOOSING_SHAPE

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int | None:
        for i, p in enumerate(self.players):
            if p.player_id == player_id:
                return i
        return None

    def next_player_idx(self) -> int:
        step = 1 if self.turn_direction == "forward" else -1
        return (self.current_player_idx + step) % len(self.players)

    def card_count(self) -> int:
        """Total cards across hands, draw pile and discard pile."""
        in_hands = sum(len(p.hand) for p in self.players)
        return in_hands + len(self.draw_pile) + len(self.discard_pile)

    def clone(self) -> MatchState:
        """Deep copy the state."""
        return deepcopy(self)
