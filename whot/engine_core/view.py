"""
Match snapshots - what a caller gets to see after each command.

Hand contents are shown only to the viewing player; everyone
else's hand is reduced to a count. Passing no viewer shows all
hands, which is what an in-process caller owning the state gets.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .cards import Card
from .state import MatchState, PlayerState


@dataclass
class CardView:
    """A card as shown to callers."""

    card_id: str
    suit: str
    rank: int
    is_special: bool
    label: str

    @classmethod
    def of(cls, card: Card) -> CardView:
        return cls(
            card_id=card.card_id,
            suit=card.suit.value,
            rank=card.rank,
            is_special=card.is_special,
            label=card.label,
        )


@dataclass
class PlayerView:
    """One seat at the table; the hand is present only for its owner."""

    player_id: str
    name: str
    is_computer: bool
    hand_count: int
    is_current_turn: bool = False
    hand: list[CardView] | None = None  # None when hidden from the viewer


@dataclass
class MatchView:
    """Everything a caller may see of a match after a command."""

    match_id: str
    status: str
    turn_phase: str
    current_player_id: str | None
    players: list[PlayerView] = field(default_factory=list)
    draw_pile_count: int = 0
    discard_pile_count: int = 0
    top_card: CardView | None = None
    pending_penalty: int = 0
    shape_demand: str | None = None
    awaiting_hold_on: bool = False
    awaiting_suspension: bool = False
    awaiting_shape: bool = False
    winner_id: str | None = None
    turn_number: int = 0


def _player_view(state: MatchState, idx: int, player: PlayerState, viewer_id: str | None) -> PlayerView:
    visible = viewer_id is None or viewer_id == player.player_id
    return PlayerView(
        player_id=player.player_id,
        name=player.name,
        is_computer=player.is_computer,
        hand_count=player.hand_count,
        is_current_turn=state.is_playing and idx == state.current_player_idx,
        hand=[CardView.of(c) for c in player.hand] if visible else None,
    )


def snapshot(state: MatchState, viewer_id: str | None = None) -> MatchView:
    """Build a read-only view of state as seen by viewer_id."""
    top = state.top_card
    return MatchView(
        match_id=state.match_id,
        status=state.status.value,
        turn_phase=state.turn_phase.value,
        current_player_id=state.current_player.player_id if state.is_playing else None,
        players=[
            _player_view(state, i, p, viewer_id) for i, p in enumerate(state.players)
        ],
        draw_pile_count=len(state.draw_pile),
        discard_pile_count=len(state.discard_pile),
        top_card=CardView.of(top) if top else None,
        pending_penalty=state.pending_penalty,
        shape_demand=state.shape_demand.value if state.shape_demand else None,
        awaiting_hold_on=state.awaiting_hold_on,
        awaiting_suspension=state.awaiting_suspension,
        awaiting_shape=state.awaiting_shape,
        winner_id=state.winner_id,
        turn_number=state.turn_number,
    )
