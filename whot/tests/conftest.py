"""
Pytest fixtures for Whot tests.

Match fixtures always hold the full 65-card deck so the reducer's
card conservation check holds; tests only choose where cards sit.
"""

import random

import pytest

from ..config import RuleConfig
from ..engine_core.cards import create_catalog, get_card
from ..engine_core.reducer import Reducer
from ..engine_core.state import MatchState, PlayerState, GameStatus


def make_match(
    human: list[str],
    computer: list[str],
    top: str,
    draw_top: list[str] | None = None,
    rest_to: str = "draw",
    current: int = 0,
    **fields,
) -> MatchState:
    """
    Build a playing match with chosen cards placed.

    Args:
        human: Card ids in the human's hand
        computer: Card ids in the computer's hand
        top: Card id on top of the discard pile
        draw_top: Card ids drawn first, in the order given
        rest_to: "draw" puts every other card in the draw pile,
            "discard" puts them under the top card
        current: Index of the player whose turn it is
        **fields: Other MatchState fields (pending_penalty, shape_demand, ...)
    """
    draw_top = draw_top or []
    placed = set(human) | set(computer) | {top} | set(draw_top)
    rest = [c for c in create_catalog() if c.card_id not in placed]

    if rest_to == "draw":
        draw_pile = rest + [get_card(cid) for cid in reversed(draw_top)]
        discard_pile = [get_card(top)]
    else:
        draw_pile = [get_card(cid) for cid in reversed(draw_top)]
        discard_pile = rest + [get_card(top)]

    state = MatchState(
        match_id="test_match",
        players=[
            PlayerState("player", "You", False, [get_card(cid) for cid in human]),
            PlayerState("computer", "Computer", True, [get_card(cid) for cid in computer]),
        ],
        current_player_idx=current,
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        status=GameStatus.PLAYING,
    )
    for name, value in fields.items():
        setattr(state, name, value)
    return state


@pytest.fixture
def match_factory():
    """The make_match helper, for building arranged matches."""
    return make_match


@pytest.fixture
def reducer() -> Reducer:
    """Reducer with a fixed seed."""
    return Reducer(config=RuleConfig(), rng=random.Random(42))


@pytest.fixture
def waiting_match() -> MatchState:
    """A fresh two-player match that has not been dealt."""
    return MatchState.create(
        match_id="test_match",
        players=[("player", "You", False), ("computer", "Computer", True)],
    )


@pytest.fixture
def basic_match() -> MatchState:
    """Human to play on triangle 7 with a mixed hand."""
    return make_match(
        human=["square-7", "square-4", "circle-1", "star-14", "whot-1"],
        computer=["cross-3", "cross-10", "star-5", "circle-8", "square-12"],
        top="triangle-7",
    )
