"""
Tests for the computer opponent.
"""

import random

import pytest

from ..bots import WhotBot, BotDecision, RandomPolicy, FirstLegalPolicy, most_common_shape
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.cards import Suit, create_catalog, get_card
from ..engine_core.state import TurnPhase


def _cards(*ids):
    return [get_card(cid) for cid in ids]


@pytest.fixture
def bot():
    return WhotBot(rng=random.Random(0))


class TestMostCommonShape:
    """Tests for the shape named after a Whot."""

    def test_majority_shape(self):
        cards = _cards("star-3", "star-4", "circle-3")
        assert most_common_shape(cards) is Suit.STAR

    def test_tie_goes_to_enumeration_order(self):
        cards = _cards("cross-3", "square-4", "cross-4", "square-3")
        assert most_common_shape(cards) is Suit.SQUARE

    def test_whot_cards_do_not_count(self):
        cards = _cards("whot-1", "whot-2", "cross-3")
        assert most_common_shape(cards) is Suit.CROSS

    def test_defaults_to_circle(self):
        assert most_common_shape([]) is Suit.CIRCLE
        assert most_common_shape(_cards("whot-1")) is Suit.CIRCLE


class TestChooseMove:
    """Tests for the bot's move priorities."""

    def test_draws_with_nothing_playable(self, bot, match_factory):
        state = match_factory(["circle-3"], ["cross-3", "square-4"], top="star-7", current=1)
        decision = bot.choose_move(state.current_player.hand, state)

        assert decision.is_draw
        assert decision.action.payload.player_id == "computer"

    def test_draws_under_pick_two(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-2", "whot-1"], top="square-2", current=1, pending_penalty=2,
        )
        assert bot.choose_move(state.current_player.hand, state).is_draw

    def test_defends_pick_three(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-12", "cross-5"], top="star-5", current=1, pending_penalty=3,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "cross-5"

    def test_draws_pick_three_without_a_five(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-12", "whot-1"], top="star-5", current=1, pending_penalty=3,
        )
        assert bot.choose_move(state.current_player.hand, state).is_draw

    def test_prefers_special_cards(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-12", "star-3", "star-8", "whot-1"], top="star-7", current=1,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "star-8"

    def test_then_high_cards(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-3", "star-12", "whot-1"], top="star-7", current=1,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "star-12"

    def test_then_any_shape_card(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["star-3", "star-4", "whot-1"], top="star-7", current=1,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id in ("star-3", "star-4")

    def test_whot_as_last_resort(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["whot-1", "cross-3", "cross-4", "circle-10"], top="star-7", current=1,
        )
        decision = bot.choose_move(state.current_player.hand, state)

        assert decision.action.payload.card_id == "whot-1"
        assert decision.chosen_shape is Suit.CROSS

    def test_hold_on_prefers_special(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["cross-11", "square-14", "whot-1"], top="star-1",
            current=1, turn_phase=TurnPhase.HOLD_ON,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "square-14"

    def test_hold_on_plays_first_card_without_special(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["cross-11", "square-3"], top="star-1",
            current=1, turn_phase=TurnPhase.HOLD_ON,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "cross-11"

    def test_follows_shape_demand(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["cross-12", "circle-4"], top="whot-2",
            current=1, shape_demand=Suit.CIRCLE,
        )
        decision = bot.choose_move(state.current_player.hand, state)
        assert decision.action.payload.card_id == "circle-4"


class TestSelectAction:
    """Tests for the full policy interface."""

    def test_names_shape_when_choosing(self, bot, match_factory):
        state = match_factory(
            ["circle-3"], ["square-3", "square-11", "cross-4"], top="whot-1",
            current=1, turn_phase=TurnPhase.CHOOSING_SHAPE,
        )
        decision = bot.select_action(state, legal_actions(state))

        assert decision.action.action_type == ActionType.CHOOSE_SHAPE
        assert decision.action.payload.shape == "square"
        assert decision.chosen_shape is Suit.SQUARE

    def test_ends_suspension_when_market_is_empty(self, bot, match_factory):
        ids = [c.card_id for c in create_catalog() if c.card_id != "circle-8"]
        computer = [
            cid for cid in ids
            if not cid.startswith(("circle", "whot")) and not cid.endswith("-8")
        ]
        human = [cid for cid in ids if cid not in computer]
        state = match_factory(
            human, computer, top="circle-8", current=1, turn_phase=TurnPhase.SUSPENSION,
        )
        actions = legal_actions(state)
        assert [a.action_type for a in actions] == [ActionType.END_TURN]

        decision = bot.select_action(state, actions)
        assert decision.action.action_type == ActionType.END_TURN

    def test_raises_without_actions(self, bot, basic_match):
        with pytest.raises(ValueError):
            bot.select_action(basic_match, [])

    def test_decision_is_always_legal(self, bot, basic_match):
        actions = legal_actions(basic_match)
        decision = bot.select_action(basic_match, actions)
        assert decision.action.payload.card_id in {a.payload.card_id for a in actions}


class TestBaselinePolicies:
    """Tests for the baseline policies."""

    def test_first_legal(self, basic_match):
        actions = legal_actions(basic_match)
        decision = FirstLegalPolicy().select_action(basic_match, actions)
        assert decision.action is actions[0]

    def test_random_is_seeded(self, basic_match):
        actions = legal_actions(basic_match)
        a = RandomPolicy(seed=5).select_action(basic_match, actions)
        b = RandomPolicy(seed=5).select_action(basic_match, actions)
        assert a.action is b.action

    def test_names(self):
        assert WhotBot().get_name() == "WhotBot"
        assert RandomPolicy().get_name() == "RandomPolicy"

    def test_draw_action_is_a_draw(self):
        assert BotDecision(action=Action.draw_card("computer")).is_draw
