"""Tests for the training session controller."""

import logging
import random

import pytest

from poker_trainer.exceptions import DealIntegrityError, InvalidActionError
from poker_trainer.models.action import ActionType, Street
from poker_trainer.models.position import Position
from poker_trainer.models.session import SessionMode
from poker_trainer.simulation.deck import Deck
from poker_trainer.training.session import MAX_REDEALS, SessionController, run_autopilot


class FlakyDeck(Deck):
    """Deals duplicate cards for the first ``failures`` shuffles."""

    def __init__(self, failures: int = 1):
        super().__init__(random.Random(3))
        self.failures = failures
        self.resets = 0

    def reset(self):
        super().reset()
        self.resets += 1
        if self.failures > 0:
            self.failures -= 1
            self.cards = [self.cards[0]] * 52


def _controller(seed: int = 1) -> SessionController:
    return SessionController(rng=random.Random(seed))


class TestCreateSession:
    """Tests for create_session."""

    def test_defaults(self):
        state = _controller().create_session()
        assert state.starting_stack == 1000
        assert state.current_stack == 1000
        assert state.target_profit == 100
        assert state.max_hands == 20
        assert state.hands_played == 0
        assert state.current_hand is None
        assert state.mode == SessionMode.PLAYING
        assert state.profit == 0

    def test_rejects_bad_stack(self):
        with pytest.raises(InvalidActionError):
            _controller().create_session(100, 0, 10)

    def test_rejects_bad_hand_count(self):
        with pytest.raises(InvalidActionError):
            _controller().create_session(100, 1000, 0)


class TestDealNewHand:
    """Tests for deal_new_hand."""

    def test_first_hand_on_button(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session())
        hand = state.current_hand
        assert hand.hand_number == 1
        assert hand.position == Position.BTN
        assert state.current_stack == 995
        assert hand.villain_stack == 990
        assert len(set(hand.hero_cards + hand.villain_cards + hand.full_board)) == 9

    def test_positions_alternate(self):
        controller = _controller()
        state = controller.create_session(max_hands=4)
        positions = []
        for _ in range(4):
            state = controller.deal_new_hand(state)
            positions.append(state.current_hand.position)
            state = controller.process_action(state, ActionType.FOLD)
        assert positions == [Position.BTN, Position.BB, Position.BTN, Position.BB]
        assert state.is_complete

    def test_cannot_deal_over_running_hand(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session())
        with pytest.raises(InvalidActionError):
            controller.deal_new_hand(state)

    def test_cannot_deal_after_session_ends(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session(max_hands=1))
        state = controller.process_action(state, ActionType.FOLD)
        with pytest.raises(InvalidActionError):
            controller.deal_new_hand(state)

    def test_duplicate_deal_is_redealt(self, caplog):
        controller = SessionController(rng=random.Random(1), deck=FlakyDeck(failures=2))
        with caplog.at_level(logging.WARNING, logger="poker_trainer.training.session"):
            state = controller.deal_new_hand(controller.create_session())
        hand = state.current_hand
        assert len(set(hand.hero_cards + hand.villain_cards + hand.full_board)) == 9
        assert controller.deck.resets == 3
        assert len([r for r in caplog.records if "redealing" in r.getMessage()]) == 2

    def test_persistent_duplicates_raise(self):
        controller = SessionController(rng=random.Random(1),
                                       deck=FlakyDeck(failures=MAX_REDEALS))
        with pytest.raises(DealIntegrityError):
            controller.deal_new_hand(controller.create_session())


class TestProcessAction:
    """Tests for process_action."""

    def test_fold_ends_one_hand_session(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session(max_hands=1))
        state = controller.process_action(state, ActionType.FOLD)
        assert state.mode == SessionMode.SESSION_COMPLETE
        assert state.is_complete
        assert state.hands_played == 1
        assert state.current_hand is None
        assert state.current_stack == 995
        assert state.profit == -5
        assert len(state.hand_history) == 1
        assert len(state.transparency_data) == 1

    def test_hand_complete_mode_between_hands(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session(max_hands=3))
        state = controller.process_action(state, ActionType.FOLD)
        assert state.mode == SessionMode.HAND_COMPLETE
        assert not state.is_complete

    def test_decision_records_situation(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session())
        state = controller.process_action(state, "fold")
        decision = state.decisions[0]
        assert decision.hand_number == 1
        assert decision.street == Street.PREFLOP
        assert decision.situation == "Pot: $15, To Call: $5"
        assert decision.action == ActionType.FOLD
        assert decision.reasoning

    def test_previous_state_is_untouched(self):
        controller = _controller()
        before = controller.deal_new_hand(controller.create_session())
        after = controller.process_action(before, ActionType.CALL)
        assert before.decisions == []
        assert before.current_hand.street == Street.PREFLOP
        assert len(before.current_hand.action_log) == 2
        assert after.decisions[0].action == ActionType.CALL

    def test_no_hand_in_progress(self):
        controller = _controller()
        with pytest.raises(InvalidActionError):
            controller.process_action(controller.create_session(), ActionType.CALL)

    def test_invalid_action_string(self):
        controller = _controller()
        state = controller.deal_new_hand(controller.create_session())
        with pytest.raises(InvalidActionError):
            controller.process_action(state, "dance")

    def test_session_ends_when_broke(self):
        controller = _controller(5)
        state = controller.create_session(max_hands=200)
        while not state.is_complete:
            state = controller.deal_new_hand(state)
            while state.current_hand is not None:
                hand = state.current_hand
                if hand.hero_stack > hand.to_call:
                    state = controller.process_action(state, ActionType.RAISE,
                                                      hand.hero_stack - hand.to_call)
                else:
                    state = controller.process_action(state, ActionType.CALL)
        assert state.hands_played <= 200
        if state.hands_played < 200:
            assert state.current_stack <= 0

    def test_chips_are_conserved_over_a_session(self):
        controller = _controller(8)
        state = controller.create_session(max_hands=30)
        rng = random.Random(99)
        while not state.is_complete:
            state = controller.deal_new_hand(state)
            total = state.current_hand.hero_stack + state.current_hand.villain_stack \
                + state.current_hand.pot
            while state.current_hand is not None:
                hand = state.current_hand
                assert hand.hero_stack + hand.villain_stack + hand.pot == total
                choices = [ActionType.FOLD, ActionType.CALL]
                if hand.hero_stack > hand.to_call:
                    choices.append(ActionType.RAISE)
                state = controller.process_action(state, rng.choice(choices))
            last = state.hand_history[-1]
            assert last.hero_stack + last.villain_stack == total


class TestAutopilot:
    """Tests for run_autopilot."""

    def test_runs_to_completion(self):
        state = run_autopilot(_controller(4), max_hands=10)
        assert state.is_complete
        assert state.hands_played == 10 or state.current_stack <= 0
        assert len(state.hand_history) == state.hands_played
        assert len(state.transparency_data) == state.hands_played
        assert state.decisions

    def test_follows_recommendations(self):
        state = run_autopilot(_controller(6), max_hands=10)
        for d in state.decisions:
            if not d.was_optimal:
                # Only an all-in call in place of an impossible raise
                assert d.action == ActionType.CALL
                assert d.optimal_action.is_aggressive

    def test_seeded_sessions_repeat(self):
        a = run_autopilot(_controller(12), max_hands=5)
        b = run_autopilot(_controller(12), max_hands=5)
        assert a.current_stack == b.current_stack
        assert [d.action for d in a.decisions] == [d.action for d in b.decisions]
