"""Tests for the scripted villain."""

import random

from poker_trainer.models.action import ActionType, Actor, Street
from poker_trainer.models.card import parse_cards
from poker_trainer.models.hand import HandState
from poker_trainer.models.position import Position
from poker_trainer.simulation.deck import Deck, deal_hand
from poker_trainer.simulation.evaluator import HandEvaluator
from poker_trainer.simulation.villain import VillainPolicy

STREETS = {0: Street.PREFLOP, 3: Street.FLOP, 4: Street.TURN, 5: Street.RIVER}


def _make_hand(hero: str, villain: str, board: str = "", pot: float = 100,
               hero_stack: float = 900, villain_stack: float = 900,
               position: Position = Position.BTN) -> HandState:
    board_cards = parse_cards(board)
    return HandState(
        hand_number=1,
        hero_cards=parse_cards(hero),
        villain_cards=parse_cards(villain),
        full_board=list(board_cards),
        position=position,
        hero_stack=hero_stack,
        villain_stack=villain_stack,
        pot=pot,
        board=board_cards,
        street=STREETS[len(board_cards)],
    )


class TestRespond:
    """Tests for VillainPolicy.respond."""

    def test_never_folds_when_ahead(self):
        """Test villain never folds a hand that is ahead, over 1000 deals."""
        rng = random.Random(11)
        villain = VillainPolicy(rng)
        deck = Deck(rng)
        checked = 0
        for _ in range(1000):
            deal = deal_hand(deck)
            hand = HandState(
                hand_number=1,
                hero_cards=deal.hero_cards,
                villain_cards=deal.villain_cards,
                full_board=deal.board,
                position=Position.BTN,
                hero_stack=500,
                villain_stack=500,
                pot=1000,
                board=deal.board[:3],
                street=Street.FLOP,
            )
            v = HandEvaluator.evaluate(hand.villain_cards, hand.board)
            h = HandEvaluator.evaluate(hand.hero_cards, hand.board)
            if v.strength >= h.strength:
                checked += 1
                assert villain.respond(hand, 500) != ActionType.FOLD
        assert checked > 0

    def test_set_raises_when_ahead(self):
        hand = _make_hand("Ah Kh", "7h 7d", "7c Kd 2s", pot=600)
        assert VillainPolicy(random.Random(1)).respond(hand, 500) == ActionType.RAISE

    def test_pair_calls_when_ahead(self):
        hand = _make_hand("Ah 5h", "Kc 4s", "7c Kd 2s", pot=600)
        assert VillainPolicy(random.Random(1)).respond(hand, 500) == ActionType.CALL

    def test_folds_nothing_to_large_bet(self):
        hand = _make_hand("Ah Ad", "7c 2d", "Kh 9s 4c", pot=200)
        assert VillainPolicy(random.Random(1)).respond(hand, 100) == ActionType.FOLD

    def test_calls_small_bet_with_nothing(self):
        hand = _make_hand("Ah Ad", "7c 2d", "Kh 9s 4c", pot=200)
        assert VillainPolicy(random.Random(1)).respond(hand, 10) == ActionType.CALL

    def test_premium_preflop_always_reraises(self):
        villain = VillainPolicy(random.Random(3))
        hand = _make_hand("7c 2d", "Ah Ad", pot=40)
        assert all(villain.respond(hand, 20) == ActionType.RAISE for _ in range(200))

    def test_junk_preflop_never_calls(self):
        villain = VillainPolicy(random.Random(4))
        hand = _make_hand("Ah Ad", "7c 2d", pot=40)
        responses = [villain.respond(hand, 20) for _ in range(1000)]
        assert ActionType.CALL not in responses
        raises = responses.count(ActionType.RAISE)
        assert 0 < raises < 150

    def test_seeded_rng_repeats(self):
        hand = _make_hand("Ah Ad", "Jc Td", pot=40)
        a = VillainPolicy(random.Random(9))
        b = VillainPolicy(random.Random(9))
        assert ([a.respond(hand, 30) for _ in range(50)]
                == [b.respond(hand, 30) for _ in range(50)])


class TestDecideBettingAction:
    """Tests for VillainPolicy.decide_betting_action."""

    def test_monster_bets_half_pot_on_flop(self):
        hand = _make_hand("Kc Kd", "Ah 5h", "Kh 9h 2h", pot=100)
        result = VillainPolicy(random.Random(1)).decide_betting_action(hand)
        assert result.to_call == 50
        assert result.pot == 150
        assert result.villain_stack == 850
        assert result.last_action == "Villain bets $50"
        entry = result.action_log[-1]
        assert entry.actor == Actor.VILLAIN
        assert entry.action == "bets $50"
        assert entry.amount == 50

    def test_input_hand_is_unchanged(self):
        hand = _make_hand("Kc Kd", "Ah 5h", "Kh 9h 2h", pot=100)
        VillainPolicy(random.Random(1)).decide_betting_action(hand)
        assert hand.pot == 100
        assert hand.villain_stack == 900
        assert hand.action_log == []

    def test_bet_capped_at_effective_stack(self):
        hand = _make_hand("Kc Kd", "Ah 5h", "Kh 9h 2h 3c 7s", pot=100, hero_stack=30)
        result = VillainPolicy(random.Random(1)).decide_betting_action(hand)
        assert result.to_call == 30
        assert result.last_action == "Villain goes all-in $30"

    def test_pair_behind_always_checks(self):
        villain = VillainPolicy(random.Random(2))
        hand = _make_hand("Kc Qd", "9c 8d", "9h Kd 2s", pot=100)
        for _ in range(200):
            result = villain.decide_betting_action(hand)
            assert result.to_call == 0
            assert result.last_action == "Villain checks"
            assert result.action_log[-1].action == "checks"
            assert result.pot == 100

    def test_tied_flush_always_bets(self):
        """Test a villain tied on a board flush counts as ahead and bets."""
        villain = VillainPolicy(random.Random(5))
        hand = _make_hand("2c 3d", "4c 5d", "Ah Kh Qh Jh 9h", pot=100)
        for _ in range(500):
            result = villain.decide_betting_action(hand)
            assert result.to_call > 0
            assert result.action_log[-1].actor == Actor.VILLAIN

    def test_tied_pair_sometimes_bets(self):
        villain = VillainPolicy(random.Random(6))
        hand = _make_hand("9c 8d", "9s 8c", "Kd Kc 7s 4h 2d", pot=100)
        bets = sum(1 for _ in range(300) if villain.decide_betting_action(hand).to_call > 0)
        assert 0 < bets < 300
