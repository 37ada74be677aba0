"""Tests for hand evaluation, preflop strength, pot odds and outs."""

import pytest

from poker_trainer.models.card import Card, parse_cards
from poker_trainer.models.hand import Winner
from poker_trainer.simulation.evaluator import (
    HandEvaluator, HandRank,
    calculate_outs, calculate_pot_odds, compare_hands, estimate_equity,
    evaluate, get_preflop_strength, normalize_score,
)


def _eval(hole: str, board: str = ""):
    return evaluate(parse_cards(hole), parse_cards(board))


class TestHandEvaluator:
    """Tests for evaluate and compare_hands."""

    def test_royal_flush(self):
        """Test that broadway in one suit is a royal flush."""
        result = _eval("Ah Kh", "Qh Jh Th 2c 3d")
        assert result.category == HandRank.ROYAL_FLUSH
        assert result.description == "Royal Flush"

    def test_royal_flush_beats_quads(self):
        """Test the royal flush outranks four deuces."""
        royal = _eval("Ah Kh", "Qh Jh Th 2c 3d")
        quads = _eval("2c 2d", "2h 2s 5c 5d 5h")
        assert quads.category == HandRank.FOUR_OF_A_KIND
        assert royal.strength > quads.strength

    def test_category_order(self):
        """Test every category outranks the one below it."""
        hands = [
            ("Ah 9d", "Kc 7s 4h 3d 2c", HandRank.HIGH_CARD),
            ("Ah Ad", "Kc 7s 4h 3d 9c", HandRank.ONE_PAIR),
            ("Ah Kd", "Ac Kc 7s 4h 2d", HandRank.TWO_PAIR),
            ("7h 7d", "7c Kc 2s 4h 9d", HandRank.THREE_OF_A_KIND),
            ("8h 9d", "Tc Jc Qs 2h 3d", HandRank.STRAIGHT),
            ("Ah 3h", "Kh 8h 2h Tc 9d", HandRank.FLUSH),
            ("Ah Ad", "Ac Kc Ks 2h 3d", HandRank.FULL_HOUSE),
            ("9h 9d", "9c 9s Kd 2h 3c", HandRank.FOUR_OF_A_KIND),
            ("8h 9h", "Th Jh Qh 2c 3d", HandRank.STRAIGHT_FLUSH),
            ("Ah Kh", "Qh Jh Th 2c 3d", HandRank.ROYAL_FLUSH),
        ]
        results = [_eval(hole, board) for hole, board, _ in hands]
        assert [r.category for r in results] == [expected for _, _, expected in hands]
        strengths = [r.strength for r in results]
        assert strengths == sorted(strengths)
        assert len(set(strengths)) == len(strengths)

    def test_wheel_straight(self):
        """Test that A-2-3-4-5 is a five-high straight, not ace high."""
        result = _eval("Ac 2d", "3h 4s 5c Kd Qc")
        assert result.category == HandRank.STRAIGHT
        assert result.kickers == (5,)
        assert "Five high" in result.description

    def test_wheel_loses_to_six_high_straight(self):
        wheel = _eval("Ac 2d", "3h 4s 5c Kd Qc")
        six_high = _eval("6c 2d", "3h 4s 5c Kd Qc")
        assert six_high.strength > wheel.strength

    def test_two_trips_make_full_house(self):
        """Test KKK + QQQ plays as Kings full of Queens."""
        result = _eval("Kc Kd", "Kh Qc Qd Qh As")
        assert result.category == HandRank.FULL_HOUSE
        assert result.kickers == (13, 12)
        assert result.description == "Full House, Kings full of Queens"

    def test_pair_kicker_ordering(self):
        """Test K-K-A-Q-J beats K-K-A-Q-9."""
        better = _eval("Kc Kd", "Ah Qs Jc 4d 2h")
        worse = _eval("Kh Ks", "Ac Qd 9c 4s 2d")
        assert better.kickers == (13, 14, 12, 11)
        assert worse.kickers == (13, 14, 12, 9)
        assert better.strength > worse.strength

    def test_third_pair_plays_as_kicker(self):
        result = _eval("Ah Ad", "Kc Ks Qd Qh 2c")
        assert result.category == HandRank.TWO_PAIR
        assert result.kickers == (14, 13, 12)

    def test_flush_uses_top_five(self):
        result = _eval("Ah 3h", "Kh 8h 2h 6h 9d")
        assert result.category == HandRank.FLUSH
        assert result.kickers == (14, 13, 8, 6, 3)

    def test_preflop_partial_evaluation(self):
        """Test evaluation with no board."""
        pair = _eval("Qs Qd")
        high = _eval("Ah Kd")
        assert pair.category == HandRank.ONE_PAIR
        assert high.category == HandRank.HIGH_CARD
        assert high.kickers == (14, 13)
        assert pair.strength > high.strength

    def test_score_scale(self):
        """Test the heuristic score adds the primary rank index to the base."""
        assert _eval("Ah Ad").score == 212
        assert _eval("7h 7d", "7c Kc 2s").score == 355
        assert _eval("2c 7d", "9h Jc 4s").score == 109

    def test_requires_two_hole_cards(self):
        with pytest.raises(ValueError):
            evaluate([Card.parse("Ah")], [])

    def test_rejects_six_board_cards(self):
        with pytest.raises(ValueError):
            _eval("Ah Kh", "2c 3c 4c 5c 6c 7c")

    def test_compare_hands(self):
        board = parse_cards("Kh 9s 4c 3d 8h")
        assert compare_hands(parse_cards("Ah Ad"), parse_cards("7c 2d"), board) == Winner.HERO
        assert compare_hands(parse_cards("7c 2d"), parse_cards("Ah Ad"), board) == Winner.VILLAIN

    def test_board_plays_is_a_tie(self):
        board = parse_cards("Ah Kh Qh Jh Th")
        assert compare_hands(parse_cards("2c 3d"), parse_cards("4c 5d"), board) == Winner.TIE

    def test_compare(self):
        a = _eval("Ah Ad")
        b = _eval("Kh Kd")
        assert HandEvaluator.compare(a, b) == 1
        assert HandEvaluator.compare(b, a) == -1
        assert HandEvaluator.compare(a, a) == 0

    def test_normalize_score_bounds(self):
        assert normalize_score(100) == 0.0
        assert normalize_score(912) == 1.0
        assert normalize_score(5000) == 1.0
        assert 0.0 < normalize_score(500) < 1.0


class TestPreflopStrength:
    """Tests for get_preflop_strength."""

    def _strength(self, hand: str) -> float:
        return get_preflop_strength(*parse_cards(hand))

    def test_pairs_scale_with_rank(self):
        assert self._strength("Ah Ad") == 98
        assert self._strength("2h 2d") == 80
        assert self._strength("Kh Kd") > self._strength("Qh Qd")

    def test_ace_high_hands(self):
        assert self._strength("Ah Kh") == 95
        assert self._strength("Ah Kd") == 92
        assert self._strength("Ah Qh") == 88
        assert self._strength("Ah Jd") == 65
        assert self._strength("Ah 5h") == 60
        assert self._strength("Ah 5d") == 45

    def test_broadway_and_connectors(self):
        assert self._strength("Kh Qh") == 73
        assert self._strength("Kh Qd") == 63
        assert self._strength("Jh Th") == 64
        assert self._strength("9h 8d") == 42

    def test_junk(self):
        assert self._strength("7h 2d") == 25

    def test_order_of_cards_does_not_matter(self):
        assert self._strength("Kh Ah") == self._strength("Ah Kh")


class TestPotOdds:
    """Tests for pot odds and equity estimates."""

    def test_pot_odds(self):
        assert calculate_pot_odds(300, 100) == 25

    def test_nothing_to_call(self):
        assert calculate_pot_odds(300, 0) == 0

    def test_equity_rule_of_four_and_two(self):
        assert estimate_equity(9, 2) == 36
        assert estimate_equity(9, 1) == 18
        assert estimate_equity(30, 2) == 100
        assert estimate_equity(9, 0) == 0


class TestOuts:
    """Tests for calculate_outs."""

    def _outs(self, hole: str, board: str):
        return calculate_outs(parse_cards(hole), parse_cards(board))

    def test_flush_draw_with_overcards(self):
        outs = self._outs("Ah Kh", "2h 7h Jc")
        names = [d.name for d in outs.draws]
        assert names == ["Flush draw", "Overcards"]
        assert outs.draws[0].outs == 9
        assert outs.draws[1].outs == 6
        assert outs.total == 15

    def test_open_ended_straight_draw(self):
        outs = self._outs("8c 9d", "Tc Jh 2s")
        assert [d.name for d in outs.draws] == ["Open-ended straight draw"]
        assert outs.total == 8

    def test_gutshot(self):
        outs = self._outs("8c 9d", "Jh Qs 2c")
        assert [d.name for d in outs.draws] == ["Gutshot straight draw"]
        assert outs.total == 4

    def test_double_gutshot(self):
        outs = self._outs("7c 8d", "5h 9s Jc")
        assert [d.name for d in outs.draws] == ["Double gutshot straight draw"]
        assert outs.total == 8

    def test_wheel_draw_counts_ace(self):
        outs = self._outs("3c 4d", "2h 5s Kc")
        draw = outs.draws[0]
        assert draw.name == "Open-ended straight draw"
        assert {c.value for c in draw.cards} == {14, 6}

    def test_shared_cards_counted_once(self):
        """Test 9h and Ah complete both the flush and the straight."""
        outs = self._outs("Th Jh", "Qh Kc 2h")
        assert sum(d.outs for d in outs.draws) == 17
        assert outs.total == 15

    def test_board_only_flush_draw_ignored(self):
        outs = self._outs("2c 7d", "Ah Kh Qh Jh")
        assert all(d.name != "Flush draw" for d in outs.draws)

    def test_no_outs_on_river_or_preflop(self):
        assert self._outs("Ah Kh", "2h 7h Jc 3d 4s").total == 0
        assert self._outs("Ah Kh", "").total == 0

    def test_made_hand_has_no_overcards(self):
        outs = self._outs("Ah Kd", "Ac 7s 2d")
        assert all(d.name != "Overcards" for d in outs.draws)
