"""Hand evaluation, preflop strength and drawing odds."""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Sequence, Set, Tuple

from poker_trainer.models.card import Card, Suit, full_deck, rank_name
from poker_trainer.models.hand import Winner


class HandRank(IntEnum):
    """Hand rankings from worst to best."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


RANK_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

# Coarse strength scale the decision heuristics are tuned against.
CATEGORY_SCORES = {
    HandRank.HIGH_CARD: 100,
    HandRank.ONE_PAIR: 200,
    HandRank.TWO_PAIR: 300,
    HandRank.THREE_OF_A_KIND: 350,
    HandRank.STRAIGHT: 400,
    HandRank.FLUSH: 500,
    HandRank.FULL_HOUSE: 600,
    HandRank.FOUR_OF_A_KIND: 700,
    HandRank.STRAIGHT_FLUSH: 800,
    HandRank.ROYAL_FLUSH: 900,
}

PAIR_SCORE = CATEGORY_SCORES[HandRank.ONE_PAIR]
TWO_PAIR_SCORE = CATEGORY_SCORES[HandRank.TWO_PAIR]
FLUSH_SCORE = CATEGORY_SCORES[HandRank.FLUSH]
MIN_SCORE = CATEGORY_SCORES[HandRank.HIGH_CARD]
MAX_SCORE = CATEGORY_SCORES[HandRank.ROYAL_FLUSH] + 12

_KICKER_BASE = 15
_KICKER_SLOTS = 5


@dataclass(frozen=True)
class HandEvaluation:
    """Best five-card hand found in hole cards plus board.

    ``strength`` orders any two evaluations totally: category first, then
    kickers. ``score`` is the coarser heuristic scale (category base plus
    the primary rank index) that the oracle and villain thresholds use.
    """
    category: HandRank
    kickers: Tuple[int, ...]
    strength: int
    score: int
    description: str

    @property
    def rank_name(self) -> str:
        return RANK_NAMES[self.category]


def _straight_high(values: Set[int]) -> int:
    """Highest straight top card in a set of rank values, 0 if none."""
    vals = set(values)
    if 14 in vals:
        vals.add(1)
    for high in range(14, 4, -1):
        if all(high - i in vals for i in range(5)):
            return high
    return 0


def _encode(category: HandRank, kickers: Sequence[int]) -> int:
    padded = list(kickers[:_KICKER_SLOTS]) + [0] * (_KICKER_SLOTS - len(kickers))
    strength = int(category)
    for k in padded:
        strength = strength * _KICKER_BASE + k
    return strength


def _describe(category: HandRank, kickers: Sequence[int]) -> str:
    top = kickers[0]
    if category == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if category == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {rank_name(top)} high"
    if category == HandRank.FOUR_OF_A_KIND:
        return f"Four {rank_name(top, plural=True)}"
    if category == HandRank.FULL_HOUSE:
        return (f"Full House, {rank_name(top, plural=True)} full of "
                f"{rank_name(kickers[1], plural=True)}")
    if category == HandRank.FLUSH:
        return f"Flush, {rank_name(top)} high"
    if category == HandRank.STRAIGHT:
        if top == 5:
            return "Straight, Five high (the wheel)"
        return f"Straight, {rank_name(top)} high"
    if category == HandRank.THREE_OF_A_KIND:
        return f"Three {rank_name(top, plural=True)}"
    if category == HandRank.TWO_PAIR:
        return (f"Two Pair, {rank_name(top, plural=True)} and "
                f"{rank_name(kickers[1], plural=True)}")
    if category == HandRank.ONE_PAIR:
        return f"Pair of {rank_name(top, plural=True)}"
    return f"{rank_name(top)} high"


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(hole_cards: Sequence[Card], board: Sequence[Card] = ()) -> HandEvaluation:
        """Find the best hand made from the hole cards and 0-5 board cards.

        Args:
            hole_cards: Exactly two cards.
            board: Zero to five community cards.

        Returns:
            The HandEvaluation of the best five cards available.
        """
        if len(hole_cards) != 2:
            raise ValueError(f"Expected 2 hole cards, got {len(hole_cards)}")
        if len(board) > 5:
            raise ValueError(f"Board has at most 5 cards, got {len(board)}")

        cards = list(hole_cards) + list(board)
        values = sorted((c.value for c in cards), reverse=True)

        by_suit: Dict[Suit, List[int]] = {}
        for c in cards:
            by_suit.setdefault(c.suit, []).append(c.value)
        flush_values: List[int] = []
        for suited in by_suit.values():
            if len(suited) >= 5:
                flush_values = sorted(suited, reverse=True)

        counts = Counter(values)
        quads = sorted((v for v, n in counts.items() if n == 4), reverse=True)
        trips = sorted((v for v, n in counts.items() if n == 3), reverse=True)
        pairs = sorted((v for v, n in counts.items() if n == 2), reverse=True)
        straight_high = _straight_high(set(values))

        category: HandRank
        kickers: List[int]
        sf_high = _straight_high(set(flush_values)) if flush_values else 0
        if sf_high:
            category = HandRank.ROYAL_FLUSH if sf_high == 14 else HandRank.STRAIGHT_FLUSH
            kickers = [sf_high]
        elif quads:
            q = quads[0]
            kickers = [q] + [v for v in values if v != q][:1]
            category = HandRank.FOUR_OF_A_KIND
        elif trips and (len(trips) >= 2 or pairs):
            t = trips[0]
            # A second set of trips plays as the pair
            kickers = [t, max(trips[1:] + pairs)]
            category = HandRank.FULL_HOUSE
        elif flush_values:
            kickers = flush_values[:5]
            category = HandRank.FLUSH
        elif straight_high:
            kickers = [straight_high]
            category = HandRank.STRAIGHT
        elif trips:
            t = trips[0]
            kickers = [t] + [v for v in values if v != t][:2]
            category = HandRank.THREE_OF_A_KIND
        elif len(pairs) >= 2:
            high, low = pairs[0], pairs[1]
            kickers = [high, low] + [v for v in values if v not in (high, low)][:1]
            category = HandRank.TWO_PAIR
        elif pairs:
            p = pairs[0]
            kickers = [p] + [v for v in values if v != p][:3]
            category = HandRank.ONE_PAIR
        else:
            kickers = values[:5]
            category = HandRank.HIGH_CARD

        return HandEvaluation(
            category=category,
            kickers=tuple(kickers),
            strength=_encode(category, kickers),
            score=CATEGORY_SCORES[category] + kickers[0] - 2,
            description=_describe(category, kickers),
        )

    @staticmethod
    def compare(a: HandEvaluation, b: HandEvaluation) -> int:
        """Compare two evaluations.

        Returns:
            1 if a wins, -1 if b wins, 0 if tie.
        """
        if a.strength > b.strength:
            return 1
        if a.strength < b.strength:
            return -1
        return 0

    @staticmethod
    def compare_hands(hero_cards: Sequence[Card], villain_cards: Sequence[Card],
                      board: Sequence[Card]) -> Winner:
        """Decide a showdown between hero and villain on the same board."""
        result = HandEvaluator.compare(
            HandEvaluator.evaluate(hero_cards, board),
            HandEvaluator.evaluate(villain_cards, board),
        )
        if result > 0:
            return Winner.HERO
        if result < 0:
            return Winner.VILLAIN
        return Winner.TIE


def evaluate(hole_cards: Sequence[Card], board: Sequence[Card] = ()) -> HandEvaluation:
    return HandEvaluator.evaluate(hole_cards, board)


def compare_hands(hero_cards: Sequence[Card], villain_cards: Sequence[Card],
                  board: Sequence[Card]) -> Winner:
    return HandEvaluator.compare_hands(hero_cards, villain_cards, board)


def normalize_score(score: float) -> float:
    """Map the heuristic score scale onto 0..1."""
    return max(0.0, min(1.0, (score - MIN_SCORE) / (MAX_SCORE - MIN_SCORE)))


def get_preflop_strength(card_a: Card, card_b: Card) -> float:
    """Rough 0-100 starting hand strength.

    Pairs scale with rank, ace-high hands with their kicker, then suited
    and connected hands earn a bonus over unconnected junk.
    """
    high = max(card_a.rank.index, card_b.rank.index)
    low = min(card_a.rank.index, card_b.rank.index)
    suited = card_a.suit == card_b.suit
    gap = high - low

    if gap == 0:
        return 80 + high * 1.5

    if high == 12:
        if low >= 11:
            return 95 if suited else 92
        if low >= 10:
            return 88 if suited else 82
        if low >= 8:
            return 75 if suited else 65
        return 60 if suited else 45

    if high >= 10 and low >= 9:
        return (70 if suited else 60) + (high - 10) * 3

    if suited and gap <= 2:
        return 55 + high
    if suited:
        return 40 + high
    if gap <= 2:
        return 35 + high
    return 20 + high


def calculate_pot_odds(pot: float, to_call: float) -> int:
    """Percentage of the final pot hero must put in to call."""
    if to_call <= 0:
        return 0
    return round(to_call / (pot + to_call) * 100)


def estimate_equity(outs: int, streets_remaining: int) -> int:
    """Rule of 4 and 2: rough percentage chance to hit one of ``outs``."""
    if streets_remaining <= 0:
        return 0
    multiplier = 4 if streets_remaining >= 2 else 2
    return min(outs * multiplier, 100)


@dataclass(frozen=True)
class Draw:
    name: str
    cards: List[Card] = field(default_factory=list)

    @property
    def outs(self) -> int:
        return len(self.cards)


@dataclass(frozen=True)
class Outs:
    """Cards that improve hero, counted once however many draws they complete."""
    total: int
    draws: List[Draw] = field(default_factory=list)


def _with_low_ace(values: Set[int]) -> Set[int]:
    return values | {1} if 14 in values else set(values)


def _completes_straight(values: Set[int], hole_values: Set[int], rank: int) -> bool:
    """Whether adding ``rank`` makes a straight that uses a hole card."""
    full = _with_low_ace(values | {rank})
    new = {rank, 1} if rank == 14 else {rank}
    holes = _with_low_ace(hole_values)
    for high in range(14, 4, -1):
        window = set(range(high - 4, high + 1))
        if window <= full and window & new and window & holes:
            return True
    return False


def _is_open_ended(values: Set[int], completing: List[int]) -> bool:
    """Two completing ranks that sit on either side of a four-card run."""
    ext = _with_low_ace(values)
    positions = [{r, 1} if r == 14 else {r} for r in completing]
    for i, first in enumerate(positions):
        for second in positions[i + 1:]:
            for a in first:
                for b in second:
                    lo, hi = min(a, b), max(a, b)
                    if hi - lo == 5 and all(v in ext for v in range(lo + 1, hi)):
                        return True
    return False


def calculate_outs(hole_cards: Sequence[Card], board: Sequence[Card]) -> Outs:
    """Count hero's outs on the flop or turn.

    Looks for flush draws (four to a suit including a hole card), straight
    draws (open-ended, gutshot, double gutshot) and overcards when hero has
    nothing better than high card. No draws are counted preflop or on the
    river.
    """
    if len(board) not in (3, 4):
        return Outs(total=0)

    cards = list(hole_cards) + list(board)
    known = set(cards)
    unseen = [c for c in full_deck() if c not in known]
    current = HandEvaluator.evaluate(hole_cards, board)
    draws: List[Draw] = []

    if current.category < HandRank.FLUSH:
        for suit in Suit:
            suited = [c for c in cards if c.suit == suit]
            if len(suited) == 4 and any(c.suit == suit for c in hole_cards):
                draws.append(Draw("Flush draw", [c for c in unseen if c.suit == suit]))

    if current.category < HandRank.STRAIGHT:
        values = {c.value for c in cards}
        hole_values = {c.value for c in hole_cards}
        completing = [r for r in range(2, 15)
                      if r not in values and _completes_straight(values, hole_values, r)]
        if completing:
            if len(completing) == 1:
                name = "Gutshot straight draw"
            elif _is_open_ended(values, completing):
                name = "Open-ended straight draw"
            else:
                name = "Double gutshot straight draw"
            draws.append(Draw(name, [c for c in unseen if c.value in completing]))

    if current.category == HandRank.HIGH_CARD:
        top = max(c.value for c in board)
        over = {c.value for c in hole_cards if c.value > top}
        if over:
            draws.append(Draw("Overcards", [c for c in unseen if c.value in over]))

    distinct = set()
    for draw in draws:
        distinct.update(draw.cards)
    return Outs(total=len(distinct), draws=draws)
