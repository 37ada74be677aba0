"""Heuristic "optimal action" used to grade hero's decisions.

Postflop, the raw evaluator score is adjusted by a fixed list of board and
situation modifiers. The adjusted score is then compared against thresholds
that decide between betting, checking, calling, raising and folding.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from poker_trainer.models.action import ActionType
from poker_trainer.models.card import Rank, Suit
from poker_trainer.models.hand import HandState
from poker_trainer.simulation.evaluator import (
    HandEvaluation, HandEvaluator, HandRank, calculate_pot_odds, get_preflop_strength,
)

# Preflop thresholds (preflop strength)
BTN_PREMIUM = 70
BTN_OPEN = 45
BB_RAISE_UNOPENED = 75
BB_THREE_BET = 80
BB_DEFEND = 50
BB_DEFEND_POT_ODDS = 20

# Postflop thresholds (effective score)
BET_FOR_VALUE = 350
POT_CONTROL = 200
RAISE_FOR_VALUE = 450
CALL_STRONG = 300
CALL_WITH_ODDS = 200
CALL_WITH_ODDS_MAX_POT_ODDS = 25
MATH_OVERRIDE_POT_ODDS = 15
MARGINAL_FOLD_FLOOR = 150
AGGRESSION_POT_ODDS = 25

MARGINAL_KEYWORDS = ("Vulnerable", "aggression")


@dataclass(frozen=True)
class OptimalAction:
    action: ActionType
    reasoning: str
    is_marginal: bool = False


@dataclass(frozen=True)
class HandContext:
    """Everything the postflop heuristics look at."""
    evaluation: HandEvaluation
    four_flush: bool
    three_flush: bool
    paired_board: bool
    connected_board: bool
    facing_bet: bool
    pot_odds: int
    in_position: bool
    is_preflop: bool
    has_flush: bool
    has_straight: bool
    has_set: bool
    has_two_pair: bool
    has_pair: bool
    has_nut_flush: bool

    @property
    def raw_strength(self) -> int:
        return self.evaluation.score

    @property
    def dangerous_board(self) -> bool:
        return self.four_flush or (self.three_flush and self.paired_board)

    @property
    def has_nuts(self) -> bool:
        return self.has_nut_flush or (self.has_flush and not self.four_flush)


@dataclass(frozen=True)
class Modifier:
    description: str
    delta: int
    applies: Callable[[HandContext], bool] = field(compare=False)

    @property
    def is_marginal(self) -> bool:
        return any(word in self.description for word in MARGINAL_KEYWORDS)


MODIFIERS: Tuple[Modifier, ...] = (
    Modifier("Vulnerable flush on 4-flush board", -250,
             lambda c: c.four_flush and c.evaluation.category == HandRank.FLUSH
             and not c.has_nut_flush),
    Modifier("Flush draw possible", -50,
             lambda c: c.three_flush and not c.has_flush),
    Modifier("Paired board - opponent could have trips", -30,
             lambda c: c.paired_board and not c.has_set),
    Modifier("Position advantage", 30,
             lambda c: c.in_position and not c.is_preflop),
    Modifier("Facing significant aggression", -50,
             lambda c: c.facing_bet and c.pot_odds > AGGRESSION_POT_ODDS),
    Modifier("Nut flush - maximum strength", 100,
             lambda c: c.has_nut_flush),
    Modifier("Set - very strong", 50,
             lambda c: c.has_set),
)


def _flush_suit(cards) -> Optional[Suit]:
    counts = Counter(c.suit for c in cards)
    for suit, n in counts.items():
        if n >= 5:
            return suit
    return None


def _is_connected(board) -> bool:
    values = sorted({c.value for c in board})
    if 14 in values:
        values = [1] + values
    for i in range(len(values) - 2):
        if values[i + 2] - values[i] <= 4:
            return True
    return False


def build_hand_context(hand: HandState) -> HandContext:
    """Read board texture and hero's situation off a hand."""
    evaluation = HandEvaluator.evaluate(hand.hero_cards, hand.board)
    suit_counts = Counter(c.suit for c in hand.board)
    rank_counts = Counter(c.rank for c in hand.board)
    max_suit = max(suit_counts.values(), default=0)

    category = evaluation.category
    has_flush = category in (HandRank.FLUSH, HandRank.STRAIGHT_FLUSH, HandRank.ROYAL_FLUSH)
    has_nut_flush = False
    if has_flush:
        suit = _flush_suit(list(hand.hero_cards) + list(hand.board))
        hero_suited = {c.rank for c in hand.hero_cards if c.suit == suit}
        ace_on_board = any(c.rank == Rank.ACE and c.suit == suit for c in hand.board)
        has_nut_flush = (category >= HandRank.STRAIGHT_FLUSH
                         or Rank.ACE in hero_suited
                         or (ace_on_board and Rank.KING in hero_suited))

    return HandContext(
        evaluation=evaluation,
        four_flush=max_suit >= 4,
        three_flush=max_suit == 3,
        paired_board=max(rank_counts.values(), default=0) >= 2,
        connected_board=len(hand.board) >= 3 and _is_connected(hand.board),
        facing_bet=hand.to_call > 0,
        pot_odds=calculate_pot_odds(hand.pot, hand.to_call),
        in_position=hand.in_position,
        is_preflop=hand.is_preflop,
        has_flush=has_flush,
        has_straight=category == HandRank.STRAIGHT,
        has_set=category == HandRank.THREE_OF_A_KIND,
        has_two_pair=category == HandRank.TWO_PAIR,
        has_pair=category == HandRank.ONE_PAIR,
        has_nut_flush=has_nut_flush,
    )


def effective_strength(ctx: HandContext) -> Tuple[int, List[Modifier]]:
    """Raw score plus every modifier that applies, with the modifiers used."""
    applied = [m for m in MODIFIERS if m.applies(ctx)]
    return ctx.raw_strength + sum(m.delta for m in applied), applied


def preflop_action(hand: HandState) -> OptimalAction:
    strength = get_preflop_strength(*hand.hero_cards)

    if hand.in_position:
        if strength >= BTN_PREMIUM:
            return OptimalAction(ActionType.RAISE, "Premium hand - raise for value")
        if strength >= BTN_OPEN:
            return OptimalAction(ActionType.RAISE, "Playable hand in position - open raise")
        return OptimalAction(ActionType.FOLD, "Weak hand - fold preflop")

    if hand.to_call <= 0:
        if strength >= BB_RAISE_UNOPENED:
            return OptimalAction(ActionType.RAISE, "Strong hand - raise for value")
        return OptimalAction(ActionType.CHECK, "See the flop for free", is_marginal=True)

    pot_odds = calculate_pot_odds(hand.pot, hand.to_call)
    if strength >= BB_THREE_BET:
        return OptimalAction(ActionType.RAISE, "Premium hand - 3-bet for value")
    if strength >= BB_DEFEND or pot_odds <= BB_DEFEND_POT_ODDS:
        return OptimalAction(ActionType.CALL, "Decent hand - defend your blind")
    return OptimalAction(ActionType.FOLD, "Weak hand, bad pot odds - fold")


def postflop_action(ctx: HandContext, score: int,
                    applied: List[Modifier]) -> OptimalAction:
    """Pick an action from an effective score and the modifiers behind it."""
    marginal = [m for m in applied if m.is_marginal]

    if not ctx.facing_bet:
        if ctx.dangerous_board and not (ctx.has_nuts or ctx.has_set):
            return OptimalAction(ActionType.CHECK, "4-flush on board - check without the flush",
                                 is_marginal=True)
        if score >= BET_FOR_VALUE:
            return OptimalAction(ActionType.BET, "Strong hand - bet for value")
        if score >= POT_CONTROL:
            return OptimalAction(ActionType.CHECK, "Medium hand - pot control")
        return OptimalAction(ActionType.CHECK, "Weak hand - check back")

    if score >= RAISE_FOR_VALUE:
        return OptimalAction(ActionType.RAISE, "Very strong - raise for value")
    if score >= CALL_STRONG:
        return OptimalAction(ActionType.CALL, "Strong enough to call")
    if score >= CALL_WITH_ODDS and ctx.pot_odds <= CALL_WITH_ODDS_MAX_POT_ODDS:
        return OptimalAction(ActionType.CALL, "Decent hand with good pot odds")
    if ctx.pot_odds <= MATH_OVERRIDE_POT_ODDS:
        return OptimalAction(ActionType.CALL, "Pot odds too good to fold")
    if marginal and score >= MARGINAL_FOLD_FLOOR:
        return OptimalAction(
            ActionType.FOLD,
            f"Marginal spot ({marginal[0].description}) - folding is fine",
            is_marginal=True,
        )
    return OptimalAction(ActionType.FOLD, "Not enough equity to continue")


def get_optimal_action(hand: HandState) -> OptimalAction:
    """The action the heuristics would take in hero's seat."""
    if hand.is_preflop:
        return preflop_action(hand)
    ctx = build_hand_context(hand)
    score, applied = effective_strength(ctx)
    return postflop_action(ctx, score, applied)


def _intent(action: ActionType, to_call: float) -> ActionType:
    if action.is_aggressive:
        return ActionType.BET
    if action == ActionType.CALL and to_call <= 0:
        return ActionType.CHECK
    return action


def matches(action: ActionType, optimal: ActionType, to_call: float) -> bool:
    """Whether hero's action carries out the recommended one.

    Betting and raising count as the same choice, as do checking and calling
    when there is nothing to call.
    """
    return _intent(action, to_call) == _intent(optimal, to_call)


def ev_impact(action: ActionType, optimal: ActionType, pot: float, to_call: float) -> float:
    """Rough chips lost by deviating from the recommended action."""
    if matches(action, optimal, to_call):
        return 0.0
    if optimal == ActionType.FOLD:
        return -to_call
    if action == ActionType.FOLD and optimal.is_aggressive:
        return -pot * 0.3
    if action == ActionType.FOLD and optimal == ActionType.CALL:
        return -pot * 0.2
    return 0.0
