"""Bluff transparency: how much hero's betting gives away about hero's cards.

Three pillars, each 0-100 where 100 means fully readable:

* Linearity: at showdown, does hero invest more with stronger hands?
* Polarization: are hero's big bets all strong, or a mix of nuts and air?
* Board texture: when a scary card lands and hero bets, does hero have it?
"""

import math
from typing import List, Sequence

from poker_trainer.models.action import Actor, Street
from poker_trainer.models.card import Card
from poker_trainer.models.hand import HandState
from poker_trainer.models.session import Decision
from poker_trainer.models.transparency import (
    BigBet, Confidence, ScareCardEvent, ScareKind,
    TransparencyDataPoint, TransparencyScore,
)
from poker_trainer.simulation.evaluator import (
    HandEvaluator, HandRank, get_preflop_strength, normalize_score,
)

BIG_BET_POT_FRACTION = 0.7
STRONG_BET_STRENGTH = 0.6
WEAK_BET_STRENGTH = 0.2
MIN_SHOWDOWN_HANDS = 3
HIGH_CONFIDENCE_HANDS = 13
MEDIUM_CONFIDENCE_HANDS = 5

LINEARITY_WEIGHT = 0.6
POLARIZATION_WEIGHT = 0.3
BOARD_TEXTURE_WEIGHT = 0.1
NEUTRAL = 50


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _strength_on(hand: HandState, street: Street) -> float:
    if street == Street.PREFLOP:
        return get_preflop_strength(*hand.hero_cards) / 100
    board = hand.full_board[:street.board_size]
    return normalize_score(HandEvaluator.evaluate(hand.hero_cards, board).score)


def _big_bets(hand: HandState) -> List[BigBet]:
    bets = []
    running_pot = 0.0
    for entry in hand.action_log:
        amount = entry.amount or 0.0
        is_blind = entry.action.startswith("posts")
        if (entry.actor == Actor.HERO and amount > 0 and not is_blind
                and running_pot > 0 and amount / running_pot > BIG_BET_POT_FRACTION):
            bets.append(BigBet(
                street=entry.street,
                amount=amount,
                pot_before=running_pot,
                strength=_strength_on(hand, entry.street),
            ))
        running_pot += amount
    return bets


def _has_three_in_a_row(values: Sequence[int], card_value: int) -> bool:
    ranks = set(values)
    targets = {card_value}
    if 14 in ranks:
        ranks.add(1)
    if card_value == 14:
        targets.add(1)
    for low in range(1, 13):
        window = {low, low + 1, low + 2}
        if window <= ranks and window & targets:
            return True
    return False


def _hero_has_flush(hero_cards: Sequence[Card], board: Sequence[Card], suit) -> bool:
    suited = [c for c in list(hero_cards) + list(board) if c.suit == suit]
    return len(suited) >= 5 and any(c.suit == suit for c in hero_cards)


def _scare_cards(hand: HandState, decisions: Sequence[Decision]) -> List[ScareCardEvent]:
    events = []
    for street in (Street.TURN, Street.RIVER):
        size = street.board_size
        if len(hand.board) < size:
            break
        board = hand.full_board[:size]
        card = board[-1]
        previous = board[:-1]
        bet_after = any(d.street == street and d.action.is_aggressive for d in decisions)

        if sum(1 for c in previous if c.suit == card.suit) >= 2:
            events.append(ScareCardEvent(
                street=street, card=card, kind=ScareKind.FLUSH,
                hero_bet_after=bet_after,
                hero_has_it=_hero_has_flush(hand.hero_cards, board, card.suit),
            ))

        if _has_three_in_a_row([c.value for c in board], card.value):
            category = HandEvaluator.evaluate(hand.hero_cards, board).category
            events.append(ScareCardEvent(
                street=street, card=card, kind=ScareKind.STRAIGHT,
                hero_bet_after=bet_after,
                hero_has_it=category in (HandRank.STRAIGHT, HandRank.STRAIGHT_FLUSH,
                                         HandRank.ROYAL_FLUSH),
            ))
    return events


def collect_data_point(hand: HandState, decisions: Sequence[Decision]) -> TransparencyDataPoint:
    """Extract one finished hand's transparency evidence.

    Args:
        hand: A completed hand.
        decisions: Hero's graded decisions in that hand.
    """
    final = HandEvaluator.evaluate(hand.hero_cards, hand.full_board)
    own = [d for d in decisions if d.hand_number == hand.hand_number]
    return TransparencyDataPoint(
        hand_number=hand.hand_number,
        hand_strength=normalize_score(final.score),
        investment_ratio=_clamp(hand.hero_invested / hand.pot) if hand.pot > 0 else 0.0,
        went_to_showdown=not hand.hero_folded and hand.street == Street.SHOWDOWN,
        big_bets=_big_bets(hand),
        scare_cards=_scare_cards(hand, own),
    )


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson's r, or 0 when there are fewer than three points or no variance."""
    n = len(xs)
    if n < 3 or n != len(ys):
        return 0.0
    mean_x = sum(xs) / n
    mean_y = sum(ys) / n
    cov = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))
    var_x = sum((x - mean_x) ** 2 for x in xs)
    var_y = sum((y - mean_y) ** 2 for y in ys)
    denominator = math.sqrt(var_x * var_y)
    if denominator == 0:
        return 0.0
    return cov / denominator


def linearity_score(points: Sequence[TransparencyDataPoint]) -> int:
    showdown = [p for p in points if p.went_to_showdown]
    if len(showdown) < MIN_SHOWDOWN_HANDS:
        return NEUTRAL
    r = pearson_correlation([p.hand_strength for p in showdown],
                            [p.investment_ratio for p in showdown])
    return round((r + 1) * 50)


def polarization_score(points: Sequence[TransparencyDataPoint]) -> int:
    bets = [b for p in points for b in p.big_bets]
    if not bets:
        return NEUTRAL
    strong = sum(1 for b in bets if b.strength >= STRONG_BET_STRENGTH)
    weak = sum(1 for b in bets if b.strength <= WEAK_BET_STRENGTH)
    strong_ratio = strong / len(bets)
    weak_ratio = weak / len(bets)
    if weak == 0:
        return round(70 + strong_ratio * 30)
    if strong == 0:
        return round(20 * (1 - weak_ratio))
    return round(50 - min(strong_ratio, weak_ratio) * 2 * 40)


def board_texture_score(points: Sequence[TransparencyDataPoint]) -> int:
    betting = [e for p in points for e in p.scare_cards if e.hero_bet_after]
    if not betting:
        return NEUTRAL
    truthful = sum(1 for e in betting if e.hero_has_it)
    return round(truthful / len(betting) * 100)


def calculate_score(points: Sequence[TransparencyDataPoint]) -> TransparencyScore:
    """Combine the three pillars into the T-Score."""
    linearity = linearity_score(points)
    polarization = polarization_score(points)
    board_texture = board_texture_score(points)
    showdown_hands = sum(1 for p in points if p.went_to_showdown)

    if showdown_hands >= HIGH_CONFIDENCE_HANDS:
        confidence = Confidence.HIGH
    elif showdown_hands >= MEDIUM_CONFIDENCE_HANDS:
        confidence = Confidence.MEDIUM
    else:
        confidence = Confidence.LOW

    return TransparencyScore(
        linearity_score=linearity,
        polarization_score=polarization,
        board_texture_score=board_texture,
        t_score=round(linearity * LINEARITY_WEIGHT
                      + polarization * POLARIZATION_WEIGHT
                      + board_texture * BOARD_TEXTURE_WEIGHT),
        confidence=confidence,
        showdown_hands=showdown_hands,
        data_points=list(points),
    )
