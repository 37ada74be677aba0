"""Dealing, hand evaluation, the villain and the hand state machine."""

from poker_trainer.simulation.deck import Deal, Deck, deal_hand, validate_deal
from poker_trainer.simulation.evaluator import (
    HandEvaluation, HandEvaluator, HandRank, Outs,
    calculate_outs, calculate_pot_odds, compare_hands, estimate_equity,
    evaluate, get_preflop_strength,
)
from poker_trainer.simulation.villain import VillainPolicy
from poker_trainer.simulation.engine import HandEngine

__all__ = [
    "Deal", "Deck", "deal_hand", "validate_deal",
    "HandEvaluation", "HandEvaluator", "HandRank", "Outs",
    "calculate_outs", "calculate_pot_odds", "compare_hands", "estimate_equity",
    "evaluate", "get_preflop_strength",
    "VillainPolicy", "HandEngine",
]
