"""Grading, transparency scoring and session reports."""

from poker_trainer.analysis.oracle import OptimalAction, get_optimal_action
from poker_trainer.analysis.transparency import calculate_score, collect_data_point
from poker_trainer.analysis.archetypes import classify_player
from poker_trainer.analysis.session_analyzer import SessionAnalyzer, generate_analysis

__all__ = [
    "OptimalAction", "get_optimal_action",
    "calculate_score", "collect_data_point",
    "classify_player",
    "SessionAnalyzer", "generate_analysis",
]
