"""Data models for the training engine."""

from poker_trainer.models.card import Card, Rank, Suit
from poker_trainer.models.action import ActionType, Actor, ActionEntry, Street
from poker_trainer.models.position import Position
from poker_trainer.models.hand import HandState, Winner
from poker_trainer.models.transparency import (
    BigBet, Confidence, ScareCardEvent, ScareKind,
    TransparencyDataPoint, TransparencyScore,
)
from poker_trainer.models.session import AnalysisGameState, Decision, SessionMode
from poker_trainer.models.stats import (
    AnalysisResult, ArchetypeDimensions, PlayerArchetypeInfo,
    PlayStyle, ScoreBreakdown, ScoreCategory,
)

__all__ = [
    "Card", "Rank", "Suit",
    "ActionType", "Actor", "ActionEntry", "Street",
    "Position",
    "HandState", "Winner",
    "BigBet", "Confidence", "ScareCardEvent", "ScareKind",
    "TransparencyDataPoint", "TransparencyScore",
    "AnalysisGameState", "Decision", "SessionMode",
    "AnalysisResult", "ArchetypeDimensions", "PlayerArchetypeInfo",
    "PlayStyle", "ScoreBreakdown", "ScoreCategory",
]
