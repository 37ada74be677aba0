"""Bluff-transparency evidence and scores."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from poker_trainer.models.action import Street
from poker_trainer.models.card import Card


class ScareKind(str, Enum):
    FLUSH = "flush"
    STRAIGHT = "straight"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class BigBet:
    """A hero bet larger than 70% of the pot it went into."""
    street: Street
    amount: float
    pot_before: float
    strength: float


@dataclass(frozen=True)
class ScareCardEvent:
    """A turn or river card that could have completed a flush or straight."""
    street: Street
    card: Card
    kind: ScareKind
    hero_bet_after: bool
    hero_has_it: bool


@dataclass(frozen=True)
class TransparencyDataPoint:
    """One completed hand's evidence."""
    hand_number: int
    hand_strength: float
    investment_ratio: float
    went_to_showdown: bool
    big_bets: List[BigBet] = field(default_factory=list)
    scare_cards: List[ScareCardEvent] = field(default_factory=list)


@dataclass
class TransparencyScore:
    """How readable hero's betting is, 0 (deceptive) to 100 (transparent)."""
    linearity_score: int = 50
    polarization_score: int = 50
    board_texture_score: int = 50
    t_score: int = 50
    confidence: Confidence = Confidence.LOW
    showdown_hands: int = 0
    data_points: List[TransparencyDataPoint] = field(default_factory=list)
