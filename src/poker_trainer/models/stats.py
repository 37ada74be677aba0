"""Session report models."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from poker_trainer.models.hand import HandState
from poker_trainer.models.session import Decision
from poker_trainer.models.transparency import TransparencyScore


@dataclass
class ScoreCategory:
    """Correct decisions out of the decisions that fell in one category."""
    score: int = 0
    total: int = 0
    details: List[str] = field(default_factory=list)

    @property
    def accuracy(self) -> float:
        return self.score / self.total * 100 if self.total else 0.0


@dataclass
class ScoreBreakdown:
    preflop_decisions: ScoreCategory = field(default_factory=ScoreCategory)
    postflop_play: ScoreCategory = field(default_factory=ScoreCategory)
    folding_discipline: ScoreCategory = field(default_factory=ScoreCategory)
    value_extraction: ScoreCategory = field(default_factory=ScoreCategory)
    pot_odds_accuracy: ScoreCategory = field(default_factory=ScoreCategory)
    bluff_efficiency: ScoreCategory = field(default_factory=ScoreCategory)

    def as_dict(self) -> Dict[str, ScoreCategory]:
        return {
            "Preflop Decisions": self.preflop_decisions,
            "Postflop Play": self.postflop_play,
            "Folding Discipline": self.folding_discipline,
            "Value Extraction": self.value_extraction,
            "Pot Odds Accuracy": self.pot_odds_accuracy,
            "Bluff Efficiency": self.bluff_efficiency,
        }


@dataclass
class PlayStyle:
    vpip: float = 0.0
    pfr: float = 0.0
    aggression: float = 0.0
    fold_to_bluff: float = 0.0
    bluff_frequency: float = 0.0
    value_frequency: float = 0.0

    def summary_dict(self) -> Dict[str, float]:
        return {
            "VPIP": self.vpip,
            "PFR": self.pfr,
            "Aggression": self.aggression,
            "Fold to Bluff": self.fold_to_bluff,
            "Bluff Frequency": self.bluff_frequency,
            "Value Frequency": self.value_frequency,
        }


@dataclass(frozen=True)
class ArchetypeDimensions:
    tight_loose: str
    aggressive_passive: str
    deceptive_transparent: str


@dataclass(frozen=True)
class PlayerArchetypeInfo:
    """A named player type with coaching text."""
    archetype: str
    abbrev: str
    style: str
    description: str
    advice: str
    dimensions: ArchetypeDimensions


@dataclass
class AnalysisResult:
    """Final report for a finished session."""
    hands_played: int
    profit: float
    target: float
    target_reached: bool
    decisions: List[Decision]
    breakdown: ScoreBreakdown
    overall_score: int
    play_style: PlayStyle
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]
    last_hand: Optional[HandState]
    transparency: TransparencyScore
    archetype: PlayerArchetypeInfo
