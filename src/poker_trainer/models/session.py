"""Session-level models: graded decisions and the session state."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from poker_trainer.models.action import ActionType, Street
from poker_trainer.models.hand import HandState
from poker_trainer.models.transparency import TransparencyDataPoint


class SessionMode(str, Enum):
    PLAYING = "playing"
    HAND_COMPLETE = "hand-complete"
    SESSION_COMPLETE = "session-complete"


@dataclass(frozen=True)
class Decision:
    """One graded hero action."""
    hand_number: int
    street: Street
    situation: str
    pot: float
    to_call: float
    action: ActionType
    was_optimal: bool
    optimal_action: ActionType
    reasoning: str
    bet_amount: Optional[float] = None
    ev_impact: float = 0.0
    is_marginal: bool = False


@dataclass
class AnalysisGameState:
    """Everything a training session has produced so far."""
    target_profit: float
    starting_stack: float
    current_stack: float
    max_hands: int
    mode: SessionMode = SessionMode.PLAYING
    hands_played: int = 0
    current_hand: Optional[HandState] = None
    decisions: List[Decision] = field(default_factory=list)
    hand_history: List[HandState] = field(default_factory=list)
    transparency_data: List[TransparencyDataPoint] = field(default_factory=list)

    def copy(self, **changes) -> "AnalysisGameState":
        """Return a new state with fresh lists and the given fields replaced."""
        fields = dict(
            decisions=list(self.decisions),
            hand_history=list(self.hand_history),
            transparency_data=list(self.transparency_data),
        )
        fields.update(changes)
        return replace(self, **fields)

    @property
    def profit(self) -> float:
        return self.current_stack - self.starting_stack

    @property
    def target_reached(self) -> bool:
        return self.profit >= self.target_profit

    @property
    def is_complete(self) -> bool:
        return self.mode == SessionMode.SESSION_COMPLETE
