"""Action, Street and action-log models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from poker_trainer.models.card import Card


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"

    @property
    def order(self) -> int:
        return ["preflop", "flop", "turn", "river", "showdown"].index(self.value)

    @property
    def board_size(self) -> int:
        """Number of board cards visible on this street."""
        return {"preflop": 0, "flop": 3, "turn": 4, "river": 5, "showdown": 5}[self.value]

    @property
    def next_street(self) -> "Street":
        if self == Street.SHOWDOWN:
            return self
        return list(Street)[self.order + 1]


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionType.BET, ActionType.RAISE)

    @property
    def is_voluntary(self) -> bool:
        return self != ActionType.FOLD

    @classmethod
    def parse(cls, s: str) -> "ActionType":
        try:
            return cls(s.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown action: {s} (expected one of {', '.join(a.value for a in cls)})"
            ) from None


class Actor(str, Enum):
    HERO = "hero"
    VILLAIN = "villain"
    DEALER = "dealer"


@dataclass(frozen=True)
class ActionEntry:
    """One line of a hand's action log."""
    street: Street
    actor: Actor
    action: str
    amount: Optional[float] = None
    cards: List[Card] = field(default_factory=list)

    def __str__(self) -> str:
        text = f"{self.actor.value.capitalize()} {self.action}"
        if self.cards:
            text += " " + " ".join(str(c) for c in self.cards)
        return text
