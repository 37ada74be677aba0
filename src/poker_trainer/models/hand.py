"""HandState - the record of one heads-up hand."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from poker_trainer.models.card import Card
from poker_trainer.models.action import ActionEntry, Actor, Street
from poker_trainer.models.position import Position


class Winner(str, Enum):
    HERO = "hero"
    VILLAIN = "villain"
    TIE = "tie"


@dataclass
class HandState:
    """One hand from the deal to the payout.

    The full board is fixed at deal time; ``board`` is the part of it that
    has been revealed. Transitions never modify a HandState they were given,
    they work on a ``copy()`` and return it.
    """

    hand_number: int
    hero_cards: List[Card]
    villain_cards: List[Card]
    full_board: List[Card]
    position: Position
    hero_stack: float
    villain_stack: float
    pot: float = 0.0
    board: List[Card] = field(default_factory=list)
    street: Street = Street.PREFLOP
    to_call: float = 0.0
    last_action: str = ""
    is_complete: bool = False
    winner: Optional[Winner] = None
    action_log: List[ActionEntry] = field(default_factory=list)
    hero_invested: float = 0.0

    def copy(self) -> "HandState":
        """Return a copy whose lists can be changed without touching this one."""
        return replace(
            self,
            hero_cards=list(self.hero_cards),
            villain_cards=list(self.villain_cards),
            full_board=list(self.full_board),
            board=list(self.board),
            action_log=list(self.action_log),
        )

    @property
    def in_position(self) -> bool:
        return self.position.is_in_position

    @property
    def effective_stack(self) -> float:
        return min(self.hero_stack, self.villain_stack)

    @property
    def is_preflop(self) -> bool:
        return self.street == Street.PREFLOP

    def log(self, street: Street, actor: Actor, action: str,
            amount: Optional[float] = None,
            cards: Optional[List[Card]] = None) -> None:
        self.action_log.append(
            ActionEntry(street=street, actor=actor, action=action,
                        amount=amount, cards=list(cards or []))
        )

    def actions_on_street(self, street: Street) -> List[ActionEntry]:
        return [a for a in self.action_log if a.street == street]

    def hero_actions(self) -> List[ActionEntry]:
        return [a for a in self.action_log if a.actor == Actor.HERO]

    @property
    def hero_folded(self) -> bool:
        return any(a.action == "folds" for a in self.hero_actions())

    @property
    def villain_folded(self) -> bool:
        return any(a.actor == Actor.VILLAIN and a.action == "folds"
                   for a in self.action_log)

    @property
    def board_str(self) -> str:
        return " ".join(str(c) for c in self.board) if self.board else ""

    @property
    def hero_cards_str(self) -> str:
        return " ".join(str(c) for c in self.hero_cards)

    @property
    def villain_cards_str(self) -> str:
        return " ".join(str(c) for c in self.villain_cards)
