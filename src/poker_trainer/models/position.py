"""Heads-up table positions."""

from enum import Enum


class Position(str, Enum):
    """Hero's seat. The button posts the small blind and acts last postflop."""
    BTN = "BTN"
    BB = "BB"

    @property
    def is_in_position(self) -> bool:
        return self == Position.BTN

    @classmethod
    def for_hand(cls, hands_played: int) -> "Position":
        """Hero alternates seats, starting on the button."""
        return cls.BTN if hands_played % 2 == 0 else cls.BB
