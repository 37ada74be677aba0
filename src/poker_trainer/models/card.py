"""Card, Rank, and Suit models."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Suit(str, Enum):
    SPADES = "s"
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "s": cls.SPADES, "♠": cls.SPADES,
            "h": cls.HEARTS, "♥": cls.HEARTS,
            "d": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "c": cls.CLUBS, "♣": cls.CLUBS,
        }
        key = s if s in mapping else s.lower()
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown suit: {s}")

    @property
    def symbol(self) -> str:
        return {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}[self.value]


_RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
    "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}

_RANK_NAMES = {
    2: ("Two", "Twos"), 3: ("Three", "Threes"), 4: ("Four", "Fours"),
    5: ("Five", "Fives"), 6: ("Six", "Sixes"), 7: ("Seven", "Sevens"),
    8: ("Eight", "Eights"), 9: ("Nine", "Nines"), 10: ("Ten", "Tens"),
    11: ("Jack", "Jacks"), 12: ("Queen", "Queens"), 13: ("King", "Kings"),
    14: ("Ace", "Aces"),
}


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        """2 for a deuce up to 14 for an ace."""
        return _RANK_VALUES[self.value]

    @property
    def index(self) -> int:
        """0 for a deuce up to 12 for an ace."""
        return _RANK_VALUES[self.value] - 2

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        for r in cls:
            if r.value == c.upper():
                return r
        if c == "10":
            return cls.TEN
        raise ValueError(f"Unknown rank: {c}")


def rank_name(value: int, plural: bool = False) -> str:
    """Human-readable name of a numeric rank value (2..14, 1 for a low ace)."""
    if value == 1:
        value = 14
    singular, many = _RANK_NAMES[value]
    return many if plural else singular


@dataclass(frozen=True)
class Card:
    """A single playing card, written as a two-character token like 'Ah'."""

    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '2c'."""
        s = s.strip()
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise ValueError(f"Cannot parse card: {s}")

    @property
    def value(self) -> int:
        return self.rank.numeric_value

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def to_short(self) -> str:
        """Return short string like 'Ah'."""
        return f"{self.rank.value}{self.suit.value}"


def parse_cards(tokens: Iterable[str]) -> List[Card]:
    """Parse several tokens, accepting either a list or one space-separated string."""
    if isinstance(tokens, str):
        tokens = tokens.split()
    return [Card.parse(t) for t in tokens]


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]
