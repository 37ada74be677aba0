"""Deck management and dealing."""

import random
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional

from poker_trainer.exceptions import DuplicateCardsError
from poker_trainer.models.card import Card, full_deck


class Deck:
    """A standard 52-card deck shuffled with an injectable random source."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize a new deck with all 52 cards.

        Args:
            rng: Random source used for shuffling. A fresh unseeded
                generator is used when omitted.
        """
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self._reset()

    def _reset(self):
        """Reset the deck to all 52 cards."""
        self.cards = full_deck()

    def shuffle(self):
        """Shuffle the deck in place (Fisher-Yates)."""
        for i in range(len(self.cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the top of the deck.

        Args:
            count: Number of cards to deal.

        Returns:
            List of dealt cards.
        """
        if count > len(self.cards):
            raise ValueError(f"Not enough cards in deck. Need {count}, have {len(self.cards)}")

        dealt = self.cards[:count]
        self.cards = self.cards[count:]
        return dealt

    def reset(self):
        """Reset and shuffle the deck."""
        self._reset()
        self.shuffle()

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self.cards)})"


@dataclass(frozen=True)
class Deal:
    """The cards for one heads-up hand."""
    hero_cards: List[Card]
    villain_cards: List[Card]
    board: List[Card]

    @property
    def all_cards(self) -> List[Card]:
        return self.hero_cards + self.villain_cards + self.board


def validate_deal(deal: Deal) -> None:
    """Raise DuplicateCardsError if any card appears twice in the deal."""
    counts = Counter(deal.all_cards)
    duplicates = [card for card, n in counts.items() if n > 1]
    if duplicates:
        raise DuplicateCardsError(duplicates)


def deal_hand(deck: Deck) -> Deal:
    """Reshuffle the deck and deal hero, villain and the full board.

    Raises:
        DuplicateCardsError: if the dealt cards are not pairwise distinct.
    """
    deck.reset()
    deal = Deal(
        hero_cards=deck.deal(2),
        villain_cards=deck.deal(2),
        board=deck.deal(5),
    )
    validate_deal(deal)
    return deal
