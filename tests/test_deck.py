"""Tests for the deck and deal integrity."""

import random

import pytest

from poker_trainer.exceptions import DuplicateCardsError
from poker_trainer.models.card import Card, full_deck, parse_cards
from poker_trainer.simulation.deck import Deal, Deck, deal_hand, validate_deal


class TestCard:
    """Tests for card parsing."""

    def test_parse(self):
        card = Card.parse("Ah")
        assert card.value == 14
        assert repr(card) == "Ah"
        assert card.to_short() == "Ah"

    def test_parse_ten(self):
        assert Card.parse("10s") == Card.parse("Ts")

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            Card.parse("Xx")
        with pytest.raises(ValueError):
            Card.parse("A")

    def test_parse_cards_from_string(self):
        assert parse_cards("Ah Kd") == [Card.parse("Ah"), Card.parse("Kd")]
        assert parse_cards("") == []

    def test_full_deck(self):
        deck = full_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52


class TestDeck:
    """Tests for Deck."""

    def test_deck_has_52_cards(self):
        assert len(Deck()) == 52

    def test_deal_cards(self):
        """Test dealing cards from the deck."""
        deck = Deck(random.Random(1))
        deck.reset()
        cards = deck.deal(5)
        assert len(cards) == 5
        assert deck.remaining == 47
        assert not set(cards) & set(deck.cards)

    def test_deal_too_many(self):
        deck = Deck()
        deck.deal(50)
        with pytest.raises(ValueError):
            deck.deal(3)

    def test_reset_restores_full_deck(self):
        deck = Deck(random.Random(2))
        deck.deal(10)
        deck.reset()
        assert deck.remaining == 52
        assert set(deck.cards) == set(full_deck())

    def test_seeded_shuffle_repeats(self):
        a = Deck(random.Random(42))
        b = Deck(random.Random(42))
        a.reset()
        b.reset()
        assert a.cards == b.cards

    def test_shuffle_changes_order(self):
        deck = Deck(random.Random(5))
        deck.reset()
        assert deck.cards != full_deck()


class TestDealHand:
    """Tests for deal_hand and validate_deal."""

    def test_deal_sizes(self):
        deal = deal_hand(Deck(random.Random(3)))
        assert len(deal.hero_cards) == 2
        assert len(deal.villain_cards) == 2
        assert len(deal.board) == 5

    def test_deals_never_repeat_a_card(self):
        """Test 10,000 deals all have nine distinct cards."""
        deck = Deck(random.Random(7))
        for _ in range(10000):
            deal = deal_hand(deck)
            assert len(set(deal.all_cards)) == 9

    def test_validate_deal_accepts_distinct_cards(self):
        deal = Deal(parse_cards("Ah Kh"), parse_cards("2c 3c"), parse_cards("4d 5d 6d 7d 8d"))
        validate_deal(deal)

    def test_validate_deal_rejects_duplicates(self):
        deal = Deal(parse_cards("Ah Kh"), parse_cards("Ah 3c"), parse_cards("4d 5d 6d 7d 8d"))
        with pytest.raises(DuplicateCardsError) as exc:
            validate_deal(deal)
        assert exc.value.duplicates == [Card.parse("Ah")]
        assert "Ah" in str(exc.value)
