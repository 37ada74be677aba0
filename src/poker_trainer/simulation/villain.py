"""Scripted villain: responses to hero aggression and unprompted bets."""

import logging
import random
from typing import Optional

from poker_trainer.models.action import ActionType, Actor, Street
from poker_trainer.models.hand import HandState
from poker_trainer.simulation.evaluator import (
    FLUSH_SCORE, PAIR_SCORE, TWO_PAIR_SCORE,
    HandEvaluator, calculate_pot_odds, get_preflop_strength,
)

logger = logging.getLogger(__name__)

# Preflop response thresholds (villain's preflop strength)
PREFLOP_PREMIUM = 80
PREFLOP_STRONG = 65
PREFLOP_PLAYABLE = 50
PREFLOP_SPECULATIVE = 40
PREFLOP_WEAK = 30

STRONG_RERAISE_CHANCE = 0.3
SPECULATIVE_DEFEND_IP = 0.6
SPECULATIVE_DEFEND_OOP = 0.4
WEAK_DEFEND_IP = 0.35
WEAK_DEFEND_OOP = 0.2
JUNK_BLUFF_RAISE_CHANCE = 0.05
LARGE_RAISE_POT_FRACTION = 0.75

# Postflop continue thresholds (pot odds in percent)
PAIR_MAX_POT_ODDS = 30
DRAW_MAX_POT_ODDS = 20

# Unprompted betting
BET_SIZING = {
    Street.FLOP: 0.5,
    Street.TURN: 0.66,
    Street.RIVER: 0.75,
}
MONSTER_SHOVE_CHANCE = 0.5
STRONG_BET_CHANCE = 0.8
STRONG_RIVER_SHOVE_CHANCE = 0.3
MADE_BET_CHANCE = 0.6
BLUFF_CHANCE = 0.25
BLUFF_RIVER_SHOVE_CHANCE = 0.1


class VillainPolicy:
    """Stochastic opponent that always knows whether it is ahead.

    Every random draw goes through ``rng`` so a seeded generator replays a
    session exactly.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def respond(self, hand: HandState, hero_raise_amount: float) -> ActionType:
        """Decide how villain answers a hero bet or raise.

        Args:
            hand: The hand with hero's chips already in the pot.
            hero_raise_amount: Size of hero's bet, or of the raise on top of
                the amount hero called.

        Returns:
            ActionType.CALL, ActionType.RAISE or ActionType.FOLD.
        """
        if hand.is_preflop:
            action = self._respond_preflop(hand, hero_raise_amount)
        else:
            action = self._respond_postflop(hand, hero_raise_amount)
        logger.debug("Hand #%d villain responds to %.0f on %s: %s",
                     hand.hand_number, hero_raise_amount, hand.street.value, action.value)
        return action

    def _respond_preflop(self, hand: HandState, raise_amount: float) -> ActionType:
        strength = get_preflop_strength(*hand.villain_cards)
        # Villain has position when hero is in the big blind
        villain_in_position = not hand.in_position
        large_raise = raise_amount > hand.pot * LARGE_RAISE_POT_FRACTION

        if strength >= PREFLOP_PREMIUM:
            return ActionType.RAISE
        if strength >= PREFLOP_STRONG:
            if self.rng.random() < STRONG_RERAISE_CHANCE:
                return ActionType.RAISE
            return ActionType.CALL
        if strength >= PREFLOP_PLAYABLE:
            return ActionType.CALL
        if strength >= PREFLOP_SPECULATIVE:
            defend = SPECULATIVE_DEFEND_IP if villain_in_position else SPECULATIVE_DEFEND_OOP
            if self.rng.random() < defend:
                return ActionType.CALL
            return ActionType.FOLD if large_raise else ActionType.CALL
        if strength >= PREFLOP_WEAK:
            defend = WEAK_DEFEND_IP if villain_in_position else WEAK_DEFEND_OOP
            if not large_raise and self.rng.random() < defend:
                return ActionType.CALL
            return ActionType.FOLD
        if self.rng.random() < JUNK_BLUFF_RAISE_CHANCE:
            return ActionType.RAISE
        return ActionType.FOLD

    def _respond_postflop(self, hand: HandState, raise_amount: float) -> ActionType:
        villain = HandEvaluator.evaluate(hand.villain_cards, hand.board)
        hero = HandEvaluator.evaluate(hand.hero_cards, hand.board)
        pot_odds = raise_amount / (hand.pot + raise_amount) * 100 if raise_amount > 0 else 0

        if villain.strength >= hero.strength:
            return ActionType.RAISE if villain.score >= TWO_PAIR_SCORE else ActionType.CALL

        if villain.score >= TWO_PAIR_SCORE:
            return ActionType.CALL
        if villain.score >= PAIR_SCORE and pot_odds <= PAIR_MAX_POT_ODDS:
            return ActionType.CALL
        if villain.score > 0 and pot_odds <= DRAW_MAX_POT_ODDS:
            return ActionType.CALL
        return ActionType.FOLD

    def decide_betting_action(self, hand: HandState) -> HandState:
        """Villain acts first on a new street, betting or checking.

        Returns:
            A new HandState with the bet (or check) applied.
        """
        result = hand.copy()
        villain = HandEvaluator.evaluate(hand.villain_cards, hand.board)
        hero = HandEvaluator.evaluate(hand.hero_cards, hand.board)
        ahead = villain.strength >= hero.strength
        pct = BET_SIZING.get(hand.street, 0.66)
        effective = hand.effective_stack
        is_river = hand.street == Street.RIVER

        should_bet = False
        shove = False
        if villain.score >= FLUSH_SCORE and ahead:
            should_bet = True
            shove = hand.street != Street.FLOP and self.rng.random() < MONSTER_SHOVE_CHANCE
        elif villain.score >= TWO_PAIR_SCORE:
            should_bet = self.rng.random() < STRONG_BET_CHANCE
            shove = is_river and self.rng.random() < STRONG_RIVER_SHOVE_CHANCE
        elif villain.score >= PAIR_SCORE and ahead:
            should_bet = self.rng.random() < MADE_BET_CHANCE
        elif villain.score < PAIR_SCORE and self.rng.random() < BLUFF_CHANCE:
            should_bet = True
            shove = is_river and self.rng.random() < BLUFF_RIVER_SHOVE_CHANCE

        bet = min(effective if shove else round(hand.pot * pct), effective)
        if should_bet and bet > 0:
            all_in = bet >= effective
            text = f"goes all-in ${bet:.0f}" if all_in else f"bets ${bet:.0f}"
            result.to_call = bet
            result.villain_stack -= bet
            result.pot += bet
            result.last_action = f"Villain {text}"
            result.log(hand.street, Actor.VILLAIN, text, amount=bet)
            logger.debug("Hand #%d villain %s on the %s (%s)", hand.hand_number,
                         text, hand.street.value, villain.description)
        else:
            result.to_call = 0
            result.last_action = "Villain checks"
            result.log(hand.street, Actor.VILLAIN, "checks")
        return result
