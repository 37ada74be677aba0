"""Hand state machine: blinds, hero actions, street changes and showdown."""

import logging
from typing import Optional, Union

from poker_trainer import config
from poker_trainer.exceptions import InvalidActionError
from poker_trainer.models.action import ActionType, Actor, Street
from poker_trainer.models.hand import HandState, Winner
from poker_trainer.models.position import Position
from poker_trainer.simulation.deck import Deal
from poker_trainer.simulation.evaluator import HandEvaluator
from poker_trainer.simulation.villain import VillainPolicy

logger = logging.getLogger(__name__)


def _money(amount: float) -> str:
    return f"${amount:.0f}"


class HandEngine:
    """Runs one hand at a time against a VillainPolicy.

    Every public method takes a HandState and returns a new one; the input
    snapshot is never modified.
    """

    def __init__(self, villain: Optional[VillainPolicy] = None,
                 small_blind: float = config.SMALL_BLIND,
                 big_blind: float = config.BIG_BLIND,
                 bet_fraction: float = config.DEFAULT_BET_FRACTION):
        self.villain = villain or VillainPolicy()
        self.small_blind = small_blind
        self.big_blind = big_blind
        self.bet_fraction = bet_fraction

    def new_hand(self, hand_number: int, deal: Deal, position: Position,
                 hero_stack: float, villain_stack: float) -> HandState:
        """Seat both players and post the blinds.

        The button posts the small blind and acts first preflop; the big
        blind can check when the button only completes.
        """
        hero_blind = self.small_blind if position == Position.BTN else self.big_blind
        villain_blind = self.big_blind if position == Position.BTN else self.small_blind
        hero_blind = min(hero_blind, hero_stack)
        villain_blind = min(villain_blind, villain_stack)

        hand = HandState(
            hand_number=hand_number,
            hero_cards=list(deal.hero_cards),
            villain_cards=list(deal.villain_cards),
            full_board=list(deal.board),
            position=position,
            hero_stack=hero_stack - hero_blind,
            villain_stack=villain_stack - villain_blind,
            pot=hero_blind + villain_blind,
            hero_invested=hero_blind,
        )
        hand.to_call = min(max(villain_blind - hero_blind, 0), hand.hero_stack)

        if position == Position.BTN:
            hand.log(Street.PREFLOP, Actor.HERO, f"posts SB {_money(hero_blind)}", amount=hero_blind)
            hand.log(Street.PREFLOP, Actor.VILLAIN, f"posts BB {_money(villain_blind)}",
                     amount=villain_blind)
        else:
            hand.log(Street.PREFLOP, Actor.VILLAIN, f"posts SB {_money(villain_blind)}",
                     amount=villain_blind)
            hand.log(Street.PREFLOP, Actor.HERO, f"posts BB {_money(hero_blind)}", amount=hero_blind)

        logger.debug("Hand #%d dealt: hero %s (%s), villain %s", hand_number,
                     hand.hero_cards_str, position.value, hand.villain_cards_str)
        return hand

    def apply_hero_action(self, hand: HandState, action: Union[ActionType, str],
                          bet_amount: Optional[float] = None) -> HandState:
        """Apply hero's action, let villain answer and move the hand on.

        Args:
            hand: Current snapshot. Must not be complete.
            action: fold, check, call, bet or raise.
            bet_amount: Size of a bet, or of a raise on top of the call.
                Defaults to a fraction of the pot.

        Returns:
            The next snapshot. It is complete if hero folded, villain
            folded, or the hand reached showdown.

        Raises:
            InvalidActionError: if the hand is over or the action or amount
                is not allowed.
        """
        if hand.is_complete:
            raise InvalidActionError(f"Hand #{hand.hand_number} is already complete")
        if not isinstance(action, ActionType):
            try:
                action = ActionType.parse(action)
            except ValueError as e:
                raise InvalidActionError(str(e)) from None

        h = hand.copy()
        if action == ActionType.FOLD:
            h.log(h.street, Actor.HERO, "folds")
            return self._award(h, Winner.VILLAIN)
        if action in (ActionType.CHECK, ActionType.CALL):
            if action == ActionType.CHECK and h.to_call > 0:
                raise InvalidActionError(f"Cannot check facing a bet of {_money(h.to_call)}")
            return self._check_or_call(h)
        return self._bet_or_raise(h, bet_amount)

    def _check_or_call(self, h: HandState) -> HandState:
        street = h.street
        pay = min(h.to_call, h.hero_stack)
        if pay <= 0:
            h.to_call = 0
            h.log(street, Actor.HERO, "checks")
            return self._next_street(h)

        uncalled = h.to_call - pay
        if uncalled > 0:
            h.villain_stack += uncalled
            h.pot -= uncalled
            h.log(street, Actor.DEALER, f"returns uncalled {_money(uncalled)} to villain",
                  amount=-uncalled)

        h.hero_stack -= pay
        h.pot += pay
        h.hero_invested += pay
        h.to_call = 0
        calling_all_in = h.hero_stack <= 0 or h.villain_stack <= 0
        text = f"calls all-in {_money(pay)}" if calling_all_in else f"calls {_money(pay)}"
        h.log(street, Actor.HERO, text, amount=pay)

        if calling_all_in:
            return self._showdown(h)
        return self._next_street(h)

    def _bet_or_raise(self, h: HandState, bet_amount: Optional[float]) -> HandState:
        street = h.street
        behind = h.hero_stack - h.to_call
        if bet_amount is None:
            raise_amount = min(round(h.pot * self.bet_fraction), behind)
        else:
            if bet_amount < 0:
                raise InvalidActionError(f"Bet amount cannot be negative: {bet_amount}")
            if bet_amount > behind:
                raise InvalidActionError(
                    f"Cannot bet {_money(bet_amount)} with {_money(behind)} behind after calling"
                )
            raise_amount = bet_amount
        if raise_amount <= 0:
            raise InvalidActionError("Bet or raise must be greater than zero")

        is_bet = h.to_call == 0
        all_in = raise_amount >= min(behind, h.villain_stack)
        total = h.to_call + raise_amount
        if all_in:
            text = f"goes all-in {_money(raise_amount if is_bet else total)}"
        elif is_bet:
            text = f"bets {_money(raise_amount)}"
        else:
            text = f"raises to {_money(total)}"

        h.hero_stack -= total
        h.pot += total
        h.hero_invested += total
        h.to_call = 0
        h.log(street, Actor.HERO, text, amount=total)

        if h.villain_stack <= 0:
            response = ActionType.CALL
        else:
            response = self.villain.respond(h, raise_amount)
        if response == ActionType.FOLD:
            h.last_action = "Villain folds"
            h.log(street, Actor.VILLAIN, "folds")
            return self._award(h, Winner.HERO)

        # A villain raise is settled as a call; the street still closes.
        call = min(raise_amount, h.villain_stack)
        h.villain_stack -= call
        h.pot += call
        villain_all_in = all_in or h.villain_stack <= 0
        text = f"calls all-in {_money(call)}" if villain_all_in else f"calls {_money(call)}"
        h.last_action = f"Villain {text}"
        h.log(street, Actor.VILLAIN, text, amount=call)

        uncalled = raise_amount - call
        if uncalled > 0:
            h.hero_stack += uncalled
            h.pot -= uncalled
            h.hero_invested -= uncalled
            h.log(street, Actor.DEALER, f"returns uncalled {_money(uncalled)} to hero",
                  amount=-uncalled)

        if villain_all_in or h.hero_stack <= 0:
            return self._showdown(h)
        return self._next_street(h)

    def _next_street(self, h: HandState) -> HandState:
        if h.street == Street.RIVER:
            return self._showdown(h)
        street = h.street.next_street
        new_cards = h.full_board[len(h.board):street.board_size]
        h.street = street
        h.board = h.full_board[:street.board_size]
        h.log(street, Actor.DEALER, f"deals {street.value}", cards=new_cards)
        logger.debug("Hand #%d %s: %s", h.hand_number, street.value, h.board_str)
        return self.villain.decide_betting_action(h)

    def _showdown(self, h: HandState) -> HandState:
        remaining = h.full_board[len(h.board):]
        h.street = Street.SHOWDOWN
        h.board = list(h.full_board)
        if remaining:
            h.log(Street.SHOWDOWN, Actor.DEALER, "runs out the board", cards=remaining)

        hero = HandEvaluator.evaluate(h.hero_cards, h.board)
        villain = HandEvaluator.evaluate(h.villain_cards, h.board)
        winner = HandEvaluator.compare_hands(h.hero_cards, h.villain_cards, h.board)
        h.log(Street.SHOWDOWN, Actor.HERO, f"shows {hero.description}", cards=h.hero_cards)
        h.log(Street.SHOWDOWN, Actor.VILLAIN, f"shows {villain.description}",
              cards=h.villain_cards)
        logger.debug("Hand #%d showdown: hero %s vs villain %s -> %s", h.hand_number,
                     hero.description, villain.description, winner.value)
        return self._award(h, winner)

    def _award(self, h: HandState, winner: Winner) -> HandState:
        if winner == Winner.HERO:
            h.hero_stack += h.pot
        elif winner == Winner.VILLAIN:
            h.villain_stack += h.pot
        else:
            h.hero_stack += h.pot / 2
            h.villain_stack += h.pot / 2
        h.winner = winner
        h.is_complete = True
        h.to_call = 0
        return h
