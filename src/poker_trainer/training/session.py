"""Training session: a run of hands against the villain, every action graded."""

import logging
import random
from typing import Optional, Union

from poker_trainer import config
from poker_trainer.analysis.oracle import ev_impact, get_optimal_action, matches
from poker_trainer.analysis.transparency import collect_data_point
from poker_trainer.exceptions import (
    DealIntegrityError, DuplicateCardsError, InvalidActionError,
)
from poker_trainer.models.action import ActionType
from poker_trainer.models.position import Position
from poker_trainer.models.session import AnalysisGameState, Decision, SessionMode
from poker_trainer.simulation.deck import Deal, Deck, deal_hand
from poker_trainer.simulation.engine import HandEngine
from poker_trainer.simulation.villain import VillainPolicy

logger = logging.getLogger(__name__)

MAX_REDEALS = 10


class SessionController:
    """Deals hands, feeds hero's actions to the engine and keeps the log.

    All methods return a new AnalysisGameState; the state passed in is left
    as it was. One controller owns one random stream, so sessions run in
    parallel need a controller each.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 deck: Optional[Deck] = None,
                 engine: Optional[HandEngine] = None):
        self.rng = rng or random.Random(config.RANDOM_SEED)
        self.deck = deck or Deck(self.rng)
        self.engine = engine or HandEngine(VillainPolicy(self.rng))

    def create_session(self, target_profit: float = config.DEFAULT_TARGET_PROFIT,
                       starting_stack: float = config.DEFAULT_STARTING_STACK,
                       max_hands: int = config.DEFAULT_MAX_HANDS) -> AnalysisGameState:
        """Start a session. No hand is dealt until deal_new_hand is called."""
        if starting_stack <= 0:
            raise InvalidActionError(f"Starting stack must be positive, got {starting_stack}")
        if max_hands < 1:
            raise InvalidActionError(f"Max hands must be at least 1, got {max_hands}")
        logger.debug("New session: stack %.0f, target %.0f, %d hands",
                     starting_stack, target_profit, max_hands)
        return AnalysisGameState(
            target_profit=target_profit,
            starting_stack=starting_stack,
            current_stack=starting_stack,
            max_hands=max_hands,
        )

    def deal_new_hand(self, state: AnalysisGameState) -> AnalysisGameState:
        """Deal the next hand and post the blinds from hero's stack.

        Raises:
            InvalidActionError: if a hand is still running or the session
                is over.
        """
        if state.is_complete:
            raise InvalidActionError("Session is complete")
        if state.current_hand is not None and not state.current_hand.is_complete:
            raise InvalidActionError(
                f"Hand #{state.current_hand.hand_number} is still in progress"
            )

        position = Position.for_hand(state.hands_played)
        hand = self.engine.new_hand(
            hand_number=state.hands_played + 1,
            deal=self._deal(),
            position=position,
            hero_stack=state.current_stack,
            villain_stack=state.starting_stack,
        )
        return state.copy(
            mode=SessionMode.PLAYING,
            current_hand=hand,
            current_stack=hand.hero_stack,
        )

    def _deal(self) -> Deal:
        for attempt in range(1, MAX_REDEALS + 1):
            try:
                return deal_hand(self.deck)
            except DuplicateCardsError as e:
                logger.warning("Deal attempt %d rejected (%s); redealing", attempt, e)
        raise DealIntegrityError(f"No valid deal after {MAX_REDEALS} attempts")

    def process_action(self, state: AnalysisGameState,
                       action: Union[ActionType, str],
                       bet_amount: Optional[float] = None) -> AnalysisGameState:
        """Grade hero's action, play it out and record the decision.

        Raises:
            InvalidActionError: if there is no hand in progress or the
                engine rejects the action.
        """
        hand = state.current_hand
        if hand is None or hand.is_complete:
            raise InvalidActionError("No hand in progress")
        if not isinstance(action, ActionType):
            try:
                action = ActionType.parse(action)
            except ValueError as e:
                raise InvalidActionError(str(e)) from None

        optimal = get_optimal_action(hand)
        played = self.engine.apply_hero_action(hand, action, bet_amount)

        decision = Decision(
            hand_number=hand.hand_number,
            street=hand.street,
            situation=f"Pot: ${hand.pot:.0f}, To Call: ${hand.to_call:.0f}",
            pot=hand.pot,
            to_call=hand.to_call,
            action=action,
            bet_amount=bet_amount,
            was_optimal=matches(action, optimal.action, hand.to_call),
            optimal_action=optimal.action,
            reasoning=optimal.reasoning,
            ev_impact=ev_impact(action, optimal.action, hand.pot, hand.to_call),
            is_marginal=optimal.is_marginal,
        )
        decisions = state.decisions + [decision]

        if not played.is_complete:
            return state.copy(
                mode=SessionMode.PLAYING,
                current_hand=played,
                current_stack=played.hero_stack,
                decisions=decisions,
            )

        hand_decisions = [d for d in decisions if d.hand_number == played.hand_number]
        hands_played = state.hands_played + 1
        if hands_played >= state.max_hands or played.hero_stack <= 0:
            mode = SessionMode.SESSION_COMPLETE
        else:
            mode = SessionMode.HAND_COMPLETE
        logger.debug("Hand #%d complete: winner %s, hero stack %.0f", played.hand_number,
                     played.winner.value if played.winner else "none", played.hero_stack)

        return state.copy(
            mode=mode,
            hands_played=hands_played,
            current_hand=None,
            current_stack=played.hero_stack,
            decisions=decisions,
            hand_history=state.hand_history + [played],
            transparency_data=state.transparency_data
            + [collect_data_point(played, hand_decisions)],
        )


def run_autopilot(controller: SessionController,
                  target_profit: float = config.DEFAULT_TARGET_PROFIT,
                  starting_stack: float = config.DEFAULT_STARTING_STACK,
                  max_hands: int = config.DEFAULT_MAX_HANDS) -> AnalysisGameState:
    """Play a whole session taking the recommended action every time."""
    state = controller.create_session(target_profit, starting_stack, max_hands)
    while not state.is_complete:
        state = controller.deal_new_hand(state)
        while state.current_hand is not None:
            hand = state.current_hand
            action = get_optimal_action(hand).action
            if action.is_aggressive and hand.hero_stack <= hand.to_call:
                action = ActionType.CALL
            state = controller.process_action(state, action)
    return state
