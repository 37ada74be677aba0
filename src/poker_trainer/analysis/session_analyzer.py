"""Session report: category scores, play style, feedback and archetype."""

from typing import Dict, List, Optional

from poker_trainer.analysis.archetypes import classify_player
from poker_trainer.analysis.transparency import calculate_score
from poker_trainer.models.action import ActionType, Actor, Street
from poker_trainer.models.hand import HandState
from poker_trainer.models.session import AnalysisGameState, Decision
from poker_trainer.models.stats import AnalysisResult, PlayStyle, ScoreBreakdown, ScoreCategory
from poker_trainer.simulation.evaluator import HandEvaluator

# Feedback thresholds
STRONG_PREFLOP_ACCURACY = 80
GOOD_OVERALL_SCORE = 70
LOOSE_VPIP = 60
TIGHT_VPIP = 25


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100) if whole else 0.0


def _category(decisions: List[Decision], correct) -> ScoreCategory:
    """Score decisions with ``correct`` and note the ones that missed."""
    category = ScoreCategory(total=len(decisions))
    for d in decisions:
        if correct(d):
            category.score += 1
        else:
            category.details.append(f"Hand {d.hand_number}: {d.reasoning}")
    return category


class SessionAnalyzer:
    """Turn a finished session into an AnalysisResult."""

    def analyze(self, state: AnalysisGameState) -> AnalysisResult:
        decisions = list(state.decisions)
        hands = {h.hand_number: h for h in state.hand_history}

        breakdown = self.score_breakdown(decisions, hands)
        optimal = sum(1 for d in decisions if d.was_optimal)
        overall = round(optimal / len(decisions) * 100) if decisions else 0
        play_style = self.play_style(decisions, state.hand_history)
        strengths, weaknesses, recommendations = self.feedback(breakdown, overall, play_style)

        transparency = calculate_score(state.transparency_data)
        archetype = classify_player(play_style, transparency.t_score)

        return AnalysisResult(
            hands_played=state.hands_played,
            profit=state.profit,
            target=state.target_profit,
            target_reached=state.target_reached,
            decisions=decisions,
            breakdown=breakdown,
            overall_score=overall,
            play_style=play_style,
            strengths=strengths,
            weaknesses=weaknesses,
            recommendations=recommendations,
            last_hand=state.hand_history[-1] if state.hand_history else None,
            transparency=transparency,
            archetype=archetype,
        )

    def score_breakdown(self, decisions: List[Decision],
                        hands: Dict[int, HandState]) -> ScoreBreakdown:
        preflop = [d for d in decisions if d.street == Street.PREFLOP]
        postflop = [d for d in decisions if d.street != Street.PREFLOP]
        folds = [d for d in decisions if d.action == ActionType.FOLD]
        aggressive = [d for d in decisions if d.action.is_aggressive]
        calls = [d for d in decisions if d.action == ActionType.CALL]
        bluffs = [d for d in aggressive if not d.optimal_action.is_aggressive]

        def bluff_worked(d: Decision) -> bool:
            hand = hands.get(d.hand_number)
            return hand is not None and hand.villain_folded

        breakdown = ScoreBreakdown(
            preflop_decisions=_category(preflop, lambda d: d.was_optimal),
            postflop_play=_category(postflop, lambda d: d.was_optimal),
            folding_discipline=_category(folds, lambda d: d.was_optimal),
            value_extraction=_category(aggressive, lambda d: d.was_optimal),
            pot_odds_accuracy=_category(calls, lambda d: d.was_optimal),
            bluff_efficiency=ScoreCategory(total=len(bluffs)),
        )
        for d in bluffs:
            if bluff_worked(d):
                breakdown.bluff_efficiency.score += 1
            else:
                breakdown.bluff_efficiency.details.append(
                    f"Hand {d.hand_number}: {d.action.value} on the {d.street.value} got called"
                )
        return breakdown

    def play_style(self, decisions: List[Decision], history: List[HandState]) -> PlayStyle:
        preflop = [d for d in decisions if d.street == Street.PREFLOP]
        voluntary = sum(1 for d in preflop if d.action.is_voluntary)
        raises = sum(1 for d in preflop if d.action.is_aggressive)

        aggressive = [d for d in decisions if d.action.is_aggressive]
        calls = sum(1 for d in decisions if d.action == ActionType.CALL)
        value = sum(1 for d in aggressive if d.optimal_action.is_aggressive)

        bluffs_faced, folded = self._villain_bluffs(history)

        return PlayStyle(
            vpip=_percent(voluntary, len(preflop)),
            pfr=_percent(raises, len(preflop)),
            aggression=round(len(aggressive) / max(calls, 1), 2),
            fold_to_bluff=_percent(folded, bluffs_faced),
            bluff_frequency=_percent(len(aggressive) - value, len(aggressive)),
            value_frequency=_percent(value, len(aggressive)),
        )

    def _villain_bluffs(self, history: List[HandState]):
        """Count villain bets made while behind, and how many hero folded to."""
        faced = 0
        folded = 0
        for hand in history:
            log = hand.action_log
            for i, entry in enumerate(log):
                if entry.actor != Actor.VILLAIN or entry.street == Street.PREFLOP:
                    continue
                if not (entry.action.startswith("bets") or entry.action.startswith("goes all-in")):
                    continue
                board = hand.full_board[:entry.street.board_size]
                villain = HandEvaluator.evaluate(hand.villain_cards, board)
                hero = HandEvaluator.evaluate(hand.hero_cards, board)
                if villain.strength >= hero.strength:
                    continue
                faced += 1
                reply = self._next_hero_action(log[i + 1:], entry.street)
                if reply == "folds":
                    folded += 1
        return faced, folded

    @staticmethod
    def _next_hero_action(entries, street: Street) -> Optional[str]:
        for entry in entries:
            if entry.street != street:
                return None
            if entry.actor == Actor.HERO:
                return entry.action
        return None

    def feedback(self, breakdown: ScoreBreakdown, overall: int, style: PlayStyle):
        strengths: List[str] = []
        weaknesses: List[str] = []
        recommendations: List[str] = []

        if breakdown.preflop_decisions.accuracy >= STRONG_PREFLOP_ACCURACY:
            strengths.append("Strong preflop decision-making")
        else:
            weaknesses.append("Preflop decisions need work")
            recommendations.append("Review starting hand selection and position-based ranges")

        if overall >= GOOD_OVERALL_SCORE:
            strengths.append("Good overall decision quality")
        else:
            weaknesses.append("Many suboptimal decisions")
            recommendations.append("Focus on pot odds calculation before calling")

        if style.vpip > LOOSE_VPIP:
            weaknesses.append("Playing too many hands (loose)")
            recommendations.append("Tighten up your preflop range")
        elif style.vpip < TIGHT_VPIP:
            weaknesses.append("Playing too few hands (tight)")
            recommendations.append("Look for more opportunities to play in position")
        else:
            strengths.append("Balanced hand selection")

        return strengths, weaknesses, recommendations


def generate_analysis(state: AnalysisGameState) -> AnalysisResult:
    """Build the final report for a session."""
    return SessionAnalyzer().analyze(state)
