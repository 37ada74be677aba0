"""Plain text formatting for terminal output."""

from typing import List

from poker_trainer.models.action import Street
from poker_trainer.models.hand import HandState, Winner
from poker_trainer.models.session import Decision
from poker_trainer.models.stats import AnalysisResult


class TextFormatter:
    """Format hands, decisions and reports as plain text."""

    def format_hand(self, hand: HandState) -> str:
        """Format a hand and its action log, street by street."""
        lines = []
        lines.append(f"=== Hand #{hand.hand_number} ===")
        lines.append(f"Hero: {hand.hero_cards_str} ({hand.position.value})  |  "
                     f"Pot: ${hand.pot:.0f}  |  Stacks: ${hand.hero_stack:.0f} / "
                     f"${hand.villain_stack:.0f}")

        if hand.board:
            lines.append(f"Board: {hand.board_str}")

        for street in Street:
            street_actions = hand.actions_on_street(street)
            if street_actions:
                lines.append(f"\n  [{street.value.upper()}]")
                for a in street_actions:
                    lines.append(f"    {a}")

        if hand.is_complete and hand.winner is not None:
            lines.append("")
            if hand.winner == Winner.TIE:
                lines.append(f"  Split pot (${hand.pot:.0f})")
            else:
                lines.append(f"  Winner: {hand.winner.value.capitalize()} (${hand.pot:.0f})")

        return "\n".join(lines)

    def format_decision(self, decision: Decision) -> str:
        mark = "OK" if decision.was_optimal else "MISS"
        amount = f" ${decision.bet_amount:.0f}" if decision.bet_amount else ""
        line = (f"[{mark}] Hand {decision.hand_number} {decision.street.value}: "
                f"{decision.action.value}{amount} ({decision.situation})")
        if not decision.was_optimal:
            line += (f"\n       Better: {decision.optimal_action.value} - "
                     f"{decision.reasoning}")
            if decision.ev_impact:
                line += f" (EV {decision.ev_impact:+.0f})"
        return line

    def format_decisions(self, decisions: List[Decision]) -> str:
        if not decisions:
            return "No decisions recorded."
        return "\n".join(self.format_decision(d) for d in decisions)

    def format_analysis_summary(self, result: AnalysisResult) -> str:
        """Format the headline numbers of a session report."""
        lines = []
        lines.append("=== Session Report ===")
        lines.append(f"Hands: {result.hands_played}  |  Profit: ${result.profit:+.0f}  |  "
                     f"Target: ${result.target:.0f} "
                     f"({'reached' if result.target_reached else 'missed'})")
        lines.append(f"Score: {result.overall_score}/100")
        style = result.play_style
        lines.append(f"  VPIP: {style.vpip:5.1f}%   PFR: {style.pfr:5.1f}%   "
                     f"AF: {style.aggression:4.2f}")
        t = result.transparency
        lines.append(f"  T-Score: {t.t_score} ({t.confidence.value} confidence)")
        lines.append(f"  Archetype: {result.archetype.archetype} ({result.archetype.abbrev})")
        return "\n".join(lines)
