"""Rich table formatting for terminal output."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from poker_trainer.models.hand import HandState, Winner
from poker_trainer.models.session import AnalysisGameState
from poker_trainer.models.stats import AnalysisResult
from poker_trainer.simulation.evaluator import HandEvaluation, Outs


class TableFormatter:
    """Format hands and session reports as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_hand_state(self, hand: HandState) -> None:
        """Print the table as hero sees it."""
        table = Table(title=f"Hand #{hand.hand_number}", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Street", hand.street.value.capitalize())
        table.add_row("Position", hand.position.value)
        table.add_row("Your cards", hand.hero_cards_str)
        table.add_row("Board", hand.board_str or "-")
        table.add_row("Pot", f"${hand.pot:.0f}")
        table.add_row("To call", f"${hand.to_call:.0f}")
        table.add_row("Stacks", f"You ${hand.hero_stack:.0f}  |  Villain ${hand.villain_stack:.0f}")
        if hand.last_action:
            table.add_row("Last action", hand.last_action)

        self.console.print(table)

    def print_hand_result(self, hand: HandState) -> None:
        if hand.winner == Winner.HERO:
            style, text = "green", f"You win ${hand.pot:.0f}"
        elif hand.winner == Winner.VILLAIN:
            style, text = "red", f"Villain wins ${hand.pot:.0f}"
        else:
            style, text = "yellow", f"Split pot ${hand.pot:.0f}"

        body = f"Board: {hand.board_str or '-'}\nVillain: {hand.villain_cards_str}"
        self.console.print(Panel(body, title=f"[bold {style}]{text}[/bold {style}]"))

    def print_session_status(self, state: AnalysisGameState) -> None:
        profit = state.profit
        style = "green" if profit >= 0 else "red"
        self.console.print(
            f"[dim]Hands {state.hands_played}/{state.max_hands}  |  "
            f"Stack ${state.current_stack:.0f}  |  [/dim]"
            f"[{style}]Profit ${profit:+.0f}[/{style}]"
            f"[dim] (target ${state.target_profit:.0f})[/dim]"
        )

    def print_evaluation(self, evaluation: HandEvaluation, preflop_strength: float,
                         outs: Outs) -> None:
        table = Table(title="Hand Evaluation", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Hand", evaluation.description)
        table.add_row("Category", evaluation.rank_name)
        table.add_row("Score", str(evaluation.score))
        table.add_row("Preflop strength", f"{preflop_strength:.1f}")
        table.add_row("Outs", str(outs.total))
        for draw in outs.draws:
            table.add_row(f"  {draw.name}", str(draw.outs))
        self.console.print(table)

    def print_analysis(self, result: AnalysisResult) -> None:
        """Print the full session report."""
        profit_style = "green" if result.profit >= 0 else "red"
        header = Text()
        header.append(f"Hands: {result.hands_played}   ")
        header.append(f"Profit: ${result.profit:+.0f}   ", style=profit_style)
        header.append(f"Score: {result.overall_score}/100", style="bold")
        if result.target_reached:
            header.append("   Target reached!", style="bold green")
        self.console.print(Panel(header, title="Session Report"))

        table = Table(title="Score Breakdown")
        table.add_column("Category", style="cyan")
        table.add_column("Correct", justify="right")
        table.add_column("Accuracy", justify="right")
        for name, category in result.breakdown.as_dict().items():
            if category.total:
                table.add_row(name, f"{category.score}/{category.total}",
                              f"{category.accuracy:.0f}%")
            else:
                table.add_row(name, "-", "[dim]n/a[/dim]")
        self.console.print(table)

        style_table = Table(title="Play Style")
        style_table.add_column("Metric", style="cyan")
        style_table.add_column("Value", justify="right", style="green")
        for name, value in result.play_style.summary_dict().items():
            if name == "Aggression":
                style_table.add_row(name, f"{value:.2f}")
            else:
                style_table.add_row(name, f"{value:.0f}%")
        self.console.print(style_table)

        t = result.transparency
        t_table = Table(title=f"Transparency (T-Score {t.t_score}, {t.confidence.value} confidence)")
        t_table.add_column("Pillar", style="cyan")
        t_table.add_column("Score", justify="right")
        t_table.add_row("Linearity", str(t.linearity_score))
        t_table.add_row("Polarization", str(t.polarization_score))
        t_table.add_row("Board texture", str(t.board_texture_score))
        self.console.print(t_table)

        a = result.archetype
        self.console.print(Panel(
            f"{a.description}\n\n[bold]Advice:[/bold] {a.advice}",
            title=f"[{a.style}]{a.archetype} ({a.abbrev})[/{a.style}]",
        ))

        for s in result.strengths:
            self.console.print(f"  [green]+[/green] {s}")
        for w in result.weaknesses:
            self.console.print(f"  [red]-[/red] {w}")
        for r in result.recommendations:
            self.console.print(f"  [cyan]>[/cyan] {r}")

    def print_decisions(self, result: AnalysisResult, only_mistakes: bool = True) -> None:
        decisions = [d for d in result.decisions if not (only_mistakes and d.was_optimal)]
        if not decisions:
            self.console.print("[dim]No decisions to review.[/dim]")
            return

        table = Table(title="Decisions to Review" if only_mistakes else "All Decisions")
        table.add_column("Hand", justify="right")
        table.add_column("Street")
        table.add_column("Situation")
        table.add_column("You")
        table.add_column("Better")
        table.add_column("Why")
        for d in decisions:
            you_style = "green" if d.was_optimal else "red"
            table.add_row(str(d.hand_number), d.street.value, d.situation,
                          f"[{you_style}]{d.action.value}[/{you_style}]",
                          d.optimal_action.value, d.reasoning)
        self.console.print(table)
