"""Poker Trainer CLI: Typer-based command line interface."""

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="poker-trainer",
    help="Heads-up No-Limit Hold'em Trainer",
    no_args_is_help=True,
)
console = Console()

ACTION_KEYS = {
    "f": "fold", "x": "check", "c": "call", "b": "bet", "r": "raise",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    from poker_trainer import config

    level = logging.DEBUG if verbose else config.LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _resolve_seed(seed: Optional[int]) -> Optional[int]:
    from poker_trainer import config
    return seed if seed is not None else config.RANDOM_SEED


def _prompt_action(hand) -> tuple:
    """Ask for an action until it parses. Returns (action, amount)."""
    from poker_trainer.models.action import ActionType

    options = "[f]old, [c]all" if hand.to_call > 0 else "[f]old, [x] check"
    options += ", [r]aise" if hand.to_call > 0 else ", [b]et"
    while True:
        raw = typer.prompt(f"\nYour action ({options}, q to quit)").strip().lower()
        if raw in ("q", "quit"):
            raise typer.Exit(0)
        parts = raw.split()
        try:
            action = ActionType.parse(ACTION_KEYS.get(parts[0], parts[0]))
        except (ValueError, IndexError) as e:
            console.print(f"[red]{e}[/red]")
            continue

        amount = None
        if action.is_aggressive:
            if len(parts) > 1:
                try:
                    amount = float(parts[1].lstrip("$"))
                except ValueError:
                    console.print(f"[red]Not a number: {parts[1]}[/red]")
                    continue
            else:
                default = round(hand.pot * 0.66)
                amount = typer.prompt("Amount", default=default, type=float)
        return action, amount


@app.command()
def play(
    hands: int = typer.Option(20, "--hands", "-n", help="Number of hands in the session"),
    stack: float = typer.Option(1000, "--stack", help="Starting stack"),
    target: float = typer.Option(100, "--target", "-t", help="Target profit"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a repeatable session"),
    review: bool = typer.Option(True, "--review/--no-review",
                                help="List the decisions to review at the end"),
):
    """Play an interactive training session against the villain."""
    from poker_trainer.analysis.session_analyzer import generate_analysis
    from poker_trainer.exceptions import InvalidActionError
    from poker_trainer.formatters.table import TableFormatter
    from poker_trainer.training.session import SessionController

    fmt = TableFormatter(console)
    controller = SessionController(rng=random.Random(_resolve_seed(seed)))
    try:
        state = controller.create_session(target, stack, hands)
    except InvalidActionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]Session started:[/bold] {hands} hands, "
                  f"${stack:.0f} stack, target ${target:+.0f}\n")

    while not state.is_complete:
        state = controller.deal_new_hand(state)
        while state.current_hand is not None:
            hand = state.current_hand
            console.print()
            fmt.print_hand_state(hand)
            action, amount = _prompt_action(hand)
            try:
                state = controller.process_action(state, action, amount)
            except InvalidActionError as e:
                console.print(f"[red]{e}[/red]")
                continue

            decision = state.decisions[-1]
            if decision.was_optimal:
                console.print(f"[green]Good {decision.action.value}.[/green]")
            else:
                console.print(f"[yellow]Better: {decision.optimal_action.value}[/yellow] "
                              f"[dim]({decision.reasoning})[/dim]")

        fmt.print_hand_result(state.hand_history[-1])
        fmt.print_session_status(state)

    result = generate_analysis(state)
    console.print()
    fmt.print_analysis(result)
    if review:
        fmt.print_decisions(result)


@app.command()
def autoplay(
    sessions: int = typer.Option(1, "--sessions", "-s", help="Number of sessions to run"),
    hands: int = typer.Option(20, "--hands", "-n", help="Hands per session"),
    stack: float = typer.Option(1000, "--stack", help="Starting stack"),
    target: float = typer.Option(100, "--target", "-t", help="Target profit"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Base random seed"),
    details: bool = typer.Option(False, "--details", help="Print the full report per session"),
):
    """Play sessions automatically, always taking the recommended action."""
    from poker_trainer.analysis.session_analyzer import generate_analysis
    from poker_trainer.formatters.table import TableFormatter
    from poker_trainer.formatters.text import TextFormatter
    from poker_trainer.training.session import SessionController, run_autopilot

    base_seed = _resolve_seed(seed)
    text_fmt = TextFormatter()
    table_fmt = TableFormatter(console)
    total_profit = 0.0

    for i in range(sessions):
        # Each session gets its own random stream
        rng = random.Random(base_seed + i if base_seed is not None else None)
        state = run_autopilot(SessionController(rng=rng), target, stack, hands)
        result = generate_analysis(state)
        total_profit += result.profit

        console.print(f"\n[bold cyan]=== Session {i + 1}/{sessions} ===[/bold cyan]")
        if details:
            table_fmt.print_analysis(result)
        else:
            console.print(text_fmt.format_analysis_summary(result))

    if sessions > 1:
        console.print(f"\n[bold]Average profit:[/bold] ${total_profit / sessions:+.1f}")


@app.command()
def evaluate(
    hole: List[str] = typer.Argument(..., help="Hero's two hole cards, e.g. Ah Kh"),
    board: str = typer.Option("", "--board", "-b", help="Board cards, e.g. 'Qh Jh 2c'"),
):
    """Evaluate a hand: category, preflop strength and outs."""
    from poker_trainer.formatters.table import TableFormatter
    from poker_trainer.models.card import parse_cards
    from poker_trainer.simulation.evaluator import (
        calculate_outs, evaluate as evaluate_hand, get_preflop_strength,
    )

    try:
        hole_cards = parse_cards(hole)
        board_cards = parse_cards(board)
        if len(set(hole_cards + board_cards)) != len(hole_cards) + len(board_cards):
            raise ValueError("The same card appears twice")
        evaluation = evaluate_hand(hole_cards, board_cards)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    fmt = TableFormatter(console)
    fmt.print_evaluation(
        evaluation,
        get_preflop_strength(*hole_cards),
        calculate_outs(hole_cards, board_cards),
    )


if __name__ == "__main__":
    app()
