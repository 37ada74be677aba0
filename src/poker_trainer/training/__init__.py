"""Interactive training sessions."""

from poker_trainer.training.session import SessionController, run_autopilot

__all__ = ["SessionController", "run_autopilot"]
