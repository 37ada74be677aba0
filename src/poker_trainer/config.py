"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


# Session defaults (callers still pass these to create_session explicitly)
DEFAULT_STARTING_STACK = float(os.getenv("POKER_TRAINER_STARTING_STACK", "1000"))
DEFAULT_TARGET_PROFIT = float(os.getenv("POKER_TRAINER_TARGET_PROFIT", "100"))
DEFAULT_MAX_HANDS = int(os.getenv("POKER_TRAINER_MAX_HANDS", "20"))

# Blinds
SMALL_BLIND = float(os.getenv("POKER_TRAINER_SMALL_BLIND", "5"))
BIG_BLIND = float(os.getenv("POKER_TRAINER_BIG_BLIND", "10"))

# Hero bet size when no amount is given, as a fraction of the pot
DEFAULT_BET_FRACTION = float(os.getenv("POKER_TRAINER_BET_FRACTION", "0.66"))

# Random seed for reproducible sessions; unset means a fresh seed per run
RANDOM_SEED = _optional_int("POKER_TRAINER_SEED")

# Logging
LOG_LEVEL = os.getenv("POKER_TRAINER_LOG_LEVEL", "WARNING").upper()
